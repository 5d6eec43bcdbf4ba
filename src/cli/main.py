"""CLI principal (Typer).

`tagnotes` sin subcomando obtiene los tags de un repositorio, los ordena e
imprime nombre + mensaje de cada uno. `tagnotes doctor ...` agrupa el
diagnóstico y la configuración inicial.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from adapters.gitlab_tags import GitLabTagSource
from adapters.json_exporter import export_tags_json
from cli import doctor
from cli.ui_components import build_tags_table, format_parse_failures, format_tag_entry
from core.config import AppSettings, resolve_target
from core.errors import TagNotesError
from core.services.tag_ranking import rank_tags

app = typer.Typer(
    help="Print the tags of a GitLab repository with their messages, most recent first.",
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    TEXT = "text"
    TABLE = "table"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    _err_console.print(Text.assemble(("Error: ", "bold red"), message), soft_wrap=True)
    raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def tags(
    ctx: typer.Context,
    url: str | None = typer.Option(
        None, "--url", help="Base GitLab URL formatted as https://gitlab.example.com/"
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        help="Personal access token (create one at '/profile/personal_access_tokens' with the 'api' scope).",
    ),
    org: str | None = typer.Option(None, "--org", help="Organization name."),
    repo: str | None = typer.Option(None, "--repo", help="Repository name."),
    version_prefix: str | None = typer.Option(
        None, "--version-prefix", help="Text to put before the version name (e.g. '#' for markdown header)."
    ),
    insecure: bool | None = typer.Option(
        None, "--insecure/--secure", help="Do not check the server's certificate."
    ),
    sort_semver: bool | None = typer.Option(
        None,
        "--sort-semver/--no-sort-semver",
        help="Sort by tag name from most recent to oldest and filter by --since-tag.",
    ),
    since_tag: str | None = typer.Option(
        None,
        "--since-tag",
        help="Print tags greater than or equal to this semantic version (e.g. 1.0.0).",
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Output format."),
    export_json: Path | None = typer.Option(
        None, "--export-json", help="Also write the selected tags and parse errors to this JSON file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Fetch, rank and print the tags of one repository."""

    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)

    try:
        settings = AppSettings().with_overrides(
            url=url,
            token=token,
            org=org,
            repo=repo,
            version_prefix=version_prefix,
            insecure=insecure,
            sort_semver=sort_semver,
            since_tag=since_tag,
        )
        target = resolve_target(settings)
        options = settings.ranking_options()
        source = GitLabTagSource(target, settings)
        raw_tags = asyncio.run(source.list_tags())
    except ValidationError as exc:
        _fail(f"invalid configuration: {exc}")
    except TagNotesError as exc:
        _fail(str(exc))

    result = rank_tags(raw_tags, options)
    logger.debug(
        "%d tags fetched, %d selected, %d parse errors",
        len(result.parsed),
        len(result.selected),
        len(result.failures),
    )

    if output_format is OutputFormat.TABLE:
        _console.print(build_tags_table(result.selected, title=f"{target.org}/{target.repo}"))
    else:
        for tag in result.selected:
            typer.echo(format_tag_entry(settings.version_prefix, tag), nl=False)

    if export_json is not None:
        path = export_tags_json(result=result, target=target, output_path=export_json)
        _err_console.print(f"[green]Saved JSON to:[/green] {path}")

    failures_block = format_parse_failures(result.failures)
    if failures_block:
        typer.echo(failures_block, err=True, nl=False)


def run() -> None:
    app(prog_name="tagnotes")
