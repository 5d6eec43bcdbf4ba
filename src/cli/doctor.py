"""Comando doctor: diagnóstico del entorno y configuración inicial."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.gitlab_tags import build_tags_url
from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.errors import ConfigurationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, verify=not settings.insecure) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _mask(secret: str | None) -> str:
    if not secret:
        return ""
    if len(secret) <= 4:
        return "****"
    return f"{secret[:2]}…{secret[-2:]}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="tagnotes Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    failed = False
    for label, value in (("URL", settings.url), ("Org", settings.org), ("Repo", settings.repo)):
        if value:
            table.add_row(label, "OK", value)
        else:
            failed = True
            table.add_row(label, "MISSING", "required (flag or TAGNOTES_* env var)")

    if settings.token:
        table.add_row("Token", "OK", _mask(settings.token))
    else:
        table.add_row("Token", "OPTIONAL", "No token set -> only public projects are visible")

    try:
        since = settings.ranking_options().since
        table.add_row("Since tag", "OK", str(since))
    except ConfigurationError as exc:
        failed = True
        table.add_row("Since tag", "FAIL", str(exc))

    if settings.url:
        try:
            tags_url = build_tags_url(settings.url, settings.org or "org", settings.repo or "repo")
            table.add_row("Tags endpoint", "OK", tags_url)
            ok_http, detail_http = asyncio.run(_check_http(settings.url, settings))
            table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)
            failed = failed or not ok_http
        except ConfigurationError as exc:
            failed = True
            table.add_row("Tags endpoint", "FAIL", str(exc))

    if settings.insecure:
        table.add_row("TLS", "WARN", "certificate verification disabled")

    _console.print(table)

    if failed:
        _console.print("\n[yellow]Note:[/yellow] run `tagnotes doctor setup` to store url/org/repo/token.")
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    url = typer.prompt("GitLab base URL", default="https://gitlab.com/", show_default=True).strip()
    org = typer.prompt("Organization").strip()
    repo = typer.prompt("Repository").strip()
    token = typer.prompt("Personal access token (empty for public projects)", default="", hide_input=True, show_default=False).strip()

    if not url or not org or not repo:
        raise typer.BadParameter("url, org and repo are required")
    try:
        build_tags_url(url, org, repo)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(
        {
            "TAGNOTES_URL": url,
            "TAGNOTES_ORG": org,
            "TAGNOTES_REPO": repo,
            "TAGNOTES_TOKEN": token or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
