"""Componentes de salida para la CLI.

Los renderizadores de texto plano generan exactamente lo que imprime el
formato `text` por defecto; la tabla Rich es la vista alternativa
`--format table`.
"""

from __future__ import annotations

from typing import Iterable

from rich.table import Table
from rich.text import Text

from core.domain.models import ParseFailure, RawTag


def format_tag_entry(prefix: str, tag: RawTag) -> str:
    """`"<prefix> <name>\\n<message>\\n\\n"`; el espacio se mantiene aunque no haya prefijo."""

    return f"{prefix} {tag.name}\n{tag.message}\n\n"


def format_parse_failures(failures: Iterable[ParseFailure]) -> str:
    """Bloque agregado (stderr) con los tags que no son versiones semánticas."""

    lines = "".join(f"error parsing tag {f.name}: {f.error}\n\n" for f in failures)
    if not lines:
        return ""
    return f"\n\nErrors parsing semver tags:\n{lines}"


def build_tags_table(tags: Iterable[RawTag], *, title: str | None = None) -> Table:
    table = Table(title=title or "Tags", show_lines=True)
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Message", style="white")
    for tag in tags:
        message = Text(tag.message) if tag.message else Text("-", style="dim")
        table.add_row(Text(tag.name), message)
    return table
