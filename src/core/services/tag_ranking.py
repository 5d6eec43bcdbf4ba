"""Ranking de los tags de un repositorio.

Transformación pura de los tags devueltos por la API a los tags a imprimir:
parseo opcional como versión semántica (los fallos por tag se acumulan, nunca
se lanzan), orden de más reciente a más antiguo y filtro por versión mínima.
Sin I/O.

Orden: la clave es el *nombre* del tag comparado como string, no la versión
parseada; `v9.0.0` queda antes que `v10.0.0`. La versión solo se usa para el
filtro `since`.
"""

from __future__ import annotations

import logging
from typing import Iterable

import semver

from core.domain.models import ParsedTag, ParseFailure, RankingOptions, RankingResult, RawTag

logger = logging.getLogger(__name__)


def parse_tag_version(name: str) -> semver.Version:
    """Parsea el nombre de un tag como versión semántica.

    Se elimina la primera `v` del nombre (`v1.2.3` -> `1.2.3`). Solo esa
    aparición: `vv1.0.0` se parsea como `v1.0.0` y falla.

    Raises:
        ValueError: el resto no es un string SemVer 2.0.0 estricto.
    """

    return semver.Version.parse(name.replace("v", "", 1))


def rank_tags(raw_tags: Iterable[RawTag], options: RankingOptions | None = None) -> RankingResult:
    options = options or RankingOptions()

    parsed: list[ParsedTag] = []
    failures: list[ParseFailure] = []
    for tag in raw_tags:
        version = None
        if options.sort_semver:
            try:
                version = parse_tag_version(tag.name)
            except ValueError as exc:
                logger.debug("tag %r is not a semantic version: %s", tag.name, exc)
                failures.append(ParseFailure(name=tag.name, error=str(exc)))
        parsed.append(ParsedTag(name=tag.name, message=tag.message, version=version))

    if not options.sort_semver:
        return RankingResult(
            parsed=parsed,
            selected=[tag.to_raw() for tag in parsed],
            failures=failures,
        )

    ordered = sorted(parsed, key=lambda tag: tag.name, reverse=True)
    selected = [
        tag.to_raw()
        for tag in ordered
        if tag.version is not None and tag.version >= options.since
    ]
    return RankingResult(parsed=parsed, selected=selected, failures=failures)
