"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* es un tag en cada paso (recibido, parseado,
emitido), no *cómo* se obtiene o se imprime.
"""

from __future__ import annotations

from typing import Any

import semver
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.errors import ConfigurationError

ZERO_VERSION = semver.Version(0, 0, 0)


class RawTag(BaseModel):
    """Tag tal cual lo devuelve la API remota: nombre y anotación."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(
        ...,
        description="Nombre del tag tal cual lo devuelve la API.",
    )
    message: str = Field(
        default="",
        description="Mensaje de anotación (vacío para tags ligeros).",
    )

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        # GitLab devuelve null en los tags ligeros.
        return "" if value is None else value


class ParsedTag(BaseModel):
    """Un `RawTag` más su versión semántica, si el nombre se pudo parsear."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    message: str = ""
    version: semver.Version | None = Field(
        default=None,
        description="Versión semántica; None si no se pidió o no se pudo parsear.",
    )

    def to_raw(self) -> RawTag:
        return RawTag(name=self.name, message=self.message)


class ParseFailure(BaseModel):
    """Un tag cuyo nombre no es una versión semántica."""

    model_config = ConfigDict(frozen=True)

    name: str
    error: str


class RankingOptions(BaseModel):
    """Opciones del motor de ranking.

    `since` acepta un `semver.Version` o un string; un string mal formado es
    un error de configuración y se lanza al construir, antes de mirar ningún
    tag.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sort_semver: bool = True
    since: semver.Version = ZERO_VERSION

    @field_validator("since", mode="before")
    @classmethod
    def _parse_since(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return semver.Version.parse(value)
            except ValueError as exc:
                raise ConfigurationError(f"unable to parse since version {value}: {exc}") from exc
        return value


class RankingResult(BaseModel):
    """Resultado de `rank_tags`.

    `parsed` tiene siempre una entrada por tag de entrada; `selected` es lo que
    se imprime, en orden; `failures` lista los tags cuyo nombre no se parseó.
    """

    model_config = ConfigDict(frozen=True)

    parsed: list[ParsedTag] = Field(default_factory=list)
    selected: list[RawTag] = Field(default_factory=list)
    failures: list[ParseFailure] = Field(default_factory=list)


class RepositoryTarget(BaseModel):
    """De dónde obtener los tags: URL base, credencial y ruta del proyecto."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., min_length=1)
    org: str = Field(..., min_length=1)
    repo: str = Field(..., min_length=1)
    token: str | None = Field(
        default=None,
        repr=False,
        description="Personal access token (header PRIVATE-TOKEN).",
    )
    insecure: bool = Field(
        default=False,
        description="No verificar el certificado TLS del servidor.",
    )
