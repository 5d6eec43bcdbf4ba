"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) para la CLI y los
adaptadores. Los flags de la CLI se aplican encima con
`AppSettings.with_overrides`: cada ejecución trabaja con un único valor
inmutable.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import RankingOptions, RepositoryTarget
from core.errors import ConfigurationError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "tagnotes"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "tagnotes"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tagnotes"
    return Path.home() / ".config" / "tagnotes"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# tagnotes user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Cada campo puede venir de una variable `TAGNOTES_*`, del `.env` del
    proyecto o del `.env` del usuario; los flags de la CLI tienen prioridad.
    """

    model_config = SettingsConfigDict(
        env_prefix="TAGNOTES_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    url: str | None = Field(
        default=None,
        description="URL base de GitLab, p.ej. https://gitlab.example.com/",
    )
    token: str | None = Field(
        default=None,
        description="Personal access token (scope 'api' o 'read_api').",
    )
    org: str | None = Field(
        default=None,
        description="Nombre de la organización (namespace).",
    )
    repo: str | None = Field(
        default=None,
        description="Nombre del repositorio (proyecto).",
    )
    version_prefix: str = Field(
        default="",
        description="Texto antes de cada nombre de tag (p.ej. '#' para un header markdown).",
    )
    insecure: bool = Field(
        default=False,
        description="No verificar el certificado del servidor.",
    )
    sort_semver: bool = Field(
        default=True,
        description="Parsear nombres como versiones semánticas, ordenar de más reciente a más antiguo y filtrar por since_tag.",
    )
    since_tag: str = Field(
        default="0.0.0",
        min_length=1,
        description="Solo imprimir tags mayores o iguales a esta versión semántica.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="tagnotes/0.1",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    def with_overrides(self, **values: Any) -> "AppSettings":
        """Devuelve una copia con los `values` no None aplicados (flags de la CLI).

        Los valores pasan por la misma validación que las variables de entorno.
        """

        updates = {key: value for key, value in values.items() if value is not None}
        if not updates:
            return self
        return self.model_validate({**self.model_dump(), **updates})

    def ranking_options(self) -> RankingOptions:
        """Opciones del motor; lanza `ConfigurationError` si since_tag es inválido."""

        return RankingOptions(sort_semver=self.sort_semver, since=self.since_tag)


def resolve_target(settings: AppSettings) -> RepositoryTarget:
    """Construye el destino; falla si faltan url/org/repo."""

    if not settings.url or not settings.org or not settings.repo:
        raise ConfigurationError("Please define the url, token, org, and repo.")
    return RepositoryTarget(
        base_url=settings.url,
        org=settings.org,
        repo=settings.repo,
        token=settings.token or None,
        insecure=settings.insecure,
    )
