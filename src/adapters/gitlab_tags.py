"""Fuente de tags: GitLab REST API v4.

Una única petición GET autenticada a
`/api/v4/projects/<org>%2F<repo>/repository/tags`. Sin paginación ni
reintentos: cualquier fallo de transporte o de decodificación termina la
ejecución con `TagFetchError`.
"""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import RawTag, RepositoryTarget
from core.errors import ConfigurationError, TagFetchError
from core.interfaces.tag_source import TagSource

logger = logging.getLogger(__name__)

_TAGS_ADAPTER = TypeAdapter(list[RawTag])


def build_tags_url(base_url: str, org: str, repo: str) -> str:
    """Construye la URL del listado de tags de `org/repo` bajo `base_url`.

    La URL base se valida antes de añadir la ruta de la API (esquema http(s)
    y host obligatorios). El proyecto viaja codificado (`org%2Frepo`).
    """

    try:
        base = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"error parsing url {base_url}: {exc}") from exc
    if base.scheme not in ("http", "https") or not base.host:
        raise ConfigurationError(f"error parsing url {base_url}: expected http(s)://host/")

    if not base_url.endswith("/"):
        base_url += "/"
    return f"{base_url}api/v4/projects/{org}%2F{repo}/repository/tags"


def decode_tags_payload(body: str, url: str) -> list[RawTag]:
    """Decodifica el cuerpo del listado en registros `RawTag`.

    Un cuerpo que no es un array JSON suele ser un objeto de error de la API
    (proyecto privado sin token, proyecto inexistente); se muestra tal cual.
    """

    text = body.strip()
    if not text.startswith("[") or not text.endswith("]"):
        raise TagFetchError(
            "response was not valid; if this is a private repo, did you specify a token?\n"
            f"Response: {body}"
        )
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TagFetchError(f"error decoding json for url {url}: {exc}") from exc
    try:
        return _TAGS_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise TagFetchError(f"error decoding json for url {url}: {exc}") from exc


class GitLabTagSource(TagSource):
    """Lista los tags de un proyecto GitLab."""

    def __init__(
        self,
        target: RepositoryTarget,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._target = target
        self._settings = settings or AppSettings()
        self._transport = transport
        self.url = build_tags_url(target.base_url, target.org, target.repo)

    async def list_tags(self) -> list[RawTag]:
        headers: dict[str, str] = {}
        if self._target.token:
            headers["PRIVATE-TOKEN"] = self._target.token

        logger.debug("GET %s (verify=%s)", self.url, not self._target.insecure)
        try:
            async with build_async_client(
                self._settings,
                verify=not self._target.insecure,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(self.url)
        except httpx.HTTPError as exc:
            raise TagFetchError(f"error getting url {self.url}: {exc}") from exc

        logger.debug("HTTP %s from %s (%d bytes)", response.status_code, self.url, len(response.content))
        return decode_tags_payload(response.text, self.url)
