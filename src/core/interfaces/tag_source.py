"""Contrato del colaborador que obtiene los tags.

Protocol en vez de clase base: el adaptador GitLab y los stubs de los tests
solo necesitan una corrutina `list_tags` compatible.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RawTag


@runtime_checkable
class TagSource(Protocol):
    """Contrato mínimo para un backend que lista tags."""

    async def list_tags(self) -> list[RawTag]:
        """Devuelve todos los tags del repositorio configurado, en el orden de la API.

        Lanza `core.errors.TagFetchError` si no se puede obtener el listado.
        """

        ...
