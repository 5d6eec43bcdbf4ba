"""Errores del dominio.

Dos familias: problemas de configuración detectados antes de cualquier
petición y problemas al obtener los tags. Ambas son fatales; los fallos de
parseo por tag no son excepciones, se acumulan como `ParseFailure`.
"""

from __future__ import annotations


class TagNotesError(Exception):
    """Error base para todo lo que la CLI reporta como fatal."""


class ConfigurationError(TagNotesError):
    """Configuración ausente o mal formada (url/org/repo, umbral since, URL base)."""


class TagFetchError(TagNotesError):
    """No se pudo obtener o decodificar el listado de tags."""
