"""Servicios del Core (lógica pura, sin I/O)."""

from core.services.tag_ranking import parse_tag_version, rank_tags

__all__ = ["parse_tag_version", "rank_tags"]
