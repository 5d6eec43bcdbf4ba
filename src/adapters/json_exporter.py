"""Exportación JSON del resultado.

Interoperabilidad con otras herramientas (changelogs, pipelines de release).
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import RankingResult, RepositoryTarget


def export_tags_json(*, result: RankingResult, target: RepositoryTarget, output_path: Path) -> Path:
    """Exporta los tags seleccionados y los fallos de parseo a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "repository": f"{target.org}/{target.repo}",
        "base_url": target.base_url,
        "tags": [tag.model_dump(mode="json") for tag in result.selected],
        "errors": [failure.model_dump(mode="json") for failure in result.failures],
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
