"""JSON export of decoded results.

Why JSON:
- The CLI `--json` mode prints results for pipelines (`jq`, scripts).
- Transcripts and job results can be persisted without re-calling the service.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel


def dump_result_json(result: BaseModel) -> str:
    """Serialize a result model to stable, indented JSON (wire field names)."""

    payload = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_result_json(*, result: BaseModel, output_path: Path) -> Path:
    """Write a result model to a UTF-8 JSON file."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_result_json(result) + "\n", encoding="utf-8")
    return output_path
