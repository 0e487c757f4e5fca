from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _json_dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def resolve_output_path(path_value: str | Path | None) -> Path | None:
    if path_value is None:
        return None
    return Path(path_value).expanduser().resolve()


def write_json_summary(payload: Any, out_path: str | Path | None) -> Path | None:
    """Write a run summary as pretty JSON, creating parent directories."""
    out_resolved = resolve_output_path(out_path)
    if out_resolved is None:
        return None

    out_resolved.parent.mkdir(parents=True, exist_ok=True)
    out_resolved.write_text(_json_dump(payload), encoding="utf-8")
    return out_resolved
