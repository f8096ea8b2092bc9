from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any


@dataclass
class BakeManifest:
    source_filename: str
    source_format: str
    title: str
    grid_size: int
    sample_count: int
    dtype: str
    flags: dict[str, bool]
    precise_logc: bool
    tables: dict[str, Any]
    pipeline_hash: str
    tool_version: str
    created_at_utc: str


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def write_bake_manifest(path: Path, manifest: BakeManifest) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(asdict(manifest), f, indent=2, sort_keys=True)
        f.write("\n")
