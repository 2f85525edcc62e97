"""JSON reporter for scripting and CI pipelines."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from diffsplit.splitter.models import SplitResult


def to_dict(result: SplitResult, target_dir: Path, *, dry_run: bool = False) -> Dict[str, Any]:
    """Convert SplitResult to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "target_dir": str(target_dir),
        "dry_run": dry_run,
        "files": [
            {
                "path": f.path,
                "source": f.source_path,
                "strip": f.strip_level,
                "hunks": f.hunks,
            }
            for f in result.files
        ],
        "skipped": [{"path": s.path, "reason": s.reason} for s in result.skipped],
        "binary_files": result.binary_markers,
        "binary_list": str(result.binary_list) if result.binary_list else None,
        "dropped": result.dropped,
        "total_files": result.total_files,
        "total_hunks": result.total_hunks,
        "duration_ms": result.duration_ms,
    }


def render(result: SplitResult, target_dir: Path, *, dry_run: bool = False) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, target_dir, dry_run=dry_run), indent=2)
