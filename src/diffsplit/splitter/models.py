"""Split result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from diffsplit.diff.models import FileSkipped


@dataclass
class SplitOptions:
    """Plain values driving one split run."""

    strip: Optional[int] = None  # None = auto-detect per file
    hide_linenum: bool = False
    skip_header: bool = False
    extended_headers: bool = False
    exclude: List[str] = field(default_factory=list)
    binary_list_name: str = "binary_files.txt"


@dataclass(frozen=True)
class SplitFile:
    """A file diff written by the sink."""

    path: str  # relative to the target directory
    source_path: str  # canonical path as declared in the diff
    strip_level: int
    hunks: int


@dataclass
class SplitResult:
    """Complete result of a split run."""

    files: List[SplitFile] = field(default_factory=list)
    skipped: List[FileSkipped] = field(default_factory=list)
    binary_markers: List[str] = field(default_factory=list)
    binary_list: Optional[Path] = None
    dropped: int = 0  # records without a destination path
    duration_ms: float = 0.0

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_hunks(self) -> int:
        return sum(f.hunks for f in self.files)
