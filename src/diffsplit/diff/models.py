"""Data models for diff stream classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import List, Optional

DEV_NULL = "/dev/null"


class ParseState(str, Enum):
    DIFF = "diff"
    FROM_OR_INDEX = "from_or_index"
    FROM = "from"
    TO = "to"
    BODY = "body"


@dataclass
class DiffRecord:
    """One file's diff, built line by line by the classifier."""

    header_lines: List[str] = field(default_factory=list)
    body_lines: List[str] = field(default_factory=list)
    from_path: Optional[str] = None
    to_path: Optional[str] = None
    is_binary: bool = False

    @property
    def lines(self) -> List[str]:
        """Header followed by body, exactly as read."""
        return self.header_lines + self.body_lines

    @property
    def path(self) -> Optional[PurePosixPath]:
        """Canonical path: the destination, or the source for deletions."""
        if not self.to_path:
            return None
        if self.to_path == DEV_NULL and self.from_path and self.from_path != DEV_NULL:
            return PurePosixPath(self.from_path)
        return PurePosixPath(self.to_path)

    @property
    def hunk_count(self) -> int:
        return sum(1 for line in self.body_lines if line.startswith("@@"))


@dataclass(frozen=True)
class FileSkipped:
    """Record of a file diff that was parsed but not written."""

    path: str
    reason: str  # 'empty_path', 'excluded', 'unsafe_path', 'reserved_path'
