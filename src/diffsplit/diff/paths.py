"""Strip-level resolution and path stripping."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional, Tuple


def _components(path: str) -> Tuple[str, ...]:
    return PurePosixPath(path).parts if path else ()


def common_suffix_length(from_path: str, to_path: str) -> int:
    """Count the trailing path components shared by both paths."""
    left = _components(from_path)
    right = _components(to_path)
    count = 0
    for a, b in zip(reversed(left), reversed(right)):
        if a != b:
            break
        count += 1
    return count


def resolve_strip_level(
    explicit: Optional[int],
    from_path: Optional[str],
    to_path: Optional[str],
) -> int:
    """Return how many leading components to strip from *to_path*.

    An explicit value always wins. Otherwise the prefix length is derived
    from the paths: ``a/dir/x.txt`` vs ``b/dir/x.txt`` share ``dir/x.txt``,
    so one component (``b``) is the prefix. Renames share a shorter
    suffix and therefore strip less. Paths with nothing in common
    (new or deleted files against ``/dev/null``) are not stripped.
    """
    if explicit is not None:
        return explicit
    from_path = from_path or ""
    to_path = to_path or ""
    common = common_suffix_length(from_path, to_path)
    if common == 0:
        return 0
    return len(_components(to_path)) - common


def strip_path(full_path: PurePosixPath, strip_value: int) -> Optional[PurePosixPath]:
    """Drop *strip_value* leading components of *full_path*.

    Falls back to the basename when there are not enough components.
    Returns None when nothing usable is left.
    """
    if strip_value == 0:
        stripped = full_path
    else:
        parts = full_path.parts
        if len(parts) > strip_value:
            stripped = PurePosixPath(*parts[strip_value:])
        else:
            stripped = PurePosixPath(full_path.name)
    if not stripped.parts:
        return None
    return stripped
