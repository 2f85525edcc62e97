"""Hunk header masking.

Start line numbers in ``@@``/``@@@`` headers shift whenever unrelated
lines move, while the counts describe how much changed. Masking replaces
only the start digits with ``X`` so split diffs stay comparable.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

_TWO_WAY_RE = re.compile(
    r"@@ -(?P<start_a>[0-9]+)(?:,[0-9]+)? "
    r"\+(?P<start_b>[0-9]+)(?:,[0-9]+)? @@"
)
_THREE_WAY_RE = re.compile(
    r"@@@ -(?P<start_a>[0-9]+)(?:,[0-9]+)? "
    r"-(?P<start_b>[0-9]+)(?:,[0-9]+)? "
    r"\+(?P<start_c>[0-9]+)(?:,[0-9]+)? @@@"
)

# Longest delimiter first, "@@@" also starts with "@@".
_GRAMMARS: Tuple[Tuple[str, re.Pattern[str], Tuple[str, ...]], ...] = (
    ("@@@", _THREE_WAY_RE, ("start_a", "start_b", "start_c")),
    ("@@", _TWO_WAY_RE, ("start_a", "start_b")),
)


def is_hunk_header(line: str) -> bool:
    return line.startswith("@@ ") or line.startswith("@@@ ")


def split_tail(line: str, delimiter: str) -> Optional[Tuple[str, str]]:
    """Split *line* after the second *delimiter* into (head, tail)."""
    end = line.find(delimiter, len(delimiter))
    if end == -1:
        return None
    end += len(delimiter)
    return line[:end], line[end:]


def mask_hunk_header(line: str) -> str:
    """Replace the start line numbers of a hunk header with ``X``.

    >>> mask_hunk_header("@@ -10,5 +20,5 @@ fn foo() {\\n")
    '@@ -XX,5 +XX,5 @@ fn foo() {\\n'

    Lines not matching either grammar are returned unchanged.
    """
    for delimiter, pattern, groups in _GRAMMARS:
        if not line.startswith(delimiter + " "):
            continue
        parts = split_tail(line, delimiter)
        if parts is None:
            return line
        head, tail = parts
        m = pattern.fullmatch(head)
        if m is None:
            return line
        masked = []
        pos = 0
        for name in groups:
            start, end = m.span(name)
            masked.append(head[pos:start])
            masked.append("X" * (end - start))
            pos = end
        masked.append(head[pos:])
        return "".join(masked) + tail
    return line
