"""Unified diff stream classifier.

Consumes a diff one line at a time and groups the lines into per-file
DiffRecord objects. Handles plain ``---``/``+++`` headers, ``index``
prefixed headers, combined (``diff --cc``) headers and binary markers.
Optionally tolerates git's extended header lines (modes, renames,
copies).
"""

from __future__ import annotations

from typing import Generator, Iterable, List, Optional

from diffsplit.diff.models import DiffRecord, ParseState

_DIFF_PREFIX = "diff --"
_INDEX_PREFIX = "index "
_FROM_PREFIX = "--- "
_TO_PREFIX = "+++ "
_BINARY_PREFIX = "Binary files "
_GIT_BINARY_PATCH = "GIT binary patch"

_EXTENDED_PREFIXES = (
    "old mode ",
    "new mode ",
    "deleted file mode ",
    "new file mode ",
    "similarity index ",
    "dissimilarity index ",
    "rename from ",
    "rename to ",
    "copy from ",
    "copy to ",
)

_EXPECTED = {
    ParseState.FROM_OR_INDEX: "'index ' or '--- '",
    ParseState.FROM: "'--- '",
    ParseState.TO: "'+++ '",
}

_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


class DiffFormatError(Exception):
    """Raised when a diff header block does not follow [index] --- +++."""

    def __init__(self, line_no: int, expected: str, line: str) -> None:
        self.line_no = line_no
        self.expected = expected
        self.line = line
        super().__init__(
            f"line {line_no}: expected {expected}, got {line.rstrip()!r}"
        )


def _unquote_path(path: str) -> str:
    """Decode a C-style quoted git path ("b/with\\tTab")."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt in _ESCAPES:
                out.append(_ESCAPES[nxt])
                i += 2
                continue
            octal = body[i + 1:i + 4]
            if len(octal) == 3 and all(c in "01234567" for c in octal):
                out.append(int(octal, 8) & 0xFF)
                i += 4
                continue
        out.extend(ch.encode("utf-8"))
        i += 1
    return out.decode("utf-8", errors="replace")


def extract_path(line: str, prefix: str) -> Optional[str]:
    """Return the path of a ``---``/``+++`` line, without timestamps.

    Returns None when the line carries no path at all.
    """
    rest = line.rstrip()[len(prefix):]
    path = _unquote_path(rest.split("\t", 1)[0])
    return path or None


class DiffClassifier:
    """Line classification state machine.

    Usage::

        classifier = DiffClassifier()
        for line in lines:
            record = classifier.feed(line)
            if record is not None:
                ...
        record = classifier.finalize()

    Only emittable records are returned: binary records and records
    without a destination path are withheld. Binary marker lines are
    collected in ``binary_markers`` in stream order.
    """

    def __init__(self, *, extended_headers: bool = False) -> None:
        self.extended_headers = extended_headers
        self.state = ParseState.DIFF
        self.binary_markers: List[str] = []
        self.dropped = 0
        self.line_no = 0
        self._current: Optional[DiffRecord] = None

    # ---- public API ----

    def feed(self, line: str) -> Optional[DiffRecord]:
        """Consume one line. Returns the record closed by it, if emittable."""
        self.line_no += 1
        state = self.state

        if state is ParseState.DIFF:
            if line.startswith(_DIFF_PREFIX):
                return self._open(line)
            return None  # preamble

        if state is ParseState.BODY:
            if line.startswith(_DIFF_PREFIX):
                return self._open(line)
            record = self._current
            assert record is not None
            if line.startswith(_BINARY_PREFIX) and not record.is_binary:
                record.is_binary = True
                self.binary_markers.append(line.strip())
            record.body_lines.append(line)
            return None

        record = self._current
        assert record is not None

        if state is ParseState.TO:
            if not line.startswith(_TO_PREFIX):
                raise DiffFormatError(self.line_no, "'+++ '", line)
            record.to_path = extract_path(line, _TO_PREFIX)
            record.header_lines.append(line)
            self.state = ParseState.BODY
            return None

        # FROM_OR_INDEX or FROM
        if line.startswith(_FROM_PREFIX):
            record.from_path = extract_path(line, _FROM_PREFIX)
            record.header_lines.append(line)
            self.state = ParseState.TO
            return None
        if state is ParseState.FROM_OR_INDEX and line.startswith(_INDEX_PREFIX):
            record.header_lines.append(line)
            self.state = ParseState.FROM
            return None
        if self.extended_headers:
            handled, emitted = self._feed_extended(line)
            if handled:
                return emitted

        raise DiffFormatError(self.line_no, _EXPECTED[state], line)

    def finalize(self) -> Optional[DiffRecord]:
        """Close the last open record at end of input."""
        if self._current is None:
            return None
        state = self.state
        if state is ParseState.TO or (
            state is not ParseState.BODY and not self.extended_headers
        ):
            raise DiffFormatError(self.line_no + 1, _EXPECTED[state], "<end of input>")
        record = self._close()
        self.state = ParseState.DIFF
        return record

    def parse(self, lines: Iterable[str]) -> Generator[DiffRecord, None, None]:
        """Feed every line and yield each emittable record as it closes."""
        for line in lines:
            record = self.feed(line)
            if record is not None:
                yield record
        record = self.finalize()
        if record is not None:
            yield record

    # ---- internals ----

    def _open(self, line: str) -> Optional[DiffRecord]:
        previous = self._close()
        self._current = DiffRecord(header_lines=[line])
        self.state = ParseState.FROM_OR_INDEX
        return previous

    def _close(self) -> Optional[DiffRecord]:
        """Hand off the open record. Binary or pathless records are withheld."""
        record = self._current
        self._current = None
        if record is None or record.is_binary:
            return None
        if record.path is None:
            self.dropped += 1
            return None
        return record

    def _feed_extended(self, line: str) -> tuple[bool, Optional[DiffRecord]]:
        """Git extended headers, header-less binaries and mode-only diffs."""
        record = self._current
        assert record is not None
        state = self.state

        if state is ParseState.FROM_OR_INDEX and line.startswith(_EXTENDED_PREFIXES):
            record.header_lines.append(line)
            return True, None
        if line.startswith(_BINARY_PREFIX):
            if not record.is_binary:
                record.is_binary = True
                self.binary_markers.append(line.strip())
            record.body_lines.append(line)
            self.state = ParseState.BODY
            return True, None
        if line.startswith(_GIT_BINARY_PATCH):
            record.body_lines.append(line)
            self.state = ParseState.BODY
            return True, None
        if line.startswith(_DIFF_PREFIX):
            return True, self._open(line)
        return False, None
