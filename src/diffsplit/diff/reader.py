"""Input stream reading: byte lines to text lines, lossy on bad UTF-8."""

from __future__ import annotations

from typing import BinaryIO, Generator


def read_lines(stream: BinaryIO) -> Generator[str, None, None]:
    """Yield each ``\\n``-terminated line of *stream* as text.

    Lines keep their terminator (including any ``\\r``). Invalid UTF-8 is
    replaced rather than rejected.
    """
    for raw in stream:
        yield raw.decode("utf-8", errors="replace")
