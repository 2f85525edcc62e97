"""Split engine: drives the classifier and writes one file per record.

Records are written as soon as the classifier closes them, so a format
error part-way through leaves the already written files on disk.
"""

from __future__ import annotations

import time
from fnmatch import fnmatch
from pathlib import PurePosixPath
from typing import Iterable, List, Union

from diffsplit.diff.classifier import DiffClassifier
from diffsplit.diff.masker import is_hunk_header, mask_hunk_header
from diffsplit.diff.models import DiffRecord, FileSkipped
from diffsplit.diff.paths import resolve_strip_level, strip_path
from diffsplit.output.sink import FileSystemSink, MemorySink, safe_relative
from diffsplit.splitter.models import SplitFile, SplitOptions, SplitResult

Sink = Union[FileSystemSink, MemorySink]


def _is_excluded(path: PurePosixPath, patterns: List[str]) -> bool:
    text = path.as_posix()
    return any(fnmatch(text, p) or fnmatch(path.name, p) for p in patterns)


def render_lines(record: DiffRecord, options: SplitOptions) -> List[str]:
    """Return the lines to write for *record* under *options*."""
    lines = record.body_lines if options.skip_header else record.lines
    if not options.hide_linenum:
        return list(lines)
    return [mask_hunk_header(line) if is_hunk_header(line) else line for line in lines]


def _emit(record: DiffRecord, options: SplitOptions, sink: Sink, result: SplitResult) -> None:
    full_path = record.path
    assert full_path is not None

    level = resolve_strip_level(options.strip, record.from_path, record.to_path)
    stripped = strip_path(full_path, level)
    if stripped is None:
        result.skipped.append(FileSkipped(path=str(full_path), reason="empty_path"))
        return

    relative = safe_relative(stripped)
    if relative is None:
        result.skipped.append(FileSkipped(path=str(full_path), reason="unsafe_path"))
        return

    if _is_excluded(relative, options.exclude):
        result.skipped.append(FileSkipped(path=relative.as_posix(), reason="excluded"))
        return

    # The binary list is written last and would replace this file
    if relative == PurePosixPath(options.binary_list_name):
        result.skipped.append(FileSkipped(path=relative.as_posix(), reason="reserved_path"))
        return

    sink.write(relative, render_lines(record, options))
    result.files.append(
        SplitFile(
            path=relative.as_posix(),
            source_path=str(full_path),
            strip_level=level,
            hunks=record.hunk_count,
        )
    )


def split_diff(lines: Iterable[str], options: SplitOptions, sink: Sink) -> SplitResult:
    """Split the diff in *lines* into *sink*. Returns a SplitResult.

    Raises DiffFormatError on a malformed header block and lets OSError
    from the sink propagate.
    """
    start = time.perf_counter()
    classifier = DiffClassifier(extended_headers=options.extended_headers)
    result = SplitResult()

    sink.prepare()
    for record in classifier.parse(lines):
        _emit(record, options, sink, result)

    if classifier.binary_markers:
        result.binary_markers = list(classifier.binary_markers)
        result.binary_list = sink.write_binary_list(
            options.binary_list_name, result.binary_markers
        )

    result.dropped = classifier.dropped
    result.duration_ms = round((time.perf_counter() - start) * 1000, 2)
    return result
