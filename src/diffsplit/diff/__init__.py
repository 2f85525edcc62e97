"""Diff stream layer: classifier, path stripping, hunk masking, models."""

from diffsplit.diff.classifier import DiffClassifier, DiffFormatError
from diffsplit.diff.masker import is_hunk_header, mask_hunk_header
from diffsplit.diff.models import DiffRecord, FileSkipped, ParseState
from diffsplit.diff.paths import resolve_strip_level, strip_path
from diffsplit.diff.reader import read_lines

__all__ = [
    "DiffClassifier",
    "DiffFormatError",
    "DiffRecord",
    "FileSkipped",
    "ParseState",
    "is_hunk_header",
    "mask_hunk_header",
    "read_lines",
    "resolve_strip_level",
    "strip_path",
]
