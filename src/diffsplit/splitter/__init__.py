"""Splitter: engine and result models."""

from diffsplit.splitter.engine import render_lines, split_diff
from diffsplit.splitter.models import SplitFile, SplitOptions, SplitResult

__all__ = ["SplitFile", "SplitOptions", "SplitResult", "render_lines", "split_diff"]
