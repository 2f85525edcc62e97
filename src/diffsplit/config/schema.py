"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


def parse_strip(value: Union[str, int, None]) -> Optional[int]:
    """Parse a strip setting: ``"auto"``/None or a non-negative integer.

    Raises ValueError on anything else.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"invalid strip level: {value!r}")
    if isinstance(value, int):
        level = value
    else:
        text = value.strip().lower()
        if text == "auto":
            return None
        level = int(text)
    if level < 0:
        raise ValueError(f"strip level must be non-negative: {value!r}")
    return level


@dataclass
class SplitConfig:
    strip: Union[str, int] = "auto"  # "auto" or leading components to drop
    hide_linenum: bool = False
    skip_header: bool = False
    binary_list: str = "binary_files.txt"
    exclude: List[str] = field(default_factory=list)


@dataclass
class ParseConfig:
    extended_headers: bool = False  # accept git mode/rename/copy header lines


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class DiffSplitConfig:
    version: str = "1.0"
    split: SplitConfig = field(default_factory=SplitConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def strip_level(self) -> Optional[int]:
        return parse_strip(self.split.strip)
