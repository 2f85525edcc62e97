"""Output sinks: where split file diffs and the binary list are written."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional


def safe_relative(path: PurePosixPath) -> Optional[PurePosixPath]:
    """Return *path* as a path that stays inside the target root.

    A leading ``/`` is dropped. Paths with ``..`` components are refused.
    """
    parts = path.parts
    if path.is_absolute():
        parts = parts[1:]
    if not parts or ".." in parts:
        return None
    return PurePosixPath(*parts)


class FileSystemSink:
    """Write each split diff to ``target_dir / relative_path``."""

    def __init__(self, target_dir: Path) -> None:
        self.target_dir = target_dir

    def prepare(self) -> None:
        self.target_dir.mkdir(parents=True, exist_ok=True)

    def write(self, relative_path: PurePosixPath, lines: Iterable[str]) -> Path:
        """Create parent directories and (over)write the file verbatim."""
        output_file = self.target_dir.joinpath(*relative_path.parts)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8", newline="") as f:
            f.writelines(lines)
        return output_file

    def write_binary_list(self, name: str, markers: List[str]) -> Path:
        """Write one binary marker per line."""
        output_file = self.target_dir / name
        with open(output_file, "w", encoding="utf-8", newline="") as f:
            for marker in markers:
                f.write(marker + "\n")
        return output_file


class MemorySink:
    """Collect split output in memory (dry runs and tests)."""

    def __init__(self, target_dir: Optional[Path] = None) -> None:
        self.target_dir = target_dir or Path(".")
        self.files: Dict[str, str] = {}

    def prepare(self) -> None:
        pass

    def write(self, relative_path: PurePosixPath, lines: Iterable[str]) -> Path:
        self.files[relative_path.as_posix()] = "".join(lines)
        return self.target_dir.joinpath(*relative_path.parts)

    def write_binary_list(self, name: str, markers: List[str]) -> Path:
        self.files[name] = "".join(marker + "\n" for marker in markers)
        return self.target_dir / name
