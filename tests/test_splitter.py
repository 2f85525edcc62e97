"""Tests for the split engine: stripping, masking, binary list, errors."""

from pathlib import Path

import pytest

from diffsplit.diff.classifier import DiffFormatError
from diffsplit.output.sink import FileSystemSink, MemorySink
from diffsplit.splitter.engine import split_diff
from diffsplit.splitter.models import SplitOptions


def _split(diff: str, sink=None, **kwargs):
    sink = sink if sink is not None else MemorySink()
    result = split_diff(diff.splitlines(keepends=True), SplitOptions(**kwargs), sink)
    return result, sink


class TestSplitting:
    def test_one_file_per_record(self, sample_diff_git):
        result, sink = _split(sample_diff_git)
        assert sorted(sink.files) == ["README.md", "src/app.py"]
        assert [f.strip_level for f in result.files] == [1, 1]
        assert result.total_hunks == 2

    def test_round_trip(self, sample_diff_git):
        _, sink = _split(sample_diff_git)
        assert sink.files["src/app.py"] + sink.files["README.md"] == sample_diff_git

    def test_explicit_strip(self, sample_diff_git):
        result, sink = _split(sample_diff_git, strip=2)
        # README.md has too few components and falls back to its basename
        assert sorted(sink.files) == ["README.md", "app.py"]
        assert {f.strip_level for f in result.files} == {2}

    def test_strip_zero_keeps_prefix(self, sample_diff_git):
        _, sink = _split(sample_diff_git, strip=0)
        assert sorted(sink.files) == ["b/README.md", "b/src/app.py"]

    def test_rename_keeps_more_of_path(self, sample_diff_rename):
        result, sink = _split(sample_diff_rename)
        assert list(sink.files) == ["name.txt"]
        assert result.files[0].strip_level == 2

    def test_plain_diff(self, sample_diff_plain):
        _, sink = _split(sample_diff_plain)
        assert list(sink.files) == ["dir/x.txt"]


class TestMaskingAndHeaders:
    def test_hide_linenum(self, sample_diff_git):
        _, sink = _split(sample_diff_git, hide_linenum=True)
        assert "@@ -XX,5 +XX,6 @@ def main():\n" in sink.files["src/app.py"]
        assert "@@ -X +X @@\n" in sink.files["README.md"]
        # Body lines are untouched
        assert "+    run(fast=True)\n" in sink.files["src/app.py"]

    def test_hide_linenum_combined(self, sample_diff_combined):
        _, sink = _split(sample_diff_combined, hide_linenum=True)
        assert sink.files["lib/merge.c"].splitlines()[4] == "@@@ -X,3 -X,3 +X,4 @@@ int merge(void)"

    def test_skip_header(self, sample_diff_git):
        _, sink = _split(sample_diff_git, skip_header=True)
        text = sink.files["README.md"]
        assert text == "@@ -1 +1 @@\n-# Old title\n+# New title\n"

    def test_skip_header_with_masking(self, sample_diff_git):
        _, sink = _split(sample_diff_git, skip_header=True, hide_linenum=True)
        assert sink.files["README.md"].startswith("@@ -X +X @@\n")

    def test_masking_off_is_verbatim(self, sample_diff_combined):
        _, sink = _split(sample_diff_combined)
        assert sink.files["lib/merge.c"] == sample_diff_combined


class TestBinary:
    def test_binary_list(self, sample_diff_binary):
        result, sink = _split(sample_diff_binary)
        assert sorted(sink.files) == ["binary_files.txt", "notes.txt"]
        assert sink.files["binary_files.txt"] == (
            "Binary files a/logo.png and b/logo.png differ\n"
            "Binary files a/icon.ico and b/icon.ico differ\n"
        )
        assert result.total_files == 1
        assert len(result.binary_markers) == 2

    def test_no_binary_list_without_markers(self, sample_diff_git):
        result, sink = _split(sample_diff_git)
        assert "binary_files.txt" not in sink.files
        assert result.binary_list is None

    def test_custom_binary_list_name(self, sample_diff_binary):
        _, sink = _split(sample_diff_binary, binary_list_name="BINARIES")
        assert "BINARIES" in sink.files

    def test_repeated_marker_listed_once(self):
        diff = (
            "diff --git a/x.bin b/x.bin\n"
            "--- a/x.bin\n"
            "+++ b/x.bin\n"
            "Binary files a/x.bin and b/x.bin differ\n"
            "Binary files a/x.bin and b/x.bin differ\n"
        )
        result, sink = _split(diff)
        assert sink.files["binary_files.txt"] == "Binary files a/x.bin and b/x.bin differ\n"
        assert len(result.binary_markers) == 1


class TestSkips:
    def test_exclude_globs(self, sample_diff_git):
        result, sink = _split(sample_diff_git, exclude=["*.md"])
        assert list(sink.files) == ["src/app.py"]
        assert [(s.path, s.reason) for s in result.skipped] == [("README.md", "excluded")]

    def test_exclude_directory_glob(self, sample_diff_git):
        _, sink = _split(sample_diff_git, exclude=["src/*"])
        assert list(sink.files) == ["README.md"]

    def test_unsafe_path(self):
        diff = (
            "diff --git a/x b/../../etc/x\n"
            "--- a/x\n"
            "+++ b/../../etc/x\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n"
        )
        result, sink = _split(diff, strip=0)
        assert sink.files == {}
        assert result.skipped[0].reason == "unsafe_path"

    def test_absolute_path_kept_inside_target(self):
        diff = "diff --git /a/x /b/x\n--- /a/x\n+++ /b/x\n@@ -1 +1 @@\n-a\n+b\n"
        _, sink = _split(diff, strip=0)
        assert list(sink.files) == ["b/x"]

    def test_dropped_count(self):
        diff = "diff --git a/f b/f\n--- a/f\n+++ \n@@ -1 +1 @@\n-x\n+y\n"
        result, sink = _split(diff)
        assert sink.files == {}
        assert result.dropped == 1
        assert result.skipped == []


class TestFileSystem:
    def test_files_written(self, sample_diff_git, tmp_path: Path):
        target = tmp_path / "out"
        result, _ = _split(sample_diff_git, sink=FileSystemSink(target))
        assert (target / "src" / "app.py").read_text().startswith("diff --git a/src/app.py")
        assert (target / "README.md").is_file()
        assert result.total_files == 2

    def test_crlf_written_verbatim(self, tmp_path: Path):
        diff = "diff --git a/w b/w\r\n--- a/w\r\n+++ b/w\r\n@@ -1 +1 @@\r\n-a\r\n+b\r\n"
        _split(diff, sink=FileSystemSink(tmp_path))
        assert (tmp_path / "w").read_bytes() == diff.encode()

    def test_overwrites_existing(self, sample_diff_git, tmp_path: Path):
        (tmp_path / "README.md").write_text("stale content that is longer than the diff " * 10)
        _split(sample_diff_git, sink=FileSystemSink(tmp_path))
        assert (tmp_path / "README.md").read_text().startswith("diff --git a/README.md")
        assert "stale" not in (tmp_path / "README.md").read_text()

    def test_format_error_keeps_written_files(self, sample_diff_truncated_header, tmp_path: Path):
        with pytest.raises(DiffFormatError):
            _split(sample_diff_truncated_header, sink=FileSystemSink(tmp_path))
        assert (tmp_path / "ok.txt").is_file()
        assert not (tmp_path / "broken.txt").exists()
        assert not (tmp_path / "later.txt").exists()

    def test_empty_path_record_not_written(self, tmp_path: Path):
        diff = "diff --git a/ b/\n--- a/\n+++ /\n@@ -1 +1 @@\n-x\n+y\n"
        result, _ = _split(diff, sink=FileSystemSink(tmp_path), strip=1)
        assert result.files == []
        assert [s.reason for s in result.skipped] == ["empty_path"]
        assert list(tmp_path.iterdir()) == []


class TestNewAndDeletedFiles:
    def test_new_files_keep_their_directories(self):
        diff = (
            "diff --git a/pkg/__init__.py b/pkg/__init__.py\n"
            "--- /dev/null\n"
            "+++ b/pkg/__init__.py\n"
            "@@ -0,0 +1 @@\n"
            "+x = 1\n"
            "diff --git a/lib/__init__.py b/lib/__init__.py\n"
            "--- /dev/null\n"
            "+++ b/lib/__init__.py\n"
            "@@ -0,0 +1 @@\n"
            "+y = 2\n"
        )
        result, sink = _split(diff)
        assert sorted(sink.files) == ["b/lib/__init__.py", "b/pkg/__init__.py"]
        assert [f.strip_level for f in result.files] == [0, 0]

    def test_deleted_file_keeps_its_directories(self):
        diff = (
            "diff --git a/old/gone.txt b/old/gone.txt\n"
            "--- a/old/gone.txt\n"
            "+++ /dev/null\n"
            "@@ -1 +0,0 @@\n"
            "-bye\n"
        )
        _, sink = _split(diff)
        assert list(sink.files) == ["a/old/gone.txt"]


class TestReservedPath:
    _DIFF = (
        "diff --git a/binary_files.txt b/binary_files.txt\n"
        "--- a/binary_files.txt\n"
        "+++ b/binary_files.txt\n"
        "@@ -1 +1 @@\n"
        "-old\n"
        "+new\n"
        "diff --git a/logo.png b/logo.png\n"
        "--- a/logo.png\n"
        "+++ b/logo.png\n"
        "Binary files a/logo.png and b/logo.png differ\n"
    )

    def test_text_record_named_like_binary_list_skipped(self):
        result, sink = _split(self._DIFF)
        assert sink.files == {"binary_files.txt": "Binary files a/logo.png and b/logo.png differ\n"}
        assert [(s.path, s.reason) for s in result.skipped] == [
            ("binary_files.txt", "reserved_path")
        ]
        assert result.files == []

    def test_custom_list_name_frees_the_path(self):
        result, sink = _split(self._DIFF, binary_list_name="BINARIES")
        assert sink.files["binary_files.txt"].startswith("diff --git a/binary_files.txt")
        assert "BINARIES" in sink.files
        assert result.skipped == []
