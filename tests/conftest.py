"""Shared test fixtures — sample diffs in every supported header style."""

from __future__ import annotations

import textwrap

import pytest


@pytest.fixture
def sample_diff_git() -> str:
    """Two files with index lines and a/ b/ prefixes."""
    return textwrap.dedent("""\
        diff --git a/src/app.py b/src/app.py
        index 1234567..abcdef0 100644
        --- a/src/app.py
        +++ b/src/app.py
        @@ -10,5 +10,6 @@ def main():
             setup()
        -    run()
        +    run(fast=True)
        +    report()
             teardown()
        diff --git a/README.md b/README.md
        index 89abcde..0123456 100644
        --- a/README.md
        +++ b/README.md
        @@ -1 +1 @@
        -# Old title
        +# New title
    """)


@pytest.fixture
def sample_diff_plain() -> str:
    """No index line, timestamps after a tab, a preamble line before the diff."""
    return textwrap.dedent("""\
        Only in b/dir: extra.txt
        diff --recursive --unified a/dir/x.txt b/dir/x.txt
        --- a/dir/x.txt\t2024-01-01 10:00:00.000000000 +0000
        +++ b/dir/x.txt\t2024-01-02 11:00:00.000000000 +0000
        @@ -3,2 +3,2 @@
         keep
        -old
        +new
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A text diff followed by two binary files."""
    return textwrap.dedent("""\
        diff --git a/logo.png b/logo.png
        index 1111111..2222222 100644
        --- a/logo.png
        +++ b/logo.png
        Binary files a/logo.png and b/logo.png differ
        diff --git a/notes.txt b/notes.txt
        --- a/notes.txt
        +++ b/notes.txt
        @@ -1 +1 @@
        -a
        +b
        diff --git a/icon.ico b/icon.ico
        index 3333333..4444444 100644
        --- a/icon.ico
        +++ b/icon.ico
        Binary files a/icon.ico and b/icon.ico differ
    """)


@pytest.fixture
def sample_diff_combined() -> str:
    """A combined (merge) diff with a three-way hunk header."""
    return textwrap.dedent("""\
        diff --cc lib/merge.c
        index 1a2b3c4,5d6e7f8..9a0b1c2
        --- a/lib/merge.c
        +++ b/lib/merge.c
        @@@ -1,3 -1,3 +1,4 @@@ int merge(void)
          int a;
        - int b;
         -int c;
        ++int d;
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A rename between directories, header style without extended lines."""
    return textwrap.dedent("""\
        diff --git a/old/name.txt b/new/name.txt
        --- a/old/name.txt
        +++ b/new/name.txt
        @@ -1,2 +1,2 @@
         same
        -before
        +after
    """)


@pytest.fixture
def sample_diff_git_extended() -> str:
    """Real ``git diff`` output with mode, new-file and binary headers."""
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
        diff --git a/pkg/new.py b/pkg/new.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/pkg/new.py
        @@ -0,0 +1,2 @@
        +x = 1
        +y = 2
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..abcdef0
        Binary files /dev/null and b/image.png differ
        diff --git a/pkg/mod.py b/pkg/mod.py
        index 1234567..89abcde 100644
        --- a/pkg/mod.py
        +++ b/pkg/mod.py
        @@ -7 +7 @@ class Mod:
        -    pass
        +    value = 3
    """)


@pytest.fixture
def sample_diff_truncated_header() -> str:
    """The '+++' line is missing: a fatal format error."""
    return textwrap.dedent("""\
        diff --git a/ok.txt b/ok.txt
        --- a/ok.txt
        +++ b/ok.txt
        @@ -1 +1 @@
        -a
        +b
        diff --git a/broken.txt b/broken.txt
        --- a/broken.txt
        diff --git a/later.txt b/later.txt
        --- a/later.txt
        +++ b/later.txt
        @@ -1 +1 @@
        -c
        +d
    """)
