"""Tests for the unified diff parser."""

from repoguard.git.diff_parser import DiffParser, unquote_path
from repoguard.git.models import AddedLine, DiffFile, FileSkipped, FileStatus


def _items(diff: str, kind):
    return [i for i in DiffParser(diff).parse() if isinstance(i, kind)]


class TestBasicParsing:
    def test_added_lines(self, sample_diff_clean):
        files = _items(sample_diff_clean, DiffFile)
        lines = _items(sample_diff_clean, AddedLine)
        assert [f.path for f in files] == ["hello.py"]
        assert files[0].status == FileStatus.ADDED
        assert len(lines) == 3
        assert lines[0].content == "def greet(name):"
        assert lines[0].line_no == 1

    def test_hunk_start_line(self, sample_diff_with_password):
        lines = _items(sample_diff_with_password, AddedLine)
        assert [(l.line_no, l.content) for l in lines] == [
            (11, 'password = "abcdefgh"'),
            (12, 'pwd = "short"'),
        ]

    def test_context_lines_advance_counter(self, sample_diff_multi_file):
        lines = _items(sample_diff_multi_file, AddedLine)
        assert (lines[0].file, lines[0].line_no) == ("a.py", 4)
        assert (lines[1].file, lines[1].line_no) == ("docs/example.md", 1)

    def test_files_helper(self, sample_diff_multi_file):
        assert DiffParser(sample_diff_multi_file).files() == ["a.py", "docs/example.md"]


class TestEdgeCases:
    def test_binary_file_skipped(self, sample_diff_binary):
        [skipped] = _items(sample_diff_binary, FileSkipped)
        assert skipped == FileSkipped(path="image.png", reason="binary")

    def test_rename_tracked(self, sample_diff_rename):
        [f] = _items(sample_diff_rename, DiffFile)
        assert f.path == "new_name.py"
        assert f.old_path == "old_name.py"
        assert f.status == FileStatus.RENAMED

    def test_mode_only_skipped(self, sample_diff_mode_only):
        [skipped] = _items(sample_diff_mode_only, FileSkipped)
        assert skipped.reason == "mode_only"

    def test_submodule_ignored(self, sample_diff_submodule):
        assert _items(sample_diff_submodule, AddedLine) == []

    def test_no_newline_marker(self):
        diff = (
            "diff --git a/data.txt b/data.txt\n"
            "--- a/data.txt\n"
            "+++ b/data.txt\n"
            "@@ -1 +1 @@\n"
            "-old\n"
            "\\ No newline at end of file\n"
            "+new\n"
            "\\ No newline at end of file\n"
        )
        lines = _items(diff, AddedLine)
        assert [(l.line_no, l.content) for l in lines] == [(1, "new")]

    def test_consecutive_hunks(self):
        diff = (
            "diff --git a/f.py b/f.py\n"
            "index abc..def 100644\n"
            "--- a/f.py\n"
            "+++ b/f.py\n"
            "@@ -5,0 +5,1 @@\n"
            "+line at 5\n"
            "@@ -20,0 +21,1 @@\n"
            "+line at 21\n"
        )
        assert [l.line_no for l in _items(diff, AddedLine)] == [5, 21]

    def test_deleted_file(self):
        diff = (
            "diff --git a/old.py b/old.py\n"
            "deleted file mode 100644\n"
            "index abc..000 100644\n"
            "--- a/old.py\n"
            "+++ /dev/null\n"
            "@@ -1,2 +0,0 @@\n"
            "-line one\n"
            "-line two\n"
        )
        [f] = _items(diff, DiffFile)
        assert f.status == FileStatus.DELETED
        assert _items(diff, AddedLine) == []

    def test_bom_and_crlf_stripped(self):
        diff = (
            "diff --git a/bom.txt b/bom.txt\n"
            "--- /dev/null\n"
            "+++ b/bom.txt\n"
            "@@ -0,0 +1,1 @@\n"
            "+\ufeffhello world\r\n"
        )
        [line] = _items(diff, AddedLine)
        assert line.content == "hello world"

    def test_file_headers_not_content(self):
        diff = (
            "diff --git a/config.py b/config.py\n"
            "index abc..def 100644\n"
            "--- a/config.py\n"
            "+++ b/config.py\n"
            "@@ -1,0 +2,1 @@\n"
            "+new line\n"
        )
        [line] = _items(diff, AddedLine)
        assert line.content == "new line"
        assert line.line_no == 2

    def test_form_feed_is_content(self):
        diff = (
            "diff --git a/page.txt b/page.txt\n"
            "--- a/page.txt\n"
            "+++ b/page.txt\n"
            "@@ -0,0 +1,2 @@\n"
            "+x = 1\x0cy = 2 z\n"
            '+password = "abcdefgh"\n'
        )
        lines = _items(diff, AddedLine)
        assert [(l.line_no, l.content) for l in lines] == [
            (1, "x = 1\x0cy = 2 z"),
            (2, 'password = "abcdefgh"'),
        ]


class TestQuotedPaths:
    def test_unquote_octal_utf8(self):
        assert unquote_path('"caf\\303\\251.py"') == "café.py"

    def test_unquote_escapes(self):
        assert unquote_path('"a\\tb\\"c\\\\d"') == 'a\tb"c\\d'

    def test_plain_path_unchanged(self):
        assert unquote_path("src/app.py") == "src/app.py"

    def test_quoted_header(self):
        diff = (
            'diff --git "a/caf\\303\\251.py" "b/caf\\303\\251.py"\n'
            "new file mode 100644\n"
            "--- /dev/null\n"
            '+++ "b/caf\\303\\251.py"\n'
            "@@ -0,0 +1 @@\n"
            '+password = "abcdefgh"\n'
        )
        [header] = _items(diff, DiffFile)
        [line] = _items(diff, AddedLine)
        assert header.path == "café.py"
        assert header.status == FileStatus.ADDED
        assert line.file == "café.py"

    def test_quoted_file_after_plain_file(self):
        diff = (
            "diff --git a/first.py b/first.py\n"
            "--- a/first.py\n"
            "+++ b/first.py\n"
            "@@ -1,0 +2 @@\n"
            "+x = 1\n"
            'diff --git "a/tab\\there.py" "b/tab\\there.py"\n'
            '--- "a/tab\\there.py"\n'
            '+++ "b/tab\\there.py"\n'
            "@@ -0,0 +1 @@\n"
            "+y = 2\n"
        )
        assert [(l.file, l.content) for l in _items(diff, AddedLine)] == [
            ("first.py", "x = 1"),
            ("tab\there.py", "y = 2"),
        ]

    def test_unquoted_non_ascii_and_spaces(self):
        diff = (
            "diff --git a/docs/my notes/café.md b/docs/my notes/café.md\n"
            "--- a/docs/my notes/café.md\n"
            "+++ b/docs/my notes/café.md\n"
            "@@ -0,0 +1 @@\n"
            "+hello\n"
        )
        [line] = _items(diff, AddedLine)
        assert line.file == "docs/my notes/café.md"

    def test_quoted_rename(self):
        diff = (
            "diff --git a/old.py \"b/n\\303\\251w.py\"\n"
            "similarity index 100%\n"
            "rename from old.py\n"
            'rename to "n\\303\\251w.py"\n'
        )
        [header] = _items(diff, DiffFile)
        assert header.path == "néw.py"
        assert header.old_path == "old.py"
