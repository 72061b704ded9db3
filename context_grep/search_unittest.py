import io
import os
import shutil
import tempfile
import unittest

from rich.console import Console

from context_grep import search
from context_grep.config import GrepConfig
from context_grep.errors import FileAccessError, PatternError
from context_grep.matcher import compile_pattern


class SearchTestCase(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="context_grep_test_")
        self.log_file = io.StringIO()
        self.log = Console(file=self.log_file, width=200)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_file(self, name: str, content: str) -> str:
        path = os.path.join(self.temp_dir, name)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return path


class TestReadLines(SearchTestCase):
    def test_trailing_newline(self):
        path = self.write_file("a.txt", "foo\nbar\n")
        self.assertEqual(search.read_lines(path), ["foo", "bar"])

    def test_no_trailing_newline(self):
        path = self.write_file("a.txt", "foo\nbar")
        self.assertEqual(search.read_lines(path), ["foo", "bar"])

    def test_crlf(self):
        path = self.write_file("a.txt", "foo\r\nbar\r\n")
        self.assertEqual(search.read_lines(path), ["foo", "bar"])

    def test_blank_lines_kept(self):
        path = self.write_file("a.txt", "\n\nx\n\n")
        self.assertEqual(search.read_lines(path), ["", "", "x", ""])

    def test_empty_file(self):
        path = self.write_file("a.txt", "")
        self.assertEqual(search.read_lines(path), [])

    def test_tabs_and_brackets_untouched(self):
        path = self.write_file("a.txt", "\t[bold]x[/bold]  \n")
        self.assertEqual(search.read_lines(path), ["\t[bold]x[/bold]  "])

    def test_missing_file(self):
        path = os.path.join(self.temp_dir, "missing.txt")
        with self.assertRaises(FileAccessError) as cm:
            search.read_lines(path)
        self.assertEqual(cm.exception.path, path)
        self.assertIn(path, str(cm.exception))

    def test_directory(self):
        with self.assertRaises(FileAccessError):
            search.read_lines(self.temp_dir)


class TestSearchFile(SearchTestCase):
    def setUp(self):
        super().setUp()
        self.path = self.write_file("five.txt", "foo\nbar\nbaz\nfoo\nqux\n")

    def _search(self, config: GrepConfig, path: str):
        out = io.StringIO()
        compiled = compile_pattern(config.pattern, config.ignore_case, config.fixed_string)
        count = search.search_file(config, compiled, path, out=out, log=self.log)
        return count, out.getvalue()

    def test_merged_context_block(self):
        count, output = self._search(GrepConfig(pattern="foo", before=1, after=1), self.path)
        self.assertEqual(count, 2)
        self.assertEqual(output, f"{self.path}:\nfoo\nbar\nbaz\nfoo\nqux\n\n")

    def test_no_matches_prints_header_and_blank_line(self):
        count, output = self._search(GrepConfig(pattern="zzz"), self.path)
        self.assertEqual(count, 0)
        self.assertEqual(output, f"{self.path}:\n\n")

    def test_count_only(self):
        count, output = self._search(GrepConfig(pattern="foo", count_only=True, context=2), self.path)
        self.assertEqual(count, 2)
        self.assertEqual(output, f"{self.path}:2\n")

    def test_empty_file_prints_nothing(self):
        empty = self.write_file("empty.txt", "")
        self.assertEqual(self._search(GrepConfig(pattern="foo"), empty), (0, ""))
        self.assertEqual(self._search(GrepConfig(pattern="foo", count_only=True), empty), (0, ""))

    def test_separator_and_line_numbers(self):
        config = GrepConfig(pattern="ba", show_line_numbers=True, invert=True)
        count, output = self._search(config, self.path)
        self.assertEqual(count, 3)
        self.assertEqual(output, f"{self.path}:\n1:foo\n--\n4:foo\n5:qux\n\n")

    def test_content_written_verbatim(self):
        path = self.write_file("tabs.txt", "\tkey = [red]value[/red]\nother\n")
        _, output = self._search(GrepConfig(pattern="key"), path)
        self.assertEqual(output, f"{path}:\n\tkey = [red]value[/red]\n\n")

    def test_verbose_logs_counts(self):
        self._search(GrepConfig(pattern="foo", verbose=True), self.path)
        self.assertIn("5 lines, 2 matching", self.log_file.getvalue())


class TestSearchFiles(SearchTestCase):
    def test_files_in_order(self):
        first = self.write_file("1.txt", "alpha\nbeta\n")
        second = self.write_file("2.txt", "gamma\nalpha beta\n")
        out = io.StringIO()
        total = search.search_files(GrepConfig(pattern="beta", files=(second, first)), out=out, log=self.log)
        self.assertEqual(total, 2)
        self.assertEqual(out.getvalue(), f"{second}:\nalpha beta\n\n{first}:\nbeta\n\n")

    def test_ignore_case_and_fixed_string(self):
        path = self.write_file("a.txt", "A.B here\naxb there\n")
        out = io.StringIO()
        config = GrepConfig(pattern="a.b", files=(path,), ignore_case=True, fixed_string=True)
        search.search_files(config, out=out, log=self.log)
        self.assertEqual(out.getvalue(), f"{path}:\nA.B here\n\n")

    def test_invalid_pattern_fails_before_output(self):
        path = self.write_file("a.txt", "foo\n")
        out = io.StringIO()
        with self.assertRaises(PatternError):
            search.search_files(GrepConfig(pattern="(", files=(path,)), out=out, log=self.log)
        self.assertEqual(out.getvalue(), "")

    def test_first_unreadable_file_aborts(self):
        good = self.write_file("good.txt", "foo\n")
        missing = os.path.join(self.temp_dir, "missing.txt")
        never = self.write_file("never.txt", "foo\n")
        out = io.StringIO()
        with self.assertRaises(FileAccessError):
            search.search_files(GrepConfig(pattern="foo", files=(good, missing, never)), out=out, log=self.log)
        self.assertEqual(out.getvalue(), f"{good}:\nfoo\n\n")


if __name__ == '__main__':
    unittest.main()
