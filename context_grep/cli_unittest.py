import io
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from rich.console import Console

from context_grep import cli


class TestRun(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="context_grep_cli_test_")
        self.path = os.path.join(self.temp_dir, "sample.txt")
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("foo\nbar\nbaz\nfoo\nqux\n")
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.err_console = Console(file=self.err, width=200)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _run(self, *argv):
        return cli.run(list(argv), out=self.out, err_console=self.err_console, environ={})

    def test_success(self):
        self.assertEqual(self._run("-C", "1", "-n", "foo", self.path), 0)
        self.assertEqual(self.out.getvalue(), f"{self.path}:\n1:foo\n2:bar\n3:baz\n4:foo\n5:qux\n\n")
        self.assertEqual(self.err.getvalue(), "")

    def test_no_matches_is_success(self):
        self.assertEqual(self._run("zzz", self.path), 0)
        self.assertEqual(self.out.getvalue(), f"{self.path}:\n\n")

    def test_count_only(self):
        self.assertEqual(self._run("-c", "-i", "FOO", self.path, self.path), 0)
        self.assertEqual(self.out.getvalue(), f"{self.path}:2\n{self.path}:2\n")

    def test_missing_pattern(self):
        self.assertEqual(self._run(), 1)
        self.assertIn("pattern is required", self.err.getvalue())
        self.assertEqual(self.out.getvalue(), "")

    def test_missing_files(self):
        self.assertEqual(self._run("foo"), 1)
        self.assertIn("no files specified", self.err.getvalue())

    def test_bad_flag_value_exits_with_one(self):
        self.assertEqual(self._run("-A", "x", "foo", self.path), 1)
        self.assertIn("Error:", self.err.getvalue())

    def test_invalid_pattern(self):
        self.assertEqual(self._run("[unclosed", self.path), 1)
        self.assertIn("invalid pattern '[unclosed'", self.err.getvalue())
        self.assertEqual(self.out.getvalue(), "")

    def test_fixed_string_makes_pattern_valid(self):
        self.assertEqual(self._run("-F", "[unclosed", self.path), 0)

    def test_unreadable_file(self):
        missing = os.path.join(self.temp_dir, "missing.txt")
        self.assertEqual(self._run("foo", self.path, missing), 1)
        self.assertIn("cannot read file", self.err.getvalue())
        self.assertTrue(self.out.getvalue().startswith(f"{self.path}:\n"))

    def test_long_error_message_stays_on_one_line(self):
        err = io.StringIO()
        missing = os.path.join(self.temp_dir, "x" * 120)
        code = cli.run(["foo", missing], out=self.out, err_console=Console(file=err), environ={})
        self.assertEqual(code, 1)
        self.assertEqual(err.getvalue().count("\n"), 1)
        self.assertIn(missing, err.getvalue())

    def test_options_after_pattern(self):
        self.assertEqual(self._run("foo", "-n", self.path), 0)
        self.assertEqual(self.out.getvalue(), f"{self.path}:\n1:foo\n--\n4:foo\n\n")

    def test_verbose(self):
        self.assertEqual(self._run("--verbose", "foo", self.path), 0)
        self.assertIn("Searching 1 file(s)", self.err.getvalue())


class TestMain(unittest.TestCase):
    def test_main_exit_code(self):
        with patch("sys.argv", ["context-grep"]), \
             patch.object(cli, "console", Console(file=io.StringIO())):
            with self.assertRaises(SystemExit) as cm:
                cli.main()
        self.assertEqual(cm.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
