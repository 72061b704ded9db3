import os
import tempfile
import unittest
from unittest.mock import patch

from context_grep import config
from context_grep.errors import ConfigError


class TestGrepConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = config.GrepConfig(pattern="foo", files=["a.txt"])
        self.assertEqual((cfg.before, cfg.after, cfg.context), (0, 0, 0))
        self.assertEqual(cfg.files, ("a.txt",))
        self.assertFalse(cfg.count_only or cfg.ignore_case or cfg.invert or cfg.fixed_string or cfg.show_line_numbers)

    def test_context_overrides(self):
        cfg = config.GrepConfig(before=4, after=2, context=3)
        self.assertEqual((cfg.before, cfg.after), (3, 3))

    def test_zero_context_keeps_before_after(self):
        cfg = config.GrepConfig(before=4, after=2, context=0)
        self.assertEqual((cfg.before, cfg.after), (4, 2))

    def test_negative_value_rejected(self):
        with self.assertRaises(ConfigError):
            config.GrepConfig(before=-1)

    def test_frozen(self):
        cfg = config.GrepConfig()
        with self.assertRaises(Exception):
            cfg.before = 3


class TestParseConfig(unittest.TestCase):
    def test_all_flags(self):
        cfg = config.parse_config(
            ["-A", "2", "-B", "1", "-c", "-i", "-v", "-F", "-n", "a.b", "x.txt", "y.txt"], environ={})
        self.assertEqual(cfg.pattern, "a.b")
        self.assertEqual(cfg.files, ("x.txt", "y.txt"))
        self.assertEqual((cfg.before, cfg.after), (1, 2))
        self.assertTrue(cfg.count_only)
        self.assertTrue(cfg.ignore_case)
        self.assertTrue(cfg.invert)
        self.assertTrue(cfg.fixed_string)
        self.assertTrue(cfg.show_line_numbers)
        self.assertFalse(cfg.verbose)

    def test_context_flag_overrides_a_and_b(self):
        cfg = config.parse_config(["-A", "5", "-B", "0", "-C", "2", "foo", "f.txt"], environ={})
        self.assertEqual((cfg.before, cfg.after, cfg.context), (2, 2, 2))

    def test_attached_flag_values(self):
        cfg = config.parse_config(["-A1", "-B3", "foo", "f.txt"], environ={})
        self.assertEqual((cfg.before, cfg.after), (3, 1))

    def test_missing_pattern(self):
        with self.assertRaises(ConfigError) as cm:
            config.parse_config([], environ={})
        self.assertIn("pattern", str(cm.exception))

    def test_empty_pattern_is_missing(self):
        with self.assertRaises(ConfigError):
            config.parse_config(["", "f.txt"], environ={})

    def test_missing_files(self):
        with self.assertRaises(ConfigError) as cm:
            config.parse_config(["foo"], environ={})
        self.assertIn("files", str(cm.exception))

    def test_bad_integer(self):
        with self.assertRaises(ConfigError):
            config.parse_config(["-A", "many", "foo", "f.txt"], environ={})

    def test_negative_integer(self):
        with self.assertRaises(ConfigError):
            config.parse_config(["-C", "-3", "foo", "f.txt"], environ={})

    def test_unknown_flag(self):
        with self.assertRaises(ConfigError):
            config.parse_config(["-Z", "foo", "f.txt"], environ={})

    def test_environment_defaults(self):
        environ = {config.ENV_BEFORE: "2", config.ENV_AFTER: "3", config.ENV_VERBOSE: "yes"}
        cfg = config.parse_config(["foo", "f.txt"], environ=environ)
        self.assertEqual((cfg.before, cfg.after), (2, 3))
        self.assertTrue(cfg.verbose)

    def test_flags_override_environment(self):
        environ = {config.ENV_BEFORE: "2", config.ENV_CONTEXT: "4"}
        cfg = config.parse_config(["-C", "1", "foo", "f.txt"], environ=environ)
        self.assertEqual((cfg.before, cfg.after), (1, 1))

    def test_explicit_zero_window_beats_environment_context(self):
        environ = {config.ENV_CONTEXT: "2"}
        cfg = config.parse_config(["-A", "0", "-B", "0", "foo", "f.txt"], environ=environ)
        self.assertEqual((cfg.before, cfg.after, cfg.context), (0, 0, 0))

    def test_explicit_after_keeps_environment_before(self):
        environ = {config.ENV_BEFORE: "3", config.ENV_CONTEXT: "2"}
        cfg = config.parse_config(["-A", "1", "foo", "f.txt"], environ=environ)
        self.assertEqual((cfg.before, cfg.after), (3, 1))

    def test_environment_context_applies_without_flags(self):
        environ = {config.ENV_BEFORE: "5", config.ENV_CONTEXT: "2"}
        cfg = config.parse_config(["foo", "f.txt"], environ=environ)
        self.assertEqual((cfg.before, cfg.after), (2, 2))

    def test_options_after_positionals(self):
        cfg = config.parse_config(["foo", "-n", "a.txt", "-A", "2", "b.txt"], environ={})
        self.assertEqual(cfg.pattern, "foo")
        self.assertEqual(cfg.files, ("a.txt", "b.txt"))
        self.assertTrue(cfg.show_line_numbers)
        self.assertEqual(cfg.after, 2)

    def test_invalid_environment_value(self):
        with self.assertRaises(ConfigError) as cm:
            config.parse_config(["foo", "f.txt"], environ={config.ENV_AFTER: "-1"})
        self.assertIn(config.ENV_AFTER, str(cm.exception))


class TestLoadEnvDefaults(unittest.TestCase):
    def test_reads_dotenv_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with open(os.path.join(tmp_dir, ".env"), "w") as f:
                f.write(f"{config.ENV_CONTEXT}=3\n")
            cwd = os.getcwd()
            os.chdir(tmp_dir)
            try:
                with patch.dict(os.environ, {}, clear=False):
                    os.environ.pop(config.ENV_CONTEXT, None)
                    defaults = config.load_env_defaults()
            finally:
                os.chdir(cwd)
        self.assertEqual(defaults["context"], 3)

    def test_empty_environment(self):
        self.assertEqual(
            config.load_env_defaults({}),
            {"before": 0, "after": 0, "context": 0, "verbose": False},
        )


if __name__ == '__main__':
    unittest.main()
