import unittest

from context_grep import matcher
from context_grep.errors import PatternError


class TestCompilePattern(unittest.TestCase):
    def test_regex_pattern(self):
        compiled = matcher.compile_pattern(r"fo+\d")
        self.assertIsNotNone(compiled.search("xx fooo7 yy"))
        self.assertIsNone(compiled.search("fo"))

    def test_fixed_string_escapes_metacharacters(self):
        compiled = matcher.compile_pattern("a.b", fixed_string=True)
        self.assertIsNotNone(compiled.search("xa.bx"))
        self.assertIsNone(compiled.search("axb"))

    def test_dot_is_wildcard_without_fixed_string(self):
        compiled = matcher.compile_pattern("a.b")
        self.assertIsNotNone(compiled.search("axb"))

    def test_fixed_string_with_invalid_regex_text(self):
        # "(" alone is not a valid regex but is fine as literal text
        compiled = matcher.compile_pattern("f(x) [1]*", fixed_string=True)
        self.assertIsNotNone(compiled.search("call f(x) [1]* now"))
        self.assertIsNone(compiled.search("call fx 1 now"))

    def test_ignore_case(self):
        compiled = matcher.compile_pattern("FOO", ignore_case=True)
        self.assertIsNotNone(compiled.search("foo bar"))

    def test_case_sensitive_by_default(self):
        compiled = matcher.compile_pattern("FOO")
        self.assertIsNone(compiled.search("foo bar"))

    def test_ignore_case_with_fixed_string(self):
        compiled = matcher.compile_pattern("A.B", ignore_case=True, fixed_string=True)
        self.assertIsNotNone(compiled.search("see a.b here"))
        self.assertIsNone(compiled.search("see axb here"))

    def test_invalid_pattern_raises(self):
        with self.assertRaises(PatternError) as cm:
            matcher.compile_pattern("foo(")
        self.assertEqual(cm.exception.pattern, "foo(")
        self.assertIn("foo(", str(cm.exception))


class TestMatchIndices(unittest.TestCase):
    def setUp(self):
        self.lines = ["foo", "bar", "baz", "foo", "qux"]

    def test_matches_in_order(self):
        compiled = matcher.compile_pattern("foo")
        self.assertEqual(matcher.match_indices(compiled, self.lines), [0, 3])

    def test_substring_match(self):
        compiled = matcher.compile_pattern("a")
        self.assertEqual(matcher.match_indices(compiled, self.lines), [1, 2])

    def test_invert(self):
        compiled = matcher.compile_pattern("foo")
        self.assertEqual(matcher.match_indices(compiled, ["foo", "bar"], invert=True), [1])

    def test_no_matches(self):
        compiled = matcher.compile_pattern("zzz")
        self.assertEqual(matcher.match_indices(compiled, self.lines), [])

    def test_invert_no_matches_selects_everything(self):
        compiled = matcher.compile_pattern("zzz")
        self.assertEqual(matcher.match_indices(compiled, self.lines, invert=True), [0, 1, 2, 3, 4])

    def test_empty_lines(self):
        compiled = matcher.compile_pattern("^$")
        self.assertEqual(matcher.match_indices(compiled, ["a", "", "b", ""]), [1, 3])

    def test_indices_strictly_increasing(self):
        lines = ["x%d" % (i % 3) for i in range(50)]
        for pattern in ("x0", "x[12]", "x", "nothing"):
            for invert in (False, True):
                indices = matcher.match_indices(matcher.compile_pattern(pattern), lines, invert=invert)
                self.assertTrue(all(a < b for a, b in zip(indices, indices[1:])), (pattern, invert))


if __name__ == '__main__':
    unittest.main()
