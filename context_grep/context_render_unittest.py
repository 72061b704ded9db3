import random
import unittest

from context_grep import context_render
from context_grep.config import GrepConfig
from context_grep.context_block import EndOfFile, GroupSeparator, MatchCount, PrintedLine


def _text(records):
    return [str(record) for record in records]


def _watermark_render(lines, matches, before, after):
    """Straightforward line-by-line version of the merge, used as a reference."""
    output = []
    last_printed = -1
    for m in matches:
        start = max(0, m - before)
        end = min(len(lines) - 1, m + after)
        if last_printed != -1 and start > last_printed + 1:
            output.append("--")
        print_start = start
        if last_printed != -1 and start <= last_printed:
            print_start = last_printed + 1
        for idx in range(print_start, end + 1):
            output.append(lines[idx])
            last_printed = idx
    output.append("")
    return output


class TestRender(unittest.TestCase):
    def setUp(self):
        self.lines = ["foo", "bar", "baz", "foo", "qux"]
        self.ten_lines = ["l%d" % i for i in range(10)]

    def test_overlapping_windows_merge(self):
        config = GrepConfig(before=1, after=1)
        records = context_render.render(config, [0, 3], self.lines)
        self.assertEqual(_text(records), ["foo", "bar", "baz", "foo", "qux", ""])
        self.assertFalse(any(isinstance(r, GroupSeparator) for r in records))

    def test_gap_emits_one_separator(self):
        config = GrepConfig(before=1, after=1)
        records = context_render.render(config, [1, 8], self.ten_lines)
        self.assertEqual(_text(records), ["l0", "l1", "l2", "--", "l7", "l8", "l9", ""])

    def test_single_unprinted_line_is_a_gap(self):
        # windows [0, 2] and [4, 6]
        config = GrepConfig(before=1, after=1)
        records = context_render.render(config, [1, 5], self.ten_lines)
        self.assertEqual(_text(records), ["l0", "l1", "l2", "--", "l4", "l5", "l6", ""])

    def test_touching_windows_have_no_separator(self):
        # windows [0, 2] and [3, 6]
        config = GrepConfig(before=2, after=1)
        records = context_render.render(config, [1, 5], self.ten_lines)
        self.assertEqual(_text(records), ["l0", "l1", "l2", "l3", "l4", "l5", "l6", ""])

    def test_zero_window_prints_only_matches(self):
        config = GrepConfig()
        self.assertEqual(_text(context_render.render(config, [1, 3], self.ten_lines)), ["l1", "--", "l3", ""])
        self.assertEqual(_text(context_render.render(config, [1, 2], self.ten_lines)), ["l1", "l2", ""])

    def test_window_clamped_at_start_of_file(self):
        config = GrepConfig(before=5)
        self.assertEqual(_text(context_render.render(config, [0], self.lines)), ["foo", ""])

    def test_window_clamped_at_end_of_file(self):
        config = GrepConfig(after=5)
        self.assertEqual(_text(context_render.render(config, [4], self.lines)), ["qux", ""])

    def test_window_already_printed_adds_nothing(self):
        config = GrepConfig(after=5)
        records = context_render.render(config, [3, 4], self.lines)
        self.assertEqual(_text(records), ["foo", "qux", ""])

    def test_no_matches_emits_only_terminator(self):
        records = context_render.render(GrepConfig(before=2, after=2), [], self.lines)
        self.assertEqual(records, [EndOfFile()])
        self.assertEqual(_text(records), [""])

    def test_count_only(self):
        records = context_render.render(GrepConfig(count_only=True, context=3), [0, 3], self.lines)
        self.assertEqual(records, [MatchCount(2)])
        self.assertEqual(_text(records), ["2"])

    def test_count_only_zero_matches(self):
        self.assertEqual(context_render.render(GrepConfig(count_only=True), [], self.lines), [MatchCount(0)])

    def test_line_numbers(self):
        config = GrepConfig(after=1, show_line_numbers=True)
        records = context_render.render(config, [0, 3], self.lines)
        self.assertEqual(_text(records), ["1:foo", "2:bar", "--", "4:foo", "5:qux", ""])

    def test_match_flags(self):
        config = GrepConfig(before=1, after=1)
        records = context_render.render(config, [3], self.lines)
        printed = [r for r in records if isinstance(r, PrintedLine)]
        self.assertEqual([(r.line_number, r.is_match) for r in printed], [(3, False), (4, True), (5, False)])

    def test_context_overrides_before_and_after(self):
        config = GrepConfig(before=0, after=7, context=1)
        self.assertEqual((config.before, config.after), (1, 1))
        records = context_render.render(config, [5], self.ten_lines)
        self.assertEqual(_text(records), ["l4", "l5", "l6", ""])

    def test_render_is_idempotent(self):
        config = GrepConfig(before=2, after=1, show_line_numbers=True)
        first = context_render.render(config, [1, 4, 9], self.ten_lines)
        second = context_render.render(config, [1, 4, 9], self.ten_lines)
        self.assertEqual(first, second)

    def test_matches_reference_watermark_loop(self):
        rng = random.Random(1234)
        for _ in range(300):
            line_count = rng.randint(1, 30)
            lines = ["line %d" % i for i in range(line_count)]
            matches = sorted(rng.sample(range(line_count), rng.randint(0, line_count)))
            before, after = rng.randint(0, 4), rng.randint(0, 4)
            config = GrepConfig(before=before, after=after)
            self.assertEqual(
                _text(context_render.render(config, matches, lines)),
                _watermark_render(lines, matches, before, after),
                (matches, before, after),
            )


class TestContextGroups(unittest.TestCase):
    def test_merged_groups(self):
        groups = context_render.context_groups([0, 3], before=1, after=1, line_count=5)
        self.assertEqual(len(groups), 1)
        self.assertEqual((groups[0].start, groups[0].end), (0, 4))
        self.assertEqual(groups[0].match_indices, [0, 3])

    def test_disjoint_groups(self):
        groups = context_render.context_groups([1, 8], before=1, after=1, line_count=10)
        self.assertEqual([(g.start, g.end) for g in groups], [(0, 2), (7, 9)])

    def test_empty(self):
        self.assertEqual(context_render.context_groups([], before=3, after=3, line_count=10), [])

    def test_groups_are_ordered_and_non_adjacent(self):
        rng = random.Random(99)
        for _ in range(200):
            line_count = rng.randint(1, 40)
            matches = sorted(rng.sample(range(line_count), rng.randint(0, line_count)))
            groups = context_render.context_groups(matches, rng.randint(0, 3), rng.randint(0, 3), line_count)
            for group in groups:
                self.assertTrue(0 <= group.start <= group.end <= line_count - 1)
            for prev, nxt in zip(groups, groups[1:]):
                self.assertGreater(nxt.start, prev.end + 1)
                self.assertFalse(prev.touches(nxt.start))
            self.assertEqual([m for g in groups for m in g.match_indices], matches)


if __name__ == '__main__':
    unittest.main()
