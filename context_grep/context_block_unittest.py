import unittest
from context_grep import context_block

class TestPrintedLine(unittest.TestCase):
    def test_plain_line(self):
        line = context_block.PrintedLine(line_number=3, content="  indented", is_match=True)
        self.assertEqual(str(line), "  indented")

    def test_numbered_line(self):
        line = context_block.PrintedLine(line_number=12, content="x:y", is_match=False, numbered=True)
        self.assertEqual(str(line), "12:x:y")

class TestMarkers(unittest.TestCase):
    def test_separator(self):
        self.assertEqual(str(context_block.GroupSeparator()), "--")

    def test_end_of_file(self):
        self.assertEqual(str(context_block.EndOfFile()), "")

    def test_match_count(self):
        self.assertEqual(str(context_block.MatchCount(7)), "7")

class TestContextGroup(unittest.TestCase):
    def setUp(self):
        self.group = context_block.ContextGroup(start=2, end=5, match_indices=[3, 5])

    def test_context_group_creation(self):
        self.assertEqual((self.group.start, self.group.end), (2, 5))
        self.assertEqual(self.group.match_indices, [3, 5])

    def test_default_match_indices(self):
        first = context_block.ContextGroup(start=0, end=0)
        second = context_block.ContextGroup(start=1, end=1)
        first.match_indices.append(0)
        self.assertEqual(second.match_indices, [])

    def test_touches(self):
        self.assertTrue(self.group.touches(4))
        self.assertTrue(self.group.touches(6))
        self.assertFalse(self.group.touches(7))

if __name__ == '__main__':
    unittest.main()
