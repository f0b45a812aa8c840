"""Tests for word and line boundary helpers."""

import unittest

from slidemark.text_utils import (
    LineBoundaries,
    WordBoundary,
    find_word_boundaries,
    get_line_boundaries,
    is_text_formatted,
    is_word_char,
    location_to_offset,
    offset_to_location,
    remove_markers,
)


class TestWordBoundaries(unittest.TestCase):

    def test_word_chars(self):
        self.assertTrue(is_word_char("a"))
        self.assertTrue(is_word_char("Z"))
        self.assertTrue(is_word_char("7"))
        self.assertTrue(is_word_char("_"))
        self.assertTrue(is_word_char("ب"))
        self.assertFalse(is_word_char(" "))
        self.assertFalse(is_word_char("*"))
        self.assertFalse(is_word_char("é"))
        self.assertFalse(is_word_char(""))

    def test_cursor_inside_word(self):
        self.assertEqual(find_word_boundaries("hello world", 2), WordBoundary(0, 5))
        self.assertEqual(find_word_boundaries("hello world", 8), WordBoundary(6, 11))

    def test_cursor_at_word_edges(self):
        self.assertEqual(find_word_boundaries("hello world", 5), WordBoundary(0, 5))
        self.assertEqual(find_word_boundaries("hello world", 6), WordBoundary(6, 11))
        self.assertEqual(find_word_boundaries("hello", 0), WordBoundary(0, 5))
        self.assertEqual(find_word_boundaries("hello", 5), WordBoundary(0, 5))

    def test_cursor_not_touching_word(self):
        self.assertIsNone(find_word_boundaries("a  b", 2))
        self.assertIsNone(find_word_boundaries("", 0))
        self.assertIsNone(find_word_boundaries("** **", 2))

    def test_out_of_range(self):
        self.assertIsNone(find_word_boundaries("hello", -1))
        self.assertIsNone(find_word_boundaries("hello", 6))

    def test_arabic_word(self):
        text = "say سلام now"
        self.assertEqual(find_word_boundaries(text, 6), WordBoundary(4, 8))


class TestFormattedDetection(unittest.TestCase):

    def test_wrapped_text(self):
        self.assertTrue(is_text_formatted("**bold**", "**", "**"))
        self.assertTrue(is_text_formatted("<u>x</u>", "<u>", "</u>"))

    def test_whitespace_outside_markers(self):
        self.assertTrue(is_text_formatted("  **bold**  ", "**", "**"))

    def test_plain_text(self):
        self.assertFalse(is_text_formatted("bold", "**", "**"))
        self.assertFalse(is_text_formatted("a **b** c", "**", "**"))

    def test_too_short(self):
        self.assertFalse(is_text_formatted("**", "**", "**"))
        self.assertFalse(is_text_formatted("", "**", "**"))

    def test_remove_markers(self):
        self.assertEqual(remove_markers("**bold**", "**", "**"), "bold")
        self.assertEqual(remove_markers(" _a_ ", "_", "_"), " a ")
        self.assertEqual(remove_markers("<u>x</u>", "<u>", "</u>"), "x")

    def test_remove_markers_without_pair(self):
        self.assertEqual(remove_markers("plain", "**", "**"), "plain")
        self.assertEqual(remove_markers("a**b", "**", "**"), "a**b")


class TestLineBoundaries(unittest.TestCase):

    def test_middle_line(self):
        result = get_line_boundaries("line1\nline2\nline3", 8)
        self.assertEqual(result, LineBoundaries(6, 11, "line2"))

    def test_first_and_last_line(self):
        text = "line1\nline2\nline3"
        self.assertEqual(get_line_boundaries(text, 0), LineBoundaries(0, 5, "line1"))
        self.assertEqual(get_line_boundaries(text, len(text)), LineBoundaries(12, 17, "line3"))

    def test_cursor_at_line_end(self):
        self.assertEqual(get_line_boundaries("ab\ncd", 2), LineBoundaries(0, 2, "ab"))

    def test_empty_line(self):
        self.assertEqual(get_line_boundaries("a\n\nb", 2), LineBoundaries(2, 2, ""))

    def test_clamps_position(self):
        self.assertEqual(get_line_boundaries("abc", 99), LineBoundaries(0, 3, "abc"))
        self.assertEqual(get_line_boundaries("abc", -4), LineBoundaries(0, 3, "abc"))


class TestLocations(unittest.TestCase):

    def test_offset_to_location(self):
        text = "ab\ncde\n"
        self.assertEqual(offset_to_location(text, 0), (0, 0))
        self.assertEqual(offset_to_location(text, 2), (0, 2))
        self.assertEqual(offset_to_location(text, 3), (1, 0))
        self.assertEqual(offset_to_location(text, 7), (2, 0))
        self.assertEqual(offset_to_location(text, 50), (2, 0))

    def test_location_to_offset(self):
        text = "ab\ncde\n"
        self.assertEqual(location_to_offset(text, (0, 0)), 0)
        self.assertEqual(location_to_offset(text, (1, 2)), 5)
        self.assertEqual(location_to_offset(text, (1, 99)), 6)
        self.assertEqual(location_to_offset(text, (2, 0)), 7)
        self.assertEqual(location_to_offset(text, (9, 0)), 7)
        self.assertEqual(location_to_offset(text, (-1, 3)), 0)

    def test_conversions_agree(self):
        text = "# Title\n\n- one\n- two"
        for offset in range(len(text) + 1):
            self.assertEqual(location_to_offset(text, offset_to_location(text, offset)), offset)


if __name__ == "__main__":
    unittest.main()
