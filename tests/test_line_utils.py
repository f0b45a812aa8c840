"""Tests for classifying the Markdown line around the cursor."""

import unittest

from slidemark.line_utils import (
    CodeBlockInfo,
    HeadingInfo,
    ListInfo,
    QuoteInfo,
    current_slide,
    is_heading_line,
    is_in_code_block,
    is_list_line,
    is_quote_line,
)


class TestLineClassification(unittest.TestCase):

    def test_heading(self):
        self.assertEqual(is_heading_line("# Title", 3), HeadingInfo(True, 1, "Title"))
        self.assertEqual(is_heading_line("intro\n###### Deep", 8), HeadingInfo(True, 6, "Deep"))

    def test_not_heading(self):
        self.assertEqual(is_heading_line("#Title", 0), HeadingInfo(False, 0, "#Title"))
        self.assertFalse(is_heading_line("####### seven", 0).is_heading)

    def test_quote(self):
        self.assertEqual(is_quote_line("> quoted", 0), QuoteInfo(True, "quoted"))
        self.assertEqual(is_quote_line(">tight", 0), QuoteInfo(True, "tight"))
        self.assertEqual(is_quote_line(">", 0), QuoteInfo(False, ">"))

    def test_unordered_list(self):
        self.assertEqual(is_list_line("- item", 0), ListInfo(True, "-", "item"))
        self.assertEqual(is_list_line("  * nested", 4), ListInfo(True, "*", "nested"))

    def test_ordered_list(self):
        self.assertEqual(is_list_line("3. third", 0), ListInfo(True, "3.", "third"))
        self.assertEqual(is_list_line("2) second", 0), ListInfo(True, "2)", "second"))

    def test_not_list(self):
        self.assertEqual(is_list_line("plain", 0), ListInfo(False, "", "plain"))
        self.assertFalse(is_list_line("-no space", 0).is_list)


class TestCodeBlocks(unittest.TestCase):

    TEXT = "intro\n```\ncode\n```\nafter"

    def test_inside_closed_block(self):
        self.assertEqual(is_in_code_block(self.TEXT, 11), CodeBlockInfo(True, 6, 18, closed=True))

    def test_outside_block(self):
        self.assertFalse(is_in_code_block(self.TEXT, 2).in_code_block)
        self.assertFalse(is_in_code_block(self.TEXT, 21).in_code_block)

    def test_second_block_after_closed_one(self):
        text = self.TEXT + "\n```\nmore"
        info = is_in_code_block(text, len(text))
        self.assertEqual(info, CodeBlockInfo(True, 25, len(text), closed=False))

    def test_unclosed_block(self):
        self.assertEqual(is_in_code_block("```\ncode", 5), CodeBlockInfo(True, 0, 8, closed=False))

    def test_inline_triple_backticks_are_not_blocks(self):
        self.assertFalse(is_in_code_block("use ```x``` here", 7).in_code_block)

    def test_cursor_before_fence(self):
        self.assertFalse(is_in_code_block("```\ncode", 0).in_code_block)


class TestCurrentSlide(unittest.TestCase):

    TEXT = "one\n---\ntwo\n---\nthree"

    def test_slide_numbers(self):
        self.assertEqual(current_slide(self.TEXT, 0), 1)
        self.assertEqual(current_slide(self.TEXT, 9), 2)
        self.assertEqual(current_slide(self.TEXT, len(self.TEXT)), 3)

    def test_separator_must_be_own_line(self):
        self.assertEqual(current_slide("a --- b\n----", 12), 1)


if __name__ == "__main__":
    unittest.main()
