"""Utility functions for text analysis around a cursor position."""

import re
from typing import NamedTuple, Optional

# ASCII word characters plus the Arabic block (Arabic and Persian letters)
_WORD_CHAR_RE = re.compile(r"[A-Za-z0-9_\u0600-\u06FF]")


class WordBoundary(NamedTuple):
    start: int
    end: int


class LineBoundaries(NamedTuple):
    line_start: int
    line_end: int
    line: str


def is_word_char(char: str) -> bool:
    return bool(char) and _WORD_CHAR_RE.fullmatch(char) is not None


def find_word_boundaries(text: str, cursor_pos: int) -> Optional[WordBoundary]:
    """Find the word touching ``cursor_pos``.

    Returns None when the position is out of range or neither the character
    before nor the character after it is a word character.
    """
    if cursor_pos < 0 or cursor_pos > len(text):
        return None

    char_before = text[cursor_pos - 1] if cursor_pos > 0 else " "
    char_after = text[cursor_pos] if cursor_pos < len(text) else " "
    if not is_word_char(char_before) and not is_word_char(char_after):
        return None

    word_start = cursor_pos
    word_end = cursor_pos
    while word_start > 0 and is_word_char(text[word_start - 1]):
        word_start -= 1
    while word_end < len(text) and is_word_char(text[word_end]):
        word_end += 1

    return WordBoundary(word_start, word_end) if word_start < word_end else None


def is_text_formatted(text: str, marker: str, closing: str) -> bool:
    """Check whether ``text`` is already wrapped in ``marker``/``closing``.

    Three checks, in order: the trimmed text is wrapped; the raw text is
    wrapped; or the first marker and last closing enclose non-blank content
    with only whitespace outside them.
    """
    if not text or len(text) < len(marker) + len(closing):
        return False

    trimmed = text.strip()
    if trimmed.startswith(marker) and trimmed.endswith(closing):
        return True

    if text.startswith(marker) and text.endswith(closing):
        return True

    marker_start = text.find(marker)
    closing_end = text.rfind(closing)
    if marker_start != -1 and closing_end != -1 and marker_start < closing_end:
        before_marker = text[:marker_start]
        after_closing = text[closing_end + len(closing):]
        content_between = text[marker_start + len(marker):closing_end]
        if content_between.strip():
            if not before_marker.strip() and not after_closing.strip():
                return True

    return False


def remove_markers(text: str, marker: str, closing: str) -> str:
    """Remove the first ``marker`` and the last ``closing`` from ``text``."""
    marker_start = text.find(marker)
    closing_end = text.rfind(closing)
    if marker_start == -1 or closing_end == -1:
        return text
    if closing_end < marker_start + len(marker):
        # Both markers are the same occurrence; nothing encloses anything
        return text

    before_marker = text[:marker_start]
    between_markers = text[marker_start + len(marker):closing_end]
    after_closing = text[closing_end + len(closing):]
    return before_marker + between_markers + after_closing


def get_line_boundaries(text: str, cursor_pos: int) -> LineBoundaries:
    """Find the line containing ``cursor_pos`` (newline excluded)."""
    cursor_pos = max(0, min(cursor_pos, len(text)))

    line_start = cursor_pos
    while line_start > 0 and text[line_start - 1] != "\n":
        line_start -= 1

    line_end = cursor_pos
    while line_end < len(text) and text[line_end] != "\n":
        line_end += 1

    return LineBoundaries(line_start, line_end, text[line_start:line_end])


def offset_to_location(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset to a (row, column) pair."""
    offset = max(0, min(offset, len(text)))
    row = text.count("\n", 0, offset)
    column = offset - (text.rfind("\n", 0, offset) + 1)
    return (row, column)


def location_to_offset(text: str, location: tuple[int, int]) -> int:
    """Convert a (row, column) pair to a character offset.

    Rows past the end clamp to the end of the text; columns clamp to the
    length of their line.
    """
    row, column = location
    lines = text.split("\n")
    if row < 0:
        return 0
    if row >= len(lines):
        return len(text)
    offset = sum(len(line) + 1 for line in lines[:row])
    return offset + max(0, min(column, len(lines[row])))
