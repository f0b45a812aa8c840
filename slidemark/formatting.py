"""Inline formatting toggles (bold, italic, etc.) on Markdown text.

Every function here is pure: it takes the current text plus a selection and
returns the rewritten text and the selection to show afterwards.
"""

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from .text_utils import (
    WordBoundary,
    find_word_boundaries,
    is_text_formatted,
    remove_markers,
)


class EditResult(NamedTuple):
    """Rewritten text and the selection to restore (start == end for a caret)."""
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class FormattingMarkers:
    open: str
    close: str = ""

    def __post_init__(self):
        if not self.close:
            object.__setattr__(self, "close", self.open)


BOLD = FormattingMarkers("**")
ITALIC = FormattingMarkers("_")
UNDERLINE = FormattingMarkers("<u>", "</u>")
STRIKETHROUGH = FormattingMarkers("~~")
INLINE_CODE = FormattingMarkers("`")


def clamp_selection(text: str, start: int, end: int) -> tuple[int, int]:
    """Clamp both offsets into the text and order them."""
    start = max(0, min(start, len(text)))
    end = max(0, min(end, len(text)))
    if start > end:
        start, end = end, start
    return start, end


def format_selected_text(text: str, start: int, end: int, marker: str, closing: str) -> EditResult:
    """Toggle formatting on a non-empty selection."""
    selected_text = text[start:end]

    before_selection = text[max(0, start - len(marker)):start]
    after_selection = text[end:min(len(text), end + len(closing))]
    formatted_around = before_selection == marker and after_selection == closing

    if formatted_around:
        # Markers sit just outside the selection
        new_start = start - len(marker)
        new_text = text[:new_start] + selected_text + text[end + len(closing):]
        return EditResult(new_text, new_start, new_start + len(selected_text))

    if is_text_formatted(selected_text, marker, closing):
        without_markers = remove_markers(selected_text, marker, closing)
        new_text = text[:start] + without_markers + text[end:]
        return EditResult(new_text, start, start + len(without_markers))

    new_text = text[:start] + marker + selected_text + closing + text[end:]
    new_start = start + len(marker)
    return EditResult(new_text, new_start, new_start + len(selected_text))


def format_empty_selection(
    text: str,
    cursor: int,
    marker: str,
    closing: str,
    word_finder: Callable[[str, int], Optional[WordBoundary]] = find_word_boundaries,
) -> EditResult:
    """Toggle formatting at a bare cursor.

    Adjacent empty markers around the cursor are removed. Otherwise the word
    under the cursor is unwrapped or wrapped, keeping the cursor at the same
    spot inside the word. With no word to act on, an empty marker pair is
    inserted and the cursor placed between the markers.
    """
    before_cursor = text[max(0, cursor - len(marker)):cursor]
    after_cursor = text[cursor:min(len(text), cursor + len(closing))]
    if before_cursor == marker and after_cursor == closing:
        new_pos = cursor - len(marker)
        new_text = text[:new_pos] + text[cursor + len(closing):]
        return EditResult(new_text, new_pos, new_pos)

    bounds = word_finder(text, cursor)
    if bounds:
        word_start, word_end = bounds
        word = text[word_start:word_end]
        offset_in_word = cursor - word_start

        before_word = text[max(0, word_start - len(marker)):word_start]
        after_word = text[word_end:min(len(text), word_end + len(closing))]

        if before_word == marker and after_word == closing:
            new_text = text[:word_start - len(marker)] + word + text[word_end + len(closing):]
            new_pos = word_start - len(marker) + offset_in_word
        else:
            new_text = text[:word_start] + marker + word + closing + text[word_end:]
            new_pos = word_start + len(marker) + offset_in_word
        return EditResult(new_text, new_pos, new_pos)

    new_text = text[:cursor] + marker + closing + text[cursor:]
    new_pos = cursor + len(marker)
    return EditResult(new_text, new_pos, new_pos)


def toggle_formatting(
    text: str,
    start: int,
    end: int,
    marker: str,
    closing: Optional[str] = None,
) -> EditResult:
    """Apply or remove ``marker``/``closing`` around a selection or caret.

    ``closing`` defaults to ``marker``. Never raises: offsets outside the text
    are clamped first.
    """
    closing = closing or marker
    start, end = clamp_selection(text, start, end)
    if start < end:
        return format_selected_text(text, start, end, marker, closing)
    return format_empty_selection(text, start, marker, closing)


def toggle_markers(text: str, start: int, end: int, markers: FormattingMarkers) -> EditResult:
    return toggle_formatting(text, start, end, markers.open, markers.close)
