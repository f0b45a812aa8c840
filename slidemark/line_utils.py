"""Classify the Markdown line (or fenced block) around the cursor."""

import re
from typing import NamedTuple, Optional

from .constants import EditorConstants
from .text_utils import get_line_boundaries

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
QUOTE_RE = re.compile(r"^>\s*(.+)$")
UNORDERED_LIST_RE = re.compile(r"^([-*+])\s+")
ORDERED_LIST_RE = re.compile(r"^(\d+)[.)]\s+")
LIST_MARKER_RE = re.compile(r"^([-*+]|\d+[.)])\s+")
SLIDE_SEPARATOR_RE = re.compile(r"^" + re.escape(EditorConstants.SLIDE_SEPARATOR) + r"$", re.MULTILINE)


class HeadingInfo(NamedTuple):
    is_heading: bool
    level: int
    content: str


class QuoteInfo(NamedTuple):
    is_quote: bool
    content: str


class ListInfo(NamedTuple):
    is_list: bool
    marker: str
    content: str


class CodeBlockInfo(NamedTuple):
    in_code_block: bool
    block_start: Optional[int] = None
    block_end: Optional[int] = None
    closed: bool = False


def is_heading_line(text: str, pos: int) -> HeadingInfo:
    line = get_line_boundaries(text, pos).line
    match = HEADING_RE.match(line)
    if match:
        return HeadingInfo(True, len(match.group(1)), match.group(2).strip())
    return HeadingInfo(False, 0, line.strip())


def is_quote_line(text: str, pos: int) -> QuoteInfo:
    line = get_line_boundaries(text, pos).line
    match = QUOTE_RE.match(line)
    if match:
        return QuoteInfo(True, match.group(1).strip())
    return QuoteInfo(False, line.strip())


def is_list_line(text: str, pos: int) -> ListInfo:
    """Check if the current line is a list item.

    Leading indentation is ignored. ``marker`` is the bullet character for
    unordered items and e.g. ``"3."`` for ordered ones.
    """
    line = get_line_boundaries(text, pos).line.strip()

    match = UNORDERED_LIST_RE.match(line)
    if match:
        return ListInfo(True, match.group(1), line[match.end():])

    match = ORDERED_LIST_RE.match(line)
    if match:
        return ListInfo(True, match.group(0).strip(), line[match.end():])

    return ListInfo(False, "", line)


def is_in_code_block(text: str, pos: int) -> CodeBlockInfo:
    """Check if ``pos`` is inside a fenced code block.

    Fences pair up from the start of the text; the block in question is the
    one opened by an unmatched fence before ``pos``. Without a closing fence
    the block runs to the end of the text. With one, the cursor counts as
    inside only when a newline separates it from either fence, so inline
    ```x``` spans on a single line are not blocks.
    """
    fence = EditorConstants.CODE_FENCE
    pos = max(0, min(pos, len(text)))

    open_index = -1
    search_from = 0
    while True:
        index = text.find(fence, search_from)
        if index == -1 or index + len(fence) > pos:
            break
        close = text.find(fence, index + len(fence))
        if close == -1 or close + len(fence) > pos:
            open_index = index
            break
        search_from = close + len(fence)

    if open_index == -1:
        return CodeBlockInfo(False)

    close_index = text.find(fence, open_index + len(fence))
    if close_index == -1:
        return CodeBlockInfo(True, open_index, len(text), closed=False)

    between_open_and_cursor = text[open_index + len(fence):pos]
    between_cursor_and_close = text[pos:close_index]
    if "\n" in between_open_and_cursor or "\n" in between_cursor_and_close:
        return CodeBlockInfo(True, open_index, close_index + len(fence), closed=True)

    return CodeBlockInfo(False)


def current_slide(text: str, pos: int) -> int:
    """1-based number of the slide containing ``pos``."""
    before_cursor = text[:max(0, pos)]
    return len(SLIDE_SEPARATOR_RE.findall(before_cursor)) + 1
