"""Block-level Markdown edits: headings, quotes, lists, code blocks, inserts.

Like the inline toggles these are pure functions of (text, selection). They
return an ``EditResult`` or None when there is nothing to change.
"""

import re
from typing import Optional

from .constants import EditorConstants
from .formatting import EditResult, clamp_selection
from .line_utils import (
    LIST_MARKER_RE,
    ORDERED_LIST_RE,
    UNORDERED_LIST_RE,
    is_heading_line,
    is_in_code_block,
    is_list_line,
    is_quote_line,
)
from .text_utils import get_line_boundaries

UNORDERED = "unordered"
ORDERED = "ordered"

_EDGE_NEWLINES_RE = re.compile(r"^\n+|\n+$")


def _replace_line(text: str, line_start: int, line_end: int, new_line: str) -> EditResult:
    new_text = text[:line_start] + new_line + text[line_end:]
    new_pos = line_start + len(new_line)
    return EditResult(new_text, new_pos, new_pos)


def _strip_line_prefix(text: str, pos: int, default: str) -> str:
    """Content of the current line without any heading or quote prefix."""
    heading = is_heading_line(text, pos)
    if heading.is_heading:
        return heading.content
    quote = is_quote_line(text, pos)
    if quote.is_quote:
        return quote.content
    return default


def insert_text(text: str, start: int, end: int, before: str, after: str = "", placeholder: str = "") -> EditResult:
    """Surround the selection (or ``placeholder``) with ``before``/``after``.

    The cursor ends up after everything inserted.
    """
    start, end = clamp_selection(text, start, end)
    to_insert = text[start:end] or placeholder
    inserted = before + to_insert + after
    new_text = text[:start] + inserted + text[end:]
    new_pos = start + len(inserted)
    return EditResult(new_text, new_pos, new_pos)


def apply_heading(text: str, start: int, end: int, level: int) -> EditResult:
    """Make the current line a heading of ``level``.

    With no selection, a heading of the same level is toggled off, a heading
    of another level changes level, and a quote becomes a heading.
    """
    level = max(1, min(level, 6))
    start, end = clamp_selection(text, start, end)
    selected_text = text[start:end]
    line_start, line_end, line = get_line_boundaries(text, start)
    prefix = "#" * level

    if selected_text.strip():
        content = _strip_line_prefix(text, start, selected_text.strip())
        return _replace_line(text, line_start, max(line_end, end), f"{prefix} {content}")

    heading = is_heading_line(text, start)
    if heading.is_heading:
        if heading.level == level:
            return _replace_line(text, line_start, line_end, heading.content)
        return _replace_line(text, line_start, line_end, f"{prefix} {heading.content}")

    quote = is_quote_line(text, start)
    if quote.is_quote:
        return _replace_line(text, line_start, line_end, f"{prefix} {quote.content}")

    content = line.strip()
    if content:
        return _replace_line(text, line_start, line_end, f"{prefix} {content}")
    return _replace_line(text, line_start, line_end, f"{prefix} ")


def apply_quote(text: str, start: int, end: int) -> EditResult:
    """Make the current line a blockquote, or toggle an existing quote off."""
    start, end = clamp_selection(text, start, end)
    selected_text = text[start:end]
    line_start, line_end, line = get_line_boundaries(text, start)

    if selected_text.strip():
        content = _strip_line_prefix(text, start, selected_text.strip())
        return _replace_line(text, line_start, max(line_end, end), f"> {content}")

    quote = is_quote_line(text, start)
    if quote.is_quote:
        return _replace_line(text, line_start, line_end, quote.content)

    heading = is_heading_line(text, start)
    if heading.is_heading:
        return _replace_line(text, line_start, line_end, f"> {heading.content}")

    content = line.strip()
    if content:
        return _replace_line(text, line_start, line_end, f"> {content}")
    return _replace_line(text, line_start, line_end, "> ")


def apply_paragraph(text: str, start: int, end: int) -> EditResult:
    """Turn the current line back into a plain paragraph.

    Heading and quote prefixes are dropped. A line at the very start of the
    document gets a blank line in front of it.
    """
    start, end = clamp_selection(text, start, end)
    selected_text = text[start:end]
    line_start, line_end, line = get_line_boundaries(text, start)
    needs_newline_before = line_start == 0 or text[line_start - 1] != "\n"

    if selected_text.strip():
        content = _strip_line_prefix(text, start, selected_text.strip())
        paragraph = ("\n\n" if needs_newline_before else "") + content
        return _replace_line(text, line_start, max(line_end, end), paragraph)

    heading = is_heading_line(text, start)
    if heading.is_heading:
        return _replace_line(text, line_start, line_end, heading.content)

    quote = is_quote_line(text, start)
    if quote.is_quote:
        return _replace_line(text, line_start, line_end, quote.content)

    paragraph = ("\n\n" if needs_newline_before else "") + line
    return _replace_line(text, line_start, line_end, paragraph)


def _list_marker(list_type: str, index: int) -> str:
    return "- " if list_type == UNORDERED else f"{index + 1}. "


def _toggle_selected_lines(text: str, start: int, end: int, list_type: str) -> EditResult:
    lines = text[start:end].split("\n")

    all_lists = True
    all_ordered = True
    all_unordered = True
    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue
        unordered = UNORDERED_LIST_RE.match(trimmed)
        ordered = ORDERED_LIST_RE.match(trimmed)
        if not unordered and not ordered:
            all_lists = all_ordered = all_unordered = False
            break
        if not unordered:
            all_unordered = False
        if not ordered:
            all_ordered = False

    items = []
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed:
            items.append(line)
            continue
        match = LIST_MARKER_RE.match(trimmed)
        content = trimmed[match.end():] if match else trimmed
        if all_lists and all_ordered and list_type == UNORDERED:
            items.append("- " + content)
        elif all_lists and all_unordered and list_type == ORDERED:
            items.append(f"{index + 1}. " + content)
        elif all_lists and ((all_ordered and list_type == ORDERED) or (all_unordered and list_type == UNORDERED)):
            items.append(content)
        else:
            items.append(_list_marker(list_type, index) + content)

    joined = "\n".join(items)
    new_text = text[:start] + joined + text[end:]
    # Keep the list selected
    return EditResult(new_text, start, start + len(joined))


def toggle_list(text: str, start: int, end: int, list_type: str = UNORDERED) -> Optional[EditResult]:
    """Toggle ``list_type`` ("unordered" or "ordered") on the selection or line.

    Lists of the other type are converted, lists of the same type lose their
    markers, anything else gains markers. Returns None when the current line
    is an indented list item, which is left alone.
    """
    start, end = clamp_selection(text, start, end)
    if text[start:end].strip():
        return _toggle_selected_lines(text, start, end, list_type)

    line_start, line_end, line = get_line_boundaries(text, start)

    if not is_list_line(text, start).is_list:
        trimmed = line.strip()
        marker = _list_marker(list_type, 0)
        return _replace_line(text, line_start, line_end, marker + trimmed)

    ordered = ORDERED_LIST_RE.match(line)
    unordered = UNORDERED_LIST_RE.match(line)

    if ordered and list_type == UNORDERED:
        return _replace_line(text, line_start, line_end, "- " + line[ordered.end():].strip())
    if unordered and list_type == ORDERED:
        return _replace_line(text, line_start, line_end, "1. " + line[unordered.end():].strip())

    match = LIST_MARKER_RE.match(line)
    if not match:
        return None
    new_text = text[:line_start] + line[match.end():] + text[line_end:]
    new_pos = max(line_start, start - len(match.group(0)))
    return EditResult(new_text, new_pos, new_pos)


def apply_code_block(text: str, start: int, end: int) -> EditResult:
    """Wrap or unwrap a fenced code block.

    Inside a fenced block the fences are removed. A multi-line selection is
    fenced, a single-line selection becomes inline code, and a bare cursor
    gets an empty fenced block with the cursor on its blank line.
    """
    fence = EditorConstants.CODE_FENCE
    start, end = clamp_selection(text, start, end)
    selected_text = text[start:end]

    block = is_in_code_block(text, start)
    if block.in_code_block:
        content_end = block.block_end - len(fence) if block.closed else block.block_end
        content = _EDGE_NEWLINES_RE.sub("", text[block.block_start + len(fence):content_end])
        new_text = text[:block.block_start] + content + text[block.block_end:]
        new_pos = block.block_start + len(content)
        return EditResult(new_text, new_pos, new_pos)

    if selected_text.strip():
        if "\n" in selected_text:
            wrapped = f"{fence}\n{selected_text}\n{fence}"
        else:
            wrapped = f"`{selected_text}`"
        new_text = text[:start] + wrapped + text[end:]
        new_pos = start + len(wrapped)
        return EditResult(new_text, new_pos, new_pos)

    line_start = get_line_boundaries(text, start).line_start
    prefix = "\n" if start != line_start else ""
    suffix = "\n" if start < len(text) and text[start] != "\n" else ""
    markers = f"{prefix}{fence}\n\n{fence}{suffix}"
    new_text = text[:start] + markers + text[end:]
    new_pos = start + len(prefix) + len(fence) + 1
    return EditResult(new_text, new_pos, new_pos)


def generate_markdown_table(
    columns: int = EditorConstants.DEFAULT_TABLE_COLUMNS,
    rows: int = EditorConstants.DEFAULT_TABLE_ROWS,
) -> str:
    """Build a placeholder Markdown table on lines of its own.

    The table starts and ends with a newline, so text that follows it (such
    as a selection it was inserted in front of) stays off the last row.

    Raises:
        ValueError: if ``columns`` or ``rows`` is outside the supported range.
    """
    if not 0 < columns <= EditorConstants.MAX_TABLE_COLUMNS:
        raise ValueError(f"Columns must be between 1 and {EditorConstants.MAX_TABLE_COLUMNS}")
    if not 0 < rows <= EditorConstants.MAX_TABLE_ROWS:
        raise ValueError(f"Rows must be between 1 and {EditorConstants.MAX_TABLE_ROWS}")

    width = EditorConstants.TABLE_CELL_WIDTH

    def row_text(cells):
        return "| " + " | ".join(cell.ljust(width) for cell in cells) + " |"

    header = row_text(f"Header {i + 1}" for i in range(columns))
    separator = "| " + " | ".join("-" * width for _ in range(columns)) + " |"
    data_rows = [
        row_text(f"Cell {row * columns + i + 1}" for i in range(columns))
        for row in range(rows)
    ]
    return "\n" + "\n".join([header, separator, *data_rows]) + "\n"


def insert_link(text: str, start: int, end: int, url: str, link_text: str = "") -> EditResult:
    return insert_text(text, start, end, "[", f"]({url})", link_text.strip() or url)


def insert_image(text: str, start: int, end: int, url: str, alt_text: str = "") -> EditResult:
    return insert_text(text, start, end, "![", f"]({url})", alt_text.strip() or "image")


def insert_table(text: str, start: int, end: int, columns: int, rows: int) -> EditResult:
    return insert_text(text, start, end, generate_markdown_table(columns, rows))


def insert_new_slide(text: str, start: int, end: int) -> EditResult:
    return insert_text(text, start, end, EditorConstants.NEW_SLIDE_TEXT)


def insert_confetti(text: str, start: int, end: int) -> EditResult:
    return insert_text(text, start, end, EditorConstants.CONFETTI_TEXT)
