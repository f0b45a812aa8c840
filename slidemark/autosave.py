"""Swap files that protect unsaved slide decks.

While a deck has unsaved changes it is periodically written next to the
document as ``.<name>.swp``: a small JSON object holding the text and the
cursor offset, so a recovered deck reopens where the user was typing. The
swap file is removed on a clean save or exit.
"""

import json
import logging
import os
import tempfile
from typing import NamedTuple, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class SwapContents(NamedTuple):
    text: str
    cursor: int = 0


def atomic_write_text(path: str, text: str, suffix: str = "") -> None:
    """Write ``text`` to ``path`` through a temp file in the same directory.

    Raises:
        OSError: if the temp file cannot be written or renamed; the temp
            file is removed first.
    """
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                         dir=os.path.dirname(path) or '.',
                                         suffix=suffix, delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, path)
    except OSError:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temp file {temp_filename}: {cleanup_error}")
        raise


def get_swap_path(filename: str) -> str:
    """Swap file path for a document: /a/deck.md -> /a/.deck.md.swp"""
    head, tail = os.path.split(filename)
    name = f"{EditorConstants.AUTOSAVE_SWAP_PREFIX}{tail}{EditorConstants.AUTOSAVE_SWAP_SUFFIX}"
    return os.path.join(head or '.', name)


def write_swap_file(filename: str, text: str, cursor: int = 0) -> bool:
    """Save ``text`` and ``cursor`` as the swap file of ``filename``.

    Returns:
        True if the swap file was written.
    """
    swap_path = get_swap_path(filename)
    payload = json.dumps({"text": text, "cursor": cursor})
    try:
        atomic_write_text(swap_path, payload, suffix='.swp.tmp')
    except OSError as e:
        logger.warning(f"Could not write swap file {swap_path}: {e}")
        return False
    return True


def read_swap_file(filename: str) -> Optional[SwapContents]:
    """Contents of the swap file, or None if it is missing or unusable."""
    swap_path = get_swap_path(filename)
    try:
        with open(swap_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read swap file {swap_path}: {e}")
        return None

    if not isinstance(data, dict) or not isinstance(data.get("text"), str):
        logger.warning(f"Swap file {swap_path} has invalid format, ignoring")
        return None
    cursor = data.get("cursor")
    if not isinstance(cursor, int) or isinstance(cursor, bool) or cursor < 0:
        cursor = 0
    return SwapContents(data["text"], cursor)


def delete_swap_file(filename: str) -> None:
    swap_path = get_swap_path(filename)
    try:
        os.remove(swap_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not delete swap file {swap_path}: {e}")
