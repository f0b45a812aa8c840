"""Editor session controller for the Markdown slide editor.

The session owns the document text (through its undo history), the current
selection, and the file the document belongs to. User interfaces feed it
keystroke edits and key commands and read back the text and selection.
"""

import errno
import logging
import os
from typing import Optional

from . import blocks
from .autosave import atomic_write_text, delete_swap_file, read_swap_file, write_swap_file
from .blocks import UNORDERED
from .commands import CommandRegistry
from .constants import EditorConstants
from .formatting import EditResult, clamp_selection, toggle_formatting
from .history import UndoManager
from .line_utils import current_slide, is_in_code_block
from .session import SessionKeys, get_session
from .settings_persistence import SettingKeys, SettingsPersistence

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when an existing document cannot be read."""


class EditorSession:
    """One open document and everything needed to edit it."""

    def __init__(
        self,
        text: str = "",
        max_history_size: int = EditorConstants.MAX_HISTORY_SIZE,
        persistence: Optional[SettingsPersistence] = None,
    ):
        self.history = UndoManager(text, max_history_size)
        self.command_registry = CommandRegistry()
        self.persistence = persistence  # None disables per-document settings
        self.selection_start = 0
        self.selection_end = 0
        self.editing_slide = 1
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.help_visible = False
        self.running = True
        self.url_request: Optional[str] = None  # "link" or "image" while waiting for a URL
        self._pending_confirmation: Optional[str] = None

    # --- State ---

    @property
    def text(self) -> str:
        return self.history.value

    @property
    def selection(self) -> tuple[int, int]:
        return (self.selection_start, self.selection_end)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo()

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo()

    def set_selection(self, start: int, end: Optional[int] = None):
        """Move the selection (or caret when ``end`` is omitted)."""
        if end is None:
            end = start
        self.selection_start, self.selection_end = clamp_selection(self.text, start, end)
        self.editing_slide = current_slide(self.text, self.selection_start)

    def _mark_modified(self):
        self.modified = True
        self._pending_confirmation = None

    def _confirm_discard(self, action: str, message: str) -> bool:
        """True once it is fine to throw away unsaved changes for ``action``.

        With unsaved changes the first request only sets ``message``; asking
        for the same action again, with no edit in between, confirms it.
        """
        if not self.modified or self._pending_confirmation == action:
            self._pending_confirmation = None
            return True
        self._pending_confirmation = action
        self.status_message = message
        return False

    # --- Write paths ---

    def handle_change(self, new_text: str, cursor: Optional[int] = None) -> bool:
        """Typing path: record raw text input as one undo step.

        Returns:
            True if the text changed
        """
        changed = self.history.handle_change(new_text)
        if changed:
            self._mark_modified()
        if cursor is not None:
            self.set_selection(cursor)
        else:
            self.set_selection(self.selection_start, self.selection_end)
        return changed

    def apply_result(self, result: Optional[EditResult]) -> bool:
        """Command path: commit a computed edit and its selection."""
        if result is None:
            return False
        changed = self.history.execute_command(result.text)
        if changed:
            self._mark_modified()
        self.set_selection(result.start, result.end)
        return changed

    # --- Formatting ---

    def toggle_formatting(self, marker: str, closing: Optional[str] = None) -> bool:
        start, end = self.selection
        if is_in_code_block(self.text, start).in_code_block:
            self.status_message = EditorConstants.CODE_BLOCK_FORMATTING_MESSAGE
            return False
        return self.apply_result(toggle_formatting(self.text, start, end, marker, closing))

    def apply_heading(self, level: int) -> bool:
        return self.apply_result(blocks.apply_heading(self.text, *self.selection, level))

    def apply_quote(self) -> bool:
        return self.apply_result(blocks.apply_quote(self.text, *self.selection))

    def apply_paragraph(self) -> bool:
        return self.apply_result(blocks.apply_paragraph(self.text, *self.selection))

    def toggle_list(self, list_type: str = UNORDERED) -> bool:
        return self.apply_result(blocks.toggle_list(self.text, *self.selection, list_type))

    def apply_code_block(self) -> bool:
        return self.apply_result(blocks.apply_code_block(self.text, *self.selection))

    # --- Insertion ---

    def insert_text(self, before: str, after: str = "", placeholder: str = "") -> bool:
        return self.apply_result(blocks.insert_text(self.text, *self.selection, before, after, placeholder))

    def insert_link(self, url: str, link_text: str = "") -> bool:
        return self.apply_result(blocks.insert_link(self.text, *self.selection, url, link_text))

    def insert_image(self, url: str, alt_text: str = "") -> bool:
        return self.apply_result(blocks.insert_image(self.text, *self.selection, url, alt_text))

    def request_url(self, kind: str):
        """Ask the front end for a URL to insert as a ``kind`` (link or image)."""
        self.url_request = kind

    def complete_url_request(self, url: Optional[str]) -> bool:
        """Insert the pending link or image; a blank or None URL cancels."""
        kind, self.url_request = self.url_request, None
        url = (url or "").strip()
        if not url or kind is None:
            return False
        if kind == "image":
            return self.insert_image(url)
        return self.insert_link(url)

    def insert_table(self, columns: int, rows: int) -> bool:
        try:
            result = blocks.insert_table(self.text, *self.selection, columns, rows)
        except ValueError as e:
            self.status_message = f"Error: {e}"
            return False
        return self.apply_result(result)

    def insert_new_slide(self) -> bool:
        return self.apply_result(blocks.insert_new_slide(self.text, *self.selection))

    def insert_confetti(self) -> bool:
        return self.apply_result(blocks.insert_confetti(self.text, *self.selection))

    # --- History ---

    def undo(self) -> bool:
        if self.history.undo():
            self._mark_modified()
            self.set_selection(self.selection_start, self.selection_end)
            self.status_message = "Undone"
            return True
        self.status_message = "Nothing to undo"
        return False

    def redo(self) -> bool:
        if self.history.redo():
            self._mark_modified()
            self.set_selection(self.selection_start, self.selection_end)
            self.status_message = "Redone"
            return True
        self.status_message = "Nothing to redo"
        return False

    # --- Commands ---

    def execute_key(self, key_name: str) -> bool:
        """Run the command bound to ``key_name``; True if the text changed."""
        return self.command_registry.execute_key(self, key_name)

    def help_text(self) -> str:
        return "\n".join(self.command_registry.help_lines())

    def request_quit(self):
        """Quit, asking for a second request if there are unsaved changes."""
        if not self._confirm_discard("quit", EditorConstants.QUIT_CONFIRM_MESSAGE):
            return
        self.close()
        self.running = False

    # --- Files ---

    def new_file(self) -> bool:
        """Clear the document. Undoable, and the filename is kept."""
        return self.apply_result(EditResult("", 0, 0))

    def request_new_file(self) -> bool:
        """Clear the document, asking twice if there are unsaved changes."""
        if not self._confirm_discard("new", EditorConstants.NEW_FILE_CONFIRM_MESSAGE):
            return False
        return self.new_file()

    def load_file(self, filename: str):
        """Load a document, replacing the history.

        A missing file starts an empty document under that name. If a swap
        file with different content exists, it is applied as an undoable
        edit on top of the file contents.

        Raises:
            DocumentLoadError: if the file exists but cannot be read
        """
        self._save_document_settings()
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            content = ""
            self.status_message = f"New file {filename}"
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(f"Cannot read {filename}: {e}") from e

        settings = self.persistence.load_settings(filename) if self.persistence else {}
        max_size = settings.get(SettingKeys.MAX_HISTORY_SIZE)
        if max_size and max_size != self.history.state.max_size:
            self.history = UndoManager(content, max_size)
        else:
            self.history.reset(content)

        self.filename = filename
        self.modified = False
        self._pending_confirmation = None
        self.url_request = None
        self.set_selection(settings.get(SettingKeys.CURSOR) or 0)
        logger.info(f"Loaded {filename} ({len(content)} chars)")

        recovered = read_swap_file(filename)
        if recovered is not None and recovered.text != content:
            self.apply_result(EditResult(recovered.text, recovered.cursor, recovered.cursor))
            self.status_message = "Recovered unsaved changes from swap file"
            logger.info(f"Recovered swap file for {filename}")

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Returns:
            True if save succeeded, False otherwise (see status_message)
        """
        try:
            atomic_write_text(filename, self.text, suffix=os.path.splitext(filename)[1])
        except PermissionError:
            self.status_message = f"Error: Permission denied saving {filename}"
            return False
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self.status_message = "Error: No space left on device"
            else:
                self.status_message = f"Error: Cannot save to {filename}"
            logger.warning(f"Saving {filename} failed: {e}")
            return False

        if self.filename and self.filename != filename:
            delete_swap_file(self.filename)
        self.filename = filename
        self.modified = False
        self._pending_confirmation = None
        delete_swap_file(filename)
        get_session().set(SessionKeys.LAST_SAVE_PATH, os.path.abspath(filename))
        self._save_document_settings()
        self.status_message = f"Saved to {filename}"
        return True

    def default_save_path(self) -> str:
        """Where an unnamed document goes: next to the last save, or the cwd."""
        last = get_session().get(SessionKeys.LAST_SAVE_PATH)
        if last:
            return os.path.join(os.path.dirname(last), EditorConstants.DEFAULT_FILENAME)
        return EditorConstants.DEFAULT_FILENAME

    def save(self) -> bool:
        return self.save_file(self.filename or self.default_save_path())

    def autosave(self) -> bool:
        """Write the swap file if there are unsaved changes."""
        if not self.filename or not self.modified:
            return False
        return write_swap_file(self.filename, self.text, self.selection_start)

    def close(self):
        """Forget the swap file and remember where the user was."""
        if self.filename:
            delete_swap_file(self.filename)
        self._save_document_settings()

    def _save_document_settings(self):
        if self.persistence is None or not self.filename:
            return
        self.persistence.save_settings(self.filename, {
            SettingKeys.CURSOR: self.selection_start,
            SettingKeys.MAX_HISTORY_SIZE: self.history.state.max_size,
        })
