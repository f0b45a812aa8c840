"""Tests for the editor session: edits, history, quitting and files."""

import errno
import os
import tempfile
from unittest.mock import patch

import pytest

from slidemark.constants import EditorConstants
from slidemark.editor import DocumentLoadError, EditorSession
from slidemark.session import SessionKeys, get_session


@pytest.fixture(autouse=True)
def clean_session():
    get_session().clear()
    yield
    get_session().clear()


@pytest.fixture
def tmpdir_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


class TestEditing:

    def test_toggle_formatting_updates_text_and_selection(self):
        session = EditorSession("hello world")
        session.set_selection(2)
        assert session.toggle_formatting("**")
        assert session.text == "**hello** world"
        assert session.selection == (4, 4)
        assert session.modified

    def test_formatting_suppressed_in_code_block(self):
        session = EditorSession("```\ncode\n```")
        session.set_selection(5)
        assert not session.toggle_formatting("**")
        assert session.text == "```\ncode\n```"
        assert session.status_message == EditorConstants.CODE_BLOCK_FORMATTING_MESSAGE

    def test_block_operations_share_history(self):
        session = EditorSession("Title")
        session.apply_heading(1)
        session.apply_quote()
        assert session.text == "> Title"
        session.undo()
        assert session.text == "# Title"
        session.undo()
        assert session.text == "Title"

    def test_toggle_list_noop_on_indented_item(self):
        session = EditorSession("  - item")
        session.set_selection(4)
        assert not session.toggle_list()
        assert not session.can_undo

    def test_insertions(self):
        session = EditorSession("")
        session.insert_link("https://example.com", "site")
        assert session.text == "[site](https://example.com)"
        session.insert_image("cat.png")
        assert session.text.endswith("![image](cat.png)")
        session.insert_confetti()
        assert session.text.endswith(EditorConstants.CONFETTI_TEXT)
        assert session.selection == (len(session.text), len(session.text))

    def test_insert_text_with_placeholder(self):
        session = EditorSession("ab")
        session.set_selection(1)
        session.insert_text("<", ">", "x")
        assert session.text == "a<x>b"

    def test_invalid_table_reports_error(self):
        session = EditorSession("")
        assert not session.insert_table(0, 2)
        assert session.status_message.startswith("Error:")
        assert session.text == ""

    def test_code_block(self):
        session = EditorSession("")
        session.apply_code_block()
        assert session.text == "```\n\n```"
        session.apply_code_block()
        assert session.text == ""

    def test_selection_is_clamped(self):
        session = EditorSession("abc")
        session.set_selection(10, -2)
        assert session.selection == (0, 3)


class TestTyping:

    def test_each_change_is_an_undo_step(self):
        session = EditorSession("")
        for text in ("h", "hi", "hi!"):
            session.handle_change(text, len(text))
        session.undo()
        assert session.text == "hi"
        assert session.selection == (2, 2)

    def test_duplicate_change_is_ignored(self):
        session = EditorSession("same")
        assert not session.handle_change("same", 2)
        assert not session.modified
        assert session.selection == (2, 2)

    def test_editing_slide_follows_cursor(self):
        session = EditorSession("")
        session.handle_change("a\n---\nb", 7)
        assert session.editing_slide == 2
        session.set_selection(0)
        assert session.editing_slide == 1


class TestHistoryMessages:

    def test_undo_redo_status(self):
        session = EditorSession("x")
        assert not session.undo()
        assert session.status_message == "Nothing to undo"
        assert not session.redo()
        assert session.status_message == "Nothing to redo"

        session.insert_new_slide()
        assert session.undo()
        assert session.status_message == "Undone"
        assert session.redo()
        assert session.status_message == "Redone"


class TestQuit:

    def test_quit_unmodified(self):
        session = EditorSession("x")
        session.request_quit()
        assert not session.running

    def test_quit_modified_needs_second_request(self):
        session = EditorSession("x")
        session.handle_change("xy")
        session.request_quit()
        assert session.running
        assert session.status_message == EditorConstants.QUIT_CONFIRM_MESSAGE
        session.request_quit()
        assert not session.running

    def test_edit_cancels_pending_quit(self):
        session = EditorSession("x")
        session.handle_change("xy")
        session.request_quit()
        session.handle_change("xyz")
        session.request_quit()
        assert session.running


class TestNewFile:

    def test_unmodified_document_clears_at_once(self):
        session = EditorSession("content")
        assert session.request_new_file()
        assert session.text == ""

    def test_unsaved_changes_need_second_request(self):
        session = EditorSession("content")
        session.handle_change("content!")
        assert not session.request_new_file()
        assert session.text == "content!"
        assert session.status_message == EditorConstants.NEW_FILE_CONFIRM_MESSAGE
        assert session.request_new_file()
        assert session.text == ""

    def test_quit_request_does_not_confirm_new_file(self):
        session = EditorSession("content")
        session.handle_change("content!")
        session.request_quit()
        assert not session.request_new_file()
        assert session.running


class TestUrlRequests:

    def test_link(self):
        session = EditorSession("see here")
        session.set_selection(4, 8)
        session.request_url("link")
        assert session.url_request == "link"
        assert session.complete_url_request(" https://example.com ")
        assert session.text == "see [here](https://example.com)"
        assert session.url_request is None

    def test_image(self):
        session = EditorSession("")
        session.request_url("image")
        assert session.complete_url_request("cat.png")
        assert session.text == "![image](cat.png)"

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_cancelled(self, url):
        session = EditorSession("text")
        session.request_url("link")
        assert not session.complete_url_request(url)
        assert session.text == "text"
        assert session.url_request is None

    def test_nothing_pending(self):
        session = EditorSession("text")
        assert not session.complete_url_request("https://example.com")


class TestFiles:

    def test_save_and_load(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "deck.md")
        session = EditorSession("# Slide 1\n---\n# Slide 2")
        assert session.save_file(path)
        assert session.filename == path
        assert not session.modified
        assert session.status_message == f"Saved to {path}"
        assert get_session().get(SessionKeys.LAST_SAVE_PATH) == os.path.abspath(path)

        other = EditorSession()
        other.load_file(path)
        assert other.text == "# Slide 1\n---\n# Slide 2"
        assert not other.can_undo

    def test_save_leaves_no_temp_files(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "deck.md")
        EditorSession("text").save_file(path)
        assert os.listdir(tmpdir_path) == ["deck.md"]

    def test_load_missing_file(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "new.md")
        session = EditorSession("old text")
        session.load_file(path)
        assert session.text == ""
        assert session.filename == path
        assert session.status_message == f"New file {path}"

    def test_load_unreadable_file(self, tmpdir_path):
        session = EditorSession()
        with pytest.raises(DocumentLoadError):
            session.load_file(tmpdir_path)

    def test_load_invalid_utf8(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "bad.md")
        with open(path, 'wb') as f:
            f.write(b"\xff\xfe\xfa")
        with pytest.raises(DocumentLoadError):
            EditorSession().load_file(path)

    def test_permission_denied(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "deck.md")
        session = EditorSession("text")
        session.handle_change("text!")
        with patch('slidemark.autosave.tempfile.NamedTemporaryFile', side_effect=PermissionError("denied")):
            assert not session.save_file(path)
        assert session.status_message == f"Error: Permission denied saving {path}"
        assert session.modified
        assert session.filename is None

    def test_disk_full(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "deck.md")
        session = EditorSession("text")
        error = OSError(errno.ENOSPC, "No space left on device")
        with patch('slidemark.autosave.os.replace', side_effect=error):
            assert not session.save_file(path)
        assert session.status_message == "Error: No space left on device"
        assert os.listdir(tmpdir_path) == []

    def test_other_save_error(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "missing-dir", "deck.md")
        session = EditorSession("text")
        assert not session.save_file(path)
        assert session.status_message == f"Error: Cannot save to {path}"

    def test_save_uses_default_path(self, tmpdir_path):
        get_session().set(SessionKeys.LAST_SAVE_PATH, os.path.join(tmpdir_path, "earlier.md"))
        session = EditorSession("text")
        assert session.default_save_path() == os.path.join(tmpdir_path, EditorConstants.DEFAULT_FILENAME)
        assert session.save()
        assert os.path.exists(os.path.join(tmpdir_path, EditorConstants.DEFAULT_FILENAME))

    def test_default_path_without_history(self):
        assert EditorSession().default_save_path() == EditorConstants.DEFAULT_FILENAME

    def test_new_file_is_undoable(self, tmpdir_path):
        path = os.path.join(tmpdir_path, "deck.md")
        session = EditorSession("content")
        session.save_file(path)
        session.new_file()
        assert session.text == ""
        assert session.filename == path
        session.undo()
        assert session.text == "content"
