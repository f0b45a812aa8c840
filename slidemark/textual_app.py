"""Textual front end for the editor session."""

import logging
import sys
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Label, TextArea
from textual.widgets.text_area import Selection

from .commands import CommandRegistry
from .constants import EditorConstants
from .editor import DocumentLoadError, EditorSession
from .settings_persistence import get_persistence
from .text_utils import location_to_offset, offset_to_location

logger = logging.getLogger(__name__)

# Shown in the footer; everything else is listed under F1
_FOOTER_KEYS = {'ctrl+s', 'ctrl+q', 'f1'}


def _command_bindings() -> list:
    registry = CommandRegistry()
    bindings = []
    for key_name, description in registry.bindings():
        bindings.append(Binding(
            key_name,
            f"command({key_name!r})",
            description,
            show=key_name in _FOOTER_KEYS,
            priority=True,
        ))
    return bindings


class UrlPrompt(ModalScreen):
    """Small dialog that returns the typed URL, or None when cancelled."""

    DEFAULT_CSS = """
    UrlPrompt {
        align: center middle;
    }
    UrlPrompt > Vertical {
        width: 60;
        height: auto;
        border: round $accent;
        background: $surface;
        padding: 1 2;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, title: str):
        super().__init__()
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.title_text)
            yield Input(placeholder="https://")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class SlidemarkApp(App):
    """Markdown slide editor: a TextArea driven by an EditorSession."""

    TITLE = "slidemark"

    CSS = """
    TextArea {
        background: $surface;
        border: none;
        scrollbar-size: 1 1;
    }
    """

    BINDINGS = _command_bindings()

    def __init__(self, session: Optional[EditorSession] = None):
        super().__init__()
        self.session = session or EditorSession(persistence=get_persistence())
        self.text_area: Optional[TextArea] = None

    @property
    def filename(self) -> Optional[str]:
        return self.session.filename

    def compose(self) -> ComposeResult:
        yield Header()
        self.text_area = TextArea(soft_wrap=True)
        yield self.text_area
        yield Footer()

    def on_mount(self) -> None:
        self._push_to_text_area()
        self._report_status()
        self.set_interval(EditorConstants.AUTOSAVE_INTERVAL, self.session.autosave)
        self.text_area.focus()

    # --- TextArea -> session ---

    def _selection_offsets(self) -> tuple[int, int]:
        text = self.text_area.text
        start, end = self.text_area.selection
        return (location_to_offset(text, start), location_to_offset(text, end))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        _, cursor = self._selection_offsets()
        self.session.handle_change(event.text_area.text, cursor)
        self._update_subtitle()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if event.text_area.text != self.session.text:
            # The matching Changed message has not arrived yet
            return
        self.session.set_selection(*self._selection_offsets())
        self._update_subtitle()

    # --- session -> TextArea ---

    def _push_to_text_area(self) -> None:
        text = self.session.text
        if self.text_area.text != text:
            self.text_area.load_text(text)
        start, end = self.session.selection
        self.text_area.selection = Selection(
            offset_to_location(text, start),
            offset_to_location(text, end),
        )
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        name = self.session.filename or "untitled"
        marker = " *" if self.session.modified else ""
        self.sub_title = f"{name}{marker} | slide {self.session.editing_slide}"

    def _report_status(self) -> None:
        message = self.session.status_message
        if message:
            severity = "error" if message.startswith("Error") else "information"
            self.notify(message, severity=severity)
            self.session.status_message = None

    # --- Actions ---

    def action_command(self, key_name: str) -> None:
        """Run the editor command bound to ``key_name``."""
        if isinstance(self.screen, UrlPrompt):
            # Keys go to the URL input while it is open
            return
        # Pick up any selection change the TextArea has not reported yet
        if self.text_area.text == self.session.text:
            self.session.set_selection(*self._selection_offsets())
        else:
            self.session.handle_change(self.text_area.text, self._selection_offsets()[1])

        self.session.execute_key(key_name)
        self._push_to_text_area()

        if self.session.help_visible:
            self.notify(self.session.help_text(), title="Keys", timeout=15)
            self.session.help_visible = False
        self._report_status()
        if self.session.url_request:
            title = "Image URL" if self.session.url_request == "image" else "Link URL"
            self.push_screen(UrlPrompt(title), self._on_url_entered)
        if not self.session.running:
            self.exit()

    def _on_url_entered(self, url: Optional[str]) -> None:
        self.session.complete_url_request(url)
        self._push_to_text_area()
        self._report_status()
        self.text_area.focus()


def main(filename: Optional[str] = None):
    """Load ``filename`` (if given) and run the Textual app."""
    session = EditorSession(persistence=get_persistence())
    if filename:
        try:
            session.load_file(filename)
        except DocumentLoadError as e:
            print(f"Error loading file: {e}")
            sys.exit(1)
    app = SlidemarkApp(session=session)
    app.run()
    session.close()
