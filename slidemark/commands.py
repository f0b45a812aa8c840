"""Command pattern implementation for editor actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Optional, TYPE_CHECKING

from .blocks import ORDERED, UNORDERED
from .constants import EditorConstants
from .formatting import (
    BOLD,
    INLINE_CODE,
    ITALIC,
    STRIKETHROUGH,
    UNDERLINE,
    FormattingMarkers,
)
from .keyboard import KeyboardHandler, KeyType

if TYPE_CHECKING:
    from .editor import EditorSession
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    description = ""

    @abstractmethod
    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            session: Editor session to act on
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Editing commands report whether the text actually changed."""
        before = session.text
        self._edit(session, key_event)
        return session.text != before

    @abstractmethod
    def _edit(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class ToggleFormattingCommand(EditCommand):
    def __init__(self, markers: FormattingMarkers, description: str):
        self.markers = markers
        self.description = description

    def _edit(self, session, key_event):
        session.toggle_formatting(self.markers.open, self.markers.close)


class HeadingCommand(EditCommand):
    def __init__(self, level: int):
        self.level = level
        self.description = f"Heading {level}"

    def _edit(self, session, key_event):
        session.apply_heading(self.level)


class QuoteCommand(EditCommand):
    description = "Quote"

    def _edit(self, session, key_event):
        session.apply_quote()


class ParagraphCommand(EditCommand):
    description = "Paragraph"

    def _edit(self, session, key_event):
        session.apply_paragraph()


class ListCommand(EditCommand):
    def __init__(self, list_type: str):
        self.list_type = list_type
        self.description = "Ordered list" if list_type == ORDERED else "Bulleted list"

    def _edit(self, session, key_event):
        session.toggle_list(self.list_type)


class CodeBlockCommand(EditCommand):
    description = "Code block"

    def _edit(self, session, key_event):
        session.apply_code_block()


class TableCommand(EditCommand):
    description = "Table"

    def _edit(self, session, key_event):
        session.insert_table(EditorConstants.DEFAULT_TABLE_COLUMNS, EditorConstants.DEFAULT_TABLE_ROWS)


class NewSlideCommand(EditCommand):
    description = "New slide"

    def _edit(self, session, key_event):
        session.insert_new_slide()


class ConfettiCommand(EditCommand):
    description = "Confetti"

    def _edit(self, session, key_event):
        session.insert_confetti()


class NewFileCommand(EditCommand):
    description = "New deck (press twice if unsaved)"

    def _edit(self, session, key_event):
        session.request_new_file()


class UndoCommand(EditCommand):
    description = "Undo"

    def _edit(self, session, key_event):
        session.undo()


class RedoCommand(EditCommand):
    description = "Redo"

    def _edit(self, session, key_event):
        session.redo()


class SystemCommand(EditorCommand):
    """Base class for system commands like save, quit, help."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(session, key_event)
        return False

    @abstractmethod
    def _execute_system(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class SaveCommand(SystemCommand):
    description = "Save"

    def _execute_system(self, session, key_event):
        session.save()


class QuitCommand(SystemCommand):
    description = "Quit"

    def _execute_system(self, session, key_event):
        session.request_quit()


class InsertUrlCommand(SystemCommand):
    """Ask the front end for a URL; the insert happens once it is given."""

    def __init__(self, kind: str, description: str):
        self.kind = kind
        self.description = description

    def _execute_system(self, session, key_event):
        session.request_url(self.kind)


class HelpCommand(SystemCommand):
    description = "Help"

    def _execute_system(self, session, key_event):
        session.help_visible = True


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._key_names: Dict[Tuple[KeyType, str], str] = {}
        self._keyboard = KeyboardHandler()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Undo/redo
        self.register('ctrl+z', UndoCommand())
        self.register('ctrl+y', RedoCommand())
        self.register('ctrl+shift+z', RedoCommand())

        # Inline formatting
        self.register('ctrl+b', ToggleFormattingCommand(BOLD, "Bold"))
        # Many terminals send tab for ctrl+i
        self.register('ctrl+i', ToggleFormattingCommand(ITALIC, "Italic (alt+i if ctrl+i types a tab)"))
        self.register('alt+i', ToggleFormattingCommand(ITALIC, "Italic"))
        self.register('ctrl+u', ToggleFormattingCommand(UNDERLINE, "Underline"))
        self.register('ctrl+shift+s', ToggleFormattingCommand(STRIKETHROUGH, "Strikethrough"))
        self.register('alt+s', ToggleFormattingCommand(STRIKETHROUGH, "Strikethrough"))
        self.register('ctrl+e', ToggleFormattingCommand(INLINE_CODE, "Inline code"))

        # Block formatting
        for level in range(1, 7):
            self.register(f'alt+{level}', HeadingCommand(level))
        self.register('alt+q', QuoteCommand())
        self.register('alt+p', ParagraphCommand())
        self.register('alt+l', ListCommand(UNORDERED))
        self.register('alt+o', ListCommand(ORDERED))
        self.register('alt+c', CodeBlockCommand())
        self.register('alt+t', TableCommand())
        self.register('alt+n', NewSlideCommand())
        self.register('alt+f', ConfettiCommand())

        # Links and images prompt for a URL
        self.register('ctrl+k', InsertUrlCommand("link", "Link"))
        self.register('alt+m', InsertUrlCommand("image", "Image"))

        # System commands
        self.register('ctrl+n', NewFileCommand())
        self.register('ctrl+s', SaveCommand())
        self.register('ctrl+q', QuitCommand())
        self.register('f1', HelpCommand())

    def register(self, key_name: str, command: EditorCommand):
        """Register a command for a key name such as 'ctrl+b'."""
        event = self._keyboard.parse_key(key_name)
        if event is None:
            raise ValueError(f"Invalid key name: {key_name!r}")
        key = (event.key_type, event.value)
        self._commands[key] = command
        self._key_names[key] = key_name

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def key_names(self) -> List[str]:
        """Registered key names in registration order."""
        return list(self._key_names.values())

    def bindings(self) -> List[Tuple[str, str]]:
        """(key name, description) pairs in registration order."""
        return [
            (name, self._commands[key].description)
            for key, name in self._key_names.items()
        ]

    def help_lines(self) -> List[str]:
        """One 'key  description' line per binding."""
        return [
            f"{name:<14}{self._commands[key].description}"
            for key, name in self._key_names.items()
        ]

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        logger.debug(f"{key_event.name} -> {type(command).__name__}")
        return command.execute(session, key_event)

    def execute_key(self, session: 'EditorSession', key_name: str) -> bool:
        """Parse ``key_name`` and execute the bound command, if any."""
        key_event = self._keyboard.parse_key(key_name)
        if key_event is None:
            return False
        return self.execute(session, key_event)
