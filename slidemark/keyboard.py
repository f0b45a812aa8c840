"""Keyboard input handling using Textual-style key names."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    CTRL_SHIFT = "ctrl_shift"  # Ctrl + Shift + key, e.g. redo
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'z', 'enter', 'f1')
    raw: str  # The key name as received
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False

    @property
    def name(self) -> str:
        """Canonical key name, e.g. 'ctrl+shift+z'."""
        mods = []
        if self.is_ctrl:
            mods.append("ctrl")
        if self.is_alt:
            mods.append("alt")
        if self.is_shift and self.key_type != KeyType.REGULAR:
            mods.append("shift")
        return "+".join(mods + [self.value])


class KeyboardHandler:
    """Maps key names to KeyEvents."""

    SPECIAL_KEYS = {
        'enter', 'escape', 'tab', 'backspace', 'delete', 'space',
        'up', 'down', 'left', 'right', 'home', 'end', 'pageup', 'pagedown',
        'insert', *(f'f{n}' for n in range(1, 13)),
    }

    # Aliases seen from different terminals
    ALIASES = {
        'esc': 'escape',
        'return': 'enter',
        'page_up': 'pageup',
        'page_down': 'pagedown',
        'meta': 'alt',
        'option': 'alt',
        'control': 'ctrl',
    }

    def parse_key(self, key: str) -> Optional[KeyEvent]:
        """Parse a key name such as 'ctrl+b', 'alt+1' or 'a' into a KeyEvent.

        Args:
            key: Key name; modifiers are joined with '+' (or '-')

        Returns:
            Parsed KeyEvent, or None for an empty name
        """
        if not key:
            return None
        raw = key

        # A lone '+' or '-' is a regular character, not a separator
        if len(key) == 1:
            return KeyEvent(key_type=KeyType.REGULAR, value=key, raw=raw,
                            is_shift=key.isupper())

        normalized = key.replace('-', '+')
        parts = [self.ALIASES.get(p.lower(), p.lower()) for p in normalized.split('+') if p]
        if not parts:
            return None
        base = parts[-1]
        mods = set(parts[:-1])

        is_ctrl = 'ctrl' in mods
        is_alt = 'alt' in mods
        is_shift = 'shift' in mods

        if is_ctrl and is_shift:
            key_type = KeyType.CTRL_SHIFT
        elif is_ctrl:
            key_type = KeyType.CTRL
        elif is_alt:
            key_type = KeyType.ALT
        elif base in self.SPECIAL_KEYS:
            key_type = KeyType.SPECIAL
        else:
            key_type = KeyType.REGULAR

        return KeyEvent(
            key_type=key_type,
            value=base,
            raw=raw,
            is_alt=is_alt,
            is_ctrl=is_ctrl,
            is_shift=is_shift,
        )
