"""Undo/redo history over full-text snapshots.

The history is a linear list of document snapshots plus a cursor pointing at
the visible one. Every accepted write is one undo step; writing after an undo
discards the redo branch.
"""

import logging
from dataclasses import dataclass, replace
from typing import Union

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryState:
    entries: tuple[str, ...]
    cursor: int = 0
    max_size: int = EditorConstants.MAX_HISTORY_SIZE


@dataclass(frozen=True)
class Add:
    value: str


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class Reset:
    value: str


HistoryAction = Union[Add, Undo, Redo, Reset]


def init_history(initial_value: str, max_size: int = EditorConstants.MAX_HISTORY_SIZE) -> HistoryState:
    return HistoryState(entries=(initial_value,), cursor=0, max_size=max(1, max_size))


def current_value(state: HistoryState) -> str:
    return state.entries[state.cursor]


def can_undo(state: HistoryState) -> bool:
    return state.cursor > 0


def can_redo(state: HistoryState) -> bool:
    return state.cursor < len(state.entries) - 1


def write(state: HistoryState, new_value: str) -> HistoryState:
    """Append a snapshot, dropping any redo branch.

    Writing the value already under the cursor returns ``state`` itself.
    """
    if new_value == current_value(state):
        return state
    entries = state.entries[: state.cursor + 1] + (new_value,)
    cursor = len(entries) - 1
    overflow = len(entries) - state.max_size
    if overflow > 0:
        # Cap history
        entries = entries[overflow:]
        cursor = max(0, cursor - overflow)
        logger.debug(f"History capped at {state.max_size}, dropped {overflow} oldest")
    return replace(state, entries=entries, cursor=cursor)


def undo(state: HistoryState) -> HistoryState:
    if not can_undo(state):
        return state
    return replace(state, cursor=state.cursor - 1)


def redo(state: HistoryState) -> HistoryState:
    if not can_redo(state):
        return state
    return replace(state, cursor=state.cursor + 1)


def reset(state: HistoryState, new_value: str) -> HistoryState:
    return init_history(new_value, state.max_size)


def history_reducer(state: HistoryState, action: HistoryAction) -> HistoryState:
    if isinstance(action, Add):
        return write(state, action.value)
    if isinstance(action, Undo):
        return undo(state)
    if isinstance(action, Redo):
        return redo(state)
    if isinstance(action, Reset):
        return reset(state, action.value)
    return state


class UndoManager:
    """History owned by one editing session.

    Command writes (toolbar/shortcut edits) and typing writes (keystrokes)
    both append one snapshot each. ``is_typing``/``pending_value`` track an
    in-progress typed value so that undo can commit it before stepping back.
    """

    def __init__(self, initial_value: str = "", max_entries: int = EditorConstants.MAX_HISTORY_SIZE):
        self._state = init_history(initial_value, max_entries)
        self.is_typing = False
        self.pending_value = initial_value

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def value(self) -> str:
        return current_value(self._state)

    def can_undo(self) -> bool:
        return can_undo(self._state)

    def can_redo(self) -> bool:
        return can_redo(self._state)

    def apply(self, action: HistoryAction) -> HistoryState:
        self._state = history_reducer(self._state, action)
        return self._state

    def execute_command(self, new_value: str) -> bool:
        """Record a discrete edit. Returns False for a duplicate value."""
        if new_value == self.value:
            return False
        self.is_typing = False
        self.pending_value = new_value
        self.apply(Add(new_value))
        return True

    def handle_change(self, new_value: str) -> bool:
        """Record a keystroke-driven edit as its own undo step."""
        if new_value == self.value:
            return False
        self.is_typing = True
        self.pending_value = new_value
        self.apply(Add(new_value))
        self.is_typing = False
        return True

    def mark_typing(self, new_value: str):
        """Note a typed value that has not been committed yet."""
        self.is_typing = True
        self.pending_value = new_value

    def undo(self) -> bool:
        if self.is_typing and self.pending_value != self.value:
            # Commit what was typed so the undo doesn't lose it
            self.apply(Add(self.pending_value))
            self.is_typing = False
        before = self._state.cursor
        self.apply(Undo())
        return self._state.cursor != before

    def redo(self) -> bool:
        before = self._state.cursor
        self.apply(Redo())
        return self._state.cursor != before

    def reset(self, new_value: str):
        self.is_typing = False
        self.pending_value = new_value
        self.apply(Reset(new_value))
