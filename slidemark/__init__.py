"""Slidemark - a Markdown slide deck editor."""

from .editor import DocumentLoadError, EditorSession
from .formatting import EditResult, toggle_formatting
from .history import HistoryState, UndoManager

__all__ = [
    'DocumentLoadError',
    'EditorSession',
    'EditResult',
    'toggle_formatting',
    'HistoryState',
    'UndoManager',
]
