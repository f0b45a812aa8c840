"""Process-wide session state for the slidemark editor.

Values stored here outlive a single document: loading another file or
starting a new one keeps them.
"""

from typing import Optional, Any


class SessionManager:
    """Singleton key/value store shared by all editor components."""

    _instance: Optional['SessionManager'] = None

    def __new__(cls) -> 'SessionManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._state = {}
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._state[key] = value

    def clear(self) -> None:
        self._state.clear()


class SessionKeys:
    """Constants for session state keys."""

    LAST_SAVE_PATH = "last_save_path"  # Where the last successful save went


def get_session() -> SessionManager:
    return SessionManager()
