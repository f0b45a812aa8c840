"""Constants and configuration for the slidemark editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # History
    MAX_HISTORY_SIZE = 500  # Snapshots kept; each one is a full copy of the document

    # Slides
    SLIDE_SEPARATOR = "---"  # A line holding only this starts a new slide
    NEW_SLIDE_TEXT = "\n---\n"
    CONFETTI_TEXT = "\n<!-- confetti -->\n"

    # Tables
    TABLE_CELL_WIDTH = 12
    DEFAULT_TABLE_COLUMNS = 3
    DEFAULT_TABLE_ROWS = 2
    MAX_TABLE_COLUMNS = 10
    MAX_TABLE_ROWS = 20

    # Code fences
    CODE_FENCE = "```"

    # File operations
    DEFAULT_FILENAME = "content.md"  # Used when saving an unnamed document

    # Autosave
    AUTOSAVE_INTERVAL = 30.0  # Seconds between swap file writes
    AUTOSAVE_SWAP_PREFIX = "."  # Swap file for notes.md is .notes.md.swp
    AUTOSAVE_SWAP_SUFFIX = ".swp"

    # Status messages
    CODE_BLOCK_FORMATTING_MESSAGE = "Formatting is disabled inside code blocks"
    QUIT_CONFIRM_MESSAGE = "Unsaved changes! Press Ctrl-Q again to quit"
    NEW_FILE_CONFIRM_MESSAGE = "Unsaved changes! Press Ctrl-N again to start a new deck"
