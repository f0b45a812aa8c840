#!/usr/bin/env python3
"""Slidemark - a Markdown slide deck editor.

Usage:
    python main.py [filename]

Controls:
    Ctrl-B / Ctrl-I / Ctrl-U / Ctrl-E: Bold, italic, underline, inline code
    Alt-1..6: Headings
    Alt-N: New slide
    Ctrl-Z / Ctrl-Y: Undo / redo
    Ctrl-S: Save file
    Ctrl-Q: Quit (press twice if modified)
    F1: List all keys
"""

import sys
from slidemark.textual_app import main as run_app


def main():
    """Entry point for the slide editor."""
    run_app(sys.argv[1] if len(sys.argv) > 1 else None)


if __name__ == "__main__":
    main()
