"""Slidemark CLI entry point.

Allows running via `python -m slidemark` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys

from .version import get_version_string


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    # Lazy import to avoid importing UI deps for --version
    from .textual_app import main as run_app
    run_app(args[0] if args else None)


if __name__ == "__main__":  # pragma: no cover
    main()
