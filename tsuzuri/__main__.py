"""Tsuzuri CLI entry point.

Allows running via `python -m tsuzuri` and provides the console script
defined in `pyproject.toml`. Prints the pages a text file lays out to.

Usage:
    tsuzuri [--version] [--vertical | --horizontal] [--verbose] [FILE]
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from . import __version__
from .constants import LayoutConstants
from .persistence import get_persistence
from .settings import WritingMode
from .state import EditorState, EditorStore


def page_break_line(page_num: int, total: int) -> str:
    """Create a separator line with the page number centered in it."""
    label = f" {page_num} / {total} "
    return label.center(LayoutConstants.PAGE_BREAK_WIDTH, LayoutConstants.PAGE_BREAK_CHAR)


def read_text_file(filename: str) -> str:
    """Read a plain text document, trimming surrounding whitespace."""
    with open(filename, 'r', encoding='utf-8') as f:
        return f.read().strip()


def main(argv: Optional[List[str]] = None) -> int:
    # Very small arg parsing: flags first, optional filename last
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(__version__)
        return 0

    writing_mode: Optional[WritingMode] = None
    filename: Optional[str] = None
    for arg in args:
        if arg == "--vertical":
            writing_mode = WritingMode.VERTICAL
        elif arg == "--horizontal":
            writing_mode = WritingMode.HORIZONTAL
        elif arg in ("--verbose", "-v"):
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}", file=sys.stderr)
            return 2
        else:
            filename = arg

    persisted = get_persistence().load()
    store = EditorStore(EditorState(content=persisted.content, settings=persisted.settings))

    if filename is not None:
        try:
            store.commit(read_text_file(filename))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Could not read {filename}: {e}", file=sys.stderr)
            return 1

    if writing_mode is not None:
        store.update_settings(writing_mode=writing_mode)

    metrics = store.metrics()
    pages = store.pages()
    print(f"{metrics.characters_per_line} characters x {metrics.lines_per_page} lines per page, "
          f"{len(pages)} page(s)")
    for page_num, page in enumerate(pages, start=1):
        print(page_break_line(page_num, len(pages)))
        print(page)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
