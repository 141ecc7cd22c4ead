"""Document paginator - splits the text buffer into page-sized chunks.

Pages are a derived view of the content: they are recomputed from the text
and the page metrics on every render and never stored. Joining the pages
with no separator gives back the content, except that a source line break
which falls exactly on a page boundary is not carried into the pages, and
blank lines collapse into a single line break.
"""

import math
from typing import Any, List, Sequence

from .metrics import PageMetrics, metrics_for


class Paginator:
    """Greedily packs text into pages of a fixed character grid."""

    def __init__(self, content: str, metrics: PageMetrics):
        """Initialize paginator with document content.

        Args:
            content: Raw document text; explicit newlines are hard row breaks.
            metrics: Grid capacity of one page. Both values must be >= 1.
        """
        self.content = content
        self.chars_per_line = metrics.characters_per_line
        self.lines_per_page = metrics.lines_per_page
        self.pages: List[str] = []

    def format_pages(self) -> List[str]:
        """Split the content into pages.

        Returns:
            Non-empty list of page strings. Empty content yields a single
            empty page.
        """
        if not self.content:
            self.pages = [""]
            return self.pages

        pages: List[str] = []
        current_text = ""
        current_rows = 0

        for line_index, line in enumerate(self.content.split("\n")):
            remaining = line
            first_chunk = True

            while remaining or not line:
                rows_available = self.lines_per_page - current_rows
                chars_available = rows_available * self.chars_per_line

                if chars_available <= 0:
                    # Page full: start a new one and retry the same line
                    if current_text:
                        pages.append(current_text)
                    current_text = ""
                    current_rows = 0
                    continue

                chunk = remaining[:chars_available]
                chunk_rows = math.ceil(max(1, len(chunk)) / self.chars_per_line)

                # Keep the source line break when it falls inside a page
                if (first_chunk and line_index > 0 and current_text
                        and not current_text.endswith("\n")):
                    current_text += "\n"

                current_text += chunk
                current_rows += chunk_rows
                remaining = remaining[chars_available:]
                first_chunk = False

                if not line:
                    break

                if current_rows >= self.lines_per_page and remaining:
                    pages.append(current_text)
                    current_text = ""
                    current_rows = 0

        if current_text or not pages:
            pages.append(current_text)

        self.pages = pages
        return self.pages

    def get_page_count(self) -> int:
        """Return the total number of pages."""
        return len(self.pages)

    def get_page(self, index: int) -> str:
        """Get a specific page (0-indexed).

        Returns:
            The page text, or an empty string if the page doesn't exist.
        """
        if 0 <= index < len(self.pages):
            return self.pages[index]
        return ""


def paginate(content: str, settings: Any) -> List[str]:
    """Split ``content`` into pages for the given settings.

    Deterministic and free of side effects: identical inputs always give
    identical pages.
    """
    return Paginator(content, metrics_for(settings)).format_pages()


def join_pages(pages: Sequence[str]) -> str:
    """Reassemble raw content from pages (no separator)."""
    return "".join(pages)


def replace_page(pages: Sequence[str], index: int, text: str) -> str:
    """Return the content obtained by replacing page ``index`` with ``text``.

    Any line break the paginator inserted for display continuity becomes
    part of the returned content verbatim.

    Raises:
        IndexError: If ``index`` does not name an existing page.
    """
    if not 0 <= index < len(pages):
        raise IndexError(f"Page index {index} out of range (0-{len(pages) - 1})")
    edited = list(pages)
    edited[index] = text
    return join_pages(edited)
