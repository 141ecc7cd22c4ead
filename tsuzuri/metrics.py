"""Page metrics: how many characters fit on a line and lines on a page.

The resolver approximates glyph advance from the font size alone. It does not
measure glyphs, so the result is an estimate of the grid the renderer will
draw, not a guarantee of visual fit.
"""

from __future__ import annotations

import logging
import math
from typing import Any, NamedTuple

from .constants import LayoutConstants
from .settings import WritingMode

logger = logging.getLogger(__name__)


class PageMetrics(NamedTuple):
    """Grid capacity of one page.

    In vertical mode a "line" is a column and ``characters_per_line`` counts
    characters down that column.
    """
    characters_per_line: int
    lines_per_page: int

    @property
    def characters_per_page(self) -> int:
        return self.characters_per_line * self.lines_per_page


def _fit(length_mm: float, pitch_mm: float) -> int:
    """Number of whole pitches in ``length_mm``, clamped to at least 1."""
    try:
        count = length_mm / pitch_mm
    except ZeroDivisionError:
        return 1
    if not math.isfinite(count):
        return 1
    return max(1, math.floor(count))


def resolve_metrics(
    writing_mode: WritingMode,
    paper_width: float,
    paper_height: float,
    margin_top: float,
    margin_bottom: float,
    margin_right: float,
    margin_left: float,
    font_size: float,
    line_height: float,
) -> PageMetrics:
    """Derive characters per line and lines per page from page geometry.

    Args:
        writing_mode: Vertical (columns) or horizontal (rows).
        paper_width: Paper width in mm.
        paper_height: Paper height in mm.
        margin_top: Top margin in mm (likewise bottom, right, left).
        font_size: Font size in device pixels.
        line_height: Line pitch as a multiple of the font size.

    Returns:
        PageMetrics with both values >= 1, however degenerate the input.
    """
    font_mm = font_size / LayoutConstants.MM_TO_PX
    usable_width = paper_width - margin_left - margin_right
    usable_height = paper_height - margin_top - margin_bottom
    line_pitch = font_mm * line_height

    if WritingMode(writing_mode) is WritingMode.VERTICAL:
        chars = _fit(usable_height, font_mm * LayoutConstants.VERTICAL_ADVANCE)
        lines = _fit(usable_width, line_pitch)
    else:
        chars = _fit(usable_width, font_mm * LayoutConstants.HORIZONTAL_ADVANCE)
        lines = _fit(usable_height, line_pitch)

    if usable_width <= 0 or usable_height <= 0:
        logger.debug(
            f"Degenerate page area {usable_width:.2f}x{usable_height:.2f} mm, "
            f"clamped to {chars} chars x {lines} lines"
        )
    return PageMetrics(chars, lines)


def metrics_for(settings: Any) -> PageMetrics:
    """Resolve metrics from any settings object exposing the layout fields."""
    return resolve_metrics(
        writing_mode=settings.writing_mode,
        paper_width=settings.paper_width,
        paper_height=settings.paper_height,
        margin_top=settings.margin_top,
        margin_bottom=settings.margin_bottom,
        margin_right=settings.margin_right,
        margin_left=settings.margin_left,
        font_size=settings.font_size,
        line_height=settings.line_height,
    )
