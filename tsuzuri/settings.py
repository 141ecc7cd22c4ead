"""Document settings for the tsuzuri editor.

Settings are an immutable value object. Every edit produces a new
``EditorSettings``; the layout engine reads the paper, margin and font
fields, and the remaining fields are passed through to renderers.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .fonts import is_font_weight

logger = logging.getLogger(__name__)


class WritingMode(Enum):
    """Text flow convention."""
    VERTICAL = "vertical"  # Right-to-left columns, top to bottom
    HORIZONTAL = "horizontal"  # Top-to-bottom rows, left to right


@dataclass(frozen=True)
class EditorSettings:
    """Layout and display settings for one document.

    Attributes:
        writing_mode: Vertical or horizontal text flow
        paper_width: Paper width in millimeters
        paper_height: Paper height in millimeters
        margin_top: Top margin in millimeters (likewise for the other margins)
        columns: Number of text columns (rendering only)
        column_gap: Gap between columns in millimeters (rendering only)
        font_family: Font family name
        font_size: Font size in device pixels
        line_height: Line pitch as a multiple of the font size
        font_weight: CSS numeric font weight
    """
    writing_mode: WritingMode = WritingMode.VERTICAL
    paper_width: float = 260.0
    paper_height: float = 336.0
    margin_top: float = 30.0
    margin_bottom: float = 30.0
    margin_right: float = 30.0
    margin_left: float = 30.0
    columns: int = 1
    column_gap: float = 20.0
    font_family: str = "Noto Serif JP"
    font_size: float = 24.0
    line_height: float = 2.0
    font_weight: int = 400
    show_guidelines: bool = False
    show_safe_area: bool = False
    show_ruler: bool = True
    show_section_markers: bool = False
    show_row_lines: bool = False
    row_line_color: str = "#8b7355"
    row_line_opacity: float = 0.25

    @property
    def is_vertical(self) -> bool:
        return self.writing_mode is WritingMode.VERTICAL

    def updated(self, **changes: Any) -> EditorSettings:
        """Return a copy with ``changes`` applied.

        Raises:
            TypeError: If a key is not a settings field.
            ValueError: If a value is not acceptable for its key.
        """
        unknown = set(changes) - _FIELD_NAMES
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")
        for key, value in changes.items():
            if not validate_setting(key, value):
                raise ValueError(f"Invalid value for setting {key!r}: {value!r}")
        if "writing_mode" in changes:
            changes["writing_mode"] = WritingMode(changes["writing_mode"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable record of all settings."""
        data = asdict(self)
        data["writing_mode"] = self.writing_mode.value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> EditorSettings:
        """Merge a partial settings record over the defaults.

        Unknown keys are ignored and invalid values fall back to the default
        for that field. Never raises for malformed input.
        """
        if not isinstance(data, Mapping):
            if data is not None:
                logger.warning(f"Settings record is not a mapping ({type(data).__name__}), using defaults")
            return cls()

        accepted: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in _FIELD_NAMES:
                continue
            if not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value for setting {key!r}: {value!r}")
                continue
            if key == "writing_mode":
                value = WritingMode(value)
            accepted[key] = value
        return cls(**accepted)


_FIELD_NAMES = frozenset(f.name for f in fields(EditorSettings))

_POSITIVE = ("paper_width", "paper_height", "font_size", "line_height")
_NON_NEGATIVE = ("margin_top", "margin_bottom", "margin_right", "margin_left", "column_gap")
_FLAGS = ("show_guidelines", "show_safe_area", "show_ruler", "show_section_markers", "show_row_lines")

DEFAULT_SETTINGS = EditorSettings()


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid measurement
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if the value is acceptable for the key. Unknown keys are
        considered valid (forward compatibility).
    """
    if key == "writing_mode":
        if isinstance(value, WritingMode):
            return True
        return isinstance(value, str) and value in {mode.value for mode in WritingMode}

    if key in _POSITIVE:
        return _is_number(value) and value > 0

    if key in _NON_NEGATIVE:
        return _is_number(value) and value >= 0

    if key == "columns":
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1

    if key == "font_weight":
        return isinstance(value, int) and not isinstance(value, bool) and is_font_weight(value)

    if key == "row_line_opacity":
        return _is_number(value) and 0 <= value <= 1

    if key in ("font_family", "row_line_color"):
        return isinstance(value, str) and bool(value)

    if key in _FLAGS:
        return isinstance(value, bool)

    return True

