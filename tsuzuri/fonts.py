"""Font catalog for the tsuzuri editor.

This module defines the font families and weights a document may select.
Metrics never depend on the family; only the font size enters the layout
approximation, so the catalog is used for validation and display labels.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class FontOption:
    """A selectable font family.

    Attributes:
        name: Family name as passed to the renderer
        label: Display label shown in the settings panel
    """
    name: str
    label: str


@dataclass(frozen=True)
class FontWeightOption:
    """A selectable font weight (CSS numeric weight)."""
    value: int
    label: str


FONT_OPTIONS: Dict[str, FontOption] = {
    option.name: option
    for option in (
        FontOption("Noto Serif JP", "Noto Serif JP"),
        FontOption("Yu Mincho", "游明朝"),
        FontOption("Yu Gothic", "游ゴシック"),
        FontOption("Hiragino Mincho ProN", "ヒラギノ明朝"),
        FontOption("MS Mincho", "MS 明朝"),
    )
}

# Ordered lightest to heaviest; the toolbar toggle cycles in this order
FONT_WEIGHT_OPTIONS: Tuple[FontWeightOption, ...] = (
    FontWeightOption(300, "細字"),
    FontWeightOption(400, "標準"),
    FontWeightOption(500, "中太"),
    FontWeightOption(700, "太字"),
    FontWeightOption(900, "極太"),
)


def get_font_option(font_name: str) -> Optional[FontOption]:
    """Get a font option by family name.

    Args:
        font_name: Family name of the font

    Returns:
        FontOption if found, None otherwise
    """
    return FONT_OPTIONS.get(font_name)


def is_font_weight(value: int) -> bool:
    return any(option.value == value for option in FONT_WEIGHT_OPTIONS)


def get_font_weight_label(value: int) -> str:
    """Return the display label for a weight, falling back to the regular label."""
    for option in FONT_WEIGHT_OPTIONS:
        if option.value == value:
            return option.label
    return FONT_WEIGHT_OPTIONS[1].label


def next_font_weight(current: int) -> int:
    """Return the weight following ``current``, wrapping around.

    An unknown current weight yields the first (lightest) option.
    """
    values = [option.value for option in FONT_WEIGHT_OPTIONS]
    try:
        index = values.index(current)
    except ValueError:
        return values[0]
    return values[(index + 1) % len(values)]
