"""
Palette editing operations.

Every edit returns a new list and leaves its input untouched, so a failed
edit can never leave a palette half-updated.
"""

from typing import Any, List, Optional, Sequence

import numpy as np

from ...errors import ConfigurationError, InvalidInputError
from .colorspace import ColorRGB, hsl_of, parse_color
from .quantizers import make_rng

MIN_PALETTE_SIZE = 3

# Position of each sort key in an (h, s, l) tuple
SORT_KEYS = {"hue": 0, "saturation": 1, "lightness": 2}

EDIT_OPERATIONS = ("replace", "remove", "append_random", "sort", "shuffle")


def _check_index(palette: Sequence[ColorRGB], index: Optional[int]) -> int:
    if index is None or not 0 <= index < len(palette):
        raise InvalidInputError(f"Color index {index} out of range for palette of {len(palette)}")
    return index


def replace_color(palette: Sequence[ColorRGB], index: int, color: Any) -> List[ColorRGB]:
    """Replace one color with a manually entered '#RRGGBB' or [r, g, b] value."""
    _check_index(palette, index)
    new_color = parse_color(color)
    edited = list(palette)
    edited[index] = new_color
    return edited


def remove_color(palette: Sequence[ColorRGB], index: int) -> List[ColorRGB]:
    """
    Remove one color.

    Raises:
        InvalidInputError: Palette already at the minimum size, or bad index
    """
    if len(palette) <= MIN_PALETTE_SIZE:
        raise InvalidInputError("Cannot remove color",
                                f"Palette must have at least {MIN_PALETTE_SIZE} colors")
    _check_index(palette, index)
    return [c for i, c in enumerate(palette) if i != index]


def append_random_color(palette: Sequence[ColorRGB],
                        rng: Optional[np.random.Generator] = None) -> List[ColorRGB]:
    rng = rng if rng is not None else make_rng()
    r, g, b = (int(v) for v in rng.integers(0, 256, size=3))
    return list(palette) + [(r, g, b)]


def sort_palette(palette: Sequence[ColorRGB], by: str) -> List[ColorRGB]:
    """Stable ascending sort on hue, saturation or lightness."""
    if by not in SORT_KEYS:
        raise ConfigurationError(f"Unknown sort key: {by!r}",
                                 f"Choose one of: {', '.join(SORT_KEYS)}")
    position = SORT_KEYS[by]
    return sorted(palette, key=lambda rgb: hsl_of(rgb)[position])


def shuffle_palette(palette: Sequence[ColorRGB],
                    rng: Optional[np.random.Generator] = None) -> List[ColorRGB]:
    """Fisher-Yates shuffle."""
    rng = rng if rng is not None else make_rng()
    shuffled = list(palette)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def apply_edit(palette: Sequence[ColorRGB], op: str, index: Optional[int] = None,
               color: Any = None, by: Optional[str] = None,
               rng: Optional[np.random.Generator] = None) -> List[ColorRGB]:
    """Dispatch a named edit operation."""
    if op == "replace":
        if color is None:
            raise InvalidInputError("Replace needs a color")
        return replace_color(palette, index, color)
    if op == "remove":
        return remove_color(palette, index)
    if op == "append_random":
        return append_random_color(palette, rng)
    if op == "sort":
        return sort_palette(palette, by or "hue")
    if op == "shuffle":
        return shuffle_palette(palette, rng)
    raise ConfigurationError(f"Unknown palette edit: {op!r}",
                             f"Choose one of: {', '.join(EDIT_OPERATIONS)}")
