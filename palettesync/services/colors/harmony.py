"""
Color harmony generator.

Derives a small set of related colors from one base color using classical
color-wheel relationships. Saturation and lightness of the base are clamped
first so generated members never end up near-grey or near-black/white.
"""

from typing import List, Optional, Sequence

from ...errors import ConfigurationError
from .colorspace import ColorRGB, clamp, hsl_of, hsl_to_rgb

HARMONY_KINDS = ("none", "complementary", "analogous", "triadic", "tetradic", "monochrome")

# Hue offsets in degrees per harmony kind
HUE_OFFSETS = {
    "complementary": (0, 180),
    "analogous": (-30, 0, 30),
    "triadic": (0, 120, 240),
    "tetradic": (0, 90, 180, 270),
}

SATURATION_RANGE = (35, 96)
LIGHTNESS_RANGE = (30, 70)
MONOCHROME_RANGE = (10, 90)
MONOCHROME_FACTORS = (0.7, 1.0, 1.3)


def rotate_hue(h: float, degrees: float) -> float:
    """Rotate a hue in degrees, wrapping into [0, 360)."""
    return (h + degrees) % 360


def make_harmony(base: Optional[Sequence[int]], kind: str) -> List[ColorRGB]:
    """
    Generate harmony colors for a base color.

    Args:
        base: Base RGB color, or None
        kind: One of HARMONY_KINDS

    Returns:
        2 colors for complementary, 3 for analogous/triadic/monochrome,
        4 for tetradic, none for 'none' or a missing base

    Raises:
        ConfigurationError: Unknown harmony kind
    """
    if kind not in HARMONY_KINDS:
        raise ConfigurationError(f"Unknown harmony type: {kind!r}",
                                 f"Choose one of: {', '.join(HARMONY_KINDS)}")
    if kind == "none" or base is None:
        return []

    h, s, l = hsl_of(base)
    sat = clamp(s, *SATURATION_RANGE)
    light = clamp(l, *LIGHTNESS_RANGE)

    if kind == "monochrome":
        return [
            hsl_to_rgb(h, sat, clamp(light * factor, *MONOCHROME_RANGE))
            for factor in MONOCHROME_FACTORS
        ]

    return [hsl_to_rgb(rotate_hue(h, offset), sat, light) for offset in HUE_OFFSETS[kind]]
