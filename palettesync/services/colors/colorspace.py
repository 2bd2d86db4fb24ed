"""
Color space utilities.

sRGB <-> HSL conversion on integer degrees/percentages, perceived luma and
lightness adjustment. HSL is never stored; callers recompute it from RGB on
demand. All rounding is half-up so results are stable across platforms.
"""

import colorsys
import math
import numbers
import re
from typing import Any, Sequence, Tuple

from ...errors import InvalidInputError

ColorRGB = Tuple[int, int, int]
ColorHSL = Tuple[int, int, int]

HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")

# ITU-R BT.709 luma coefficients
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

# adjust_luma keeps lightness away from pure black/white
LUMA_L_MIN = 3
LUMA_L_MAX = 97


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up."""
    return int(math.floor(value + 0.5))


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


def rgb_to_hsl(r: int, g: int, b: int) -> ColorHSL:
    """
    Convert 8-bit RGB to HSL.

    Returns:
        Tuple of (hue degrees [0, 360), saturation %, lightness %), all integers.
        Achromatic input yields hue = saturation = 0.
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (
        round_half_up(h * 360) % 360,
        round_half_up(s * 100),
        round_half_up(l * 100),
    )


def hsl_to_rgb(h: float, s: float, l: float) -> ColorRGB:
    """
    Convert HSL (degrees, %, %) to 8-bit RGB.

    Saturation and lightness may be fractional; output channels are rounded
    and clamped to [0, 255].
    """
    if s == 0:
        v = clamp(round_half_up(l / 100.0 * 255), 0, 255)
        return (v, v, v)

    r, g, b = colorsys.hls_to_rgb((h / 360.0) % 1.0, l / 100.0, s / 100.0)
    return (
        clamp(round_half_up(r * 255), 0, 255),
        clamp(round_half_up(g * 255), 0, 255),
        clamp(round_half_up(b * 255), 0, 255),
    )


def hsl_of(rgb: Sequence[int]) -> ColorHSL:
    """HSL of an RGB triple."""
    r, g, b = rgb
    return rgb_to_hsl(r, g, b)


def perceived_luma(rgb: Sequence[int]) -> float:
    """Relative brightness estimate; only meaningful for comparisons."""
    r, g, b = rgb
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def adjust_luma(rgb: Sequence[int], factor: float) -> ColorRGB:
    """Scale HSL lightness by factor, clamped to [3, 97]."""
    h, s, l = hsl_of(rgb)
    l2 = clamp(round_half_up(l * factor), LUMA_L_MIN, LUMA_L_MAX)
    return hsl_to_rgb(h, s, l2)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert an RGB triple to '#RRGGBB'."""
    r, g, b = [int(x) for x in rgb]
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> ColorRGB:
    """
    Convert a hex color string to an RGB tuple.

    Raises:
        InvalidInputError: If the string is not #RRGGBB (leading # optional)
    """
    match = HEX_RE.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if match is None:
        raise InvalidInputError(f"Invalid hex color: {hex_color!r}",
                                "Use the #RRGGBB format")
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def validate_rgb(rgb: Any) -> ColorRGB:
    """
    Normalize a 3-sequence of channel values to an RGB tuple.

    Raises:
        InvalidInputError: Wrong arity, non-integer or out-of-range channels
    """
    try:
        channels = list(rgb)
    except TypeError:
        raise InvalidInputError(f"Invalid RGB value: {rgb!r}")

    if len(channels) != 3:
        raise InvalidInputError(f"RGB value needs 3 channels, got {len(channels)}")

    result = []
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, numbers.Real) \
                or int(channel) != channel:
            raise InvalidInputError(f"Channel value must be an integer: {channel!r}")
        if not 0 <= channel <= 255:
            raise InvalidInputError(f"Channel value out of range 0-255: {channel}")
        result.append(int(channel))
    return (result[0], result[1], result[2])


def parse_color(value: Any) -> ColorRGB:
    """Parse a manual color edit: '#RRGGBB' string or an [r, g, b] sequence."""
    if isinstance(value, str):
        return hex_to_rgb(value)
    return validate_rgb(value)
