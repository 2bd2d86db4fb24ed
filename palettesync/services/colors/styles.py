"""
Style scoring for quantized palettes.

Re-ranks weighted colors by frequency plus an aesthetic bias computed from
each color's HSL values.
"""

from typing import Iterable, List

from ...errors import ConfigurationError
from .colorspace import ColorRGB, hsl_of
from .quantizers import WeightedColor

STYLES = ("auto", "vibrant", "muted", "balanced")


def style_bias(rgb: ColorRGB, style: str) -> float:
    """Bias added to a color's count for the given style; 0 for auto/other."""
    _, s, l = hsl_of(rgb)
    if style == "vibrant":
        return s * 0.6 + (100 - abs(l - 50)) * 0.2
    if style == "muted":
        return (100 - s) * 0.6 + abs(l - 50) * 0.2
    if style == "balanced":
        return 50 - abs(l - 50)
    return 0.0


def style_score(weighted: WeightedColor, style: str) -> float:
    return weighted.count + style_bias(weighted.rgb, style)


def apply_style_bias(weighted: Iterable[WeightedColor], style: str) -> List[ColorRGB]:
    """
    Order colors by descending style score.

    The sort is stable, so equal scores keep the quantizer's emission order.
    """
    ranked = sorted(weighted, key=lambda wc: -style_score(wc, style))
    return [wc.rgb for wc in ranked]


def validate_style(style: str) -> str:
    """
    Raises:
        ConfigurationError: Unknown style name
    """
    if style not in STYLES:
        raise ConfigurationError(f"Unknown palette style: {style!r}",
                                 f"Choose one of: {', '.join(STYLES)}")
    return style
