"""
Theme derivation.

Turns a palette (or a harmony) plus a light/dark mode and a background
strength into named UI color roles. Themes are plain values: any change to
the inputs means deriving a new theme.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from ...errors import ConfigurationError
from .colorspace import ColorRGB, adjust_luma, hsl_of, perceived_luma, rgb_to_hex

MODES = ("light", "dark")
STRENGTHS = ("soft", "normal", "bold")

MAX_ACCENTS = 8

BACKGROUNDS: Dict[Tuple[str, str], ColorRGB] = {
    ("dark", "soft"): (16, 21, 46),
    ("dark", "normal"): (14, 18, 40),
    ("dark", "bold"): (6, 9, 20),
    ("light", "soft"): (245, 247, 252),
    ("light", "normal"): (250, 252, 255),
    ("light", "bold"): (255, 255, 255),
}

DARK_FOREGROUND: ColorRGB = (18, 23, 40)
LIGHT_FOREGROUND: ColorRGB = (231, 236, 255)

# Backgrounds brighter than this luma get the dark foreground
FOREGROUND_LUMA_PIVOT = 128

FOLLOWED_LINK_FACTOR = {"dark": 0.8, "light": 1.2}


@dataclass(frozen=True)
class Theme:
    """Named color roles derived from a palette."""
    background: ColorRGB
    foreground: ColorRGB
    accents: Tuple[ColorRGB, ...]
    hyperlink: ColorRGB
    followed_hyperlink: ColorRGB
    mode: str = "dark"
    strength: str = "normal"

    def accent_slots(self, count: int, fallbacks: Optional[Sequence[ColorRGB]] = None) -> List[ColorRGB]:
        """
        Exactly `count` accents, padded from `fallbacks` (by slot) or with
        the foreground when the theme has fewer.
        """
        slots = []
        for i in range(count):
            if i < len(self.accents):
                slots.append(self.accents[i])
            elif fallbacks is not None and i < len(fallbacks):
                slots.append(tuple(fallbacks[i]))
            else:
                slots.append(self.foreground)
        return slots

    def roles(self) -> Dict[str, ColorRGB]:
        """Ordered role name -> color mapping."""
        roles = {"background": self.background, "foreground": self.foreground}
        for i, accent in enumerate(self.accents):
            roles[f"accent{i + 1}"] = accent
        roles["hyperlink"] = self.hyperlink
        roles["followed"] = self.followed_hyperlink
        return roles

    def hex_roles(self) -> Dict[str, str]:
        return {name: rgb_to_hex(rgb) for name, rgb in self.roles().items()}


def validate_mode(mode: str) -> str:
    if mode not in MODES:
        raise ConfigurationError(f"Unknown theme mode: {mode!r}",
                                 f"Choose one of: {', '.join(MODES)}")
    return mode


def validate_strength(strength: str) -> str:
    if strength not in STRENGTHS:
        raise ConfigurationError(f"Unknown background strength: {strength!r}",
                                 f"Choose one of: {', '.join(STRENGTHS)}")
    return strength


def pick_foreground(background: Sequence[int]) -> ColorRGB:
    """Dark text on bright backgrounds, light text otherwise."""
    return DARK_FOREGROUND if perceived_luma(background) > FOREGROUND_LUMA_PIVOT else LIGHT_FOREGROUND


def rank_accents(source: Sequence[Sequence[int]]) -> List[ColorRGB]:
    """Colors sorted by HSL saturation, most saturated first (stable)."""
    colors = [tuple(int(c) for c in rgb) for rgb in source]
    return sorted(colors, key=lambda rgb: -hsl_of(rgb)[1])[:MAX_ACCENTS]


def theme_source(palette: Sequence[ColorRGB], harmony: Sequence[ColorRGB],
                 use_harmony: bool) -> Sequence[ColorRGB]:
    """The harmony when requested and available, else the palette."""
    return harmony if use_harmony and len(harmony) > 0 else palette


def derive_theme(source: Sequence[Sequence[int]], mode: str = "dark",
                 strength: str = "normal") -> Optional[Theme]:
    """
    Derive a theme from a palette or harmony.

    Args:
        source: Ordered colors to draw accents from
        mode: 'light' or 'dark'
        strength: 'soft', 'normal' or 'bold' background

    Returns:
        Theme, or None when source is empty

    Raises:
        ConfigurationError: Unknown mode or strength
    """
    validate_mode(mode)
    validate_strength(strength)

    if len(source) == 0:
        logger.debug("Theme derivation skipped: empty source")
        return None

    accents = rank_accents(source)
    background = BACKGROUNDS[(mode, strength)]
    foreground = pick_foreground(background)

    if accents:
        hyperlink = accents[0]
        followed = adjust_luma(accents[0], FOLLOWED_LINK_FACTOR[mode])
    else:
        hyperlink = followed = foreground

    logger.debug(f"Derived {mode}/{strength} theme with {len(accents)} accents")

    return Theme(
        background=background,
        foreground=foreground,
        accents=tuple(accents),
        hyperlink=hyperlink,
        followed_hyperlink=followed,
        mode=mode,
        strength=strength,
    )
