"""
Palette session.

Holds the current palette and theme settings as explicit values. The
harmony and theme are always recomputed from those values; a failed
extraction or edit leaves the previous state in place.
"""

from typing import Any, List, Optional

import numpy as np
from loguru import logger

from .colorspace import ColorRGB
from .editing import apply_edit
from .extraction import ExtractionResult, extract_palette
from .harmony import make_harmony
from .quantizers import make_rng
from .theme import Theme, derive_theme, theme_source, validate_mode, validate_strength


class PaletteSession:
    """Current palette, harmony choice and theme settings for one user."""

    def __init__(self, mode: str = "dark", strength: str = "normal",
                 harmony_kind: str = "none", use_harmony: bool = False,
                 rng: Optional[np.random.Generator] = None):
        self.palette: List[ColorRGB] = []
        self.base_index = 0
        self.harmony_kind = harmony_kind
        self.use_harmony = use_harmony
        self.mode = validate_mode(mode)
        self.strength = validate_strength(strength)
        self.rng = rng if rng is not None else make_rng()
        self.last_extraction: Optional[ExtractionResult] = None

    def extract(self, rgba, **params) -> ExtractionResult:
        """Run an extraction; the palette is replaced only on success."""
        params.setdefault("rng", self.rng)
        result = extract_palette(rgba, **params)
        self.palette = list(result.palette)
        self.base_index = 0
        self.last_extraction = result
        return result

    def edit(self, op: str, index: Optional[int] = None, color: Any = None,
             by: Optional[str] = None) -> List[ColorRGB]:
        self.palette = apply_edit(self.palette, op, index=index, color=color, by=by, rng=self.rng)
        if self.base_index >= len(self.palette):
            self.base_index = 0
        return self.palette

    def set_mode(self, mode: str, strength: Optional[str] = None) -> None:
        validate_mode(mode)
        if strength is not None:
            validate_strength(strength)
            self.strength = strength
        self.mode = mode

    @property
    def base_color(self) -> Optional[ColorRGB]:
        if not self.palette:
            return None
        return self.palette[self.base_index]

    @property
    def harmony(self) -> List[ColorRGB]:
        return make_harmony(self.base_color, self.harmony_kind)

    @property
    def theme(self) -> Optional[Theme]:
        source = theme_source(self.palette, self.harmony, self.use_harmony)
        theme = derive_theme(source, self.mode, self.strength)
        logger.debug(f"Session theme recomputed: {'none' if theme is None else theme.mode}")
        return theme
