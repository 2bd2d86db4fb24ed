"""
Swatch Rendering Module

Renders palettes as PNG images: a compact chip strip returned alongside
extraction results, and a labelled palette sheet for export.
"""

import base64
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np
from loguru import logger

from ...errors import InvalidInputError
from .colorspace import ColorRGB, rgb_to_hex

SHEET_WIDTH = 1100
SHEET_COLUMNS = 6
SHEET_BACKGROUND: ColorRGB = (11, 16, 32)
SHEET_TEXT: ColorRGB = (231, 236, 255)


def rgb_to_bgr(rgb: Sequence[int]) -> Tuple[int, int, int]:
    """Reorder an RGB triple for OpenCV drawing."""
    r, g, b = rgb
    return (int(b), int(g), int(r))


def _encode_png(img: np.ndarray) -> bytes:
    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode image as PNG")
    return buffer.tobytes()


def validate_swatch_params(palette: Sequence[ColorRGB], chip_size: int,
                           highlight_index: Optional[int]) -> None:
    """Validate swatch rendering parameters."""
    if not palette:
        raise InvalidInputError("Cannot render an empty palette")

    if chip_size <= 0:
        raise InvalidInputError("chip_size must be positive")

    if highlight_index is not None and not 0 <= highlight_index < len(palette):
        raise InvalidInputError(f"highlight_index {highlight_index} out of range [0, {len(palette)})")


def render_swatch_strip(palette: Sequence[ColorRGB],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None,
                        border_color: ColorRGB = (255, 255, 255),
                        border_width: int = 2) -> str:
    """
    Render a horizontal strip of color chips.

    Args:
        palette: Ordered RGB colors
        chip_size: Size of each chip in pixels
        highlight_index: Chip to outline (e.g. the harmony base color)
        border_color: RGB outline color
        border_width: Outline width in pixels

    Returns:
        Base64-encoded PNG image string
    """
    validate_swatch_params(palette, chip_size, highlight_index)

    k = len(palette)
    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)

    for i, rgb in enumerate(palette):
        img[:, i * chip_size:(i + 1) * chip_size, :] = rgb_to_bgr(rgb)

    if highlight_index is not None:
        x_start = highlight_index * chip_size
        cv2.rectangle(
            img,
            (x_start, 0),
            (x_start + chip_size - 1, chip_size - 1),
            rgb_to_bgr(border_color),
            border_width
        )

    logger.debug(f"Rendered swatch strip: {k} chips, chip_size={chip_size}")
    return base64.b64encode(_encode_png(img)).decode('ascii')


def render_palette_sheet(palette: Sequence[ColorRGB], title: str = "PaletteSync Export") -> bytes:
    """
    Render a labelled palette sheet: six chips per row, each with its hex
    code on a light label bar beneath it.

    Returns:
        PNG file bytes
    """
    validate_swatch_params(palette, 1, None)

    rows = (len(palette) + SHEET_COLUMNS - 1) // SHEET_COLUMNS
    height = 160 + rows * 130
    gap, chip_h, label_h = 16, 80, 32
    chip_w = (SHEET_WIDTH - 48 - (SHEET_COLUMNS - 1) * gap) // SHEET_COLUMNS

    img = np.zeros((height, SHEET_WIDTH, 3), dtype=np.uint8)
    img[:, :] = rgb_to_bgr(SHEET_BACKGROUND)
    cv2.putText(img, title, (24, 36), cv2.FONT_HERSHEY_SIMPLEX, 0.7,
                rgb_to_bgr(SHEET_TEXT), 2, cv2.LINE_AA)

    for i, rgb in enumerate(palette):
        col, row = i % SHEET_COLUMNS, i // SHEET_COLUMNS
        x = 24 + col * (chip_w + gap)
        y = 90 + row * (chip_h + 54)

        cv2.rectangle(img, (x, y), (x + chip_w - 1, y + chip_h - 1), rgb_to_bgr(rgb), -1)
        cv2.rectangle(img, (x, y + chip_h), (x + chip_w - 1, y + chip_h + label_h - 1),
                      rgb_to_bgr(SHEET_TEXT), -1)
        cv2.putText(img, rgb_to_hex(rgb), (x + 8, y + chip_h + 21), cv2.FONT_HERSHEY_SIMPLEX,
                    0.5, rgb_to_bgr(SHEET_BACKGROUND), 1, cv2.LINE_AA)

    logger.debug(f"Rendered palette sheet: {len(palette)} colors, {SHEET_WIDTH}x{height}")
    return _encode_png(img)
