"""
Palette extraction pipeline.

Sampler -> quantizer -> style scorer. All option names are validated before
any pixel work so a bad request fails without producing partial output.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import numpy as np
from loguru import logger

from ...errors import InvalidInputError
from .colorspace import ColorRGB, rgb_to_hex
from .quantizers import WeightedColor, get_quantizer, make_rng
from .sampling import DEFAULT_ALPHA_THRESHOLD, DEFAULT_STRIDE, as_rgba_array, sample_points
from .styles import apply_style_bias, validate_style


@dataclass
class ExtractionResult:
    """Outcome of one palette extraction."""
    palette: List[ColorRGB]
    weighted: List[WeightedColor]
    k: int
    algorithm: str
    style: str
    width: int
    height: int
    sampled_points: int
    timings_ms: Dict[str, float] = field(default_factory=dict)

    @property
    def hex_palette(self) -> List[str]:
        return [rgb_to_hex(rgb) for rgb in self.palette]


def extract_palette(rgba: Union[bytes, np.ndarray],
                    k: int = 8,
                    style: str = "auto",
                    algorithm: str = "kmeans",
                    rng: Optional[np.random.Generator] = None,
                    stride: int = DEFAULT_STRIDE,
                    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
                    width: Optional[int] = None,
                    height: Optional[int] = None) -> ExtractionResult:
    """
    Extract an ordered palette from an RGBA pixel grid.

    Args:
        rgba: (H, W, 4) uint8 array, or flat RGBA bytes with width/height
        k: Target number of colors, >= 1
        style: auto, vibrant, muted or balanced
        algorithm: kmeans, kmeansplus or median
        rng: Random source for the k-means family
        stride: Pixel sampling stride
        alpha_threshold: Minimum alpha for sampled pixels

    Returns:
        ExtractionResult with the style-ordered palette

    Raises:
        ConfigurationError: Unknown algorithm or style
        InvalidInputError: k < 1 or malformed pixel buffer
        EmptySampleError: No opaque pixels in the image
    """
    quantizer = get_quantizer(algorithm)
    validate_style(style)
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise InvalidInputError(f"Palette size k must be an integer >= 1, got {k!r}")

    pixels = as_rgba_array(rgba, width, height)
    img_height, img_width = pixels.shape[:2]
    rng = rng if rng is not None else make_rng()

    logger.info(f"Starting palette extraction: {img_width}x{img_height}, k={k}, "
                f"algorithm={algorithm}, style={style}")

    start_time = time.time()
    points = sample_points(pixels, stride=stride, alpha_threshold=alpha_threshold)
    sample_ms = (time.time() - start_time) * 1000

    cluster_start = time.time()
    weighted = quantizer(points, k, rng=rng)
    cluster_ms = (time.time() - cluster_start) * 1000

    palette = apply_style_bias(weighted, style)
    total_ms = (time.time() - start_time) * 1000

    logger.info(f"Palette extraction complete: {len(palette)} colors from {len(points)} points "
                f"in {total_ms:.1f}ms")

    return ExtractionResult(
        palette=palette,
        weighted=weighted,
        k=k,
        algorithm=algorithm,
        style=style,
        width=img_width,
        height=img_height,
        sampled_points=len(points),
        timings_ms={
            "sampling": sample_ms,
            "clustering": cluster_ms,
            "total": total_ms,
        },
    )
