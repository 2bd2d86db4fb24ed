"""
Pixel sampling for palette extraction.

Downsamples an RGBA grid into a bounded set of opaque color points. The
working-width resize happens before this step (see services.imaging).
"""

from typing import Optional, Union

import numpy as np
from loguru import logger

from ...errors import EmptySampleError, InvalidInputError

DEFAULT_STRIDE = 6
DEFAULT_ALPHA_THRESHOLD = 200


def _as_uint8(arr: np.ndarray) -> np.ndarray:
    """Channel values as uint8, rejecting fractional or out-of-range entries."""
    if arr.dtype == np.uint8:
        return arr
    if arr.dtype.kind not in "iuf" or (arr.dtype.kind == "f" and not np.array_equal(arr, np.floor(arr))):
        raise InvalidInputError(f"RGBA values must be whole numbers, got dtype {arr.dtype}")
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise InvalidInputError("RGBA values must be within 0..255")
    return arr.astype(np.uint8)


def as_rgba_array(buffer: Union[bytes, bytearray, memoryview, np.ndarray],
                  width: Optional[int] = None,
                  height: Optional[int] = None) -> np.ndarray:
    """
    Normalize an RGBA buffer to an (H, W, 4) uint8 array.

    Accepts an (H, W, 4) array as-is, or a flat byte buffer / 1-D array with
    explicit width and height.

    Raises:
        InvalidInputError: If the buffer shape does not match RGBA W x H, or
            array values are fractional or outside 0..255
    """
    if isinstance(buffer, np.ndarray):
        buffer = _as_uint8(buffer)

    if isinstance(buffer, np.ndarray) and buffer.ndim == 3:
        if buffer.shape[2] != 4:
            raise InvalidInputError(f"Expected RGBA array with 4 channels, got {buffer.shape[2]}")
        return buffer

    if width is None or height is None:
        raise InvalidInputError("Flat RGBA buffers need explicit width and height")
    if width < 1 or height < 1:
        raise InvalidInputError(f"Invalid image dimensions: {width}x{height}")

    flat = np.frombuffer(bytes(buffer), dtype=np.uint8) if not isinstance(buffer, np.ndarray) \
        else buffer.ravel()
    expected = width * height * 4
    if flat.size != expected:
        raise InvalidInputError(
            f"RGBA buffer length {flat.size} does not match {width}x{height}x4={expected}"
        )
    return flat.reshape(height, width, 4)


def sample_points(rgba: Union[bytes, bytearray, memoryview, np.ndarray],
                  width: Optional[int] = None,
                  height: Optional[int] = None,
                  stride: int = DEFAULT_STRIDE,
                  alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD) -> np.ndarray:
    """
    Sample opaque color points from an RGBA pixel grid.

    Every `stride`-th pixel of the flattened buffer is visited (pixel 0,
    stride, 2*stride, ...); pixels whose alpha is below `alpha_threshold`
    are dropped so transparent regions never influence the palette.

    Args:
        rgba: (H, W, 4) uint8 array or flat RGBA bytes
        width: Image width, required for flat buffers
        height: Image height, required for flat buffers
        stride: Pixel step along the flattened buffer
        alpha_threshold: Minimum alpha for a pixel to be kept

    Returns:
        (N, 3) int64 array of RGB points, N >= 1

    Raises:
        InvalidInputError: Malformed buffer or non-positive stride
        EmptySampleError: No opaque pixels survive
    """
    if stride < 1:
        raise InvalidInputError(f"Sampling stride must be >= 1, got {stride}")

    pixels = as_rgba_array(rgba, width, height).reshape(-1, 4)
    visited = pixels[::stride]
    opaque = visited[visited[:, 3] >= alpha_threshold]

    logger.debug(f"Sampled {len(visited)} of {len(pixels)} pixels (stride={stride}), "
                 f"{len(opaque)} opaque (alpha >= {alpha_threshold})")

    if len(opaque) == 0:
        raise EmptySampleError()

    return opaque[:, :3].astype(np.int64)
