"""
PaletteSync Imaging Utilities
Handles image I/O, upload validation, working-width resize and the synthetic
sample image.
"""
import base64
import binascii
import io
from typing import Optional

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from palettesync.config import config
from palettesync.errors import InvalidInputError

SAMPLE_WIDTH = 640
SAMPLE_HEIGHT = 420
SAMPLE_BLOCKS = [(240, 68, 68), (16, 185, 129), (59, 130, 246), (234, 179, 8)]
SAMPLE_GRADIENT = ((17, 24, 39), (147, 197, 253))
SAMPLE_CAPTION = "Palette Generator Sample"
SAMPLE_CAPTION_COLOR = (11, 16, 32)


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file metadata before reading it.

    Raises:
        HTTPException: 400 for oversized files, 415 for unsupported formats
    """
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Check file magic bytes to ensure it's actually an image.

    Returns:
        Detected MIME type

    Raises:
        InvalidInputError: For unknown or truncated data
    """
    if len(file_bytes) < 12:
        raise InvalidInputError("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    if file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    if file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    raise InvalidInputError("Invalid image file",
                            "Magic bytes don't match a supported format (PNG, JPEG, WebP)")


def decode_image_bytes(file_bytes: bytes) -> Image.Image:
    """
    Decode image bytes into an RGBA PIL image.

    Raises:
        InvalidInputError: For oversized, unsupported or corrupt data
    """
    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise InvalidInputError(f"File too large. Maximum size: {config.MAX_FILE_MB}MB")

    validate_magic_bytes(file_bytes)

    try:
        image = Image.open(io.BytesIO(file_bytes))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise InvalidInputError(f"Failed to decode image: {str(e)}")

    return image.convert("RGBA")


def decode_base64_image(b64_data: str) -> Image.Image:
    """Decode base64 (optionally a data URL) into an RGBA PIL image."""
    if ',' in b64_data:
        b64_data = b64_data.split(',', 1)[1]

    try:
        file_bytes = base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Invalid base64 image data: {str(e)}")

    return decode_image_bytes(file_bytes)


async def read_upload(file: UploadFile) -> Image.Image:
    """Validate and decode an uploaded image file."""
    validate_file_upload(file)
    file_bytes = await file.read()
    return decode_image_bytes(file_bytes)


def fit_to_max_width(image: Image.Image, max_width: Optional[int] = None) -> Image.Image:
    """
    Scale an image down so its width is at most max_width, keeping the
    aspect ratio. Images already narrow enough are returned unchanged.
    """
    if max_width is None:
        max_width = config.MAX_WIDTH

    width, height = image.size
    if width <= max_width:
        return image

    ratio = max_width / width
    new_size = (max(1, round(width * ratio)), max(1, round(height * ratio)))
    return image.resize(new_size, Image.Resampling.BILINEAR)


def to_rgba_array(image: Image.Image) -> np.ndarray:
    """(H, W, 4) uint8 array of an image."""
    return np.array(image.convert("RGBA"), dtype=np.uint8)


def make_sample_image(width: int = SAMPLE_WIDTH, height: int = SAMPLE_HEIGHT) -> np.ndarray:
    """
    Synthetic test image: four saturated blocks across the top half and a
    diagonal dark-to-light-blue gradient with a caption across the bottom.

    Returns:
        (H, W, 4) uint8 RGBA array, fully opaque
    """
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[:, :, 3] = 255

    half = height // 2
    block_w = width // len(SAMPLE_BLOCKS)
    for i, rgb in enumerate(SAMPLE_BLOCKS):
        img[:half, i * block_w:(i + 1) * block_w, :3] = rgb

    # gradient runs from (0, half) to (width, height)
    ys, xs = np.mgrid[half:height, 0:width].astype(np.float64)
    dx, dy = float(width), float(height - half)
    t = np.clip((xs * dx + (ys - half) * dy) / (dx * dx + dy * dy), 0.0, 1.0)
    start = np.array(SAMPLE_GRADIENT[0], dtype=np.float64)
    end = np.array(SAMPLE_GRADIENT[1], dtype=np.float64)
    img[half:, :, :3] = np.floor(start + (end - start) * t[..., None] + 0.5).astype(np.uint8)

    rgb = np.ascontiguousarray(img[:, :, :3])
    cv2.putText(rgb, SAMPLE_CAPTION, (18, height - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.7,
                SAMPLE_CAPTION_COLOR, 2, cv2.LINE_AA)
    img[:, :, :3] = rgb

    return img


def load_working_rgba(image: Image.Image, max_width: Optional[int] = None) -> np.ndarray:
    """Resize to the working width and return RGBA pixels for sampling."""
    return to_rgba_array(fit_to_max_width(image, max_width))
