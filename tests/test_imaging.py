"""
Unit tests for image I/O, resize and the synthetic sample image.
"""

import base64

import numpy as np
import pytest
from PIL import Image

from palettesync.errors import InvalidInputError
from palettesync.services.imaging import (
    SAMPLE_BLOCKS, decode_base64_image, decode_image_bytes, fit_to_max_width,
    load_working_rgba, make_sample_image, validate_magic_bytes
)


class TestSampleImage:
    """Test the synthetic sample image"""

    def test_shape_and_opacity(self, sample_rgba):
        assert sample_rgba.shape == (420, 640, 4)
        assert sample_rgba.dtype == np.uint8
        assert (sample_rgba[..., 3] == 255).all()

    def test_color_blocks(self, sample_rgba):
        for i, rgb in enumerate(SAMPLE_BLOCKS):
            assert tuple(sample_rgba[100, i * 160 + 80, :3]) == rgb

    def test_gradient_starts_dark(self, sample_rgba):
        assert tuple(sample_rgba[210, 0, :3]) == (17, 24, 39)
        # far corner is close to the light end
        r, g, b = (int(c) for c in sample_rgba[419, 639, :3])
        assert abs(r - 147) <= 2 and abs(g - 197) <= 2 and abs(b - 253) <= 2

    def test_custom_size(self):
        assert make_sample_image(320, 200).shape == (200, 320, 4)


class TestFitToMaxWidth:
    def test_downscales_preserving_aspect(self):
        image = Image.new("RGBA", (640, 420))
        resized = fit_to_max_width(image, 350)
        assert resized.size == (350, 230)

    def test_narrow_images_untouched(self):
        image = Image.new("RGBA", (100, 50))
        assert fit_to_max_width(image, 350) is image

    def test_dimensions_at_least_one(self):
        image = Image.new("RGBA", (1000, 1))
        assert fit_to_max_width(image, 100).size == (100, 1)

    def test_load_working_rgba(self):
        image = Image.new("RGBA", (700, 70), (10, 20, 30, 255))
        rgba = load_working_rgba(image, 350)
        assert rgba.shape == (35, 350, 4)


class TestDecode:
    """Test byte and base64 decoding"""

    def test_decode_png(self, png_bytes, two_color_rgba):
        image = decode_image_bytes(png_bytes(two_color_rgba))
        assert image.mode == "RGBA"
        assert np.array_equal(np.array(image), two_color_rgba)

    def test_decode_base64_data_url(self, png_bytes, two_color_rgba):
        b64 = base64.b64encode(png_bytes(two_color_rgba)).decode("ascii")
        image = decode_base64_image(f"data:image/png;base64,{b64}")
        assert image.size == (8, 8)

    def test_invalid_base64(self):
        with pytest.raises(InvalidInputError):
            decode_base64_image("not base64!!")

    def test_magic_bytes(self, png_bytes, two_color_rgba):
        assert validate_magic_bytes(png_bytes(two_color_rgba)) == "image/png"
        assert validate_magic_bytes(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
        with pytest.raises(InvalidInputError):
            validate_magic_bytes(b"GIF89a" + b"\x00" * 10)
        with pytest.raises(InvalidInputError):
            validate_magic_bytes(b"\x89PNG")

    def test_truncated_png(self, png_bytes, two_color_rgba):
        data = png_bytes(two_color_rgba)
        with pytest.raises(InvalidInputError):
            decode_image_bytes(data[:20])
