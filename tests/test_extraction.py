"""
Unit tests for the palette extraction pipeline.
"""

import numpy as np
import pytest

from palettesync.errors import ConfigurationError, EmptySampleError, InvalidInputError
from palettesync.services.colors.extraction import extract_palette
from palettesync.services.colors.quantizers import make_rng


class TestExtractPalette:
    """Test sampler -> quantizer -> style scorer"""

    def test_two_color_image(self, two_color_rgba):
        result = extract_palette(two_color_rgba, k=2, algorithm="median", stride=1)
        assert sorted(result.palette) == [(0, 0, 255), (255, 0, 0)]
        assert result.sampled_points == 64
        assert (result.width, result.height) == (8, 8)
        assert sorted(result.hex_palette) == ["#0000FF", "#FF0000"]
        assert set(result.timings_ms) == {"sampling", "clustering", "total"}

    def test_flat_buffer_input(self, two_color_rgba):
        result = extract_palette(two_color_rgba.tobytes(), k=2, algorithm="median",
                                 stride=1, width=8, height=8)
        assert len(result.palette) == 2

    def test_seeded_runs_match(self, sample_rgba):
        first = extract_palette(sample_rgba, k=6, style="vibrant", rng=make_rng(7))
        second = extract_palette(sample_rgba, k=6, style="vibrant", rng=make_rng(7))
        assert first.palette == second.palette

    def test_sample_image_palette_size(self, sample_rgba):
        result = extract_palette(sample_rgba, k=8, algorithm="median")
        assert 1 <= len(result.palette) <= 8

    def test_options_validated_before_pixels(self):
        """Unknown names fail even when the pixel buffer is unusable"""
        with pytest.raises(ConfigurationError):
            extract_palette(b"", algorithm="octree")
        with pytest.raises(ConfigurationError):
            extract_palette(b"", style="neon")
        with pytest.raises(InvalidInputError):
            extract_palette(b"", k=0)

    def test_transparent_image(self):
        with pytest.raises(EmptySampleError):
            extract_palette(np.zeros((6, 6, 4), dtype=np.uint8))
