"""
Unit tests for palette editing operations.
"""

import pytest

from palettesync.errors import ConfigurationError, InvalidInputError
from palettesync.services.colors.colorspace import rgb_to_hsl
from palettesync.services.colors.editing import (
    MIN_PALETTE_SIZE, append_random_color, apply_edit, remove_color, replace_color,
    shuffle_palette, sort_palette
)
from palettesync.services.colors.quantizers import make_rng

PALETTE = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (128, 128, 128)]


class TestReplaceColor:
    def test_replace_with_hex(self):
        edited = replace_color(PALETTE, 1, "#FFAA00")
        assert edited[1] == (255, 170, 0)
        assert PALETTE[1] == (0, 255, 0)

    def test_replace_with_triple(self):
        assert replace_color(PALETTE, 0, [1, 2, 3])[0] == (1, 2, 3)

    def test_invalid_color(self):
        with pytest.raises(InvalidInputError):
            replace_color(PALETTE, 0, [300, 0, 0])

    def test_index_out_of_range(self):
        with pytest.raises(InvalidInputError):
            replace_color(PALETTE, 9, "#000000")


class TestRemoveColor:
    def test_remove(self):
        edited = remove_color(PALETTE, 0)
        assert edited == PALETTE[1:]
        assert len(PALETTE) == 4

    def test_refuses_at_minimum_size(self):
        palette = PALETTE[:MIN_PALETTE_SIZE]
        with pytest.raises(InvalidInputError) as exc_info:
            remove_color(palette, 0)
        assert "at least 3" in exc_info.value.to_detail()

    def test_bad_index(self):
        with pytest.raises(InvalidInputError):
            remove_color(PALETTE, -1)


class TestRandomEdits:
    def test_append_random(self):
        edited = append_random_color(PALETTE, make_rng(1))
        assert len(edited) == len(PALETTE) + 1
        assert edited[:-1] == PALETTE
        assert all(0 <= c <= 255 for c in edited[-1])

    def test_append_is_reproducible(self):
        assert append_random_color(PALETTE, make_rng(5)) == append_random_color(PALETTE, make_rng(5))

    def test_shuffle_keeps_colors(self):
        shuffled = shuffle_palette(PALETTE, make_rng(3))
        assert sorted(shuffled) == sorted(PALETTE)
        assert len(PALETTE) == 4


class TestSortPalette:
    def test_sort_by_hue(self):
        edited = sort_palette([(0, 0, 255), (0, 255, 0), (255, 0, 0)], "hue")
        assert edited == [(255, 0, 0), (0, 255, 0), (0, 0, 255)]

    def test_sort_by_lightness(self):
        edited = sort_palette(PALETTE + [(10, 10, 10)], "lightness")
        lightness = [rgb_to_hsl(*c)[2] for c in edited]
        assert lightness == sorted(lightness)
        assert edited[0] == (10, 10, 10)

    def test_sort_is_stable(self):
        """Pure hues share saturation 100, so their order is kept"""
        edited = sort_palette(PALETTE, "saturation")
        assert edited == [(128, 128, 128), (255, 0, 0), (0, 255, 0), (0, 0, 255)]

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            sort_palette(PALETTE, "warmth")


class TestApplyEdit:
    def test_dispatch(self):
        assert apply_edit(PALETTE, "sort", by="hue")[0] == (255, 0, 0)
        assert len(apply_edit(PALETTE, "remove", index=3)) == 3

    def test_replace_needs_color(self):
        with pytest.raises(InvalidInputError):
            apply_edit(PALETTE, "replace", index=0)

    def test_unknown_operation(self):
        with pytest.raises(ConfigurationError):
            apply_edit(PALETTE, "invert")
