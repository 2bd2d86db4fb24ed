"""
Unit tests for the palette session.
"""

import numpy as np
import pytest

from palettesync.errors import ConfigurationError, EmptySampleError, InvalidInputError
from palettesync.services.colors.quantizers import make_rng
from palettesync.services.colors.session import PaletteSession


@pytest.fixture
def session():
    return PaletteSession(rng=make_rng(99))


class TestPaletteSession:
    """Test session state transitions"""

    def test_starts_empty(self, session):
        assert session.palette == []
        assert session.base_color is None
        assert session.harmony == []
        assert session.theme is None

    def test_extract_replaces_palette(self, session, two_color_rgba):
        result = session.extract(two_color_rgba, k=2, algorithm="median", stride=1)
        assert sorted(session.palette) == [(0, 0, 255), (255, 0, 0)]
        assert session.last_extraction is result
        assert session.theme is not None

    def test_failed_extraction_keeps_palette(self, session, two_color_rgba):
        session.extract(two_color_rgba, k=2, algorithm="median", stride=1)
        before = list(session.palette)

        transparent = np.zeros((4, 4, 4), dtype=np.uint8)
        with pytest.raises(EmptySampleError):
            session.extract(transparent, k=2)
        with pytest.raises(ConfigurationError):
            session.extract(two_color_rgba, k=2, algorithm="octree")

        assert session.palette == before

    def test_theme_follows_mode(self, session, two_color_rgba):
        session.extract(two_color_rgba, k=2, algorithm="median", stride=1)
        dark = session.theme
        session.set_mode("light", "bold")
        light = session.theme
        assert dark.background != light.background
        assert light.background == (255, 255, 255)

    def test_invalid_mode_keeps_settings(self, session):
        with pytest.raises(ConfigurationError):
            session.set_mode("light", "extreme")
        assert (session.mode, session.strength) == ("dark", "normal")

    def test_harmony_drives_theme(self, session, two_color_rgba):
        session.extract(two_color_rgba, k=2, algorithm="median", stride=1)
        session.harmony_kind = "tetradic"
        session.use_harmony = True
        assert len(session.harmony) == 4
        assert len(session.theme.accents) == 4

    def test_failed_edit_keeps_palette(self, session, two_color_rgba):
        session.extract(two_color_rgba, k=2, algorithm="median", stride=1)
        before = list(session.palette)
        with pytest.raises(InvalidInputError):
            session.edit("remove", index=0)
        assert session.palette == before

    def test_edit_replaces_palette(self, session, two_color_rgba):
        session.extract(two_color_rgba, k=2, algorithm="median", stride=1)
        session.edit("append_random")
        assert len(session.palette) == 3
