"""
Unit tests for theme exporters.
"""

import json
import xml.etree.ElementTree as ET

import pytest

from palettesync.errors import ConfigurationError
from palettesync.services.colors.exporters import (
    DRAWINGML_NS, EXPORT_FORMATS, color_scheme_slots, export_theme, get_exporter, to_css,
    to_figma_tokens, to_color_scheme_xml, to_office_theme, to_powerbi_theme, to_role_json,
    to_sketch_colors, to_tailwind_config
)
from palettesync.services.colors.theme import derive_theme

BLUE = (59, 130, 246)
RED = (240, 68, 68)
GREEN = (16, 185, 129)


@pytest.fixture
def theme():
    return derive_theme([BLUE, RED], "dark", "normal")


class TestCssAndJson:
    def test_css_variables(self, theme):
        css = to_css(theme)
        assert css.startswith(":root{")
        assert "--background: #0E1228;" in css
        assert "--foreground: #E7ECFF;" in css
        assert "--accent1:" in css and "--accent2:" in css
        assert "--hyperlink:" in css and "--followed:" in css

    def test_role_json(self, theme):
        roles = json.loads(to_role_json(theme))
        assert roles["background"] == "#0E1228"
        assert set(roles) == {"background", "foreground", "accent1", "accent2", "hyperlink", "followed"}


class TestPowerBI:
    def test_table_accent_falls_back_to_first(self, theme):
        data = json.loads(to_powerbi_theme(theme))
        assert data["tableAccent"] == data["dataColors"][0]
        assert len(data["dataColors"]) == 2

    def test_table_accent_third(self):
        theme = derive_theme([BLUE, RED, GREEN], "light", "normal")
        data = json.loads(to_powerbi_theme(theme))
        assert data["tableAccent"] == data["dataColors"][2]
        assert data["background"] == "#FAFCFF"


class TestColorScheme:
    def test_twelve_slots_with_fallbacks(self, theme):
        slots = color_scheme_slots(theme)
        assert list(slots) == [
            "dk1", "lt1", "dk2", "lt2", "accent1", "accent2", "accent3",
            "accent4", "accent5", "accent6", "hlink", "folHlink",
        ]
        assert slots["dk1"] == (0, 0, 0)
        assert slots["lt1"] == (255, 255, 255)
        assert slots["dk2"] == theme.background
        assert slots["accent3"] == (255, 192, 0)
        assert slots["accent6"] == (0, 176, 240)

    def test_xml_fragment(self, theme):
        xml = to_color_scheme_xml(theme)
        assert xml.count("<a:srgbClr") == 12
        assert '<a:dk1><a:srgbClr val="000000"/></a:dk1>' in xml
        assert '<a:accent3><a:srgbClr val="FFC000"/></a:accent3>' in xml

    def test_office_theme_is_well_formed(self, theme):
        root = ET.fromstring(to_office_theme(theme).encode("utf-8"))
        scheme = root.find(f".//{{{DRAWINGML_NS}}}clrScheme")
        assert scheme is not None
        assert len(list(scheme)) == 12


class TestDesignTools:
    def test_tailwind(self, theme):
        config = to_tailwind_config(theme)
        assert config.startswith("module.exports")
        assert '"background": "#0E1228"' in config

    def test_figma_tokens(self, theme):
        tokens = json.loads(to_figma_tokens(theme))
        assert tokens["PaletteSync"]["background"] == {"value": "#0E1228", "type": "color"}

    def test_sketch_colors(self, theme):
        entries = json.loads(to_sketch_colors(theme))
        names = [e["name"] for e in entries]
        assert names == ["Background", "Foreground", "Accent 1", "Accent 2", "Hyperlink", "Followed Link"]


class TestRegistry:
    def test_all_formats_render(self, theme):
        for fmt in EXPORT_FORMATS:
            assert export_theme(theme, fmt)
            exporter = get_exporter(fmt)
            assert exporter.filename and exporter.media_type

    def test_unknown_format(self, theme):
        with pytest.raises(ConfigurationError):
            export_theme(theme, "ase")
