"""
Theme exporters.

Serialize a derived Theme into formats consumed by design and office tools:
CSS custom properties, role JSON, Power BI, OOXML color scheme / theme,
Tailwind config, Figma tokens and Sketch colors.
"""

import json
from dataclasses import dataclass
from typing import Callable, Dict, Tuple
from xml.sax.saxutils import quoteattr

from ...errors import ConfigurationError
from .colorspace import ColorRGB, adjust_luma, rgb_to_hex
from .theme import Theme

THEME_NAME = "PaletteSync Theme"

# accent1..accent6 when the theme has fewer accents (Office defaults)
OFFICE_ACCENT_FALLBACKS: Tuple[ColorRGB, ...] = (
    (0, 112, 192),
    (112, 48, 160),
    (255, 192, 0),
    (255, 0, 0),
    (112, 173, 71),
    (0, 176, 240),
)

POWERBI_TABLE_ACCENT_FALLBACK: ColorRGB = (0, 122, 204)

# lt2 is the background lightened by this factor
OFFICE_LT2_FACTOR = 1.4

DRAWINGML_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"


def _srgb(rgb: ColorRGB) -> str:
    return rgb_to_hex(rgb).lstrip("#")


def to_css(theme: Theme) -> str:
    """CSS custom properties on :root."""
    lines = [f"  --{name}: {value};" for name, value in theme.hex_roles().items()]
    return ":root{\n" + "\n".join(lines) + "\n}"


def to_role_json(theme: Theme) -> str:
    """Flat role -> hex JSON map."""
    return json.dumps(theme.hex_roles(), indent=2)


def to_powerbi_theme(theme: Theme) -> str:
    accents = theme.accents
    if len(accents) > 2:
        table_accent = accents[2]
    elif accents:
        table_accent = accents[0]
    else:
        table_accent = POWERBI_TABLE_ACCENT_FALLBACK

    return json.dumps({
        "name": THEME_NAME,
        "foreground": rgb_to_hex(theme.foreground),
        "background": rgb_to_hex(theme.background),
        "tableAccent": rgb_to_hex(table_accent),
        "dataColors": [rgb_to_hex(a) for a in accents],
    }, indent=2)


def color_scheme_slots(theme: Theme) -> Dict[str, ColorRGB]:
    """The 12 OOXML color scheme slots in document order."""
    slots = {
        "dk1": (0, 0, 0),
        "lt1": (255, 255, 255),
        "dk2": theme.background,
        "lt2": adjust_luma(theme.background, OFFICE_LT2_FACTOR),
    }
    for i, accent in enumerate(theme.accent_slots(6, OFFICE_ACCENT_FALLBACKS)):
        slots[f"accent{i + 1}"] = accent
    slots["hlink"] = theme.hyperlink
    slots["folHlink"] = theme.followed_hyperlink
    return slots


def to_color_scheme_xml(theme: Theme, name: str = "PaletteSync Colors", indent: str = "") -> str:
    """An <a:clrScheme> fragment."""
    lines = [f"{indent}<a:clrScheme name={quoteattr(name)}>"]
    for slot, rgb in color_scheme_slots(theme).items():
        lines.append(f'{indent}  <a:{slot}><a:srgbClr val="{_srgb(rgb)}"/></a:{slot}>')
    lines.append(f"{indent}</a:clrScheme>")
    return "\n".join(lines)


def to_office_theme(theme: Theme) -> str:
    """Full <a:theme> document (theme1.xml of a .thmx package)."""
    scheme = to_color_scheme_xml(theme, indent="    ")
    return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<a:theme xmlns:a="{DRAWINGML_NS}" name={quoteattr(THEME_NAME)}>
  <a:themeElements>
{scheme}
    <a:fontScheme name="PaletteSync Fonts">
      <a:majorFont>
        <a:latin typeface="Calibri"/>
        <a:ea typeface=""/>
        <a:cs typeface=""/>
      </a:majorFont>
      <a:minorFont>
        <a:latin typeface="Calibri"/>
        <a:ea typeface=""/>
        <a:cs typeface=""/>
      </a:minorFont>
    </a:fontScheme>
    <a:fmtScheme name="PaletteSync Formats">
      <a:fillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
      </a:fillStyleLst>
      <a:lnStyleLst>
        <a:ln w="6350"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill></a:ln>
        <a:ln w="12700"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill></a:ln>
        <a:ln w="19050"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill></a:ln>
      </a:lnStyleLst>
      <a:effectStyleLst>
        <a:effectStyle><a:effectLst/></a:effectStyle>
        <a:effectStyle><a:effectLst/></a:effectStyle>
        <a:effectStyle><a:effectLst/></a:effectStyle>
      </a:effectStyleLst>
      <a:bgFillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
      </a:bgFillStyleLst>
    </a:fmtScheme>
  </a:themeElements>
  <a:objectDefaults/>
  <a:extraClrSchemeLst/>
</a:theme>"""


def to_tailwind_config(theme: Theme) -> str:
    colors = json.dumps(theme.hex_roles(), indent=6)
    return f"""module.exports = {{
  theme: {{
    extend: {{
      colors: {colors}
    }}
  }}
}}"""


def to_figma_tokens(theme: Theme) -> str:
    tokens = {name: {"value": value, "type": "color"} for name, value in theme.hex_roles().items()}
    return json.dumps({"PaletteSync": tokens}, indent=2)


def to_sketch_colors(theme: Theme) -> str:
    entries = [
        {"name": "Background", "color": rgb_to_hex(theme.background)},
        {"name": "Foreground", "color": rgb_to_hex(theme.foreground)},
    ]
    entries += [{"name": f"Accent {i + 1}", "color": rgb_to_hex(a)} for i, a in enumerate(theme.accents)]
    entries += [
        {"name": "Hyperlink", "color": rgb_to_hex(theme.hyperlink)},
        {"name": "Followed Link", "color": rgb_to_hex(theme.followed_hyperlink)},
    ]
    return json.dumps(entries, indent=2)


@dataclass(frozen=True)
class ExportFormat:
    render: Callable[[Theme], str]
    filename: str
    media_type: str


EXPORTERS: Dict[str, ExportFormat] = {
    "css": ExportFormat(to_css, "palette.css", "text/css"),
    "json": ExportFormat(to_role_json, "palette-roles.json", "application/json"),
    "powerbi": ExportFormat(to_powerbi_theme, "palette-powerbi.json", "application/json"),
    "clrscheme": ExportFormat(to_color_scheme_xml, "color-scheme.xml", "application/xml"),
    "office": ExportFormat(to_office_theme, "office-theme.xml", "application/xml"),
    "tailwind": ExportFormat(to_tailwind_config, "tailwind-colors.js", "text/javascript"),
    "figma": ExportFormat(to_figma_tokens, "figma-tokens.json", "application/json"),
    "sketch": ExportFormat(to_sketch_colors, "sketch-colors.json", "application/json"),
}

EXPORT_FORMATS = tuple(EXPORTERS)


def get_exporter(fmt: str) -> ExportFormat:
    try:
        return EXPORTERS[fmt]
    except KeyError:
        raise ConfigurationError(f"Unknown export format: {fmt!r}",
                                 f"Choose one of: {', '.join(EXPORT_FORMATS)}")


def export_theme(theme: Theme, fmt: str) -> str:
    """Render a theme in the named export format."""
    return get_exporter(fmt).render(theme)
