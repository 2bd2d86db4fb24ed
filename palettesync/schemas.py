"""
PaletteSync API Schemas
Pydantic models for palette extraction, editing, harmony and theme
request/response validation.
"""
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from palettesync.config import config

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"

# A color is either "#RRGGBB" or an [r, g, b] triple; channel checks happen in the core
ColorValue = Union[str, List[int]]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field("ok", description="Service health status")
    service: str = Field("palettesync", description="Service name")
    version: str = Field(..., description="Service version")
    timestamp: Optional[int] = Field(None, description="Unix time of the check")


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str = Field(..., description="User-facing error message with a hint")


# Palette extraction

class ExtractRequest(BaseModel):
    """JSON body for extraction without a multipart upload."""
    image_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG/JPEG/WebP image, optionally as a data URL"
    )
    sample: bool = Field(
        False,
        description="Extract from the built-in synthetic sample image"
    )


class WeightedColorEntry(BaseModel):
    """Quantizer output color with its cluster size."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Cluster color as #RRGGBB")
    count: int = Field(..., ge=0, description="Number of sampled points assigned")


class ExtractTimings(BaseModel):
    """Stage timings in milliseconds."""
    decode: float = Field(..., description="Image decode and resize time")
    sampling: float = Field(..., description="Pixel sampling time")
    clustering: float = Field(..., description="Quantizer time")
    total: float = Field(..., description="End-to-end request time")


class ExtractArtifacts(BaseModel):
    """Optional extraction artifacts."""
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG strip with one chip per palette color"
    )


class ExtractResponse(BaseModel):
    """Palette extraction response."""
    request_id: str = Field(..., description="Request identifier for tracing")
    width: int = Field(..., description="Working image width in pixels")
    height: int = Field(..., description="Working image height in pixels")
    k: int = Field(..., description="Requested palette size")
    algorithm: str = Field(..., description="Quantizer used: kmeans, kmeansplus or median")
    style: str = Field(..., description="Style bias used for ordering")
    sampled_points: int = Field(..., description="Opaque points fed to the quantizer")
    palette: List[str] = Field(..., description="Style-ordered palette as #RRGGBB strings")
    weighted: List[WeightedColorEntry] = Field(..., description="Raw quantizer output")
    timings_ms: ExtractTimings = Field(..., description="Stage timings")
    artifacts: Optional[ExtractArtifacts] = Field(None, description="Optional artifacts")


# Palette editing

class EditRequest(BaseModel):
    """Palette edit request."""
    palette: List[ColorValue] = Field(..., min_length=1, description="Current palette")
    op: str = Field(
        ...,
        pattern="^(replace|remove|append_random|sort|shuffle)$",
        description="Edit operation"
    )
    index: Optional[int] = Field(None, description="Target index for replace/remove")
    color: Optional[ColorValue] = Field(None, description="New color for replace")
    by: Optional[str] = Field(None, description="Sort key: hue, saturation or lightness")
    seed: Optional[int] = Field(None, description="Random seed for append/shuffle")


class PaletteResponse(BaseModel):
    """A palette of hex colors."""
    palette: List[str] = Field(..., description="Palette as #RRGGBB strings")


class SheetRequest(BaseModel):
    """Palette sheet rendering request."""
    palette: List[ColorValue] = Field(..., min_length=1, description="Palette to render")
    title: str = Field("PaletteSync Export", max_length=80, description="Sheet heading")


# Harmony

class HarmonyRequest(BaseModel):
    """Harmony generation request."""
    base: ColorValue = Field(..., description="Base color")
    kind: str = Field(
        "complementary",
        description="none, complementary, analogous, triadic, tetradic or monochrome"
    )


class HarmonyResponse(BaseModel):
    """Harmony generation response."""
    base: str = Field(..., pattern=HEX_PATTERN, description="Normalized base color")
    kind: str = Field(..., description="Harmony kind")
    colors: List[str] = Field(..., description="Harmony colors as #RRGGBB strings")


# Theme

class ThemeRequest(BaseModel):
    """Theme derivation request."""
    palette: List[ColorValue] = Field(default_factory=list, description="Source palette")
    mode: str = Field(config.DEFAULT_MODE, description="dark or light")
    strength: str = Field(config.DEFAULT_STRENGTH, description="soft, normal or bold")
    harmony: str = Field("none", description="Harmony kind built from the base color")
    base_index: int = Field(0, ge=0, description="Palette index of the harmony base color")
    use_harmony: bool = Field(False, description="Derive the theme from the harmony colors")


class ThemeResponse(BaseModel):
    """Derived theme roles."""
    mode: str = Field(..., description="Theme mode")
    strength: str = Field(..., description="Background strength")
    source: str = Field(..., description="palette or harmony")
    roles: Optional[Dict[str, str]] = Field(
        None,
        description="Role name to #RRGGBB; null when the source palette is empty"
    )
