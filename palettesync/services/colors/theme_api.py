"""
Harmony and Theme API Orchestrator

Builds harmonies, derives themes and renders theme exports for the HTTP
layer. Requests carry the whole palette and settings, so each call works on
its own PaletteSession.
"""

import time
from typing import Optional, Tuple

from palettesync.errors import InvalidInputError, PaletteSyncError
from palettesync.schemas import HarmonyRequest, HarmonyResponse, ThemeRequest, ThemeResponse
from palettesync.services.colors.colorspace import parse_color, rgb_to_hex
from palettesync.services.colors.exporters import ExportFormat, get_exporter
from palettesync.services.colors.harmony import make_harmony
from palettesync.services.colors.session import PaletteSession
from palettesync.services.colors.theme import Theme
from palettesync.utils.ids import generate_request_id
from palettesync.utils.logging import get_logger
from palettesync.utils.metrics import get_metrics

logger = get_logger()


def handle_harmony(request: HarmonyRequest) -> HarmonyResponse:
    """Generate harmony colors for one base color."""
    request_id = generate_request_id("harmony")
    get_metrics().increment_request_count("harmony")

    base = parse_color(request.base)
    colors = make_harmony(base, request.kind)

    logger.info(f"Harmony generated: {request.kind}",
                extra={"request_id": request_id, "base": rgb_to_hex(base), "count": len(colors)})

    return HarmonyResponse(
        base=rgb_to_hex(base),
        kind=request.kind,
        colors=[rgb_to_hex(c) for c in colors]
    )


def build_session(request: ThemeRequest) -> PaletteSession:
    """
    Session holding the request's palette and settings.

    Raises:
        InvalidInputError: Bad colors or base_index past the palette end
        ConfigurationError: Unknown mode, strength or harmony kind
    """
    session = PaletteSession(
        mode=request.mode,
        strength=request.strength,
        harmony_kind=request.harmony,
        use_harmony=request.use_harmony,
    )
    session.palette = [parse_color(c) for c in request.palette]

    if session.palette and request.base_index >= len(session.palette):
        raise InvalidInputError(
            f"base_index {request.base_index} out of range for palette of {len(session.palette)}"
        )
    session.base_index = request.base_index
    return session


def _derive(request: ThemeRequest, request_id: str) -> Tuple[PaletteSession, Optional[Theme]]:
    start_time = time.time()
    try:
        session = build_session(request)
        theme = session.theme
    except PaletteSyncError as e:
        logger.warning(f"Theme derivation rejected: {e.message}", extra={"request_id": request_id})
        get_metrics().increment_failure_count(type(e).__name__.lower())
        raise

    get_metrics().record_timing("theme", (time.time() - start_time) * 1000)
    return session, theme


def handle_theme(request: ThemeRequest) -> ThemeResponse:
    """Derive theme roles from a palette or its harmony."""
    request_id = generate_request_id("theme")
    get_metrics().increment_request_count("theme")

    session, theme = _derive(request, request_id)
    source = "harmony" if request.use_harmony and session.harmony else "palette"

    logger.info(f"Theme derived: {request.mode}/{request.strength} from {source}",
                extra={"request_id": request_id, "empty": theme is None})

    return ThemeResponse(
        mode=request.mode,
        strength=request.strength,
        source=source,
        roles=theme.hex_roles() if theme is not None else None
    )


def handle_export(request: ThemeRequest, fmt: str) -> Tuple[str, ExportFormat]:
    """
    Render the derived theme in an export format.

    Returns:
        Export text and its format descriptor (filename, media type)

    Raises:
        ConfigurationError: Unknown export format
        InvalidInputError: Empty palette, nothing to export
    """
    request_id = generate_request_id("export")
    get_metrics().increment_request_count("export")

    exporter = get_exporter(fmt)
    _, theme = _derive(request, request_id)
    if theme is None:
        raise InvalidInputError("Nothing to export", "Extract or enter a palette first")

    content = exporter.render(theme)
    logger.info(f"Theme exported: {fmt}",
                extra={"request_id": request_id, "bytes": len(content)})
    return content, exporter
