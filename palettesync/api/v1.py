"""
PaletteSync v1 API Routes
Implements palette extraction, editing, harmony, theme and export endpoints.
"""
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from palettesync import __version__
from palettesync.config import config
from palettesync.schemas import (
    EditRequest, ErrorResponse, ExtractRequest, ExtractResponse, HarmonyRequest, HarmonyResponse,
    HealthResponse, PaletteResponse, SheetRequest, ThemeRequest, ThemeResponse
)
from palettesync.services.colors.exporters import EXPORT_FORMATS
from palettesync.services.colors.extract_api import handle_edit, handle_extract, handle_sheet
from palettesync.services.colors.harmony import HARMONY_KINDS
from palettesync.services.colors.quantizers import ALGORITHMS
from palettesync.services.colors.styles import STYLES
from palettesync.services.colors.theme_api import handle_export, handle_harmony, handle_theme
from palettesync.utils.metrics import get_metrics

router = APIRouter(
    prefix="/v1",
    tags=["PaletteSync v1"],
    responses={400: {"model": ErrorResponse, "description": "Invalid input or unknown option"}}
)


async def _parse_extract_request(request: Request):
    """Split a multipart upload from a JSON body."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        file = form.get("file")
        if not isinstance(file, UploadFile):
            raise HTTPException(status_code=400, detail="Multipart requests need a 'file' field")
        return file, None

    try:
        raw = await request.json()
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Invalid request. Provide a file upload, image_b64, or sample: true."
        )

    try:
        return None, ExtractRequest.model_validate(raw)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


@router.post("/palette/extract",
             response_model=ExtractResponse,
             summary="Extract Palette",
             description="Extract an ordered color palette from an uploaded, base64 or sample image")
async def extract(
    request: Request,
    k: int = Query(config.DEFAULT_K, ge=1, le=config.MAX_K, description="Palette size"),
    style: str = Query(config.DEFAULT_STYLE, description=f"Style bias: {', '.join(STYLES)}"),
    algorithm: str = Query(config.DEFAULT_ALGORITHM,
                           description=f"Quantizer: {', '.join(ALGORITHMS)}"),
    seed: Optional[int] = Query(None, description="Random seed for the k-means family"),
    max_width: int = Query(config.MAX_WIDTH, ge=16, le=2048, description="Working width in pixels"),
    stride: int = Query(config.SAMPLE_STRIDE, ge=1, le=64, description="Pixel sampling stride"),
    include_swatch: bool = Query(False, description="Include a PNG swatch strip")
) -> ExtractResponse:
    """
    Palette extraction supporting three input modes:

    **Multipart:** `file` form field with a PNG, JPEG or WebP image.

    **Base64:** JSON body `{"image_b64": "..."}` (data URLs accepted).

    **Sample:** JSON body `{"sample": true}` uses the built-in synthetic image.
    """
    file, body = await _parse_extract_request(request)

    params: Dict[str, Any] = {
        'k': k,
        'style': style,
        'algorithm': algorithm,
        'seed': seed,
        'max_width': max_width,
        'stride': stride,
        'include_swatch': include_swatch,
    }
    return await handle_extract(file=file, body=body, params=params)


@router.post("/palette/edit",
             response_model=PaletteResponse,
             summary="Edit Palette",
             description="Replace, remove, append, sort or shuffle palette colors")
async def edit_palette(request: EditRequest) -> PaletteResponse:
    return handle_edit(request)


@router.post("/palette/sheet",
             summary="Palette Sheet",
             description="Render the palette as a labelled PNG sheet, six colors per row")
async def palette_sheet(request: SheetRequest) -> Response:
    png = await run_in_threadpool(handle_sheet, request)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": 'attachment; filename="palette.png"'}
    )


@router.post("/harmony",
             response_model=HarmonyResponse,
             summary="Color Harmony",
             description=f"Harmony kinds: {', '.join(HARMONY_KINDS)}")
async def harmony(request: HarmonyRequest) -> HarmonyResponse:
    return handle_harmony(request)


@router.post("/theme",
             response_model=ThemeResponse,
             summary="Derive Theme",
             description="Derive background, foreground, accent and link roles")
async def theme(request: ThemeRequest) -> ThemeResponse:
    return handle_theme(request)


@router.post("/theme/export",
             summary="Export Theme",
             description=f"Export formats: {', '.join(EXPORT_FORMATS)}")
async def export_theme(
    request: ThemeRequest,
    format: str = Query("css", description="Export format")
) -> Response:
    content, exporter = handle_export(request, format)
    return Response(
        content=content,
        media_type=exporter.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exporter.filename}"'}
    )


@router.get("/healthz",
            response_model=HealthResponse,
            summary="Health Check",
            description="Liveness probe")
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(version=__version__, timestamp=int(time.time()))


@router.get("/metrics",
            summary="Service Metrics",
            description="In-process counters and timing percentiles")
async def metrics() -> Dict[str, Any]:
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return get_metrics().get_summary()
