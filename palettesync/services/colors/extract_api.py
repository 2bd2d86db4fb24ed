"""
Palette Extraction API Orchestrator

Handles the upload, base64 and sample input modes for palette extraction.
Coordinates decoding, working-width resize, the extraction pipeline and
optional swatch rendering, with request-scoped logging and metrics.
"""

import time
from typing import Any, Dict, Optional

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from PIL import Image

from palettesync.config import config
from palettesync.errors import InvalidInputError, PaletteSyncError
from palettesync.schemas import (
    EditRequest, ExtractRequest, ExtractResponse, PaletteResponse, SheetRequest
)
from palettesync.services.colors.colorspace import parse_color, rgb_to_hex
from palettesync.services.colors.editing import apply_edit
from palettesync.services.colors.extraction import extract_palette
from palettesync.services.colors.quantizers import make_rng
from palettesync.services.colors.swatches import render_palette_sheet, render_swatch_strip
from palettesync.services.imaging import (
    decode_base64_image, load_working_rgba, make_sample_image, read_upload
)
from palettesync.utils.ids import generate_request_id
from palettesync.utils.logging import get_logger
from palettesync.utils.metrics import get_metrics

logger = get_logger()


def _resolve_seed(seed: Optional[int]) -> Optional[int]:
    return seed if seed is not None else config.RNG_SEED


async def _load_rgba(file: Optional[UploadFile], body: Optional[ExtractRequest],
                     max_width: int):
    """Decode the request image into a working-width RGBA array."""
    if file is not None:
        mode, image = "upload", await read_upload(file)
    elif body is not None and body.image_b64:
        mode, image = "base64", decode_base64_image(body.image_b64)
    elif body is not None and body.sample:
        mode, image = "sample", Image.fromarray(make_sample_image())
    else:
        raise InvalidInputError("No image provided",
                                "Upload a file, send image_b64, or set sample to true")

    return mode, load_working_rgba(image, max_width)


async def handle_extract(
    file: Optional[UploadFile] = None,
    body: Optional[ExtractRequest] = None,
    params: Optional[Dict[str, Any]] = None
) -> ExtractResponse:
    """
    Main orchestrator for palette extraction.

    Args:
        file: Uploaded image (multipart mode)
        body: JSON request with image_b64 or the sample flag
        params: Extraction parameters (k, style, algorithm, seed, max_width,
            stride, include_swatch)

    Returns:
        ExtractResponse with the style-ordered palette

    Raises:
        PaletteSyncError: For invalid input, unknown options or empty samples
        HTTPException: For rejected uploads
    """
    params = params or {}
    request_id = generate_request_id("extract")
    start_time = time.time()
    metrics = get_metrics()
    metrics.increment_request_count("extract")

    k = params.get("k", config.DEFAULT_K)
    style = params.get("style", config.DEFAULT_STYLE)
    algorithm = params.get("algorithm", config.DEFAULT_ALGORITHM)
    max_width = params.get("max_width", config.MAX_WIDTH)
    stride = params.get("stride", config.SAMPLE_STRIDE)
    include_swatch = params.get("include_swatch", False)
    seed = _resolve_seed(params.get("seed"))

    logger.info("Starting palette extraction", extra={"request_id": request_id})

    try:
        if not config.validate_k(k):
            raise InvalidInputError(f"k must be between 1 and {config.MAX_K}, got {k}")
        if not config.validate_max_width(max_width):
            raise InvalidInputError(f"max_width must be between 16 and 2048, got {max_width}")
        if not config.validate_stride(stride):
            raise InvalidInputError(f"stride must be between 1 and 64, got {stride}")

        mode, rgba = await _load_rgba(file, body, max_width)
        decode_ms = (time.time() - start_time) * 1000

        logger.info(f"Input processing complete: {mode} mode",
                    extra={"request_id": request_id, "ms_decode": decode_ms})

        result = await run_in_threadpool(
            extract_palette,
            rgba,
            k=k,
            style=style,
            algorithm=algorithm,
            rng=make_rng(seed),
            stride=stride,
            alpha_threshold=config.ALPHA_THRESHOLD,
        )

        artifacts = None
        if include_swatch:
            artifacts = {"swatch_png_b64": render_swatch_strip(result.palette)}

        total_ms = (time.time() - start_time) * 1000

        response = ExtractResponse(
            request_id=request_id,
            width=result.width,
            height=result.height,
            k=result.k,
            algorithm=result.algorithm,
            style=result.style,
            sampled_points=result.sampled_points,
            palette=result.hex_palette,
            weighted=[{"hex": rgb_to_hex(wc.rgb), "count": wc.count} for wc in result.weighted],
            timings_ms={
                "decode": decode_ms,
                "sampling": result.timings_ms["sampling"],
                "clustering": result.timings_ms["clustering"],
                "total": total_ms,
            },
            artifacts=artifacts,
        )

        logger.info("Palette extraction completed successfully",
                    extra={
                        "request_id": request_id,
                        "mode": mode,
                        "dims": f"{result.width}x{result.height}",
                        "k": k,
                        "algorithm": algorithm,
                        "style": style,
                        "sampled_points": result.sampled_points,
                        "ms_total": total_ms,
                        "result": "ok"
                    })

        metrics.increment_algorithm_count(algorithm)
        metrics.record_timing("extract", total_ms)
        metrics.record_timing("clustering", result.timings_ms["clustering"])
        metrics.record_palette_size(len(result.palette))

        return response

    except Exception as e:
        error_ms = (time.time() - start_time) * 1000
        logger.error(f"Palette extraction failed: {str(e)}",
                     extra={
                         "request_id": request_id,
                         "ms_total": error_ms,
                         "result": "error",
                         "error_type": type(e).__name__
                     })
        metrics.increment_failure_count(type(e).__name__.lower())
        raise


def handle_edit(request: EditRequest) -> PaletteResponse:
    """Apply one palette edit and return the new palette."""
    request_id = generate_request_id("edit")
    metrics = get_metrics()
    metrics.increment_request_count("edit")

    try:
        palette = [parse_color(c) for c in request.palette]
        edited = apply_edit(
            palette,
            request.op,
            index=request.index,
            color=request.color,
            by=request.by,
            rng=make_rng(_resolve_seed(request.seed)),
        )
    except PaletteSyncError as e:
        logger.warning(f"Palette edit rejected: {e.message}",
                       extra={"request_id": request_id, "op": request.op})
        metrics.increment_failure_count(type(e).__name__.lower())
        raise

    logger.info(f"Palette edit applied: {request.op}",
                extra={"request_id": request_id, "size": len(edited)})
    return PaletteResponse(palette=[rgb_to_hex(c) for c in edited])


def handle_sheet(request: SheetRequest) -> bytes:
    """Render a palette as a labelled PNG sheet."""
    request_id = generate_request_id("sheet")
    get_metrics().increment_request_count("sheet")

    palette = [parse_color(c) for c in request.palette]
    png = render_palette_sheet(palette, title=request.title)

    logger.info("Palette sheet rendered",
                extra={"request_id": request_id, "colors": len(palette), "bytes": len(png)})
    return png
