from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables before the config class reads them
load_dotenv()

from palettesync import __version__
from palettesync.api.v1 import router as v1_router
from palettesync.config import config
from palettesync.errors import ConfigurationError, EmptySampleError, InvalidInputError, PaletteSyncError
from palettesync.schemas import ErrorResponse, HealthResponse
from palettesync.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="PaletteSync Backend",
    description="Palette extraction and theme derivation API",
    version=__version__
)

# Add CORS middleware with basic configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)

app.include_router(v1_router)

# Status codes for recoverable errors raised by the color core
ERROR_STATUS = {
    InvalidInputError: 400,
    ConfigurationError: 400,
    EmptySampleError: 422,
}


@app.exception_handler(PaletteSyncError)
async def palettesync_error_handler(request: Request, exc: PaletteSyncError):
    """Map core errors to HTTP responses with a user-facing detail."""
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.warning(f"Request failed: {exc.message}",
                   extra={"path": request.url.path, "error_type": type(exc).__name__,
                          "status": status_code})
    return JSONResponse(status_code=status_code,
                        content=ErrorResponse(detail=exc.to_detail()).model_dump())


@app.get("/healthz", response_model=HealthResponse, response_model_exclude_none=True)
def health_check() -> HealthResponse:
    """Health check endpoint"""
    return HealthResponse(service="palettesync-backend", version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "PaletteSync Backend API",
        "version": __version__,
        "docs": "/docs"
    }
