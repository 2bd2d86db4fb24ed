"""
PaletteSync Configuration
Manages environment variables and defaults for extraction and theme services.
"""
import os
from typing import List, Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else None


class Config:
    """Configuration class for PaletteSync services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTESYNC_MAX_FILE_MB", "10"))

    # Sampling defaults
    MAX_WIDTH: int = int(os.environ.get("PALETTESYNC_MAX_WIDTH", "350"))
    SAMPLE_STRIDE: int = int(os.environ.get("PALETTESYNC_SAMPLE_STRIDE", "6"))
    ALPHA_THRESHOLD: int = int(os.environ.get("PALETTESYNC_ALPHA_THRESHOLD", "200"))

    # Quantization defaults
    DEFAULT_K: int = int(os.environ.get("PALETTESYNC_DEFAULT_K", "8"))
    MAX_K: int = int(os.environ.get("PALETTESYNC_MAX_K", "16"))
    DEFAULT_STYLE: str = os.environ.get("PALETTESYNC_DEFAULT_STYLE", "auto")
    DEFAULT_ALGORITHM: str = os.environ.get("PALETTESYNC_DEFAULT_ALGORITHM", "kmeans")
    RNG_SEED: Optional[int] = _optional_int("PALETTESYNC_RNG_SEED")

    # Theme defaults
    DEFAULT_MODE: str = os.environ.get("PALETTESYNC_DEFAULT_MODE", "dark")
    DEFAULT_STRENGTH: str = os.environ.get("PALETTESYNC_DEFAULT_STRENGTH", "normal")

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("PALETTESYNC_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTESYNC_METRICS_ENABLED", "1")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "PALETTESYNC_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """Parse the comma-separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def validate_k(cls, k: int) -> bool:
        """Validate requested palette size."""
        return 1 <= k <= cls.MAX_K

    @classmethod
    def validate_max_width(cls, max_width: int) -> bool:
        """Validate working width for sampling."""
        return 16 <= max_width <= 2048

    @classmethod
    def validate_stride(cls, stride: int) -> bool:
        """Validate pixel sampling stride."""
        return 1 <= stride <= 64


# Global config instance
config = Config()
