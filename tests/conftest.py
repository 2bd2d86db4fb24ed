"""
Test configuration and fixtures for PaletteSync tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app
from palettesync.services.colors.quantizers import make_rng
from palettesync.services.imaging import make_sample_image
from palettesync.utils.metrics import reset_metrics as _reset_metrics


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def rng():
    """Seeded random generator for reproducible quantization."""
    return make_rng(1234)


@pytest.fixture(scope="session")
def sample_rgba():
    """Full-size synthetic sample image (640x420 RGBA)."""
    return make_sample_image()


@pytest.fixture
def two_color_rgba():
    """8x8 RGBA image: left half red, right half blue, fully opaque."""
    img = np.zeros((8, 8, 4), dtype=np.uint8)
    img[:, :4] = (255, 0, 0, 255)
    img[:, 4:] = (0, 0, 255, 255)
    return img


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    _reset_metrics()


def encode_png(rgba: np.ndarray) -> bytes:
    """PNG-encode an RGBA array."""
    buffer = io.BytesIO()
    Image.fromarray(rgba).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """Helper turning an RGBA array into PNG bytes."""
    return encode_png
