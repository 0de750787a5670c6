"""
Test configuration and fixtures for SkinTone analysis tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app
from skintone.services.analyzer import SkinToneAnalyzer, get_analyzer
from skintone.services.pixels import PixelBuffer

WARM_SKIN = (180, 140, 110)


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_state():
    """Reset metrics and the shared consistency cache before each test."""
    from skintone.utils.metrics import reset_metrics
    reset_metrics()
    get_analyzer().cache.clear()
    yield
    get_analyzer().cache.clear()


@pytest.fixture
def analyzer():
    """Fresh analyzer with a private cache."""
    return SkinToneAnalyzer()


@pytest.fixture
def warm_image():
    """100x100 image filled with a mid-tone warm skin colour."""
    return PixelBuffer.filled(100, 100, WARM_SKIN)


@pytest.fixture
def black_image():
    """100x100 all-black image."""
    return PixelBuffer.filled(100, 100, (0, 0, 0))


@pytest.fixture
def portrait_rgb():
    """
    120x120 synthetic portrait: a skin-coloured disc of radius 30 on a dark
    blue background, centred in the frame.
    """
    img = np.zeros((120, 120, 3), dtype=np.uint8)
    img[:, :] = (30, 40, 90)
    ys, xs = np.mgrid[0:120, 0:120]
    disc = np.hypot(xs - 60, ys - 60) < 30
    img[disc] = (190, 150, 120)
    return img


@pytest.fixture
def png_bytes():
    """Factory encoding an (h, w, 3) RGB array as PNG bytes."""
    def _encode(rgb: np.ndarray, fmt: str = "PNG") -> bytes:
        output = io.BytesIO()
        Image.fromarray(np.asarray(rgb, dtype=np.uint8), mode="RGB").save(output, format=fmt)
        return output.getvalue()
    return _encode
