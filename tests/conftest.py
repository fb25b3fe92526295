"""
Test configuration and fixtures for colorpalette tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app
from colorpalette.utils.metrics import reset_metrics as _reset_metrics


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    _reset_metrics()


@pytest.fixture
def encode_png():
    """Return a helper encoding an RGB(A) uint8 array as PNG bytes."""
    def _encode(array: np.ndarray) -> bytes:
        buffer = io.BytesIO()
        Image.fromarray(array).save(buffer, format="PNG")
        return buffer.getvalue()
    return _encode


@pytest.fixture
def striped_image():
    """100x100 RGB image: 50% red, 30% green, 20% blue vertical stripes."""
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    image[:, :50] = (255, 0, 0)
    image[:, 50:80] = (0, 255, 0)
    image[:, 80:] = (0, 0, 255)
    return image
