"""
Pytest fixtures for expblur tests
"""

import numpy as np
import pytest


@pytest.fixture
def noise_image():
    """Factory for reproducible random RGBA images of shape (H, W, 4)."""

    def make(width: int = 8, height: int = 8, seed: int = 1234) -> np.ndarray:
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)

    return make


@pytest.fixture
def step_row() -> np.ndarray:
    """Single 16-pixel row: red steps from 0 to 255 halfway, alpha opaque."""
    row = np.zeros((1, 16, 4), dtype=np.uint8)
    row[0, 8:, 0] = 255
    row[0, :, 3] = 255
    return row


@pytest.fixture
def test_client():
    """TestClient for FastAPI unit testing without a server."""
    from starlette.testclient import TestClient
    from expblur.api import create_api_app

    app = create_api_app()
    with TestClient(app) as client:
        yield client
