"""Shared fixtures: small images written with Pillow."""
import numpy as np
import pytest
from PIL import Image

RGBW = [
    [(255, 0, 0), (0, 255, 0)],
    [(0, 0, 255), (255, 255, 255)],
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env / shell settings out of the tests."""
    for var in ("IMAGE_CODEC", "JPEG_QUALITY", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def rgbw_png(tmp_path):
    """2x2 PNG: red, green / blue, white."""
    path = tmp_path / "rgbw.png"
    Image.fromarray(np.array(RGBW, dtype=np.uint8)).save(path)
    return path


@pytest.fixture
def noise_pixels():
    rng = np.random.default_rng(4471)
    return rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
