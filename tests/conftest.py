"""
Shared fixtures for the Sobel band filter tests.
"""
from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage


@pytest.fixture
def noise_pixels() -> np.ndarray:
    """19 rows x 23 columns of seeded noise. 19 is prime, so most worker counts leave a remainder."""
    return np.random.default_rng(1234).integers(0, 256, size=(19, 23), dtype=np.uint8)


@pytest.fixture
def vertical_edge_pixels() -> np.ndarray:
    """4x4 image: left two columns 0, right two columns 255."""
    pixels = np.zeros((4, 4), dtype=np.uint8)
    pixels[:, 2:] = 255
    return pixels


@pytest.fixture
def noise_png(tmp_path, noise_pixels) -> Path:
    path = tmp_path / "noise.png"
    PILImage.fromarray(noise_pixels).save(path)
    return path
