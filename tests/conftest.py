"""
Pytest configuration and shared fixtures for Raster Edit tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def gradient_image():
    """
    Provide a 16x12 RGBA image where every pixel is distinct.

    Returns:
        PIL Image with R = x * 16, G = y * 20, B = 255 - x * 16 and varying alpha
    """
    pixels = np.zeros((12, 16, 4), dtype=np.uint8)
    for y in range(12):
        for x in range(16):
            pixels[y, x] = (x * 16, y * 20, 255 - x * 16, 55 + x * 10)
    return Image.fromarray(pixels)


@pytest.fixture
def noise_image():
    """
    Provide a 32x24 RGBA image filled with seeded random values.

    Returns:
        PIL Image with pseudo-random RGBA pixels
    """
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)
    return Image.fromarray(pixels)
