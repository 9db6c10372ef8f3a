"""
Per-pixel color adjustments for Raster Edit.

This module provides the channel arithmetic transforms. Each works on an
(H, W, 4) uint8 numpy view of an RGBA image and returns a new image; alpha
is never changed.

Functions:
    adjust_brightness: Scale R, G, B by a factor
    adjust_contrast: Stretch or squash R, G, B around mid-gray
    to_grayscale: Replace R, G, B with perceptual luma
    invert_colors: Replace R, G, B with 255 - value
"""

import math
from typing import Any

import numpy as np
from PIL import Image

from RE_Libs.constants import IMAGE_MODE, CHANNEL_MAX
from RE_Libs.ImageEditingLib.errors import OperationError

MID_GRAY = CHANNEL_MAX / 2.0

# sRGB luma weights scaled by 10000
SRGB_LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.uint32)
SRGB_LUMA_DIVISOR = 10000


def _rgba_array(image: Any) -> np.ndarray:
    """Copy an image into a writable (H, W, 4) uint8 array."""
    if image.mode != IMAGE_MODE:
        image = image.convert(IMAGE_MODE)
    return np.array(image, dtype=np.uint8)


def _from_array(pixels: np.ndarray) -> Any:
    # uint8 arrays shaped (H, W, 4) map to RGBA
    return Image.fromarray(pixels)


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise OperationError(f"{name} must be a finite number, got {value}")
    return value


def adjust_brightness(image: Any, factor: float) -> Any:
    """
    Multiply R, G and B by ``factor``.

    Results are clamped to 0-255 and truncated toward zero, so negative
    factors give black and large factors saturate at 255.

    Args:
        image: PIL Image
        factor: Any finite multiplier (1.0 = unchanged)

    Returns:
        Adjusted PIL Image in RGBA mode

    Raises:
        OperationError: If factor is NaN or infinite
    """
    factor = _require_finite("Brightness factor", factor)

    pixels = _rgba_array(image)
    rgb = pixels[..., :3].astype(np.float32) * np.float32(factor)
    pixels[..., :3] = np.clip(rgb, 0, CHANNEL_MAX).astype(np.uint8)
    return _from_array(pixels)


def adjust_contrast(image: Any, factor: float) -> Any:
    """
    Scale R, G and B away from (factor > 1) or toward (factor < 1) mid-gray.

    Applies ``((v / 255 - 0.5) * factor + 0.5) * 255`` per channel, clamped
    to 0-255 and truncated. A factor of 0 collapses every channel to 127.

    Args:
        image: PIL Image
        factor: Any finite contrast factor (1.0 = unchanged)

    Returns:
        Adjusted PIL Image in RGBA mode

    Raises:
        OperationError: If factor is NaN or infinite
    """
    factor = _require_finite("Contrast factor", factor)

    pixels = _rgba_array(image)
    # Same formula multiplied through by 255; exact for factor == 1.0
    rgb = (pixels[..., :3].astype(np.float64) - MID_GRAY) * factor + MID_GRAY
    pixels[..., :3] = np.clip(rgb, 0, CHANNEL_MAX).astype(np.uint8)
    return _from_array(pixels)


def to_grayscale(image: Any) -> Any:
    """
    Convert to perceptual grayscale while keeping each pixel's alpha.

    Luma uses the sRGB (Rec. 709) weights in integer form,
    ``(2126 R + 7152 G + 722 B) // 10000``, and is written back to all
    three color channels.

    Args:
        image: PIL Image

    Returns:
        Grayscale PIL Image in RGBA mode
    """
    pixels = _rgba_array(image)
    rgb = pixels[..., :3].astype(np.uint32)
    luma = (rgb @ SRGB_LUMA_WEIGHTS) // SRGB_LUMA_DIVISOR
    pixels[..., :3] = luma.astype(np.uint8)[..., np.newaxis]
    return _from_array(pixels)


def invert_colors(image: Any) -> Any:
    """
    Invert R, G and B (``255 - value``); alpha is kept.

    Args:
        image: PIL Image

    Returns:
        Inverted PIL Image in RGBA mode
    """
    pixels = _rgba_array(image)
    pixels[..., :3] = CHANNEL_MAX - pixels[..., :3]
    return _from_array(pixels)
