"""
Overlay compositing for Raster Edit.

Pastes an overlay onto a base image using a straight-alpha rule that always
leaves touched pixels opaque:

- overlay alpha 0: the base pixel is left alone
- overlay alpha 255: the base pixel is replaced by the overlay pixel
- anything else: base RGB moves toward overlay RGB by ``alpha / 255``
  (``(1 - a) * base + a * overlay``, truncated) and the result alpha is 255

This is not Porter-Duff "over"; existing recipes and outputs depend on the
opaque result, so it is kept exactly as is.

Example:
    >>> base = Image.new("RGBA", (100, 100), "red")
    >>> logo = Image.new("RGBA", (10, 10), (0, 0, 255, 128))
    >>> result = overlay_straight_alpha(base, logo, 5, 5)
"""

from typing import Any

import numpy as np
from PIL import Image

from RE_Libs.constants import IMAGE_MODE, CHANNEL_MAX
from RE_Libs.ImageEditingLib.errors import OperationError


def check_overlay_bounds(base: Any, overlay: Any, x: int, y: int) -> None:
    """
    Ensure an overlay placed at (x, y) lies fully inside the base.

    Raises:
        OperationError: If the overlay footprint leaves the base image
    """
    if x < 0 or y < 0:
        raise OperationError(f"Overlay position must be non-negative, got ({x}, {y})")

    if x + overlay.width > base.width or y + overlay.height > base.height:
        raise OperationError(
            f"Overlay image exceeds base image bounds: {overlay.width}x{overlay.height} "
            f"at ({x}, {y}) does not fit in {base.width}x{base.height}"
        )


def overlay_straight_alpha(base: Any, overlay: Any, x: int, y: int) -> Any:
    """
    Composite ``overlay`` onto ``base`` with its top-left corner at (x, y).

    Args:
        base: PIL Image to draw onto (not modified)
        overlay: PIL Image to draw (not modified)
        x: Left edge of the overlay on the base
        y: Top edge of the overlay on the base

    Returns:
        New PIL Image in RGBA mode

    Raises:
        OperationError: If the overlay does not fit inside the base
        TypeError: If either input is not a PIL Image
    """
    if not hasattr(base, "mode"):
        raise TypeError(f"Expected PIL Image for base, got {type(base)}")
    if not hasattr(overlay, "mode"):
        raise TypeError(f"Expected PIL Image for overlay, got {type(overlay)}")

    check_overlay_bounds(base, overlay, x, y)

    result = np.array(base.convert(IMAGE_MODE), dtype=np.uint8)
    src = np.asarray(overlay.convert(IMAGE_MODE), dtype=np.uint8)

    region = result[y:y + src.shape[0], x:x + src.shape[1]]
    src_alpha = src[..., 3]

    opaque = src_alpha == CHANNEL_MAX
    partial = (src_alpha > 0) & ~opaque

    region[opaque] = src[opaque]

    if partial.any():
        alpha = src_alpha[partial].astype(np.float32)[:, None] / np.float32(CHANNEL_MAX)
        under = region[partial][:, :3].astype(np.float32)
        over = src[partial][:, :3].astype(np.float32)
        blended = (np.float32(1.0) - alpha) * under + alpha * over

        mixed = np.empty((blended.shape[0], 4), dtype=np.uint8)
        mixed[:, :3] = np.clip(blended, 0, CHANNEL_MAX).astype(np.uint8)
        mixed[:, 3] = CHANNEL_MAX
        region[partial] = mixed

    return Image.fromarray(result)
