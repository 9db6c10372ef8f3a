"""
Gaussian Blur Filter.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.png")
    >>> blurred = apply_gaussian_blur(img, sigma=2.5)
"""

import math
from typing import Any

from PIL import ImageFilter

from RE_Libs.constants import IMAGE_MODE, MAX_BLUR_SIGMA
from RE_Libs.ImageEditingLib.errors import OperationError


def apply_gaussian_blur(
    image: Any,
    sigma: float,
) -> Any:
    """
    Apply Gaussian blur to all four channels of an image.

    Args:
        image: PIL Image (converted to RGBA)
        sigma: Standard deviation of the Gaussian kernel in pixels
               (0 < sigma <= 100). Alpha is blurred along with color.

    Returns:
        Blurred PIL Image in RGBA mode

    Raises:
        OperationError: If sigma is not finite, <= 0 or > 100
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    sigma = float(sigma)
    if not math.isfinite(sigma) or not (0 < sigma <= MAX_BLUR_SIGMA):
        raise OperationError(
            f"Blur sigma must be 0 < sigma <= {MAX_BLUR_SIGMA:g}, got {sigma}"
        )

    if image.mode != IMAGE_MODE:
        image = image.convert(IMAGE_MODE)

    # Pillow's GaussianBlur radius is the standard deviation
    return image.filter(ImageFilter.GaussianBlur(radius=sigma))
