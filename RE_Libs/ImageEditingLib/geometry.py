"""
Geometric transforms: crop and rotate.

Both functions return a new image and never modify their input.

Example:
    >>> from PIL import Image
    >>> img = Image.new("RGBA", (200, 100), "red")
    >>> cropped = crop_image(img, CropBox(10, 10, 50, 50))
    >>> turned = rotate_image(img, 45.0)
"""

import math
from typing import Any

from PIL import Image

from RE_Libs.constants import IMAGE_MODE, TRANSPARENT
from RE_Libs.ImageEditingLib.errors import OperationError
from RE_Libs.ImageEditingLib.image_models import CropBox


def crop_image(image: Any, box: CropBox) -> Any:
    """
    Cut the region described by ``box`` out of an image.

    Args:
        image: PIL Image
        box: Region to keep

    Returns:
        New PIL Image of size (box.width, box.height)

    Raises:
        OperationError: If the region exceeds the image bounds
    """
    if not box.fits_within(image.width, image.height):
        raise OperationError(
            f"Crop dimensions exceed image bounds: region {box.as_box()} "
            f"does not fit in {image.width}x{image.height}"
        )

    return image.crop(box.as_box())


def rotate_image(image: Any, angle: float) -> Any:
    """
    Rotate an image clockwise about its center.

    The canvas keeps its size: content rotated past the edges is clipped and
    uncovered corners are filled fully transparent. Sampling is bilinear.

    Args:
        image: PIL Image (converted to RGBA)
        angle: Clockwise rotation in degrees

    Returns:
        Rotated PIL Image in RGBA mode

    Raises:
        OperationError: If angle is not a finite number
    """
    angle = float(angle)
    if not math.isfinite(angle):
        raise OperationError(f"Rotation angle must be finite, got {angle}")

    if image.mode != IMAGE_MODE:
        image = image.convert(IMAGE_MODE)

    # Pillow turns counter-clockwise for positive angles
    return image.rotate(
        -angle,
        resample=Image.Resampling.BILINEAR,
        expand=False,
        fillcolor=TRANSPARENT,
    )
