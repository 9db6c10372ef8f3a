"""
Image editing data models for Raster Edit.

This module defines core data structures used throughout the image editing system.

Classes:
    CropBox: A rectangular region of an image, validated against image bounds

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Tuple

from RE_Libs.ImageEditingLib.errors import OperationError

RgbaColor = Tuple[int, int, int, int]


@dataclass(frozen=True)
class CropBox:
    """A region ``[x, x + width) x [y, y + height)`` of an image.

    Attributes:
        x: Left edge in pixels
        y: Top edge in pixels
        width: Region width in pixels (> 0)
        height: Region height in pixels (> 0)
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        """Validate region parameters."""
        if self.x < 0 or self.y < 0:
            raise OperationError(
                f"Region origin must be non-negative, got ({self.x}, {self.y})"
            )

        # Zero-sized regions would leave an image with no pixels
        if self.width <= 0 or self.height <= 0:
            raise OperationError(
                f"Region size must be positive, got {self.width}x{self.height}"
            )

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_box(self) -> Tuple[int, int, int, int]:
        """Return the (left, upper, right, lower) tuple Pillow expects."""
        return self.x, self.y, self.right, self.bottom

    def fits_within(self, width: int, height: int) -> bool:
        """True if the region lies fully inside a ``width x height`` image."""
        return self.right <= width and self.bottom <= height
