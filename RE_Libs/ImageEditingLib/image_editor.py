"""
Image Editor for Raster Edit.

The ImageEditor owns exactly one RGBA image and exposes chainable editing
operations. Every operation builds the new image first and only then swaps
it in, so a failed call leaves the editor holding its previous image.

Example:
    >>> editor = ImageEditor.load("base_image.png")
    >>> logo = ImageEditor.load("overlay_image.png").crop(100, 100, 500, 500)
    >>> (editor
    ...     .adjust_contrast(1.5)
    ...     .overlay_image(logo.get_image(), 100, 100)
    ...     .save("output.png"))
"""

from pathlib import Path
from typing import Any, Optional, Tuple, Union
import logging

from PIL import Image

from RE_Libs.constants import IMAGE_MODE
from RE_Libs.ImageEditingLib.errors import OperationError
from RE_Libs.ImageEditingLib.image_models import CropBox, RgbaColor
from RE_Libs.ImageEditingLib.image_io import SaveOptions, load_image, save_image
from RE_Libs.ImageEditingLib.geometry import crop_image, rotate_image
from RE_Libs.ImageEditingLib.adjustments import (
    adjust_brightness,
    adjust_contrast,
    invert_colors,
    to_grayscale,
)
from RE_Libs.ImageEditingLib.blur_filter import apply_gaussian_blur
from RE_Libs.ImageEditingLib.compositing import overlay_straight_alpha

logger = logging.getLogger(__name__)


class ImageEditor:
    """
    Single-image editor with fluent, fail-fast operations.

    Create one with ``ImageEditor.load(path)`` or ``ImageEditor.from_image(img)``.
    Mutating methods return the editor itself so calls can be chained; any
    failure raises LoadError / OperationError and stops the chain.
    """

    def __init__(self, image: Any, source_path: Optional[Path] = None):
        if not isinstance(image, Image.Image):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        if image.mode != IMAGE_MODE:
            image = image.convert(IMAGE_MODE)

        self._image = image
        self._source_path = source_path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ImageEditor":
        """
        Create an editor from an image file.

        Raises:
            LoadError: If the file cannot be read or decoded
        """
        path = Path(path)
        return cls(load_image(path), source_path=path)

    @classmethod
    def from_image(cls, image: Any) -> "ImageEditor":
        """Create an editor over a copy of an already decoded PIL Image."""
        if not isinstance(image, Image.Image):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        return cls(image.copy())

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def image(self) -> Image.Image:
        return self._image

    def get_image(self) -> Image.Image:
        """Current image, for reading (e.g. as another editor's overlay)."""
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def source_path(self) -> Optional[Path]:
        return self._source_path

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OperationError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} image"
            )
        return self._image.getpixel((x, y))

    def copy(self) -> "ImageEditor":
        """Independent editor over a copy of the current image."""
        return ImageEditor(self._image.copy(), source_path=self._source_path)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def _replace(self, new_image: Image.Image, operation: str) -> "ImageEditor":
        self._image = new_image
        logger.debug(f"{operation}: image is now {new_image.width}x{new_image.height}")
        return self

    def crop(self, x: int, y: int, width: int, height: int) -> "ImageEditor":
        """
        Keep only the region ``[x, x + width) x [y, y + height)``.

        Raises:
            OperationError: If the region is empty or exceeds the image bounds
        """
        box = CropBox(int(x), int(y), int(width), int(height))
        return self._replace(crop_image(self._image, box), f"crop {box.as_box()}")

    def rotate(self, angle: float) -> "ImageEditor":
        """Rotate clockwise about the center by ``angle`` degrees, keeping the canvas size."""
        return self._replace(rotate_image(self._image, angle), f"rotate {angle}")

    def adjust_brightness(self, factor: float) -> "ImageEditor":
        return self._replace(adjust_brightness(self._image, factor), f"brightness x{factor}")

    def adjust_contrast(self, factor: float) -> "ImageEditor":
        return self._replace(adjust_contrast(self._image, factor), f"contrast x{factor}")

    def blur(self, sigma: float) -> "ImageEditor":
        """
        Gaussian blur all four channels.

        Raises:
            OperationError: If sigma is not in (0, 100]
        """
        return self._replace(apply_gaussian_blur(self._image, sigma), f"blur sigma={sigma}")

    def grayscale(self) -> "ImageEditor":
        return self._replace(to_grayscale(self._image), "grayscale")

    def invert(self) -> "ImageEditor":
        return self._replace(invert_colors(self._image), "invert")

    def overlay_image(self, source: Any, x: int, y: int) -> "ImageEditor":
        """
        Composite ``source`` onto the image with its top-left corner at (x, y).

        Args:
            source: PIL Image or another ImageEditor (read only)
            x: Left edge on this image
            y: Top edge on this image

        Raises:
            OperationError: If the source does not fit inside this image
        """
        if isinstance(source, ImageEditor):
            source = source.get_image()

        result = overlay_straight_alpha(self._image, source, int(x), int(y))
        return self._replace(result, f"overlay {source.width}x{source.height} at ({x}, {y})")

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def save(self, path: Union[str, Path], options: Optional[SaveOptions] = None) -> Path:
        """
        Encode the image to ``path``; the format comes from the extension.

        Returns:
            Path the image was written to

        Raises:
            OperationError: If encoding or writing fails
        """
        return save_image(self._image, path, options)

    def __repr__(self) -> str:
        source = f", source={str(self._source_path)!r}" if self._source_path else ""
        return f"ImageEditor({self.width}x{self.height}{source})"
