"""
Image file input and output for Raster Edit.

Decoding and encoding are delegated to Pillow. This module only decides
which format to use, normalizes images to RGBA on the way in and maps
library failures onto LoadError / OperationError.

Classes:
    SaveOptions: Configuration for encoding an image to disk

Functions:
    load_image: Decode an image file into an RGBA Pillow image
    save_image: Encode an image to disk, format chosen from the extension
    get_supported_formats: List of supported file extensions
    is_supported_format: Check whether a path has a supported extension
    resolve_format: Map a path (or explicit override) to a Pillow format name
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from RE_Libs.constants import (
    IMAGE_MODE,
    WIDE_CHANNEL_MAX,
    DEFAULT_JPEG_QUALITY,
    FORMAT_BY_EXTENSION,
    FORMATS_WITHOUT_ALPHA,
    SUPPORTED_STANDARD_IMAGES,
)
from RE_Libs.ImageEditingLib.errors import LoadError, OperationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_supported_formats() -> List[str]:
    """
    Get list of supported image file extensions.

    Returns:
        Sorted list of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: PathLike) -> bool:
    """
    Check if a file path has a supported format.

    Args:
        file_path: Path to the file

    Returns:
        True if the file extension is supported
    """
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def resolve_format(path: PathLike, explicit_format: Optional[str] = None) -> str:
    """
    Work out which Pillow format to encode with.

    Args:
        path: Destination path; its extension selects the format
        explicit_format: Optional override (e.g. "PNG", "jpg")

    Returns:
        Pillow format name such as "PNG" or "JPEG"

    Raises:
        OperationError: If neither the override nor the extension is known
    """
    if explicit_format:
        name = explicit_format.upper()
        # PIL uses "JPEG" not "JPG"
        if name == "JPG":
            name = "JPEG"
        if name not in FORMAT_BY_EXTENSION.values():
            raise OperationError(f"Unsupported output format: {explicit_format}")
        return name

    ext = Path(path).suffix.lower()
    if ext not in FORMAT_BY_EXTENSION:
        raise OperationError(
            f"Cannot determine output format from extension '{ext}' of {path}. "
            f"Supported: {', '.join(get_supported_formats())}"
        )
    return FORMAT_BY_EXTENSION[ext]


@dataclass
class SaveOptions:
    """Configuration for saving an image.

    Attributes:
        format: Explicit output format (None = choose from the file extension)
        quality: JPEG/WebP quality 1-100 (default: 95)
        create_directories: Create missing parent directories (default: False)
        overwrite: Replace an existing file (default: True)
    """
    format: Optional[str] = None
    quality: int = DEFAULT_JPEG_QUALITY
    create_directories: bool = False
    overwrite: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SaveOptions":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)

    def get_save_kwargs(self, path: PathLike) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs for the given destination."""
        save_format = resolve_format(path, self.format)
        kwargs: Dict[str, Any] = {"format": save_format}

        if save_format in ("JPEG", "WEBP"):
            kwargs["quality"] = max(1, min(100, int(self.quality)))

        return kwargs


def _is_wide_grayscale(image: Image.Image) -> bool:
    return image.mode == "I" or image.mode.startswith("I;16")


def _to_eight_bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale down to an "L" image (high byte of each sample)."""
    # convert("RGBA") clips these modes at 255 instead of scaling
    values = np.clip(np.asarray(image, dtype=np.int64), 0, WIDE_CHANNEL_MAX)
    return Image.fromarray((values >> 8).astype(np.uint8))


def load_image(path: PathLike) -> Image.Image:
    """
    Decode an image file into an RGBA Pillow image.

    The file is fully decoded and closed before returning, so no handle
    stays open after the call.

    Args:
        path: Path to the image file (format detected from content)

    Returns:
        A new RGBA PIL Image

    Raises:
        LoadError: If the file is missing, unreadable, undecodable or empty
    """
    path = Path(path)

    if not path.exists():
        raise LoadError(f"Image file not found: {path}")

    if not path.is_file():
        raise LoadError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            if _is_wide_grayscale(img):
                image = _to_eight_bit(img).convert(IMAGE_MODE)
            else:
                image = img.convert(IMAGE_MODE)
    except UnidentifiedImageError as e:
        raise LoadError(f"Unrecognized image format: {path}") from e
    # Pillow reports some corrupt chunks as SyntaxError
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise LoadError(f"Failed to load image {path}: {e}") from e

    if image.width == 0 or image.height == 0:
        raise LoadError(f"Image has no pixels: {path} ({image.width}x{image.height})")

    logger.info(f"Loaded {path} ({image.width}x{image.height})")
    return image


def save_image(
    image: Image.Image,
    path: PathLike,
    options: Optional[SaveOptions] = None,
) -> Path:
    """
    Encode an image to disk.

    Args:
        image: PIL Image to save (left untouched)
        path: Destination path; its extension selects the format
        options: Optional SaveOptions (defaults used if None)

    Returns:
        Path the image was written to

    Raises:
        OperationError: If the format is unknown or the file cannot be written
    """
    if options is None:
        options = SaveOptions()

    output_file = Path(path)
    kwargs = options.get_save_kwargs(output_file)

    if output_file.exists() and not options.overwrite:
        raise OperationError(
            f"Output file already exists: {output_file}. "
            f"Set overwrite=True to replace."
        )

    try:
        if options.create_directories:
            output_file.parent.mkdir(parents=True, exist_ok=True)

        # Convert RGBA to RGB for formats without an alpha channel
        if kwargs["format"] in FORMATS_WITHOUT_ALPHA and image.mode != "RGB":
            image = image.convert("RGB")

        image.save(output_file, **kwargs)
    except (OSError, ValueError, KeyError) as e:
        raise OperationError(f"Failed to save image to {output_file}: {e}") from e

    logger.info(f"Saved {output_file} as {kwargs['format']}")
    return output_file
