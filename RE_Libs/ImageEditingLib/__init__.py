"""
ImageEditingLib - Core image editing functionality

This module provides the single-buffer image editor, the transforms it
applies, and the file I/O it relies on.
"""

from RE_Libs.ImageEditingLib.errors import ImageEditError, LoadError, OperationError
from RE_Libs.ImageEditingLib.image_models import CropBox, RgbaColor
from RE_Libs.ImageEditingLib.image_io import (
    SaveOptions,
    load_image,
    save_image,
    get_supported_formats,
    is_supported_format,
)
from RE_Libs.ImageEditingLib.geometry import crop_image, rotate_image
from RE_Libs.ImageEditingLib.adjustments import (
    adjust_brightness,
    adjust_contrast,
    to_grayscale,
    invert_colors,
)
from RE_Libs.ImageEditingLib.blur_filter import apply_gaussian_blur
from RE_Libs.ImageEditingLib.compositing import overlay_straight_alpha
from RE_Libs.ImageEditingLib.image_editor import ImageEditor

__all__ = [
    "ImageEditError",
    "LoadError",
    "OperationError",
    "CropBox",
    "RgbaColor",
    "SaveOptions",
    "load_image",
    "save_image",
    "get_supported_formats",
    "is_supported_format",
    "crop_image",
    "rotate_image",
    "adjust_brightness",
    "adjust_contrast",
    "to_grayscale",
    "invert_colors",
    "apply_gaussian_blur",
    "overlay_straight_alpha",
    "ImageEditor",
]
