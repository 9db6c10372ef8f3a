"""
Constants and configuration values for Raster Edit.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Pixel model
IMAGE_MODE = "RGBA"
CHANNEL_MAX = 255
# 16-bit grayscale files ("I" / "I;16*" modes) are scaled down from this range
WIDE_CHANNEL_MAX = 65535
TRANSPARENT = (0, 0, 0, 0)

# Blur limits (sigma is the Gaussian standard deviation in pixels)
MAX_BLUR_SIGMA = 100.0

# Saving
DEFAULT_JPEG_QUALITY = 95

# Supported file formats, extension -> Pillow format name
FORMAT_BY_EXTENSION = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
    ".gif": "GIF",
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".webp": "WEBP",
}
SUPPORTED_STANDARD_IMAGES = set(FORMAT_BY_EXTENSION)

# Formats that cannot store an alpha channel
FORMATS_WITHOUT_ALPHA = {"JPEG"}

# Recipe file constants
SCHEMA_VERSION = 1

# Recipe field names
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_NAME = "name"
FIELD_CREATED_AT = "created_at"
FIELD_STEPS = "steps"
FIELD_OP = "op"

# Step fields holding file paths (resolved relative to the recipe file)
PATH_FIELDS = ("image_path", "path")

# Operation names
OP_CROP = "crop"
OP_ROTATE = "rotate"
OP_BRIGHTNESS = "brightness"
OP_CONTRAST = "contrast"
OP_BLUR = "blur"
OP_GRAYSCALE = "grayscale"
OP_INVERT = "invert"
OP_OVERLAY = "overlay"
OP_SAVE = "save"
