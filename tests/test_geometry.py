"""
Tests for crop and rotate.

Tests cover:
- Crop bounds validation and pixel placement
- Rotation identity for whole turns
- Rotation direction and transparent fill
"""

import unittest

from PIL import Image

from RE_Libs.ImageEditingLib.errors import OperationError
from RE_Libs.ImageEditingLib.geometry import crop_image, rotate_image
from RE_Libs.ImageEditingLib.image_models import CropBox


class TestCropImage(unittest.TestCase):
    """Test crop_image."""

    def setUp(self):
        """Create a 20x10 image with a marker pixel."""
        self.image = Image.new("RGBA", (20, 10), (0, 0, 0, 255))
        self.image.putpixel((5, 3), (255, 0, 0, 255))

    def test_crop_size(self):
        result = crop_image(self.image, CropBox(5, 3, 4, 2))

        self.assertEqual(result.size, (4, 2))

    def test_crop_origin_pixel(self):
        """Pixel (0, 0) of the result should be pixel (x, y) of the source."""
        result = crop_image(self.image, CropBox(5, 3, 4, 2))

        self.assertEqual(result.getpixel((0, 0)), (255, 0, 0, 255))

    def test_crop_full_image(self):
        result = crop_image(self.image, CropBox(0, 0, 20, 10))

        self.assertEqual(result.tobytes(), self.image.tobytes())

    def test_crop_too_wide(self):
        with self.assertRaises(OperationError):
            crop_image(self.image, CropBox(15, 0, 6, 5))

    def test_crop_too_tall(self):
        with self.assertRaises(OperationError):
            crop_image(self.image, CropBox(0, 8, 5, 3))

    def test_source_unchanged(self):
        before = self.image.tobytes()
        crop_image(self.image, CropBox(1, 1, 3, 3))

        self.assertEqual(self.image.tobytes(), before)


class TestRotateImage(unittest.TestCase):
    """Test rotate_image."""

    def setUp(self):
        """Create an opaque square image with a red top-left corner."""
        self.image = Image.new("RGBA", (4, 4), (0, 0, 255, 255))
        self.image.putpixel((0, 0), (255, 0, 0, 255))

    def test_rotate_zero_is_identity(self):
        result = rotate_image(self.image, 0)

        self.assertEqual(result.size, self.image.size)
        self.assertEqual(result.tobytes(), self.image.tobytes())

    def test_rotate_full_turn_is_identity(self):
        for angle in (360, -360, 720):
            result = rotate_image(self.image, angle)
            self.assertEqual(result.tobytes(), self.image.tobytes())

    def test_rotate_is_clockwise(self):
        """A quarter turn clockwise moves the top-left corner to the top-right."""
        result = rotate_image(self.image, 90)

        self.assertEqual(result.getpixel((3, 0)), (255, 0, 0, 255))
        self.assertEqual(result.getpixel((0, 0)), (0, 0, 255, 255))

    def test_rotate_keeps_canvas_size(self):
        wide = Image.new("RGBA", (30, 10), (0, 255, 0, 255))

        result = rotate_image(wide, 45)

        self.assertEqual(result.size, (30, 10))
        self.assertEqual(result.mode, "RGBA")

    def test_rotate_fills_corners_transparent(self):
        opaque = Image.new("RGBA", (21, 21), (200, 200, 200, 255))

        result = rotate_image(opaque, 45)

        self.assertEqual(result.getpixel((0, 0))[3], 0)
        self.assertEqual(result.getpixel((20, 20))[3], 0)
        self.assertEqual(result.getpixel((10, 10)), (200, 200, 200, 255))

    def test_rotate_converts_rgb(self):
        result = rotate_image(Image.new("RGB", (8, 8), "white"), 30)

        self.assertEqual(result.mode, "RGBA")

    def test_rotate_rejects_non_finite(self):
        for angle in (float("nan"), float("inf")):
            with self.assertRaises(OperationError):
                rotate_image(self.image, angle)


if __name__ == "__main__":
    unittest.main()
