"""
Unit tests for image_io module.

Tests loading, saving, format resolution and SaveOptions.
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from RE_Libs.ImageEditingLib.errors import LoadError, OperationError
from RE_Libs.ImageEditingLib.image_io import (
    SaveOptions,
    get_supported_formats,
    is_supported_format,
    load_image,
    resolve_format,
    save_image,
)


class TestFormats:
    """Tests for format helpers."""

    def test_supported_formats_include_png_and_jpeg(self):
        formats = get_supported_formats()

        assert ".png" in formats
        assert ".jpg" in formats
        assert formats == sorted(formats)

    def test_is_supported_format_case_insensitive(self):
        assert is_supported_format(Path("photo.PNG"))
        assert is_supported_format("photo.jpeg")
        assert not is_supported_format("notes.txt")

    def test_resolve_format_from_extension(self):
        assert resolve_format("a.png") == "PNG"
        assert resolve_format("a.JPG") == "JPEG"
        assert resolve_format("a.tif") == "TIFF"

    def test_resolve_format_override(self):
        """An explicit format wins over the extension; 'jpg' means JPEG."""
        assert resolve_format("a.png", "jpg") == "JPEG"

    def test_resolve_unknown_extension(self):
        with pytest.raises(OperationError):
            resolve_format("a.xyz")

    def test_resolve_unknown_override(self):
        with pytest.raises(OperationError):
            resolve_format("a.png", "PSD")


class TestSaveOptions:
    """Tests for SaveOptions."""

    def test_defaults(self):
        options = SaveOptions()

        assert options.format is None
        assert options.quality == 95
        assert options.create_directories is False
        assert options.overwrite is True

    def test_from_dict_ignores_unknown_keys(self):
        options = SaveOptions.from_dict({"op": "save", "path": "x.png", "quality": 70})

        assert options.quality == 70

    def test_dict_round_trip(self):
        options = SaveOptions(format="PNG", quality=50, overwrite=False)

        assert SaveOptions.from_dict(options.to_dict()) == options

    def test_jpeg_kwargs_clamp_quality(self):
        kwargs = SaveOptions(quality=400).get_save_kwargs("out.jpg")

        assert kwargs == {"format": "JPEG", "quality": 100}

    def test_png_kwargs_have_no_quality(self):
        assert SaveOptions().get_save_kwargs("out.png") == {"format": "PNG"}


class TestLoadImage:
    """Tests for load_image."""

    def test_loads_as_rgba(self, tmp_path):
        path = tmp_path / "rgb.png"
        Image.new("RGB", (7, 5), (10, 20, 30)).save(path)

        image = load_image(path)

        assert image.mode == "RGBA"
        assert image.size == (7, 5)
        assert image.getpixel((0, 0)) == (10, 20, 30, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError):
            load_image(tmp_path / "missing.png")

    def test_directory(self, tmp_path):
        with pytest.raises(LoadError):
            load_image(tmp_path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "garbage.png"
        path.write_bytes(b"this is not an image")

        with pytest.raises(LoadError) as excinfo:
            load_image(path)

        assert "garbage.png" in str(excinfo.value)

    def test_truncated_file(self, tmp_path, noise_image):
        path = tmp_path / "truncated.png"
        noise_image.save(path)
        data = path.read_bytes()
        path.write_bytes(data[: len(data) // 2])

        with pytest.raises(LoadError):
            load_image(path)

    def test_sixteen_bit_grayscale_is_scaled(self, tmp_path):
        path = tmp_path / "gray16.png"
        Image.fromarray(np.full((4, 4), 32768, dtype=np.uint16)).save(path)

        image = load_image(path)

        assert image.mode == "RGBA"
        assert image.getpixel((0, 0)) == (128, 128, 128, 255)

    def test_sixteen_bit_grayscale_keeps_range(self, tmp_path):
        path = tmp_path / "ramp16.png"
        ramp = np.array([[0, 255, 256, 65535]], dtype=np.uint16)
        Image.fromarray(ramp).save(path)

        image = load_image(path)

        assert [image.getpixel((x, 0))[0] for x in range(4)] == [0, 0, 1, 255]


class TestSaveImage:
    """Tests for save_image."""

    def test_png_round_trip_is_exact(self, tmp_path, noise_image):
        path = save_image(noise_image, tmp_path / "noise.png")

        loaded = load_image(path)

        assert loaded.size == noise_image.size
        assert loaded.tobytes() == noise_image.tobytes()

    def test_jpeg_drops_alpha(self, tmp_path, gradient_image):
        path = save_image(gradient_image, tmp_path / "gradient.jpg")

        with Image.open(path) as written:
            assert written.format == "JPEG"
            assert written.mode == "RGB"

        # Input image is left untouched
        assert gradient_image.mode == "RGBA"

    def test_unknown_extension(self, tmp_path, gradient_image):
        with pytest.raises(OperationError):
            save_image(gradient_image, tmp_path / "gradient.unknown")

    def test_missing_directory(self, tmp_path, gradient_image):
        with pytest.raises(OperationError):
            save_image(gradient_image, tmp_path / "nope" / "gradient.png")

    def test_create_directories(self, tmp_path, gradient_image):
        target = tmp_path / "a" / "b" / "gradient.png"

        path = save_image(gradient_image, target, SaveOptions(create_directories=True))

        assert path == target
        assert target.exists()

    def test_refuses_overwrite(self, tmp_path, gradient_image):
        target = tmp_path / "gradient.png"
        target.write_bytes(b"keep me")

        with pytest.raises(OperationError):
            save_image(gradient_image, target, SaveOptions(overwrite=False))

        assert target.read_bytes() == b"keep me"

    def test_overwrites_by_default(self, tmp_path, gradient_image):
        target = tmp_path / "gradient.png"
        target.write_bytes(b"old")

        save_image(gradient_image, target)

        assert load_image(target).tobytes() == gradient_image.tobytes()

    def test_format_override(self, tmp_path, gradient_image):
        target = tmp_path / "gradient.dat"

        save_image(gradient_image, target, SaveOptions(format="PNG"))

        with Image.open(target) as written:
            assert written.format == "PNG"
