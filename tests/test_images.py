"""Tests for math_preproc.images — the Pillow host adapter."""

import pytest
from PIL import Image

from math_preproc.errors import ImageIOError, InvalidDimensions
from math_preproc.images import (
    create_grayscale_image,
    get_pixels,
    grayscale_image,
    load,
    load_image,
    resize,
    save_grayscale,
    save_image,
)


# ── Loading ────────────────────────────────────────────────────────────────


class TestLoad:
    def test_returns_dimensions_and_packed_pixels(self, png_file):
        width, height, pixels = load(png_file)
        assert (width, height) == (10, 10)
        assert pixels == [0xFF0000] * 100

    def test_accepts_string_path(self, png_file):
        assert load(str(png_file))[0] == 10

    def test_pixels_are_row_major(self, tmp_path):
        img = Image.new("RGB", (3, 2), color=(0, 0, 0))
        img.putpixel((2, 0), (1, 2, 3))
        img.putpixel((0, 1), (4, 5, 6))
        path = tmp_path / "order.png"
        img.save(path)
        _, _, pixels = load(path)
        assert pixels[2] == 0x010203
        assert pixels[3] == 0x040506

    def test_missing_file_raises_io_error(self, tmp_path):
        with pytest.raises(ImageIOError):
            load(tmp_path / "nope.png")

    def test_garbage_file_raises_io_error(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not an image")
        with pytest.raises(ImageIOError):
            load(path)

    def test_io_error_is_an_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load(tmp_path / "nope.png")

    def test_pdf_page_is_rasterised(self, single_page_pdf):
        width, height, pixels = load(single_page_pdf, dpi=72)
        assert (width, height) == (72, 72)
        assert len(pixels) == 72 * 72


class TestGetPixels:
    def test_rgba_alpha_is_dropped(self):
        img = Image.new("RGBA", (2, 1), color=(10, 20, 30, 0))
        assert get_pixels(img) == [0x0A141E, 0x0A141E]

    def test_grayscale_expands_to_three_equal_channels(self):
        img = Image.new("L", (1, 1), color=99)
        assert get_pixels(img) == [(99 << 16) | (99 << 8) | 99]

    def test_load_image_converts_to_rgb(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (4, 4), color=7).save(path)
        assert load_image(path).mode == "RGB"


# ── Saving ─────────────────────────────────────────────────────────────────


class TestSaveGrayscale:
    def test_round_trip_writes_equal_channels(self, tmp_path):
        path = tmp_path / "out.png"
        save_grayscale([0, 128, 255, 17], 2, 2, path)
        with Image.open(path) as img:
            assert img.size == (2, 2)
            assert img.convert("RGB").getpixel((1, 0)) == (128, 128, 128)
            assert img.convert("RGB").getpixel((1, 1)) == (17, 17, 17)

    def test_only_low_byte_is_used(self, tmp_path):
        path = tmp_path / "low.png"
        save_grayscale([0x123480], 1, 1, path)
        with Image.open(path) as img:
            assert img.convert("RGB").getpixel((0, 0)) == (0x80, 0x80, 0x80)

    @pytest.mark.parametrize("suffix, fmt", [(".png", "PNG"), (".bmp", "BMP")])
    def test_format_follows_extension(self, tmp_path, suffix, fmt):
        path = tmp_path / f"out{suffix}"
        save_grayscale([255] * 4, 2, 2, path)
        with Image.open(path) as img:
            assert img.format == fmt

    def test_unknown_extension_raises_io_error(self, tmp_path):
        with pytest.raises(ImageIOError):
            save_grayscale([0], 1, 1, tmp_path / "out.notaformat")

    def test_missing_directory_raises_io_error(self, tmp_path):
        with pytest.raises(ImageIOError):
            save_grayscale([0], 1, 1, tmp_path / "missing" / "out.png")

    def test_wrong_pixel_count_rejected(self, tmp_path):
        with pytest.raises(InvalidDimensions):
            save_grayscale([0, 0, 0], 2, 2, tmp_path / "out.png")

    def test_save_image_writes_any_image(self, tmp_path):
        path = tmp_path / "any.png"
        save_image(Image.new("RGB", (3, 3)), path)
        assert path.exists()


# ── In-memory helpers ──────────────────────────────────────────────────────


class TestHelpers:
    def test_grayscale_image_is_rgb(self):
        image = grayscale_image([10, 20], 2, 1)
        assert image.mode == "RGB"
        assert image.getpixel((1, 0)) == (20, 20, 20)

    def test_create_grayscale_image_from_plane(self, ramp3):
        image = create_grayscale_image(ramp3)
        assert image.size == (3, 3)
        assert image.getpixel((2, 1)) == (60, 60, 60)

    def test_resize(self):
        image = resize(Image.new("RGB", (4, 4)), 10, 3)
        assert image.size == (10, 3)

    def test_resize_nearest_keeps_values(self):
        image = grayscale_image([0, 255], 2, 1)
        values = set(resize(image, 7, 5).convert("L").tobytes())
        assert values == {0, 255}
