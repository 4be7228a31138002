"""Host image adapter built on Pillow.

Converts between Pillow images on disk and the plain-list pixel planes used by
the rest of the package.  Any decode or encode failure surfaces as
:class:`~math_preproc.errors.ImageIOError`.
"""

from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from math_preproc.errors import ImageIOError, InvalidDimensions
from math_preproc.pdf import render_page
from math_preproc.planes import pack_rgb, shape, to_1d

PathLike = Union[str, Path]


def load_image(path: PathLike, page: int = 0, dpi: int = 150) -> Image.Image:
    """Decode an image file.  PDFs are rasterised one page at a time."""
    path = Path(path)
    if path.suffix.lower() == ".pdf":
        return render_page(path, page=page, dpi=dpi)

    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGB")
    except (OSError, UnidentifiedImageError) as e:
        raise ImageIOError(f"Cannot read image {path}: {e}") from e


def get_pixels(image: Image.Image) -> list[int]:
    """Packed-RGB pixels of ``image`` in row-major order."""
    raw = image.convert("RGB").tobytes()
    return [
        pack_rgb(raw[i], raw[i + 1], raw[i + 2])
        for i in range(0, len(raw), 3)
    ]


def load(path: PathLike, page: int = 0, dpi: int = 150) -> tuple[int, int, list[int]]:
    """Return ``(width, height, pixels)`` where ``pixels`` is a packed-RGB 1D plane."""
    image = load_image(path, page=page, dpi=dpi)
    return image.width, image.height, get_pixels(image)


def _grayscale_bytes(pixels: list[int]) -> bytes:
    # Only the least significant byte of each element is used.
    return bytes(value & 0xFF for value in pixels)


def grayscale_image(pixels: list[int], width: int, height: int) -> Image.Image:
    """Build an RGB image whose R, G and B all carry the intensity of ``pixels``."""
    if width < 0 or height < 0 or len(pixels) != width * height:
        raise InvalidDimensions(
            f"{len(pixels)} pixels do not fill a {width}x{height} image."
        )
    gray = Image.frombytes("L", (width, height), _grayscale_bytes(pixels))
    return gray.convert("RGB")


def create_grayscale_image(plane: list[list[int]]) -> Image.Image:
    """Like :func:`grayscale_image` but from a 2D intensity plane."""
    rows, cols = shape(plane)
    return grayscale_image(to_1d(plane), cols, rows)


def save_image(image: Image.Image, path: PathLike) -> None:
    """Encode ``image`` to ``path``; the format follows the extension."""
    try:
        image.save(path)
    except (OSError, ValueError, KeyError) as e:
        raise ImageIOError(f"Cannot write image {path}: {e}") from e


def save_grayscale(pixels: list[int], width: int, height: int, path: PathLike) -> None:
    """Write an intensity 1D plane to ``path``."""
    save_image(grayscale_image(pixels, width, height), path)


def resize(
    image: Image.Image,
    width: int,
    height: int,
    resample: Image.Resampling = Image.Resampling.NEAREST,
) -> Image.Image:
    return image.resize((width, height), resample=resample)
