"""PDF page rasterisation using PyMuPDF."""

from pathlib import Path

import fitz  # PyMuPDF
from PIL import Image

from math_preproc.errors import ImageIOError


def _open(pdf_path: Path) -> fitz.Document:
    try:
        return fitz.open(str(pdf_path))
    except (RuntimeError, ValueError, OSError) as e:
        raise ImageIOError(f"Cannot open PDF {pdf_path}: {e}") from e


def _to_image(page: fitz.Page, dpi: int) -> Image.Image:
    matrix = fitz.Matrix(dpi / 72, dpi / 72)  # 72 is the base DPI in the PDF spec
    pixmap = page.get_pixmap(matrix=matrix, colorspace=fitz.csRGB, alpha=False)
    return Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)


def render_page(pdf_path: Path, page: int = 0, dpi: int = 150) -> Image.Image:
    """Rasterise a single page of a PDF as an RGB image.

    Args:
        pdf_path: Path to the PDF file.
        page:     Zero-based page index.
        dpi:      Render resolution.  Handwriting scans rarely need more than 150.
    """
    doc = _open(pdf_path)
    try:
        if not 0 <= page < doc.page_count:
            raise ImageIOError(
                f"{pdf_path} has {doc.page_count} page(s); page {page} does not exist."
            )
        return _to_image(doc[page], dpi)
    finally:
        doc.close()


def pdf_to_images(pdf_path: Path, dpi: int = 150) -> list[Image.Image]:
    """Rasterise every page of a PDF, in order."""
    doc = _open(pdf_path)
    try:
        return [_to_image(page, dpi) for page in doc]
    finally:
        doc.close()
