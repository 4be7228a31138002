"""Shared fixtures for the test suite.

All fixtures here produce real files / real bytes so tests exercise actual
code paths rather than hand-crafted stubs.  Images are kept tiny because the
pixel operators are pure Python.
"""

import io
from pathlib import Path

import fitz  # PyMuPDF
import pytest
from click.testing import CliRunner
from PIL import Image

from math_preproc.config import ENV_KEYS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PREPROC_* settings from the developer's shell out of the tests."""
    for key in ENV_KEYS.values():
        monkeypatch.delenv(key, raising=False)


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Plane fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def ramp3() -> list[list[int]]:
    return [[10, 20, 30], [40, 50, 60], [70, 80, 90]]


@pytest.fixture
def step8() -> list[list[int]]:
    """8×8 intensity plane: left half 0, right half 255."""
    return [[0] * 4 + [255] * 4 for _ in range(8)]


# ── Image fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def png_bytes() -> bytes:
    """A real, valid 10×10 red PNG image as raw bytes."""
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """The PNG written to a temporary file on disk."""
    path = tmp_path / "test.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def stroke_image() -> Image.Image:
    """16×12 white page with a 2px dark vertical pen stroke at columns 7-8."""
    img = Image.new("RGB", (16, 12), color=(250, 248, 240))
    for y in range(2, 10):
        for x in (7, 8):
            img.putpixel((x, y), (20, 20, 60))
    return img


@pytest.fixture
def stroke_file(tmp_path: Path, stroke_image: Image.Image) -> Path:
    path = tmp_path / "stroke.png"
    stroke_image.save(path)
    return path


# ── PDF fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def single_page_pdf(tmp_path: Path) -> Path:
    """A real single-page PDF, one inch square, containing a short text line."""
    path = tmp_path / "single.pdf"
    doc = fitz.open()
    page = doc.new_page(width=72, height=72)
    page.insert_text((8, 40), "x+1", fontsize=18)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def multi_page_pdf(tmp_path: Path) -> Path:
    """A real 3-page PDF of small pages with distinct text on each page."""
    path = tmp_path / "multi.pdf"
    doc = fitz.open()
    for i in range(3):
        page = doc.new_page(width=72, height=36)
        page.insert_text((8, 24), f"p{i + 1}", fontsize=14)
    doc.save(str(path))
    doc.close()
    return path
