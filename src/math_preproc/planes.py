"""In-memory pixel planes and conversions between their layouts.

A *1D plane* is a flat ``list[int]`` in row-major order: row ``r``, column ``c``
lives at index ``r * width + c``.  A *2D plane* is a ``list[list[int]]``
addressed as ``plane[row][col]`` where every row has the same width.

Packed RGB pixels keep red in bits 23-16, green in bits 15-8 and blue in bits
7-0.  The top byte is ignored.
"""

from math_preproc.errors import InvalidDimensions

RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0

RED_MASK = 0xFF << RED_SHIFT
GREEN_MASK = 0xFF << GREEN_SHIFT
BLUE_MASK = 0xFF << BLUE_SHIFT


def shape(plane: list[list[int]]) -> tuple[int, int]:
    """Return ``(rows, cols)`` of a 2D plane, checking that it is rectangular."""
    rows = len(plane)
    if rows == 0:
        return 0, 0
    cols = len(plane[0])
    for r, row in enumerate(plane):
        if len(row) != cols:
            raise InvalidDimensions(
                f"Row {r} has width {len(row)}, expected {cols}."
            )
    return rows, cols


def to_1d(plane: list[list[int]]) -> list[int]:
    """Concatenate the rows of a 2D plane.  Reverses :func:`to_2d`."""
    shape(plane)
    return [value for row in plane for value in row]


def to_2d(pixels: list[int], rows: int, cols: int) -> list[list[int]]:
    """Reshape a 1D plane into ``rows`` rows of ``cols`` pixels.  Reverses :func:`to_1d`."""
    if rows < 0 or cols < 0 or len(pixels) != rows * cols:
        raise InvalidDimensions(
            f"Cannot reshape {len(pixels)} pixels into {rows}x{cols}."
        )
    return [pixels[r * cols:(r + 1) * cols] for r in range(rows)]


def pack_rgb(red: int, green: int, blue: int) -> int:
    return ((red & 0xFF) << RED_SHIFT) | ((green & 0xFF) << GREEN_SHIFT) | (blue & 0xFF)


def unpack_channel(rgb: int, shift: int) -> int:
    """Extract the byte of ``rgb`` that starts at bit ``shift``."""
    return (rgb >> shift) & 0xFF


def unpack_rgb(rgb: int) -> tuple[int, int, int]:
    return (
        unpack_channel(rgb, RED_SHIFT),
        unpack_channel(rgb, GREEN_SHIFT),
        unpack_channel(rgb, BLUE_SHIFT),
    )
