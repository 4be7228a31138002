"""Element-wise operators over 2D pixel planes."""

import math
from typing import Callable

from math_preproc.errors import DimensionMismatch
from math_preproc.planes import shape, unpack_rgb


def map_plane(plane: list[list[int]], f: Callable[[int], int]) -> list[list[int]]:
    """Apply ``f`` to every pixel, returning a new plane."""
    return [[f(value) for value in row] for row in plane]


def map2_planes(
    a: list[list[int]],
    b: list[list[int]],
    f: Callable[[int, int], int],
) -> list[list[int]]:
    """Combine two planes of identical shape pixel by pixel."""
    shape_a, shape_b = shape(a), shape(b)
    if shape_a != shape_b:
        raise DimensionMismatch(
            f"Planes differ in shape: {shape_a[0]}x{shape_a[1]} "
            f"vs {shape_b[0]}x{shape_b[1]}."
        )
    return [[f(x, y) for x, y in zip(row_a, row_b)] for row_a, row_b in zip(a, b)]


def clamp(value: int, lo: int = 0, hi: int = 255) -> int:
    return lo if value < lo else hi if value > hi else value


def constrain(plane: list[list[int]]) -> list[list[int]]:
    """Clamp every pixel into [0, 255]."""
    return map_plane(plane, clamp)


def gray_value(rgb: int) -> int:
    # Unweighted average; downstream thresholds are calibrated against it.
    red, green, blue = unpack_rgb(rgb)
    return (red + green + blue) // 3


def to_grayscale(rgb_plane: list[list[int]]) -> list[list[int]]:
    """Reduce a packed-RGB plane to intensities ``(R + G + B) // 3``."""
    return map_plane(rgb_plane, gray_value)


def _barrier(t: float) -> int:
    return math.floor(t * 256)


def threshold(plane: list[list[int]], t: float) -> list[list[int]]:
    """Binarise an intensity plane.

    ``t`` is normalised: 0 is black and 1 is white.  Pixels below
    ``floor(t * 256)`` become 0, everything else becomes 255.
    """
    barrier = _barrier(t)
    return map_plane(plane, lambda value: 0 if value < barrier else 255)


def max_contrast(pixels: list[int], t: float) -> list[int]:
    """Grayscale-and-threshold a flat packed-RGB plane in a single pass."""
    barrier = _barrier(t)
    return [0 if gray_value(rgb) < barrier else 255 for rgb in pixels]
