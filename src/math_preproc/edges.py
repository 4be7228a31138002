"""Edge-magnitude combination of directional kernel responses."""

import math

from math_preproc import kernels
from math_preproc.convolution import correlate
from math_preproc.pointwise import clamp, map2_planes

KERNEL_PAIRS = {
    "sobel": (kernels.SOBEL_X, kernels.SOBEL_Y),
    "prewitt": (kernels.PREWITT_X, kernels.PREWITT_Y),
    "roberts": (kernels.ROBERTS_X, kernels.ROBERTS_Y),
}


def magnitude(gx: int, gy: int) -> int:
    """``clamp(round(sqrt(gx**2 + gy**2)))``, rounding halves up."""
    return clamp(math.floor(math.sqrt(gx * gx + gy * gy) + 0.5))


def combine_magnitude(gx: list[list[int]], gy: list[list[int]]) -> list[list[int]]:
    """Combine two directional responses of the same shape into one edge plane."""
    return map2_planes(gx, gy, magnitude)


def gradient_magnitude(
    plane: list[list[int]],
    kernel_x: list[list[float]],
    kernel_y: list[list[float]],
) -> list[list[int]]:
    gx = correlate(plane, kernel_x, clamp=False)
    gy = correlate(plane, kernel_y, clamp=False)
    return combine_magnitude(gx, gy)


def detect_edges(plane: list[list[int]], operator: str = "sobel") -> list[list[int]]:
    """Edge-magnitude plane using a named operator: sobel, prewitt or roberts."""
    try:
        kernel_x, kernel_y = KERNEL_PAIRS[operator]
    except KeyError:
        raise ValueError(f"Unknown edge operator: {operator}") from None
    return gradient_magnitude(plane, kernel_x, kernel_y)
