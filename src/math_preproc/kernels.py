"""Named correlation kernels.

Kernels are row-major ``list[list[float]]``.  The engine correlates (it does
not flip), so the ``_X`` kernels respond to intensity rising left to right and
the ``_Y`` kernels to intensity rising top to bottom.
"""

IDENTITY = [[1]]

SOBEL_X = [
    [-1, 0, 1],
    [-2, 0, 2],
    [-1, 0, 1],
]

SOBEL_Y = [
    [-1, -2, -1],
    [0, 0, 0],
    [1, 2, 1],
]

PREWITT_X = [
    [-1, 0, 1],
    [-1, 0, 1],
    [-1, 0, 1],
]

PREWITT_Y = [
    [-1, -1, -1],
    [0, 0, 0],
    [1, 1, 1],
]

# 2x2: only accepted by the permissive engine.
ROBERTS_X = [
    [1, 0],
    [0, -1],
]

ROBERTS_Y = [
    [0, 1],
    [-1, 0],
]

LAPLACIAN = [
    [0, -1, 0],
    [-1, 4, -1],
    [0, -1, 0],
]


def box(size: int = 3) -> list[list[float]]:
    """Uniform averaging kernel of ``size`` x ``size`` with weights ``1 / size**2``."""
    weight = 1 / (size * size)
    return [[weight] * size for _ in range(size)]
