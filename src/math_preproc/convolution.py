"""2D correlation of real-valued kernels against pixel planes.

The engine correlates (the kernel is not flipped).  Two modes exist:

* **intensity mode** works on single-channel planes and writes the result
  directly;
* **RGB mode** works on packed-RGB planes, reads and writes only the bits
  selected by a channel mask, and copies every other byte from the source.

For a ``kr`` x ``kc`` kernel the window whose top-left corner is ``(r, c)``
writes its result at ``(r + kr // 2, c + kc // 2)``, so the output stays
registered with the input.  Output positions whose window would leave the
source are 0 (in RGB mode: the masked channel is 0, other bytes are kept).
"""

from typing import Iterator

from math_preproc.errors import InvalidKernel, InvalidMask
from math_preproc.planes import shape
from math_preproc.pointwise import clamp as clamp_value

INTENSITY_MASK = 0xFF

# Accumulators are snapped to this many decimals before truncation so that
# fractional weights like 1/9 average to exact integers.
_PRECISION = 9


def validate_kernel(kernel: list[list[float]], strict: bool = False) -> tuple[int, int]:
    """Return ``(rows, cols)`` of ``kernel`` or raise :class:`InvalidKernel`.

    The permissive (default) check accepts even sizes, which the Roberts
    cross needs.  ``strict=True`` also rejects them.
    """
    rows = len(kernel)
    cols = len(kernel[0]) if rows else 0
    if rows == 0 or cols == 0:
        raise InvalidKernel("Kernel must have at least one row and one column.")
    if any(len(row) != cols for row in kernel):
        raise InvalidKernel("Kernel rows must all have the same width.")
    if strict and (rows % 2 == 0 or cols % 2 == 0):
        raise InvalidKernel(
            f"Kernel must have an odd number of rows and columns, got {rows}x{cols}."
        )
    return rows, cols


def mask_shift(mask: int) -> int:
    """Return the bit position of the lowest set bit of a channel mask."""
    if mask <= 0:
        raise InvalidMask(f"Channel mask must be a positive bit run, got {mask:#x}.")
    shift = (mask & -mask).bit_length() - 1
    run = mask >> shift
    if run & (run + 1):
        raise InvalidMask(f"Channel mask {mask:#x} is not a contiguous run of bits.")
    return shift


def _windows(
    plane: list[list[int]], kernel: list[list[float]]
) -> Iterator[tuple[int, int, float]]:
    """Yield ``(out_row, out_col, accumulator)`` for every computable window."""
    rows, cols = shape(plane)
    krows, kcols = len(kernel), len(kernel[0])
    taps = [
        (kr, kc, weight)
        for kr, kernel_row in enumerate(kernel)
        for kc, weight in enumerate(kernel_row)
        if weight
    ]
    row_offset, col_offset = krows // 2, kcols // 2

    for r in range(rows - krows + 1):
        for c in range(cols - kcols + 1):
            acc = sum(plane[r + kr][c + kc] * weight for kr, kc, weight in taps)
            yield r + row_offset, c + col_offset, round(acc, _PRECISION)


def correlate(
    plane: list[list[int]],
    kernel: list[list[float]],
    clamp: bool = True,
    strict: bool = False,
) -> list[list[int]]:
    """Correlate an intensity plane with ``kernel``.

    With ``clamp=True`` results are clamped into [0, 255].  The unclamped
    variant keeps signed values for callers that combine two directional
    responses (see :func:`math_preproc.edges.combine_magnitude`).  Either way
    results are truncated toward zero.
    """
    validate_kernel(kernel, strict)
    rows, cols = shape(plane)
    output = [[0] * cols for _ in range(rows)]

    for r, c, acc in _windows(plane, kernel):
        value = int(acc)
        output[r][c] = clamp_value(value) if clamp else value

    return output


def correlate_channel(
    plane: list[list[int]],
    kernel: list[list[float]],
    mask: int,
    strict: bool = False,
) -> list[list[int]]:
    """Correlate one channel of a packed-RGB plane, leaving the others untouched.

    The channel value is always clamped into the range the mask can hold.
    """
    validate_kernel(kernel, strict)
    shift = mask_shift(mask)
    channel_max = mask >> shift

    channel = [[(rgb & mask) >> shift for rgb in row] for row in plane]
    output = [[rgb & ~mask for rgb in row] for row in plane]

    for r, c, acc in _windows(channel, kernel):
        output[r][c] |= clamp_value(int(acc), 0, channel_max) << shift

    return output


def apply_convolution(
    pixels: list[list[int]],
    kernel: list[list[float]],
    mask: int = INTENSITY_MASK,
    clamp: bool = True,
    strict: bool = False,
) -> list[list[int]]:
    """Correlate ``pixels`` with ``kernel``, choosing the mode from ``mask``.

    ``0xFF`` selects intensity mode; any other single-channel mask (e.g.
    ``0xFF0000`` for red) selects RGB mode.  Use :func:`correlate_channel`
    directly to address the blue byte of a packed-RGB plane.

    RGB mode always clamps: a packed channel cannot hold a signed response,
    so ``clamp=False`` with such a mask raises ``ValueError``.
    """
    mask_shift(mask)
    if mask == INTENSITY_MASK:
        return correlate(pixels, kernel, clamp=clamp, strict=strict)
    if not clamp:
        raise ValueError(
            f"Unclamped correlation needs the intensity mask {INTENSITY_MASK:#x}, "
            f"got {mask:#x}."
        )
    return correlate_channel(pixels, kernel, mask, strict=strict)
