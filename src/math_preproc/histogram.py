"""Intensity histograms and Otsu's automatic threshold."""

from math_preproc.errors import OutOfRange

BINS = 256


def intensity_histogram(plane: list[list[int]]) -> list[int]:
    """Count the pixels of each intensity 0-255 in a grayscale plane."""
    histogram = [0] * BINS

    for r, row in enumerate(plane):
        for c, value in enumerate(row):
            if not 0 <= value < BINS:
                raise OutOfRange(
                    f"Pixel ({r}, {c}) has intensity {value}, expected 0-255."
                )
            histogram[int(value)] += 1

    return histogram


def otsu_threshold(histogram: list[int]) -> int:
    """Pick the intensity that maximises the between-class variance.

    Pixels ``<= t`` form the background class.  Ties go to the lowest ``t``.
    A histogram with a single populated bin returns that bin; an empty one
    returns 0.
    """
    populated = [i for i, count in enumerate(histogram) if count]
    if len(populated) == 1:
        return populated[0]

    total = sum(histogram)
    sum_total = sum(i * count for i, count in enumerate(histogram))

    sum_bg = 0.0
    weight_bg = 0
    max_variance = 0.0
    best = 0

    for t, count in enumerate(histogram):
        weight_bg += count
        if weight_bg == 0:
            continue
        weight_fg = total - weight_bg
        if weight_fg == 0:
            break

        sum_bg += t * count
        mean_bg = sum_bg / weight_bg
        mean_fg = (sum_total - sum_bg) / weight_fg

        # N**2 * w0 * w1 * (mu0 - mu1)**2; the constant factor does not move the argmax.
        variance = weight_bg * weight_fg * (mean_bg - mean_fg) ** 2
        if variance > max_variance:
            max_variance = variance
            best = t

    return best
