"""Render an intensity histogram as a bar chart image."""

from PIL import Image

from math_preproc.histogram import BINS
from math_preproc.images import create_grayscale_image, resize


def histogram_plane(histogram: list[int]) -> list[list[int]]:
    """256x256 plane with one black bar per bin on a white background.

    Bar heights are scaled so the fullest bin spans the whole height.
    """
    height = BINS
    max_count = max(histogram, default=0)
    plane = [[255] * len(histogram) for _ in range(height)]

    if max_count <= 0:
        return plane

    for col, count in enumerate(histogram):
        bar_height = (height * count) // max_count
        for row in range(height - bar_height, height):
            plane[row][col] = 0

    return plane


def intensity_histogram_image(
    histogram: list[int],
    width: int,
    height: int,
    resample: Image.Resampling = Image.Resampling.NEAREST,
) -> Image.Image:
    original = create_grayscale_image(histogram_plane(histogram))
    return resize(original, width, height, resample=resample)
