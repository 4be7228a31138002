"""The fixed preprocessing pipeline ahead of math-expression recognition.

Pipeline
--------
1. Grayscale: unweighted ``(R + G + B) // 3`` average of each pixel.

2. Box blur: optional 3x3 average to suppress paper grain before edge
   detection.  Off by default.

3. Edge magnitude: Sobel (default), Prewitt or Roberts responses combined as
   ``sqrt(Gx**2 + Gy**2)``.  Pen strokes become bright
   outlines on a black background.  ``none`` skips this step
   and binarises the grayscale plane itself.

4. Threshold: Otsu's threshold t over the 256-bin histogram of the plane
   from step 3 (default): intensities <= t become 0, the rest 255.  A
   single-intensity plane stays 255.  Alternatively a fixed normalised level.
"""

import io
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from math_preproc import kernels
from math_preproc.config import EdgeOperator, PipelineConfig, ThresholdMode
from math_preproc.convolution import correlate
from math_preproc.edges import detect_edges
from math_preproc.errors import ImageIOError
from math_preproc.histogram import intensity_histogram, otsu_threshold
from math_preproc.images import get_pixels, grayscale_image, load, save_grayscale
from math_preproc.planes import to_1d, to_2d
from math_preproc.pointwise import threshold, to_grayscale


@dataclass
class PipelineResult:
    """Binary plane plus what was measured on the way to it."""
    binary: list[list[int]]
    width: int
    height: int
    # Histogram of the plane that was thresholded.
    histogram: list[int]
    # Normalised level handed to ``threshold``, see :func:`otsu_level`.
    level: float
    otsu: Optional[int] = None

    @property
    def barrier(self) -> int:
        return math.floor(self.level * 256)

    def pixels(self) -> list[int]:
        return to_1d(self.binary)


def otsu_level(histogram: list[int], t: int) -> float:
    """Normalised ``threshold`` level for an Otsu threshold ``t``.

    Otsu puts intensities ``<= t`` in the background class, so the barrier is
    ``t + 1`` and that class goes to 0.  A histogram with a single populated
    bin has no second class: the level is ``t / 256`` and every pixel stays 255.
    """
    populated = sum(1 for count in histogram if count)
    if populated <= 1:
        return t / 256
    return (t + 1) / 256


def _smooth(plane: list[list[int]]) -> list[list[int]]:
    blurred = correlate(plane, kernels.box(3))
    # The one-pixel frame outside the window's reach keeps its source values.
    last_row = len(plane) - 1
    for r, row in enumerate(blurred):
        last_col = len(row) - 1
        for c in range(len(row)):
            if r in (0, last_row) or c in (0, last_col):
                row[c] = plane[r][c]
    return blurred


def run_pipeline(
    pixels: list[int],
    width: int,
    height: int,
    config: Optional[PipelineConfig] = None,
) -> PipelineResult:
    """Binarise a packed-RGB 1D plane of ``width`` x ``height`` pixels."""
    config = config or PipelineConfig()

    plane = to_grayscale(to_2d(pixels, height, width))

    if config.blur:
        plane = _smooth(plane)

    if config.edge_operator != EdgeOperator.NONE:
        plane = detect_edges(plane, config.edge_operator.value)

    histogram = intensity_histogram(plane)

    otsu = None
    if config.threshold_mode == ThresholdMode.OTSU:
        otsu = otsu_threshold(histogram)
        level = otsu_level(histogram, otsu)
    else:
        level = config.fixed_threshold

    return PipelineResult(
        binary=threshold(plane, level),
        width=width,
        height=height,
        histogram=histogram,
        level=level,
        otsu=otsu,
    )


def preprocess_image(
    image: Image.Image, config: Optional[PipelineConfig] = None
) -> PipelineResult:
    return run_pipeline(get_pixels(image), image.width, image.height, config)


def preprocess_file(
    input_path: Path,
    output_path: Path,
    config: Optional[PipelineConfig] = None,
    page: int = 0,
    dpi: int = 150,
) -> PipelineResult:
    """Load ``input_path``, run the pipeline and write the binary image to ``output_path``."""
    width, height, pixels = load(input_path, page=page, dpi=dpi)
    result = run_pipeline(pixels, width, height, config)
    save_grayscale(result.pixels(), width, height, output_path)
    return result


def preprocess_for_ocr(
    image_bytes: bytes, config: Optional[PipelineConfig] = None
) -> bytes:
    """Run the pipeline on encoded image bytes and return the result as PNG bytes."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            image = img.convert("RGB")
    except (OSError, UnidentifiedImageError) as e:
        raise ImageIOError(f"Cannot decode image bytes: {e}") from e

    result = preprocess_image(image, config)

    buf = io.BytesIO()
    grayscale_image(result.pixels(), result.width, result.height).save(buf, format="PNG")
    return buf.getvalue()
