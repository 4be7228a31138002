"""Main CLI entry point."""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console

from math_preproc.config import EdgeOperator, PipelineConfig, ThresholdMode
from math_preproc.errors import PreprocessError
from math_preproc.images import save_image
from math_preproc.pipeline import preprocess_file
from math_preproc.visualize import intensity_histogram_image

console = Console(stderr=True)
load_dotenv()


def _parse_size(ctx, param, value):
    if value is None:
        return None
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise click.BadParameter("expected WIDTHxHEIGHT, e.g. 512x256") from None
    if width <= 0 or height <= 0:
        raise click.BadParameter("width and height must be positive")
    return width, height


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--edges", "-e",
    type=click.Choice([op.value for op in EdgeOperator], case_sensitive=False),
    default=None,
    help="Override the fixed Sobel edge step "
         "(extension; env PREPROC_EDGE_OPERATOR).  [default: sobel]",
)
@click.option(
    "--threshold", "-t",
    default=None,
    help="Override the fixed Otsu step: 'otsu' or a level in [0, 1] "
         "(extension; env PREPROC_THRESHOLD).  [default: otsu]",
)
@click.option(
    "--blur/--no-blur",
    default=None,
    help="Add a 3x3 box blur before edge detection "
         "(extension; env PREPROC_BLUR).  [default: no-blur]",
)
@click.option(
    "--histogram", "histogram_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a bar chart of the intensity histogram to this path.",
)
@click.option(
    "--histogram-size",
    default="512x256",
    show_default=True,
    callback=_parse_size,
    help="Size of the histogram chart as WIDTHxHEIGHT.",
)
@click.option(
    "--page",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help="Zero-based page to rasterise when INPUT_PATH is a PDF.",
)
@click.option(
    "--dpi",
    default=150,
    show_default=True,
    type=click.IntRange(min=1),
    help="DPI for PDF rendering.",
)
@click.version_option(package_name="math-preproc")
def main(input_path, output_path, edges, threshold, blur, histogram_path, histogram_size, page, dpi):
    """Binarise an image of handwritten math for recognition.

    Reads INPUT_PATH (any format Pillow decodes, or a PDF page), extracts
    edges, thresholds them and writes OUTPUT_PATH.  The output format follows
    the extension of OUTPUT_PATH.

    With no options the fixed pipeline runs: grayscale, Sobel edges, Otsu
    threshold.  --edges, --threshold and --blur (and the PREPROC_EDGE_OPERATOR,
    PREPROC_THRESHOLD and PREPROC_BLUR variables) are extensions that override
    that fixed pipeline.
    """
    try:
        config = PipelineConfig.from_env(
            edge_override=edges,
            threshold_override=threshold,
            blur_override=blur,
        )
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    try:
        with console.status(f"[cyan]Processing {input_path.name}..."):
            result = preprocess_file(input_path, output_path, config, page=page, dpi=dpi)
            if histogram_path:
                chart = intensity_histogram_image(result.histogram, *histogram_size)
                save_image(chart, histogram_path)
    except PreprocessError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if config.threshold_mode == ThresholdMode.OTSU:
        level = f"otsu t={result.otsu}"
    else:
        level = f"fixed {config.fixed_threshold}"
    console.print(
        f"[dim]{result.width}x{result.height}, "
        f"edges={config.edge_operator.value}, threshold={level}[/dim]"
    )
    console.print(f"[green]Written to {output_path}[/green]")
    if histogram_path:
        console.print(f"[green]Histogram written to {histogram_path}[/green]")
