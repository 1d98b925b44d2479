"""CLI interface for label rendering."""

import logging
from pathlib import Path

import click

from labelgen.api import LabelBuilder
from labelgen.config import LabelSettings, load_settings
from labelgen.render import PDFRenderer
from labelgen.serialization import load_label


def parse_size(value: str) -> tuple[float, float]:
    """
    Parse a "WIDTHxHEIGHT" size string.

    Args:
        value: Size such as "400x200".

    Returns:
        Tuple of (width, height).

    Raises:
        ValueError: If the string is malformed or a dimension is not positive.
    """
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Expected WIDTHxHEIGHT, got: {value}")
    width, height = float(parts[0]), float(parts[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"Size must be greater than 0, got: {value}")
    return width, height


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log layout and rendering steps.")
def main(verbose: bool) -> None:
    """Render fixed-size labels from JSON label definitions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file. A .pdf suffix produces a PDF, anything else an image.",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=(
        "Path to labelgen.toml settings. Only `background` is applied; fonts, colors, "
        "margin and symbology are already stored per element in the definition."
    ),
)
@click.option("--scale", "scale_factor", type=float, help="Scale the label uniformly by this factor.")
@click.option("--fit", type=str, help="Scale uniformly to fit inside WIDTHxHEIGHT, e.g. 812x406.")
@click.option(
    "--dpi",
    type=int,
    default=203,
    show_default=True,
    help="Pixel density used to size PDF pages.",
)
def render(
    definition: Path,
    output: Path,
    config: Path | None,
    scale_factor: float | None,
    fit: str | None,
    dpi: int,
) -> None:
    """
    Render a label definition (as written by save_label) to an image or PDF.
    """
    try:
        settings = load_settings(config) if config else LabelSettings()
        label = load_label(definition)

        if config:
            label.background = settings.background
        builder = LabelBuilder.from_label(label, settings=settings)

        if scale_factor is not None:
            builder.scale(scale_factor)
        if fit:
            builder.scale_to_fit(*parse_size(fit))

        result = builder.build()
        click.echo(f"Rendering {len(result.elements)} element(s) at {result.width:.0f}x{result.height:.0f}...")

        if output.suffix.lower() == ".pdf":
            PDFRenderer(dpi=dpi).render_label(result, output)
        else:
            result.render(lambda img: img.save(output))

        click.echo(f"✓ Label saved to: {output}")

    # Missing files and undecodable images are OSErrors
    except (OSError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
