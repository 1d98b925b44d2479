"""PDF generation using ReportLab."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from labelgen.render.backend import PillowBackend

if TYPE_CHECKING:
    from labelgen.design.label import Label

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72


def pixels_to_points(pixels: float, dpi: int) -> float:
    """
    Convert pixels at a given DPI to PDF points (72 points = 1 inch).

    Args:
        pixels: Measurement in pixels.
        dpi: Pixel density.

    Returns:
        Measurement in points.
    """
    return pixels * POINTS_PER_INCH / dpi


class PDFRenderer:
    """Renders labels to PDF, one page per label, sized to the label."""

    def __init__(self, dpi: int = 203, backend: PillowBackend | None = None) -> None:
        """
        Initialize PDF renderer.

        Args:
            dpi: Pixel density of the label canvas (203 is common for thermal label printers).
            backend: Drawing backend (default: PillowBackend()).

        Raises:
            ValueError: If dpi is not positive.
        """
        if dpi <= 0:
            raise ValueError(f"DPI must be greater than 0, got: {dpi}")
        self.dpi = dpi
        self.backend = backend or PillowBackend()

    def render_labels(self, labels: list["Label"], output_path: Path, context: Any = None) -> None:
        """
        Render labels to a PDF file.

        Args:
            labels: Labels to render, one page each.
            output_path: Path to output PDF file.
            context: Runtime context handed to every element.

        Raises:
            ValueError: If labels is empty.
        """
        if not labels:
            raise ValueError("At least one label is required")

        c = canvas.Canvas(str(output_path))

        for label in labels:
            img = label.to_image(context, self.backend)
            page_width = pixels_to_points(img.width, self.dpi)
            page_height = pixels_to_points(img.height, self.dpi)

            c.setPageSize((page_width, page_height))
            c.drawImage(ImageReader(img), 0, 0, width=page_width, height=page_height)
            c.showPage()

        c.save()
        logger.info(f"PDF with {len(labels)} label(s) saved to: {output_path}")

    def render_label(self, label: "Label", output_path: Path, context: Any = None) -> None:
        """Render a single label to a PDF file."""
        self.render_labels([label], output_path, context)
