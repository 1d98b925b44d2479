"""Measurement and drawing backend built on Pillow."""

from contextlib import contextmanager
from typing import Iterator

from PIL import Image, ImageDraw

from labelgen.fonts import load_font
from labelgen.render.barcode import BarcodeEncoder
from labelgen.render.image import fit_image
from labelgen.types import Color, FontSpec, Symbology


class LabelCanvas:
    """
    Drawing surface for a single label render.

    Wraps an RGBA Pillow image. Drawing goes to the current layer, which is the
    base image unless a rotated() block is active.
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: Color = (255, 255, 255),
        encoder: BarcodeEncoder | None = None,
    ) -> None:
        """
        Initialize canvas cleared to the background color.

        Args:
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            background: Background color.
            encoder: Barcode encoder used by draw_barcode().
        """
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), background)
        self.encoder = encoder or BarcodeEncoder()
        self._layer = self.image

    def draw_text(
        self, text: str, x: float, y: float, font: FontSpec, size: float, color: Color
    ) -> None:
        """
        Draw a single line of text with its top edge at y.

        Args:
            text: Text to draw.
            x: Left edge in pixels.
            y: Top edge in pixels.
            font: Font specification.
            size: Font size in pixels.
            color: Fill color.
        """
        pil_font = load_font(font, size)
        draw = ImageDraw.Draw(self._layer)
        # Baseline sits one font size below the top edge
        draw.text((x, y + size), text, font=pil_font, fill=color, anchor="ls")

    def paint_image(self, img: Image.Image, x: float, y: float, width: float, height: float) -> None:
        """
        Paint an image scaled into a target rectangle.

        Args:
            img: Source image.
            x: Left edge in pixels.
            y: Top edge in pixels.
            width: Target width in pixels.
            height: Target height in pixels.
        """
        fitted = fit_image(img, max(1, round(width)), max(1, round(height)))
        self._layer.paste(fitted, (round(x), round(y)), fitted)

    def draw_barcode(
        self,
        payload: str,
        symbology: Symbology,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """
        Encode and paint a barcode into a target rectangle.

        Raises:
            BarcodeEncodingError: If the payload is invalid for the symbology.
        """
        w = max(1, round(width))
        h = max(1, round(height))
        symbol = self.encoder.encode(payload, symbology, w, h)
        self.paint_image(symbol, x, y, w, h)

    @contextmanager
    def rotated(self, degrees: float, pivot_x: float, pivot_y: float) -> Iterator["LabelCanvas"]:
        """
        Rotate everything drawn inside the block around a pivot.

        Equivalent to save(), rotate(), draw, restore(): drawing goes to a
        transparent layer which is rotated clockwise by `degrees` and composited
        onto the previous layer when the block exits.

        Args:
            degrees: Clockwise rotation in degrees.
            pivot_x: Pivot x in pixels.
            pivot_y: Pivot y in pixels.
        """
        if degrees % 360 == 0:
            yield self
            return

        saved = self._layer
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        self._layer = layer
        try:
            yield self
        finally:
            self._layer = saved

        # PIL rotates counter-clockwise; y points down so negate
        turned = layer.rotate(-degrees, resample=Image.Resampling.BICUBIC, center=(pivot_x, pivot_y))
        saved.alpha_composite(turned)

    def to_image(self) -> Image.Image:
        """Return the finished label as an RGB image."""
        return self.image.convert("RGB")


class PillowBackend:
    """Text measurement and canvas creation for labels."""

    def __init__(self, encoder: BarcodeEncoder | None = None) -> None:
        """
        Initialize backend.

        Args:
            encoder: Barcode encoder handed to every new canvas.
        """
        self.encoder = encoder or BarcodeEncoder()

    def measure_text_width(self, text: str, font: FontSpec, size: float) -> float:
        """
        Measure the advance width of a line of text.

        The font is loaded for this call only.

        Args:
            text: Text to measure.
            font: Font specification.
            size: Font size in pixels.

        Returns:
            Width in pixels.
        """
        if not text:
            return 0.0
        return float(load_font(font, size).getlength(text))

    def new_canvas(self, width: float, height: float, background: Color = (255, 255, 255)) -> LabelCanvas:
        """
        Create a canvas cleared to the background color.

        Args:
            width: Width in pixels (truncated to an integer, minimum 1).
            height: Height in pixels (truncated to an integer, minimum 1).
            background: Background color.

        Returns:
            LabelCanvas ready for drawing.
        """
        return LabelCanvas(max(1, int(width)), max(1, int(height)), background, self.encoder)
