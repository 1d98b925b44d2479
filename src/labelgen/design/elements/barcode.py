"""Barcode element implementation."""

from typing import TYPE_CHECKING, Any

from labelgen.design.base import LabelElement, validate_scale_factor
from labelgen.types import Symbology

if TYPE_CHECKING:
    from labelgen.render.backend import LabelCanvas, PillowBackend


class BarcodeElement(LabelElement):
    """
    Linear barcode in a target rectangle.

    The symbol is encoded every time the element is drawn, so an invalid
    payload only fails at render time.
    """

    kind = "barcode"

    def __init__(
        self,
        code: str | None,
        x: float,
        y: float,
        width: float,
        height: float,
        symbology: Symbology = Symbology.CODE_128,
        rotation: float = 0.0,
    ) -> None:
        """
        Initialize barcode element.

        Args:
            code: Payload to encode. None is treated as empty.
            x: Left edge in pixels.
            y: Top edge in pixels.
            width: Symbol width in pixels.
            height: Symbol height in pixels.
            symbology: Barcode symbology.
            rotation: Clockwise rotation in degrees around (x, y).

        Raises:
            ValueError: If the rectangle is empty.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Barcode size must be greater than 0, got: {width}x{height}")

        super().__init__(x, y, rotation)
        self.code = code if code is not None else ""
        self.width = width
        self.height = height
        self.symbology = symbology

    def _paint(self, canvas: "LabelCanvas", context: Any) -> None:
        canvas.draw_barcode(self.code, self.symbology, self.x, self.y, self.width, self.height)

    def scale(self, factor: float) -> None:
        validate_scale_factor(factor)
        self.x *= factor
        self.y *= factor
        self.width *= factor
        self.height *= factor

    def measured_height(self) -> float:
        return self.height

    def measured_width(self, backend: "PillowBackend") -> float:
        return self.width
