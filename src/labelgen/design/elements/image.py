"""Image element implementation."""

from typing import TYPE_CHECKING, Any

from PIL import Image

from labelgen.design.base import LabelElement, validate_scale_factor

if TYPE_CHECKING:
    from labelgen.render.backend import LabelCanvas, PillowBackend


class ImageElement(LabelElement):
    """Bitmap stretched into a target rectangle."""

    kind = "image"

    def __init__(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
        rotation: float = 0.0,
    ) -> None:
        """
        Initialize image element.

        Args:
            image: Bitmap to draw. Required.
            x: Left edge in pixels.
            y: Top edge in pixels.
            width: Target width in pixels.
            height: Target height in pixels.
            rotation: Clockwise rotation in degrees around (x, y).

        Raises:
            ValueError: If image is None or the rectangle is empty.
        """
        if image is None:
            raise ValueError("Image element requires an image")
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be greater than 0, got: {width}x{height}")

        super().__init__(x, y, rotation)
        self.image = image
        self.width = width
        self.height = height

    def _paint(self, canvas: "LabelCanvas", context: Any) -> None:
        canvas.paint_image(self.image, self.x, self.y, self.width, self.height)

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
