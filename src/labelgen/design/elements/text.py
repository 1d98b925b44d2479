"""Text element implementation."""

from typing import TYPE_CHECKING, Any

from labelgen.design.base import LabelElement, validate_scale_factor
from labelgen.types import Color, FontSpec

if TYPE_CHECKING:
    from labelgen.render.backend import LabelCanvas, PillowBackend


class TextElement(LabelElement):
    """
    Single line of text.

    The measured width is cached after the first measurement. Scaling and any
    change to text, font or size clear the cache.
    """

    kind = "text"

    def __init__(
        self,
        text: str | None,
        x: float,
        y: float,
        font: FontSpec = None,
        size: float = 12.0,
        color: Color = (0, 0, 0),
        rotation: float = 0.0,
    ) -> None:
        """
        Initialize text element.

        Args:
            text: Text to draw. None is treated as empty.
            x: Left edge in pixels.
            y: Top edge in pixels.
            font: Font path/name, or None for the built-in font.
            size: Font size in pixels.
            color: Fill color.
            rotation: Clockwise rotation in degrees around (x, y).

        Raises:
            ValueError: If size is not greater than 0.
        """
        if size <= 0:
            raise ValueError(f"Font size must be greater than 0, got: {size}")

        super().__init__(x, y, rotation)
        self._text = text if text is not None else ""
        self._font = font
        self._size = size
        self.color = color
        self._measured_width: float | None = None

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str | None) -> None:
        self._text = value if value is not None else ""
        self._measured_width = None

    @property
    def font(self) -> FontSpec:
        return self._font

    @font.setter
    def font(self, value: FontSpec) -> None:
        self._font = value
        self._measured_width = None

    @property
    def size(self) -> float:
        return self._size

    @size.setter
    def size(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"Font size must be greater than 0, got: {value}")
        self._size = value
        self._measured_width = None

    def _paint(self, canvas: "LabelCanvas", context: Any) -> None:
        canvas.draw_text(self._text, self.x, self.y, self._font, self._size, self.color)

    def scale(self, factor: float) -> None:
        validate_scale_factor(factor)
        self.x *= factor
        self.y *= factor
        self._size *= factor
        self._measured_width = None

    def measured_height(self) -> float:
        return self._size

    def measured_width(self, backend: "PillowBackend") -> float:
        if self._measured_width is None:
            self._measured_width = backend.measure_text_width(self._text, self._font, self._size)
        return self._measured_width
