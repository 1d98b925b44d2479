"""Label container: fixed canvas size plus an ordered element sequence."""

import logging
from typing import Any

from PIL import Image

from labelgen.design.base import LabelElement, validate_scale_factor
from labelgen.render.backend import PillowBackend
from labelgen.types import Color, Sink

logger = logging.getLogger(__name__)


class Label:
    """
    Fixed-size label with elements drawn in insertion order.

    Later elements paint over earlier ones; there is no other layering rule.
    """

    def __init__(self, width: float, height: float, background: Color = (255, 255, 255)) -> None:
        """
        Initialize an empty label.

        Args:
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            background: Color the canvas is cleared to before drawing.

        Raises:
            ValueError: If width or height is not greater than 0.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Label dimensions must be greater than 0, got: {width}x{height}")

        self._width = width
        self._height = height
        self.background = background
        self._elements: list[LabelElement] = []

    @property
    def width(self) -> float:
        """Canvas width in pixels."""
        return self._width

    @property
    def height(self) -> float:
        """Canvas height in pixels."""
        return self._height

    @property
    def elements(self) -> tuple[LabelElement, ...]:
        """Elements in paint order."""
        return tuple(self._elements)

    def add_element(self, element: LabelElement) -> None:
        """
        Append an element; it paints over everything added before it.

        Args:
            element: Element to append.

        Raises:
            ValueError: If element is None.
        """
        if element is None:
            raise ValueError("Cannot add a missing element to a label")
        self._elements.append(element)

    def scale(self, factor: float) -> None:
        """
        Scale the canvas and every element by the same factor.

        Args:
            factor: Scale factor, greater than 0.

        Raises:
            ValueError: If factor is not greater than 0.
        """
        # Validate up front so a bad factor leaves nothing half-scaled
        validate_scale_factor(factor)

        self._width *= factor
        self._height *= factor
        for element in self._elements:
            element.scale(factor)

        logger.debug(f"Scaled label by {factor:.4f} to {self._width:.1f}x{self._height:.1f}")

    def _set_size(self, width: float, height: float) -> None:
        """Overwrite the canvas size without touching elements (used by scale-to-fit)."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Label dimensions must be greater than 0, got: {width}x{height}")
        self._width = width
        self._height = height

    def to_image(self, context: Any = None, backend: PillowBackend | None = None) -> Image.Image:
        """
        Draw the label into a new image.

        Args:
            context: Runtime context handed to every element.
            backend: Drawing backend (default: PillowBackend()).

        Returns:
            RGB image of the label's size.

        Raises:
            BarcodeEncodingError: If a barcode payload cannot be encoded.
        """
        backend = backend or PillowBackend()
        canvas = backend.new_canvas(self._width, self._height, self.background)

        for element in self._elements:
            element.draw(canvas, context)

        return canvas.to_image()

    def render(self, sink: Sink, context: Any = None, backend: PillowBackend | None = None) -> None:
        """
        Draw the label and hand the finished image to sink.

        Args:
            sink: Callable receiving the finished PIL image.
            context: Runtime context handed to every element.
            backend: Drawing backend (default: PillowBackend()).
        """
        img = self.to_image(context, backend)
        logger.debug(f"Rendered label with {len(self._elements)} element(s) at {img.width}x{img.height}")
        sink(img)
