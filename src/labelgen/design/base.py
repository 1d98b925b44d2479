"""Base abstraction for label elements."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from labelgen.render.backend import LabelCanvas, PillowBackend


def validate_scale_factor(factor: float) -> None:
    """
    Reject scale factors that would collapse or mirror geometry.

    Raises:
        ValueError: If factor is not greater than 0.
    """
    if factor <= 0:
        raise ValueError(f"Scale factor must be greater than 0, got: {factor}")


def context_matches(context: Any, context_type: type) -> bool:
    """
    Check whether a runtime context may be handed to a predicate.

    A missing context never matches, even for context_type=object.
    """
    return context is not None and isinstance(context, context_type)


class LabelElement(ABC):
    """
    Base class for everything drawn on a label.

    Position and size share the owning label's unit (pixels). The element is
    rotated clockwise by `rotation` degrees around its (x, y) origin.
    """

    kind = "element"
    """Tag identifying the element variant in persisted labels."""

    def __init__(self, x: float, y: float, rotation: float = 0.0) -> None:
        """
        Initialize element position.

        Args:
            x: Left edge in pixels.
            y: Top edge in pixels.
            rotation: Clockwise rotation in degrees around (x, y).
        """
        self.x = x
        self.y = y
        self.rotation = rotation

    def draw(self, canvas: "LabelCanvas", context: Any = None) -> None:
        """
        Draw this element, honoring rotation.

        Args:
            canvas: Canvas to draw on.
            context: Runtime context passed to every element of the label.
        """
        with canvas.rotated(self.rotation, self.x, self.y):
            self._paint(canvas, context)

    @abstractmethod
    def _paint(self, canvas: "LabelCanvas", context: Any) -> None:
        """Paint the element unrotated at its position."""
        pass

    @abstractmethod
    def scale(self, factor: float) -> None:
        """
        Multiply position, size and size-derived state by factor.

        Args:
            factor: Scale factor, greater than 0.

        Raises:
            ValueError: If factor is not greater than 0.
        """
        pass

    @abstractmethod
    def measured_height(self) -> float:
        """Return current rendered height in pixels."""
        pass

    @abstractmethod
    def measured_width(self, backend: "PillowBackend") -> float:
        """
        Return current rendered width in pixels.

        Args:
            backend: Backend used for text measurement.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x!r}, y={self.y!r}, rotation={self.rotation!r})"
