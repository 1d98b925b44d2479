"""Conditional element: draws a wrapped element only when the context allows it."""

from typing import TYPE_CHECKING, Any, Callable

from labelgen.design.base import LabelElement, context_matches

if TYPE_CHECKING:
    from labelgen.render.backend import LabelCanvas, PillowBackend


class ConditionalElement(LabelElement):
    """
    Wraps one element and a predicate evaluated against the render context.

    The wrapped element is drawn only when the context passed to draw() is an
    instance of `context_type` and the predicate returns True for it. Position
    and rotation are those of the wrapped element, so moving the wrapper moves
    what gets drawn.
    """

    kind = "conditional"

    def __init__(
        self,
        element: LabelElement,
        predicate: Callable[[Any], bool],
        context_type: type = object,
    ) -> None:
        """
        Initialize conditional element.

        Args:
            element: Element to draw when the predicate holds. Required.
            predicate: Test run against the render context. Required.
            context_type: Type the context must have for the predicate to run.

        Raises:
            ValueError: If element or predicate is missing.
        """
        if element is None:
            raise ValueError("Conditional element requires an element to wrap")
        if predicate is None:
            raise ValueError("Conditional element requires a predicate")

        self.element = element
        self.predicate = predicate
        self.context_type = context_type
        super().__init__(element.x, element.y, element.rotation)

    @property
    def x(self) -> float:  # type: ignore[override]
        return self.element.x

    @x.setter
    def x(self, value: float) -> None:
        self.element.x = value

    @property
    def y(self) -> float:  # type: ignore[override]
        return self.element.y

    @y.setter
    def y(self, value: float) -> None:
        self.element.y = value

    @property
    def rotation(self) -> float:  # type: ignore[override]
        return self.element.rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self.element.rotation = value

    def applies_to(self, context: Any) -> bool:
        """
        Check whether the wrapped element should be drawn for a context.

        Args:
            context: Render context.

        Returns:
            True if the context has the declared type and the predicate holds.
        """
        return context_matches(context, self.context_type) and bool(self.predicate(context))

    def draw(self, canvas: "LabelCanvas", context: Any = None) -> None:
        # The wrapped element applies its own rotation
        if self.applies_to(context):
            self.element.draw(canvas, context)

    def _paint(self, canvas: "LabelCanvas", context: Any) -> None:
        self.element._paint(canvas, context)

    def scale(self, factor: float) -> None:
        self.element.scale(factor)

    def measured_height(self) -> float:
        return self.element.measured_height()

    def measured_width(self, backend: "PillowBackend") -> float:
        return self.element.measured_width(backend)
