"""Fluent builder for composing labels."""

import logging
from typing import Any, Callable, Iterable, TypeVar

from PIL import Image

from labelgen.config import LabelSettings
from labelgen.design.base import LabelElement, context_matches, validate_scale_factor
from labelgen.design.elements import BarcodeElement, ConditionalElement, ImageElement, TextElement
from labelgen.design.label import Label
from labelgen.render.backend import PillowBackend
from labelgen.render.image import load_image_from_bytes
from labelgen.types import Color, FontSpec, HorizontalAlignment, Sink, Symbology
from labelgen.utils.text import split_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

Configure = Callable[["LabelBuilder"], None]


def _require_branch(predicate: Callable[[Any], bool], configure: Configure) -> None:
    if predicate is None:
        raise ValueError("Decision branch requires a predicate")
    if configure is None:
        raise ValueError("Decision branch requires a configure callback")


class _DecisionChain:
    """State of one if_/elif_/else_ sequence: whether a branch already ran."""

    def __init__(self) -> None:
        self.fired = False


class LabelBuilder:
    """
    Fluent composition of a Label.

    Every add_* call creates an element, aligns it horizontally, clamps it inside
    the canvas and appends it. The builder tracks the lowest edge reached so far
    ("last y"), which drives center_vertically().

    Example:
        ```python
        from labelgen import HorizontalAlignment, LabelBuilder

        def save(img):
            img.save("tag.png")

        (
            LabelBuilder(400, 200)
            .with_context(product)
            .add_text(product.name, 0, 10, size=24, alignment=HorizontalAlignment.CENTER)
            .if_(lambda p: p.perishable, lambda b: b.add_text("KEEP COLD", 0, 40), Product)
            .else_(lambda b: b.add_text("Shelf stable", 0, 40))
            .add_barcode(product.sku, 0, 120, 300, 60, HorizontalAlignment.CENTER)
            .center_vertically()
            .generate(save)
        )
        ```
    """

    def __init__(
        self,
        width: float,
        height: float,
        settings: LabelSettings | None = None,
        backend: PillowBackend | None = None,
    ) -> None:
        """
        Start a new label.

        Args:
            width: Label width in pixels.
            height: Label height in pixels.
            settings: Defaults for fonts, colors, margin and symbology.
            backend: Measurement and drawing backend (default: PillowBackend()).

        Raises:
            ValueError: If width or height is not greater than 0.
        """
        self._settings = settings or LabelSettings()
        self._backend = backend or PillowBackend()
        self._label = Label(width, height, self._settings.background)
        self._context: Any = None
        self._last_y = 0.0
        self._chain: _DecisionChain | None = None

    @classmethod
    def from_label(
        cls,
        label: Label,
        settings: LabelSettings | None = None,
        backend: PillowBackend | None = None,
    ) -> "LabelBuilder":
        """
        Continue composing an existing label, e.g. one loaded from disk.

        Last y is recomputed from the label's elements.

        Args:
            label: Label to continue.
            settings: Defaults for elements added from here on.
            backend: Measurement and drawing backend.

        Returns:
            Builder wrapping the given label.
        """
        builder = cls(label.width, label.height, settings, backend)
        builder._label = label
        builder._last_y = max((e.y + e.measured_height() for e in label.elements), default=0.0)
        return builder

    # ========================================================================
    # Context
    # ========================================================================

    def with_context(self, context: Any) -> "LabelBuilder":
        """
        Bind the context used by if_/elif_ and passed to generate().

        Args:
            context: Any object describing what the label is for.
        """
        self._context = context
        return self

    @property
    def context(self) -> Any:
        """Currently bound context (None if unset)."""
        return self._context

    # ========================================================================
    # Elements
    # ========================================================================

    def add_text(
        self,
        text: str | None,
        x: float,
        y: float,
        font: FontSpec = None,
        size: float | None = None,
        color: Color | None = None,
        alignment: HorizontalAlignment | None = None,
        rotation: float = 0.0,
    ) -> "LabelBuilder":
        """
        Add a line of text.

        Args:
            text: Text to draw. None is treated as empty.
            x: Requested left edge (ignored when alignment is given).
            y: Top edge.
            font: Font path/name. Defaults to settings.font.
            size: Font size. Defaults to settings.font_size.
            color: Fill color. Defaults to settings.text_color.
            alignment: Horizontal alignment, or None to keep x.
            rotation: Clockwise rotation in degrees around the element origin.
        """
        element = TextElement(
            text,
            x,
            y,
            font if font is not None else self._settings.font,
            size if size is not None else self._settings.font_size,
            color if color is not None else self._settings.text_color,
            rotation,
        )
        return self._place(element, alignment)

    def add_barcode(
        self,
        code: str | None,
        x: float,
        y: float,
        width: float,
        height: float,
        alignment: HorizontalAlignment | None = None,
        rotation: float = 0.0,
        symbology: Symbology | None = None,
    ) -> "LabelBuilder":
        """
        Add a barcode. The symbol is encoded when the label is rendered.

        Args:
            code: Payload. None is treated as empty.
            x: Requested left edge (ignored when alignment is given).
            y: Top edge.
            width: Symbol width.
            height: Symbol height.
            alignment: Horizontal alignment, or None to keep x.
            rotation: Clockwise rotation in degrees around the element origin.
            symbology: Barcode symbology. Defaults to settings.symbology.
        """
        element = BarcodeElement(
            code,
            x,
            y,
            width,
            height,
            symbology if symbology is not None else self._settings.symbology,
            rotation,
        )
        return self._place(element, alignment)

    def add_image(
        self,
        image: Image.Image | bytes,
        x: float,
        y: float,
        width: float,
        height: float,
        alignment: HorizontalAlignment | None = None,
        rotation: float = 0.0,
    ) -> "LabelBuilder":
        """
        Add a bitmap stretched into a rectangle.

        Args:
            image: PIL image, or raw encoded image bytes.
            x: Requested left edge (ignored when alignment is given).
            y: Top edge.
            width: Target width.
            height: Target height.
            alignment: Horizontal alignment, or None to keep x.
            rotation: Clockwise rotation in degrees around the element origin.

        Raises:
            ValueError: If image is None.
            PIL.UnidentifiedImageError: If image bytes cannot be decoded.
        """
        if isinstance(image, bytes):
            image = load_image_from_bytes(image)
        element = ImageElement(image, x, y, width, height, rotation)
        return self._place(element, alignment)

    def add_split_text(
        self,
        text: str | None,
        x: float,
        y: float,
        font: FontSpec,
        size: float | None,
        max_length: int,
        line_spacing: float,
        color: Color | None = None,
        alignment: HorizontalAlignment | None = None,
    ) -> "LabelBuilder":
        """
        Add text broken into lines of at most max_length characters.

        Line i is placed at y + i * line_spacing and aligned and clamped on its own.

        Args:
            text: Text to split. None or empty yields one empty line.
            x: Requested left edge (ignored when alignment is given).
            y: Top edge of the first line.
            font: Font path/name, or None for settings.font.
            size: Font size, or None for settings.font_size.
            max_length: Maximum characters per line.
            line_spacing: Distance between the tops of consecutive lines.
            color: Fill color. Defaults to settings.text_color.
            alignment: Horizontal alignment, or None to keep x.

        Raises:
            ValueError: If max_length is not greater than 0.
        """
        lines = split_text(text, max_length)
        for i, line in enumerate(lines):
            self.add_text(line, x, y + i * line_spacing, font, size, color, alignment)
        return self

    def add_conditional(
        self,
        element: LabelElement,
        predicate: Callable[[T], bool],
        context_type: type[T] = object,
        alignment: HorizontalAlignment | None = None,
    ) -> "LabelBuilder":
        """
        Add an element that is drawn only if the render context satisfies predicate.

        Unlike if_(), the test runs when the label is rendered, against the
        context given to render()/generate().

        Args:
            element: Element to wrap (e.g. a TextElement).
            predicate: Test run against the render context.
            context_type: Type the context must have for the predicate to run.
            alignment: Horizontal alignment, or None to keep the element's x.

        Raises:
            ValueError: If element or predicate is missing.
        """
        return self._place(ConditionalElement(element, predicate, context_type), alignment)

    # ========================================================================
    # Decision chains and iteration
    # ========================================================================

    def if_(
        self,
        predicate: Callable[[T], bool],
        configure: Configure,
        context_type: type[T] = object,
    ) -> "LabelBuilder":
        """
        Open a decision chain and run configure if the bound context satisfies predicate.

        The predicate only runs when the context is bound and is an instance of
        context_type. An if_ called from inside a branch opens a nested chain;
        the enclosing chain is restored when the branch returns.

        Args:
            predicate: Test run against the bound context.
            configure: Callback receiving this builder.
            context_type: Type the context must have for the predicate to run.

        Raises:
            ValueError: If predicate or configure is missing.
        """
        self._chain = _DecisionChain()
        self._try_branch(self._chain, predicate, configure, context_type)
        return self

    def elif_(
        self,
        predicate: Callable[[T], bool],
        configure: Configure,
        context_type: type[T] = object,
    ) -> "LabelBuilder":
        """
        Run configure if no earlier branch of the chain ran and predicate holds.

        Raises:
            ValueError: If no chain is open, or predicate or configure is missing.
        """
        chain = self._open_chain("elif_")
        _require_branch(predicate, configure)
        if not chain.fired:
            self._try_branch(chain, predicate, configure, context_type)
        return self

    def else_(self, configure: Configure) -> "LabelBuilder":
        """
        Run configure if no earlier branch of the chain ran.

        Raises:
            ValueError: If no chain is open or configure is missing.
        """
        chain = self._open_chain("else_")
        if configure is None:
            raise ValueError("else_ requires a configure callback")
        if not chain.fired:
            self._fire(chain, configure)
        return self

    def for_range(
        self, start: int, end: int, configure: Callable[["LabelBuilder", int], None]
    ) -> "LabelBuilder":
        """
        Call configure(builder, i) for i from start (inclusive) to end (exclusive).

        Raises:
            ValueError: If configure is missing.
        """
        if configure is None:
            raise ValueError("for_range requires a configure callback")
        for i in range(start, end):
            configure(self, i)
        return self

    def for_each(
        self, items: Iterable[T], configure: Callable[["LabelBuilder", T], None]
    ) -> "LabelBuilder":
        """
        Call configure(builder, item) for each item in order.

        Raises:
            ValueError: If items or configure is missing.
        """
        if items is None:
            raise ValueError("for_each requires an iterable of items")
        if configure is None:
            raise ValueError("for_each requires a configure callback")
        for item in items:
            configure(self, item)
        return self

    def _open_chain(self, operation: str) -> _DecisionChain:
        if self._chain is None:
            raise ValueError(f"{operation} called without a preceding if_")
        return self._chain

    def _try_branch(
        self,
        chain: _DecisionChain,
        predicate: Callable[[Any], bool],
        configure: Configure,
        context_type: type,
    ) -> None:
        _require_branch(predicate, configure)
        if context_matches(self._context, context_type) and predicate(self._context):
            self._fire(chain, configure)

    def _fire(self, chain: _DecisionChain, configure: Configure) -> None:
        try:
            configure(self)
        finally:
            # Nested if_ calls inside configure must not replace this chain
            self._chain = chain
        chain.fired = True

    # ========================================================================
    # Scaling and centering
    # ========================================================================

    def scale(self, factor: float) -> "LabelBuilder":
        """
        Scale the label, every element and the tracked last y uniformly.

        Raises:
            ValueError: If factor is not greater than 0.
        """
        validate_scale_factor(factor)
        self._label.scale(factor)
        self._last_y *= factor
        return self

    def scale_to_fit(self, target_width: float, target_height: float) -> "LabelBuilder":
        """
        Scale uniformly so the label fits inside a target size.

        The aspect ratio is preserved; one dimension ends up equal to its target.

        Raises:
            ValueError: If either target dimension is not greater than 0.
        """
        if target_width <= 0 or target_height <= 0:
            raise ValueError(
                f"Target dimensions must be greater than 0, got: {target_width}x{target_height}"
            )

        width_ratio = target_width / self._label.width
        height_ratio = target_height / self._label.height
        factor = min(width_ratio, height_ratio)
        logger.debug(f"Scaling to fit {target_width}x{target_height} (factor {factor:.4f})")
        self.scale(factor)

        # Rounding in width * factor can land one ulp past the target
        if width_ratio <= height_ratio:
            self._label._set_size(target_width, min(self._label.height, target_height))
        else:
            self._label._set_size(min(self._label.width, target_width), target_height)
        return self

    def center_vertically(self) -> "LabelBuilder":
        """
        Shift all elements so the content block is vertically centered.

        The content block runs from 0 to last y. Content taller than the label
        is shifted upward; positions are not clamped afterwards.
        """
        elements = self._label.elements
        if not elements:
            return self

        offset = (self._label.height - self._last_y) / 2
        for element in elements:
            element.y += offset
        self._last_y += offset

        logger.debug(f"Centered {len(elements)} element(s) vertically (offset {offset:.2f})")
        return self

    def last_y(self) -> float:
        """Lowest edge reached by any element added so far."""
        return self._last_y

    # ========================================================================
    # Output
    # ========================================================================

    def build(self) -> Label:
        """Return the composed label."""
        return self._label

    def generate(self, sink: Sink) -> "LabelBuilder":
        """
        Render the label with the bound context and hand the image to sink.

        Closes any open decision chain.

        Args:
            sink: Callable receiving the finished PIL image.

        Raises:
            BarcodeEncodingError: If a barcode payload cannot be encoded.
        """
        self._label.render(sink, self._context, self._backend)
        self._chain = None
        return self

    # ========================================================================
    # Placement
    # ========================================================================

    def _place(self, element: LabelElement, alignment: HorizontalAlignment | None) -> "LabelBuilder":
        """Align, clamp and append an element, then update last y."""
        self._align(element, alignment)
        self._clamp(element)
        self._label.add_element(element)
        self._last_y = max(self._last_y, element.y + element.measured_height())

        logger.debug(f"Added {element!r}, last y now {self._last_y:.2f}")
        return self

    def _align(self, element: LabelElement, alignment: HorizontalAlignment | None) -> None:
        if alignment is None:
            return

        label_width = self._label.width
        element_width = element.measured_width(self._backend)
        margin = self._settings.margin

        if alignment is HorizontalAlignment.LEFT:
            element.x = margin
        elif alignment is HorizontalAlignment.CENTER:
            element.x = (label_width - element_width) / 2
        elif alignment is HorizontalAlignment.RIGHT:
            element.x = label_width - element_width - margin
        else:
            raise ValueError(f"Unknown alignment: {alignment!r}")

    def _clamp(self, element: LabelElement) -> None:
        # Off-canvas placement is corrected, never rejected
        width = element.measured_width(self._backend)
        height = element.measured_height()

        if element.x < 0:
            element.x = 0
        if element.y < 0:
            element.y = 0
        if element.x + width > self._label.width:
            element.x = self._label.width - width
        if element.y + height > self._label.height:
            element.y = self._label.height - height
