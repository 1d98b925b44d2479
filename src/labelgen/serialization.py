"""Persisted form of labels: JSON documents validated with pydantic."""

import logging
from pathlib import Path
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from labelgen.design.base import LabelElement
from labelgen.design.elements import BarcodeElement, ConditionalElement, ImageElement, TextElement
from labelgen.design.label import Label
from labelgen.render.image import load_image_from_bytes, save_image_to_bytes
from labelgen.types import Color, Symbology

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _symbology_from_name(value: Any) -> Any:
    """Accept symbologies by name ("CODE_128"), as they are written."""
    if isinstance(value, str):
        try:
            return Symbology[value]
        except KeyError:
            raise ValueError(f"Unknown symbology: {value}") from None
    return value


SymbologyName = Annotated[
    Symbology,
    BeforeValidator(_symbology_from_name),
    PlainSerializer(lambda s: s.name, return_type=str),
]


# ============================================================================
# Document models
# ============================================================================

class _DocumentModel(BaseModel):
    # Embedded images travel as base64 text
    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")


class ElementModel(_DocumentModel):
    """Fields shared by every persisted element."""

    x: float
    y: float
    rotation: float = 0.0


class TextModel(ElementModel):
    kind: Literal["text"] = "text"
    text: str = ""
    font: str | None = None
    size: float = Field(gt=0)
    color: Color = (0, 0, 0)


class ImageModel(ElementModel):
    kind: Literal["image"] = "image"
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    data: bytes
    """PNG-encoded bitmap."""


class BarcodeModel(ElementModel):
    kind: Literal["barcode"] = "barcode"
    code: str = ""
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    symbology: SymbologyName = Symbology.CODE_128


AnyElementModel = Annotated[Union[TextModel, ImageModel, BarcodeModel], Field(discriminator="kind")]


class LabelModel(_DocumentModel):
    """A label's dimensions, background and elements in paint order."""

    version: int = FORMAT_VERSION
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    background: Color = (255, 255, 255)
    elements: list[AnyElementModel] = Field(default_factory=list)


# ============================================================================
# Element codecs
# ============================================================================

def _text_to_model(element: TextElement) -> TextModel:
    return TextModel(
        x=element.x,
        y=element.y,
        rotation=element.rotation,
        text=element.text,
        font=str(element.font) if element.font is not None else None,
        size=element.size,
        color=element.color,
    )


def _image_to_model(element: ImageElement) -> ImageModel:
    img = element.image
    if img.mode not in ("1", "L", "LA", "P", "RGB", "RGBA"):
        img = img.convert("RGBA")
    return ImageModel(
        x=element.x,
        y=element.y,
        rotation=element.rotation,
        width=element.width,
        height=element.height,
        data=save_image_to_bytes(img, "PNG"),
    )


def _barcode_to_model(element: BarcodeElement) -> BarcodeModel:
    return BarcodeModel(
        x=element.x,
        y=element.y,
        rotation=element.rotation,
        code=element.code,
        width=element.width,
        height=element.height,
        symbology=element.symbology,
    )


def _text_from_model(model: TextModel) -> TextElement:
    return TextElement(model.text, model.x, model.y, model.font, model.size, model.color, model.rotation)


def _image_from_model(model: ImageModel) -> ImageElement:
    img = load_image_from_bytes(model.data)
    return ImageElement(img, model.x, model.y, model.width, model.height, model.rotation)


def _barcode_from_model(model: BarcodeModel) -> BarcodeElement:
    return BarcodeElement(
        model.code, model.x, model.y, model.width, model.height, model.symbology, model.rotation
    )


# Handlers by element kind; new element types register here
_ENCODERS: dict[str, Callable[[Any], ElementModel]] = {
    TextElement.kind: _text_to_model,
    ImageElement.kind: _image_to_model,
    BarcodeElement.kind: _barcode_to_model,
}

_DECODERS: dict[str, Callable[[Any], LabelElement]] = {
    TextElement.kind: _text_from_model,
    ImageElement.kind: _image_from_model,
    BarcodeElement.kind: _barcode_from_model,
}


def _element_to_model(element: LabelElement) -> ElementModel:
    if isinstance(element, ConditionalElement):
        raise ValueError(
            "Conditional elements hold a predicate function and cannot be serialized"
        )
    encoder = _ENCODERS.get(element.kind)
    if encoder is None:
        raise ValueError(f"No serializer for element kind '{element.kind}'")
    return encoder(element)


# ============================================================================
# Public API
# ============================================================================

def label_to_model(label: Label) -> LabelModel:
    """
    Convert a label to its document model.

    Raises:
        ValueError: If the label contains conditional or unknown elements.
    """
    return LabelModel(
        width=label.width,
        height=label.height,
        background=label.background,
        elements=[_element_to_model(e) for e in label.elements],
    )


def label_from_model(model: LabelModel) -> Label:
    """Rebuild a label from its document model."""
    label = Label(model.width, model.height, model.background)
    for element_model in model.elements:
        label.add_element(_DECODERS[element_model.kind](element_model))
    return label


def serialize_label(label: Label) -> str:
    """
    Serialize a label to JSON.

    Args:
        label: Label to serialize.

    Returns:
        JSON text. Symbologies are written by name, images as base64 PNG.

    Raises:
        ValueError: If the label contains conditional elements.
    """
    return label_to_model(label).model_dump_json(indent=2)


def deserialize_label(text: str | bytes) -> Label:
    """
    Parse a label from JSON produced by serialize_label().

    Raises:
        pydantic.ValidationError: If the document is malformed (a ValueError).
        PIL.UnidentifiedImageError: If an embedded image cannot be decoded.
    """
    model = LabelModel.model_validate_json(text)
    if model.version != FORMAT_VERSION:
        logger.warning(f"Label document version {model.version}, expected {FORMAT_VERSION}")
    return label_from_model(model)


def save_label(label: Label, path: str | Path) -> None:
    """Write a label as JSON to path."""
    path = Path(path)
    path.write_text(serialize_label(label), encoding="utf-8")
    logger.info(f"Label saved to: {path}")


def load_label(path: str | Path) -> Label:
    """
    Read a label from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Label definition not found: {path}")
    return deserialize_label(path.read_bytes())
