"""Declarative composition and rendering of fixed-size labels."""

__version__ = "0.1.0"

# High-level Python API
from labelgen.api import LabelBuilder
from labelgen.config import LabelSettings, load_settings
from labelgen.design import (
    BarcodeElement,
    ConditionalElement,
    ImageElement,
    Label,
    LabelElement,
    TextElement,
)
from labelgen.render import BarcodeEncoder, BarcodeEncodingError, PDFRenderer, PillowBackend
from labelgen.serialization import deserialize_label, load_label, save_label, serialize_label
from labelgen.types import HorizontalAlignment, Symbology

__all__ = [
    "BarcodeElement",
    "BarcodeEncoder",
    "BarcodeEncodingError",
    "ConditionalElement",
    "HorizontalAlignment",
    "ImageElement",
    "Label",
    "LabelBuilder",
    "LabelElement",
    "LabelSettings",
    "PDFRenderer",
    "PillowBackend",
    "Symbology",
    "TextElement",
    "deserialize_label",
    "load_label",
    "load_settings",
    "save_label",
    "serialize_label",
]
