"""Element model and label container."""

from labelgen.design.base import LabelElement
from labelgen.design.elements import BarcodeElement, ConditionalElement, ImageElement, TextElement
from labelgen.design.label import Label

__all__ = [
    "BarcodeElement",
    "ConditionalElement",
    "ImageElement",
    "Label",
    "LabelElement",
    "TextElement",
]
