"""Element variants that can be placed on a label."""

from labelgen.design.elements.barcode import BarcodeElement
from labelgen.design.elements.conditional import ConditionalElement
from labelgen.design.elements.image import ImageElement
from labelgen.design.elements.text import TextElement

__all__ = [
    "BarcodeElement",
    "ConditionalElement",
    "ImageElement",
    "TextElement",
]
