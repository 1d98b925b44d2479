"""Type aliases and enums used across the labelgen package."""

from enum import Enum
from pathlib import Path
from typing import Callable, Tuple, Union

from PIL import Image

# Color types
RGBColor = Tuple[int, int, int]  # RGB color in 0-255 range
Color = Union[str, RGBColor]  # Pillow color name ("white") or RGB tuple

# Fonts: path to a TrueType file, a font name Pillow can locate, or None for the default font
FontSpec = Union[str, Path, None]

# Receives the finished label bitmap
Sink = Callable[[Image.Image], None]


class HorizontalAlignment(Enum):
    """Horizontal placement of an element on the label."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Symbology(Enum):
    """Linear barcode symbologies, valued by their python-barcode name."""

    CODE_128 = "code128"
    CODE_39 = "code39"
    EAN_13 = "ean13"
    EAN_8 = "ean8"
    UPC_A = "upca"
    ITF = "itf"
