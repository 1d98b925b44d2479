"""Font resolution for text measurement and drawing."""

import logging
from pathlib import Path

from PIL import ImageFont

from labelgen.types import FontSpec

logger = logging.getLogger(__name__)


def load_font(font: FontSpec, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Resolve a font specification to a Pillow font at the given size.

    Resolution priority:
    1. None → Pillow's built-in scalable font
    2. Path to an existing TrueType/OpenType file
    3. Font name Pillow can locate on the system (e.g. "DejaVuSans.ttf")
    4. Fall back to the built-in font

    Args:
        font: Font path, font name, or None.
        size: Font size in pixels.

    Returns:
        Pillow font object.

    Raises:
        ValueError: If size is not positive.
    """
    if size <= 0:
        raise ValueError(f"Font size must be greater than 0, got: {size}")

    if font is None:
        return ImageFont.load_default(size=size)

    try:
        return ImageFont.truetype(str(font), size=size)
    except OSError:
        if Path(font).exists():
            # A real file that isn't a font is a caller error
            raise
        logger.warning(f"Font '{font}' not found, using built-in font")
        return ImageFont.load_default(size=size)
