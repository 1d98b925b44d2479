"""Linear barcode encoding using python-barcode."""

import logging

import barcode
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter
from PIL import Image

from labelgen.types import Symbology

logger = logging.getLogger(__name__)


class BarcodeEncodingError(ValueError):
    """Raised when a payload cannot be represented in the requested symbology."""


class BarcodeEncoder:
    """Encodes string payloads into raster barcode images of a fixed size."""

    # Writer options shared by every symbol; sizes are fixed up by resizing afterwards
    WRITER_OPTIONS = {
        "write_text": False,
        "quiet_zone": 1.0,
        "module_width": 0.2,
        "module_height": 10.0,
    }

    def encode(
        self,
        payload: str,
        symbology: Symbology = Symbology.CODE_128,
        width: int = 200,
        height: int = 60,
    ) -> Image.Image:
        """
        Encode payload into a barcode image.

        Args:
            payload: Data to encode.
            symbology: Barcode symbology (default: Code 128).
            width: Target width in pixels.
            height: Target height in pixels.

        Returns:
            RGB PIL Image of exactly (width, height) pixels.

        Raises:
            BarcodeEncodingError: If the payload is empty or invalid for the symbology.
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Barcode size must be greater than 0, got: {width}x{height}")
        if not payload:
            raise BarcodeEncodingError(f"Cannot encode an empty payload as {symbology.name}")
        if symbology is Symbology.CODE_128 and not payload.isascii():
            raise BarcodeEncodingError(f"Code 128 only encodes ASCII characters: {payload!r}")

        try:
            barcode_class = barcode.get_barcode_class(symbology.value)
            symbol = barcode_class(payload, writer=ImageWriter())
            img = symbol.render(writer_options=self.WRITER_OPTIONS)
        except (BarcodeError, KeyError, ValueError) as e:
            raise BarcodeEncodingError(
                f"Cannot encode {payload!r} as {symbology.name}: {e}"
            ) from e

        logger.debug(f"Encoded {symbology.name} barcode {payload!r} at {width}x{height}")

        # Nearest-neighbour keeps bar edges hard
        return img.convert("RGB").resize((width, height), Image.Resampling.NEAREST)
