"""Rendering backend, barcode encoding and output formats."""

from labelgen.render.backend import LabelCanvas, PillowBackend
from labelgen.render.barcode import BarcodeEncoder, BarcodeEncodingError
from labelgen.render.image import fit_image, load_image_from_bytes, save_image_to_bytes
from labelgen.render.pdf import PDFRenderer

__all__ = [
    "BarcodeEncoder",
    "BarcodeEncodingError",
    "LabelCanvas",
    "PDFRenderer",
    "PillowBackend",
    "fit_image",
    "load_image_from_bytes",
    "save_image_to_bytes",
]
