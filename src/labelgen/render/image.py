"""Image processing utilities using Pillow."""

from io import BytesIO

from PIL import Image


def load_image_from_bytes(image_data: bytes) -> Image.Image:
    """
    Load image from raw bytes.

    Args:
        image_data: Raw image bytes (JPEG, PNG, etc.).

    Returns:
        PIL Image object.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a readable image.
    """
    img = Image.open(BytesIO(image_data))
    # Force decoding now so malformed data fails here, not at draw time
    img.load()
    return img


def save_image_to_bytes(img: Image.Image, format: str = "PNG") -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, JPEG, etc.).

    Returns:
        Image as bytes.
    """
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def fit_image(img: Image.Image, width: int, height: int) -> Image.Image:
    """
    Resize image to exactly fill a target rectangle.

    The image is stretched to the rectangle; callers choose the rectangle's aspect.

    Args:
        img: Source image.
        width: Target width in pixels.
        height: Target height in pixels.

    Returns:
        RGBA copy of the image at (width, height).
    """
    if img.mode != "RGBA":
        img = img.convert("RGBA")

    if img.size == (width, height):
        return img.copy()

    # Resize with high-quality resampling
    return img.resize((width, height), Image.Resampling.LANCZOS)
