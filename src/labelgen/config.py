"""Configuration loading and validation."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from labelgen.types import Color, Symbology


class LabelSettings(BaseModel):
    """
    Defaults applied by the builder when a call leaves a value unset.

    All parameters have sensible defaults. Override only what you need using
    Pydantic's model_copy():

        base = LabelSettings(font="DejaVuSans.ttf")
        variant = base.model_copy(update={"font_size": 18})
    """

    # ========================================================================
    # Text
    # ========================================================================
    font: str | None = None
    """Font file path or font name. None uses Pillow's built-in scalable font."""

    font_size: float = Field(default=12.0, gt=0)
    """Font size in canvas units (pixels)."""

    text_color: Color = (0, 0, 0)
    """Fill color for text. Default: black."""

    # ========================================================================
    # Canvas
    # ========================================================================
    background: Color = (255, 255, 255)
    """Background the canvas is cleared to before drawing. Default: white."""

    margin: float = Field(default=5.0, ge=0)
    """Distance kept from the left/right edge by LEFT and RIGHT alignment."""

    # ========================================================================
    # Barcodes
    # ========================================================================
    symbology: Symbology = Symbology.CODE_128
    """Default symbology for barcode elements."""


def load_settings(config_path: Path | None = None) -> LabelSettings:
    """
    Load label settings from a TOML file.

    Keys may live at the top level, under a ``[label]`` table, or both; the
    table wins when a key appears in both places.

    Args:
        config_path: Path to settings file. If None, looks for labelgen.toml in current directory.

    Returns:
        Validated LabelSettings object.

    Raises:
        FileNotFoundError: If settings file doesn't exist.
        ValueError: If settings are invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "labelgen.toml"

    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    with open(config_path, "rb") as f:
        config_dict = tomllib.load(f)

    # Top-level keys and a [label] table may be mixed; the table wins
    top_level = {key: value for key, value in config_dict.items() if key != "label"}
    section = {**top_level, **config_dict.get("label", {})}

    # Symbologies are written by name in TOML ("CODE_128")
    symbology = section.get("symbology")
    if isinstance(symbology, str):
        try:
            section = {**section, "symbology": Symbology[symbology.upper()]}
        except KeyError:
            raise ValueError(f"Unknown symbology in {config_path}: {symbology}") from None

    return LabelSettings(**section)
