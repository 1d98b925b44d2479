"""Persisted label form and settings files."""

import json

import pytest
from PIL import Image

from labelgen import (
    BarcodeElement,
    ConditionalElement,
    ImageElement,
    Label,
    LabelBuilder,
    LabelSettings,
    Symbology,
    TextElement,
    deserialize_label,
    load_label,
    load_settings,
    save_label,
    serialize_label,
)


@pytest.fixture
def sample_label(red_square) -> Label:
    label = Label(300, 120, background=(250, 250, 240))
    label.add_element(TextElement("Fresh Milk 1L", 10, 5, None, 18, (10, 20, 30), rotation=15))
    label.add_element(BarcodeElement("5901234123457", 20, 40, 200, 50, Symbology.EAN_13))
    label.add_element(ImageElement(red_square, 250, 10, 30, 30))
    return label


def test_round_trip_reproduces_label(sample_label, red_square):
    restored = deserialize_label(serialize_label(sample_label))

    assert (restored.width, restored.height) == (300, 120)
    assert tuple(restored.background) == (250, 250, 240)
    assert [type(e) for e in restored.elements] == [TextElement, BarcodeElement, ImageElement]

    text, code, image = restored.elements
    assert (text.text, text.x, text.y, text.size, text.rotation) == ("Fresh Milk 1L", 10, 5, 18, 15)
    assert tuple(text.color) == (10, 20, 30)
    assert text.font is None
    assert (code.code, code.symbology) == ("5901234123457", Symbology.EAN_13)
    assert (code.x, code.y, code.width, code.height) == (20, 40, 200, 50)
    assert (image.x, image.y, image.width, image.height) == (250, 10, 30, 30)
    assert image.image.size == red_square.size
    assert image.image.convert("RGB").getpixel((5, 5)) == (255, 0, 0)


def test_enums_are_written_by_name(sample_label):
    document = json.loads(serialize_label(sample_label))
    assert document["elements"][1]["symbology"] == "EAN_13"
    assert [e["kind"] for e in document["elements"]] == ["text", "barcode", "image"]
    assert isinstance(document["elements"][2]["data"], str)


def test_unknown_symbology_is_rejected(sample_label):
    document = json.loads(serialize_label(sample_label))
    document["elements"][1]["symbology"] = "QR"
    with pytest.raises(ValueError):
        deserialize_label(json.dumps(document))


def test_invalid_dimensions_are_rejected():
    with pytest.raises(ValueError):
        deserialize_label('{"width": 0, "height": 10, "elements": []}')


def test_conditional_elements_cannot_be_serialized():
    label = Label(100, 50)
    label.add_element(ConditionalElement(TextElement("A", 0, 0), lambda c: True))
    with pytest.raises(ValueError):
        serialize_label(label)


def test_builder_output_round_trips():
    label = LabelBuilder(200, 100).add_split_text("ABCDEFG", 5, 5, None, 10, 3, 12).build()
    restored = deserialize_label(serialize_label(label))
    assert [e.text for e in restored.elements] == ["ABC", "DEF", "G"]
    assert [e.y for e in restored.elements] == [5, 17, 29]


def test_save_and_load(tmp_path, sample_label):
    path = tmp_path / "tag.json"
    save_label(sample_label, path)
    restored = load_label(path)
    assert len(restored.elements) == 3


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_label(tmp_path / "missing.json")


# ============================================================================
# Settings
# ============================================================================

def test_load_settings_from_label_table(tmp_path):
    path = tmp_path / "labelgen.toml"
    path.write_text(
        "[label]\n"
        "font_size = 14\n"
        "margin = 8\n"
        'symbology = "EAN_13"\n'
        "text_color = [255, 0, 0]\n"
    )
    settings = load_settings(path)
    assert settings.font_size == 14
    assert settings.margin == 8
    assert settings.symbology is Symbology.EAN_13
    assert tuple(settings.text_color) == (255, 0, 0)
    assert settings.font is None


def test_load_settings_top_level_keys(tmp_path):
    path = tmp_path / "labelgen.toml"
    path.write_text('background = "ivory"\n')
    assert load_settings(path).background == "ivory"


def test_load_settings_merges_top_level_keys_with_label_table(tmp_path):
    path = tmp_path / "labelgen.toml"
    path.write_text(
        'background = "ivory"\n'
        "margin = 2\n"
        "[label]\n"
        "margin = 8\n"
    )
    settings = load_settings(path)
    assert settings.background == "ivory"
    assert settings.margin == 8


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.toml")


@pytest.mark.parametrize("body", ['symbology = "QR"\n', "font_size = 0\n", "margin = -1\n"])
def test_load_settings_rejects_invalid_values(tmp_path, body):
    path = tmp_path / "labelgen.toml"
    path.write_text(body)
    with pytest.raises(ValueError):
        load_settings(path)


def test_settings_feed_builder_defaults():
    settings = LabelSettings(font_size=20, text_color="navy", symbology=Symbology.CODE_39)
    label = LabelBuilder(200, 100, settings=settings).add_text("A", 0, 0).add_barcode("AB", 0, 30, 50, 20).build()
    text, code = label.elements
    assert text.size == 20
    assert text.color == "navy"
    assert code.symbology is Symbology.CODE_39


def test_settings_copy_idiom():
    base = LabelSettings()
    variant = base.model_copy(update={"margin": 2.0})
    assert (base.margin, variant.margin) == (5.0, 2.0)
