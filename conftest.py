"""Shared fixtures: a deterministic measurement backend and small sample contexts."""

from dataclasses import dataclass

import pytest
from PIL import Image

from labelgen import LabelBuilder, PillowBackend


class FixedWidthBackend(PillowBackend):
    """Measures every character as half the font size wide."""

    def __init__(self) -> None:
        super().__init__()
        self.measure_calls = 0

    def measure_text_width(self, text, font, size):
        self.measure_calls += 1
        return len(text) * size * 0.5


@dataclass(frozen=True)
class Product:
    """Sample label context."""

    name: str
    sku: str
    perishable: bool = False
    price: float = 0.0


@pytest.fixture
def backend() -> FixedWidthBackend:
    return FixedWidthBackend()


@pytest.fixture
def make_builder(backend):
    """Factory for builders that measure with the fixed-width backend."""

    def factory(width: float = 200, height: float = 100, **kwargs) -> LabelBuilder:
        return LabelBuilder(width, height, backend=backend, **kwargs)

    return factory


@pytest.fixture
def red_square() -> Image.Image:
    return Image.new("RGB", (10, 10), (255, 0, 0))
