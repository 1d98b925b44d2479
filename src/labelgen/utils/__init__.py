"""Utility modules."""

from labelgen.utils.text import split_text

__all__ = ["split_text"]
