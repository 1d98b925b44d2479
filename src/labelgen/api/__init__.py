"""Programmatic label composition."""

from labelgen.api.builder import LabelBuilder

__all__ = ["LabelBuilder"]
