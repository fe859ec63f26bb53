"""Colour extraction collaborators."""

from .color_source import CachedColorSource, ColorSource

__all__ = ["CachedColorSource", "ColorSource"]
