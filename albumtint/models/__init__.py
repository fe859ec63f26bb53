"""Value types for songs and palettes."""

from .palette import Palette, argb, to_hex
from .song import Song

__all__ = ["Palette", "Song", "argb", "to_hex"]
