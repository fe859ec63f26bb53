"""Tests for palette extraction from artwork bytes."""

from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from albumtint.imgproc.color_extract import ColorExtractionError, ColorExtractor
from albumtint.models import argb


def _png(width: int = 40, height: int = 40, split: int = 30) -> bytes:
    image = Image.new("RGB", (width, height), (0, 0, 255))
    image.paste((255, 0, 0), (0, 0, split, height))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def test_dominant_colors_ranked_by_frequency() -> None:
    colors = ColorExtractor().dominant_colors(_png())

    assert colors[:2] == [(255, 0, 0), (0, 0, 255)]


def test_palette_roles_from_two_tone_image() -> None:
    palette = ColorExtractor().palette_from_bytes(_png())

    assert palette.primary == argb((255, 0, 0))
    assert palette.secondary == argb((0, 0, 255))
    assert palette.accent == argb((0, 0, 255))
    assert palette.background_start == argb((89, 0, 0))
    assert palette.background_end == 0xFF1A1A1A
    assert palette.text_primary == 0xFFFFFFFF


def test_grey_image_falls_back_to_most_common_colour() -> None:
    image = Image.new("RGB", (16, 16), (128, 128, 128))
    buffer = BytesIO()
    image.save(buffer, format="PNG")

    palette = ColorExtractor().palette_from_bytes(buffer.getvalue())

    assert palette.primary == argb((128, 128, 128))
    assert palette.accent == palette.primary
    assert palette.secondary == argb((96, 96, 96))


def test_undecodable_bytes_raise() -> None:
    with pytest.raises(ColorExtractionError):
        ColorExtractor().dominant_colors(b"not an image")


def test_build_palette_requires_colours() -> None:
    with pytest.raises(ColorExtractionError):
        ColorExtractor().build_palette([])
