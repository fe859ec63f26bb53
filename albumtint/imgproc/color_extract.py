"""Dominant colour extraction utilities."""

from __future__ import annotations

from collections import Counter
from colorsys import rgb_to_hls
from io import BytesIO
from typing import Sequence

from PIL import Image, UnidentifiedImageError

from albumtint.models import Palette, argb
from albumtint.models.palette import WHITE

RGB = tuple[int, int, int]

BACKGROUND_END = 0xFF1A1A1A
TEXT_SECONDARY = 0xFFB3B3B3

# Colours outside these bounds read as grey, black or white on screen.
_MIN_SATURATION = 0.25
_MIN_LIGHTNESS = 0.15
_MAX_LIGHTNESS = 0.85
_MIN_DISTANCE = 48


class ColorExtractionError(RuntimeError):
    """Raised when artwork bytes cannot be turned into a palette."""


def _hls(color: RGB) -> tuple[float, float, float]:
    r, g, b = color
    return rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)


def _is_vibrant(color: RGB) -> bool:
    _, lightness, saturation = _hls(color)
    return saturation >= _MIN_SATURATION and _MIN_LIGHTNESS <= lightness <= _MAX_LIGHTNESS


def _distance(first: RGB, second: RGB) -> float:
    return sum((a - b) ** 2 for a, b in zip(first, second)) ** 0.5


def _scale(color: RGB, factor: float) -> RGB:
    r, g, b = (min(255, int(channel * factor)) for channel in color)
    return r, g, b


class ColorExtractor:
    """Median-cut histogram colour detector for album art."""

    def __init__(self, quantize_colors: int = 16, thumbnail_size: int = 64) -> None:
        self._quantize_colors = quantize_colors
        self._thumbnail_size = thumbnail_size

    def dominant_colors(self, image_bytes: bytes, top_n: int = 6) -> list[RGB]:
        """Return the most common colours of the image, most frequent first."""

        try:
            with Image.open(BytesIO(image_bytes)) as img:
                rgb = img.convert("RGB")
        except (UnidentifiedImageError, OSError) as exc:
            raise ColorExtractionError("Artwork is not a decodable image.") from exc

        rgb.thumbnail((self._thumbnail_size, self._thumbnail_size))
        quantized = rgb.quantize(colors=self._quantize_colors, method=Image.Quantize.MEDIANCUT)
        palette_data = quantized.getpalette() or []

        counter: Counter[RGB] = Counter()
        for index, count in enumerate(quantized.histogram()):
            if count == 0 or index * 3 + 2 >= len(palette_data):
                continue
            r, g, b = palette_data[index * 3 : index * 3 + 3]
            counter[(r, g, b)] += count

        if not counter:
            raise ColorExtractionError("Artwork contains no usable pixels.")
        return [color for color, _ in counter.most_common(top_n)]

    def build_palette(self, colors: Sequence[RGB]) -> Palette:
        """Map ranked colours onto the seven theming roles."""

        if not colors:
            raise ColorExtractionError("No colours to build a palette from.")

        vibrant = [color for color in colors if _is_vibrant(color)]
        primary = vibrant[0] if vibrant else colors[0]

        others = [color for color in colors if _distance(color, primary) >= _MIN_DISTANCE]
        secondary = others[0] if others else _scale(primary, 0.75)

        accent_pool = [color for color in vibrant if color != primary]
        accent = max(accent_pool, key=lambda color: _hls(color)[2]) if accent_pool else primary

        return Palette(
            primary=argb(primary),
            secondary=argb(secondary),
            background_start=argb(_scale(primary, 0.35)),
            background_end=BACKGROUND_END,
            text_primary=WHITE,
            text_secondary=TEXT_SECONDARY,
            accent=argb(accent),
        )

    def palette_from_bytes(self, image_bytes: bytes) -> Palette:
        return self.build_palette(self.dominant_colors(image_bytes))
