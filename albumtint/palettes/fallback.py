"""Deterministic fallback palettes used when album art is unusable."""

from __future__ import annotations

import hashlib

from albumtint.models import Palette, Song
from albumtint.models.palette import WHITE

_BACKGROUND_END = 0xFF1A1A1A
_TEXT_SECONDARY = 0xFFB3B3B3

FALLBACK_KEYS: tuple[str, ...] = ("purple", "blue", "green", "red", "orange", "pink")

FALLBACK_PALETTES: dict[str, Palette] = {
    "purple": Palette(
        primary=0xFF8B5CF6,
        secondary=0xFFA855F7,
        background_start=0xFF2D1B69,
        background_end=_BACKGROUND_END,
        text_primary=WHITE,
        text_secondary=_TEXT_SECONDARY,
        accent=0xFF9333EA,
    ),
    "blue": Palette(
        primary=0xFF3B82F6,
        secondary=0xFF1D4ED8,
        background_start=0xFF1E3A8A,
        background_end=_BACKGROUND_END,
        text_primary=WHITE,
        text_secondary=_TEXT_SECONDARY,
        accent=0xFF2563EB,
    ),
    "green": Palette(
        primary=0xFF22C55E,
        secondary=0xFF16A34A,
        background_start=0xFF166534,
        background_end=_BACKGROUND_END,
        text_primary=WHITE,
        text_secondary=_TEXT_SECONDARY,
        accent=0xFF15803D,
    ),
    "red": Palette(
        primary=0xFFEF4444,
        secondary=0xFFDC2626,
        background_start=0xFF991B1B,
        background_end=_BACKGROUND_END,
        text_primary=WHITE,
        text_secondary=_TEXT_SECONDARY,
        accent=0xFFB91C1C,
    ),
    "orange": Palette(
        primary=0xFFF97316,
        secondary=0xFFEA580C,
        background_start=0xFF9A3412,
        background_end=_BACKGROUND_END,
        text_primary=WHITE,
        text_secondary=_TEXT_SECONDARY,
        accent=0xFFCC5500,
    ),
    "pink": Palette(
        primary=0xFFEC4899,
        secondary=0xFFDB2777,
        background_start=0xFF9D174D,
        background_end=_BACKGROUND_END,
        text_primary=WHITE,
        text_secondary=_TEXT_SECONDARY,
        accent=0xFFBE185D,
    ),
}

DEFAULT_PALETTE = FALLBACK_PALETTES["purple"]


def stable_hash(text: str) -> int:
    """Signed 32-bit hash that is identical across processes.

    Built from the first four bytes of the SHA-1 digest because ``hash()``
    on ``str`` is salted per interpreter.
    """

    digest = hashlib.sha1(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big", signed=True)


def fallback_key(title: str, artist: str) -> str:
    """Return the palette key chosen for the given title and artist."""

    return FALLBACK_KEYS[abs(stable_hash(title + artist)) % len(FALLBACK_KEYS)]


def fallback_palette(song: Song) -> Palette:
    return FALLBACK_PALETTES[fallback_key(song.title, song.artist)]
