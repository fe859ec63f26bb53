"""Palette value type shared by the extractor, fallbacks and state."""

from __future__ import annotations

from dataclasses import asdict, dataclass

WHITE = 0xFFFFFFFF
OPAQUE = 0xFF000000


def argb(rgb: tuple[int, int, int]) -> int:
    """Pack an RGB triple into an opaque 32-bit ARGB integer."""

    r, g, b = rgb
    return OPAQUE | (r << 16) | (g << 8) | b


def to_hex(color: int) -> str:
    """Return ``#RRGGBB`` for an ARGB integer, dropping alpha."""

    return f"#{color & 0xFFFFFF:06X}"


@dataclass(frozen=True, slots=True)
class Palette:
    """Seven theming colors stored as 32-bit ARGB integers."""

    primary: int
    secondary: int
    background_start: int
    background_end: int
    text_primary: int
    text_secondary: int
    accent: int

    def as_hex(self) -> dict[str, str]:
        return {name: to_hex(value) for name, value in asdict(self).items()}
