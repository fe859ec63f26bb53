"""Tests for deterministic fallback palettes."""

from albumtint.models import Song
from albumtint.palettes.fallback import (
    DEFAULT_PALETTE,
    FALLBACK_KEYS,
    FALLBACK_PALETTES,
    fallback_key,
    fallback_palette,
    stable_hash,
)


def test_same_title_and_artist_share_palette() -> None:
    first = Song(id="a", title="Foo", artist="Bar", album_art_url="")
    second = Song(id="b", title="Foo", artist="Bar", album_art_url="https://img.test/x.jpg")

    assert fallback_palette(first) == fallback_palette(second)


def test_key_follows_hash_of_concatenation() -> None:
    index = abs(stable_hash("FooBar")) % 6

    assert fallback_key("Foo", "Bar") == FALLBACK_KEYS[index]
    assert fallback_key("Fo", "oBar") == fallback_key("Foo", "Bar")


def test_stable_hash_is_signed_32_bit() -> None:
    values = [stable_hash(f"song-{index}") for index in range(200)]

    assert all(-(2**31) <= value < 2**31 for value in values)
    assert any(value < 0 for value in values)
    assert stable_hash("FooBar") == stable_hash("FooBar")


def test_table_is_complete_and_exact() -> None:
    assert FALLBACK_KEYS == ("purple", "blue", "green", "red", "orange", "pink")
    assert set(FALLBACK_PALETTES) == set(FALLBACK_KEYS)
    assert DEFAULT_PALETTE is FALLBACK_PALETTES["purple"]
    assert FALLBACK_PALETTES["orange"].as_hex() == {
        "primary": "#F97316",
        "secondary": "#EA580C",
        "background_start": "#9A3412",
        "background_end": "#1A1A1A",
        "text_primary": "#FFFFFF",
        "text_secondary": "#B3B3B3",
        "accent": "#CC5500",
    }


def test_every_palette_shares_text_and_background_end() -> None:
    for palette in FALLBACK_PALETTES.values():
        assert palette.background_end == 0xFF1A1A1A
        assert palette.text_primary == 0xFFFFFFFF
        assert palette.text_secondary == 0xFFB3B3B3
