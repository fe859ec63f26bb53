"""Resolve the theming palette for a single song and print it."""

from __future__ import annotations

import argparse
import asyncio

from albumtint.models import Song
from albumtint.monitoring.logging import configure_logging
from albumtint.services import CachedColorSource
from albumtint.state import ColorResolutionState, ResolutionState


def _format_state(state: ResolutionState) -> list[str]:
    lines = [f"song: {state.current_song_id}", f"loading: {state.is_loading}", f"error: {state.has_error}"]
    if state.palette is None:
        lines.append("palette: none")
        return lines
    lines.extend(f"{name}: {value}" for name, value in state.palette.as_hex().items())
    return lines


async def _run(song: Song) -> ResolutionState:
    source = CachedColorSource()
    holder = ColorResolutionState(source)
    try:
        await holder.resolve(song)
    finally:
        await source.close()
    return holder.state


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--title", required=True)
    parser.add_argument("--artist", required=True)
    parser.add_argument("--url", default="", help="Album art URL.")
    parser.add_argument("--song-id", default="cli")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    song = Song(id=args.song_id, title=args.title, artist=args.artist, album_art_url=args.url)
    for line in _format_state(asyncio.run(_run(song))):
        print(line)


if __name__ == "__main__":
    main()
