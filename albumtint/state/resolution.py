"""Per-session colour state for the currently playing song."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from itertools import islice
from typing import Callable, Iterable
from urllib.parse import urlsplit

from albumtint.config.settings import get_settings
from albumtint.metrics.prometheus_exporter import color_resolutions_total
from albumtint.models import Palette, Song
from albumtint.palettes.fallback import DEFAULT_PALETTE, fallback_palette
from albumtint.services.color_source import ColorSource

logger = logging.getLogger(__name__)

Observer = Callable[["ResolutionState"], None]


@dataclass(frozen=True, slots=True)
class ResolutionState:
    """Snapshot observed by the UI.

    ``is_loading`` may be true while an older palette is still shown.
    ``has_error`` is only raised after a fallback palette is in place.
    """

    palette: Palette | None = None
    is_loading: bool = False
    has_error: bool = False
    current_song_id: str | None = None

    @classmethod
    def initial(cls) -> ResolutionState:
        return cls(palette=DEFAULT_PALETTE)

    def copy_with(self, **changes: object) -> ResolutionState:
        return replace(self, **changes)


def is_valid_image_url(url: str) -> bool:
    """Accept only absolute http(s) URLs with a host.

    Scheme-only forms such as ``http:cover.jpg`` are rejected here and get
    the no-error fallback instead of reaching the extractor and failing.
    """

    if not url:
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class ColorResolutionState:
    """Single-writer store deciding which palette the current song gets.

    Every state replacement is pushed to subscribers. Extraction failures
    never escape; they degrade to the deterministic fallback palette.
    """

    def __init__(
        self,
        source: ColorSource,
        *,
        current_song: Callable[[], Song | None] | None = None,
        preload_limit: int | None = None,
    ) -> None:
        self._source = source
        self._current_song = current_song
        self._preload_limit = preload_limit if preload_limit is not None else get_settings().preload_limit
        self._state = ResolutionState.initial()
        self._observers: list[Observer] = []

    @property
    def state(self) -> ResolutionState:
        return self._state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; the returned callable unsubscribes it."""

        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _set(self, new_state: ResolutionState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        for observer in list(self._observers):
            try:
                observer(new_state)
            except Exception:
                logger.exception("Colour state observer %r failed", observer)

    async def resolve(self, song: Song) -> None:
        """Bring the held palette in line with ``song``."""

        state = self._state
        if state.current_song_id == song.id and state.palette is not None and not state.is_loading:
            return

        # Keep the previous palette on screen while the new one is computed.
        self._set(
            state.copy_with(
                current_song_id=song.id,
                is_loading=state.palette is None,
            )
        )

        url = song.album_art_url
        if not is_valid_image_url(url):
            logger.debug("No usable artwork for %s (%r), using fallback", song.id, url)
            self._apply(song, fallback_palette(song), has_error=False, source="fallback")
            return

        try:
            palette = await self._extract(song)
        except Exception as exc:
            logger.warning("Colour extraction failed for %s: %s", song.id, exc)
            self._apply(song, fallback_palette(song), has_error=True, source="error_fallback")
            return

        self._apply(song, palette, has_error=False, source="extracted")

    async def _extract(self, song: Song) -> Palette:
        remember = getattr(self._source, "remember", None)
        if callable(remember):
            remember(song.id, song.album_art_url)
        return await self._source.extract(song.album_art_url)

    def _apply(self, song: Song, palette: Palette, *, has_error: bool, source: str) -> None:
        if self._state.current_song_id != song.id:
            logger.debug(
                "Dropping %s palette for %s; current song is now %s",
                source,
                song.id,
                self._state.current_song_id,
            )
            return
        color_resolutions_total.labels(source=source).inc()
        self._set(self._state.copy_with(palette=palette, is_loading=False, has_error=has_error))

    async def preload(self, songs: Iterable[Song]) -> None:
        """Warm the extraction cache for the first few upcoming songs."""

        for song in islice(songs, self._preload_limit):
            if not is_valid_image_url(song.album_art_url):
                continue
            try:
                await self._extract(song)
            except Exception as exc:
                logger.debug("Preload skipped %s: %s", song.id, exc)

    def reset(self) -> None:
        self._set(ResolutionState.initial())

    def clear_for_song(self, song_id: str) -> None:
        if self._state.current_song_id == song_id:
            self.reset()
        self._source.evict(song_id)

    def force_refresh(self) -> None:
        """Drop cached palettes and mark the current song as loading.

        The whole cache is cleared, not only the current song's entry.
        Call :meth:`resolve` afterwards to repopulate.
        """

        if self._state.current_song_id is None:
            return
        self._source.evict_all()
        self._set(self._state.copy_with(palette=None, is_loading=True))

    def force_refresh_for_song(self, song_id: str) -> None:
        self._source.evict_all()
        if self._state.current_song_id == song_id:
            self._set(self._state.copy_with(palette=None, is_loading=True))

    def clear_all_cache(self) -> None:
        self._source.evict_all()

    async def refresh_current_song(self) -> None:
        """Resolve whatever the player reports as now playing."""

        if self._current_song is None:
            return
        song = self._current_song()
        if song is not None:
            await self.resolve(song)

    async def extract_with_debug(self, song: Song) -> Palette:
        """Extract a fresh palette for ``song`` and log every colour.

        Errors are propagated, unlike :meth:`resolve`.
        """

        logger.info("Debug extraction: %r by %r, artwork %r", song.title, song.artist, song.album_art_url)
        self._source.evict_all()
        palette = await self._extract(song)
        for name, value in palette.as_hex().items():
            logger.info("  %s = %s", name, value)
        return palette
