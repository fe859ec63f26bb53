"""Colour extraction collaborator with an in-memory palette cache."""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from typing import Protocol

from albumtint.api.artwork_client import ArtworkClient
from albumtint.config.settings import Settings, get_settings
from albumtint.imgproc.color_extract import ColorExtractor
from albumtint.metrics.prometheus_exporter import color_cache_events_total
from albumtint.models import Palette

logger = logging.getLogger(__name__)


class ColorSource(Protocol):
    """Anything able to turn an artwork URL into a palette.

    A source may also expose ``remember(song_id, url)``; the state holder
    calls it before extracting so ``evict(song_id)`` can find the entry.
    """

    async def extract(self, url: str) -> Palette: ...

    def evict(self, song_id: str) -> None: ...

    def evict_all(self) -> None: ...


class CachedColorSource:
    """Downloads artwork, extracts a palette and remembers it per URL.

    URLs are tagged with the ids of the songs that use them so a single song
    can be evicted without knowing its artwork URL. The cache is bounded
    LRU; the oldest URL is dropped once ``cache_size`` is exceeded.
    Concurrent misses for one URL share a single download. A download that
    was running when its entry got evicted is returned to its callers but
    not written back to the cache.
    """

    def __init__(
        self,
        client: ArtworkClient | None = None,
        extractor: ColorExtractor | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._client = client or ArtworkClient(settings)
        self._extractor = extractor or ColorExtractor(
            quantize_colors=settings.quantize_colors,
            thumbnail_size=settings.thumbnail_size,
        )
        self._max_entries = max(1, settings.cache_size)
        self._palettes: OrderedDict[str, Palette] = OrderedDict()
        self._tags: dict[str, set[str]] = {}
        self._pending: dict[str, asyncio.Future[Palette]] = {}
        self._generation = 0
        self._url_generations: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._palettes)

    def cached(self, url: str) -> Palette | None:
        return self._palettes.get(url)

    def remember(self, song_id: str, url: str) -> None:
        """Tag ``url`` as the artwork of ``song_id``."""

        self._tags.setdefault(url, set()).add(song_id)

    async def extract(self, url: str) -> Palette:
        """Return the palette for ``url``, downloading it on a cache miss."""

        palette = self._palettes.get(url)
        if palette is not None:
            color_cache_events_total.labels(event="hit").inc()
            self._palettes.move_to_end(url)
            return palette

        pending = self._pending.get(url)
        if pending is None:
            color_cache_events_total.labels(event="miss").inc()
            pending = asyncio.ensure_future(self._load(url))
            self._pending[url] = pending
            pending.add_done_callback(lambda done: self._forget_pending(url, done))
        return await asyncio.shield(pending)

    async def _load(self, url: str) -> Palette:
        generation = (self._generation, self._url_generations.get(url, 0))
        image_bytes = await self._client.fetch(url)
        palette = await asyncio.to_thread(self._extractor.palette_from_bytes, image_bytes)
        if generation == (self._generation, self._url_generations.get(url, 0)):
            self._store(url, palette)
        else:
            logger.debug("Cache evicted while extracting %s, not storing", url)
        return palette

    def _forget_pending(self, url: str, done: asyncio.Future[Palette]) -> None:
        if self._pending.get(url) is done:
            del self._pending[url]
        if not done.cancelled():
            # Mark the exception retrieved when every waiter went away.
            done.exception()

    def _store(self, url: str, palette: Palette) -> None:
        self._palettes[url] = palette
        self._palettes.move_to_end(url)
        while len(self._palettes) > self._max_entries:
            dropped, _ = self._palettes.popitem(last=False)
            self._tags.pop(dropped, None)
            logger.debug("Palette cache full, dropped %s", dropped)

    def evict(self, song_id: str) -> None:
        """Forget every cached or in-flight palette tagged with ``song_id``."""

        for url in [url for url, songs in self._tags.items() if song_id in songs]:
            if self._palettes.pop(url, None) is not None:
                color_cache_events_total.labels(event="evict").inc()
            del self._tags[url]
            self._pending.pop(url, None)
            self._url_generations[url] = self._url_generations.get(url, 0) + 1

    def evict_all(self) -> None:
        count = len(self._palettes)
        self._palettes.clear()
        self._tags.clear()
        self._pending.clear()
        self._generation += 1
        if count:
            color_cache_events_total.labels(event="evict").inc(count)
        logger.debug("Cleared %d cached palettes", count)

    async def close(self) -> None:
        await self._client.close()
