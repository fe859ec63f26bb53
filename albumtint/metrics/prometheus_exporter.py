"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


color_resolutions_total = Counter(
    "color_resolutions_total",
    "Palettes applied to the current song, by source.",
    ["source"],
)

color_cache_events_total = Counter(
    "color_cache_events_total",
    "Palette cache lookups and evictions.",
    ["event"],
)
