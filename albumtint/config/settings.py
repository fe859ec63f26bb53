"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Tunables for artwork fetching, palette extraction and caching."""

    log_level: str = "INFO"

    http_timeout: float = 10.0
    user_agent: str = "albumtint/0.1"

    cache_size: int = 64
    preload_limit: int = 5

    quantize_colors: int = 16
    thumbnail_size: int = 64


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        log_level=os.getenv("ALBUMTINT_LOG_LEVEL", "INFO"),
        http_timeout=float(os.getenv("ALBUMTINT_HTTP_TIMEOUT", "10")),
        user_agent=os.getenv("ALBUMTINT_USER_AGENT", "albumtint/0.1"),
        cache_size=int(os.getenv("ALBUMTINT_CACHE_SIZE", "64")),
        preload_limit=int(os.getenv("ALBUMTINT_PRELOAD_LIMIT", "5")),
        quantize_colors=int(os.getenv("ALBUMTINT_QUANTIZE_COLORS", "16")),
        thumbnail_size=int(os.getenv("ALBUMTINT_THUMBNAIL_SIZE", "64")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
