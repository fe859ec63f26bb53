"""Logging configuration module."""

from __future__ import annotations

import logging

from albumtint.config.settings import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logger; ``level`` overrides the configured one."""

    settings = get_settings()
    chosen = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, chosen, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
