"""Tests for environment-driven settings."""

from __future__ import annotations

import logging
import os

import pytest

from albumtint.config.settings import get_settings
from albumtint.monitoring.logging import configure_logging


@pytest.fixture(autouse=True)
def _clear_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = get_settings()

    assert settings.preload_limit == 5
    assert settings.cache_size == 64
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALBUMTINT_PRELOAD_LIMIT", "3")
    monkeypatch.setenv("ALBUMTINT_HTTP_TIMEOUT", "2.5")

    settings = get_settings()

    assert settings.preload_limit == 3
    assert settings.http_timeout == 2.5


def test_env_file_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text("# local\nALBUMTINT_CACHE_SIZE=12\n", encoding="utf-8")

    try:
        assert get_settings().cache_size == 12
    finally:
        os.environ.pop("ALBUMTINT_CACHE_SIZE", None)


def test_configure_logging_prefers_explicit_level(mocker) -> None:
    basic_config = mocker.patch("albumtint.monitoring.logging.logging.basicConfig")

    configure_logging("debug")

    assert basic_config.call_args.kwargs["level"] == logging.DEBUG
