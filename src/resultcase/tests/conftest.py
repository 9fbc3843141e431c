"""Shared fixtures: isolate settings and logging state per test."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from resultcase.logging import configure_logging, reset_logging
from resultcase.settings import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset cached settings and logging; keep log output off by default."""
    monkeypatch.setenv("RESULTCASE_LOG_FORMAT", "none")
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def log_stream(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """JSON log output captured at DEBUG level."""
    monkeypatch.setenv("RESULTCASE_LOG_LEVEL", "DEBUG")
    clear_settings_cache()
    stream = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=stream)
    return stream
