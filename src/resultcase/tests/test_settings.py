"""Tests for environment-based settings and the structured logger."""

from __future__ import annotations

import io
import json
import logging

import pytest
from pydantic import ValidationError

from resultcase.logging import (
    ConsoleRenderer,
    JsonRenderer,
    NoOpRenderer,
    configure_logging,
    get_logger,
    log_context,
)
from resultcase.settings import ResultcaseSettings, clear_settings_cache, get_settings, resolve_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RESULTCASE_LOG_FORMAT", raising=False)
    settings = ResultcaseSettings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.log_format == "console"
    assert settings.log_captured is True
    assert settings.log_tracebacks is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTCASE_LOG_LEVEL", "debug")
    monkeypatch.setenv("RESULTCASE_LOG_FORMAT", "JSON")
    clear_settings_cache()

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
    first = get_settings()
    clear_settings_cache()
    assert get_settings() is not first


def test_resolve_settings_falls_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTCASE_LOG_LEVEL", "verbose")
    clear_settings_cache()

    with pytest.raises(ValidationError):
        get_settings()

    settings = resolve_settings()
    assert settings.log_level == "INFO"
    assert settings.log_captured is True


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValidationError):
        ResultcaseSettings(log_format="xml")
    with pytest.raises(ValidationError):
        ResultcaseSettings(log_level="LOUD")


# ═════════════════════════════════════════════════════════════════════════════
# Logging
# ═════════════════════════════════════════════════════════════════════════════


def test_configure_logging_renderers() -> None:
    assert isinstance(configure_logging(format="console", output=io.StringIO()), ConsoleRenderer)
    assert isinstance(configure_logging(format="json", output=io.StringIO()), JsonRenderer)
    assert isinstance(configure_logging(format="none"), NoOpRenderer)
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml")


def test_configure_logging_defaults_from_settings() -> None:
    # conftest sets RESULTCASE_LOG_FORMAT=none
    assert isinstance(configure_logging(), NoOpRenderer)


def test_json_logging_with_bound_and_scoped_context() -> None:
    stream = io.StringIO()
    configure_logging(format="json", level="INFO", output=stream)

    log = get_logger("svc", region="eu").bind(attempt=1)
    with log_context(request_id="abc"):
        log.info("done", status="ok")
    log.debug("hidden")
    log.unbind("attempt").warning("after")

    first, second = (json.loads(line) for line in stream.getvalue().splitlines())
    assert first["event"] == "done"
    assert first["level"] == "info"
    assert first["logger"] == "svc"
    assert first["region"] == "eu"
    assert first["attempt"] == 1
    assert first["request_id"] == "abc"
    assert first["status"] == "ok"
    assert "request_id" not in second
    assert "attempt" not in second
    assert second["level"] == "warning"


def test_console_logging_format() -> None:
    stream = io.StringIO()
    configure_logging(format="console", level="DEBUG", output=stream, colors=False)

    get_logger("svc").error("failed", code=3, ok=False)

    line = stream.getvalue().strip()
    assert "[error] failed" in line
    assert "code=3" in line
    assert "ok=false" in line
    assert 'logger="svc"' in line


def test_critical_level() -> None:
    stream = io.StringIO()
    configure_logging(format="json", level="CRITICAL", output=stream)

    log = get_logger("svc")
    log.error("suppressed")
    log.critical("meltdown", reactor=4)

    [entry] = (json.loads(line) for line in stream.getvalue().splitlines())
    assert entry["level"] == "critical"
    assert entry["event"] == "meltdown"
    assert entry["reactor"] == 4


def test_lazy_renderer_keeps_following_settings_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Logging before configure_logging() must not pin the level."""
    log = get_logger("svc")
    log.warning("first")  # installs the default renderer lazily

    assert not log.is_enabled_for(logging.DEBUG)

    monkeypatch.setenv("RESULTCASE_LOG_LEVEL", "DEBUG")
    clear_settings_cache()

    assert log.is_enabled_for(logging.DEBUG)
