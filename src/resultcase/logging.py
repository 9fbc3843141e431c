"""Structured logging with bound context.

Used by the capture boundary to report exceptions it converts into Err values.
Human-readable console output for development, JSON Lines for aggregation.

Quick Start:
    >>> from resultcase.logging import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("payments")
    >>> log.info("charge settled", amount=42)

    >>> with log_context(request_id="abc123"):
    ...     log.debug("exception captured")  # includes request_id
"""

from __future__ import annotations

import json
import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from .settings import resolve_settings

if TYPE_CHECKING:
    from types import TracebackType

LogContext = dict[str, object]

# Context var for scoped context (persists across async calls)
_log_context: ContextVar[LogContext] = ContextVar("resultcase_log_context", default={})


@dataclass(slots=True)
class LogEntry:
    """Single log record with merged context."""

    timestamp: float
    level: str
    event: str
    context: LogContext

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. Immutable - bind() returns a new logger.

    Example:
        >>> log = BoundLogger(context={"logger": "resultcase.capture"})
        >>> log.debug("exception captured", exc_type="ValueError")
        # => 10:30:45.123 [debug] exception captured exc_type="ValueError" logger="resultcase.capture"
    """

    context: LogContext = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: object) -> BoundLogger:
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def unbind(self, *keys: str) -> BoundLogger:
        return BoundLogger(
            context={k: v for k, v in self.context.items() if k not in keys},
            _renderer=self._renderer,
            _level=self._level,
        )

    def is_enabled_for(self, level: int) -> bool:
        return level >= (self._level if self._level is not None else _current_level())

    def _log(self, level: int, event: str, **kw: object) -> None:
        if not self.is_enabled_for(level):
            return
        # global -> bound -> call-site
        merged = {**_log_context.get(), **self.context, **kw}
        entry = LogEntry(timestamp=time.time(), level=_level_name(level), event=event, context=merged)
        (self._renderer or _get_renderer()).render(entry)

    def debug(self, event: str, **kw: object) -> None:
        self._log(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: object) -> None:
        self._log(logging.INFO, event, **kw)

    def warning(self, event: str, **kw: object) -> None:
        self._log(logging.WARNING, event, **kw)

    def error(self, event: str, **kw: object) -> None:
        self._log(logging.ERROR, event, **kw)

    def critical(self, event: str, **kw: object) -> None:
        self._log(logging.CRITICAL, event, **kw)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable output: timestamp [level] event key=value ...

    Colors are auto-detected from the TTY unless forced.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = hasattr(self.output, "isatty") and self.output.isatty()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts: list[str] = []
        if self.show_timestamp:
            parts.append(f"{c['dim']}{entry.ts_human}{c['reset']}")
        parts.append(f"{_LEVEL_COLORS.get(entry.level, c['dim']) if self.colors else ''}[{entry.level}]{c['reset']}")
        parts.append(f"{c['bold']}{entry.event}{c['reset']}")
        for k, v in sorted(entry.context.items()):
            if k == "traceback":
                continue
            parts.append(f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}")
        print(" ".join(parts), file=self.output)
        if "traceback" in entry.context:
            print(f"{c['red']}{entry.context['traceback']}{c['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output, one object per entry."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        data = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(json.dumps(data, default=str), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[LogRenderer | None] = ContextVar("resultcase_log_renderer", default=None)
_level: ContextVar[int | None] = ContextVar("resultcase_log_level", default=None)


def configure_logging(
    format: str | None = None,  # noqa: A002 - matches stdlib naming
    level: str | None = None,
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure structured logging. Unset arguments fall back to settings.

    Args:
        format: "console" (human), "json" (machine) or "none"
        level: Minimum level - DEBUG, INFO, WARNING, ERROR, CRITICAL
        output: Output stream (default: stderr for console, stdout for json)
        colors: Force console colors on/off (None = auto-detect)

    Raises:
        ValueError: On an unknown format
    """
    settings = resolve_settings()
    renderer = _build_renderer(format or settings.log_format, output=output, colors=colors)
    _level.set(_parse_level(level or settings.log_level))
    _renderer.set(renderer)
    return renderer


def _build_renderer(fmt: str, *, output: TextIO | None = None, colors: bool | None = None) -> LogRenderer:
    fmt = fmt.lower()
    if fmt == "console":
        return ConsoleRenderer(output=output or sys.stderr, colors=colors)
    if fmt == "json":
        return JsonRenderer(output=output or sys.stdout)
    if fmt == "none":
        return NoOpRenderer()
    raise ValueError(f"Unknown format: {fmt}. Use 'console', 'json', or 'none'")


def reset_logging() -> None:
    """Drop configured renderer and level so settings apply again."""
    _renderer.set(None)
    _level.set(None)


def get_logger(name: str | None = None, **initial_context: object) -> BoundLogger:
    """Get a structured logger; name is bound as 'logger'."""
    ctx = dict(initial_context)
    if name:
        ctx["logger"] = name
    return BoundLogger(context=ctx)


class log_context:
    """Context manager adding key-value pairs to every entry within the scope.

    Example:
        >>> with log_context(request_id="abc123"):
        ...     log.info("processing")  # includes request_id
    """

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: object) -> None:
        self._ctx: LogContext = dict(kw)
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _log_context.set({**_log_context.get(), **self._ctx})
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _log_context.reset(self._token)  # type: ignore[arg-type]


def _get_renderer() -> LogRenderer:
    renderer = _renderer.get()
    if renderer is None:
        # level stays unset so it keeps following settings
        renderer = _build_renderer(resolve_settings().log_format)
        _renderer.set(renderer)
    return renderer


def _current_level() -> int:
    level = _level.get()
    return level if level is not None else _parse_level(resolve_settings().log_level)


def _parse_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}

_NO_COLORS = {k: "" for k in _COLORS}

_LEVEL_COLORS = {
    "debug": _COLORS["dim"],
    "info": _COLORS["green"],
    "warning": _COLORS["yellow"],
    "error": _COLORS["red"],
    "critical": _COLORS["red"],
}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    if isinstance(v, str):
        return f'{c["yellow"]}"{v}"{c["reset"]}'
    if isinstance(v, bool):
        return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
    if isinstance(v, (int, float)):
        return f'{c["blue"]}{v}{c["reset"]}'
    if isinstance(v, (list, tuple, dict)):
        return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
    return f'{c["white"]}{v!r}{c["reset"]}'
