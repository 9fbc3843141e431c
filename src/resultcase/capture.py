"""Bridges from exception-style code into Result-style code.

An exception is captured exactly once, here, and becomes the Err payload
(optionally remapped). Exceptions raised later by combinator callbacks are
not this module's concern and propagate normally.

Example:
    >>> import json
    >>> try_catch(lambda: json.loads('{"a": 1}'))
    Ok({'a': 1})
    >>> try_catch(lambda: json.loads("nope"), lambda e: f"parse error: {e}").is_err()
    True

    >>> @safe
    ... def parse(text: str) -> int:
    ...     return int(text)
    >>> parse("7")
    Ok(7)
"""

from __future__ import annotations

import traceback
from functools import wraps
from typing import TYPE_CHECKING, Awaitable, Callable, ParamSpec, TypeVar, overload

from .logging import get_logger
from .result import Err, Ok, Result
from .settings import resolve_settings

if TYPE_CHECKING:
    from collections.abc import Coroutine

P = ParamSpec("P")
T = TypeVar("T")
E = TypeVar("E")

_log = get_logger("resultcase.capture")


def _captured(exc: Exception, operation: str, map_error: Callable[[Exception], E] | None) -> Err[T, E]:
    """Log (if enabled) and convert a captured exception into Err."""
    settings = resolve_settings()
    if settings.log_captured:
        extra: dict[str, object] = {}
        if settings.log_tracebacks:
            extra["traceback"] = "".join(traceback.format_exception(exc))
        _log.debug("exception captured", operation=operation, exc_type=type(exc).__name__, error=str(exc), **extra)
    return Err(map_error(exc) if map_error is not None else exc)  # type: ignore[arg-type]


def _name(obj: object) -> str:
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or type(obj).__name__


def try_catch(fn: Callable[[], T], map_error: Callable[[Exception], E] | None = None) -> Result[T, E]:
    """Call fn once; Ok with its return value, or Err with the raised exception.

    Args:
        fn: Zero-argument callable to run
        map_error: Optional mapping applied to the caught exception

    Only Exception subclasses are captured. KeyboardInterrupt, SystemExit and
    task cancellation propagate.
    """
    try:
        return Ok(fn())
    except Exception as e:
        return _captured(e, _name(fn), map_error)


async def from_awaitable(
    awaitable: Awaitable[T],
    map_error: Callable[[Exception], E] | None = None,
) -> Result[T, E]:
    """Await once; Ok with the settled value, or Err with the raised exception.

    The await is the only suspension point. Accepts coroutines, tasks and futures.
    If the awaitable never settles, neither does this.
    """
    try:
        return Ok(await awaitable)
    except Exception as e:
        return _captured(e, _name(awaitable), map_error)


# ═════════════════════════════════════════════════════════════════════════════
# Decorators
# ═════════════════════════════════════════════════════════════════════════════


@overload
def safe(fn: Callable[P, T], /) -> Callable[P, Result[T, Exception]]: ...
@overload
def safe(*, map_error: Callable[[Exception], E]) -> Callable[[Callable[P, T]], Callable[P, Result[T, E]]]: ...


def safe(fn: Callable[P, T] | None = None, /, *, map_error: Callable[[Exception], E] | None = None):  # type: ignore[no-untyped-def]
    """Decorate a function so calls return Results instead of raising.

    Usable bare (@safe) or configured (@safe(map_error=str)).
    """
    def decorator(func: Callable[P, T]) -> Callable[P, Result[T, E]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
            try:
                return Ok(func(*args, **kwargs))
            except Exception as e:
                return _captured(e, _name(func), map_error)
        return wrapper

    return decorator(fn) if fn is not None else decorator


@overload
def safe_async(fn: Callable[P, Coroutine[object, object, T]], /) -> Callable[P, Coroutine[object, object, Result[T, Exception]]]: ...
@overload
def safe_async(
    *, map_error: Callable[[Exception], E],
) -> Callable[[Callable[P, Coroutine[object, object, T]]], Callable[P, Coroutine[object, object, Result[T, E]]]]: ...


def safe_async(  # type: ignore[no-untyped-def]
    fn: Callable[P, Coroutine[object, object, T]] | None = None,
    /,
    *,
    map_error: Callable[[Exception], E] | None = None,
):
    """Async counterpart of safe for coroutine functions."""
    def decorator(func: Callable[P, Coroutine[object, object, T]]) -> Callable[P, Coroutine[object, object, Result[T, E]]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
            try:
                return Ok(await func(*args, **kwargs))
            except Exception as e:
                return _captured(e, _name(func), map_error)
        return wrapper

    return decorator(fn) if fn is not None else decorator
