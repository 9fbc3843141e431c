"""Resultcase - explicit success/failure values instead of exceptions.

A Result is either Ok(value) or Err(error). Both variants implement the same
combinators, so chains read straight through without branching.

Quick Start:
    >>> from resultcase import ok, err, Result
    >>>
    >>> def parse_port(raw: str) -> Result[int, str]:
    ...     return ok(int(raw)) if raw.isdigit() else err(f"not a port: {raw!r}")
    >>>
    >>> parse_port("8080").map(lambda p: p + 1).unwrap()
    8081
    >>> parse_port("http").match(ok=str, err=lambda e: e)
    "not a port: 'http'"

Bridging exceptions and awaitables:
    >>> from resultcase import try_catch, from_awaitable
    >>> try_catch(lambda: 1 / 0).is_err()
    True
    >>> # result = await from_awaitable(client.get(url), map_error=str)

Aggregation:
    >>> from resultcase import combine, partition
    >>> combine([ok(1), ok(2)])
    Ok([1, 2])
    >>> partition([ok(1), err("a")])
    Partition(successes=[1], failures=['a'])
"""

from __future__ import annotations

__version__ = "0.1.0"

from .capture import from_awaitable, safe, safe_async, try_catch
from .collect import Partition, combine, partition, traverse
from .errors import UnwrapError
from .result import Err, Ok, Result, err, is_err, is_ok, ok

__all__ = [
    # Core types
    "Result", "Ok", "Err",
    # Constructors & guards
    "ok", "err", "is_ok", "is_err",
    # Capture
    "try_catch", "from_awaitable", "safe", "safe_async",
    # Aggregation
    "combine", "partition", "traverse", "Partition",
    # Errors
    "UnwrapError",
]
