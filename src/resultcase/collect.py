"""Aggregation over sequences of Results.

- combine: all-or-first-error, short-circuits on the first Err
- partition: single full pass, buckets every element by variant
- traverse: map a fallible function over items, then combine
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, NamedTuple, TypeVar

from .result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


class Partition(NamedTuple, Generic[T, E]):
    """Successes and failures of a partition, each in input order."""

    successes: list[T]
    failures: list[E]


def combine(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Convert an iterable of Results into a Result of list.

    Returns the first Err in iteration order (later elements are not
    examined), otherwise Ok with all values in order. Empty input is Ok([]).

    Example:
        >>> combine([Ok(1), Ok(2), Ok(3)])
        Ok([1, 2, 3])
        >>> combine([Ok(1), Err("e1"), Err("e2")])
        Err('e1')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result  # type: ignore[return-value]
        values.append(result.unwrap())
    return Ok(values)


def partition(results: Iterable[Result[T, E]]) -> Partition[T, E]:
    """Split Results into successes and failures, preserving relative order.

    Never short-circuits: every element is consumed and every error reported.

    Example:
        >>> partition([Ok(1), Err("a"), Ok(2), Err("b")])
        Partition(successes=[1, 2], failures=['a', 'b'])
    """
    successes: list[T] = []
    failures: list[E] = []
    for result in results:
        if isinstance(result, Ok):
            successes.append(result.value)
        else:
            failures.append(result.unwrap_err())
    return Partition(successes, failures)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Apply f to each item and combine; f is not called past the first Err.

    Example:
        >>> traverse(["1", "2"], lambda s: Ok(int(s)))
        Ok([1, 2])
    """
    return combine(f(item) for item in items)
