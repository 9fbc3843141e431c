"""Result type: a discriminated union of Ok (success) and Err (failure).

Ok and Err each implement the full operation set, so chains never need to
branch on the variant first:
- Functor: map, map_err
- Monad: and_then (bind), or_else (recovery)
- Elimination: match, unwrap family

Example:
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     return err("division by zero") if b == 0 else ok(a / b)
    >>>
    >>> divide(10, 2).map(lambda x: x * 2).and_then(lambda x: ok(x + 1)).unwrap()
    11.0
    >>> divide(1, 0).map_err(str.upper).unwrap_or(0.0)
    0.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Generic, NoReturn, TypeGuard, TypeVar, final

from .errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type


class Result(ABC, Generic[T, E]):
    """Base of the two variants. Construct with ok()/err() or Ok()/Err().

    Every operation returns a new Result (or a plain value); the receiver is
    never mutated. Callback exceptions are not caught.
    """

    __slots__ = ()

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ─── Type Checking ───────────────────────────────────────────────

    @abstractmethod
    def is_ok(self) -> bool: ...

    @abstractmethod
    def is_err(self) -> bool: ...

    # ─── Transformation ──────────────────────────────────────────────

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to the Ok value; Err passes through untouched."""

    @abstractmethod
    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to the Err value; Ok passes through untouched."""

    @abstractmethod
    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a fallible step. Err short-circuits without calling f."""

    @abstractmethod
    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from Err. Ok short-circuits without calling f."""

    @abstractmethod
    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Eliminate into one value by calling exactly one handler.

        Example:
            >>> Ok(42).match(ok=lambda x: f"success: {x}", err=lambda e: f"failed: {e}")
            'success: 42'
        """

    @abstractmethod
    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call f with the Ok value for side effects, return self."""

    @abstractmethod
    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call f with the Err value for side effects, return self."""

    # ─── Value Extraction ────────────────────────────────────────────

    @abstractmethod
    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            UnwrapError: If Result is Err
        """

    @abstractmethod
    def unwrap_err(self) -> E:
        """Extract Err value.

        Raises:
            UnwrapError: If Result is Ok
        """

    @abstractmethod
    def unwrap_or(self, default: T) -> T: ...

    @abstractmethod
    def unwrap_or_else(self, f: Callable[[E], T]) -> T: ...

    @abstractmethod
    def expect(self, msg: str) -> T:
        """Like unwrap with a custom message prefix."""

    @abstractmethod
    def expect_err(self, msg: str) -> E:
        """Like unwrap_err with a custom message prefix."""


@final
class Ok(Result[T, E]):
    """Success variant holding `value`."""

    __slots__ = ("value",)
    __match_args__ = ("value",)

    value: T

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "value", value)

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        return self  # type: ignore[return-value]

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return f(self.value)

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return self  # type: ignore[return-value]

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return ok(self.value)

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        return self

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(self, f"called unwrap_err on a success value: {self.value}")

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return self.value

    def expect(self, msg: str) -> T:
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        raise UnwrapError(self, f"{msg}: {self.value}")

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return isinstance(other, Ok) and self.value == other.value

    def __hash__(self) -> int:
        return hash((True, self.value))

    def __reduce__(self) -> tuple[type[Ok[T, E]], tuple[T]]:
        return (Ok, (self.value,))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@final
class Err(Result[T, E]):
    """Failure variant holding `error`."""

    __slots__ = ("error",)
    __match_args__ = ("error",)

    error: E

    def __init__(self, error: E) -> None:
        object.__setattr__(self, "error", error)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return self  # type: ignore[return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        return Err(f(self.error))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return self  # type: ignore[return-value]

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return f(self.error)

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return err(self.error)

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        return self

    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        f(self.error)
        return self

    def unwrap(self) -> NoReturn:
        raise UnwrapError(self, f"called unwrap on an error value: {self.error}")

    def unwrap_err(self) -> E:
        return self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return f(self.error)

    def expect(self, msg: str) -> NoReturn:
        raise UnwrapError(self, f"{msg}: {self.error}")

    def expect_err(self, msg: str) -> E:
        return self.error

    def __bool__(self) -> bool:
        return False

    def __iter__(self) -> Iterator[T]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return isinstance(other, Err) and self.error == other.error

    def __hash__(self) -> int:
        return hash((False, self.error))

    def __reduce__(self) -> tuple[type[Err[T, E]], tuple[E]]:
        return (Err, (self.error,))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions & Type Guards
# ═════════════════════════════════════════════════════════════════════════════


def ok(value: T) -> Ok[T, E]:
    """Construct the success variant."""
    return Ok(value)


def err(error: E) -> Err[T, E]:
    """Construct the failure variant."""
    return Err(error)


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T, E]]:
    """Functional form of Result.is_ok, narrowing to Ok."""
    return result.is_ok()


def is_err(result: Result[T, E]) -> TypeGuard[Err[T, E]]:
    """Functional form of Result.is_err, narrowing to Err."""
    return result.is_err()
