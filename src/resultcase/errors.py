"""Precondition violations raised by the Result core.

Anticipated failures travel through the Err variant. UnwrapError is reserved
for programmer errors: extracting the payload of the variant that isn't there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .result import Result


class UnwrapError(RuntimeError):
    """Raised by unwrap/unwrap_err/expect/expect_err on the wrong variant."""

    __slots__ = ("result",)

    def __init__(self, result: Result[object, object], message: str) -> None:
        self.result = result
        super().__init__(message)

