"""
Tagged success/failure results for the resolution pipeline.

Resolving calendar fields into an instant is a chain of steps that can each
reject the input: required units missing, fields the engine cannot
materialize, fields that silently normalize. Each step returns ``Ok`` or
``Err`` and the next step pattern-matches on it, so rejected input never
travels through exception control flow.

Manifesto:
    - **Explicit over Implicit:** A rejected field set is a value, not a throw
    - **Errors built on failure only:** Constructors take an error factory
    - **One exit to exceptions:** ``unwrap()`` raises the carried error

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Constructors        │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ • from_optional()       │
        │ • map()         │ • map_err()     │ • from_bool()           │
        │ • inspect()     │ • inspect_err() │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> from timespine.core.result import Ok, Err, Result
    >>> def month_days(month: int) -> Result[int]:
    ...     if not 1 <= month <= 12:
    ...         return Err(ValueError(f"no month {month}"))
    ...     return Ok(31 if month in (1, 3, 5, 7, 8, 10, 12) else 30)
    >>> match month_days(4):
    ...     case Ok(days):
    ...         print(days)
    ...     case Err(error):
    ...         print(error)
    30
    >>> month_days(13).is_err()
    True

Tags:
    result-pattern, error-handling, functional-programming, time-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Examples:
        >>> Ok(10).map(lambda x: x * 2).unwrap()
        20
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """Call f with the value for side effects, return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``map`` passes the error through unchanged, so a rejection in an early
    step short-circuits the rest of the pipeline.

    Examples:
        >>> Err(ValueError("day 30 of February")).map(lambda x: x + 1).is_err()
        True
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error."""
        raise self.error

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        """Call f with the error for side effects, return self."""
        f(self.error)
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def from_optional(value: T | None, error: Callable[[], Exception]) -> Result[T]:
    """
    Convert an optional value to a Result.

    Calendar engines report "no such date" as ``None``; this turns that
    absence into an explicit error. ``error`` is only called on absence.

    Examples:
        >>> from_optional(None, lambda: ValueError("no instant")).is_err()
        True
        >>> from_optional(5, lambda: ValueError("no instant")).unwrap()
        5
    """
    if value is None:
        return Err(error())
    return Ok(value)


def from_bool(condition: bool, ok_value: T, error: Callable[[], Exception]) -> Result[T]:
    """
    Create a Result from a boolean check; ``error`` is only called on failure.

    Examples:
        >>> from_bool(2 + 2 == 4, "fine", lambda: ValueError("broken")).unwrap()
        'fine'
    """
    if condition:
        return Ok(ok_value)
    return Err(error())


__all__ = [
    "Result",
    "Ok",
    "Err",
    "from_optional",
    "from_bool",
]
