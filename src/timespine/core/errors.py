"""
Structured error types for time-spine.

Two kinds of failure exist when turning calendar fields into instants:

- **Bad input** (``InvalidComponentsError``): the caller asked for fields
  that are missing or that the calendar cannot represent. Always
  recoverable by the caller, never retried automatically.
- **Broken contract** (``InternalInvariantViolation``): an empty unit set
  handed to the ordering helpers, or a calendar engine that cannot place
  an instant inside a unit. These are programming errors and are raised
  unconditionally through ``require()``.

Manifesto:
    - **Typed Error Hierarchy:** Input errors and contract breaches never share a type
    - **Rich Context:** Errors carry the calendar region for human-facing messages
    - **Explicit Retry Semantics:** Nothing here is retryable; the input is at fault

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       TimeSpineError                             │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ValidationError        ConfigError        InternalInvariant-   │
        │  (VALIDATION)           (CONFIG)           Violation (INTERNAL) │
        │       │                     │                                    │
        │  InvalidComponentsError InvalidConfigError                      │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ValidationError("bad month")
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> error.retryable
    False

    >>> require(1 + 1 == 2, "arithmetic is broken")
    >>> require(False, "unreachable")
    Traceback (most recent call last):
    ...
    timespine.core.errors.InternalInvariantViolation: unreachable

Tags:
    error-handling, exception-hierarchy, error-context, time-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from timespine.core.calendar import Region
    from timespine.core.components import ComponentBag
    from timespine.core.units import Unit


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Attributes:
        VALIDATION: Calendar fields missing or not representable
        CONFIG: Unknown timezone, unknown calendar identifier
        INTERNAL: Bugs, broken engine contract
    """

    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    The region fields are filled from the effective ``Region`` so that a
    rejected field set can be explained to a human ("day 30 is not valid
    for February in the gregorian calendar, America/New_York").

    Attributes:
        calendar: Calendar identifier of the effective region
        timezone: IANA timezone key of the effective region
        locale: Locale identifier of the effective region
        metadata: Additional key-value pairs
    """

    calendar: str | None = None
    timezone: str | None = None
    locale: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["calendar", "timezone", "locale"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TimeSpineError(Exception):
    """
    Base exception for all time-spine errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    sensible defaults for their domain.

    Examples:
        >>> error = TimeSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(timezone="UTC").context.timezone
        'UTC'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TimeSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("Bad zone").with_context(timezone="Mars/Olympus")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(TimeSpineError):
    """
    Input validation error.

    Never retryable - the input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class InvalidComponentsError(ValidationError):
    """
    Calendar components that do not name exactly one instant.

    Raised when required units are missing from the input, when the engine
    cannot materialize the fields at all, or when the materialized instant
    reads back as different fields (silent normalization, e.g. February 30
    rolling over to March 2).

    Attributes:
        components: The rejected (restricted) component bag
        region: The effective calendar/timezone/locale, if known
        missing_units: Required units that were absent from the input
    """

    def __init__(
        self,
        components: ComponentBag,
        region: Region | None = None,
        *,
        missing_units: Iterable[Unit] = (),
        message: str | None = None,
        **kwargs: Any,
    ):
        self.components = components
        self.region = region
        self.missing_units = frozenset(missing_units)
        self._described = message is None
        super().__init__(message or self._describe(), **kwargs)
        if region is not None:
            self.attach_region(region)

    def _describe(self) -> str:
        message = f"Invalid date components {self.components}"
        if self.missing_units:
            names = ", ".join(sorted(unit.value for unit in self.missing_units))
            message += f" (missing: {names})"
        if self.region is not None:
            message += f" for {self.region}"
        return message

    def attach_region(self, region: Region) -> InvalidComponentsError:
        """Record the effective region on an error raised without one."""
        self.region = region
        if self._described:
            self.message = self._describe()
            self.args = (self.message,)
        self.with_context(
            calendar=region.calendar.identifier.value,
            timezone=region.timezone,
            locale=region.locale,
        )
        return self

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["components"] = self.components.to_dict()
        if self.missing_units:
            result["missing_units"] = sorted(unit.value for unit in self.missing_units)
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TimeSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None, **kwargs: Any):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}", **kwargs)


# =============================================================================
# INTERNAL ERRORS
# =============================================================================


class InternalInvariantViolation(TimeSpineError):
    """
    A broken caller or a broken calendar engine.

    Not a data problem: nothing in the library catches it and no caller can
    meaningfully continue. Raise it through ``require()``.
    """

    default_category = ErrorCategory.INTERNAL
    default_retryable = False


def require(condition: bool, message: str | Callable[[], str]) -> None:
    """Raise ``InternalInvariantViolation`` unless ``condition`` holds.

    Unlike ``assert`` this is never stripped by ``python -O``. Pass a
    callable to defer building an expensive message to the failing branch.
    """
    if not condition:
        raise InternalInvariantViolation(message() if callable(message) else message)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TimeSpineError",
    "ValidationError",
    "InvalidComponentsError",
    "ConfigError",
    "InvalidConfigError",
    "InternalInvariantViolation",
    "require",
]
