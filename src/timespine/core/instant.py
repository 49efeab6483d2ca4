"""
Absolute instants and half-open instant ranges.

An ``Instant`` is a point on the continuous timeline with no calendar
attached: integer nanoseconds since 1970-01-01T00:00:00Z. ``datetime``
stops at microseconds, so the nanosecond count is the source of truth and
``to_datetime()`` truncates.

Examples:
    >>> start = Instant(0)
    >>> span = InstantRange(start, start.shifted(NANOSECONDS_PER_DAY))
    >>> Instant(NANOSECONDS_PER_SECOND) in span
    True
    >>> span.end in span
    False

Tags:
    instant, value-object, timeline, time-spine
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

NANOSECONDS_PER_MICROSECOND = 1_000
NANOSECONDS_PER_SECOND = 1_000_000_000
NANOSECONDS_PER_MINUTE = 60 * NANOSECONDS_PER_SECOND
NANOSECONDS_PER_HOUR = 60 * NANOSECONDS_PER_MINUTE
NANOSECONDS_PER_DAY = 24 * NANOSECONDS_PER_HOUR

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for days since 1970-01-01.

    Pure integer arithmetic, so it covers years ``datetime`` cannot hold
    (the end of the last era is 10000-01-01).
    """
    shifted = days + 719_468
    cycle = shifted // 146_097
    day_of_cycle = shifted - cycle * 146_097
    year_of_cycle = (
        day_of_cycle - day_of_cycle // 1_460 + day_of_cycle // 36_524 - day_of_cycle // 146_096
    ) // 365
    day_of_year = day_of_cycle - (365 * year_of_cycle + year_of_cycle // 4 - year_of_cycle // 100)
    march_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * march_month + 2) // 5 + 1
    month = march_month + 3 if march_month < 10 else march_month - 9
    year = year_of_cycle + cycle * 400 + (1 if month <= 2 else 0)
    return year, month, day


@dataclass(frozen=True, slots=True, order=True)
class Instant:
    """
    A point in time, independent of any calendar.

    Attributes:
        nanoseconds: Nanoseconds since the Unix epoch (may be negative)
    """

    nanoseconds: int

    @classmethod
    def from_datetime(cls, value: datetime) -> Instant:
        """Create from a timezone-aware datetime."""
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"Expected a timezone-aware datetime, got {value!r}")
        delta = value - _EPOCH
        seconds = delta.days * 86_400 + delta.seconds
        return cls(seconds * NANOSECONDS_PER_SECOND + delta.microseconds * NANOSECONDS_PER_MICROSECOND)

    def to_datetime(self) -> datetime:
        """UTC datetime, truncated to microseconds."""
        return _EPOCH + timedelta(microseconds=self.nanoseconds // NANOSECONDS_PER_MICROSECOND)

    def shifted(self, nanoseconds: int) -> Instant:
        """Instant ``nanoseconds`` later (earlier when negative)."""
        return Instant(self.nanoseconds + nanoseconds)

    def __str__(self) -> str:
        days, within_day = divmod(self.nanoseconds, NANOSECONDS_PER_DAY)
        seconds, fraction = divmod(within_day, NANOSECONDS_PER_SECOND)
        minutes, second = divmod(seconds, 60)
        hour, minute = divmod(minutes, 60)
        year, month, day = _civil_from_days(days)
        return f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}.{fraction:09d}Z"


@dataclass(frozen=True, slots=True)
class InstantRange:
    """
    Half-open interval ``[start, end)`` covering one occurrence of a unit.

    Attributes:
        start: First instant inside the range
        end: First instant after the range
    """

    start: Instant
    end: Instant

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @property
    def duration_ns(self) -> int:
        return self.end.nanoseconds - self.start.nanoseconds

    def __contains__(self, instant: object) -> bool:
        if not isinstance(instant, Instant):
            return False
        return self.start <= instant < self.end

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


__all__ = [
    "Instant",
    "InstantRange",
    "NANOSECONDS_PER_MICROSECOND",
    "NANOSECONDS_PER_SECOND",
    "NANOSECONDS_PER_MINUTE",
    "NANOSECONDS_PER_HOUR",
    "NANOSECONDS_PER_DAY",
]
