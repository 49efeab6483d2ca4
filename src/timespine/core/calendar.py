"""
Calendar identities and regions.

A ``CalendarIdentity`` names a civil calendar system and answers the few
questions the resolver needs about it: whether the era matters, which units
may be omitted, and how long its second is. A ``Region`` pairs a calendar
with a timezone and a locale; it is the context every calendar engine call
runs in, and it travels with rejected input for diagnostics.

Examples:
    >>> CalendarIdentity.of("japanese").is_era_relevant
    True
    >>> sorted(CalendarIdentity.of("gregorian").lenient_units({"era", "year"}))
    [<Unit.ERA: 'era'>]
    >>> str(Region(CalendarIdentity.of("gregorian"), "America/New_York"))
    'gregorian/America/New_York/en_US_POSIX'

Tags:
    calendar, region, era, value-object, time-spine
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timespine.core.errors import InvalidConfigError
from timespine.core.units import Unit, as_units

if TYPE_CHECKING:
    from timespine.core.settings import TimeSpineSettings


class CalendarIdentifier(str, Enum):
    """Supported civil calendar systems."""

    GREGORIAN = "gregorian"
    BUDDHIST = "buddhist"
    JAPANESE = "japanese"


_ERA_RELEVANT = frozenset({CalendarIdentifier.JAPANESE})


@dataclass(frozen=True, slots=True)
class CalendarIdentity:
    """
    Immutable handle to a civil calendar system.

    Attributes:
        identifier: Which calendar system
    """

    identifier: CalendarIdentifier

    @classmethod
    def of(cls, identifier: CalendarIdentifier | str) -> CalendarIdentity:
        """
        Build from an identifier or its name.

        Raises:
            InvalidConfigError: If the name is not a supported calendar
        """
        try:
            return cls(CalendarIdentifier(identifier))
        except ValueError as exc:
            raise InvalidConfigError("calendar", identifier, cause=exc) from exc

    @property
    def is_era_relevant(self) -> bool:
        """
        Whether the era changes the meaning of a year number.

        "2019" is unambiguously 2019 CE in the Gregorian calendar, but a
        Japanese year number means nothing without its era.
        """
        return self.identifier in _ERA_RELEVANT

    @property
    def si_seconds_per_second(self) -> float:
        """SI seconds per calendar second; always 1.0 for Earth calendars."""
        return 1.0

    def lenient_units(self, requested: Iterable[Unit | str]) -> frozenset[Unit]:
        """Requested units whose absence is tolerated (era, when irrelevant)."""
        if self.is_era_relevant:
            return frozenset()
        return as_units(requested) & {Unit.ERA}

    def __str__(self) -> str:
        return self.identifier.value


@dataclass(frozen=True, slots=True)
class Region:
    """
    Calendar + timezone + locale that calendar math runs in.

    Attributes:
        calendar: The calendar system
        timezone: IANA timezone key, validated on construction
        locale: Locale identifier, informational only
    """

    calendar: CalendarIdentity
    timezone: str = "UTC"
    locale: str = "en_US_POSIX"

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise InvalidConfigError("timezone", self.timezone, cause=exc) from exc

    @classmethod
    def from_settings(cls, settings: TimeSpineSettings | None = None) -> Region:
        """Default region from ``TimeSpineSettings`` (environment-driven)."""
        from timespine.core.settings import TimeSpineSettings

        settings = settings or TimeSpineSettings()
        return cls(
            calendar=CalendarIdentity.of(settings.calendar),
            timezone=settings.timezone,
            locale=settings.locale,
        )

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def to_dict(self) -> dict[str, Any]:
        return {
            "calendar": self.calendar.identifier.value,
            "timezone": self.timezone,
            "locale": self.locale,
        }

    def __str__(self) -> str:
        return f"{self.calendar}/{self.timezone}/{self.locale}"


__all__ = [
    "CalendarIdentifier",
    "CalendarIdentity",
    "Region",
]
