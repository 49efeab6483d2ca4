"""
Calendar engine backed by ``datetime`` and ``zoneinfo``.

``ZoneInfoCalendarEngine`` is the system-provided calendar the resolver
wraps. Like most platform calendars it is lenient: out-of-range fields roll
over instead of failing (month 13 becomes January of the next year, April
31 becomes May 1, 02:30 inside a spring-forward gap becomes 03:30). That is
exactly the behaviour the resolver's round-trip check exists to catch.

Calendars:
    ::

        gregorian   era 1 = CE (from 0001-01-01); era 0 (BCE) is outside
                    datetime's range and never materializes
        buddhist    era 0 = BE; year = Gregorian year + 543
        japanese    232 Meiji  (1868-09-08)   233 Taisho (1912-07-30)
                    234 Showa  (1926-12-25)   235 Heisei (1989-01-08)
                    236 Reiwa  (2019-05-01)
                    dates before Meiji are reported as Meiji

Defaults for absent fields:
    era = newest era of the calendar, year = 1, month = 1, day = 1, time
    fields = 0. In the first year of an era that starts mid-year the
    default month and day are the era's start month and day, so
    ``{era: Reiwa, year: 1}`` names 2019-05-01, not 2019-01-01 (Heisei 31).

Local time:
    Wall-clock times map to instants with ``fold=0``: the earlier of an
    ambiguous pair, and the pre-transition offset inside a gap.

Unit intervals:
    nanosecond, second, minute and hour are floored in local wall time
    using the offset in effect at the instant. day, month, year and era run
    from local midnight to local midnight (DST days are 23 or 25 hours).
    Month and year occurrences are clipped to era boundaries; the newest
    era ends where ``datetime`` ends.

Tags:
    calendar-engine, zoneinfo, era, dst, time-spine
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from timespine.core.calendar import CalendarIdentifier, Region
from timespine.core.components import ComponentBag
from timespine.core.instant import (
    NANOSECONDS_PER_DAY,
    NANOSECONDS_PER_HOUR,
    NANOSECONDS_PER_MICROSECOND,
    NANOSECONDS_PER_MINUTE,
    NANOSECONDS_PER_SECOND,
    Instant,
)
from timespine.core.units import Unit, as_units


@dataclass(frozen=True, slots=True)
class Era:
    """
    One era of a calendar.

    Attributes:
        code: Value of the era component
        start: First Gregorian date of the era
        year_offset: Gregorian year minus era year
    """

    code: int
    start: date
    year_offset: int


ERAS: dict[CalendarIdentifier, tuple[Era, ...]] = {
    CalendarIdentifier.GREGORIAN: (Era(1, date.min, 0),),
    CalendarIdentifier.BUDDHIST: (Era(0, date.min, -543),),
    CalendarIdentifier.JAPANESE: (
        Era(232, date(1868, 9, 8), 1867),
        Era(233, date(1912, 7, 30), 1911),
        Era(234, date(1926, 12, 25), 1925),
        Era(235, date(1989, 1, 8), 1988),
        Era(236, date(2019, 5, 1), 2018),
    ),
}

_FIXED_WIDTHS = {
    Unit.NANOSECOND: 1,
    Unit.SECOND: NANOSECONDS_PER_SECOND,
    Unit.MINUTE: NANOSECONDS_PER_MINUTE,
    Unit.HOUR: NANOSECONDS_PER_HOUR,
}

_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=UTC)
_EPOCH_NAIVE = datetime(1970, 1, 1)
_EPOCH_ORDINAL = date(1970, 1, 1).toordinal()
# Ordinal of the (unrepresentable) day after date.max
_END_ORDINAL = date.max.toordinal() + 1


def _delta_ns(delta: timedelta) -> int:
    return (delta.days * 86_400 + delta.seconds) * NANOSECONDS_PER_SECOND + delta.microseconds * NANOSECONDS_PER_MICROSECOND


def _offset_ns(naive: datetime, zone: ZoneInfo) -> int:
    return _delta_ns(naive.replace(tzinfo=zone).utcoffset())


def _wall_to_instant(wall_ns: int, zone: ZoneInfo) -> Instant:
    """Instant for a local wall-clock time (ns since the local epoch), fold=0."""
    naive = _EPOCH_NAIVE + timedelta(microseconds=wall_ns // NANOSECONDS_PER_MICROSECOND)
    return Instant(wall_ns - _offset_ns(naive, zone))


def _midnight(ordinal: int, zone: ZoneInfo) -> Instant:
    """Instant of local midnight starting the day with proleptic ``ordinal``."""
    wall_ns = (ordinal - _EPOCH_ORDINAL) * NANOSECONDS_PER_DAY
    if ordinal >= _END_ORDINAL:
        # Past datetime's range: keep the offset in effect on its last day
        naive = datetime.combine(date.max, datetime.min.time())
        return Instant(wall_ns - _offset_ns(naive, zone))
    return _wall_to_instant(wall_ns, zone)


def _local(instant: Instant, zone: ZoneInfo) -> datetime:
    """Aware local datetime for ``instant`` (sub-microsecond part dropped)."""
    utc = _EPOCH_UTC + timedelta(microseconds=instant.nanoseconds // NANOSECONDS_PER_MICROSECOND)
    return utc.astimezone(zone)


def _month_start_ordinal(year: int, month: int) -> int:
    if year > date.max.year:
        return _END_ORDINAL
    return date(year, month, 1).toordinal()


class ZoneInfoCalendarEngine:
    """
    Lenient calendar engine over the proleptic Gregorian ``datetime`` model.

    Stateless; one instance may serve any number of regions and threads.

    Examples:
        >>> from timespine.core.calendar import CalendarIdentity, Region
        >>> engine = ZoneInfoCalendarEngine()
        >>> region = Region(CalendarIdentity.of("gregorian"))
        >>> instant = engine.materialize_instant(ComponentBag(year=2021, month=2, day=30), region)
        >>> engine.read_components({Unit.MONTH, Unit.DAY}, instant, region)
        ComponentBag(month=3, day=2)
    """

    def eras(self, region: Region) -> tuple[Era, ...]:
        return ERAS[region.calendar.identifier]

    def era_for(self, day: date, region: Region) -> Era:
        """Era containing ``day``; the oldest era for earlier dates."""
        eras = self.eras(region)
        current = eras[0]
        for era in eras[1:]:
            if era.start > day:
                break
            current = era
        return current

    def era_bounds(self, era: Era, region: Region) -> tuple[int, int]:
        """Half-open ordinal bounds of ``era``; the oldest era is unbounded below."""
        eras = self.eras(region)
        position = eras.index(era)
        lower = 1 if position == 0 else era.start.toordinal()
        upper = eras[position + 1].start.toordinal() if position + 1 < len(eras) else _END_ORDINAL
        return lower, upper

    # ------------------------------------------------------------------
    # CalendarEngine protocol
    # ------------------------------------------------------------------

    def materialize_instant(self, components: ComponentBag, region: Region) -> Instant | None:
        eras = self.eras(region)
        if Unit.ERA in components:
            era = next((e for e in eras if e.code == components[Unit.ERA]), None)
            if era is None:
                return None
        else:
            era = eras[-1]

        gregorian_year = components.get(Unit.YEAR, 1) + era.year_offset
        first_year_of_era = gregorian_year == era.start.year
        month = components.get(Unit.MONTH, era.start.month if first_year_of_era else 1)
        default_day = era.start.day if first_year_of_era and month == era.start.month else 1
        day = components.get(Unit.DAY, default_day)

        year, month_index = divmod(gregorian_year * 12 + month - 1, 12)
        if not date.min.year <= year <= date.max.year:
            return None
        ordinal = date(year, month_index + 1, 1).toordinal() + day - 1

        seconds = components.get(Unit.HOUR, 0) * 3600 + components.get(Unit.MINUTE, 0) * 60 + components.get(Unit.SECOND, 0)
        wall_ns = (
            (ordinal - _EPOCH_ORDINAL) * NANOSECONDS_PER_DAY
            + seconds * NANOSECONDS_PER_SECOND
            + components.get(Unit.NANOSECOND, 0)
        )
        try:
            instant = _wall_to_instant(wall_ns, region.zone)
            _local(instant, region.zone)
        except (OverflowError, ValueError):
            return None
        return instant

    def read_components(self, units: Iterable[Unit], instant: Instant, region: Region) -> ComponentBag:
        local = _local(instant, region.zone)
        day = local.date()
        era = self.era_for(day, region)
        values = {
            Unit.ERA: era.code,
            Unit.YEAR: day.year - era.year_offset,
            Unit.MONTH: day.month,
            Unit.DAY: day.day,
            Unit.HOUR: local.hour,
            Unit.MINUTE: local.minute,
            Unit.SECOND: local.second,
            Unit.NANOSECOND: local.microsecond * NANOSECONDS_PER_MICROSECOND + instant.nanoseconds % NANOSECONDS_PER_MICROSECOND,
        }
        return ComponentBag({unit: values[unit] for unit in as_units(units)})

    def unit_interval(self, instant: Instant, unit: Unit, region: Region) -> tuple[Instant, int] | None:
        zone = region.zone
        try:
            local = _local(instant, zone)
        except OverflowError:
            return None

        if unit in _FIXED_WIDTHS:
            width = _FIXED_WIDTHS[unit]
            offset_ns = _delta_ns(local.utcoffset())
            wall_ns = instant.nanoseconds + offset_ns
            start = Instant(wall_ns - wall_ns % width - offset_ns)
            return start, width

        day = local.date()
        era_lower, era_upper = self.era_bounds(self.era_for(day, region), region)
        if unit is Unit.DAY:
            lower, upper = day.toordinal(), day.toordinal() + 1
        elif unit is Unit.MONTH:
            next_year, next_month = divmod(day.year * 12 + day.month, 12)
            lower = _month_start_ordinal(day.year, day.month)
            upper = _month_start_ordinal(next_year, next_month + 1)
        elif unit is Unit.YEAR:
            lower = _month_start_ordinal(day.year, 1)
            upper = _month_start_ordinal(day.year + 1, 1)
        elif unit is Unit.ERA:
            lower, upper = era_lower, era_upper
        else:
            return None

        lower, upper = max(lower, era_lower), min(upper, era_upper)
        start = _midnight(lower, zone)
        end = _midnight(upper, zone)
        return start, end.nanoseconds - start.nanoseconds


__all__ = [
    "Era",
    "ERAS",
    "ZoneInfoCalendarEngine",
]
