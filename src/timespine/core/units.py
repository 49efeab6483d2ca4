"""
Calendar units and their fixed total order.

Eight units, ranked from the finest (nanosecond) to the coarsest (era).
``smallest()`` and ``largest()`` pick the extremes out of an arbitrary set
of requested units, e.g. the finest unit decides which span ``range()``
returns.

The two orders are written out by hand rather than derived from the enum
declaration order, so reordering the enum can never change the ranking.

Examples:
    >>> smallest({Unit.YEAR, Unit.DAY, Unit.MONTH})
    <Unit.DAY: 'day'>
    >>> largest({"hour", "day"})
    <Unit.DAY: 'day'>
    >>> smallest(set())
    Traceback (most recent call last):
    ...
    timespine.core.errors.InternalInvariantViolation: Cannot determine smallest unit in set()

Tags:
    calendar-units, ordering, value-object, time-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from timespine.core.errors import InternalInvariantViolation


class Unit(str, Enum):
    """A calendar unit. String values allow ``Unit("day")``."""

    NANOSECOND = "nanosecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    ERA = "era"


ASCENDING_ORDER: tuple[Unit, ...] = (
    Unit.NANOSECOND,
    Unit.SECOND,
    Unit.MINUTE,
    Unit.HOUR,
    Unit.DAY,
    Unit.MONTH,
    Unit.YEAR,
    Unit.ERA,
)

DESCENDING_ORDER: tuple[Unit, ...] = (
    Unit.ERA,
    Unit.YEAR,
    Unit.MONTH,
    Unit.DAY,
    Unit.HOUR,
    Unit.MINUTE,
    Unit.SECOND,
    Unit.NANOSECOND,
)

_RANK = {unit: position for position, unit in enumerate(ASCENDING_ORDER)}


def rank(unit: Unit | str) -> int:
    """Position of ``unit`` in the ascending order (nanosecond = 0)."""
    return _RANK[Unit(unit)]


def as_units(units: Iterable[Unit | str]) -> frozenset[Unit]:
    """Coerce unit names or ``Unit`` members to a frozenset of ``Unit``.

    Raises:
        ValueError: If a name is not a calendar unit
    """
    return frozenset(Unit(unit) for unit in units)


def smallest(units: Iterable[Unit | str]) -> Unit:
    """
    Finest unit in ``units``.

    Raises:
        InternalInvariantViolation: If ``units`` is empty (a caller bug)
    """
    present = as_units(units)
    for unit in ASCENDING_ORDER:
        if unit in present:
            return unit
    raise InternalInvariantViolation(f"Cannot determine smallest unit in {set(present)}")


def largest(units: Iterable[Unit | str]) -> Unit:
    """
    Coarsest unit in ``units``.

    Raises:
        InternalInvariantViolation: If ``units`` is empty (a caller bug)
    """
    present = as_units(units)
    for unit in DESCENDING_ORDER:
        if unit in present:
            return unit
    raise InternalInvariantViolation(f"Cannot determine largest unit in {set(present)}")


__all__ = [
    "Unit",
    "ASCENDING_ORDER",
    "DESCENDING_ORDER",
    "rank",
    "as_units",
    "smallest",
    "largest",
]
