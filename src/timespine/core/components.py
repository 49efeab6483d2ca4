"""
Calendar component bags and required-unit validation.

A ``ComponentBag`` maps calendar units to integer values. Unset units are
absent, never zero: ``{year: 2021, month: 2}`` says nothing about the day.
Two bags are equal iff they agree on every unit present in either.

``require_and_restrict()`` is the first step of exact-date resolution: it
keeps only the units the caller declared significant and rejects the input
when a required (non-lenient) unit is absent.

Examples:
    >>> bag = ComponentBag(year=2021, month=2, day=30, hour=9)
    >>> bag.restrict({Unit.YEAR, Unit.MONTH, Unit.DAY})
    ComponentBag(year=2021, month=2, day=30)
    >>> require_and_restrict(ComponentBag(year=2021), {"year", "month"}, frozenset()).is_err()
    True

Tags:
    calendar-components, validation, value-object, time-spine
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from timespine.core.errors import InvalidComponentsError
from timespine.core.result import Err, Ok, Result
from timespine.core.units import ASCENDING_ORDER, Unit, as_units


class ComponentBag(Mapping[Unit, int]):
    """
    Immutable mapping of calendar unit to value.

    Keys may be given as ``Unit`` members or unit names; values must be
    integers (``bool`` is rejected).

    Examples:
        >>> ComponentBag({"year": 2024}, month=2) == ComponentBag(year=2024, month=2)
        True
        >>> ComponentBag(year=2024).get(Unit.ERA) is None
        True
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[Unit | str, int] | None = None, /, **kwargs: int):
        merged: dict[Unit, int] = {}
        for key, value in {**dict(values or {}), **kwargs}.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Component {key!s} must be an int, got {type(value).__name__}")
            merged[Unit(key)] = value
        self._values = merged

    @classmethod
    def coerce(cls, value: ComponentBag | Mapping[Unit | str, int]) -> ComponentBag:
        """Return ``value`` unchanged if it is already a bag."""
        if isinstance(value, ComponentBag):
            return value
        return cls(value)

    def __getitem__(self, unit: Unit | str) -> int:
        return self._values[Unit(unit)]

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, unit: object) -> bool:
        try:
            return Unit(unit) in self._values
        except (TypeError, ValueError):
            return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ComponentBag):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    @property
    def units(self) -> frozenset[Unit]:
        """Units that carry a value."""
        return frozenset(self._values)

    def restrict(self, units: Iterable[Unit | str]) -> ComponentBag:
        """Bag holding only the values for ``units``."""
        wanted = as_units(units)
        return ComponentBag({unit: value for unit, value in self._values.items() if unit in wanted})

    def with_value(self, unit: Unit | str, value: int) -> ComponentBag:
        """Copy of this bag with ``unit`` set to ``value``."""
        return ComponentBag({**self._values, Unit(unit): value})

    def to_dict(self) -> dict[str, Any]:
        """Unit names to values, coarsest unit first."""
        return {unit.value: self._values[unit] for unit in reversed(ASCENDING_ORDER) if unit in self._values}

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"ComponentBag({fields})"

    def __str__(self) -> str:
        return "{" + ", ".join(f"{name}: {value}" for name, value in self.to_dict().items()) + "}"


def require_and_restrict(
    components: ComponentBag | Mapping[Unit | str, int],
    matching: Iterable[Unit | str],
    lenient: Iterable[Unit | str],
) -> Result[ComponentBag]:
    """
    Restrict ``components`` to ``matching``, requiring every non-lenient unit.

    Args:
        components: Caller-supplied values
        matching: Units the caller declares significant
        lenient: Units whose absence is tolerated

    Returns:
        Ok with the restricted bag, or Err(InvalidComponentsError) naming
        the missing units
    """
    bag = ComponentBag.coerce(components)
    wanted = as_units(matching)
    restricted = bag.restrict(wanted)
    missing = wanted - as_units(lenient) - restricted.units
    if missing:
        return Err(InvalidComponentsError(restricted, missing_units=missing))
    return Ok(restricted)


__all__ = [
    "ComponentBag",
    "require_and_restrict",
]
