"""
Canonical protocol definitions for time-spine.

The resolver never does calendar arithmetic itself. Leap years, month
lengths, era transitions and timezone offsets belong to a calendar engine,
and this module defines the narrow contract such an engine must satisfy.

Architecture:
    ::

        protocols.py (YOU ARE HERE)
        └── CalendarEngine
              materialize_instant(components, region) → Instant | None   (partial)
              read_components(units, instant, region) → ComponentBag    (total)
              unit_interval(instant, unit, region)    → (start, ns)     (total)

    Implementations:
        engine.ZoneInfoCalendarEngine   datetime + zoneinfo (default)
        tests: any object with the same three methods

Guardrails:
    ❌ DON'T: Raise from materialize_instant for impossible fields
    ✅ DO: Return None; the resolver turns it into InvalidComponentsError

    ❌ DON'T: Validate in the engine (rejecting February 30 is the resolver's job)
    ✅ DO: Normalize leniently, as platform calendars do

Tags:
    protocol, calendar-engine, time-spine
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from timespine.core.calendar import Region
    from timespine.core.components import ComponentBag
    from timespine.core.instant import Instant
    from timespine.core.units import Unit


@runtime_checkable
class CalendarEngine(Protocol):
    """
    Calendar math collaborator consumed by ``CalendarResolver``.

    Engines must be safe for concurrent read access; the resolver adds no
    locking of its own.
    """

    def materialize_instant(self, components: ComponentBag, region: Region) -> Instant | None:
        """Instant named by ``components``, or None if the engine has none."""
        ...

    def read_components(self, units: Iterable[Unit], instant: Instant, region: Region) -> ComponentBag:
        """Values of exactly ``units`` at ``instant``."""
        ...

    def unit_interval(self, instant: Instant, unit: Unit, region: Region) -> tuple[Instant, int] | None:
        """Start and duration (nanoseconds) of the ``unit`` occurrence containing ``instant``."""
        ...


__all__ = ["CalendarEngine"]
