"""
Exact-date resolution and unit ranges.

Naive calendar APIs silently normalize out-of-range fields: ask for
February 30 and you get March 2. ``CalendarResolver`` refuses to: it turns
a set of calendar fields into exactly one instant or rejects the input,
while still tolerating fields the caller may legitimately leave out (the
era, in calendars where the era does not change what a year means).

Manifesto:
    The only reliable way to know whether a calendar engine normalized your
    input is to ask it what it produced. Resolution is therefore a round
    trip: materialize an instant, read the same fields back, and require
    them to match what was asked for.

    - **Never normalize silently:** February 30 fails, it does not roll over
    - **Lenient where meaningless:** A missing era is filled in, not rejected
    - **Errors are values:** Each step returns Ok/Err; exceptions only at the edge
    - **Deterministic:** Same region and input, same answer; nothing reads "now"

Architecture:
    ::

        resolve(components, matching)
          │
          ▼
        ┌─────────────────────────┐   Err(missing units)
        │ 1. validate-required    │ ─────────────────────────┐
        │    require_and_restrict │                          │
        └───────────┬─────────────┘                          │
                    │ Ok(restricted)                         │
                    ▼                                        │
        ┌─────────────────────────┐   Err(no such instant)   │
        │ 2. materialize-or-fail  │ ─────────────────────────┤
        │    engine.materialize   │                          │
        └───────────┬─────────────┘                          │
                    │ Ok((restricted, instant))              │
                    ▼                                        │
        ┌─────────────────────────┐   Err(normalized)        │
        │ 3. read-back-and-compare│ ─────────────────────────┤
        │    adopt lenient units, │                          │
        │    require equality     │                          ▼
        └───────────┬─────────────┘              InvalidComponentsError
                    │ Ok(instant)                (components + region)
                    ▼

        range(instant, units)
          smallest(units) → engine.unit_interval → [start, start + duration)

Examples:
    >>> from timespine.core.calendar import CalendarIdentity, Region
    >>> resolver = CalendarResolver(Region(CalendarIdentity.of("gregorian"), "UTC"))
    >>> resolver.resolve({"year": 2021, "month": 2, "day": 30}, {"year", "month", "day"}).is_err()
    True
    >>> instant = resolver.exact_date({"year": 2021, "month": 6, "day": 15}, {"era", "year", "month", "day"})
    >>> str(instant)
    '2021-06-15T00:00:00.000000000Z'
    >>> resolver.range(instant, {"month", "year"}).duration_ns // 86_400_000_000_000
    30

Guardrails:
    ❌ DON'T: Catch InternalInvariantViolation from range()
    ✅ DO: Treat it as a bug in the caller or in the engine

    ❌ DON'T: Pass an empty unit set and expect a default
    ✅ DO: Always name at least one unit

Tags:
    calendar, resolution, round-trip-validation, result-pattern, time-spine

Doc-Types:
    - API Reference
    - Calendar Resolution Guide
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from timespine.core.calendar import CalendarIdentity, Region
from timespine.core.components import ComponentBag, require_and_restrict
from timespine.core.engine import ZoneInfoCalendarEngine
from timespine.core.errors import InvalidComponentsError, require
from timespine.core.instant import Instant, InstantRange
from timespine.core.logging import get_logger
from timespine.core.protocols import CalendarEngine
from timespine.core.result import Err, Ok, Result, from_bool, from_optional
from timespine.core.units import Unit, as_units, smallest

if TYPE_CHECKING:
    from timespine.core.settings import TimeSpineSettings

logger = get_logger(__name__)

Components = ComponentBag | Mapping[Unit | str, int]


class CalendarResolver:
    """
    Round-trip-validated conversion between calendar fields and instants.

    Holds only the immutable region and a stateless engine, so one
    resolver may be shared freely between threads.

    Attributes:
        region: Calendar, timezone and locale all calls run in
        engine: Calendar math collaborator
    """

    def __init__(self, region: Region, engine: CalendarEngine | None = None):
        self.region = region
        self.engine: CalendarEngine = engine or ZoneInfoCalendarEngine()

    @classmethod
    def from_settings(
        cls,
        settings: TimeSpineSettings | None = None,
        engine: CalendarEngine | None = None,
    ) -> CalendarResolver:
        """Resolver for the default region configured in the environment."""
        return cls(Region.from_settings(settings), engine)

    @property
    def calendar(self) -> CalendarIdentity:
        return self.region.calendar

    # ------------------------------------------------------------------
    # Exact dates
    # ------------------------------------------------------------------

    def resolve(self, components: Components, matching: Iterable[Unit | str]) -> Result[Instant]:
        """
        Resolve ``components`` to exactly one instant.

        Args:
            components: Field values; units outside ``matching`` are ignored
            matching: Units the caller declares significant

        Returns:
            Ok(instant), or Err(InvalidComponentsError) carrying the rejected
            components and this resolver's region
        """
        wanted = as_units(matching)
        lenient = self.calendar.lenient_units(wanted)

        validated = require_and_restrict(components, wanted, lenient).map_err(self._stage("required"))
        materialized = self._materialize(validated)
        resolved = self._read_back_and_compare(materialized, wanted, lenient)

        return resolved.inspect(self._log_resolved).inspect_err(self._log_rejected)

    def exact_date(self, components: Components, matching: Iterable[Unit | str]) -> Instant:
        """
        Like ``resolve()`` but raising.

        Raises:
            InvalidComponentsError: If the components do not name exactly one instant
        """
        return self.resolve(components, matching).unwrap()

    def _materialize(self, validated: Result[ComponentBag]) -> Result[tuple[ComponentBag, Instant]]:
        match validated:
            case Err():
                return validated
            case Ok(restricted):
                proposed = self.engine.materialize_instant(restricted, self.region)
                return (
                    from_optional(proposed, lambda: InvalidComponentsError(restricted, self.region))
                    .map(lambda instant: (restricted, instant))
                    .map_err(self._stage("materialize"))
                )

    def _read_back_and_compare(
        self,
        materialized: Result[tuple[ComponentBag, Instant]],
        matching: frozenset[Unit],
        lenient: frozenset[Unit],
    ) -> Result[Instant]:
        match materialized:
            case Err():
                return materialized
            case Ok((restricted, instant)):
                read_back = self.engine.read_components(matching, instant, self.region)

                # Omitted lenient units take whatever the calendar assigns
                expected = restricted
                for unit in lenient - restricted.units:
                    if unit in read_back:
                        expected = expected.with_value(unit, read_back[unit])

                return from_bool(
                    read_back == expected,
                    instant,
                    lambda: InvalidComponentsError(expected, self.region),
                ).map_err(self._stage("round_trip"))

    def _stage(self, stage: str):
        def tag(error: Exception) -> Exception:
            if isinstance(error, InvalidComponentsError):
                if error.region is None:
                    error.attach_region(self.region)
                error.with_context(stage=stage)
            return error

        return tag

    def _log_resolved(self, instant: Instant) -> None:
        logger.debug("components_resolved", instant=str(instant), **self.region.to_dict())

    def _log_rejected(self, error: Exception) -> None:
        if isinstance(error, InvalidComponentsError):
            logger.debug(
                "components_rejected",
                stage=error.context.metadata.get("stage"),
                components=error.components.to_dict(),
                missing_units=sorted(unit.value for unit in error.missing_units),
                **self.region.to_dict(),
            )

    # ------------------------------------------------------------------
    # Unit ranges
    # ------------------------------------------------------------------

    def range(self, instant: Instant, units: Iterable[Unit | str]) -> InstantRange:
        """
        Span of the finest unit in ``units`` that contains ``instant``.

        Raises:
            InternalInvariantViolation: If ``units`` is empty, or the engine
                cannot place ``instant`` inside an occurrence of the unit
        """
        unit = smallest(units)
        interval = self.engine.unit_interval(instant, unit, self.region)
        require(
            interval is not None,
            lambda: f"We should always be able to get the range of {unit.value} containing {instant}",
        )

        start, duration = interval
        require(duration >= 0, lambda: f"Engine returned negative {unit.value} duration {duration} at {instant}")
        span = InstantRange(start, start.shifted(duration))
        require(instant in span, lambda: f"Engine {unit.value} range {span} does not contain {instant}")
        return span

    def read_components(self, instant: Instant, units: Iterable[Unit | str]) -> ComponentBag:
        """Calendar fields of ``instant`` in this resolver's region."""
        return self.engine.read_components(as_units(units), instant, self.region)


__all__ = [
    "CalendarResolver",
]
