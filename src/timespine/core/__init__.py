"""time-spine core -- strict conversion between calendar fields and instants.

Manifesto:
    A date library is only as trustworthy as the layer that turns "2021-02-30"
    into a point in time. Platform calendars happily answer "March 2". This
    core wraps such a calendar engine and refuses: it materializes, reads
    back, and compares, so every instant it returns is named exactly by the
    fields the caller gave.

Module Map (recommended reading order)
--------------------------------------
**Type System & Errors (start here)**
  errors            Structured error hierarchy + require()
  result            Ok / Err tagged results
  units             Calendar units and their fixed total order
  instant           Instant + half-open InstantRange

**Calendar Model**
  components        ComponentBag + required-unit validation
  calendar          CalendarIdentity (era relevance, lenient units) + Region
  protocols         CalendarEngine contract
  engine            ZoneInfoCalendarEngine (datetime + zoneinfo)
  resolver          CalendarResolver.exact_date / resolve / range

**Cross-Cutting Concerns**
  logging           Structured logging (structlog)
  settings          TimeSpineSettings (pydantic-settings)

Tags:
    time-spine, calendar, round-trip-validation, foundation

Doc-Types:
    package-overview, module-index
"""

from timespine.core.calendar import CalendarIdentifier, CalendarIdentity, Region
from timespine.core.components import ComponentBag, require_and_restrict
from timespine.core.engine import ZoneInfoCalendarEngine
from timespine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InternalInvariantViolation,
    InvalidComponentsError,
    InvalidConfigError,
    TimeSpineError,
    ValidationError,
    require,
)
from timespine.core.instant import Instant, InstantRange
from timespine.core.logging import configure_logging, get_logger
from timespine.core.protocols import CalendarEngine
from timespine.core.resolver import CalendarResolver
from timespine.core.result import Err, Ok, Result
from timespine.core.settings import TimeSpineSettings
from timespine.core.units import ASCENDING_ORDER, DESCENDING_ORDER, Unit, largest, smallest

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "TimeSpineError",
    "ValidationError",
    "InvalidComponentsError",
    "ConfigError",
    "InvalidConfigError",
    "InternalInvariantViolation",
    "require",
    # Result
    "Result",
    "Ok",
    "Err",
    # Units
    "Unit",
    "ASCENDING_ORDER",
    "DESCENDING_ORDER",
    "smallest",
    "largest",
    # Calendar model
    "Instant",
    "InstantRange",
    "ComponentBag",
    "require_and_restrict",
    "CalendarIdentifier",
    "CalendarIdentity",
    "Region",
    "CalendarEngine",
    "ZoneInfoCalendarEngine",
    "CalendarResolver",
    # Cross-cutting
    "TimeSpineSettings",
    "configure_logging",
    "get_logger",
]
