"""
Shared pytest fixtures and configuration for time-spine tests.

This module provides:
- Regions and resolvers for the supported calendars
- Environment isolation for TIMESPINE_* settings
- structlog reset between tests
"""

from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import structlog

from timespine.core.calendar import CalendarIdentity, Region
from timespine.core.instant import Instant
from timespine.core.resolver import CalendarResolver


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run every test without TIMESPINE_* variables or a stray .env file."""
    import os

    for key in list(os.environ):
        if key.startswith("TIMESPINE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any configure_logging() call made by a test."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Calendar Fixtures
# =============================================================================


@pytest.fixture
def gregorian_region() -> Region:
    return Region(CalendarIdentity.of("gregorian"), "UTC")


@pytest.fixture
def gregorian(gregorian_region: Region) -> CalendarResolver:
    """Gregorian calendar in UTC."""
    return CalendarResolver(gregorian_region)


@pytest.fixture
def new_york() -> CalendarResolver:
    """Gregorian calendar in America/New_York (DST transitions)."""
    return CalendarResolver(Region(CalendarIdentity.of("gregorian"), "America/New_York"))


@pytest.fixture
def japanese() -> CalendarResolver:
    """Japanese (era-relevant) calendar in Asia/Tokyo."""
    return CalendarResolver(Region(CalendarIdentity.of("japanese"), "Asia/Tokyo", "ja_JP"))


@pytest.fixture
def buddhist() -> CalendarResolver:
    """Buddhist calendar in Asia/Bangkok."""
    return CalendarResolver(Region(CalendarIdentity.of("buddhist"), "Asia/Bangkok", "th_TH"))


@pytest.fixture
def at():
    """Build an Instant from local wall-clock fields: at(2021, 6, 15, tz="UTC")."""

    def build(*fields: int, tz: str = "UTC", fold: int = 0) -> Instant:
        return Instant.from_datetime(datetime(*fields, tzinfo=ZoneInfo(tz), fold=fold))

    return build
