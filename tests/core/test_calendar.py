"""Tests for timespine.core.calendar module."""

import pytest

from timespine.core.calendar import CalendarIdentifier, CalendarIdentity, Region
from timespine.core.errors import InvalidConfigError
from timespine.core.settings import TimeSpineSettings
from timespine.core.units import Unit


class TestCalendarIdentity:
    """Tests for calendar properties."""

    def test_only_japanese_is_era_relevant(self):
        """Era relevance is derived from the identifier alone."""
        assert CalendarIdentity.of("japanese").is_era_relevant is True
        assert CalendarIdentity.of("gregorian").is_era_relevant is False
        assert CalendarIdentity.of("buddhist").is_era_relevant is False

    def test_si_seconds_per_second(self):
        """Earth calendars use SI seconds."""
        for identifier in CalendarIdentifier:
            assert CalendarIdentity.of(identifier).si_seconds_per_second == 1.0

    def test_lenient_units_era_irrelevant(self):
        """Era is lenient whenever requested on era-irrelevant calendars."""
        gregorian = CalendarIdentity.of("gregorian")
        assert gregorian.lenient_units({Unit.ERA, Unit.YEAR}) == frozenset({Unit.ERA})
        assert gregorian.lenient_units({"year", "month"}) == frozenset()

    def test_lenient_units_era_relevant(self):
        """Nothing is lenient on era-relevant calendars."""
        assert CalendarIdentity.of("japanese").lenient_units(set(Unit)) == frozenset()

    def test_unknown_identifier(self):
        """Unknown calendars are configuration errors."""
        with pytest.raises(InvalidConfigError, match="calendar"):
            CalendarIdentity.of("martian")

    def test_immutable(self):
        """Identities are frozen."""
        identity = CalendarIdentity.of("gregorian")
        with pytest.raises(AttributeError):
            identity.identifier = CalendarIdentifier.JAPANESE


class TestRegion:
    """Tests for Region."""

    def test_defaults(self):
        region = Region(CalendarIdentity.of("gregorian"))
        assert region.timezone == "UTC"
        assert region.locale == "en_US_POSIX"
        assert region.zone.key == "UTC"

    def test_unknown_timezone(self):
        """Unknown timezone keys are rejected on construction."""
        with pytest.raises(InvalidConfigError, match="timezone"):
            Region(CalendarIdentity.of("gregorian"), "Mars/Olympus_Mons")

    @pytest.mark.parametrize("key", ["America", "../etc/passwd"])
    def test_malformed_timezone(self, key):
        """Directory names and malformed keys are configuration errors too."""
        with pytest.raises(InvalidConfigError, match="timezone"):
            Region(CalendarIdentity.of("gregorian"), key)

    def test_str_and_to_dict(self):
        region = Region(CalendarIdentity.of("japanese"), "Asia/Tokyo", "ja_JP")
        assert str(region) == "japanese/Asia/Tokyo/ja_JP"
        assert region.to_dict() == {"calendar": "japanese", "timezone": "Asia/Tokyo", "locale": "ja_JP"}

    def test_from_settings(self):
        """Regions can be built from explicit settings."""
        settings = TimeSpineSettings(calendar="buddhist", timezone="Asia/Bangkok", locale="th_TH")
        region = Region.from_settings(settings)
        assert region.calendar == CalendarIdentity.of("buddhist")
        assert region.timezone == "Asia/Bangkok"
        assert region.locale == "th_TH"

    def test_from_environment(self, monkeypatch):
        """Without settings, the environment decides."""
        monkeypatch.setenv("TIMESPINE_CALENDAR", "japanese")
        monkeypatch.setenv("TIMESPINE_TIMEZONE", "Asia/Tokyo")
        region = Region.from_settings()
        assert region.calendar.is_era_relevant
        assert region.timezone == "Asia/Tokyo"
