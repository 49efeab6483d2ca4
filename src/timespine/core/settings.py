"""Environment-driven defaults for time-spine.

``TimeSpineSettings`` supplies the default region (calendar, timezone,
locale) and the logging level. Every field can be overridden with a
``TIMESPINE_``-prefixed environment variable or a ``.env`` file.

Examples:
    >>> import os
    >>> os.environ["TIMESPINE_TIMEZONE"] = "Asia/Tokyo"
    >>> TimeSpineSettings().timezone
    'Asia/Tokyo'

Tags:
    settings, configuration, pydantic, environment, time-spine
"""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timespine.core.calendar import CalendarIdentifier


class TimeSpineSettings(BaseSettings):
    """Default region and logging configuration.

    Fields
    ──────
    calendar   : Calendar system for the default region
    timezone   : IANA timezone key for the default region
    locale     : Locale identifier for the default region
    log_level  : Structlog log level
    log_json   : JSON log output (None = auto-detect from tty)
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMESPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Region ───────────────────────────────────────────────────
    calendar: CalendarIdentifier = CalendarIdentifier.GREGORIAN
    timezone: str = Field(default="UTC", description="IANA timezone key")
    locale: str = "en_US_POSIX"

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()
