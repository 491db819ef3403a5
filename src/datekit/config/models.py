"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, datekit.toml only contains
overrides. An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from datekit.domain.types import Disambiguation, LeapDayPolicy

# --- datekit.toml sections ---


class ClockConfig(BaseModel):
    """[clock] section."""

    model_config = {"frozen": True}

    # None: detect the host zone (TZ, /etc/localtime, current offset).
    zone: str | None = None


class ZoneConfig(BaseModel):
    """[zone] section."""

    model_config = {"frozen": True}

    disambiguation: Disambiguation = Disambiguation.EARLIER


class CalendarConfig(BaseModel):
    """[calendar] section."""

    model_config = {"frozen": True}

    leap_day_policy: LeapDayPolicy = LeapDayPolicy.FEB_28


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True}

    date_pattern: str = "yyyy-MM-dd"
    time_pattern: str = "HH:mm:ss"
    date_time_pattern: str = "yyyy-MM-dd HH:mm:ss"


class DateKitConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    clock: ClockConfig = Field(default_factory=ClockConfig)
    zone: ZoneConfig = Field(default_factory=ZoneConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)
