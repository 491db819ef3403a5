"""datekit — immutable calendar dates, clock times, zones and text patterns."""

from __future__ import annotations

from datekit.domain.clock import Clock, FixedClock, OffsetClock, SystemClock
from datekit.domain.errors import (
    ClockUnavailableError,
    DateKitError,
    FormatMismatchError,
    InvalidDateComponentError,
    InvalidPatternError,
    UnsupportedFieldError,
    ZoneResolutionError,
)
from datekit.domain.formatting import DateTimeFormatter, format, parse
from datekit.domain.period import DateDifference
from datekit.domain.types import DayOfWeek, Disambiguation, LeapDayPolicy, Month, TemporalUnit
from datekit.domain.values import (
    CalendarDate,
    ClockTime,
    LocalDateTime,
    MonthDay,
    YearMonth,
    add_days,
    add_months,
    add_weeks,
    add_years,
    day_of_week,
    is_leap_year,
    is_same_month_day,
)
from datekit.domain.zones import Instant, OffsetTimestamp, ZonedTimestamp, ZoneOffset, get_zone

__version__ = "0.3.0"

__all__ = [
    "CalendarDate",
    "Clock",
    "ClockTime",
    "ClockUnavailableError",
    "DateDifference",
    "DateKitError",
    "DateTimeFormatter",
    "DayOfWeek",
    "Disambiguation",
    "FixedClock",
    "FormatMismatchError",
    "Instant",
    "InvalidDateComponentError",
    "InvalidPatternError",
    "LeapDayPolicy",
    "LocalDateTime",
    "Month",
    "MonthDay",
    "OffsetClock",
    "OffsetTimestamp",
    "SystemClock",
    "TemporalUnit",
    "UnsupportedFieldError",
    "YearMonth",
    "ZoneOffset",
    "ZoneResolutionError",
    "ZonedTimestamp",
    "add_days",
    "add_months",
    "add_weeks",
    "add_years",
    "day_of_week",
    "format",
    "get_zone",
    "is_leap_year",
    "is_same_month_day",
    "parse",
]
