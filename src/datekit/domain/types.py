"""Calendar enums and resolution policies.

ISO weekdays and months, the temporal units accepted by ``plus``/``until``,
and the two policy switches exposed through configuration: leap-day
matching for recurring events and daylight-saving disambiguation.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any


class DayOfWeek(IntEnum):
    """ISO-8601 day of week, Monday = 1."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @property
    def display_name(self) -> str:
        return self.name.title()


class Month(IntEnum):
    """Month of year, January = 1."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @property
    def display_name(self) -> str:
        return self.name.title()


class TemporalUnit(StrEnum):
    """Units of time for ``plus``, ``minus`` and ``until``."""

    NANOS = "nanos"
    MICROS = "micros"
    MILLIS = "millis"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    HALF_DAYS = "half_days"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"
    DECADES = "decades"
    CENTURIES = "centuries"
    MILLENNIA = "millennia"

    @property
    def nanos(self) -> int | None:
        """Exact length in nanoseconds for time-based units, else None."""
        return _UNIT_NANOS.get(self)

    @property
    def days(self) -> int | None:
        """Length in days for DAYS and WEEKS, else None."""
        return _UNIT_DAYS.get(self)

    @property
    def months(self) -> int | None:
        """Length in months for MONTHS and longer, else None."""
        return _UNIT_MONTHS.get(self)

    @property
    def is_time_based(self) -> bool:
        return self in _UNIT_NANOS

    @property
    def is_date_based(self) -> bool:
        return self in _UNIT_DAYS or self in _UNIT_MONTHS

    def between(self, start: Any, end: Any) -> int:
        """Whole units from *start* to *end*, truncated toward zero.

        Both values must be of the same type; dispatches to ``start.until``.
        """
        return start.until(end, self)


_NANOS_PER_SECOND = 1_000_000_000

_UNIT_NANOS: dict[TemporalUnit, int] = {
    TemporalUnit.NANOS: 1,
    TemporalUnit.MICROS: 1_000,
    TemporalUnit.MILLIS: 1_000_000,
    TemporalUnit.SECONDS: _NANOS_PER_SECOND,
    TemporalUnit.MINUTES: 60 * _NANOS_PER_SECOND,
    TemporalUnit.HOURS: 3_600 * _NANOS_PER_SECOND,
    TemporalUnit.HALF_DAYS: 43_200 * _NANOS_PER_SECOND,
}

_UNIT_DAYS: dict[TemporalUnit, int] = {
    TemporalUnit.DAYS: 1,
    TemporalUnit.WEEKS: 7,
}

_UNIT_MONTHS: dict[TemporalUnit, int] = {
    TemporalUnit.MONTHS: 1,
    TemporalUnit.YEARS: 12,
    TemporalUnit.DECADES: 120,
    TemporalUnit.CENTURIES: 1_200,
    TemporalUnit.MILLENNIA: 12_000,
}


class LeapDayPolicy(StrEnum):
    """How a Feb-29 recurring event matches a non-leap year."""

    FEB_28 = "feb28"
    MAR_1 = "mar1"
    STRICT = "strict"


class Disambiguation(StrEnum):
    """How a local time in a daylight-saving gap or overlap is resolved.

    EARLIER and LATER choose the offset in an overlap; both shift a gap
    time forward by the length of the gap. RAISE rejects both cases.
    """

    EARLIER = "earlier"
    LATER = "later"
    RAISE = "raise"
