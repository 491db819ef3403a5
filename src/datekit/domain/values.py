"""Immutable calendar values — dates, times, and their arithmetic.

Every value is a frozen pydantic model: equality is structural, instances
are hashable, and every "modification" returns a new value. Calendar
arithmetic is delegated to the stdlib :mod:`datetime` and :mod:`calendar`
modules; the supported year range is therefore 1–9999.

Month and year addition clamp to the last valid day of the target month::

    CalendarDate.of(2024, 1, 31).plus_months(1)  # 2024-02-29
    CalendarDate.of(2024, 2, 29).plus_years(1)   # 2025-02-28
"""

from __future__ import annotations

import calendar
import datetime as _dt
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, model_validator

from datekit.domain.errors import InvalidDateComponentError, UnsupportedFieldError
from datekit.domain.types import DayOfWeek, LeapDayPolicy, TemporalUnit

if TYPE_CHECKING:
    from datekit.domain.clock import Clock
    from datekit.domain.types import Disambiguation
    from datekit.domain.zones import OffsetTimestamp, ZonedTimestamp, ZoneOffset

MIN_YEAR = _dt.MINYEAR
MAX_YEAR = _dt.MAXYEAR

NANOS_PER_SECOND = 1_000_000_000
SECONDS_PER_DAY = 86_400
NANOS_PER_DAY = SECONDS_PER_DAY * NANOS_PER_SECOND

# Ordinal of 1970-01-01 in the stdlib's proleptic Gregorian count.
EPOCH_ORDINAL = _dt.date(1970, 1, 1).toordinal()


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _check_range(name: str, value: int, low: int, high: int, context: str = "") -> None:
    if not low <= value <= high:
        where = f" for {context}" if context else ""
        msg = f"Invalid {name} {value}{where} (valid range {low}-{high})"
        raise InvalidDateComponentError(msg)


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero (``b`` > 0)."""
    q = abs(a) // b
    return q if a >= 0 else -q


def _days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


class _Ordered:
    """Ordering within a single value type, driven by ``_sort_key``."""

    def _sort_key(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() < other._sort_key()  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() <= other._sort_key()  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() > other._sort_key()  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() >= other._sort_key()  # type: ignore[attr-defined]

    def is_before(self, other: Self) -> bool:
        return self < other

    def is_after(self, other: Self) -> bool:
        return self > other

    def is_equal(self, other: Self) -> bool:
        return self._sort_key() == other._sort_key()


# ---------------------------------------------------------------------------
# CalendarDate
# ---------------------------------------------------------------------------


class CalendarDate(_Ordered, BaseModel):
    """A date without time or zone, e.g. ``2008-08-08``.

    Always a valid proleptic-Gregorian date; construction with an
    out-of-range component raises :class:`InvalidDateComponentError`.
    """

    model_config = {"frozen": True}

    year: int
    month: int
    day: int

    @model_validator(mode="after")
    def _check_components(self) -> Self:
        _check_range("year", self.year, MIN_YEAR, MAX_YEAR)
        _check_range("month", self.month, 1, 12)
        context = f"{self.year:04d}-{self.month:02d}"
        _check_range("day", self.day, 1, _days_in_month(self.year, self.month), context)
        return self

    # --- Construction ---

    @classmethod
    def of(cls, year: int, month: int, day: int) -> CalendarDate:
        return cls(year=int(year), month=int(month), day=int(day))

    @classmethod
    def from_date(cls, value: _dt.date) -> CalendarDate:
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def of_epoch_day(cls, epoch_day: int) -> CalendarDate:
        try:
            return cls.from_date(_dt.date.fromordinal(EPOCH_ORDINAL + epoch_day))
        except (ValueError, OverflowError) as exc:
            msg = f"Epoch day {epoch_day} is outside years {MIN_YEAR}-{MAX_YEAR}"
            raise InvalidDateComponentError(msg) from exc

    @classmethod
    def now(cls, clock: Clock | None = None) -> CalendarDate:
        """Today's date in the clock's zone (system default zone if None)."""
        from datekit.domain.clock import current_date_time

        return current_date_time(clock).date

    @classmethod
    def _clamped(cls, year: int, month: int, day: int) -> CalendarDate:
        _check_range("year", year, MIN_YEAR, MAX_YEAR)
        return cls(year=year, month=month, day=min(day, _days_in_month(year, month)))

    # --- Conversion & queries ---

    def to_date(self) -> _dt.date:
        return _dt.date(self.year, self.month, self.day)

    def to_epoch_day(self) -> int:
        return self.to_date().toordinal() - EPOCH_ORDINAL

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek(self.to_date().isoweekday())

    @property
    def day_of_year(self) -> int:
        return self.to_date().timetuple().tm_yday

    def is_leap_year(self) -> bool:
        return calendar.isleap(self.year)

    def length_of_month(self) -> int:
        return _days_in_month(self.year, self.month)

    def length_of_year(self) -> int:
        return 366 if self.is_leap_year() else 365

    def month_day(self) -> MonthDay:
        return MonthDay(month=self.month, day=self.day)

    def year_month(self) -> YearMonth:
        return YearMonth(year=self.year, month=self.month)

    def at_time(self, time: ClockTime) -> LocalDateTime:
        return LocalDateTime(date=self, time=time)

    def at_start_of_day(self) -> LocalDateTime:
        return LocalDateTime(date=self, time=MIDNIGHT)

    # --- Adjustment ---

    def with_day(self, day: int) -> CalendarDate:
        return CalendarDate(year=self.year, month=self.month, day=day)

    def with_month(self, month: int) -> CalendarDate:
        _check_range("month", month, 1, 12)
        return CalendarDate._clamped(self.year, month, self.day)

    def with_year(self, year: int) -> CalendarDate:
        return CalendarDate._clamped(year, self.month, self.day)

    # --- Arithmetic ---

    def plus_days(self, days: int) -> CalendarDate:
        if days == 0:
            return self
        return CalendarDate.of_epoch_day(self.to_epoch_day() + days)

    def plus_weeks(self, weeks: int) -> CalendarDate:
        return self.plus_days(weeks * 7)

    def plus_months(self, months: int) -> CalendarDate:
        if months == 0:
            return self
        year, month0 = divmod(self.year * 12 + (self.month - 1) + months, 12)
        return CalendarDate._clamped(year, month0 + 1, self.day)

    def plus_years(self, years: int) -> CalendarDate:
        if years == 0:
            return self
        return CalendarDate._clamped(self.year + years, self.month, self.day)

    def minus_days(self, days: int) -> CalendarDate:
        return self.plus_days(-days)

    def minus_weeks(self, weeks: int) -> CalendarDate:
        return self.plus_weeks(-weeks)

    def minus_months(self, months: int) -> CalendarDate:
        return self.plus_months(-months)

    def minus_years(self, years: int) -> CalendarDate:
        return self.plus_years(-years)

    def plus(self, amount: int, unit: TemporalUnit) -> CalendarDate:
        if unit.days is not None:
            return self.plus_days(amount * unit.days)
        if unit.months is not None:
            return self.plus_months(amount * unit.months)
        msg = f"Unsupported unit for a date: {unit}"
        raise UnsupportedFieldError(msg)

    def minus(self, amount: int, unit: TemporalUnit) -> CalendarDate:
        return self.plus(-amount, unit)

    def until(self, end: CalendarDate, unit: TemporalUnit) -> int:
        """Whole *unit*s from this date to *end*, truncated toward zero."""
        if unit.days is not None:
            return _trunc_div(end.to_epoch_day() - self.to_epoch_day(), unit.days)
        if unit.months is not None:
            return _trunc_div(self._months_until(end), unit.months)
        msg = f"Unsupported unit for a date: {unit}"
        raise UnsupportedFieldError(msg)

    def _months_until(self, end: CalendarDate) -> int:
        start_packed = (self.year * 12 + self.month - 1) * 32 + self.day
        end_packed = (end.year * 12 + end.month - 1) * 32 + end.day
        return _trunc_div(end_packed - start_packed, 32)

    def _sort_key(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


# ---------------------------------------------------------------------------
# ClockTime
# ---------------------------------------------------------------------------


class ClockTime(_Ordered, BaseModel):
    """A time of day without date or zone, nanosecond precision."""

    model_config = {"frozen": True}

    hour: int
    minute: int
    second: int = 0
    nanosecond: int = 0

    @model_validator(mode="after")
    def _check_components(self) -> Self:
        _check_range("hour", self.hour, 0, 23)
        _check_range("minute", self.minute, 0, 59)
        _check_range("second", self.second, 0, 59)
        _check_range("nanosecond", self.nanosecond, 0, NANOS_PER_SECOND - 1)
        return self

    @classmethod
    def of(cls, hour: int, minute: int, second: int = 0, nanosecond: int = 0) -> ClockTime:
        return cls(hour=hour, minute=minute, second=second, nanosecond=nanosecond)

    @classmethod
    def of_nano_of_day(cls, nano_of_day: int) -> ClockTime:
        _check_range("nano-of-day", nano_of_day, 0, NANOS_PER_DAY - 1)
        seconds, nanos = divmod(nano_of_day, NANOS_PER_SECOND)
        hours, rem = divmod(seconds, 3600)
        return cls(hour=hours, minute=rem // 60, second=rem % 60, nanosecond=nanos)

    @classmethod
    def from_time(cls, value: _dt.time) -> ClockTime:
        return cls(
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            nanosecond=value.microsecond * 1000,
        )

    @classmethod
    def now(cls, clock: Clock | None = None) -> ClockTime:
        from datekit.domain.clock import current_date_time

        return current_date_time(clock).time

    def to_time(self) -> _dt.time:
        """Convert to stdlib time (sub-microsecond digits are dropped)."""
        return _dt.time(self.hour, self.minute, self.second, self.nanosecond // 1000)

    def to_second_of_day(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    def to_nano_of_day(self) -> int:
        return self.to_second_of_day() * NANOS_PER_SECOND + self.nanosecond

    def plus_nanos(self, nanos: int) -> ClockTime:
        """Add nanoseconds, wrapping around midnight."""
        if nanos == 0:
            return self
        return ClockTime.of_nano_of_day((self.to_nano_of_day() + nanos) % NANOS_PER_DAY)

    def plus_seconds(self, seconds: int) -> ClockTime:
        return self.plus_nanos(seconds * NANOS_PER_SECOND)

    def plus_minutes(self, minutes: int) -> ClockTime:
        return self.plus_seconds(minutes * 60)

    def plus_hours(self, hours: int) -> ClockTime:
        return self.plus_seconds(hours * 3600)

    def minus_hours(self, hours: int) -> ClockTime:
        return self.plus_hours(-hours)

    def minus_minutes(self, minutes: int) -> ClockTime:
        return self.plus_minutes(-minutes)

    def plus(self, amount: int, unit: TemporalUnit) -> ClockTime:
        if unit.nanos is None:
            msg = f"Unsupported unit for a time: {unit}"
            raise UnsupportedFieldError(msg)
        return self.plus_nanos(amount * unit.nanos)

    def minus(self, amount: int, unit: TemporalUnit) -> ClockTime:
        return self.plus(-amount, unit)

    def until(self, end: ClockTime, unit: TemporalUnit) -> int:
        if unit.nanos is None:
            msg = f"Unsupported unit for a time: {unit}"
            raise UnsupportedFieldError(msg)
        return _trunc_div(end.to_nano_of_day() - self.to_nano_of_day(), unit.nanos)

    def _sort_key(self) -> tuple[int]:
        return (self.to_nano_of_day(),)

    def __str__(self) -> str:
        # HH:mm, then :ss and a 3/6/9 digit fraction only when non-zero.
        text = f"{self.hour:02d}:{self.minute:02d}"
        if self.second or self.nanosecond:
            text += f":{self.second:02d}"
        if not self.nanosecond:
            return text
        if self.nanosecond % 1_000_000 == 0:
            return f"{text}.{self.nanosecond // 1_000_000:03d}"
        if self.nanosecond % 1_000 == 0:
            return f"{text}.{self.nanosecond // 1_000:06d}"
        return f"{text}.{self.nanosecond:09d}"


MIDNIGHT = ClockTime(hour=0, minute=0)
NOON = ClockTime(hour=12, minute=0)


# ---------------------------------------------------------------------------
# LocalDateTime
# ---------------------------------------------------------------------------


class LocalDateTime(_Ordered, BaseModel):
    """A date and time without zone or offset, e.g. ``2018-01-14T19:30``."""

    model_config = {"frozen": True}

    date: CalendarDate
    time: ClockTime

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
    ) -> LocalDateTime:
        return cls(
            date=CalendarDate.of(year, month, day),
            time=ClockTime.of(hour, minute, second, nanosecond),
        )

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> LocalDateTime:
        """Take the wall-clock fields of *value*, ignoring any tzinfo."""
        return cls(date=CalendarDate.from_date(value.date()), time=ClockTime.from_time(value.time()))

    @classmethod
    def now(cls, clock: Clock | None = None) -> LocalDateTime:
        from datekit.domain.clock import current_date_time

        return current_date_time(clock)

    def to_datetime(self) -> _dt.datetime:
        """Naive stdlib datetime (sub-microsecond digits are dropped)."""
        return _dt.datetime.combine(self.date.to_date(), self.time.to_time())

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def minute(self) -> int:
        return self.time.minute

    @property
    def second(self) -> int:
        return self.time.second

    @property
    def nanosecond(self) -> int:
        return self.time.nanosecond

    def to_epoch_second(self, offset_seconds: int = 0) -> int:
        return self.date.to_epoch_day() * SECONDS_PER_DAY + self.time.to_second_of_day() - offset_seconds

    # --- Zone attachment ---

    def at_zone(self, zone_id: str, disambiguation: Disambiguation | None = None) -> ZonedTimestamp:
        from datekit.domain.zones import ZonedTimestamp

        return ZonedTimestamp.of(self, zone_id, disambiguation)

    def at_offset(self, offset: ZoneOffset | str) -> OffsetTimestamp:
        from datekit.domain.zones import OffsetTimestamp

        return OffsetTimestamp.of(self, offset)

    # --- Arithmetic ---

    def _with_date(self, date: CalendarDate) -> LocalDateTime:
        if date == self.date:
            return self
        return LocalDateTime(date=date, time=self.time)

    def plus_days(self, days: int) -> LocalDateTime:
        return self._with_date(self.date.plus_days(days))

    def plus_weeks(self, weeks: int) -> LocalDateTime:
        return self._with_date(self.date.plus_weeks(weeks))

    def plus_months(self, months: int) -> LocalDateTime:
        return self._with_date(self.date.plus_months(months))

    def plus_years(self, years: int) -> LocalDateTime:
        return self._with_date(self.date.plus_years(years))

    def plus_nanos(self, nanos: int) -> LocalDateTime:
        """Add nanoseconds, carrying whole days into the date."""
        if nanos == 0:
            return self
        days, nano_of_day = divmod(self.time.to_nano_of_day() + nanos, NANOS_PER_DAY)
        return LocalDateTime(
            date=self.date.plus_days(days),
            time=ClockTime.of_nano_of_day(nano_of_day),
        )

    def plus_seconds(self, seconds: int) -> LocalDateTime:
        return self.plus_nanos(seconds * NANOS_PER_SECOND)

    def plus_minutes(self, minutes: int) -> LocalDateTime:
        return self.plus_seconds(minutes * 60)

    def plus_hours(self, hours: int) -> LocalDateTime:
        return self.plus_seconds(hours * 3600)

    def plus(self, amount: int, unit: TemporalUnit) -> LocalDateTime:
        if unit.nanos is not None:
            return self.plus_nanos(amount * unit.nanos)
        return self._with_date(self.date.plus(amount, unit))

    def minus(self, amount: int, unit: TemporalUnit) -> LocalDateTime:
        return self.plus(-amount, unit)

    def until(self, end: LocalDateTime, unit: TemporalUnit) -> int:
        if unit.nanos is not None:
            days = end.date.to_epoch_day() - self.date.to_epoch_day()
            nanos = days * NANOS_PER_DAY + end.time.to_nano_of_day() - self.time.to_nano_of_day()
            return _trunc_div(nanos, unit.nanos)
        end_date = end.date
        if end_date > self.date and end.time < self.time:
            end_date = end_date.minus_days(1)
        elif end_date < self.date and end.time > self.time:
            end_date = end_date.plus_days(1)
        return self.date.until(end_date, unit)

    def _sort_key(self) -> tuple[Any, ...]:
        return (*self.date._sort_key(), *self.time._sort_key())

    def __str__(self) -> str:
        return f"{self.date}T{self.time}"


# ---------------------------------------------------------------------------
# YearMonth / MonthDay
# ---------------------------------------------------------------------------


class YearMonth(_Ordered, BaseModel):
    """A month in a specific year, e.g. a card expiry ``2020-05``."""

    model_config = {"frozen": True}

    year: int
    month: int

    @model_validator(mode="after")
    def _check_components(self) -> Self:
        _check_range("year", self.year, MIN_YEAR, MAX_YEAR)
        _check_range("month", self.month, 1, 12)
        return self

    @classmethod
    def of(cls, year: int, month: int) -> YearMonth:
        return cls(year=int(year), month=int(month))

    @classmethod
    def now(cls, clock: Clock | None = None) -> YearMonth:
        return CalendarDate.now(clock).year_month()

    def is_leap_year(self) -> bool:
        return calendar.isleap(self.year)

    def length_of_month(self) -> int:
        return _days_in_month(self.year, self.month)

    def is_valid_day(self, day: int) -> bool:
        return 1 <= day <= self.length_of_month()

    def at_day(self, day: int) -> CalendarDate:
        return CalendarDate(year=self.year, month=self.month, day=day)

    def at_end_of_month(self) -> CalendarDate:
        return self.at_day(self.length_of_month())

    def plus_months(self, months: int) -> YearMonth:
        year, month0 = divmod(self.year * 12 + (self.month - 1) + months, 12)
        return YearMonth(year=year, month=month0 + 1)

    def plus_years(self, years: int) -> YearMonth:
        return YearMonth(year=self.year + years, month=self.month)

    def minus_months(self, months: int) -> YearMonth:
        return self.plus_months(-months)

    def plus(self, amount: int, unit: TemporalUnit) -> YearMonth:
        if unit.months is None:
            msg = f"Unsupported unit for a year-month: {unit}"
            raise UnsupportedFieldError(msg)
        return self.plus_months(amount * unit.months)

    def is_expired(self, clock: Clock | None = None) -> bool:
        """True once the current month (per *clock*) is after this one."""
        return YearMonth.now(clock).is_after(self)

    def _sort_key(self) -> tuple[int, int]:
        return (self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class MonthDay(_Ordered, BaseModel):
    """A recurring day of the year, e.g. a birthday ``--08-04``.

    Feb 29 is a valid MonthDay; see :meth:`matches` for how it lines up
    with non-leap years.
    """

    model_config = {"frozen": True}

    month: int
    day: int

    @model_validator(mode="after")
    def _check_components(self) -> Self:
        _check_range("month", self.month, 1, 12)
        # Leap year 2000 gives every month its maximum length.
        _check_range("day", self.day, 1, _days_in_month(2000, self.month), f"month {self.month}")
        return self

    @classmethod
    def of(cls, month: int, day: int) -> MonthDay:
        return cls(month=int(month), day=int(day))

    @classmethod
    def now(cls, clock: Clock | None = None) -> MonthDay:
        return CalendarDate.now(clock).month_day()

    def is_valid_year(self, year: int) -> bool:
        return not (self.month == 2 and self.day == 29 and not calendar.isleap(year))

    def at_year(self, year: int) -> CalendarDate:
        """This month-day in *year*; Feb 29 becomes Feb 28 in a non-leap year."""
        return CalendarDate._clamped(year, self.month, self.day)

    def matches(self, date: CalendarDate, policy: LeapDayPolicy = LeapDayPolicy.FEB_28) -> bool:
        """Whether *date* falls on this recurring day.

        A Feb-29 month-day matches Feb 28 (``FEB_28``) or Mar 1 (``MAR_1``)
        of a non-leap year, and nothing in that year under ``STRICT``.
        """
        if (self.month, self.day) == (date.month, date.day):
            return True
        if (self.month, self.day) != (2, 29) or date.is_leap_year():
            return False
        if policy is LeapDayPolicy.FEB_28:
            return (date.month, date.day) == (2, 28)
        if policy is LeapDayPolicy.MAR_1:
            return (date.month, date.day) == (3, 1)
        return False

    def _sort_key(self) -> tuple[int, int]:
        return (self.month, self.day)

    def __str__(self) -> str:
        return f"--{self.month:02d}-{self.day:02d}"


# ---------------------------------------------------------------------------
# Function-style API
# ---------------------------------------------------------------------------


def add_days(date: CalendarDate, days: int) -> CalendarDate:
    return date.plus_days(days)


def add_weeks(date: CalendarDate, weeks: int) -> CalendarDate:
    return date.plus_weeks(weeks)


def add_months(date: CalendarDate, months: int) -> CalendarDate:
    """Add calendar months, clamping to the end of the target month."""
    return date.plus_months(months)


def add_years(date: CalendarDate, years: int) -> CalendarDate:
    """Add calendar years; Feb 29 clamps to Feb 28 in a non-leap target year."""
    return date.plus_years(years)


def is_leap_year(value: CalendarDate | YearMonth | int) -> bool:
    year = value if isinstance(value, int) else value.year
    return calendar.isleap(year)


def day_of_week(date: CalendarDate) -> DayOfWeek:
    return date.day_of_week


def is_same_month_day(
    a: CalendarDate,
    b: CalendarDate,
    policy: LeapDayPolicy = LeapDayPolicy.FEB_28,
) -> bool:
    """Compare month and day, ignoring the year (recurring-event check).

    Symmetric: a Feb-29 date on either side is matched against the other
    date per *policy*.
    """
    return a.month_day().matches(b, policy) or b.month_day().matches(a, policy)
