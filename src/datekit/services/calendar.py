"""CalendarService — the date/time operations behind the CLI.

Each method reads its inputs (text or values), runs the domain operation,
and reports a JSON-ready ServiceResult. Defaults for patterns, leap-day
matching and daylight-saving disambiguation come from settings.
"""

from __future__ import annotations

from typing import Any

from datekit.domain.clock import FixedClock
from datekit.domain.errors import DateKitError, FormatMismatchError, UnsupportedFieldError
from datekit.domain.formatting import DateTimeFormatter, Temporal, format, parse
from datekit.domain.period import DateDifference
from datekit.domain.types import LeapDayPolicy, TemporalUnit
from datekit.domain.values import (
    CalendarDate,
    LocalDateTime,
    YearMonth,
    is_leap_year,
    is_same_month_day,
)
from datekit.domain.zones import OffsetTimestamp, ZonedTimestamp
from datekit.services._helpers import parse_flexible
from datekit.services.base import BaseService
from datekit.services.result import ServiceResult
from datekit.services.telemetry import trace_span, traced


class CalendarService(BaseService):
    """Clock, arithmetic, zone and pattern operations."""

    # ------------------------------------------------------------------
    # Input coercion
    # ------------------------------------------------------------------

    def _date(self, value: str | CalendarDate) -> CalendarDate:
        if isinstance(value, CalendarDate):
            return value
        parsed = parse_flexible(value, [self._settings.format.date_pattern])
        if isinstance(parsed, CalendarDate):
            return parsed
        msg = f"Expected a date, got {type(parsed).__name__} from {value!r}"
        raise FormatMismatchError(msg)

    def _date_time(self, value: str | LocalDateTime) -> LocalDateTime:
        if isinstance(value, LocalDateTime):
            return value
        parsed = parse_flexible(value, [self._settings.format.date_time_pattern])
        if isinstance(parsed, LocalDateTime):
            return parsed
        if isinstance(parsed, CalendarDate):
            return parsed.at_start_of_day()
        msg = f"Expected a date-time, got {type(parsed).__name__} from {value!r}"
        raise FormatMismatchError(msg)

    def _shiftable(self, value: str | Temporal) -> Temporal:
        if not isinstance(value, str):
            return value
        fmt = self._settings.format
        return parse_flexible(value, [fmt.date_pattern, fmt.date_time_pattern, fmt.time_pattern])

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    @traced
    def now(self, *, utc: bool = False, pattern: str | None = None) -> ServiceResult:
        """Current date and time from the service clock (or UTC)."""
        op = "now"
        try:
            clock = self.clock
            if utc:
                clock = FixedClock(clock.instant(), "UTC")
            current = ZonedTimestamp.now(clock)
            data: dict[str, Any] = {
                "zone": current.zone_id,
                "timestamp": str(current),
                "date": str(current.date),
                "time": str(current.time),
                "day_of_week": current.date.day_of_week.display_name,
                "instant": str(current.to_instant()),
            }
            if pattern:
                data["formatted"] = format(current, pattern)
        except DateKitError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Calendar arithmetic
    # ------------------------------------------------------------------

    @traced
    def leap_year(self, year: int | None = None) -> ServiceResult:
        """Whether *year* (default: the current year) is a leap year."""
        op = "leap_year"
        try:
            target = year if year is not None else CalendarDate.now(self.clock).year
            if year is not None:
                # Range-check through the value type.
                YearMonth.of(year, 1)
        except DateKitError as exc:
            return self._fail(op, exc)
        leap = is_leap_year(target)
        return ServiceResult(
            ok=True,
            op=op,
            data={"year": target, "leap_year": leap, "length_of_year": 366 if leap else 365},
        )

    @traced
    def difference(self, start: str | CalendarDate, end: str | CalendarDate) -> ServiceResult:
        """Years, months and days from *start* to *end*, plus the total day count."""
        op = "difference"
        try:
            first, second = self._date(start), self._date(end)
        except DateKitError as exc:
            return self._fail(op, exc)
        diff = DateDifference.between(first, second)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "start": str(first),
                "end": str(second),
                "years": diff.years,
                "months": diff.months,
                "days": diff.days,
                "period": str(diff),
                "total_days": TemporalUnit.DAYS.between(first, second),
            },
        )

    @traced
    def shift(self, value: str | Temporal, amount: int, unit: TemporalUnit | str) -> ServiceResult:
        """Add *amount* of *unit* to a date, time or date-time (negative subtracts)."""
        op = "shift"
        try:
            unit = TemporalUnit(unit)
        except ValueError:
            return self._fail(op, UnsupportedFieldError(f"Unknown unit: {unit!r}"))
        try:
            start = self._shiftable(value)
            if isinstance(start, ZonedTimestamp):
                shifted = start.plus(amount, unit, self._settings.zone.disambiguation)
            else:
                shifted = start.plus(amount, unit)  # type: ignore[union-attr]
        except DateKitError as exc:
            return self._fail(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "value": str(start),
                "amount": amount,
                "unit": str(unit),
                "result": str(shifted),
            },
        )

    @traced
    def same_month_day(
        self,
        first: str | CalendarDate,
        second: str | CalendarDate | None = None,
        *,
        policy: LeapDayPolicy | str | None = None,
    ) -> ServiceResult:
        """Recurring-event check: same month and day, ignoring the year.

        *second* defaults to today. *policy* defaults to
        ``[calendar] leap_day_policy``.
        """
        op = "same_month_day"
        try:
            resolved = LeapDayPolicy(policy) if policy else self._settings.calendar.leap_day_policy
        except ValueError:
            return self._fail(op, UnsupportedFieldError(f"Unknown leap-day policy: {policy!r}"))
        try:
            event = self._date(first)
            on = self._date(second) if second is not None else CalendarDate.now(self.clock)
        except DateKitError as exc:
            return self._fail(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "event": str(event.month_day()),
                "date": str(on),
                "policy": str(resolved),
                "same_month_day": is_same_month_day(event, on, resolved),
            },
        )

    @traced
    def expiry(self, year_month: str | YearMonth) -> ServiceResult:
        """Whether a year-month (e.g. a card expiry) is already in the past."""
        op = "expiry"
        try:
            if isinstance(year_month, YearMonth):
                expires = year_month
            else:
                expires = DateTimeFormatter.of_pattern("yyyy-MM").parse_year_month(year_month)
            current = YearMonth.now(self.clock)
        except DateKitError as exc:
            return self._fail(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "expires": str(expires),
                "current": str(current),
                "expired": current.is_after(expires),
            },
        )

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    @traced
    def format_value(self, value: str | Temporal, pattern: str) -> ServiceResult:
        """Render a value (or ISO text) with *pattern*."""
        op = "format"
        try:
            formatter = DateTimeFormatter.of_pattern(pattern)
            source = parse_flexible(value) if isinstance(value, str) else value
            text = formatter.format(source)
        except DateKitError as exc:
            return self._fail(op, exc, pattern=pattern)
        return ServiceResult(
            ok=True,
            op=op,
            data={"value": str(source), "pattern": pattern, "text": text},
        )

    @traced
    def parse_text(self, text: str, pattern: str) -> ServiceResult:
        """Strictly parse *text* with *pattern*."""
        op = "parse"
        try:
            value = parse(text, pattern, self._settings.zone.disambiguation)
        except DateKitError as exc:
            return self._fail(op, exc, pattern=pattern)
        return ServiceResult(
            ok=True,
            op=op,
            data={"text": text, "pattern": pattern, "type": type(value).__name__, "value": str(value)},
        )

    # ------------------------------------------------------------------
    # Zones & offsets
    # ------------------------------------------------------------------

    @traced
    def convert_zone(
        self,
        date_time: str | LocalDateTime,
        zone_id: str,
        target_zone: str | None = None,
    ) -> ServiceResult:
        """Attach *zone_id* to a local date-time, optionally viewing it in *target_zone*."""
        op = "convert_zone"
        warnings: list[str] = []
        disambiguation = self._settings.zone.disambiguation
        try:
            local = self._date_time(date_time)
            with trace_span("resolve_zone") as span:
                zoned = ZonedTimestamp.of(local, zone_id, disambiguation)
                if span is not None:
                    span.annotate("offset", zoned.offset.id)
            data: dict[str, Any] = {
                "local": str(local),
                "zoned": str(zoned),
                "offset": zoned.offset.id,
                "instant": str(zoned.to_instant()),
            }
            if target_zone:
                data["converted"] = str(zoned.with_zone_same_instant(target_zone))
        except DateKitError as exc:
            return self._fail(op, exc, zone=zone_id, disambiguation=str(disambiguation))
        if zoned.date_time != local:
            warnings.append(
                f"{local} does not exist in {zone_id} (daylight-saving gap); "
                f"resolved to {zoned.date_time}"
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @traced
    def attach_offset(self, date_time: str | LocalDateTime, offset: str) -> ServiceResult:
        """Attach a fixed UTC offset to a local date-time."""
        op = "attach_offset"
        try:
            local = self._date_time(date_time)
            stamped = OffsetTimestamp.of(local, offset)
        except DateKitError as exc:
            return self._fail(op, exc, offset=offset)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "local": str(local),
                "timestamp": str(stamped),
                "offset": stamped.offset.id,
                "instant": str(stamped.to_instant()),
            },
        )
