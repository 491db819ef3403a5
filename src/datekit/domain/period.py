"""DateDifference — a calendar amount of years, months and days.

Not a uniform day count: ``between`` extracts whole years, then whole
months from the remainder, then the remaining days. The sign of every
component follows the direction start → end.

    DateDifference.between(CalendarDate.of(2008, 8, 8), CalendarDate.of(2018, 10, 2))
    # P10Y1M24D
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from datekit.domain.errors import FormatMismatchError
from datekit.domain.values import CalendarDate, _trunc_div

_ISO_PERIOD_RE = re.compile(
    r"^([+-]?)P(?:([+-]?\d+)Y)?(?:([+-]?\d+)M)?(?:([+-]?\d+)W)?(?:([+-]?\d+)D)?$",
    re.IGNORECASE | re.ASCII,
)


def _trunc_mod(a: int, b: int) -> int:
    return a - _trunc_div(a, b) * b


class DateDifference(BaseModel):
    """Signed years, months and days between two calendar dates."""

    model_config = {"frozen": True}

    years: int = 0
    months: int = 0
    days: int = 0

    @classmethod
    def of(cls, years: int = 0, months: int = 0, days: int = 0) -> DateDifference:
        return cls(years=years, months=months, days=days)

    @classmethod
    def between(cls, start: CalendarDate, end: CalendarDate) -> DateDifference:
        """Years, then months, then days from *start* to *end*."""
        total_months = (end.year * 12 + end.month) - (start.year * 12 + start.month)
        days = end.day - start.day
        if total_months > 0 and days < 0:
            total_months -= 1
            anchor = start.plus_months(total_months)
            days = end.to_epoch_day() - anchor.to_epoch_day()
        elif total_months < 0 and days > 0:
            total_months += 1
            days -= end.length_of_month()
        return cls(
            years=_trunc_div(total_months, 12),
            months=_trunc_mod(total_months, 12),
            days=days,
        )

    @classmethod
    def parse(cls, text: str) -> DateDifference:
        """Parse an ISO-8601 period such as ``P10Y1M24D`` or ``-P2W``."""
        match = _ISO_PERIOD_RE.match(text)
        if match is None or not any(match.groups()[1:]):
            msg = f"Text {text!r} is not an ISO-8601 period"
            raise FormatMismatchError(msg)
        sign, years, months, weeks, days = match.groups()
        factor = -1 if sign == "-" else 1
        return cls(
            years=factor * int(years or 0),
            months=factor * int(months or 0),
            days=factor * (int(weeks or 0) * 7 + int(days or 0)),
        )

    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    def is_negative(self) -> bool:
        return self.years < 0 or self.months < 0 or self.days < 0

    def to_total_months(self) -> int:
        return self.years * 12 + self.months

    def negated(self) -> DateDifference:
        return DateDifference(years=-self.years, months=-self.months, days=-self.days)

    def normalized(self) -> DateDifference:
        """Fold months into years (``1Y14M`` → ``2Y2M``); days are untouched."""
        total = self.to_total_months()
        return DateDifference(years=_trunc_div(total, 12), months=_trunc_mod(total, 12), days=self.days)

    def plus(self, other: DateDifference) -> DateDifference:
        return DateDifference(
            years=self.years + other.years,
            months=self.months + other.months,
            days=self.days + other.days,
        )

    def add_to(self, date: CalendarDate) -> CalendarDate:
        """Apply months (clamping to month end), then days."""
        return date.plus_months(self.to_total_months()).plus_days(self.days)

    def subtract_from(self, date: CalendarDate) -> CalendarDate:
        return self.negated().add_to(date)

    def __str__(self) -> str:
        if self.is_zero():
            return "P0D"
        text = "P"
        if self.years:
            text += f"{self.years}Y"
        if self.months:
            text += f"{self.months}M"
        if self.days:
            text += f"{self.days}D"
        return text


def between(start: CalendarDate, end: CalendarDate) -> DateDifference:
    return DateDifference.between(start, end)
