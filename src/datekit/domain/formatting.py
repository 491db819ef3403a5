"""Pattern-based formatting and strict parsing.

Pattern letters (repeat a letter to set its width)::

    yyyy uuuu  4-digit year        yy  2-digit year (2000-2099)
    M MM       month number        MMM MMMM  month name (Jan, January)
    d dd       day of month        E EEE / EEEE  weekday (Mon / Monday)
    H HH       hour 0-23           h hh  hour 1-12 (needs ``a``)
    m mm       minute              s ss  second
    S...       fraction, 1-9 digits
    a          AM/PM marker
    X XX XXX   offset (+05, +0530, +05:30; Z for zero)
    VV         zone id (America/New_York)

Text inside single quotes is literal (``''`` is a quote); any other
non-letter is literal as-is. Unknown letters raise
:class:`InvalidPatternError`.

Parsing is strict: fixed-width numbers, exact literals, and the whole
input must match. Anything else raises :class:`FormatMismatchError`;
there are no partial results.
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from typing import Any

from datekit.domain.errors import (
    FormatMismatchError,
    InvalidDateComponentError,
    InvalidPatternError,
    UnsupportedFieldError,
)
from datekit.domain.types import DayOfWeek, Disambiguation, Month
from datekit.domain.values import CalendarDate, ClockTime, LocalDateTime, MonthDay, YearMonth
from datekit.domain.zones import UTC, Instant, OffsetTimestamp, ZonedTimestamp, ZoneOffset

logger = logging.getLogger(__name__)

Temporal = (
    CalendarDate
    | ClockTime
    | LocalDateTime
    | OffsetTimestamp
    | ZonedTimestamp
    | YearMonth
    | MonthDay
    | Instant
)

_MONTH_FULL = tuple(m.display_name for m in Month)
_MONTH_ABBR = tuple(name[:3] for name in _MONTH_FULL)
_DAY_FULL = tuple(d.display_name for d in DayOfWeek)
_DAY_ABBR = tuple(name[:3] for name in _DAY_FULL)

# letter -> allowed widths
_WIDTHS: dict[str, tuple[int, ...]] = {
    "y": (2, 4),
    "u": (2, 4),
    "M": (1, 2, 3, 4),
    "d": (1, 2),
    "H": (1, 2),
    "h": (1, 2),
    "m": (1, 2),
    "s": (1, 2),
    "S": tuple(range(1, 10)),
    "a": (1,),
    "E": (1, 2, 3, 4),
    "X": (1, 2, 3),
    "V": (2,),
}


@dataclass(frozen=True)
class _Token:
    letter: str  # "" for a literal
    width: int = 0
    text: str = ""


# ---------------------------------------------------------------------------
# Pattern compilation
# ---------------------------------------------------------------------------


def _tokenize(pattern: str) -> tuple[_Token, ...]:
    tokens: list[_Token] = []
    literal: list[str] = []
    i = 0

    def flush() -> None:
        if literal:
            tokens.append(_Token("", text="".join(literal)))
            literal.clear()

    while i < len(pattern):
        c = pattern[i]
        if c == "'":
            end = i + 1
            chunk: list[str] = []
            while True:
                if end >= len(pattern):
                    msg = f"Unterminated quote in pattern {pattern!r}"
                    raise InvalidPatternError(msg)
                if pattern[end] == "'":
                    if end + 1 < len(pattern) and pattern[end + 1] == "'":
                        chunk.append("'")
                        end += 2
                        continue
                    break
                chunk.append(pattern[end])
                end += 1
            # '' on its own is an escaped quote
            literal.append("".join(chunk) if end > i + 1 else "'")
            i = end + 1
            continue
        if c.isascii() and c.isalpha():
            width = 1
            while i + width < len(pattern) and pattern[i + width] == c:
                width += 1
            allowed = _WIDTHS.get(c)
            if allowed is None:
                msg = f"Unknown pattern letter {c!r} in {pattern!r}"
                raise InvalidPatternError(msg)
            if width not in allowed:
                msg = f"Invalid width {width} for pattern letter {c!r} in {pattern!r}"
                raise InvalidPatternError(msg)
            flush()
            tokens.append(_Token("y" if c == "u" else c, width))
            i += width
            continue
        literal.append(c)
        i += 1
    flush()
    return tuple(tokens)


def _alternation(names: tuple[str, ...]) -> str:
    return "(" + "|".join(names) + ")"


def _token_regex(token: _Token) -> str:
    letter, width = token.letter, token.width
    if not letter:
        return re.escape(token.text)
    if letter == "y":
        return rf"(\d{{{width}}})"
    if letter == "M" and width >= 3:
        return _alternation(_MONTH_FULL if width == 4 else _MONTH_ABBR)
    if letter in "MdHhms":
        return r"(\d{1,2})" if width == 1 else r"(\d{2})"
    if letter == "S":
        return rf"(\d{{{width}}})"
    if letter == "a":
        return "(AM|PM)"
    if letter == "E":
        return _alternation(_DAY_FULL if width == 4 else _DAY_ABBR)
    if letter == "X":
        body = {1: r"[+-]\d{2}(?:\d{2})?", 2: r"[+-]\d{4}", 3: r"[+-]\d{2}:\d{2}"}[width]
        return f"(Z|{body})"
    # VV
    return r"([A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*)"


# ---------------------------------------------------------------------------
# Field extraction (formatting side)
# ---------------------------------------------------------------------------


def _fields_of(value: Temporal) -> dict[str, Any]:
    """Break a value into the named fields the formatter can print."""
    fields: dict[str, Any] = {}
    if isinstance(value, Instant):
        value = value.at_offset(UTC)
    if isinstance(value, ZonedTimestamp):
        fields["zone"] = value.zone_id
    if isinstance(value, ZonedTimestamp | OffsetTimestamp):
        fields["offset"] = value.offset
        value = value.date_time
    date: CalendarDate | None = None
    time: ClockTime | None = None
    if isinstance(value, LocalDateTime):
        date, time = value.date, value.time
    elif isinstance(value, CalendarDate):
        date = value
    elif isinstance(value, ClockTime):
        time = value
    elif isinstance(value, YearMonth):
        fields.update(year=value.year, month=value.month)
    elif isinstance(value, MonthDay):
        fields.update(month=value.month, day=value.day)
    else:
        msg = f"Cannot format {type(value).__name__}"
        raise UnsupportedFieldError(msg)
    if date is not None:
        fields.update(year=date.year, month=date.month, day=date.day, weekday=date.day_of_week)
    if time is not None:
        fields.update(
            hour=time.hour,
            minute=time.minute,
            second=time.second,
            nanosecond=time.nanosecond,
        )
    return fields


_LETTER_FIELD = {
    "y": "year",
    "M": "month",
    "d": "day",
    "E": "weekday",
    "H": "hour",
    "h": "hour",
    "a": "hour",
    "m": "minute",
    "s": "second",
    "S": "nanosecond",
    "X": "offset",
    "V": "zone",
}


def _format_offset(offset: ZoneOffset, width: int) -> str:
    if offset.total_seconds == 0:
        return "Z"
    sign = "-" if offset.total_seconds < 0 else "+"
    hours, rem = divmod(abs(offset.total_seconds), 3600)
    minutes = rem // 60
    if width == 1:
        return f"{sign}{hours:02d}" + (f"{minutes:02d}" if minutes else "")
    if width == 2:
        return f"{sign}{hours:02d}{minutes:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"


def _format_token(token: _Token, fields: dict[str, Any], value: Temporal) -> str:
    letter, width = token.letter, token.width
    if not letter:
        return token.text
    name = _LETTER_FIELD[letter]
    if name not in fields:
        msg = f"Field {name!r} is not available on {type(value).__name__}"
        raise UnsupportedFieldError(msg)
    field = fields[name]
    if letter == "y":
        return f"{field % 100:02d}" if width == 2 else f"{field:04d}"
    if letter == "M" and width >= 3:
        names = _MONTH_FULL if width == 4 else _MONTH_ABBR
        return names[field - 1]
    if letter == "E":
        names = _DAY_FULL if width == 4 else _DAY_ABBR
        return names[field - 1]
    if letter == "h":
        field = field % 12 or 12
    if letter == "a":
        return "AM" if field < 12 else "PM"
    if letter == "S":
        return f"{field:09d}"[:width]
    if letter == "X":
        return _format_offset(field, width)
    if letter == "V":
        return str(field)
    return f"{field:0{width}d}"


# ---------------------------------------------------------------------------
# Field resolution (parsing side)
# ---------------------------------------------------------------------------


class _Parsed:
    """Raw fields collected from one parse, checked for duplicates."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.fields: dict[str, Any] = {}

    def fail(self, reason: str) -> FormatMismatchError:
        return FormatMismatchError(f"Text {self.text!r} could not be parsed: {reason}")

    def store(self, name: str, value: Any) -> None:
        if name in self.fields and self.fields[name] != value:
            raise self.fail(f"conflicting values for {name}: {self.fields[name]!r} and {value!r}")
        self.fields[name] = value

    def absorb(self, token: _Token, raw: str) -> None:
        letter, width = token.letter, token.width
        if letter == "y":
            self.store("year", 2000 + int(raw) if width == 2 else int(raw))
        elif letter == "M":
            if width == 4:
                self.store("month", _MONTH_FULL.index(raw) + 1)
            elif width == 3:
                self.store("month", _MONTH_ABBR.index(raw) + 1)
            else:
                self.store("month", int(raw))
        elif letter == "d":
            self.store("day", int(raw))
        elif letter == "E":
            names = _DAY_FULL if width == 4 else _DAY_ABBR
            self.store("weekday", DayOfWeek(names.index(raw) + 1))
        elif letter == "H":
            self.store("hour", int(raw))
        elif letter == "h":
            self.store("clock_hour", int(raw))
        elif letter == "a":
            self.store("pm", raw == "PM")
        elif letter == "m":
            self.store("minute", int(raw))
        elif letter == "s":
            self.store("second", int(raw))
        elif letter == "S":
            self.store("nanosecond", int(raw.ljust(9, "0")))
        elif letter == "X":
            self.store("offset", UTC if raw == "Z" else ZoneOffset.of(raw))
        elif letter == "V":
            self.store("zone", raw)

    def resolve_hour(self) -> int | None:
        fields = self.fields
        hour = fields.get("hour")
        pm = fields.get("pm")
        if "clock_hour" in fields:
            clock_hour = fields["clock_hour"]
            if pm is None:
                raise self.fail("12-hour field 'h' needs an AM/PM marker 'a'")
            if not 1 <= clock_hour <= 12:
                raise self.fail(f"invalid clock hour {clock_hour} (valid range 1-12)")
            from_clock = clock_hour % 12 + (12 if pm else 0)
            if hour is not None and hour != from_clock:
                raise self.fail(f"hour {hour} conflicts with {clock_hour} {'PM' if pm else 'AM'}")
            return from_clock
        if hour is not None and pm is not None and (hour >= 12) != pm:
            raise self.fail(f"hour {hour} conflicts with AM/PM marker {'PM' if pm else 'AM'}")
        return hour

    def build_date(self) -> CalendarDate | None:
        fields = self.fields
        if not {"year", "month", "day"} <= fields.keys():
            return None
        date = CalendarDate.of(fields["year"], fields["month"], fields["day"])
        weekday = fields.get("weekday")
        if weekday is not None and weekday != date.day_of_week:
            raise self.fail(f"{date} is a {date.day_of_week.display_name}, not a {weekday.display_name}")
        return date

    def build_time(self) -> ClockTime | None:
        hour = self.resolve_hour()
        if hour is None:
            return None
        fields = self.fields
        return ClockTime.of(
            hour,
            fields.get("minute", 0),
            fields.get("second", 0),
            fields.get("nanosecond", 0),
        )


# ---------------------------------------------------------------------------
# DateTimeFormatter
# ---------------------------------------------------------------------------


class DateTimeFormatter:
    """A compiled, stateless pattern; safe to share between threads.

    Use :meth:`of_pattern` to get a cached instance.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._tokens = _tokenize(pattern)
        # ASCII digits only.
        self._regex = re.compile("".join(_token_regex(t) for t in self._tokens), re.ASCII)
        self._fields = [t for t in self._tokens if t.letter]

    @classmethod
    def of_pattern(cls, pattern: str) -> DateTimeFormatter:
        return _compile(pattern)

    def __repr__(self) -> str:
        return f"DateTimeFormatter({self.pattern!r})"

    def format(self, value: Temporal) -> str:
        fields = _fields_of(value)
        return "".join(_format_token(token, fields, value) for token in self._tokens)

    def _match(self, text: str) -> _Parsed:
        match = self._regex.fullmatch(text)
        parsed = _Parsed(text)
        if match is None:
            raise parsed.fail(f"does not match pattern {self.pattern!r}")
        try:
            for token, raw in zip(self._fields, match.groups(), strict=True):
                parsed.absorb(token, raw)
        except InvalidDateComponentError as exc:
            raise parsed.fail(str(exc)) from exc
        return parsed

    def parse(
        self,
        text: str,
        disambiguation: Disambiguation | None = None,
    ) -> Temporal:
        """Parse *text* into the richest value the pattern determines.

        zone id → ZonedTimestamp; offset → OffsetTimestamp; date and time →
        LocalDateTime; date → CalendarDate; time → ClockTime; year and
        month → YearMonth; month and day → MonthDay.
        """
        parsed = self._match(text)
        try:
            return self._resolve(parsed, disambiguation)
        except InvalidDateComponentError as exc:
            raise parsed.fail(str(exc)) from exc

    def _resolve(self, parsed: _Parsed, disambiguation: Disambiguation | None) -> Temporal:
        fields = parsed.fields
        date = parsed.build_date()
        time = parsed.build_time()
        zone = fields.get("zone")
        offset = fields.get("offset")

        if zone is not None or offset is not None:
            if date is None or time is None:
                raise parsed.fail("an offset or zone needs both a date and a time")
            local = LocalDateTime(date=date, time=time)
            if offset is None:
                return ZonedTimestamp.of(local, zone, disambiguation)
            stamped = OffsetTimestamp.of(local, offset)
            if zone is None:
                return stamped
            zoned = stamped.at_zone_same_instant(zone)
            if zoned.date_time != local:
                raise parsed.fail(f"offset {offset} is not valid for {local} in {zone}")
            return zoned
        if date is not None and time is not None:
            return LocalDateTime(date=date, time=time)
        if date is not None:
            return date
        if time is not None:
            return time
        if {"year", "month"} <= fields.keys() and "day" not in fields:
            return YearMonth.of(fields["year"], fields["month"])
        if {"month", "day"} <= fields.keys() and "year" not in fields:
            return MonthDay.of(fields["month"], fields["day"])
        raise parsed.fail(f"pattern {self.pattern!r} does not determine a date or time")

    def _parse_as(self, text: str, kind: type[Any], label: str) -> Any:
        value = self.parse(text)
        if isinstance(value, kind):
            return value
        if isinstance(value, ZonedTimestamp | OffsetTimestamp):
            value = value.date_time
        if kind is CalendarDate and isinstance(value, LocalDateTime):
            return value.date
        if kind is ClockTime and isinstance(value, LocalDateTime):
            return value.time
        if isinstance(value, kind):
            return value
        msg = f"Text {text!r} could not be parsed as a {label} with pattern {self.pattern!r}"
        raise FormatMismatchError(msg)

    def parse_date(self, text: str) -> CalendarDate:
        return self._parse_as(text, CalendarDate, "date")

    def parse_time(self, text: str) -> ClockTime:
        return self._parse_as(text, ClockTime, "time")

    def parse_date_time(self, text: str) -> LocalDateTime:
        return self._parse_as(text, LocalDateTime, "date-time")

    def parse_year_month(self, text: str) -> YearMonth:
        return self._parse_as(text, YearMonth, "year-month")


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> DateTimeFormatter:
    logger.debug("Compiling pattern %r", pattern)
    return DateTimeFormatter(pattern)


def _formatter(pattern: str | DateTimeFormatter) -> DateTimeFormatter:
    if isinstance(pattern, DateTimeFormatter):
        return pattern
    return _compile(pattern)


def format(value: Temporal, pattern: str | DateTimeFormatter) -> str:  # noqa: A001
    """Render *value* with *pattern*."""
    return _formatter(pattern).format(value)


def parse(
    text: str,
    pattern: str | DateTimeFormatter,
    disambiguation: Disambiguation | None = None,
) -> Temporal:
    """Parse *text* strictly with *pattern*; see :meth:`DateTimeFormatter.parse`."""
    return _formatter(pattern).parse(text, disambiguation)


# --- Pre-defined formatters ---

BASIC_ISO_DATE = DateTimeFormatter.of_pattern("yyyyMMdd")
ISO_LOCAL_DATE = DateTimeFormatter.of_pattern("yyyy-MM-dd")
ISO_LOCAL_TIME = DateTimeFormatter.of_pattern("HH:mm:ss")
ISO_LOCAL_DATE_TIME = DateTimeFormatter.of_pattern("yyyy-MM-dd'T'HH:mm:ss")
ISO_OFFSET_DATE_TIME = DateTimeFormatter.of_pattern("yyyy-MM-dd'T'HH:mm:ssXXX")
ISO_ZONED_DATE_TIME = DateTimeFormatter.of_pattern("yyyy-MM-dd'T'HH:mm:ssXXX'['VV']'")

PREDEFINED: dict[str, DateTimeFormatter] = {
    "BASIC_ISO_DATE": BASIC_ISO_DATE,
    "ISO_LOCAL_DATE": ISO_LOCAL_DATE,
    "ISO_LOCAL_TIME": ISO_LOCAL_TIME,
    "ISO_LOCAL_DATE_TIME": ISO_LOCAL_DATE_TIME,
    "ISO_OFFSET_DATE_TIME": ISO_OFFSET_DATE_TIME,
    "ISO_ZONED_DATE_TIME": ISO_ZONED_DATE_TIME,
}
