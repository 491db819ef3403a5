"""Tests for pattern formatting and strict parsing."""

import pytest

from datekit.domain.errors import (
    FormatMismatchError,
    InvalidPatternError,
    UnsupportedFieldError,
    ZoneResolutionError,
)
from datekit.domain.formatting import (
    BASIC_ISO_DATE,
    ISO_LOCAL_DATE_TIME,
    ISO_ZONED_DATE_TIME,
    PREDEFINED,
    DateTimeFormatter,
    format,
    parse,
)
from datekit.domain.types import Disambiguation
from datekit.domain.values import CalendarDate, ClockTime, LocalDateTime, MonthDay, YearMonth
from datekit.domain.zones import Instant, OffsetTimestamp, ZonedTimestamp

OLYMPICS = LocalDateTime.of(2008, 8, 8, 20, 8, 8)


class TestFormat:
    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("yyyy-MM-dd", "2008-08-08"),
            ("yyyyMMdd", "20080808"),
            ("yy/M/d", "08/8/8"),
            ("MMM d, yyyy", "Aug 8, 2008"),
            ("MMMM d, yyyy", "August 8, 2008"),
            ("EEE", "Fri"),
            ("EEEE", "Friday"),
            ("HH:mm:ss", "20:08:08"),
            ("h:mm a", "8:08 PM"),
            ("hh 'o''clock' a", "08 o'clock PM"),
            ("yyyy-MM-dd'T'HH:mm", "2008-08-08T20:08"),
        ],
    )
    def test_local_date_time(self, pattern: str, expected: str) -> None:
        assert format(OLYMPICS, pattern) == expected

    def test_basic_iso_date(self) -> None:
        assert BASIC_ISO_DATE.format(CalendarDate.of(2014, 1, 16)) == "20140116"

    def test_midnight_and_noon_clock_hours(self) -> None:
        assert format(ClockTime.of(0, 5), "h:mm a") == "12:05 AM"
        assert format(ClockTime.of(12, 5), "h:mm a") == "12:05 PM"

    def test_fraction(self) -> None:
        value = ClockTime.of(10, 15, 30, 123_456_789)
        assert format(value, "HH:mm:ss.SSS") == "10:15:30.123"
        assert format(value, "ss.SSSSSSSSS") == "30.123456789"

    @pytest.mark.parametrize("width,expected", [(1, "+0530"), (2, "+0530"), (3, "+05:30")])
    def test_offset_widths(self, width: int, expected: str) -> None:
        stamped = OffsetTimestamp.of(LocalDateTime.of(2018, 1, 14, 19, 30), "+05:30")
        assert format(stamped, "X" * width) == expected

    def test_whole_hour_offset_short_form(self) -> None:
        stamped = OffsetTimestamp.of(LocalDateTime.of(2018, 1, 14, 19, 30), "-05:00")
        assert format(stamped, "X") == "-05"

    def test_zoned(self) -> None:
        zoned = LocalDateTime.of(2024, 3, 10, 2, 30).at_zone("America/New_York")
        assert ISO_ZONED_DATE_TIME.format(zoned) == "2024-03-10T03:30:00-04:00[America/New_York]"

    def test_instant_formats_as_utc(self) -> None:
        assert format(Instant.of_epoch_second(0), "yyyy-MM-dd HH:mm:ss X") == "1970-01-01 00:00:00 Z"

    def test_partial_values(self) -> None:
        assert format(YearMonth.of(2020, 5), "MM/yy") == "05/20"
        assert format(MonthDay.of(2, 29), "MMMM d") == "February 29"

    def test_missing_field(self) -> None:
        with pytest.raises(UnsupportedFieldError):
            format(CalendarDate.of(2024, 1, 1), "HH:mm")
        with pytest.raises(UnsupportedFieldError):
            format(OLYMPICS, "yyyy-MM-dd XXX")


class TestPatternErrors:
    @pytest.mark.parametrize("pattern", ["yyyy-QQ", "yyy", "MMMMM", "'unterminated", "HHH", "V"])
    def test_invalid_pattern(self, pattern: str) -> None:
        with pytest.raises(InvalidPatternError):
            DateTimeFormatter.of_pattern(pattern)

    def test_compiled_patterns_are_cached(self) -> None:
        assert DateTimeFormatter.of_pattern("dd.MM.yyyy") is DateTimeFormatter.of_pattern("dd.MM.yyyy")


class TestParse:
    def test_basic_iso_date(self) -> None:
        assert parse("20140116", "yyyyMMdd") == CalendarDate.of(2014, 1, 16)
        assert BASIC_ISO_DATE.parse_date("20140116") == CalendarDate.of(2014, 1, 16)

    def test_twelve_hour_clock(self) -> None:
        assert parse("2008-08-08 08:00:00 PM", "yyyy-MM-dd hh:mm:ss a") == LocalDateTime.of(2008, 8, 8, 20)
        assert parse("2008-08-08 12:00:00 AM", "yyyy-MM-dd hh:mm:ss a") == LocalDateTime.of(2008, 8, 8, 0)

    def test_hour_conflicts_with_marker(self) -> None:
        with pytest.raises(FormatMismatchError):
            parse("2008-08-08 00:00:00 PM", "yyyy-MM-dd HH:mm:ss a")

    def test_clock_hour_needs_marker(self) -> None:
        with pytest.raises(FormatMismatchError):
            parse("08:00", "hh:mm")

    def test_names(self) -> None:
        assert parse("Thu, 16 January 2014", "EEE, d MMMM yyyy") == CalendarDate.of(2014, 1, 16)

    def test_weekday_mismatch(self) -> None:
        with pytest.raises(FormatMismatchError):
            parse("Fri 2014-01-16", "EEE yyyy-MM-dd")

    @pytest.mark.parametrize(
        "text,pattern",
        [
            ("２０１４０１１６", "yyyyMMdd"),
            ("٢٠١٤-٠١-١٦", "yyyy-MM-dd"),
            ("2014-01-16T10:00+０５:30", "yyyy-MM-dd'T'HH:mmXXX"),
        ],
    )
    def test_non_ascii_digits_rejected(self, text: str, pattern: str) -> None:
        with pytest.raises(FormatMismatchError):
            parse(text, pattern)

    @pytest.mark.parametrize(
        "text,pattern",
        [
            ("2014-01", "yyyy-MM-dd"),
            ("2014-01-16 ", "yyyy-MM-dd"),
            ("2014/01/16", "yyyy-MM-dd"),
            ("2014-1-16", "yyyy-MM-dd"),
            ("2014-02-30", "yyyy-MM-dd"),
            ("25:00", "HH:mm"),
            ("", "yyyy"),
        ],
    )
    def test_strict_mismatch(self, text: str, pattern: str) -> None:
        with pytest.raises(FormatMismatchError):
            parse(text, pattern)

    def test_year_alone_is_not_a_value(self) -> None:
        with pytest.raises(FormatMismatchError):
            parse("2014", "yyyy")

    def test_two_digit_year(self) -> None:
        assert parse("14-01-16", "yy-MM-dd") == CalendarDate.of(2014, 1, 16)

    def test_fraction(self) -> None:
        assert parse("10:15:30.5", "HH:mm:ss.S") == ClockTime.of(10, 15, 30, 500_000_000)

    def test_result_types(self) -> None:
        assert isinstance(parse("19:30", "HH:mm"), ClockTime)
        assert parse("2020-05", "yyyy-MM") == YearMonth.of(2020, 5)
        assert parse("--02-29", "'--'MM-dd") == MonthDay.of(2, 29)
        assert isinstance(ISO_LOCAL_DATE_TIME.parse("2008-08-08T20:08:08"), LocalDateTime)

    def test_offset(self) -> None:
        stamped = parse("2018-01-14 19:30 +05:30", "yyyy-MM-dd HH:mm XXX")
        assert isinstance(stamped, OffsetTimestamp)
        assert str(stamped) == "2018-01-14T19:30+05:30"
        assert parse("2018-01-14 19:30 Z", "yyyy-MM-dd HH:mm X").offset.total_seconds == 0  # type: ignore[union-attr]

    def test_offset_without_date(self) -> None:
        with pytest.raises(FormatMismatchError):
            parse("19:30+05:30", "HH:mmXXX")

    def test_zoned_round_trip(self) -> None:
        text = "2024-03-10T03:30:00-04:00[America/New_York]"
        zoned = ISO_ZONED_DATE_TIME.parse(text)
        assert isinstance(zoned, ZonedTimestamp)
        assert zoned.zone_id == "America/New_York"
        assert ISO_ZONED_DATE_TIME.format(zoned) == text

    def test_zoned_offset_must_match_zone(self) -> None:
        with pytest.raises(FormatMismatchError):
            ISO_ZONED_DATE_TIME.parse("2024-03-10T03:30:00-05:00[America/New_York]")

    def test_zone_without_offset_resolves_gap(self) -> None:
        pattern = "yyyy-MM-dd HH:mm VV"
        zoned = parse("2024-03-10 02:30 America/New_York", pattern)
        assert str(zoned) == "2024-03-10T03:30-04:00[America/New_York]"
        with pytest.raises(ZoneResolutionError):
            parse("2024-03-10 02:30 America/New_York", pattern, Disambiguation.RAISE)

    def test_unknown_zone(self) -> None:
        with pytest.raises(ZoneResolutionError):
            parse("2024-03-10 02:30 Mars/Base", "yyyy-MM-dd HH:mm VV")

    def test_parse_as_narrower_type(self) -> None:
        formatter = DateTimeFormatter.of_pattern("yyyy-MM-dd HH:mm")
        assert formatter.parse_date("2008-08-08 20:08") == CalendarDate.of(2008, 8, 8)
        assert formatter.parse_time("2008-08-08 20:08") == ClockTime.of(20, 8)
        with pytest.raises(FormatMismatchError):
            DateTimeFormatter.of_pattern("HH:mm").parse_date("20:08")

    @pytest.mark.parametrize("name", sorted(PREDEFINED))
    def test_predefined_round_trip(self, name: str) -> None:
        formatter = PREDEFINED[name]
        zoned = LocalDateTime.of(2018, 1, 14, 19, 30, 15).at_zone("Asia/Kolkata")
        sample = {
            "BASIC_ISO_DATE": zoned.date,
            "ISO_LOCAL_DATE": zoned.date,
            "ISO_LOCAL_TIME": zoned.time,
            "ISO_LOCAL_DATE_TIME": zoned.date_time,
            "ISO_OFFSET_DATE_TIME": zoned.to_offset_timestamp(),
            "ISO_ZONED_DATE_TIME": zoned,
        }[name]
        assert formatter.parse(formatter.format(sample)) == sample

    @pytest.mark.parametrize("pattern", ["yyyy-MM-dd", "yyyyMMdd"])
    @pytest.mark.parametrize(
        "date",
        [
            CalendarDate.of(1, 1, 1),
            CalendarDate.of(999, 12, 31),
            CalendarDate.of(1000, 1, 1),
            CalendarDate.of(2024, 2, 29),
            CalendarDate.of(2023, 12, 31),
            CalendarDate.of(9999, 12, 31),
        ],
        ids=str,
    )
    def test_date_round_trip(self, date: CalendarDate, pattern: str) -> None:
        assert parse(format(date, pattern), pattern) == date

    @pytest.mark.parametrize("pattern", ["yyyy-MM-dd", "yyyyMMdd"])
    def test_every_day_of_leap_year_round_trips(self, pattern: str) -> None:
        start = CalendarDate.of(2024, 1, 1)
        for offset in range(366):
            date = start.plus_days(offset)
            assert parse(format(date, pattern), pattern) == date
