"""Tests for offsets, instants and zone-aware timestamps."""

import pytest

from datekit.domain.errors import InvalidDateComponentError, UnsupportedFieldError, ZoneResolutionError
from datekit.domain.types import Disambiguation, TemporalUnit
from datekit.domain.values import LocalDateTime
from datekit.domain.zones import (
    UTC,
    Instant,
    OffsetTimestamp,
    ZonedTimestamp,
    ZoneOffset,
    get_zone,
    resolve_local,
    system_zone_id,
)

NEW_YORK = "America/New_York"


class TestZoneOffset:
    @pytest.mark.parametrize(
        "offset_id,seconds,normalized",
        [
            ("+05:30", 19_800, "+05:30"),
            ("-0800", -28_800, "-08:00"),
            ("+5", 18_000, "+05:00"),
            ("+00:00", 0, "Z"),
            ("-03:30:15", -12_615, "-03:30:15"),
        ],
    )
    def test_of(self, offset_id: str, seconds: int, normalized: str) -> None:
        offset = ZoneOffset.of(offset_id)
        assert offset.total_seconds == seconds
        assert offset.id == normalized

    def test_z_is_utc(self) -> None:
        assert ZoneOffset.of("Z") is UTC

    def test_bad_syntax(self) -> None:
        with pytest.raises(ZoneResolutionError):
            ZoneOffset.of("05:30")

    def test_out_of_range(self) -> None:
        with pytest.raises(InvalidDateComponentError):
            ZoneOffset.of("+19:00")
        with pytest.raises(InvalidDateComponentError):
            ZoneOffset.of("+05:60")

    def test_larger_offset_sorts_first(self) -> None:
        assert ZoneOffset.of("+05:00") < ZoneOffset.of("-05:00")


class TestGetZone:
    def test_named_zone(self) -> None:
        assert get_zone(NEW_YORK) is not None

    def test_offset_id(self) -> None:
        tz = get_zone("+05:30")
        assert tz.utcoffset(None).total_seconds() == 19_800  # type: ignore[union-attr]

    @pytest.mark.parametrize("zone_id", ["Mars/Olympus_Mons", "", "../etc/passwd", "+25:00", "-19:00"])
    def test_unknown(self, zone_id: str) -> None:
        with pytest.raises(ZoneResolutionError):
            get_zone(zone_id)

    def test_system_zone_from_tz_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TZ", "Asia/Kolkata")
        assert system_zone_id() == "Asia/Kolkata"

    def test_system_zone_ignores_bad_tz(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TZ", "Not/AZone")
        zone_id = system_zone_id()
        assert zone_id != "Not/AZone"
        get_zone(zone_id)


class TestDaylightSaving:
    def test_gap_shifts_forward(self) -> None:
        zoned = LocalDateTime.of(2024, 3, 10, 2, 30).at_zone(NEW_YORK)
        assert zoned.date_time == LocalDateTime.of(2024, 3, 10, 3, 30)
        assert zoned.offset.id == "-04:00"
        assert str(zoned) == "2024-03-10T03:30-04:00[America/New_York]"

    def test_gap_later_also_shifts(self) -> None:
        local, offset = resolve_local(LocalDateTime.of(2024, 3, 10, 2, 30), NEW_YORK, Disambiguation.LATER)
        assert local == LocalDateTime.of(2024, 3, 10, 3, 30)
        assert offset.id == "-04:00"

    def test_gap_raise(self) -> None:
        with pytest.raises(ZoneResolutionError):
            ZonedTimestamp.of(LocalDateTime.of(2024, 3, 10, 2, 30), NEW_YORK, Disambiguation.RAISE)

    def test_overlap(self) -> None:
        local = LocalDateTime.of(2024, 11, 3, 1, 30)
        earlier = ZonedTimestamp.of(local, NEW_YORK, Disambiguation.EARLIER)
        later = ZonedTimestamp.of(local, NEW_YORK, Disambiguation.LATER)
        assert earlier.offset.id == "-04:00"
        assert later.offset.id == "-05:00"
        assert earlier.date_time == later.date_time == local
        assert TemporalUnit.HOURS.between(earlier.to_instant(), later.to_instant()) == 1
        assert later.to_datetime().fold == 1
        assert earlier.to_datetime().fold == 0

    def test_overlap_raise(self) -> None:
        with pytest.raises(ZoneResolutionError):
            LocalDateTime.of(2024, 11, 3, 1, 30).at_zone(NEW_YORK, Disambiguation.RAISE)

    def test_plus_days_keeps_local_time(self) -> None:
        noon = LocalDateTime.of(2024, 3, 9, 12, 0).at_zone(NEW_YORK)
        assert str(noon.plus_days(1)) == "2024-03-10T12:00-04:00[America/New_York]"
        assert str(noon.plus_hours(24)) == "2024-03-10T13:00-04:00[America/New_York]"

    def test_date_arithmetic_keeps_overlap_offset(self) -> None:
        local = LocalDateTime.of(2024, 11, 3, 1, 30)
        later = local.at_zone(NEW_YORK, Disambiguation.LATER)
        assert later.plus_days(0) == later
        assert later.plus_days(0).to_instant() == later.to_instant()
        earlier = local.at_zone(NEW_YORK)
        assert earlier.plus_months(0).offset.id == "-04:00"

    def test_date_arithmetic_into_overlap_keeps_offset(self) -> None:
        day_before = LocalDateTime.of(2024, 11, 2, 1, 30).at_zone(NEW_YORK)
        moved = day_before.plus_days(1, Disambiguation.LATER)
        assert str(moved) == "2024-11-03T01:30-04:00[America/New_York]"

    def test_date_arithmetic_into_gap(self) -> None:
        day_before = LocalDateTime.of(2024, 3, 9, 2, 30).at_zone(NEW_YORK)
        assert str(day_before.plus_days(1)) == "2024-03-10T03:30-04:00[America/New_York]"
        with pytest.raises(ZoneResolutionError):
            day_before.plus_days(1, Disambiguation.RAISE)

    def test_preferred_offset_in_overlap(self) -> None:
        local = LocalDateTime.of(2024, 11, 3, 1, 30)
        _, offset = resolve_local(local, NEW_YORK, Disambiguation.RAISE, preferred=ZoneOffset.of("-05:00"))
        assert offset.id == "-05:00"
        _, offset = resolve_local(local, NEW_YORK, preferred=ZoneOffset.of("+01:00"))
        assert offset.id == "-04:00"


class TestInstant:
    def test_epoch_factories(self) -> None:
        assert Instant.of_epoch_milli(1_500) == Instant(epoch_second=1, nano=500_000_000)
        assert Instant.of_epoch_nano(-1) == Instant(epoch_second=-1, nano=999_999_999)
        assert Instant.of_epoch_second(10, -1).to_epoch_nano() == 9_999_999_999

    def test_str(self) -> None:
        assert str(Instant.of_epoch_second(0)) == "1970-01-01T00:00:00Z"
        assert str(Instant.of_epoch_milli(1_500)) == "1970-01-01T00:00:01.500Z"

    def test_arithmetic(self) -> None:
        start = Instant.of_epoch_second(0)
        assert start.plus(2, TemporalUnit.DAYS).epoch_second == 172_800
        assert start.plus_millis(1).to_epoch_milli() == 1
        assert start.until(start.plus_seconds(3_599), TemporalUnit.HOURS) == 0
        with pytest.raises(UnsupportedFieldError):
            start.plus(1, TemporalUnit.MONTHS)

    def test_to_datetime(self) -> None:
        aware = Instant.of_epoch_second(86_400).to_datetime()
        assert (aware.year, aware.month, aware.day) == (1970, 1, 2)
        assert aware.utcoffset().total_seconds() == 0  # type: ignore[union-attr]


class TestOffsetTimestamp:
    def test_attach_offset(self) -> None:
        stamped = OffsetTimestamp.of(LocalDateTime.of(2018, 1, 14, 19, 30), "+05:30")
        assert str(stamped) == "2018-01-14T19:30+05:30"
        assert str(stamped.to_instant()) == "2018-01-14T14:00:00Z"

    def test_with_offset_same_instant(self) -> None:
        stamped = LocalDateTime.of(2018, 1, 14, 19, 30).at_offset("+05:30")
        moved = stamped.with_offset_same_instant("-05:00")
        assert str(moved) == "2018-01-14T09:00-05:00"
        assert moved.to_instant() == stamped.to_instant()


class TestZonedTimestamp:
    def test_of_instant(self) -> None:
        zoned = ZonedTimestamp.of_instant(Instant.of_epoch_second(0), "Asia/Tokyo")
        assert str(zoned) == "1970-01-01T09:00+09:00[Asia/Tokyo]"

    def test_with_zone_same_instant(self) -> None:
        london = LocalDateTime.of(2024, 7, 1, 9, 0).at_zone("Europe/London")
        tokyo = london.with_zone_same_instant("Asia/Tokyo")
        assert str(tokyo) == "2024-07-01T17:00+09:00[Asia/Tokyo]"
        assert tokyo.is_equal(london)
        assert tokyo != london

    def test_with_zone_same_local(self) -> None:
        london = LocalDateTime.of(2024, 7, 1, 9, 0).at_zone("Europe/London")
        paris = london.with_zone_same_local("Europe/Paris")
        assert paris.date_time == london.date_time
        assert paris.to_instant().is_before(london.to_instant())

    def test_utc_zone_string(self) -> None:
        assert str(LocalDateTime.of(2024, 1, 1).at_zone("UTC")) == "2024-01-01T00:00Z[UTC]"

    def test_offset_zone_has_no_brackets(self) -> None:
        assert str(LocalDateTime.of(2024, 1, 1).at_zone("+05:30")) == "2024-01-01T00:00+05:30"

    def test_unknown_zone(self) -> None:
        with pytest.raises(ZoneResolutionError):
            LocalDateTime.of(2024, 1, 1).at_zone("Nowhere/Special")

    def test_to_offset_timestamp(self) -> None:
        zoned = LocalDateTime.of(2024, 1, 15, 8, 0).at_zone(NEW_YORK)
        assert str(zoned.to_offset_timestamp()) == "2024-01-15T08:00-05:00"
