"""Instants, UTC offsets, and zone-aware timestamps.

Zone ids resolve through the stdlib :mod:`zoneinfo` (IANA data from the
host or the ``tzdata`` package). Offset ids such as ``+05:30`` resolve to
a fixed offset with no daylight-saving rules.

Resolving a local date-time in a named zone can hit a daylight-saving
transition:

- gap (local time skipped): ``EARLIER``/``LATER`` move the local time
  forward by the length of the gap; ``RAISE`` fails.
- overlap (local time repeated): ``EARLIER`` keeps the earlier offset,
  ``LATER`` the later one; ``RAISE`` fails.
"""

from __future__ import annotations

import datetime as _dt
import logging
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, model_validator

from datekit.domain.errors import (
    InvalidDateComponentError,
    UnsupportedFieldError,
    ZoneResolutionError,
)
from datekit.domain.types import Disambiguation, TemporalUnit
from datekit.domain.values import (
    MAX_YEAR,
    MIN_YEAR,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    CalendarDate,
    ClockTime,
    LocalDateTime,
    _check_range,
    _Ordered,
    _trunc_div,
)

if TYPE_CHECKING:
    from datekit.domain.clock import Clock

logger = logging.getLogger(__name__)

MAX_OFFSET_SECONDS = 18 * 3600

MIN_EPOCH_SECOND = CalendarDate.of(MIN_YEAR, 1, 1).to_epoch_day() * SECONDS_PER_DAY
MAX_EPOCH_SECOND = (CalendarDate.of(MAX_YEAR, 12, 31).to_epoch_day() + 1) * SECONDS_PER_DAY - 1

_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.UTC)

_OFFSET_RE = re.compile(r"^([+-])(\d{1,2})(?::?(\d{2})(?::?(\d{2}))?)?$", re.ASCII)


# ---------------------------------------------------------------------------
# ZoneOffset
# ---------------------------------------------------------------------------


class ZoneOffset(_Ordered, BaseModel):
    """A fixed offset from UTC, e.g. ``+05:30``. ``Z`` is zero."""

    model_config = {"frozen": True}

    total_seconds: int

    @model_validator(mode="after")
    def _check_components(self) -> Self:
        _check_range("offset seconds", self.total_seconds, -MAX_OFFSET_SECONDS, MAX_OFFSET_SECONDS)
        return self

    @classmethod
    def of(cls, offset_id: str) -> ZoneOffset:
        """Parse ``Z``, ``+h``, ``+hh``, ``+hh:mm``, ``+hhmm`` or ``+hh:mm:ss``."""
        if offset_id == "Z":
            return UTC
        match = _OFFSET_RE.match(offset_id)
        if match is None:
            msg = f"Invalid offset id: {offset_id!r}"
            raise ZoneResolutionError(msg)
        sign, hours, minutes, seconds = match.groups()
        _check_range("offset minutes", int(minutes or 0), 0, 59)
        _check_range("offset seconds", int(seconds or 0), 0, 59)
        total = int(hours) * 3600 + int(minutes or 0) * 60 + int(seconds or 0)
        return cls(total_seconds=-total if sign == "-" else total)

    @classmethod
    def of_hours_minutes(cls, hours: int, minutes: int = 0) -> ZoneOffset:
        return cls(total_seconds=hours * 3600 + minutes * 60)

    @classmethod
    def from_timedelta(cls, delta: _dt.timedelta) -> ZoneOffset:
        return cls(total_seconds=int(delta.total_seconds()))

    @property
    def id(self) -> str:
        if self.total_seconds == 0:
            return "Z"
        sign = "-" if self.total_seconds < 0 else "+"
        hours, rem = divmod(abs(self.total_seconds), 3600)
        minutes, seconds = divmod(rem, 60)
        text = f"{sign}{hours:02d}:{minutes:02d}"
        if seconds:
            text += f":{seconds:02d}"
        return text

    def to_timedelta(self) -> _dt.timedelta:
        return _dt.timedelta(seconds=self.total_seconds)

    def to_timezone(self) -> _dt.timezone:
        if self.total_seconds == 0:
            return _dt.UTC
        return _dt.timezone(self.to_timedelta())

    def _sort_key(self) -> tuple[int]:
        # Larger offsets are "earlier" on the instant line.
        return (-self.total_seconds,)

    def __str__(self) -> str:
        return self.id


UTC = ZoneOffset(total_seconds=0)


# ---------------------------------------------------------------------------
# Zone lookup
# ---------------------------------------------------------------------------


def get_zone(zone_id: str) -> _dt.tzinfo:
    """Resolve a zone id to a tzinfo.

    Accepts IANA region ids (``America/New_York``), ``UTC``, and offset ids
    (``Z``, ``+05:30``). Unknown ids raise :class:`ZoneResolutionError`.
    """
    if zone_id == "Z" or zone_id[:1] in ("+", "-"):
        try:
            return ZoneOffset.of(zone_id).to_timezone()
        except InvalidDateComponentError as exc:
            msg = f"Offset id out of range: {zone_id!r}"
            raise ZoneResolutionError(msg) from exc
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        msg = f"Unknown time-zone id: {zone_id!r}"
        raise ZoneResolutionError(msg) from exc


def system_zone_id() -> str:
    """Best-effort id of the host's local zone.

    Order: ``TZ`` env var, the ``/etc/localtime`` symlink target, then the
    host's current fixed offset.
    """
    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env:
        try:
            get_zone(tz_env)
        except ZoneResolutionError:
            logger.debug("Ignoring unresolvable TZ=%s", tz_env)
        else:
            return tz_env

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        parts = localtime.resolve().parts
        if "zoneinfo" in parts:
            idx = len(parts) - 1 - parts[::-1].index("zoneinfo")
            name = "/".join(parts[idx + 1 :])
            try:
                get_zone(name)
            except ZoneResolutionError:
                logger.debug("Ignoring unresolvable /etc/localtime target %s", name)
            else:
                return name

    offset = _dt.datetime.now().astimezone().utcoffset() or _dt.timedelta(0)
    zone_id = ZoneOffset.from_timedelta(offset).id
    logger.debug("No named system zone found, using fixed offset %s", zone_id)
    return zone_id


def resolve_local(
    local: LocalDateTime,
    zone_id: str,
    disambiguation: Disambiguation = Disambiguation.EARLIER,
    preferred: ZoneOffset | None = None,
) -> tuple[LocalDateTime, ZoneOffset]:
    """Find the offset for *local* in *zone_id*, adjusting gap times.

    In an overlap, *preferred* wins when it is one of the two valid
    offsets; *disambiguation* decides otherwise. Returns the (possibly
    shifted) local date-time and its offset.
    """
    tz = get_zone(zone_id)
    naive = local.to_datetime()
    try:
        earlier = naive.replace(tzinfo=tz, fold=0).utcoffset()
        later = naive.replace(tzinfo=tz, fold=1).utcoffset()
    except OverflowError as exc:
        msg = f"{local} is outside the zone rules of {zone_id}"
        raise ZoneResolutionError(msg) from exc
    assert earlier is not None and later is not None

    if earlier == later:
        return local, ZoneOffset.from_timedelta(earlier)

    if earlier < later:
        # Gap: fold=0 carries the pre-transition offset.
        if disambiguation is Disambiguation.RAISE:
            msg = f"{local} does not exist in {zone_id} (daylight-saving gap)"
            raise ZoneResolutionError(msg)
        gap = int((later - earlier).total_seconds())
        shifted = local.plus_seconds(gap)
        logger.debug("Gap in %s: %s shifted to %s", zone_id, local, shifted)
        return shifted, ZoneOffset.from_timedelta(later)

    # Overlap: fold=0 is the earlier instant.
    if preferred is not None and preferred.to_timedelta() in (earlier, later):
        return local, preferred
    if disambiguation is Disambiguation.RAISE:
        msg = f"{local} is ambiguous in {zone_id} (daylight-saving overlap)"
        raise ZoneResolutionError(msg)
    chosen = earlier if disambiguation is Disambiguation.EARLIER else later
    logger.debug("Overlap in %s at %s: chose %s offset", zone_id, local, disambiguation)
    return local, ZoneOffset.from_timedelta(chosen)


def _coerce_offset(offset: ZoneOffset | str) -> ZoneOffset:
    return offset if isinstance(offset, ZoneOffset) else ZoneOffset.of(offset)


def _local_at(epoch_second: int, nano: int, offset_seconds: int) -> LocalDateTime:
    days, second_of_day = divmod(epoch_second + offset_seconds, SECONDS_PER_DAY)
    return LocalDateTime(
        date=CalendarDate.of_epoch_day(days),
        time=ClockTime.of_nano_of_day(second_of_day * NANOS_PER_SECOND + nano),
    )


# ---------------------------------------------------------------------------
# Instant
# ---------------------------------------------------------------------------


class Instant(_Ordered, BaseModel):
    """A point on the UTC time-line: seconds since 1970-01-01T00:00Z plus nanos."""

    model_config = {"frozen": True}

    epoch_second: int
    nano: int = 0

    @model_validator(mode="after")
    def _check_components(self) -> Self:
        _check_range("epoch second", self.epoch_second, MIN_EPOCH_SECOND, MAX_EPOCH_SECOND)
        _check_range("nano", self.nano, 0, NANOS_PER_SECOND - 1)
        return self

    @classmethod
    def of_epoch_second(cls, epoch_second: int, nano_adjustment: int = 0) -> Instant:
        extra, nano = divmod(nano_adjustment, NANOS_PER_SECOND)
        return cls(epoch_second=epoch_second + extra, nano=nano)

    @classmethod
    def of_epoch_milli(cls, epoch_milli: int) -> Instant:
        seconds, millis = divmod(epoch_milli, 1000)
        return cls(epoch_second=seconds, nano=millis * 1_000_000)

    @classmethod
    def of_epoch_nano(cls, epoch_nano: int) -> Instant:
        return cls.of_epoch_second(0, epoch_nano)

    @classmethod
    def now(cls, clock: Clock | None = None) -> Instant:
        from datekit.domain.clock import resolve_clock

        return resolve_clock(clock).instant()

    def to_epoch_milli(self) -> int:
        return self.epoch_second * 1000 + self.nano // 1_000_000

    def to_epoch_nano(self) -> int:
        return self.epoch_second * NANOS_PER_SECOND + self.nano

    def to_datetime(self) -> _dt.datetime:
        """Aware UTC stdlib datetime (sub-microsecond digits are dropped)."""
        return _EPOCH + _dt.timedelta(seconds=self.epoch_second, microseconds=self.nano // 1000)

    def plus_nanos(self, nanos: int) -> Instant:
        if nanos == 0:
            return self
        return Instant.of_epoch_nano(self.to_epoch_nano() + nanos)

    def plus_millis(self, millis: int) -> Instant:
        return self.plus_nanos(millis * 1_000_000)

    def plus_seconds(self, seconds: int) -> Instant:
        return self.plus_nanos(seconds * NANOS_PER_SECOND)

    def minus_seconds(self, seconds: int) -> Instant:
        return self.plus_seconds(-seconds)

    def plus(self, amount: int, unit: TemporalUnit) -> Instant:
        nanos = self._unit_nanos(unit)
        return self.plus_nanos(amount * nanos)

    def until(self, end: Instant, unit: TemporalUnit) -> int:
        return _trunc_div(end.to_epoch_nano() - self.to_epoch_nano(), self._unit_nanos(unit))

    @staticmethod
    def _unit_nanos(unit: TemporalUnit) -> int:
        if unit.nanos is not None:
            return unit.nanos
        if unit is TemporalUnit.DAYS:
            return SECONDS_PER_DAY * NANOS_PER_SECOND
        msg = f"Unsupported unit for an instant: {unit}"
        raise UnsupportedFieldError(msg)

    def at_zone(self, zone_id: str) -> ZonedTimestamp:
        return ZonedTimestamp.of_instant(self, zone_id)

    def at_offset(self, offset: ZoneOffset | str) -> OffsetTimestamp:
        return OffsetTimestamp.of_instant(self, offset)

    def _sort_key(self) -> tuple[int, int]:
        return (self.epoch_second, self.nano)

    def __str__(self) -> str:
        local = _local_at(self.epoch_second, 0, 0)
        text = f"{local.date}T{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
        if self.nano:
            fraction = f"{self.nano:09d}"
            while fraction.endswith("000"):
                fraction = fraction[:-3]
            text += f".{fraction}"
        return text + "Z"


# ---------------------------------------------------------------------------
# OffsetTimestamp
# ---------------------------------------------------------------------------


class OffsetTimestamp(_Ordered, BaseModel):
    """A local date-time with a fixed UTC offset, e.g. ``2018-01-14T19:30+05:30``.

    Meant for machine-oriented timestamps; there is no rule table and no
    daylight-saving ambiguity. Use :class:`ZonedTimestamp` for display.
    """

    model_config = {"frozen": True}

    date_time: LocalDateTime
    offset: ZoneOffset

    @classmethod
    def of(cls, local: LocalDateTime, offset: ZoneOffset | str) -> OffsetTimestamp:
        return cls(date_time=local, offset=_coerce_offset(offset))

    @classmethod
    def of_instant(cls, instant: Instant, offset: ZoneOffset | str) -> OffsetTimestamp:
        offset = _coerce_offset(offset)
        local = _local_at(instant.epoch_second, instant.nano, offset.total_seconds)
        return cls(date_time=local, offset=offset)

    @classmethod
    def now(cls, clock: Clock | None = None) -> OffsetTimestamp:
        return ZonedTimestamp.now(clock).to_offset_timestamp()

    @property
    def date(self) -> CalendarDate:
        return self.date_time.date

    @property
    def time(self) -> ClockTime:
        return self.date_time.time

    def to_instant(self) -> Instant:
        return Instant(
            epoch_second=self.date_time.to_epoch_second(self.offset.total_seconds),
            nano=self.date_time.nanosecond,
        )

    def to_datetime(self) -> _dt.datetime:
        return self.date_time.to_datetime().replace(tzinfo=self.offset.to_timezone())

    def with_offset_same_instant(self, offset: ZoneOffset | str) -> OffsetTimestamp:
        return OffsetTimestamp.of_instant(self.to_instant(), offset)

    def at_zone_same_instant(self, zone_id: str) -> ZonedTimestamp:
        return ZonedTimestamp.of_instant(self.to_instant(), zone_id)

    def plus(self, amount: int, unit: TemporalUnit) -> OffsetTimestamp:
        return OffsetTimestamp(date_time=self.date_time.plus(amount, unit), offset=self.offset)

    def plus_hours(self, hours: int) -> OffsetTimestamp:
        return self.plus(hours, TemporalUnit.HOURS)

    def plus_days(self, days: int) -> OffsetTimestamp:
        return self.plus(days, TemporalUnit.DAYS)

    def _sort_key(self) -> tuple[Any, ...]:
        return (*self.to_instant()._sort_key(), *self.date_time._sort_key())

    def __str__(self) -> str:
        return f"{self.date_time}{self.offset}"


# ---------------------------------------------------------------------------
# ZonedTimestamp
# ---------------------------------------------------------------------------


class ZonedTimestamp(_Ordered, BaseModel):
    """A local date-time in a named zone, with the offset resolved from its rules.

    Equality is structural (local date-time, offset and zone id); use
    :meth:`is_equal` or compare :meth:`to_instant` for same-instant checks.
    """

    model_config = {"frozen": True}

    date_time: LocalDateTime
    offset: ZoneOffset
    zone_id: str

    @model_validator(mode="after")
    def _check_zone(self) -> Self:
        get_zone(self.zone_id)
        return self

    @classmethod
    def of(
        cls,
        local: LocalDateTime,
        zone_id: str,
        disambiguation: Disambiguation | None = None,
    ) -> ZonedTimestamp:
        """Attach *zone_id* to *local*, resolving daylight-saving transitions."""
        resolved, offset = resolve_local(local, zone_id, disambiguation or Disambiguation.EARLIER)
        return cls(date_time=resolved, offset=offset, zone_id=zone_id)

    @classmethod
    def of_instant(cls, instant: Instant, zone_id: str) -> ZonedTimestamp:
        tz = get_zone(zone_id)
        try:
            aware = instant.to_datetime().astimezone(tz)
        except (OverflowError, ValueError) as exc:
            msg = f"{instant} cannot be represented in {zone_id}"
            raise InvalidDateComponentError(msg) from exc
        offset = ZoneOffset.from_timedelta(aware.utcoffset() or _dt.timedelta(0))
        local = _local_at(instant.epoch_second, instant.nano, offset.total_seconds)
        return cls(date_time=local, offset=offset, zone_id=zone_id)

    @classmethod
    def now(cls, clock: Clock | None = None) -> ZonedTimestamp:
        from datekit.domain.clock import resolve_clock

        clock = resolve_clock(clock)
        return cls.of_instant(clock.instant(), clock.zone_id)

    @property
    def date(self) -> CalendarDate:
        return self.date_time.date

    @property
    def time(self) -> ClockTime:
        return self.date_time.time

    def to_instant(self) -> Instant:
        return Instant(
            epoch_second=self.date_time.to_epoch_second(self.offset.total_seconds),
            nano=self.date_time.nanosecond,
        )

    def to_offset_timestamp(self) -> OffsetTimestamp:
        return OffsetTimestamp(date_time=self.date_time, offset=self.offset)

    def to_datetime(self) -> _dt.datetime:
        """Aware stdlib datetime; ``fold`` is set to match the resolved offset."""
        naive = self.date_time.to_datetime()
        tz = get_zone(self.zone_id)
        for fold in (0, 1):
            candidate = naive.replace(tzinfo=tz, fold=fold)
            if candidate.utcoffset() == self.offset.to_timedelta():
                return candidate
        return naive.replace(tzinfo=tz)

    def with_zone_same_instant(self, zone_id: str) -> ZonedTimestamp:
        return ZonedTimestamp.of_instant(self.to_instant(), zone_id)

    def with_zone_same_local(
        self,
        zone_id: str,
        disambiguation: Disambiguation | None = None,
    ) -> ZonedTimestamp:
        return ZonedTimestamp.of(self.date_time, zone_id, disambiguation)

    def plus(
        self,
        amount: int,
        unit: TemporalUnit,
        disambiguation: Disambiguation | None = None,
    ) -> ZonedTimestamp:
        """Date units move the local date-time; time units move the instant.

        After a date move the current offset is kept if it is still valid
        for the new local time, so an overlap keeps its side. Otherwise
        *disambiguation* (default ``EARLIER``) resolves the new local time.
        """
        if unit.is_time_based:
            return ZonedTimestamp.of_instant(self.to_instant().plus(amount, unit), self.zone_id)
        local, offset = resolve_local(
            self.date_time.plus(amount, unit),
            self.zone_id,
            disambiguation or Disambiguation.EARLIER,
            preferred=self.offset,
        )
        return ZonedTimestamp(date_time=local, offset=offset, zone_id=self.zone_id)

    def plus_days(self, days: int, disambiguation: Disambiguation | None = None) -> ZonedTimestamp:
        return self.plus(days, TemporalUnit.DAYS, disambiguation)

    def plus_months(self, months: int, disambiguation: Disambiguation | None = None) -> ZonedTimestamp:
        return self.plus(months, TemporalUnit.MONTHS, disambiguation)

    def plus_hours(self, hours: int) -> ZonedTimestamp:
        return self.plus(hours, TemporalUnit.HOURS)

    def plus_minutes(self, minutes: int) -> ZonedTimestamp:
        return self.plus(minutes, TemporalUnit.MINUTES)

    def _sort_key(self) -> tuple[Any, ...]:
        return (*self.to_instant()._sort_key(), *self.date_time._sort_key(), self.zone_id)

    def is_equal(self, other: Self) -> bool:
        """Same instant, regardless of zone."""
        return self.to_instant() == other.to_instant()

    def __str__(self) -> str:
        text = f"{self.date_time}{self.offset}"
        if self.zone_id != self.offset.id:
            text += f"[{self.zone_id}]"
        return text
