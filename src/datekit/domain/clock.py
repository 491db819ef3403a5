"""Clock protocol — the single source of "now".

Value types never read the host clock directly: every ``now()`` accepts an
optional :class:`Clock` and falls back to the system clock in the host's
default zone. Tests inject :class:`FixedClock` (or :class:`OffsetClock`)
to make time-dependent comparisons deterministic.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from datekit.domain.errors import ClockUnavailableError
from datekit.domain.zones import Instant, ZonedTimestamp, get_zone, system_zone_id

if TYPE_CHECKING:
    from datekit.domain.values import LocalDateTime

logger = logging.getLogger(__name__)


@runtime_checkable
class Clock(Protocol):
    """Access to the current instant and the zone it is viewed in."""

    @property
    def zone_id(self) -> str: ...

    def instant(self) -> Instant: ...


class SystemClock:
    """Reads the host wall clock (``time.time_ns``)."""

    def __init__(self, zone_id: str) -> None:
        get_zone(zone_id)
        self._zone_id = zone_id

    @classmethod
    def system_utc(cls) -> SystemClock:
        return cls("UTC")

    @classmethod
    def system_default_zone(cls) -> SystemClock:
        return cls(system_zone_id())

    @property
    def zone_id(self) -> str:
        return self._zone_id

    def instant(self) -> Instant:
        try:
            epoch_nano = time.time_ns()
        except (OSError, OverflowError) as exc:
            logger.error("System clock read failed: %s", exc)
            raise ClockUnavailableError("System clock is unavailable") from exc
        return Instant.of_epoch_nano(epoch_nano)

    def with_zone(self, zone_id: str) -> SystemClock:
        return SystemClock(zone_id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SystemClock) and other._zone_id == self._zone_id

    def __hash__(self) -> int:
        return hash(("SystemClock", self._zone_id))

    def __repr__(self) -> str:
        return f"SystemClock[{self._zone_id}]"


@dataclass(frozen=True)
class FixedClock:
    """Always returns the same instant."""

    fixed_instant: Instant
    zone_id: str = "UTC"

    def __post_init__(self) -> None:
        get_zone(self.zone_id)

    @classmethod
    def at(cls, timestamp: ZonedTimestamp) -> FixedClock:
        """A clock frozen at *timestamp*, in its zone."""
        return cls(timestamp.to_instant(), timestamp.zone_id)

    def instant(self) -> Instant:
        return self.fixed_instant

    def with_zone(self, zone_id: str) -> FixedClock:
        return FixedClock(self.fixed_instant, zone_id)


@dataclass(frozen=True)
class OffsetClock:
    """Another clock shifted by a fixed number of seconds."""

    base: Clock
    offset_seconds: int

    @property
    def zone_id(self) -> str:
        return self.base.zone_id

    def instant(self) -> Instant:
        return self.base.instant().plus_seconds(self.offset_seconds)


def resolve_clock(clock: Clock | None) -> Clock:
    """Return *clock*, or the system clock in the host's default zone."""
    if clock is None:
        return SystemClock.system_default_zone()
    return clock


def current_date_time(clock: Clock | None = None) -> LocalDateTime:
    """The current local date-time as seen by *clock*."""
    return ZonedTimestamp.now(clock).date_time
