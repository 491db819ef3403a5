"""BaseService — shared foundation for datekit services.

Every service receives the resolved :class:`DateKitSettings` and an
optional :class:`Clock`. Without an injected clock, "now" comes from the
system clock in ``--zone`` / ``[clock] zone`` or the host zone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from datekit.domain.clock import SystemClock
from datekit.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from datekit.config.settings import DateKitSettings
    from datekit.domain.clock import Clock
    from datekit.domain.errors import DateKitError

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CalendarService(BaseService):
            @traced
            def leap_year(self, year: int | None = None) -> ServiceResult:
                try:
                    ...
                except DateKitError as exc:
                    return self._fail("leap_year", exc)
    """

    def __init__(self, settings: DateKitSettings, clock: Clock | None = None) -> None:
        self._settings = settings
        self._clock = clock

    @property
    def settings(self) -> DateKitSettings:
        return self._settings

    @property
    def clock(self) -> Clock:
        """The injected clock, or a system clock created on first use."""
        if self._clock is None:
            zone = self._settings.clock_zone
            self._clock = SystemClock(zone) if zone else SystemClock.system_default_zone()
        return self._clock

    def _fail(self, op: str, exc: DateKitError, **detail: Any) -> ServiceResult:
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc, **detail))
