"""Tests for config models — defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from datekit.config.models import CalendarConfig, DateKitConfig, FormatConfig, ZoneConfig
from datekit.domain.types import Disambiguation, LeapDayPolicy


class TestDateKitConfig:
    def test_full_defaults(self) -> None:
        cfg = DateKitConfig()
        assert cfg.clock.zone is None
        assert cfg.zone.disambiguation is Disambiguation.EARLIER
        assert cfg.calendar.leap_day_policy is LeapDayPolicy.FEB_28
        assert cfg.format.date_pattern == "yyyy-MM-dd"
        assert cfg.format.time_pattern == "HH:mm:ss"
        assert cfg.format.date_time_pattern == "yyyy-MM-dd HH:mm:ss"

    def test_sparse_override(self) -> None:
        cfg = DateKitConfig.model_validate({"calendar": {"leap_day_policy": "mar1"}})
        assert cfg.calendar.leap_day_policy is LeapDayPolicy.MAR_1
        assert cfg.zone == ZoneConfig()

    def test_frozen(self) -> None:
        cfg = FormatConfig()
        with pytest.raises(ValidationError):
            cfg.date_pattern = "dd/MM/yyyy"  # type: ignore[misc]


class TestValidation:
    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CalendarConfig.model_validate({"leap_day_policy": "feb30"})

    def test_unknown_disambiguation_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ZoneConfig.model_validate({"disambiguation": "nearest"})
