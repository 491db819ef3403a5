"""Shared pytest fixtures for datekit tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from datekit.config.settings import DateKitSettings
from datekit.domain.clock import FixedClock
from datekit.domain.values import LocalDateTime
from datekit.services.calendar import CalendarService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host DATEKIT_* variables out of every test."""
    for name in (
        "DATEKIT_CONFIG",
        "DATEKIT_ZONE_OVERRIDE",
        "DATEKIT_JSON_OUTPUT",
        "DATEKIT_QUIET",
        "DATEKIT_VERBOSE",
        "DATEKIT_LOG_JSON",
        "DATEKIT_CLOCK__ZONE",
        "DATEKIT_ZONE__DISAMBIGUATION",
        "DATEKIT_CALENDAR__LEAP_DAY_POLICY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty temp directory so no datekit.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fixed_clock() -> FixedClock:
    """A clock frozen at 2024-06-15T10:30 in New York (-04:00)."""
    local = LocalDateTime.of(2024, 6, 15, 10, 30)
    return FixedClock.at(local.at_zone("America/New_York"))


@pytest.fixture
def settings(isolated_cwd: Path) -> DateKitSettings:
    """Default settings with no TOML file in reach."""
    return DateKitSettings.from_cli(cwd=isolated_cwd)


@pytest.fixture
def service(settings: DateKitSettings, fixed_clock: FixedClock) -> CalendarService:
    """CalendarService reading "now" from the fixed clock."""
    return CalendarService(settings, clock=fixed_clock)
