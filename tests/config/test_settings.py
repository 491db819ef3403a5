"""Tests for DateKitSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from datekit.config.settings import DateKitSettings
from datekit.domain.types import Disambiguation, LeapDayPolicy


class TestDateKitSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = DateKitSettings.from_cli(cwd=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.zone_override is None
        assert settings.zone.disambiguation is Disambiguation.EARLIER
        assert settings.calendar.leap_day_policy is LeapDayPolicy.FEB_28
        assert settings.format.date_pattern == "yyyy-MM-dd"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DateKitSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "datekit.toml"
        toml.write_text('[zone]\ndisambiguation = "raise"\n[calendar]\nleap_day_policy = "mar1"\n')
        settings = DateKitSettings.from_cli(cwd=tmp_path)
        assert settings.zone.disambiguation is Disambiguation.RAISE
        assert settings.calendar.leap_day_policy is LeapDayPolicy.MAR_1
        assert settings.format.time_pattern == "HH:mm:ss"  # default preserved
        assert settings.config_path == toml

    def test_discovered_from_child_directory(self, tmp_path: Path) -> None:
        (tmp_path / "datekit.toml").write_text('[clock]\nzone = "Asia/Tokyo"\n')
        child = tmp_path / "nested" / "deeper"
        child.mkdir(parents=True)
        settings = DateKitSettings.from_cli(cwd=child)
        assert settings.clock.zone == "Asia/Tokyo"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[format]\ndate_pattern = "dd/MM/yyyy"\n')
        settings = DateKitSettings.from_cli(config_path=str(custom), cwd=tmp_path)
        assert settings.format.date_pattern == "dd/MM/yyyy"
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            DateKitSettings.from_cli(config_path=str(tmp_path / "nope.toml"), cwd=tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "datekit.toml").write_text("[zone\ndisambiguation = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            DateKitSettings.from_cli(cwd=tmp_path)


class TestPriorityChain:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "datekit.toml").write_text('[zone]\ndisambiguation = "later"\n')
        monkeypatch.setenv("DATEKIT_ZONE__DISAMBIGUATION", "raise")
        settings = DateKitSettings.from_cli(cwd=tmp_path)
        assert settings.zone.disambiguation is Disambiguation.RAISE

    def test_cli_flags_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEKIT_QUIET", "false")
        settings = DateKitSettings.from_cli(cwd=tmp_path, quiet=True)
        assert settings.quiet is True

    def test_none_flags_are_not_passed(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEKIT_VERBOSE", "true")
        settings = DateKitSettings.from_cli(cwd=tmp_path, verbose=None)
        assert settings.verbose is True


class TestClockZone:
    def test_host_zone_by_default(self, tmp_path: Path) -> None:
        assert DateKitSettings.from_cli(cwd=tmp_path).clock_zone is None

    def test_toml_zone(self, tmp_path: Path) -> None:
        (tmp_path / "datekit.toml").write_text('[clock]\nzone = "Europe/Paris"\n')
        assert DateKitSettings.from_cli(cwd=tmp_path).clock_zone == "Europe/Paris"

    def test_flag_beats_toml(self, tmp_path: Path) -> None:
        (tmp_path / "datekit.toml").write_text('[clock]\nzone = "Europe/Paris"\n')
        settings = DateKitSettings.from_cli(cwd=tmp_path, zone_override="UTC")
        assert settings.clock_zone == "UTC"
