"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DATEKIT_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``datekit.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

The TOML layer is pydantic-settings' own ``TomlConfigSettingsSource``,
pointed at the file found by :func:`datekit.config.discovery.find_config`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)

from datekit.config.discovery import find_config, read_toml
from datekit.config.models import CalendarConfig, ClockConfig, FormatConfig, ZoneConfig

# TOML path for the settings object currently being constructed.
_tls = threading.local()


class DateKitSettings(BaseSettings):
    """Unified settings for the datekit CLI and services.

    Attributes:
        config_path: The TOML file the sections were read from, if any.
        zone_override: ``--zone`` flag; beats ``[clock] zone``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DATEKIT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    zone_override: str | None = None

    # --- TOML sections ---
    clock: ClockConfig = Field(default_factory=ClockConfig)
    zone: ZoneConfig = Field(default_factory=ZoneConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)

    @property
    def clock_zone(self) -> str | None:
        """Zone id for "now": ``--zone``, then ``[clock] zone``, else None (host zone)."""
        return self.zone_override or self.clock.zone

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init kwargs, then env vars, then the discovered TOML file."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> DateKitSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when given, otherwise walks up from
        *cwd*. Flags that are None are treated as "not passed" so lower
        layers can supply them.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                import click

                raise click.ClickException(f"Config file not found: {toml_path}")
        else:
            toml_path = find_config(cwd)

        if toml_path is not None:
            try:
                read_toml(toml_path)
            except tomllib.TOMLDecodeError as exc:
                import click

                raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

        flags = {k: v for k, v in cli_flags.items() if v is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None
