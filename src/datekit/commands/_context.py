"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides the lazily built CalendarService and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from datekit.config.settings import DateKitSettings
    from datekit.services.calendar import CalendarService
    from datekit.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The service (and with
    it the system clock) is created on first use so ``--help`` and
    ``--version`` never touch zone detection.
    """

    def __init__(self, settings: DateKitSettings) -> None:
        self.settings = settings
        self._service: CalendarService | None = None

        from datekit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from datekit.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> CalendarService:
        """The calendar service (created lazily on first access)."""
        if self._service is None:
            from datekit.services.calendar import CalendarService

            self._service = CalendarService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
