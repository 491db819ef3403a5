"""Root CLI group for datekit with global flags and command registration."""

from __future__ import annotations

import click

from datekit import __version__
from datekit.commands import register_commands
from datekit.commands._context import AppContext
from datekit.config.settings import DateKitSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="datekit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the primary value.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--zone", "zone_override", default=None, help="Zone id for 'now' (e.g. Europe/Paris).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    zone_override: str | None,
) -> None:
    """datekit — calendar dates, times, zones and patterns."""
    ctx.ensure_object(dict)
    # Unset flags stay None so env vars and datekit.toml can supply them.
    settings = DateKitSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        zone_override=zone_override,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
