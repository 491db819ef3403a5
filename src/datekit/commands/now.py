"""Command: current date and time."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    cls=DateKitCommand,
    examples="""\
  datekit now
  datekit now --utc
  datekit --zone Asia/Kolkata now
  datekit now --pattern "EEEE, MMMM d, yyyy h:mm a"
  datekit -q now --pattern yyyyMMdd""",
)
@click.option("--utc", is_flag=True, help="Report in UTC instead of the configured zone.")
@click.option("--pattern", "-p", default=None, help="Also render with this pattern.")
@click.pass_obj
def now(app: AppContext, utc: bool, pattern: str | None) -> None:
    """Show the current date, time and instant."""
    app.emit(app.service.now(utc=utc, pattern=pattern))
