"""Command: leap-year check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    cls=DateKitCommand,
    examples="""\
  datekit leap           # current year
  datekit leap 2024
  datekit -q leap 1900   # prints false""",
)
@click.argument("year", type=int, required=False)
@click.pass_obj
def leap(app: AppContext, year: int | None) -> None:
    """Check whether YEAR (default: this year) is a leap year."""
    app.emit(app.service.leap_year(year))
