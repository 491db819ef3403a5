"""Command: year-month expiry check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    cls=DateKitCommand,
    examples="""\
  datekit expiry 2020-05
  datekit -q expiry 2031-12""",
)
@click.argument("year_month")
@click.pass_obj
def expiry(app: AppContext, year_month: str) -> None:
    """Check whether YEAR_MONTH (yyyy-MM) is already past."""
    app.emit(app.service.expiry(year_month))
