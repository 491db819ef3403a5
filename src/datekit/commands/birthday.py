"""Command: recurring-date (birthday, anniversary) check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand
from datekit.domain.types import LeapDayPolicy

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    cls=DateKitCommand,
    examples="""\
  datekit birthday 1990-08-04
  datekit birthday 2000-02-29 --on 2023-02-28
  datekit birthday 2000-02-29 --on 2023-03-01 --policy mar1""",
)
@click.argument("birth")
@click.option("--on", "on_date", default=None, help="Date to check (default: today).")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in LeapDayPolicy]),
    default=None,
    help="How Feb 29 matches in non-leap years (default: [calendar] leap_day_policy).",
)
@click.pass_obj
def birthday(app: AppContext, birth: str, on_date: str | None, policy: str | None) -> None:
    """Check whether BIRTH recurs today (or on --on)."""
    app.emit(app.service.same_month_day(birth, on_date, policy=policy))
