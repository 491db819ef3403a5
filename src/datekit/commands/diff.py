"""Command: years, months and days between two dates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    cls=DateKitCommand,
    examples="""\
  datekit diff 2008-08-08 2018-10-02    # P10Y1M24D
  datekit --json diff 2024-03-01 2024-01-31""",
)
@click.argument("start")
@click.argument("end")
@click.pass_obj
def diff(app: AppContext, start: str, end: str) -> None:
    """Calendar difference from START to END."""
    app.emit(app.service.difference(start, end))
