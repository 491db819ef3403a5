"""Command: render a value with a pattern."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    "format",
    cls=DateKitCommand,
    examples="""\
  datekit format 2014-01-16 yyyyMMdd
  datekit format 2008-08-08T13:05:00 "EEE, d MMM yyyy h:mm a"
  datekit format "2024-03-10T03:30:00-04:00[America/New_York]" "HH:mm XXX VV" """,
)
@click.argument("value")
@click.argument("pattern")
@click.pass_obj
def format_cmd(app: AppContext, value: str, pattern: str) -> None:
    """Render an ISO VALUE with PATTERN."""
    app.emit(app.service.format_value(value, pattern))
