"""Command: strict pattern parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    "parse",
    cls=DateKitCommand,
    examples="""\
  datekit parse 20140116 yyyyMMdd
  datekit parse "2008-08-08 08:00:00 PM" "yyyy-MM-dd hh:mm:ss a"
  datekit parse "2018-01-14 19:30 +05:30" "yyyy-MM-dd HH:mm XXX" """,
)
@click.argument("text")
@click.argument("pattern")
@click.pass_obj
def parse_cmd(app: AppContext, text: str, pattern: str) -> None:
    """Parse TEXT with PATTERN; the whole text must match."""
    app.emit(app.service.parse_text(text, pattern))
