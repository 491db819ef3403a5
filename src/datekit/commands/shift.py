"""Command: add or subtract an amount of a unit."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import UNIT_CHOICE, DateKitCommand

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.command(
    cls=DateKitCommand,
    # Lets negative amounts through as arguments instead of options.
    context_settings={"ignore_unknown_options": True},
    examples="""\
  datekit shift 2024-01-31 1 months       # 2024-02-29
  datekit shift 2024-02-29 1 years        # 2025-02-28
  datekit shift 23:30 90 minutes          # 01:00
  datekit shift 2024-03-10T01:30 -2 hours""",
)
@click.argument("value")
@click.argument("amount", type=int)
@click.argument("unit", type=UNIT_CHOICE)
@click.pass_obj
def shift(app: AppContext, value: str, amount: int, unit: str) -> None:
    """Shift a date, time or date-time VALUE by AMOUNT UNITs."""
    app.emit(app.service.shift(value, amount, unit))
