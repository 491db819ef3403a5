"""Command group: time-zone and UTC-offset operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datekit.commands._base import DateKitGroup

if TYPE_CHECKING:
    from datekit.commands._context import AppContext


@click.group(
    cls=DateKitGroup,
    examples="""\
  datekit zone convert 2024-03-10T02:30 America/New_York
  datekit zone convert "2024-07-01 09:00:00" Europe/London --to Asia/Tokyo
  datekit zone offset 2018-01-14T19:30 +05:30""",
)
def zone() -> None:
    """Attach zones and offsets to local date-times."""


@zone.command(
    examples="""\
  datekit zone convert 2024-03-10T02:30 America/New_York    # gap: 03:30-04:00
  datekit zone convert 2024-11-03T01:30 America/New_York
  datekit zone convert 2024-07-01T09:00 Europe/London --to Asia/Tokyo""",
)
@click.argument("date_time")
@click.argument("zone_id")
@click.option("--to", "target_zone", default=None, help="Also show the same instant in this zone.")
@click.pass_obj
def convert(app: AppContext, date_time: str, zone_id: str, target_zone: str | None) -> None:
    """Resolve local DATE_TIME in ZONE_ID."""
    app.emit(app.service.convert_zone(date_time, zone_id, target_zone))


@zone.command(
    # Lets offsets such as -05:00 through as arguments instead of options.
    context_settings={"ignore_unknown_options": True},
    examples="""\
  datekit zone offset 2018-01-14T19:30 +05:30
  datekit zone offset "2018-01-14 19:30:00" -05:00""",
)
@click.argument("date_time")
@click.argument("offset")
@click.pass_obj
def offset(app: AppContext, date_time: str, offset: str) -> None:
    """Attach a fixed UTC OFFSET to local DATE_TIME."""
    app.emit(app.service.attach_offset(date_time, offset))
