"""Subcommand modules for datekit.

Provides register_commands() which uses deferred imports to keep
``datekit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from datekit.commands.zone import zone

    cli.add_command(zone)

    # --- Standalone commands ---
    from datekit.commands.birthday import birthday
    from datekit.commands.diff import diff
    from datekit.commands.expiry import expiry
    from datekit.commands.format_cmd import format_cmd
    from datekit.commands.leap import leap
    from datekit.commands.now import now
    from datekit.commands.parse_cmd import parse_cmd
    from datekit.commands.shift import shift

    cli.add_command(now)
    cli.add_command(leap)
    cli.add_command(diff)
    cli.add_command(shift)
    cli.add_command(birthday)
    cli.add_command(expiry)
    cli.add_command(format_cmd)
    cli.add_command(parse_cmd)
