"""Rich Console factory and theme for datekit output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DATEKIT_THEME = Theme(
    {
        "dk.ok": "bold green",
        "dk.error": "bold red",
        "dk.warning": "bold yellow",
        "dk.op": "bold cyan",
        "dk.key": "dim",
        "dk.value": "bold",
        "dk.true": "green",
        "dk.false": "red",
        "dk.zone": "magenta",
        "dk.period": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DATEKIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_value(value: object) -> str:
    """Rich style for a rendered field value (booleans are colored)."""
    if value is True:
        return "dk.true"
    if value is False:
        return "dk.false"
    return ""
