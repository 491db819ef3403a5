"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from datekit.output.console import create_console, get_output, style_for_value

if TYPE_CHECKING:
    from rich.console import Console

    from datekit.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# Primary value per op, printed alone in --quiet mode.
_QUIET_KEYS: dict[str, str] = {
    "now": "timestamp",
    "leap_year": "leap_year",
    "difference": "period",
    "shift": "result",
    "same_month_day": "same_month_day",
    "expiry": "expired",
    "format": "text",
    "parse": "value",
    "convert_zone": "zoned",
    "attach_offset": "timestamp",
}


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: the op's primary value."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    key = _QUIET_KEYS.get(result.op)
    if result.op == "now" and "formatted" in result.data:
        key = "formatted"
    if result.op == "convert_zone" and "converted" in result.data:
        key = "converted"
    if key and key in result.data:
        return _plain(result.data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _plain(value: Any) -> str:
    """Booleans as lowercase JSON literals, everything else via str()."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="dk.ok")
    op = Text(f"  {result.op}", style="dk.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any, style: str | None = None) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dk.key")
    if isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(_plain(value), style=style or style_for_value(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 100:
        style = "bold red"
    elif duration > 10:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dk.error")
    op = Text(f"  {result.op}", style="dk.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(": "), Text(msg), sep="")
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_difference(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a date difference as a years/months/days table."""
    d = result.data
    _status_line(console, result)
    _field(console, "from", d["start"])
    _field(console, "to", d["end"])
    _field(console, "period", d["period"], style="dk.period")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for column in ("Years", "Months", "Days", "Total days"):
        table.add_column(column, justify="right")
    table.add_row(str(d["years"]), str(d["months"]), str(d["days"]), str(d["total_days"]))
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_zoned(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render convert_zone / attach_offset: local → stamped → instant."""
    d = result.data
    _status_line(console, result)
    _field(console, "local", d["local"])
    stamped = d.get("zoned", d.get("timestamp"))
    _field(console, "timestamp", stamped, style="dk.zone")
    _field(console, "offset", d["offset"])
    _field(console, "instant", d["instant"])
    if "converted" in d:
        _field(console, "converted", d["converted"], style="dk.zone")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "difference": _render_difference,
    "convert_zone": _render_zoned,
    "attach_offset": _render_zoned,
}
