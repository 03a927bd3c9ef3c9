"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from taskcadence.output.console import create_console, get_output, style_for_action

if TYPE_CHECKING:
    from rich.console import Console

    from taskcadence.services.result import ServiceResult

Renderer = Callable[..., None]

# Data key holding the single value ``--quiet`` prints, per op.
_QUIET_KEYS: dict[str, str] = {
    "next_date": "next",
    "resolve_due": "date",
    "check_rule": "rule",
    "complete_task": "next",
}


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


def render_quiet(result: ServiceResult) -> str:
    """Render the bare value for ``--quiet`` mode.

    A completed one-off task has no next date and prints ``delete``.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    key = _QUIET_KEYS.get(result.op)
    if key is None:
        return f"OK: {result.op}"
    value = result.data.get(key)
    if value is None and result.op == "complete_task":
        return str(result.data.get("action", ""))
    return str(value)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="cadence.ok")
    op = Text(f"  {result.op}", style="cadence.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cadence.key")
    v = Text("-" if value is None or value == "" else str(value), style=style)
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block, telemetry timing included (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry" and isinstance(v, dict):
            name = v.get("name", "?")
            duration = v.get("duration_ms", 0.0)
            console.print(f"    {name}  {duration}ms")
        else:
            console.print(f"    {k}: {v}")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cadence.error")
    op = Text(f"  {result.op}", style="cadence.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_next_date(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "next", d.get("next"), "cadence.date")
    _field(console, "date", d.get("date"))
    _field(console, "repeat", d.get("repeat"), "cadence.rule")
    _field(console, "now", d.get("now"))
    if verbose:
        _render_meta(console, result)


def _render_check_rule(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "rule", d.get("rule"), "cadence.rule")
    _field(console, "kind", d.get("kind"))
    _field(console, "description", d.get("description"))
    if verbose:
        _field(console, "input", d.get("repeat"))
        _render_meta(console, result)


def _render_resolve_due(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "date", d.get("date"), "cadence.date")
    _field(console, "source", d.get("source"))
    if d.get("repeat"):
        _field(console, "repeat", d["repeat"], "cadence.rule")
    if verbose:
        _field(console, "now", d.get("now"))
        _render_meta(console, result)


def _render_complete(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    action = str(d.get("action", ""))
    _status_line(console, result)
    _field(console, "action", action, style_for_action(action))
    if d.get("next"):
        _field(console, "next", d["next"], "cadence.date")
    _field(console, "date", d.get("date"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "next_date": _render_next_date,
    "check_rule": _render_check_rule,
    "resolve_due": _render_resolve_due,
    "complete_task": _render_complete,
}
