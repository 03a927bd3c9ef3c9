"""Rich Console factory and theme for taskcadence output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich
automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CADENCE_THEME = Theme(
    {
        "cadence.ok": "bold green",
        "cadence.error": "bold red",
        "cadence.warning": "bold yellow",
        "cadence.op": "bold cyan",
        "cadence.key": "dim",
        "cadence.date": "bold blue",
        "cadence.rule": "magenta",
        "cadence.action.reschedule": "green",
        "cadence.action.delete": "yellow",
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
        theme=CADENCE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_action(action: str) -> str:
    """Rich style name for a task completion action."""
    return f"cadence.action.{action}" if action in ("reschedule", "delete") else ""
