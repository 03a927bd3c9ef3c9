"""Subcommand modules for taskcadence.

Provides register_commands() which uses deferred imports to keep
``taskcadence --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from taskcadence.commands.due import due
    from taskcadence.commands.rule import rule

    cli.add_command(rule)
    cli.add_command(due)

    # --- Standalone commands ---
    from taskcadence.commands.next_cmd import next_cmd

    cli.add_command(next_cmd)
