"""Subcommand modules for confspec.

Provides register_commands() which uses deferred imports to keep
``confspec --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from confspec.commands.check import check
    from confspec.commands.describe import describe

    cli.add_command(check)
    cli.add_command(describe)
