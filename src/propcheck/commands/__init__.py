"""Subcommand modules for propcheck.

Provides register_commands() which uses deferred imports to keep
``propcheck --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from propcheck.commands.fields import check, props

    cli.add_command(check)
    cli.add_command(props)
