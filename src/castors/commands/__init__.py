"""Subcommand modules for castors.

Provides register_commands() which uses deferred imports to keep
``castors --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from castors.commands.can_cast import can_cast
    from castors.commands.cast import cast
    from castors.commands.list_cmd import list_converters

    cli.add_command(list_converters)
    cli.add_command(cast)
    cli.add_command(can_cast)
