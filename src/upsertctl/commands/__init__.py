"""Subcommand modules for upsertctl.

Provides register_commands() which uses deferred imports to keep
``upsertctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the record commands on the root CLI group."""
    from upsertctl.commands.create import find_or_create
    from upsertctl.commands.find import find
    from upsertctl.commands.upsert import upsert

    cli.add_command(find)
    cli.add_command(find_or_create)
    cli.add_command(upsert)
