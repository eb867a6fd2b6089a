"""Subcommand modules for recordkit.

register_commands() imports command modules only when the CLI is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``contracts`` group and the ``validate`` command."""
    from recordkit.commands.contracts import contracts
    from recordkit.commands.validate import validate

    cli.add_command(contracts)
    cli.add_command(validate)
