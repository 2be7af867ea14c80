"""Subcommand modules for rod.

Provides register_commands() which uses deferred imports to keep
``rod --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from rod.commands.env import env
    from rod.commands.example import example
    from rod.commands.print_cmd import print_cmd
    from rod.commands.run import run

    cli.add_command(print_cmd)
    cli.add_command(env)
    cli.add_command(example)
    cli.add_command(run)
