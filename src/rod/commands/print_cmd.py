"""Command: print the resolved color scheme."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rod.commands._base import RodCommand

if TYPE_CHECKING:
    from rod.commands._context import AppContext


@click.command(
    "print",
    cls=RodCommand,
    examples="""\
  rod print
  rod print | grep -q Light && echo light""",
)
@click.pass_obj
def print_cmd(app: AppContext) -> None:
    """Print current background type (Dark or Light)."""
    click.echo(app.scheme.value)
