"""Command: global environment for the current background."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rod.commands._base import RodCommand

if TYPE_CHECKING:
    from rod.commands._context import AppContext


@click.command(
    cls=RodCommand,
    examples="""\
  eval "$(rod env)"
  rod env --no-export > scheme.env""",
)
@click.option("-n", "--no-export", is_flag=True, help="Omit the 'export ' prefix.")
@click.pass_obj
def env(app: AppContext, no_export: bool) -> None:
    """Global environment matching the current background."""
    from rod.services.dispatch import render_env

    for line in render_env(app.global_env, export=not no_export):
        click.echo(line)
