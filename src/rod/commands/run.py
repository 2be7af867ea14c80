"""Command: run a program adjusted for the current background."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rod.commands._base import RodCommand

if TYPE_CHECKING:
    from rod.commands._context import AppContext


@click.command(
    cls=RodCommand,
    no_args_is_help=True,
    context_settings={"allow_interspersed_args": False},
    examples="""\
  rod run delta file_a file_b
  rod run -d bat --paging=never README.md
  alias bat='rod run bat'""",
)
@click.option("-d", "--dry", is_flag=True, help="Print the command instead of running it.")
@click.argument("args", metavar="COMMAND [ARGS]...", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run(app: AppContext, dry: bool, args: tuple[str, ...]) -> None:
    """Run command after extending the arguments given and environment
    as per settings and current background."""
    from rod.services.command import build_command
    from rod.services.dispatch import execute, render_command_line

    built = build_command(app.scheme, app.settings.config, args)
    if dry:
        click.echo(render_command_line(built))
    else:
        execute(built)
