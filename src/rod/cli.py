"""Root CLI group for rod with global flags and command registration."""

from __future__ import annotations

import click

from rod import __version__
from rod.commands import register_commands
from rod.commands._context import AppContext


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rod")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """rod — terminal background color recognizer."""
    ctx.obj = AppContext(config_path=config_path, verbose=verbose, log_json=log_json)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
