"""Command: print a sample configuration."""

from __future__ import annotations

import click

from rod.commands._base import RodCommand


@click.command(
    cls=RodCommand,
    examples="""\
  rod example
  rod example > ~/.config/rod/config.toml""",
)
def example() -> None:
    """Show example config."""
    from rod.config.models import RodConfig

    click.echo(RodConfig.example(), nl=False)
