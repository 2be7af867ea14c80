"""Fatal error taxonomy.

Every error here is a :class:`click.ClickException`, so an uncaught raise
prints ``Error: <message>`` to stderr and exits non-zero.  Override-file
and terminal-query failures are not errors and never surface here.
"""

from __future__ import annotations

import click


class RodError(click.ClickException):
    """Base class for fatal rod errors."""


class ConfigError(RodError):
    """Configuration file could not be read, parsed, or validated."""


class InvalidCommandName(RodError):
    """The program token has no usable base name."""


class EncodingError(RodError):
    """A dry-run value cannot be rendered as text."""


class ExecutionFailure(RodError):
    """The process image could not be replaced with the requested program."""

    def __init__(self, message: str, exit_code: int = 126) -> None:
        super().__init__(message)
        self.exit_code = exit_code
