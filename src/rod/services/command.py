"""CommandBuilder — merge scheme, config, and user arguments.

INVARIANT: Lookup in ``cmds`` uses the program's base name, but the
program is executed exactly as the user typed it.

INVARIANT: Arguments are ``pre_args ++ user args ++ pos_args``; command
environment entries replace global entries with the same name.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING

from rod.errors import InvalidCommandName

if TYPE_CHECKING:
    from rod.config.models import RodConfig
    from rod.domain.types import ColorScheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltCommand:
    """A fully materialized invocation.

    ``env`` holds only the variables rod adds; the inherited process
    environment is merged in at exec time.
    """

    program: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


def command_base_name(token: str) -> str:
    """Final path segment of *token* (``/usr/bin/ls`` -> ``ls``)."""
    name = PurePath(token).name
    if not name or name == "..":
        msg = f"Invalid command name: {token!r}"
        raise InvalidCommandName(msg)
    return name


def build_command(scheme: ColorScheme, config: RodConfig, argv: Sequence[str]) -> BuiltCommand:
    """Build the invocation for *argv* (program first, then its arguments)."""
    if not argv:
        msg = "Invalid command name: no command given"
        raise InvalidCommandName(msg)

    program, *user_args = argv
    env = dict(config.env_for(scheme))
    name = command_base_name(program)

    cmd = config.cmds.get(name)
    if cmd is None:
        args = user_args
    else:
        override = cmd.for_scheme(scheme)
        args = [*override.pre_args, *user_args, *override.pos_args]
        env.update(override.env)

    logger.debug(
        "Built command for %s (%s): configured=%s args=%s env=%s",
        name,
        scheme,
        cmd is not None,
        args,
        sorted(env),
    )
    return BuiltCommand(program=program, args=args, env=env)
