"""Dispatcher — run a BuiltCommand or render it as text.

Run mode replaces the current process and never returns.  Dry-run and
the informational renderers build complete strings first, so a value
that cannot be rendered fails before anything reaches stdout.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, NoReturn

from rod.errors import EncodingError, ExecutionFailure

if TYPE_CHECKING:
    from rod.services.command import BuiltCommand

logger = logging.getLogger(__name__)


def _text(value: str, what: str) -> str:
    # Undecodable argv/environ bytes arrive as lone surrogates.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Cannot render {what} as text: {value!r}"
        raise EncodingError(msg) from exc
    return value


def render_command_line(built: BuiltCommand) -> str:
    """Render *built* as ``[env K=V ...] program arg ...`` (no newline)."""
    parts: list[str] = []
    if built.env:
        parts.append("env")
        for key, value in built.env.items():
            name = _text(key, "variable name")
            parts.append(f"{name}={_text(value, 'value of ' + name)}")
    parts.append(_text(built.program, "program"))
    parts.extend(_text(arg, "argument") for arg in built.args)
    return " ".join(parts)


def render_env(env: Mapping[str, str], *, export: bool = True) -> list[str]:
    """``KEY=VALUE`` lines, each prefixed ``export `` when *export* is set."""
    prefix = "export " if export else ""
    return [f"{prefix}{key}={value}" for key, value in env.items()]


def execute(built: BuiltCommand) -> NoReturn:
    """Replace the current process with *built*.

    The rod-supplied variables are layered over the inherited environment.
    """
    env = {**os.environ, **built.env}
    logger.debug("exec %s %s", built.program, built.args)
    try:
        os.execvpe(built.program, [built.program, *built.args], env)
    except FileNotFoundError as exc:
        msg = f"{built.program}: command not found"
        raise ExecutionFailure(msg, exit_code=127) from exc
    except OSError as exc:
        msg = f"{built.program}: {exc.strerror or exc}"
        raise ExecutionFailure(msg, exit_code=126) from exc
