"""Config file discovery.

rod keeps its files in the per-user application directory reported by
:func:`click.get_app_dir` (``$XDG_CONFIG_HOME/rod`` on Linux).
Supports ROD_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from rod.errors import ConfigError

APP_NAME = "rod"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "ROD_CONFIG"


def app_dir() -> Path:
    """Per-user configuration directory for rod."""
    return Path(click.get_app_dir(APP_NAME))


def find_config(explicit: str | Path | None = None) -> Path | None:
    """Locate config.toml.

    Checks *explicit* first, then the ROD_CONFIG env var, then the app
    directory.  An explicit path that does not exist is an error; a
    missing file in the app directory just means "use defaults" and
    returns None.
    """
    if not explicit:
        explicit = os.environ.get(CONFIG_ENV_VAR) or None

    if explicit:
        p = Path(explicit)
        if not p.is_file():
            msg = f"Config file not found: {p}"
            raise ConfigError(msg)
        return p

    candidate = app_dir() / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None
