"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, config.toml only contains overrides.
An empty file is a valid configuration (dark fallback, no variables, no commands).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from rod.domain.types import ColorScheme

# Variable name -> value for one color scheme.
SchemeEnvironment = dict[str, str]


# --- config.toml sections ---


class SchemeConfig(BaseModel):
    """[dark] / [light] section."""

    model_config = {"frozen": True}

    env: SchemeEnvironment = Field(default_factory=dict)


class CommandSchemeOverride(BaseModel):
    """[cmds.<name>.dark] / [cmds.<name>.light] section.

    ``pre_args`` go before the user's arguments, ``pos_args`` after them.
    """

    model_config = {"frozen": True}

    pre_args: list[str] = Field(default_factory=list)
    pos_args: list[str] = Field(default_factory=list)
    env: SchemeEnvironment = Field(default_factory=dict)


class CommandConfig(BaseModel):
    """[cmds.<name>] section, keyed by the command's base name."""

    model_config = {"frozen": True}

    dark: CommandSchemeOverride = Field(default_factory=CommandSchemeOverride)
    light: CommandSchemeOverride = Field(default_factory=CommandSchemeOverride)

    def for_scheme(self, scheme: ColorScheme) -> CommandSchemeOverride:
        return self.dark if scheme is ColorScheme.DARK else self.light


class RodConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    fallback_to_light: bool = False
    dark: SchemeConfig = Field(default_factory=SchemeConfig)
    light: SchemeConfig = Field(default_factory=SchemeConfig)
    cmds: dict[str, CommandConfig] = Field(default_factory=dict)

    def env_for(self, scheme: ColorScheme) -> SchemeEnvironment:
        """Global environment for *scheme*."""
        section = self.dark if scheme is ColorScheme.DARK else self.light
        return section.env

    @staticmethod
    def example() -> str:
        """Sample config.toml shown by ``rod example``."""
        return EXAMPLE_CONFIG


EXAMPLE_CONFIG = """\
# Used when the terminal does not answer the background query.
fallback_to_light = false

# Exported by `rod env` and added to every `rod run`.
[dark.env]
BAT_THEME = "Monokai Extended"
GLAMOUR_STYLE = "dark"

[light.env]
BAT_THEME = "Monokai Extended Light"
GLAMOUR_STYLE = "light"

# Per-command tweaks, keyed by the command's base name.
[cmds.delta.dark]
pre_args = ["--dark"]
pos_args = []
env = {}

[cmds.delta.light]
pre_args = ["--light"]
pos_args = []
env = {}

[cmds.fzf.dark]
pre_args = []
pos_args = []
env = { FZF_DEFAULT_OPTS = "--color=dark" }

[cmds.fzf.light]
pre_args = []
pos_args = []
env = { FZF_DEFAULT_OPTS = "--color=light" }
"""
