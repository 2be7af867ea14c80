"""Unified settings — env vars and TOML config in one object.

Priority chain (highest to lowest):
  1. Env vars     — ``ROD_*`` prefix, ``__`` between nested keys
                    (``ROD_FALLBACK_TO_LIGHT=true``, ``ROD_DARK__ENV__BAT_THEME=Nord``)
  2. TOML file    — ``config.toml`` from :func:`rod.config.discovery.find_config`
  3. Code defaults — baked into the section models

CLI flags (``--verbose``, ``--log-json``) are not settings; they live on
:class:`rod.commands._context.AppContext`.

Any failure to read, parse, or validate the configuration surfaces as
:class:`rod.errors.ConfigError`.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any, get_args, get_origin

from pydantic import BaseModel, Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from rod.config.discovery import find_config
from rod.config.models import CommandConfig, RodConfig, SchemeConfig
from rod.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "ROD_"
ENV_NESTED_DELIMITER = "__"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``config.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None:
            return
        try:
            raw = toml_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read {toml_path}: {exc}"
            raise ConfigError(msg) from exc
        try:
            self._data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


class EnvSettingsSource(PydanticBaseSettingsSource):
    """Read ``ROD_*`` variables, nesting on ``__``.

    Segments that name a model field match case-insensitively.  Segments
    that are mapping keys (variable names in ``env``, command names in
    ``cmds``) keep their case, so ``ROD_DARK__ENV__BAT_THEME`` sets
    ``BAT_THEME`` and not ``bat_theme``.  List and table values are JSON.
    Variables that match no setting (``ROD_CONFIG`` among them) are ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        for name, value in sorted(os.environ.items()):
            if not name.startswith(ENV_PREFIX):
                continue
            path = name[len(ENV_PREFIX) :].split(ENV_NESTED_DELIMITER)
            resolved = _resolve_path(settings_cls, path)
            if resolved is None:
                logger.debug("Ignoring %s: no matching setting", name)
                continue
            keys, annotation = resolved
            node = self._data
            for key in keys[:-1]:
                node = node.setdefault(key, {})
            node[keys[-1]] = _decode(name, value, annotation)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


def _resolve_path(model: type[BaseModel], path: list[str]) -> tuple[list[str], Any] | None:
    """Map env var segments onto config keys; None if they name no setting."""
    keys: list[str] = []
    annotation: Any = model
    for segment in path:
        if not segment:
            return None
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            name = segment.lower()
            field = annotation.model_fields.get(name)
            if field is None:
                return None
            keys.append(name)
            annotation = field.annotation
        elif get_origin(annotation) is dict:
            keys.append(segment)
            annotation = get_args(annotation)[1]
        else:
            return None
    return keys, annotation


def _decode(name: str, value: str, annotation: Any) -> Any:
    complex_value = get_origin(annotation) in (list, dict) or (
        isinstance(annotation, type) and issubclass(annotation, BaseModel)
    )
    if not complex_value:
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {name}: {exc}"
        raise ConfigError(msg) from exc


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RodSettings(BaseSettings):
    """Unified settings for the rod CLI.

    Built lazily by :class:`rod.commands._context.AppContext` so that
    ``rod example`` and ``--help`` never touch the config file.
    """

    model_config = {"frozen": True}

    fallback_to_light: bool = False
    dark: SchemeConfig = Field(default_factory=SchemeConfig)
    light: SchemeConfig = Field(default_factory=SchemeConfig)
    cmds: dict[str, CommandConfig] = Field(default_factory=dict)

    _config_path: Path | None = PrivateAttr(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Env vars over the TOML file over defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            EnvSettingsSource(settings_cls),
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(cls, *, config_path: str | Path | None = None) -> RodSettings:
        """Construct settings from CLI invocation.

        Locates ``config.toml`` (explicit *config_path*, ``ROD_CONFIG``,
        or the app directory), then layers ``ROD_*`` env vars on top.
        """
        toml_path = find_config(config_path)

        _tls.toml_path = toml_path
        try:
            settings = cls()
        except ValidationError as exc:
            source = toml_path or "defaults"
            msg = f"Invalid configuration ({source}): {exc}"
            raise ConfigError(msg) from exc
        finally:
            _tls.toml_path = None
        settings._config_path = toml_path
        return settings

    @property
    def config_path(self) -> Path | None:
        """The TOML file that was loaded, or None for defaults."""
        return self._config_path

    @property
    def config(self) -> RodConfig:
        """The scheme/command configuration as a plain :class:`RodConfig`."""
        return RodConfig(
            fallback_to_light=self.fallback_to_light,
            dark=self.dark,
            light=self.light,
            cmds=self.cmds,
        )
