"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Settings and the color scheme are resolved lazily
so ``--help``, ``--version`` and ``rod example`` never read config or
query the terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rod.config.logging import configure_logging

if TYPE_CHECKING:
    from rod.config.models import SchemeEnvironment
    from rod.config.settings import RodSettings
    from rod.domain.types import ColorScheme


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    INVARIANT: The color scheme is resolved at most once per run and every
    command sees the same value.
    """

    def __init__(
        self,
        *,
        config_path: str | None = None,
        verbose: bool = False,
        log_json: bool = False,
    ) -> None:
        self.config_path = config_path
        self.verbose = verbose
        self.log_json = log_json
        self._settings: RodSettings | None = None
        self._scheme: ColorScheme | None = None

        configure_logging(verbose=verbose, log_json=log_json)

    @property
    def settings(self) -> RodSettings:
        """Merged settings (loaded on first access; may raise ConfigError)."""
        if self._settings is None:
            from rod.config.settings import RodSettings

            self._settings = RodSettings.from_cli(config_path=self.config_path)
        return self._settings

    @property
    def scheme(self) -> ColorScheme:
        """The color scheme for this run."""
        if self._scheme is None:
            from rod.infrastructure import override, terminal
            from rod.services.scheme import SchemeResolver

            resolver = SchemeResolver.default(
                self.settings.config,
                override.read_override(),
                query=terminal.query_color_scheme,
            )
            self._scheme = resolver.resolve()
        return self._scheme

    @property
    def global_env(self) -> SchemeEnvironment:
        """Global environment for the resolved scheme."""
        return self.settings.config.env_for(self.scheme)
