"""SchemeResolver — pick exactly one color scheme for the run.

Resolution is an ordered list of strategies, each returning a scheme or
None.  The first answer wins:

  1. Override file  — an operator's explicit choice always wins
  2. Terminal query — preferred over any static default
  3. Fallback       — ``fallback_to_light`` from config, always answers
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from rod.domain.types import ColorScheme
from rod.infrastructure.terminal import QueryOptions

if TYPE_CHECKING:
    from rod.config.models import RodConfig

logger = logging.getLogger(__name__)

Strategy = Callable[[], ColorScheme | None]
TerminalQuery = Callable[[QueryOptions], ColorScheme | None]


def from_override(state: ColorScheme | None) -> Strategy:
    """Strategy answering with the already-read override state."""

    def override() -> ColorScheme | None:
        return state

    return override


def from_terminal(query: TerminalQuery, options: QueryOptions | None = None) -> Strategy:
    """Strategy asking the terminal; an unavailable terminal is no answer."""
    opts = options or QueryOptions()

    def terminal() -> ColorScheme | None:
        try:
            return query(opts)
        except OSError as exc:
            logger.debug("Terminal query failed: %s", exc)
            return None

    return terminal


def from_fallback(fallback_to_light: bool) -> Strategy:
    """Strategy that always answers with the configured static scheme."""
    scheme = ColorScheme.LIGHT if fallback_to_light else ColorScheme.DARK

    def fallback() -> ColorScheme | None:
        return scheme

    return fallback


class SchemeResolver:
    """Evaluate strategies in order, returning the first non-None scheme."""

    def __init__(self, strategies: Sequence[Strategy]) -> None:
        self._strategies = tuple(strategies)

    @classmethod
    def default(
        cls,
        config: RodConfig,
        override: ColorScheme | None,
        query: TerminalQuery,
        options: QueryOptions | None = None,
    ) -> SchemeResolver:
        """The standard chain: override, terminal query, config fallback."""
        return cls(
            [
                from_override(override),
                from_terminal(query, options),
                from_fallback(config.fallback_to_light),
            ]
        )

    def resolve(self) -> ColorScheme:
        for strategy in self._strategies:
            scheme = strategy()
            if scheme is not None:
                name = getattr(strategy, "__name__", repr(strategy))
                logger.debug("Color scheme %s resolved by %s", scheme, name)
                return scheme
        msg = "No strategy produced a color scheme"
        raise LookupError(msg)
