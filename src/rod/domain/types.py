"""Color scheme classification."""

from __future__ import annotations

from enum import StrEnum


class ColorScheme(StrEnum):
    """Dark or light terminal background.

    Values double as the display names printed by ``rod print`` and
    accepted in the override file.
    """

    DARK = "Dark"
    LIGHT = "Light"

    @classmethod
    def parse(cls, text: str) -> ColorScheme | None:
        """Return the scheme named exactly *text*, or None."""
        try:
            return cls(text)
        except ValueError:
            return None
