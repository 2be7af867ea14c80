"""Override file — a manual color scheme selection.

The file holds ``Dark`` or ``Light`` (trailing whitespace ignored).  Any
other content, or no readable file at all, means "no opinion" and the
terminal query decides.  rod only ever reads this file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rod.config.discovery import app_dir
from rod.domain.types import ColorScheme

logger = logging.getLogger(__name__)

OVERRIDE_FILENAME = "override"


def override_path() -> Path:
    """Well-known location of the override file."""
    return app_dir() / OVERRIDE_FILENAME


def read_override(path: Path | None = None) -> ColorScheme | None:
    """Read the override file at *path* (default: :func:`override_path`)."""
    if path is None:
        path = override_path()
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("No usable override file at %s: %s", path, exc)
        content = ""

    scheme = ColorScheme.parse(content.rstrip())
    logger.debug("Override state from %s: %s", path, scheme)
    return scheme
