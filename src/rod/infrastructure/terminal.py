"""Terminal background query.

Asks the controlling terminal for its foreground (OSC 10) and background
(OSC 11) colors, followed by a primary device attributes request (DA1).
Every terminal answers DA1, so its reply marks the end of the exchange:
terminals without OSC 10/11 support are detected without waiting for the
full timeout.

The query is best-effort.  No TTY, a terminal that stays silent, or a
reply that cannot be parsed all yield ``None``; nothing here raises for
those cases.
"""

from __future__ import annotations

import logging
import os
import re
import select
import termios
import time

from pydantic import BaseModel

from rod.domain.types import ColorScheme

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"

# Relative luminance below which a background counts as dark when the
# terminal reports no foreground color to compare against.
DARK_THRESHOLD = 0.5

_QUERY = b"\x1b]10;?\x07\x1b]11;?\x07\x1b[c"
_DA1_REPLY = re.compile(rb"\x1b\[\?[\d;]*c")
_OSC_REPLY = re.compile(rb"\x1b\]1([01]);([^\x07\x1b]*)(?:\x07|\x1b\\)")

RGB = tuple[float, float, float]


class QueryOptions(BaseModel):
    """Tuning for :func:`query_color_scheme`."""

    model_config = {"frozen": True}

    timeout: float = 1.0


def query_color_scheme(options: QueryOptions | None = None) -> ColorScheme | None:
    """Return the terminal's color scheme, or None if it cannot be determined."""
    options = options or QueryOptions()
    if os.environ.get("TERM") == "dumb":
        logger.debug("TERM=dumb, skipping terminal query")
        return None
    try:
        reply = _exchange(options.timeout)
    except (OSError, termios.error) as exc:
        logger.debug("Terminal query unavailable: %s", exc)
        return None
    scheme = interpret_reply(reply)
    logger.debug("Terminal query reply %r -> %s", reply, scheme)
    return scheme


def interpret_reply(reply: bytes) -> ColorScheme | None:
    """Classify a raw terminal reply containing OSC 10/11 answers."""
    colors: dict[bytes, RGB] = {}
    for match in _OSC_REPLY.finditer(reply):
        rgb = parse_color(match.group(2).decode("ascii", "ignore"))
        if rgb is not None:
            colors[match.group(1)] = rgb

    background = colors.get(b"1")
    if background is None:
        return None
    return classify(background, colors.get(b"0"))


def classify(background: RGB, foreground: RGB | None = None) -> ColorScheme:
    """Dark when the background is darker than the text drawn on it."""
    bg = luminance(background)
    if foreground is not None:
        fg = luminance(foreground)
        if fg != bg:
            return ColorScheme.DARK if bg < fg else ColorScheme.LIGHT
    return ColorScheme.DARK if bg < DARK_THRESHOLD else ColorScheme.LIGHT


def parse_color(spec: str) -> RGB | None:
    """Parse an X11 color reply into channels scaled to ``0.0..1.0``.

    Accepts ``rgb:R/G/B`` and ``rgba:R/G/B/A`` with 1-4 hex digits per
    channel, and ``#RGB`` style hex with 1-4 digits per channel.
    """
    spec = spec.strip()
    if spec.startswith(("rgb:", "rgba:")):
        parts = spec.split(":", 1)[1].split("/")
        expected = 4 if spec.startswith("rgba:") else 3
        if len(parts) != expected:
            return None
        channels = parts[:3]
    elif spec.startswith("#") and len(spec) > 1 and (len(spec) - 1) % 3 == 0:
        width = (len(spec) - 1) // 3
        digits = spec[1:]
        channels = [digits[i * width : (i + 1) * width] for i in range(3)]
    else:
        return None

    scaled: list[float] = []
    for channel in channels:
        if not 1 <= len(channel) <= 4:
            return None
        try:
            value = int(channel, 16)
        except ValueError:
            return None
        scaled.append(value / (16 ** len(channel) - 1))
    return scaled[0], scaled[1], scaled[2]


def luminance(rgb: RGB) -> float:
    """Relative luminance of an sRGB color (channels in ``0.0..1.0``)."""

    def lin(c: float) -> float:
        return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * lin(r) + 0.7152 * lin(g) + 0.0722 * lin(b)


def _exchange(timeout: float) -> bytes:
    """Send the query to the controlling terminal and collect the reply."""
    fd = os.open(TTY_PATH, os.O_RDWR | os.O_NOCTTY)
    try:
        saved = termios.tcgetattr(fd)
        raw = termios.tcgetattr(fd)
        raw[3] &= ~(termios.ICANON | termios.ECHO)
        termios.tcsetattr(fd, termios.TCSANOW, raw)
        try:
            os.write(fd, _QUERY)
            return _read_reply(fd, timeout)
        finally:
            termios.tcsetattr(fd, termios.TCSANOW, saved)
    finally:
        os.close(fd)


def _read_reply(fd: int, timeout: float) -> bytes:
    deadline = time.monotonic() + timeout
    buf = b""
    while not _DA1_REPLY.search(buf):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug("Terminal query timed out after %.2fs", timeout)
            break
        ready, _, _ = select.select([fd], [], [], remaining)
        if not ready:
            continue
        chunk = os.read(fd, 1024)
        if not chunk:
            break
        buf += chunk
    return buf
