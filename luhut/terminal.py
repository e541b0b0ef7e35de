"""Terminal width discovery for width-adaptive rendering.

Sources are tried in order: explicit override, ``COLUMNS``, a live query of
the output stream, ``tput cols``, and finally a fixed fallback. Widths read
from the environment or the terminal keep a safety margin free.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

FALLBACK_WIDTH = 70
SAFETY_MARGIN = 10


def _parse_positive_int(text: str | None) -> int | None:
    if not text:
        return None
    try:
        value = int(text.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def _query_stream_width(fd: int) -> int | None:
    try:
        columns = os.get_terminal_size(fd).columns
    except (OSError, ValueError):
        return None
    return columns if columns > 0 else None


def _query_tput_width(timeout_seconds: float) -> int | None:
    try:
        proc = subprocess.run(
            ["tput", "cols"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if proc.returncode != 0:
        return None
    return _parse_positive_int(proc.stdout)


def terminal_width(
    override: int | None = None,
    fd: int = 1,
    environ: dict[str, str] | None = None,
    timeout_seconds: float = 0.5,
) -> int:
    """Return the usable output width in display units.

    ``override`` is returned unchanged; every discovered width has
    ``SAFETY_MARGIN`` subtracted.
    """
    if override is not None and override > 0:
        return override

    env = os.environ if environ is None else environ
    columns = _parse_positive_int(env.get("COLUMNS"))
    if columns is None:
        columns = _query_stream_width(fd)
    if columns is None:
        columns = _query_tput_width(timeout_seconds)
    if columns is None:
        logger.debug("terminal width unavailable, using fallback of %d", FALLBACK_WIDTH)
        return FALLBACK_WIDTH
    return columns - SAFETY_MARGIN
