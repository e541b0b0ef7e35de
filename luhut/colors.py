"""Named ANSI styles and the palette used by renderers.

A ``Palette`` wraps text in SGR sequences for a set of named styles. Disabled
palettes return text untouched, so renderers never branch on color mode.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TextIO

RESET = "\033[0m"

STYLE_CODES: dict[str, str] = {
    "bold": "1",
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "bright_black": "90",
    "bright_red": "91",
    "bright_green": "92",
    "bright_yellow": "93",
    "bright_blue": "94",
    "bright_magenta": "95",
    "bright_cyan": "96",
    "bright_white": "97",
}

COLOR_MODES = ("always", "auto", "never")


def sgr(*styles: str) -> str:
    """Return the opening SGR sequence for ``styles``.

    Unknown style names raise ``KeyError``.
    """
    return "\033[" + ";".join(STYLE_CODES[style] for style in styles) + "m"


@dataclass(frozen=True)
class Palette:
    """Style-wrapping capability shared by all renderers."""

    enabled: bool = True

    def paint(self, text: str, *styles: str) -> str:
        if not self.enabled or not styles or not text:
            return text
        return f"{sgr(*styles)}{text}{RESET}"


PLAIN = Palette(enabled=False)


def color_enabled(color_mode: str, stream: TextIO | None = None, environ: dict[str, str] | None = None) -> bool:
    """Resolve a color mode to an on/off decision.

    ``auto`` (or an empty mode) enables color only when ``stream`` is a TTY
    and ``NO_COLOR`` is unset.
    """
    mode = (color_mode or "auto").strip().lower()
    if mode == "always":
        return True
    if mode == "never":
        return False
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    if stream is None:
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if callable(isatty) else False
    except ValueError:
        return False


def palette_for(color_mode: str, stream: TextIO | None = None) -> Palette:
    return Palette(enabled=color_enabled(color_mode, stream))
