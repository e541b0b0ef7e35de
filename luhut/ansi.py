"""ANSI-aware text measurement helpers.

Provides escape stripping and display-width math for colored cell text.
Column sizing and truncation budgets are computed on the stripped text so
color codes never count toward a column's width.
"""

from __future__ import annotations

import re

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[^A-Za-z]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove every ``ESC [ <parameters> <letter>`` sequence from ``text``."""
    if "\x1b" not in text:
        return text
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the visible width of ``text`` in code points.

    Escape sequences are stripped first; every remaining code point counts as
    one unit.
    """
    return len(strip_ansi(text))


def pad_ansi(text: str, width: int) -> str:
    """Right-pad a styled string with spaces to ``width`` visible units."""
    return text + " " * max(0, width - display_width(text))


def center_ansi(text: str, width: int) -> str:
    """Center a styled string within ``width`` visible units.

    Odd padding puts the extra space on the right.
    """
    padding = max(0, width - display_width(text))
    left = padding // 2
    return " " * left + text + " " * (padding - left)
