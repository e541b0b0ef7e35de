"""Per-invocation listing options.

``ListingConfig`` is built once by the CLI and shared read-only by the
traversal engine and both renderers.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from .colors import COLOR_MODES
from .errors import ConfigError
from .sorting import SortMode

DEFAULT_MAX_DEPTH = 30
BORDER_STYLES = ("single", "double", "bold")


class LayoutMode(enum.Enum):
    FLAT = "flat"
    RECURSIVE = "recursive"
    TREE = "tree"

    @classmethod
    def from_flags(cls, tree: bool = False, recursive: bool = False) -> "LayoutMode":
        if tree:
            return cls.TREE
        if recursive:
            return cls.RECURSIVE
        return cls.FLAT


def split_patterns(values: Iterable[str] | None) -> tuple[str, ...]:
    """Flatten repeated and comma-separated pattern arguments, dropping blanks."""
    patterns: list[str] = []
    for value in values or ():
        for part in value.split(","):
            part = part.strip()
            if part:
                patterns.append(part)
    return tuple(patterns)


@dataclass(frozen=True)
class ListingConfig:
    sort_mode: SortMode = SortMode.NAME
    reverse: bool = False
    show_git: bool = False
    show_hidden: bool = False
    show_user: bool = False
    show_exact_time: bool = False
    show_octal: bool = False
    layout: LayoutMode = LayoutMode.FLAT
    max_depth: int = 0
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    color_mode: str = "auto"
    border_style: str = "single"
    terminal_width: int | None = None

    @property
    def effective_max_depth(self) -> int:
        """Recursion ceiling with ``0`` mapped to the engine default."""
        return self.max_depth if self.max_depth > 0 else DEFAULT_MAX_DEPTH

    def validate(self) -> "ListingConfig":
        """Raise ``ConfigError`` for out-of-range options; return ``self`` otherwise."""
        if self.max_depth < 0:
            raise ConfigError("max depth cannot be negative")
        if self.color_mode and self.color_mode not in COLOR_MODES:
            raise ConfigError(f"invalid color mode {self.color_mode!r} (expected always, auto or never)")
        if self.border_style not in BORDER_STYLES:
            raise ConfigError(f"invalid border style {self.border_style!r} (expected single, double or bold)")
        if self.terminal_width is not None and self.terminal_width <= 0:
            raise ConfigError("terminal width must be positive")
        return self
