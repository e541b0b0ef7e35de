"""Line drawing for tree-mode listings.

The traversal engine decides what to visit; ``TreeRenderer`` turns each
visited entry into one line of branch connectors plus a name truncated to the
width left after the prefix.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..ansi import display_width
from ..colors import PLAIN, Palette
from ..entries.types import FileEntry
from ..terminal import terminal_width
from .formatting import DEFAULT_NAME_MAX_WIDTH, format_git_status, format_name

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
BLANK_PREFIX = "    "


def connector(is_last: bool) -> str:
    return LAST_BRANCH if is_last else BRANCH


def child_prefix(prefix: str, is_last: bool) -> str:
    """Prefix inherited by the children of an entry drawn under ``prefix``."""
    return prefix + (BLANK_PREFIX if is_last else PIPE_PREFIX)


class TreeRenderer:
    def __init__(
        self,
        palette: Palette = PLAIN,
        width_override: int | None = None,
        width_source: Callable[[int | None], int] = terminal_width,
        show_git: bool = False,
    ) -> None:
        self.palette = palette
        self.width_override = width_override
        self.width_source = width_source
        self.show_git = show_git
        self._width: int | None = None

    def resolved_width(self) -> int:
        """Width resolved on first use and reused for every later line."""
        if self._width is None:
            self._width = self.width_source(self.width_override)
        return self._width

    def name_budget(self, line_prefix: str) -> int:
        """Units left for a name after ``line_prefix``; falls back to the default budget."""
        width = self.resolved_width()
        if width <= 0:
            width = DEFAULT_NAME_MAX_WIDTH
        width -= display_width(line_prefix)
        if width <= 0:
            width = DEFAULT_NAME_MAX_WIDTH
        return width

    def root_line(self, root: Path) -> str:
        return self.palette.paint(f"{root}/", "blue", "bold")

    def entry_line(self, entry: FileEntry, prefix: str, is_last: bool, link_target: str | None = None) -> str:
        line = prefix + connector(is_last)
        budget = self.name_budget(line)
        if entry.is_dir:
            if budget > 1:
                budget -= 1
            line += format_name(entry, budget, self.palette, link_target) + "/"
        else:
            line += format_name(entry, budget, self.palette, link_target)

        if self.show_git and entry.git_status:
            line += " " + format_git_status(entry.git_status, self.palette)
        return line

    def max_depth_line(self, prefix: str) -> str:
        return f"{prefix}{LAST_BRANCH}(max depth reached)"

    def error_line(self, prefix: str, error: BaseException) -> str:
        return f"{prefix}{BRANCH}Error: {error}"
