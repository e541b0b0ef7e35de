"""Bordered table output for one directory batch.

``BoxTable`` draws a grid for precomputed column widths using box-drawing
characters. ``TableRenderer`` builds the listing rows, sizes the columns via
the layout engine, and writes the grid or a too-small notice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TextIO

from ..ansi import center_ansi, display_width, pad_ansi, strip_ansi
from ..colors import PLAIN, Palette
from ..config import ListingConfig
from ..entries.fs import Filesystem, LocalFilesystem, read_link_target
from ..entries.types import FileEntry
from ..errors import LayoutTooSmallError
from ..terminal import terminal_width
from .formatting import (
    format_git_status,
    format_modified,
    format_name,
    format_owner,
    format_permissions,
    format_size,
)
from .layout import compute_column_widths
from .truncate import truncate_cell

logger = logging.getLogger(__name__)

MIN_TABLE_WIDTH = 40
NAME_COLUMN = 0
TOO_SMALL_NOTICE = "Terminal is too small to display the table. Please widen your terminal window."


@dataclass(frozen=True)
class BorderChars:
    horizontal: str
    vertical: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    top_tee: str
    bottom_tee: str
    left_tee: str
    right_tee: str
    cross: str


BORDER_CHARS: dict[str, BorderChars] = {
    "single": BorderChars("─", "│", "┌", "┐", "└", "┘", "┬", "┴", "├", "┤", "┼"),
    "double": BorderChars("═", "║", "╔", "╗", "╚", "╝", "╦", "╩", "╠", "╣", "╬"),
    "bold": BorderChars("━", "┃", "┏", "┓", "┗", "┛", "┳", "┻", "┣", "┫", "╋"),
}


class BoxTable:
    """Grid of pre-rendered cells drawn at fixed column widths.

    The first row is the header: it is centered and styled, and a rule
    separates it from the data rows whenever any exist.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[str]],
        widths: Sequence[int],
        border_style: str = "single",
        palette: Palette = PLAIN,
        header_style: tuple[str, ...] = ("white", "bold"),
        border_color: tuple[str, ...] = ("green",),
    ) -> None:
        self.rows = rows
        self.widths = list(widths)
        self.chars = BORDER_CHARS.get(border_style, BORDER_CHARS["single"])
        self.palette = palette
        self.header_style = header_style
        self.border_color = border_color

    def _rule(self, left: str, join: str, right: str) -> str:
        segments = [self.chars.horizontal * (width + 2) for width in self.widths]
        return self.palette.paint(left + join.join(segments) + right, *self.border_color)

    def _cell(self, text: str, width: int, is_header: bool) -> str:
        if display_width(text) > width:
            return " " + pad_ansi(truncate_cell(strip_ansi(text), width), width) + " "
        if is_header:
            return " " + center_ansi(text, width) + " "
        return " " + pad_ansi(text, width) + " "

    def _row(self, row: Sequence[str], is_header: bool) -> str:
        bar = self.palette.paint(self.chars.vertical, *self.border_color)
        cells: list[str] = []
        for idx, width in enumerate(self.widths):
            text = row[idx] if idx < len(row) else ""
            cell = self._cell(text, width, is_header)
            if is_header:
                cell = self.palette.paint(cell, *self.header_style)
            cells.append(cell)
        return bar + bar.join(cells) + bar

    def lines(self) -> list[str]:
        if not self.rows:
            return []
        c = self.chars
        out = [self._rule(c.top_left, c.top_tee, c.top_right), self._row(self.rows[0], True)]
        if len(self.rows) > 1:
            out.append(self._rule(c.left_tee, c.cross, c.right_tee))
            out.extend(self._row(row, False) for row in self.rows[1:])
        out.append(self._rule(c.bottom_left, c.bottom_tee, c.bottom_right))
        return out


def column_constraints(config: ListingConfig) -> tuple[list[int], list[int]]:
    """Per-column ``(mins, maxs)`` for the columns enabled by ``config``."""
    mins = [15, 6, 10, 10]
    maxs = [50, 10, 15, 12]
    if config.show_exact_time:
        mins[2] = 16
        maxs[2] = 17
    if config.show_git:
        mins.append(6)
        maxs.append(12)
    if config.show_user:
        mins.extend((6, 6))
        maxs.extend((12, 12))
    return mins, maxs


class TableRenderer:
    def __init__(
        self,
        config: ListingConfig,
        out: TextIO,
        palette: Palette = PLAIN,
        filesystem: Filesystem | None = None,
        width_source: Callable[[int | None], int] = terminal_width,
    ) -> None:
        self.config = config
        self.out = out
        self.palette = palette
        self.filesystem = filesystem or LocalFilesystem()
        self.width_source = width_source

    def headers(self) -> list[str]:
        headers = ["Name", "Size", "Modified", "Perms"]
        if self.config.show_git:
            headers.append("Git")
        if self.config.show_user:
            headers.extend(("User", "Group"))
        return headers

    def _name_cells(self, entries: Sequence[FileEntry], targets: Sequence[str | None], max_width: int) -> list[str]:
        return [
            format_name(entry, max_width, self.palette, link_target=target)
            for entry, target in zip(entries, targets)
        ]

    def build_rows(
        self,
        entries: Sequence[FileEntry],
        now: datetime,
        name_width: int,
        targets: Sequence[str | None] | None = None,
    ) -> list[list[str]]:
        if targets is None:
            targets = [read_link_target(self.filesystem, entry) for entry in entries]
        names = self._name_cells(entries, targets, name_width)
        rows: list[list[str]] = [self.headers()]
        for entry, name in zip(entries, names):
            row = [
                name,
                format_size(entry.size, entry.is_dir, self.palette),
                format_modified(entry.modified_at, now, self.config.show_exact_time, self.palette),
                format_permissions(entry.mode, self.config.show_octal, self.palette),
            ]
            if self.config.show_git:
                row.append(format_git_status(entry.git_status, self.palette))
            if self.config.show_user:
                row.append(format_owner(entry.owner_user, self.palette))
                row.append(format_owner(entry.owner_group, self.palette))
            rows.append(row)
        return rows

    def render_lines(self, entries: Sequence[FileEntry], now: datetime) -> list[str]:
        """Return the grid lines for ``entries``, or the too-small notice."""
        if not entries:
            return []

        available = max(self.width_source(self.config.terminal_width), MIN_TABLE_WIDTH)
        mins, maxs = column_constraints(self.config)
        targets = [read_link_target(self.filesystem, entry) for entry in entries]
        rows = self.build_rows(entries, now, maxs[NAME_COLUMN], targets)
        try:
            widths = compute_column_widths(rows, mins, maxs, available)
        except LayoutTooSmallError as exc:
            logger.debug("table layout infeasible: %s", exc)
            return [TOO_SMALL_NOTICE]

        # Names wider than the shrunk column are re-truncated by the name formatter.
        name_width = widths[NAME_COLUMN]
        if any(display_width(row[NAME_COLUMN]) > name_width for row in rows[1:]):
            for row, name in zip(rows[1:], self._name_cells(entries, targets, name_width)):
                row[NAME_COLUMN] = name

        return BoxTable(rows, widths, self.config.border_style, self.palette).lines()

    def render(self, entries: Sequence[FileEntry], now: datetime) -> bool:
        """Write the table for ``entries``; return ``False`` when nothing was drawn."""
        lines = self.render_lines(entries, now)
        for line in lines:
            self.out.write(line + "\n")
        return bool(lines) and lines != [TOO_SMALL_NOTICE]
