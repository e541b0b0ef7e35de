"""Directory traversal for the three listing layouts.

``Lister.list`` validates the target and then runs one of:

- flat: a single table for the target directory;
- recursive: breadth-first over subdirectories, one table per directory;
- tree: depth-first, one connector-drawn line per entry.

Traversal state lives on the stack of one ``list`` call; a ``Lister`` can be
reused for several targets.
"""

from __future__ import annotations

import enum
import logging
import os
import stat
import sys
from collections import deque
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TextIO

from .cancellation import CancellationToken
from .colors import Palette, palette_for
from .config import LayoutMode, ListingConfig
from .entries.fs import Filesystem, LocalFilesystem, collect_entries, read_link_target
from .entries.types import FileEntry
from .errors import InvalidTargetError
from .filtering import EntryFilter
from .git_status import StatusProvider, open_status_provider
from .render.table import TableRenderer
from .render.tree import TreeRenderer, child_prefix
from .sorting import sort_entries
from .terminal import terminal_width

logger = logging.getLogger(__name__)

MAX_DIRECTORIES = 10_000
DESCENDANT_SCAN_DEPTH = 5
CANCELLED_MESSAGE = "Operation cancelled by user"


class TraversalOutcome(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DIRECTORY_LIMIT = "directory_limit"


class Lister:
    def __init__(
        self,
        config: ListingConfig,
        filesystem: Filesystem | None = None,
        git_provider_factory: Callable[[Path], StatusProvider | None] = open_status_provider,
        out: TextIO | None = None,
        palette: Palette | None = None,
        width_source: Callable[[int | None], int] = terminal_width,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.filesystem = filesystem or LocalFilesystem()
        self.git_provider_factory = git_provider_factory
        self.out = out if out is not None else sys.stdout
        self.palette = palette if palette is not None else palette_for(config.color_mode, self.out)
        self.width_source = width_source
        self.clock = clock
        self.entry_filter = EntryFilter(config.include_patterns, config.exclude_patterns)

    def _write(self, line: str = "") -> None:
        self.out.write(line + "\n")

    def _resolve_target(self, path: str | os.PathLike[str]) -> Path:
        target = Path(os.path.abspath(path))
        try:
            st = self.filesystem.stat(target)
        except FileNotFoundError:
            raise InvalidTargetError(str(target), "path does not exist") from None
        except OSError as exc:
            raise InvalidTargetError(str(target), exc.strerror or str(exc)) from exc
        if not stat.S_ISDIR(st.st_mode):
            raise InvalidTargetError(str(target), "path is not a directory")
        return target

    def _status_lookup(self, root: Path) -> Callable[[Path], str] | None:
        if not self.config.show_git:
            return None
        provider = self.git_provider_factory(root)
        if provider is None:
            return None
        return provider.status_for

    def list(self, path: str | os.PathLike[str], token: CancellationToken | None = None) -> TraversalOutcome:
        """List ``path`` in the configured layout.

        Raises ``InvalidTargetError`` when ``path`` is missing or not a
        directory. Cancellation and the directory limit end the listing early
        and are reported through the returned outcome.
        """
        target = self._resolve_target(path)
        token = token or CancellationToken()
        status_for = self._status_lookup(target)
        logger.debug("listing %s (%s)", target, self.config.layout.value)

        if self.config.layout is LayoutMode.TREE:
            return self._list_tree(target, token, status_for)
        if self.config.layout is LayoutMode.RECURSIVE:
            return self._list_recursive(target, token, status_for)
        return self._list_flat(target, status_for)

    def _read(self, directory: Path, status_for: Callable[[Path], str] | None) -> list[FileEntry]:
        entries = collect_entries(self.filesystem, directory, status_for, include_owner=self.config.show_user)
        entries = self.entry_filter.apply(entries, self.config.show_hidden)
        sort_entries(entries, self.config.sort_mode, self.config.reverse)
        return entries

    def _table(self) -> TableRenderer:
        return TableRenderer(self.config, self.out, self.palette, self.filesystem, self.width_source)

    def _list_flat(self, target: Path, status_for: Callable[[Path], str] | None) -> TraversalOutcome:
        try:
            entries = self._read(target, status_for)
        except OSError as exc:
            logger.debug("cannot read %s: %s", target, exc)
            self._write(f"Error reading {target}: {exc}")
            return TraversalOutcome.COMPLETED
        self._table().render(entries, self.clock())
        return TraversalOutcome.COMPLETED

    def _list_recursive(
        self,
        root: Path,
        token: CancellationToken,
        status_for: Callable[[Path], str] | None,
    ) -> TraversalOutcome:
        max_depth = self.config.effective_max_depth
        pending: deque[tuple[Path, int]] = deque([(root, 0)])
        table = self._table()
        visited = 0

        while pending:
            if token.cancelled:
                self._write()
                self._write(CANCELLED_MESSAGE)
                return TraversalOutcome.CANCELLED

            directory, depth = pending.popleft()
            indent = "  " * (depth - 1) if depth > 0 else ""

            if depth >= max_depth:
                if depth == max_depth:
                    self._write()
                    self._write(f"{indent}{directory}: (max depth reached)")
                continue

            visited += 1
            if visited > MAX_DIRECTORIES:
                logger.info("directory limit of %d reached under %s", MAX_DIRECTORIES, root)
                self._write()
                self._write(f"Reached maximum directory limit ({MAX_DIRECTORIES}). Stopping recursion.")
                return TraversalOutcome.DIRECTORY_LIMIT

            if depth > 0:
                self._write()
                self._write(f"{indent}{directory}:")

            try:
                entries = self._read(directory, status_for)
            except OSError as exc:
                logger.debug("cannot read %s: %s", directory, exc)
                self._write(f"Error reading {directory}: {exc}")
                continue

            if not entries:
                continue

            table.render(entries, self.clock())
            for entry in entries:
                if entry.is_dir:
                    pending.append((entry.path, depth + 1))

        return TraversalOutcome.COMPLETED

    def _list_tree(
        self,
        root: Path,
        token: CancellationToken,
        status_for: Callable[[Path], str] | None,
    ) -> TraversalOutcome:
        renderer = TreeRenderer(self.palette, self.config.terminal_width, self.width_source, self.config.show_git)
        self._write(renderer.root_line(root))
        if not self._walk_tree(renderer, root, "", 0, token, status_for):
            self._write()
            self._write(CANCELLED_MESSAGE)
            return TraversalOutcome.CANCELLED
        return TraversalOutcome.COMPLETED

    def _tree_children(
        self,
        directory: Path,
        token: CancellationToken,
        status_for: Callable[[Path], str] | None,
    ) -> list[FileEntry]:
        entries = [
            entry
            for entry in collect_entries(self.filesystem, directory, status_for)
            if self.config.show_hidden or not entry.is_hidden
        ]
        entry_filter = self.entry_filter
        if entry_filter.has_include_patterns:
            entries = [
                entry
                for entry in entries
                if (
                    self._has_matching_descendants(entry.path, token)
                    if entry.is_dir
                    else entry_filter.should_include(entry.name) and not entry_filter.should_exclude(entry.name)
                )
            ]
        else:
            entries = [entry for entry in entries if not entry_filter.should_exclude(entry.name)]
        sort_entries(entries, self.config.sort_mode, self.config.reverse)
        return entries

    def _walk_tree(
        self,
        renderer: TreeRenderer,
        directory: Path,
        prefix: str,
        level: int,
        token: CancellationToken,
        status_for: Callable[[Path], str] | None,
    ) -> bool:
        """Draw ``directory``'s subtree; return ``False`` once cancelled."""
        if token.cancelled:
            return False

        max_depth = self.config.effective_max_depth
        if level >= max_depth:
            if level == max_depth:
                self._write(renderer.max_depth_line(prefix))
            return True

        try:
            entries = self._tree_children(directory, token, status_for)
        except OSError as exc:
            logger.debug("cannot read %s: %s", directory, exc)
            self._write(renderer.error_line(prefix, exc))
            return True

        for index, entry in enumerate(entries):
            if token.cancelled:
                return False
            is_last = index == len(entries) - 1
            self._write(renderer.entry_line(entry, prefix, is_last, read_link_target(self.filesystem, entry)))
            if entry.is_dir:
                if not self._walk_tree(
                    renderer, entry.path, child_prefix(prefix, is_last), level + 1, token, status_for
                ):
                    return False
        return True

    def _has_matching_descendants(self, directory: Path, token: CancellationToken) -> bool:
        """Return whether a file at most five levels below ``directory`` passes the include filter.

        Unreadable directories are skipped. Stops at the first match or once
        ``token`` is cancelled.
        """
        pending: list[tuple[Path, int]] = [(directory, 0)]
        while pending:
            if token.cancelled:
                return False
            current, depth = pending.pop()
            try:
                children = self.filesystem.read_directory(current)
            except OSError as exc:
                logger.debug("descendant scan skipped %s: %s", current, exc)
                continue
            for child in children:
                if not self.config.show_hidden and child.name.startswith("."):
                    continue
                if child.is_dir:
                    if depth + 1 < DESCENDANT_SCAN_DEPTH:
                        pending.append((current / child.name, depth + 1))
                    continue
                if self.entry_filter.should_include(child.name) and not self.entry_filter.should_exclude(child.name):
                    return True
        return False
