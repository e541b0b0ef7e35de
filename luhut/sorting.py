"""Sort strategies for directory batches.

Each ``SortMode`` registers a key builder in ``_STRATEGIES``. Name, size, and
extension orderings keep directories ahead of files regardless of ``reverse``;
time ordering is purely chronological. All orderings rely on ``list.sort``
stability, so entries with equal keys keep their read order.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from .entries.types import FileEntry


class SortMode(enum.Enum):
    NAME = "name"
    TIME = "time"
    SIZE = "size"
    EXTENSION = "extension"

    @classmethod
    def from_flags(cls, sort_size: bool = False, sort_extension: bool = False, sort_modified: bool = False) -> "SortMode":
        """Resolve mutually exclusive sort flags by priority size > extension > time > name."""
        if sort_size:
            return cls.SIZE
        if sort_extension:
            return cls.EXTENSION
        if sort_modified:
            return cls.TIME
        return cls.NAME


@dataclass(frozen=True)
class _Strategy:
    key: Callable[[FileEntry], object]
    directories_first: bool
    descending: bool


def _name_key(entry: FileEntry) -> str:
    return entry.name.lower()


def _time_key(entry: FileEntry) -> object:
    return entry.modified_at


def _size_key(entry: FileEntry) -> int:
    return entry.size


def _extension_key(entry: FileEntry) -> str:
    return entry.extension.lower()


_STRATEGIES: dict[SortMode, _Strategy] = {
    SortMode.NAME: _Strategy(key=_name_key, directories_first=True, descending=False),
    SortMode.TIME: _Strategy(key=_time_key, directories_first=False, descending=True),
    SortMode.SIZE: _Strategy(key=_size_key, directories_first=True, descending=True),
    SortMode.EXTENSION: _Strategy(key=_extension_key, directories_first=True, descending=False),
}


def sort_entries(entries: list[FileEntry], mode: SortMode, reverse: bool = False) -> None:
    """Order ``entries`` in place according to ``mode``.

    ``reverse`` only flips the strategy's own key; the directory-first
    grouping is applied afterwards as a separate stable pass.
    """
    strategy = _STRATEGIES[mode]
    descending = strategy.descending != reverse
    entries.sort(key=strategy.key, reverse=descending)
    if strategy.directories_first:
        entries.sort(key=lambda entry: not entry.is_dir)


def sorted_entries(entries: list[FileEntry], mode: SortMode, reverse: bool = False) -> list[FileEntry]:
    ordered = list(entries)
    sort_entries(ordered, mode, reverse)
    return ordered
