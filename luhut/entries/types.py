"""Domain datatypes for entries observed during one listing pass."""

from __future__ import annotations

import stat
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class RawEntry:
    """One directory child as reported by a filesystem capability."""

    name: str
    size: int
    mode: int
    modified_at: datetime
    is_dir: bool


@dataclass(frozen=True)
class FileEntry:
    """Filesystem object captured for exactly one render pass.

    ``is_hidden`` is derived from ``name`` at construction and cannot be
    passed in. Git and ownership metadata are attached with
    :meth:`with_git_status` / :meth:`with_owner`, which return new entries.
    """

    name: str
    path: Path
    size: int
    mode: int
    modified_at: datetime
    is_dir: bool
    is_hidden: bool = field(init=False)
    git_status: str = ""
    owner_user: str | None = None
    owner_group: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "is_hidden", self.name.startswith("."))

    @classmethod
    def from_raw(cls, directory: Path, raw: RawEntry) -> "FileEntry":
        return cls(
            name=raw.name,
            path=directory / raw.name,
            size=raw.size,
            mode=raw.mode,
            modified_at=raw.modified_at,
            is_dir=raw.is_dir,
        )

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def is_executable(self) -> bool:
        return bool(stat.S_IMODE(self.mode) & 0o111)

    @property
    def extension(self) -> str:
        """Text after the last ``.`` in the name, or ``""`` when there is none."""
        _head, dot, tail = self.name.rpartition(".")
        return tail if dot else ""

    def with_git_status(self, status: str) -> "FileEntry":
        return replace(self, git_status=status or "")

    def with_owner(self, user: str, group: str) -> "FileEntry":
        return replace(self, owner_user=user, owner_group=group)


__all__ = [
    "RawEntry",
    "FileEntry",
]
