"""Filesystem capability and per-directory entry collection.

``LocalFilesystem`` is the read-only capability used in production; the
traversal engine only depends on the ``Filesystem`` protocol so tests can
substitute in-memory doubles.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol

from .types import FileEntry, RawEntry

try:
    import grp
    import pwd
except ImportError:  # pragma: no cover - non-POSIX platforms
    grp = None
    pwd = None

logger = logging.getLogger(__name__)

UNKNOWN_OWNER = "unknown"


class Filesystem(Protocol):
    def read_directory(self, path: Path) -> list[RawEntry]: ...

    def stat(self, path: Path) -> os.stat_result: ...

    def read_symlink(self, path: Path) -> str: ...

    def owner(self, path: Path) -> tuple[str, str]: ...


class LocalFilesystem:
    """Read-only access to the real filesystem.

    ``read_directory`` raises ``OSError`` when the directory itself cannot be
    listed. Children whose metadata cannot be read are skipped.
    """

    def read_directory(self, path: Path) -> list[RawEntry]:
        children: list[RawEntry] = []
        with os.scandir(path) as entries:
            for child in entries:
                try:
                    st = child.stat(follow_symlinks=False)
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError as exc:
                    logger.debug("skipping %s: %s", child.path, exc)
                    continue
                children.append(
                    RawEntry(
                        name=child.name,
                        size=int(st.st_size),
                        mode=int(st.st_mode),
                        modified_at=datetime.fromtimestamp(st.st_mtime),
                        is_dir=is_dir,
                    )
                )
        return children

    def stat(self, path: Path) -> os.stat_result:
        return os.stat(path)

    def read_symlink(self, path: Path) -> str:
        return os.readlink(path)

    def owner(self, path: Path) -> tuple[str, str]:
        try:
            st = os.lstat(path)
        except OSError:
            return UNKNOWN_OWNER, UNKNOWN_OWNER
        return _user_name(st.st_uid), _group_name(st.st_gid)


def _user_name(uid: int) -> str:
    if pwd is None:
        return UNKNOWN_OWNER
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return UNKNOWN_OWNER


def _group_name(gid: int) -> str:
    if grp is None:
        return UNKNOWN_OWNER
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return UNKNOWN_OWNER


def read_link_target(filesystem: Filesystem, entry: FileEntry) -> str | None:
    """Return the symlink target of ``entry``, or ``None`` for non-links and unreadable links."""
    if not entry.is_symlink:
        return None
    try:
        return filesystem.read_symlink(entry.path)
    except OSError as exc:
        logger.debug("cannot read link target of %s: %s", entry.path, exc)
        return None


def collect_entries(
    filesystem: Filesystem,
    directory: Path,
    git_status_for: Callable[[Path], str] | None = None,
    include_owner: bool = False,
) -> list[FileEntry]:
    """Read ``directory`` and build fresh entries with derived metadata attached.

    ``OSError`` from listing the directory propagates to the caller.
    """
    entries: list[FileEntry] = []
    for raw in filesystem.read_directory(directory):
        entry = FileEntry.from_raw(directory, raw)
        if git_status_for is not None:
            entry = entry.with_git_status(git_status_for(entry.path))
        if include_owner:
            entry = entry.with_owner(*filesystem.owner(entry.path))
        entries.append(entry)
    return entries


__all__ = [
    "Filesystem",
    "LocalFilesystem",
    "UNKNOWN_OWNER",
    "collect_entries",
    "read_link_target",
]
