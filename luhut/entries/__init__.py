"""Entry model and filesystem capability for listing passes.

This package contains the non-rendering primitives:
- the ``FileEntry`` value observed for one render pass
- the ``Filesystem`` protocol and its local implementation
- per-directory entry collection with git/owner metadata attached
"""

from __future__ import annotations

from .types import FileEntry, RawEntry
from .fs import Filesystem, LocalFilesystem, UNKNOWN_OWNER, collect_entries, read_link_target

__all__ = [
    "FileEntry",
    "RawEntry",
    "Filesystem",
    "LocalFilesystem",
    "UNKNOWN_OWNER",
    "collect_entries",
    "read_link_target",
]
