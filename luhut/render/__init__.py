"""Width-adaptive output for listings.

Submodules:
- ``truncate``: middle, tail, symlink and cell shortening
- ``layout``: column widths with min/max bands and proportional shrink
- ``formatting``: per-cell text and color
- ``table`` / ``tree``: the two output layouts
"""

from __future__ import annotations

from .table import BoxTable, TableRenderer
from .tree import TreeRenderer

__all__ = ["BoxTable", "TableRenderer", "TreeRenderer"]
