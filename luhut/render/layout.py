"""Column sizing for width-constrained tables.

Widths are measured on already-colored cell text with escape sequences
stripped, clamped into per-column ``[min, max]`` bands, and shrunk
proportionally when the table would overflow the available width.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from ..ansi import display_width
from ..errors import LayoutTooSmallError

DEFAULT_MIN_WIDTH = 4
SIZE_COLUMN = 1
PERMISSIONS_COLUMN = 3
NON_SHRINKABLE_COLUMNS = frozenset({SIZE_COLUMN, PERMISSIONS_COLUMN})


def natural_widths(rows: Sequence[Sequence[str]]) -> list[int]:
    """Return the widest visible cell per column, header row included."""
    if not rows:
        return []
    widths = [0] * len(rows[0])
    for row in rows:
        for idx, cell in enumerate(row):
            width = display_width(cell)
            if width > widths[idx]:
                widths[idx] = width
    return widths


def lookup_min(mins: Sequence[int], idx: int, fallback: int = DEFAULT_MIN_WIDTH) -> int:
    """Return the configured minimum for column ``idx``, or ``fallback`` when unset."""
    if idx < len(mins) and mins[idx] > 0:
        return mins[idx]
    return fallback


def lookup_max(maxs: Sequence[int], idx: int) -> int | None:
    if idx < len(maxs) and maxs[idx] > 0:
        return maxs[idx]
    return None


def border_overhead(column_count: int) -> int:
    """Width taken by separators (three per inner boundary) and the two outer borders."""
    if column_count <= 0:
        return 0
    return (column_count - 1) * 3 + 2


def clamp_widths(widths: Sequence[int], mins: Sequence[int], maxs: Sequence[int]) -> list[int]:
    clamped: list[int] = []
    for idx, width in enumerate(widths):
        width = max(width, lookup_min(mins, idx))
        upper = lookup_max(maxs, idx)
        if upper is not None:
            width = min(width, max(upper, lookup_min(mins, idx)))
        clamped.append(width)
    return clamped


def shrink_widths(
    widths: list[int],
    mins: Sequence[int],
    excess: int,
    exempt: Collection[int] = NON_SHRINKABLE_COLUMNS,
) -> list[int]:
    """Remove up to ``excess`` units proportionally from shrinkable columns.

    Each eligible column loses ``floor(excess * slack / total_slack)`` where
    slack is its width above its minimum. Floor rounding may leave a few
    units of the excess unremoved.
    """
    if excess <= 0:
        return widths

    slack = [
        0 if idx in exempt else max(0, width - lookup_min(mins, idx))
        for idx, width in enumerate(widths)
    ]
    total_slack = sum(slack)
    if total_slack <= 0:
        return widths

    removed = 0
    for idx, column_slack in enumerate(slack):
        if column_slack <= 0:
            continue
        amount = min((excess * column_slack) // total_slack, column_slack, excess - removed)
        if amount <= 0:
            continue
        widths[idx] = max(widths[idx] - amount, lookup_min(mins, idx))
        removed += amount
    return widths


def compute_column_widths(
    rows: Sequence[Sequence[str]],
    mins: Sequence[int],
    maxs: Sequence[int],
    available_width: int,
    exempt: Collection[int] = NON_SHRINKABLE_COLUMNS,
) -> list[int]:
    """Return final column widths for ``rows`` within ``available_width``.

    Raises ``LayoutTooSmallError`` when the borders plus every column at its
    narrowest possible width cannot fit. Exempt columns never shrink, so they
    count at their clamped width rather than their minimum.
    """
    widths = clamp_widths(natural_widths(rows), mins, maxs)
    if not widths:
        return widths

    overhead = border_overhead(len(widths))
    minimum_total = overhead + sum(
        width if idx in exempt else lookup_min(mins, idx) for idx, width in enumerate(widths)
    )
    if available_width < minimum_total:
        raise LayoutTooSmallError(minimum_total, available_width)

    total = sum(widths) + overhead
    if total > available_width:
        shrink_widths(widths, mins, total - available_width, exempt)
    return widths
