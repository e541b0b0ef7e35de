"""String shortening for width-constrained cells.

All budgets count code points, and ``ELLIPSIS`` occupies one unit. Slicing
operates on ``str`` indices, so a multi-byte character is never split.
"""

from __future__ import annotations

ELLIPSIS = "…"
SYMLINK_ARROW = " -> "
MIN_SYMLINK_TARGET = 2


def truncate_middle(text: str, max_width: int) -> str:
    """Keep the head and tail of ``text`` around a single ellipsis.

    When the budget left after the ellipsis is odd, the head gets the smaller
    half.
    """
    if max_width <= 0:
        return ""
    if len(text) <= max_width:
        return text
    if max_width == 1:
        return ELLIPSIS

    head = (max_width - 1) // 2
    tail = max_width - 1 - head
    return text[:head] + ELLIPSIS + text[len(text) - tail :]


def truncate_tail(text: str, max_width: int) -> str:
    """Keep the last ``max_width - 1`` characters behind a leading ellipsis."""
    if max_width <= 0:
        return ""
    if len(text) <= max_width:
        return text
    if max_width == 1:
        return ELLIPSIS
    return ELLIPSIS + text[len(text) - (max_width - 1) :]


def truncate_symlink_parts(name: str, target: str, max_width: int) -> tuple[str, str]:
    """Fit ``name -> target`` into ``max_width`` units.

    Returns the possibly shortened ``(name, target)``; an empty target means
    only the name should be drawn. The name is kept intact whenever that
    still leaves room for at least two target units; otherwise the budget
    after the arrow is split, with the target taking the larger half.
    """
    if max_width <= 0:
        return "", ""

    arrow_len = len(SYMLINK_ARROW)
    if len(name) + arrow_len + len(target) <= max_width:
        return name, target

    if max_width <= arrow_len + 1:
        return truncate_middle(name, max_width), ""

    target_budget = max_width - arrow_len - len(name)
    if target_budget >= MIN_SYMLINK_TARGET:
        return name, truncate_tail(target, target_budget)

    remaining = max_width - arrow_len
    target_budget = min(max((remaining + 1) // 2, MIN_SYMLINK_TARGET), remaining - 1)
    name_budget = remaining - target_budget
    if name_budget < 1:
        name_budget = 1
        target_budget = remaining - name_budget

    return truncate_middle(name, name_budget), truncate_tail(target, target_budget)


def truncate_cell(text: str, max_width: int) -> str:
    """Shorten plain cell text with an ASCII ``...`` marker.

    Used by the grid for cells that still exceed their column after layout.
    Budgets of three or less keep a bare prefix; budgets above seven keep
    both ends.
    """
    if max_width <= 0:
        return ""
    if len(text) <= max_width:
        return text
    if max_width <= 3:
        return text[:max_width]
    if max_width > 7:
        keep_start = (max_width - 3) // 2
        keep_end = (max_width - 3) - keep_start
        return text[:keep_start] + "..." + text[len(text) - keep_end :]
    return text[: max_width - 3] + "..."
