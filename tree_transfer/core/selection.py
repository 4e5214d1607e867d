from __future__ import annotations

"""Default-selection policy applied after a subtree leaves a pane."""

from typing import Sequence

__all__ = ["next_selection"]


def next_selection(previous_list: Sequence[str], moved_id: str, new_list: Sequence[str]) -> str:
    """Pick the identifier to select in a pane after ``moved_id`` left it.

    Keeps the cursor at the moved item's former position, clamped to the end
    of the new list. Returns "" when the pane is now empty.
    """
    if not new_list:
        return ""
    try:
        index = list(previous_list).index(moved_id)
    except ValueError:
        index = 0
    return new_list[min(index, len(new_list) - 1)]
