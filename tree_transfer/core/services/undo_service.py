from __future__ import annotations

"""Undo/redo snapshot management for the two-pane transfer state.

This service is UI-agnostic and performs pure in-memory history tracking of
both pane trees and their selections. Trees are stored as plain mappings
through ``core.codec``, so a stored snapshot never aliases a live tree and
any identifier string can be recorded.

Design principles
-----------------
- No UI imports and no I/O (filesystem/console).
- Snapshots are immutable blobs once stored.
- Redo stack is cleared on every new snapshot push (standard undo/redo behavior).
- Memory usage controlled by a max_history policy (trim oldest).
"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional

from tree_transfer.core.codec import tree_from_mapping, tree_to_mapping
from tree_transfer.core.exceptions import TreeStructureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    """Immutable in-memory snapshot of a transfer state.

    Attributes
    ----------
    left_tree, right_tree :
        Pane trees as nested ``{"id", "children"}`` mappings.
    left_selection, right_selection :
        Selected identifiers ("" when nothing is selected).
    """

    left_tree: Dict[str, Any]
    right_tree: Dict[str, Any]
    left_selection: str
    right_selection: str


class UndoService:
    """Manage undo/redo stacks for a transfer state holder.

    A state holder is any object exposing ``left_tree``, ``right_tree``,
    ``left_selection`` and ``right_selection`` attributes, such as
    :class:`~tree_transfer.core.models.TransferState` or the transfer
    controller. Undo/redo restore snapshots into the holder in place.

    Parameters
    ----------
    max_history : int, default=50
        Maximum number of snapshots to keep per stack. Values below 1 are
        coerced to 1.

    Notes
    -----
    Callers push a snapshot BEFORE a mutation (baseline) and AFTER it (post).
    Undo then restores the baseline and moves the post snapshot to redo.

    Examples
    --------
    >>> state = TransferState(left, right)
    >>> svc = UndoService(max_history=10)
    >>> svc.push_snapshot(state)
    >>> # mutate state, then:
    >>> svc.push_snapshot(state)
    >>> svc.undo(state)
    True
    """

    def __init__(self, max_history: int = 50) -> None:
        self._max_history: int = max(1, int(max_history))
        self._undo_stack: List[_Snapshot] = []
        self._redo_stack: List[_Snapshot] = []

    # --------------------------------------------------------------------- API

    def push_snapshot(self, state: Any) -> None:
        """Capture the current state and push it onto the undo stack.

        The redo stack is cleared and the undo stack trimmed to max_history.
        """
        snap = self._create_snapshot(state)
        if snap is None:
            return
        self._undo_stack.append(snap)
        self._redo_stack.clear()
        self._trim(self._undo_stack)

    def undo(self, state: Any) -> bool:
        """Restore the previous (baseline) snapshot into ``state``.

        Given undo_stack = [..., baseline, post], pops 'post' onto the redo
        stack and restores 'baseline'. Returns False when no baseline exists
        or restoring fails; the stacks are then left as they were.
        """
        if not self._undo_stack:
            return False

        post_snap = self._undo_stack.pop()
        if not self._undo_stack:
            self._undo_stack.append(post_snap)
            return False

        baseline_snap = self._undo_stack[-1]
        if not self._restore_snapshot(state, baseline_snap):
            self._undo_stack.append(post_snap)
            return False

        self._redo_stack.append(post_snap)
        self._trim(self._redo_stack)
        return True

    def redo(self, state: Any) -> bool:
        """Re-apply the most recently undone snapshot."""
        if not self._redo_stack:
            return False

        post_snap = self._redo_stack[-1]
        if not self._restore_snapshot(state, post_snap):
            return False

        self._redo_stack.pop()
        self._undo_stack.append(post_snap)
        self._trim(self._undo_stack)
        return True

    def can_undo(self) -> bool:
        """Return True if an undo operation is currently possible."""
        return len(self._undo_stack) > 1

    def can_redo(self) -> bool:
        """Return True if a redo operation is currently possible."""
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Clear both undo and redo histories."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    # --------------------------------------------------------------- Internals

    def _trim(self, stack: List[_Snapshot]) -> None:
        overflow = len(stack) - self._max_history
        if overflow > 0:
            del stack[0:overflow]

    def _create_snapshot(self, state: Any) -> Optional[_Snapshot]:
        try:
            return _Snapshot(
                left_tree=tree_to_mapping(state.left_tree),
                right_tree=tree_to_mapping(state.right_tree),
                left_selection=state.left_selection or "",
                right_selection=state.right_selection or "",
            )
        except AttributeError as exc:
            logger.warning("Undo: snapshot skipped error=%s", exc)
            return None

    def _restore_snapshot(self, state: Any, snap: _Snapshot) -> bool:
        """Rebuild both trees, then swap them into ``state`` together."""
        try:
            left = tree_from_mapping(snap.left_tree)
            right = tree_from_mapping(snap.right_tree)
        except (TreeStructureError, AttributeError) as exc:
            logger.error("Undo FAIL: restore error=%s", exc)
            return False

        state.left_tree = left
        state.right_tree = right
        state.left_selection = snap.left_selection
        state.right_selection = snap.right_selection
        return True
