from __future__ import annotations

"""Service layer for cross-pane transfers and in-pane reordering.

This module provides a UI-agnostic, testable service on top of the tree
engine (``core.navigator`` and ``core.mutator``).

Scope and guarantees:
- Operates purely in-memory on tree values, no file I/O nor UI imports.
- Input trees are never mutated; every outcome carries new tree values.
- Invalid operations return OperationResult(success=False, ...) with clear
  messaging and the unchanged trees, never raise.

Examples
--------
Basic usage:

    service = TransferService()
    outcome = service.transfer(left, right, "node1-3")
    if outcome.result.success:
        left, right = outcome.source, outcome.dest

"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional

from tree_transfer.core.exceptions import LineageMismatchError
from tree_transfer.core.models import TreeNode
from tree_transfer.core.mutator import (
    Direction,
    can_move_down,
    can_move_up,
    extract_subtree,
    graft,
    move_down,
    move_up,
    remove_subtree,
)
from tree_transfer.core.navigator import find


__all__ = ["OperationResult", "TransferOutcome", "ReorderOutcome", "TransferService"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Result of a structural operation.

    Attributes
    ----------
    success
        Whether the operation changed anything.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class TransferOutcome:
    """Trees after a transfer. On failure they are the input trees."""
    result: OperationResult
    source: TreeNode
    dest: TreeNode


@dataclass(frozen=True)
class ReorderOutcome:
    """Tree after a reorder. On failure it is the input tree."""
    result: OperationResult
    tree: TreeNode


class TransferService:
    """Moves subtrees between two pane trees and reorders siblings.

    A transfer extracts the subtree with its lineage from the source, removes
    it with cascading prune of emptied ancestors, and grafts the lineage into
    the destination at its original depth. Both sides are non-destructive.
    """

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def transfer(self, source: TreeNode, dest: TreeNode, node_id: Optional[str]) -> TransferOutcome:
        """Move the subtree at ``node_id`` from ``source`` into ``dest``."""
        logger.info("Edit: transfer node=%s", node_id)
        if not node_id:
            return TransferOutcome(OperationResult(False, "Nothing selected.", {"reason": "empty_selection"}), source, dest)
        if node_id == source.id:
            logger.info("Edit noop: transfer root node=%s", node_id)
            return TransferOutcome(
                OperationResult(False, "The root cannot be moved.", {"reason": "invalid_root", "node_id": node_id}),
                source,
                dest,
            )

        lineage = extract_subtree(source, node_id)
        if lineage is None:
            logger.warning("Edit FAIL: transfer node_not_found node=%s", node_id)
            return TransferOutcome(
                OperationResult(False, f"Node not found for id '{node_id}'.", {"reason": "not_found", "node_id": node_id}),
                source,
                dest,
            )

        try:
            new_dest = graft(dest, lineage)
        except LineageMismatchError as exc:
            logger.error("Edit FAIL: transfer lineage_mismatch node=%s error=%s", node_id, exc)
            return TransferOutcome(
                OperationResult(
                    False,
                    "Source and destination trees do not share a root.",
                    {"reason": "lineage_mismatch", "node_id": node_id, "error": str(exc)},
                ),
                source,
                dest,
            )

        new_source = remove_subtree(source, node_id)
        details = {"node_id": node_id, "ancestors": list(lineage.ancestors)}
        logger.info("Edit OK: transfer node=%s depth=%d", node_id, len(lineage.ancestors))
        return TransferOutcome(OperationResult(True, "Moved subtree.", details), new_source, new_dest)

    def reorder(self, tree: TreeNode, node_id: Optional[str], direction: Direction) -> ReorderOutcome:
        """Move ``node_id`` one step up or down among its siblings.

        At a boundary the nearest ancestor that can move is moved instead.
        """
        logger.info("Edit: reorder direction=%s node=%s", direction, node_id)
        if direction not in ("up", "down"):
            return ReorderOutcome(OperationResult(False, f"Unsupported move direction '{direction}'.", {"allowed": ["up", "down"]}), tree)
        if not node_id:
            return ReorderOutcome(OperationResult(False, "Nothing selected.", {"reason": "empty_selection"}), tree)
        if node_id == tree.id:
            return ReorderOutcome(OperationResult(False, "The root cannot be moved.", {"reason": "invalid_root", "node_id": node_id}), tree)
        if find(tree, node_id) is None:
            logger.warning("Edit FAIL: reorder node_not_found node=%s", node_id)
            return ReorderOutcome(OperationResult(False, f"Node not found for id '{node_id}'.", {"reason": "not_found", "node_id": node_id}), tree)

        movable = can_move_up(tree, node_id) if direction == "up" else can_move_down(tree, node_id)
        if not movable:
            logger.info("Edit noop: reorder direction=%s boundary node=%s", direction, node_id)
            return ReorderOutcome(
                OperationResult(False, f"Cannot move {direction} (at boundary).", {"reason": "boundary", "node_id": node_id}),
                tree,
            )

        new_tree = move_up(tree, node_id) if direction == "up" else move_down(tree, node_id)
        logger.info("Edit OK: reorder direction=%s node=%s", direction, node_id)
        return ReorderOutcome(OperationResult(True, f"Moved {direction}.", {"node_id": node_id, "direction": direction}), new_tree)
