from __future__ import annotations

import logging
from typing import Callable, List, Literal, Optional

from tree_transfer.config import ConfigManager, load_seed_trees
from tree_transfer.core.models import TransferState, TreeNode
from tree_transfer.core.mutator import can_move_down, can_move_up, extract_subtree
from tree_transfer.core.navigator import find, flatten_except_root
from tree_transfer.core.selection import next_selection
from tree_transfer.core.services.preview_service import PreviewService
from tree_transfer.core.services.transfer_service import OperationResult, TransferService
from tree_transfer.core.services.undo_service import UndoService

logger = logging.getLogger(__name__)

Pane = Literal["left", "right"]
Renderer = Callable[[Optional[TreeNode]], str]


class TransferController:
    """Controller for the two-pane transfer list.

    This controller holds the observable state of both panes and delegates
    tree work to the services. It contains no UI toolkit code; widgets read
    the public attributes after each action.

    Parameters
    ----------
    left_tree, right_tree : TreeNode
        Initial pane trees. Both must carry the reserved root identifier.
    transfer_service : TransferService, optional
        Service performing transfers and reorders.
    undo_service : UndoService, optional
        Snapshot history used by :meth:`undo` / :meth:`redo`.
    render : callable, optional
        ``render(tree) -> markup`` used for pane outlines and the selection
        preview. Defaults to :meth:`PreviewService.render_html`.

    Notes
    -----
    - Every action recomputes trees, flattened lists, move flags, outlines
      and preview before returning, so observers never see a partial update.
    - Routine failures do not raise; actions return an OperationResult.
    """

    def __init__(
        self,
        left_tree: TreeNode,
        right_tree: TreeNode,
        transfer_service: Optional[TransferService] = None,
        undo_service: Optional[UndoService] = None,
        render: Optional[Renderer] = None,
    ) -> None:
        # Dependencies
        self.transfer_service: TransferService = transfer_service or TransferService()
        self.undo_service: UndoService = undo_service or UndoService()
        self.render: Renderer = render or PreviewService().render_html

        # Pane state
        self.left_tree: TreeNode = left_tree
        self.right_tree: TreeNode = right_tree
        self.left_selection: str = ""
        self.right_selection: str = ""

        # Derived views
        self.left_list: List[str] = []
        self.right_list: List[str] = []
        self.left_html: str = ""
        self.right_html: str = ""
        self.preview_html: str = ""
        self.up_enabled: bool = False
        self.down_enabled: bool = False

        self._refresh_pane("left")
        self._refresh_pane("right")
        # Baseline for undo
        self.undo_service.push_snapshot(self)

    @classmethod
    def from_config(cls, config: Optional[ConfigManager] = None, **kwargs) -> "TransferController":
        """Build a controller from the seed trees and settings in the config files."""
        config = config or ConfigManager()
        left, right = load_seed_trees(config)
        if "undo_service" not in kwargs:
            max_history = config.get_transfer_settings().get("undo_max_history", 50)
            kwargs["undo_service"] = UndoService(max_history=max_history)
        return cls(left, right, **kwargs)

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _tree(self, pane: Pane) -> TreeNode:
        return self.left_tree if pane == "left" else self.right_tree

    def _refresh_pane(self, pane: Pane) -> None:
        tree = self._tree(pane)
        if pane == "left":
            self.left_list = flatten_except_root(tree)
            self.left_html = self.render(tree)
        else:
            self.right_list = flatten_except_root(tree)
            self.right_html = self.render(tree)

    def _update_flags(self, pane: Pane, node_id: str) -> None:
        tree = self._tree(pane)
        self.up_enabled = can_move_up(tree, node_id)
        self.down_enabled = can_move_down(tree, node_id)

    def _clear_selection_views(self) -> None:
        self.preview_html = ""
        self.up_enabled = False
        self.down_enabled = False

    def _on_selected(self, pane: Pane) -> None:
        """Recompute flags and preview after ``pane``'s selection changed."""
        node_id = self.left_selection if pane == "left" else self.right_selection
        if not node_id:
            self._clear_selection_views()
            return

        self._update_flags(pane, node_id)
        if pane == "left":
            self.right_selection = ""
        else:
            self.left_selection = ""
        lineage = extract_subtree(self._tree(pane), node_id)
        self.preview_html = self.render(lineage.to_tree() if lineage is not None else None)

    def _refresh_all(self) -> None:
        self._refresh_pane("left")
        self._refresh_pane("right")
        if self.left_selection:
            self._on_selected("left")
        elif self.right_selection:
            self._on_selected("right")
        else:
            self._clear_selection_views()

    def _record(self, result: OperationResult) -> OperationResult:
        """Push a post-mutation snapshot when ``result`` reports a change."""
        if result.success:
            self.undo_service.push_snapshot(self)
        return result

    # ---------------------------------------------------------------------------------
    # Selection
    # ---------------------------------------------------------------------------------

    def _select(self, pane: Pane, node_id: Optional[str]) -> bool:
        node_id = node_id or ""
        tree = self._tree(pane)
        if node_id and (node_id == tree.id or find(tree, node_id) is None):
            logger.info("Select noop: pane=%s node=%s not selectable", pane, node_id)
            return False
        if pane == "left":
            self.left_selection = node_id
        else:
            self.right_selection = node_id
        self._on_selected(pane)
        return True

    def select_left(self, node_id: Optional[str]) -> bool:
        """Select ``node_id`` in the left pane ("" or None clears the selection).

        The root and unknown identifiers are ignored and return False.
        """
        return self._select("left", node_id)

    def select_right(self, node_id: Optional[str]) -> bool:
        """Select ``node_id`` in the right pane ("" or None clears the selection)."""
        return self._select("right", node_id)

    def snapshot_state(self) -> TransferState:
        return TransferState(self.left_tree, self.right_tree, self.left_selection, self.right_selection)

    # ---------------------------------------------------------------------------------
    # Transfers
    # ---------------------------------------------------------------------------------

    def _transfer(self, source: Pane, node_id: Optional[str]) -> OperationResult:
        if node_id is None:
            node_id = self.left_selection if source == "left" else self.right_selection
        if not node_id:
            return OperationResult(success=False, message="No selection")

        if source == "left":
            previous_list = self.left_list
            outcome = self.transfer_service.transfer(self.left_tree, self.right_tree, node_id)
        else:
            previous_list = self.right_list
            outcome = self.transfer_service.transfer(self.right_tree, self.left_tree, node_id)
        if not outcome.result.success:
            return outcome.result

        if source == "left":
            self.left_tree, self.right_tree = outcome.source, outcome.dest
        else:
            self.right_tree, self.left_tree = outcome.source, outcome.dest
        self._refresh_pane("left")
        self._refresh_pane("right")

        new_list = self.left_list if source == "left" else self.right_list
        self._select(source, next_selection(previous_list, node_id, new_list))
        return self._record(outcome.result)

    def move_to_right(self, node_id: Optional[str] = None) -> OperationResult:
        """Move the left selection (or ``node_id``) into the right tree."""
        return self._transfer("left", node_id)

    def move_to_left(self, node_id: Optional[str] = None) -> OperationResult:
        """Move the right selection (or ``node_id``) into the left tree."""
        return self._transfer("right", node_id)

    # ---------------------------------------------------------------------------------
    # Reordering
    # ---------------------------------------------------------------------------------

    def _reorder(self, direction: Literal["up", "down"]) -> OperationResult:
        """Reorder the selection of each pane that has one, right pane first."""
        results: List[OperationResult] = []
        for pane in ("right", "left"):
            node_id = self.right_selection if pane == "right" else self.left_selection
            if not node_id:
                continue
            outcome = self.transfer_service.reorder(self._tree(pane), node_id, direction)
            if pane == "left":
                self.left_tree = outcome.tree
            else:
                self.right_tree = outcome.tree
            self._refresh_pane(pane)
            self._update_flags(pane, node_id)
            results.append(outcome.result)

        if not results:
            return OperationResult(success=False, message="No selection")
        moved = [r for r in results if r.success]
        if moved:
            return self._record(moved[0])
        return results[0]

    def move_up(self) -> OperationResult:
        return self._reorder("up")

    def move_down(self) -> OperationResult:
        return self._reorder("down")

    # ---------------------------------------------------------------------------------
    # History
    # ---------------------------------------------------------------------------------

    def can_undo(self) -> bool:
        return self.undo_service.can_undo()

    def can_redo(self) -> bool:
        return self.undo_service.can_redo()

    def undo(self) -> bool:
        """Restore the state before the last successful action."""
        if not self.undo_service.undo(self):
            return False
        self._refresh_all()
        return True

    def redo(self) -> bool:
        """Re-apply the last undone action."""
        if not self.undo_service.redo(self):
            return False
        self._refresh_all()
        return True
