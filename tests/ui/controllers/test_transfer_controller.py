import pytest

from tree_transfer.core.models import ROOT_ID
from tree_transfer.core.navigator import find_node, flatten
from tree_transfer.core.services.transfer_service import (
    OperationResult,
    ReorderOutcome,
    TransferOutcome,
)
from tree_transfer.ui.controllers.transfer_controller import TransferController


# ---------------------------
# Fakes / helpers
# ---------------------------

def outline(tree):
    """Renderer stand-in: pipe-joined depth-first ids, "" for no tree."""
    return "" if tree is None else "|".join(flatten(tree))


class FakeTransferService:
    def __init__(self, success=False):
        self.calls = []
        self.success = success

    def transfer(self, source, dest, node_id):
        self.calls.append(("transfer", node_id))
        return TransferOutcome(OperationResult(self.success, "fake"), source, dest)

    def reorder(self, tree, node_id, direction):
        self.calls.append(("reorder", node_id, direction))
        return ReorderOutcome(OperationResult(self.success, "fake"), tree)


class FakeUndoService:
    def __init__(self, undo_result=False, redo_result=False):
        self._undo_result = undo_result
        self._redo_result = redo_result
        self.counters = {"push_snapshot": 0, "undo": 0, "redo": 0}

    def push_snapshot(self, state) -> None:
        self.counters["push_snapshot"] += 1

    def undo(self, state) -> bool:
        self.counters["undo"] += 1
        return self._undo_result

    def redo(self, state) -> bool:
        self.counters["redo"] += 1
        return self._redo_result

    def can_undo(self) -> bool:
        return self._undo_result

    def can_redo(self) -> bool:
        return self._redo_result


# ---------------------------
# Fixtures
# ---------------------------

@pytest.fixture
def controller(seed_tree, empty_root):
    return TransferController(seed_tree, empty_root, render=outline)


# ---------------------------
# Initial state and selection
# ---------------------------

def test_initial_state(controller):
    assert controller.left_list[:4] == ["node1", "node1-1", "node1-2", "node1-3"]
    assert len(controller.left_list) == 12
    assert controller.right_list == []
    assert controller.right_html == ROOT_ID
    assert controller.left_html.startswith(f"{ROOT_ID}|node1|node1-1")
    assert controller.preview_html == ""
    assert controller.up_enabled is False
    assert controller.down_enabled is False
    assert controller.can_undo() is False


def test_select_left_sets_flags_and_preview(controller):
    assert controller.select_left("node1-2") is True
    assert controller.up_enabled is True
    assert controller.down_enabled is True
    assert controller.preview_html == f"{ROOT_ID}|node1|node1-2"


def test_select_first_child_disables_up(controller):
    controller.select_left("node1-1")
    assert controller.up_enabled is False
    assert controller.down_enabled is True


def test_select_right_uses_right_tree_for_both_flags(controller):
    controller.move_to_right("node1-3")
    controller.select_left("node2-2")  # bottom of the left tree
    controller.select_right("node1-3-1")
    assert controller.left_selection == ""
    assert controller.up_enabled is False
    assert controller.down_enabled is True


def test_selecting_one_pane_clears_the_other(controller):
    controller.move_to_right("node1-3")
    controller.select_right("node1-3")
    controller.select_left("node1-1")
    assert controller.right_selection == ""
    assert controller.left_selection == "node1-1"


def test_clearing_selection_resets_views(controller):
    controller.select_left("node1-2")
    assert controller.select_left("") is True
    assert controller.left_selection == ""
    assert controller.preview_html == ""
    assert controller.up_enabled is False
    assert controller.down_enabled is False


@pytest.mark.parametrize("node_id", [ROOT_ID, "nope"])
def test_root_and_unknown_ids_are_not_selectable(controller, node_id):
    controller.select_left("node1-2")
    assert controller.select_left(node_id) is False
    assert controller.left_selection == "node1-2"


# ---------------------------
# Transfers
# ---------------------------

def test_move_to_right_scenario(controller):
    controller.select_left("node1-3")
    result = controller.move_to_right()

    assert result.success is True
    assert controller.left_list == [
        "node1", "node1-1", "node1-2",
        "node2", "node2-1", "node2-1-1", "node2-1-2", "node2-2",
    ]
    assert controller.right_list == ["node1", "node1-3", "node1-3-1", "node1-3-2", "node1-3-3"]
    assert controller.right_html == f"{ROOT_ID}|node1|node1-3|node1-3-1|node1-3-2|node1-3-3"
    # Cursor stays at the former position (index 3)
    assert controller.left_selection == "node2"
    assert controller.preview_html == f"{ROOT_ID}|node2|node2-1|node2-1-1|node2-1-2|node2-2"
    assert controller.up_enabled is True
    assert controller.down_enabled is False


def test_move_to_left_reselects_in_right_pane(controller):
    controller.move_to_right("node1-3")
    controller.select_right("node1-3-1")
    result = controller.move_to_left()

    assert result.success is True
    assert [c.id for c in find_node(controller.left_tree, "node1").children] == ["node1-1", "node1-2", "node1-3"]
    assert controller.right_list == ["node1", "node1-3", "node1-3-2", "node1-3-3"]
    assert controller.right_selection == "node1-3-2"
    assert controller.left_selection == ""


def test_emptying_a_pane_unselects_it(controller):
    controller.select_left("node1")
    controller.move_to_right()
    assert controller.left_selection == "node2"
    controller.move_to_right()

    assert controller.left_list == []
    assert controller.left_html == ROOT_ID
    assert controller.left_selection == ""
    assert controller.preview_html == ""
    assert controller.up_enabled is False
    assert controller.down_enabled is False
    assert controller.right_list[0] == "node1"
    assert len(controller.right_list) == 12


def test_move_without_selection_is_noop(controller):
    result = controller.move_to_right()
    assert result.success is False
    assert len(controller.left_list) == 12
    assert controller.can_undo() is False


# ---------------------------
# Reordering
# ---------------------------

def test_move_up_reorders_selected_pane(controller):
    controller.select_left("node1-2")
    result = controller.move_up()

    assert result.success is True
    assert controller.left_list[:4] == ["node1", "node1-2", "node1-1", "node1-3"]
    assert controller.left_selection == "node1-2"
    assert controller.up_enabled is False
    assert controller.down_enabled is True


def test_move_down_cascades_to_parent(controller):
    controller.select_left("node1-3-3")
    result = controller.move_down()

    assert result.success is True
    assert controller.left_list[0] == "node2"
    assert controller.down_enabled is False


def test_move_up_at_boundary_keeps_state(controller):
    controller.select_left("node1-1")
    before = list(controller.left_list)
    result = controller.move_up()
    assert result.success is False
    assert controller.left_list == before
    assert controller.can_undo() is False


def test_move_up_in_right_pane(controller):
    controller.move_to_right("node1-3")
    controller.move_to_right("node1-1")
    controller.select_right("node1-1")
    assert controller.right_list == ["node1", "node1-3", "node1-3-1", "node1-3-2", "node1-3-3", "node1-1"]
    controller.move_up()
    assert controller.right_list == ["node1", "node1-1", "node1-3", "node1-3-1", "node1-3-2", "node1-3-3"]


def test_move_up_without_selection(controller):
    assert controller.move_up().success is False


# ---------------------------
# History
# ---------------------------

def test_undo_redo_transfer(controller):
    controller.select_left("node1-3")
    controller.move_to_right()
    assert controller.can_undo() is True

    assert controller.undo() is True
    assert len(controller.left_list) == 12
    assert controller.right_list == []
    # Selections are restored as recorded before the transfer (none at start-up)
    assert controller.left_selection == ""
    assert controller.preview_html == ""
    assert controller.can_redo() is True

    assert controller.redo() is True
    assert controller.right_list[:2] == ["node1", "node1-3"]
    assert controller.left_selection == "node2"


def test_undo_transfer_with_control_character_id(node):
    ctrl = TransferController(node(ROOT_ID, node("a"), node("b\x01")), node(ROOT_ID), render=outline)
    assert ctrl.move_to_right("a").success is True
    assert ctrl.right_list == ["a"]

    assert ctrl.undo() is True
    assert ctrl.left_list == ["a", "b\x01"]
    assert ctrl.right_list == []
    assert ctrl.redo() is True
    assert ctrl.left_list == ["b\x01"]


def test_failed_actions_do_not_record_snapshots(seed_tree, empty_root):
    undo = FakeUndoService()
    transfer = FakeTransferService(success=False)
    ctrl = TransferController(seed_tree, empty_root, transfer_service=transfer, undo_service=undo, render=outline)
    assert undo.counters["push_snapshot"] == 1  # baseline

    ctrl.select_left("node1-2")
    ctrl.move_to_right()
    ctrl.move_up()
    assert transfer.calls == [("transfer", "node1-2"), ("reorder", "node1-2", "up")]
    assert undo.counters["push_snapshot"] == 1
    assert ctrl.left_tree is seed_tree


def test_successful_actions_record_one_snapshot_each(seed_tree, empty_root):
    undo = FakeUndoService()
    ctrl = TransferController(seed_tree, empty_root, undo_service=undo, render=outline)
    ctrl.select_left("node1-2")
    ctrl.move_up()
    ctrl.move_to_right()
    assert undo.counters["push_snapshot"] == 3


def test_failed_undo_leaves_views(seed_tree, empty_root):
    undo = FakeUndoService(undo_result=False)
    ctrl = TransferController(seed_tree, empty_root, undo_service=undo, render=outline)
    ctrl.select_left("node1-2")
    assert ctrl.undo() is False
    assert ctrl.redo() is False
    assert ctrl.preview_html == f"{ROOT_ID}|node1|node1-2"


def test_snapshot_state(controller):
    controller.select_left("node2")
    state = controller.snapshot_state()
    assert state.left_tree is controller.left_tree
    assert state.left_selection == "node2"
    assert state.right_selection == ""


# ---------------------------
# Construction from config
# ---------------------------

def test_from_config_uses_packaged_seed():
    ctrl = TransferController.from_config(render=outline)
    assert len(ctrl.left_list) == 12
    assert ctrl.right_list == []
