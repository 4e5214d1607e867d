from __future__ import annotations

"""Structural transforms on pane trees.

Non-destructive calls (the default) deep-copy the input first and leave the
caller's tree untouched. ``destructive=True`` mutates the given tree in place
and is only meant for a tree the caller owns exclusively, e.g. the copy made
at the top of a cascading call.

Sibling reordering cascades at boundaries: a first child can only move up
by moving its parent up, and so on towards the root. The predicate and the
mutator share :func:`movable_unit` so the enabled state of a move always
matches what the move does.
"""

import logging
from typing import Literal, Optional, Tuple

from tree_transfer.core.exceptions import LineageMismatchError
from tree_transfer.core.models import Lineage, TreeNode
from tree_transfer.core.navigator import find, find_child, find_parent

__all__ = [
    "Direction",
    "copy_tree",
    "extract_subtree",
    "remove_subtree",
    "merge_trees",
    "graft",
    "movable_unit",
    "can_move_up",
    "can_move_down",
    "move_up",
    "move_down",
]

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]


def copy_tree(node: TreeNode) -> TreeNode:
    """Return a deep clone of ``node`` sharing no structure with it."""
    return TreeNode(node.id, [copy_tree(c) for c in node.children])


def extract_subtree(root: TreeNode, node_id: str) -> Optional[Lineage]:
    """Return the subtree at ``node_id`` together with its ancestor lineage.

    The subtree keeps its real children (no copy): it is about to be detached
    from ``root``, not duplicated. Returns None if ``node_id`` is absent.
    """
    hit = find(root, node_id)
    if hit is None:
        return None
    return Lineage(ancestors=hit.path[:-1], subtree=hit.node)


def remove_subtree(root: TreeNode, node_id: str, destructive: bool = False) -> TreeNode:
    """Remove the subtree at ``node_id`` and prune ancestors left childless.

    Pruning climbs until an ancestor keeps a sibling or the root is reached;
    the root itself is never removed. A missing ``node_id`` or the root id
    leaves the tree unchanged.
    """
    tree = root if destructive else copy_tree(root)
    parent_hit = find_parent(tree, node_id)
    if parent_hit is None:
        return tree

    parent = parent_hit.node
    parent.children = [c for c in parent.children if c.id != node_id]
    if parent.children:
        return tree
    logger.debug("Prune: %s left childless, removing it", parent.id)
    return remove_subtree(tree, parent.id, destructive=True)


def merge_trees(target: TreeNode, source: TreeNode) -> TreeNode:
    """Merge ``source`` into ``target`` and return the merged tree.

    Children with the same identifier are merged recursively, in target
    order; source-only children are appended afterwards in source order.

    Raises
    ------
    LineageMismatchError
        If the two roots carry different identifiers.
    """
    if target.id != source.id:
        raise LineageMismatchError(target.id, source.id)
    if target.is_leaf:
        return source
    if source.is_leaf:
        return target

    new_children = []
    for child in target.children:
        other = find_child(source, child.id)
        new_children.append(merge_trees(child, other) if other is not None else child)
    new_children.extend(c for c in source.children if find_child(target, c.id) is None)
    return TreeNode(target.id, new_children)


def graft(target: TreeNode, lineage: Lineage) -> TreeNode:
    """Re-attach a detached lineage under ``target`` at its original depth."""
    return merge_trees(target, lineage.to_tree())


def movable_unit(root: TreeNode, node_id: str, direction: Direction) -> Optional[Tuple[TreeNode, int]]:
    """Find the node that actually moves when ``node_id`` moves in ``direction``.

    Ascends from ``node_id`` to the nearest ancestor-or-self that is not at
    the boundary (first child for "up", last child for "down") among its
    siblings. Returns that node's parent and its index, or None when the
    ascent reaches the root or ``node_id`` is absent.
    """
    current = node_id
    while True:
        parent_hit = find_parent(root, current)
        if parent_hit is None:
            return None
        parent = parent_hit.node
        index = parent.child_ids().index(current)
        boundary = 0 if direction == "up" else len(parent.children) - 1
        if index != boundary:
            return parent, index
        current = parent.id


def can_move_up(root: TreeNode, node_id: str) -> bool:
    return movable_unit(root, node_id, "up") is not None


def can_move_down(root: TreeNode, node_id: str) -> bool:
    return movable_unit(root, node_id, "down") is not None


def _move(root: TreeNode, node_id: str, direction: Direction, destructive: bool) -> TreeNode:
    if root.id == node_id:
        return root

    tree = root if destructive else copy_tree(root)
    unit = movable_unit(tree, node_id, direction)
    if unit is None:
        logger.debug("Move noop: %s %s at boundary or absent", node_id, direction)
        return tree

    parent, index = unit
    other = index - 1 if direction == "up" else index + 1
    children = parent.children
    children[other], children[index] = children[index], children[other]
    logger.debug("Move: %s swapped with %s under %s", children[other].id, children[index].id, parent.id)
    return tree


def move_up(root: TreeNode, node_id: str, destructive: bool = False) -> TreeNode:
    """Swap ``node_id`` with its preceding sibling, or move an ancestor up instead."""
    return _move(root, node_id, "up", destructive)


def move_down(root: TreeNode, node_id: str, destructive: bool = False) -> TreeNode:
    """Swap ``node_id`` with its following sibling, or move an ancestor down instead."""
    return _move(root, node_id, "down", destructive)
