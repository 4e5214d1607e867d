from __future__ import annotations

"""Read-only lookups over a pane tree.

Nothing here mutates its input; returned nodes alias into the given tree.
"""

from typing import List, Optional, Sequence

from tree_transfer.core.exceptions import InvalidRootError, NodeNotFoundError
from tree_transfer.core.models import Found, TreeNode

__all__ = [
    "find",
    "find_path",
    "find_node",
    "find_parent",
    "find_child",
    "require_node",
    "flatten",
    "flatten_except_root",
]


def find(root: TreeNode, node_id: str, path: Sequence[str] = ()) -> Optional[Found]:
    """Return the first node matching ``node_id`` in pre-order, with its path.

    The path lists identifiers from ``root`` to the match, both inclusive.
    Returns None when no node matches.
    """
    next_path = tuple(path) + (root.id,)
    if root.id == node_id:
        return Found(root, next_path)
    for child in root.children:
        hit = find(child, node_id, next_path)
        if hit is not None:
            return hit
    return None


def find_path(root: TreeNode, node_id: str) -> List[str]:
    hit = find(root, node_id)
    return list(hit.path) if hit is not None else []


def find_node(root: TreeNode, node_id: str) -> Optional[TreeNode]:
    hit = find(root, node_id)
    return hit.node if hit is not None else None


def find_parent(root: TreeNode, node_id: str) -> Optional[Found]:
    """Return the parent of ``node_id`` and the path to that parent.

    None when ``node_id`` is the root itself or does not occur in the tree.
    """
    path = find_path(root, node_id)
    if len(path) < 2:
        return None
    return find(root, path[-2])


def find_child(node: Optional[TreeNode], node_id: str) -> Optional[TreeNode]:
    """Return the direct child of ``node`` carrying ``node_id``, if any."""
    if node is None:
        return None
    for child in node.children:
        if child.id == node_id:
            return child
    return None


def require_node(root: TreeNode, node_id: str) -> Found:
    """Strict variant of :func:`find` for callers that want an exception.

    Raises
    ------
    InvalidRootError
        If ``node_id`` names the tree's own root.
    NodeNotFoundError
        If ``node_id`` is not present.
    """
    if node_id == root.id:
        raise InvalidRootError("The root node cannot be targeted.", node_id)
    hit = find(root, node_id)
    if hit is None:
        raise NodeNotFoundError("Node not found.", node_id)
    return hit


def flatten(root: TreeNode) -> List[str]:
    """All identifiers in depth-first, left-to-right order, root first."""
    ids = [root.id]
    for child in root.children:
        ids.extend(flatten(child))
    return ids


def flatten_except_root(root: TreeNode) -> List[str]:
    """Identifiers for a pane's selection control: depth-first, root excluded."""
    return flatten(root)[1:]
