from __future__ import annotations

"""Conversions between pane trees and plain data, plus tree validation.

Mappings use the ``{"id": ..., "children": [...]}`` shape found in the seed
YAML file. Undo snapshots store the same shape, so a snapshot never aliases a
live tree.
"""

from typing import Any, Dict, List, Mapping, Optional

from tree_transfer.core.exceptions import TreeStructureError
from tree_transfer.core.models import ROOT_ID, TreeNode

__all__ = [
    "tree_from_mapping",
    "tree_to_mapping",
    "validate_tree",
]


def tree_from_mapping(data: Mapping[str, Any]) -> TreeNode:
    """Build a tree from nested mappings. Children default to an empty list."""
    if not isinstance(data, Mapping):
        raise TreeStructureError(f"Expected a mapping for a node, got {type(data).__name__}.")
    node_id = data.get("id")
    if node_id is None or str(node_id) == "":
        raise TreeStructureError("Node is missing an 'id'.")
    children = data.get("children") or []
    if not isinstance(children, list):
        raise TreeStructureError("'children' must be a list.", str(node_id))
    return TreeNode(str(node_id), [tree_from_mapping(c) for c in children])


def tree_to_mapping(node: TreeNode) -> Dict[str, Any]:
    return {"id": node.id, "children": [tree_to_mapping(c) for c in node.children]}


def validate_tree(root: TreeNode, root_id: Optional[str] = ROOT_ID) -> None:
    """Check identifier uniqueness and, when given, the root sentinel.

    Raises
    ------
    TreeStructureError
        Listing every problem found.
    """
    problems: List[str] = []
    if root_id is not None and root.id != root_id:
        problems.append(f"root id is '{root.id}', expected '{root_id}'")

    seen: set[str] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.id in seen:
            problems.append(f"duplicate id '{node.id}'")
        seen.add(node.id)
        stack.extend(reversed(node.children))

    if problems:
        raise TreeStructureError("Invalid tree: " + "; ".join(problems), problems=problems)
