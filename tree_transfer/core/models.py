from __future__ import annotations

"""Shared data structures used across the tree transfer core.

This module is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from dataclasses import dataclass, field
from typing import List, Tuple

__all__ = ["ROOT_ID", "TreeNode", "Found", "Lineage", "TransferState"]

# Reserved sentinel carried by the root of every pane tree.
ROOT_ID = "(root)"


@dataclass
class TreeNode:
    """A labelled node owning an ordered list of children.

    Attributes
    ----------
    id
        Identifier, unique across both pane trees.
    children
        Ordered children. The order defines display order and the depth-first
        enumeration order. An empty list denotes a leaf.
    """

    id: str
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def child_ids(self) -> List[str]:
        return [c.id for c in self.children]


@dataclass(frozen=True)
class Found:
    """Successful lookup: the node and the identifiers from root to it, inclusive."""

    node: TreeNode
    path: Tuple[str, ...]


@dataclass(frozen=True)
class Lineage:
    """A detached subtree together with the ancestor identifiers above it.

    Attributes
    ----------
    ancestors
        Identifiers from the tree root down to the subtree's parent. The
        subtree's own identifier is not included.
    subtree
        The extracted node with its real children.
    """

    ancestors: Tuple[str, ...]
    subtree: TreeNode

    @property
    def root_id(self) -> str:
        return self.ancestors[0] if self.ancestors else self.subtree.id

    def to_tree(self) -> TreeNode:
        """Rebuild the single-child ancestor chain ending in the subtree."""
        node = self.subtree
        for ancestor_id in reversed(self.ancestors):
            node = TreeNode(ancestor_id, [node])
        return node


@dataclass
class TransferState:
    """Both pane trees and their selections at one observable moment.

    An empty string means the pane has nothing selected.
    """

    left_tree: TreeNode
    right_tree: TreeNode
    left_selection: str = ""
    right_selection: str = ""
