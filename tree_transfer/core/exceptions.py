from __future__ import annotations

"""Tree engine exception classes.

Most engine operations degrade to no-ops for missing identifiers or the
reserved root. The exceptions below cover the cases that must be reported:
merging unrelated lineages and malformed tree input.
"""

from typing import Optional


class TreeError(Exception):
    """Base exception for all tree-related errors."""

    def __init__(self, message: str, node_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.node_id = node_id

    def __str__(self) -> str:
        if self.node_id:
            return f"[Node: {self.node_id}] {super().__str__()}"
        return super().__str__()


class NodeNotFoundError(TreeError):
    """Raised by strict lookups when an identifier is not in the tree."""
    pass


class InvalidRootError(TreeError):
    """Raised by strict lookups when the reserved root identifier is targeted."""
    pass


class LineageMismatchError(TreeError):
    """Raised when merging two structures whose root identifiers differ."""

    def __init__(self, target_id: str, source_id: str) -> None:
        self.target_id = target_id
        self.source_id = source_id
        super().__init__(
            f"Cannot merge trees with different roots: '{target_id}' != '{source_id}'"
        )


class TreeStructureError(TreeError):
    """Raised when tree input violates the structural invariants.

    This includes duplicate identifiers, a missing or wrong root sentinel,
    and nodes without an identifier.
    """

    def __init__(self, message: str, node_id: Optional[str] = None,
                 problems: Optional[list[str]] = None) -> None:
        super().__init__(message, node_id)
        self.problems = problems or []
