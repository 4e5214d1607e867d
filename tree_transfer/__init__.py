"""Top-level package for the Tree Transfer toolkit.

This package hosts a GUI-agnostic two-pane transfer list over labelled trees.
Front-ends should only depend on the public API exposed here rather than
importing internal modules directly.
"""

from .core.models import ROOT_ID, Lineage, TreeNode  # re-export for convenience
from .ui.controllers.transfer_controller import TransferController

__all__: list[str] = [
    "ROOT_ID",
    "Lineage",
    "TreeNode",
    "TransferController",
]
