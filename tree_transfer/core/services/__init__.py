from __future__ import annotations

"""High-level orchestration services (transfer, preview, undo/redo)."""

from .transfer_service import TransferService  # noqa: F401
from .undo_service import UndoService  # noqa: F401
from .preview_service import PreviewService  # noqa: F401

__all__: list[str] = [
    "TransferService",
    "UndoService",
    "PreviewService",
]
