"""UI controllers package.

Controllers mediate between widgets and the underlying services and models.
"""

from .transfer_controller import TransferController

__all__: list[str] = ["TransferController"]
