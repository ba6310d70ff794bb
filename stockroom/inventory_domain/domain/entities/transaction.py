"""Transaction entity."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TransactionType(str, Enum):
    ENTRY = "ENTRY"
    EXIT = "EXIT"


@dataclass
class Transaction:
    """A stock movement. Transactions are never edited once recorded."""

    id: str
    product_id: str
    quantity: int
    type: TransactionType
    date: datetime
    batch: str | None = None
    subwarehouse: str | None = None

    def __post_init__(self) -> None:
        """Post-initialization for validation."""
        self.type = TransactionType(self.type)
        if self.quantity <= 0:
            raise ValueError("Quantity must be a positive integer.")

    @property
    def signed_quantity(self) -> int:
        """Quantity with the sign it contributes to stock."""
        return self.quantity if self.type == TransactionType.ENTRY else -self.quantity
