# stockroom/inventory_domain/domain/repositories/transaction_repository.py
"""Transaction repository interface."""
from abc import ABC, abstractmethod

from stockroom.common.dtos.inventory_dtos import NewTransactionDTO
from stockroom.inventory_domain.domain.entities.transaction import Transaction


class ITransactionRepository(ABC):

    @abstractmethod
    def get_all_transactions(self) -> list[Transaction]:
        """Retrieves every transaction, newest first."""
        pass

    @abstractmethod
    def add_transaction(self, new_transaction: NewTransactionDTO) -> str:
        """Records a transaction with a store-assigned id and timestamp. Returns the new id."""
        pass

    @abstractmethod
    def batch_add_transactions(self, new_transactions: list[NewTransactionDTO]) -> list[str]:
        """Records several transactions in one atomic write."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Deletes a transaction by id."""
        pass

    @abstractmethod
    def count_transactions_for_product(self, product_id: str) -> int:
        """Counts the transactions that reference product_id."""
        pass
