# stockroom/inventory_domain/domain/repositories/marked_row_repository.py
"""Marked row repository interface."""
from abc import ABC, abstractmethod


class IMarkedRowRepository(ABC):

    @abstractmethod
    def get_marked_ids(self) -> set[str]:
        """Retrieves the ids of all marked transactions."""
        pass

    @abstractmethod
    def mark(self, transaction_id: str) -> None:
        """Flags a transaction, recording when it was marked."""
        pass

    @abstractmethod
    def unmark(self, transaction_id: str) -> None:
        """Removes the flag of a transaction."""
        pass
