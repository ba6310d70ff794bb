# stockroom/inventory_domain/domain/repositories/product_repository.py
"""Product repository interface."""
from abc import ABC, abstractmethod

from stockroom.inventory_domain.domain.entities.product import Product


class IProductRepository(ABC):

    @abstractmethod
    def get_all_products(self) -> list[Product]:
        """Retrieves every product ordered by id."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Returns True when the product collection holds no documents."""
        pass

    @abstractmethod
    def save_product(self, product: Product) -> None:
        """Creates or overwrites the product keyed by its id."""
        pass

    @abstractmethod
    def update_product(self, product: Product) -> None:
        """Merges name and subwarehouse into the existing product document."""
        pass

    @abstractmethod
    def delete_product(self, product_id: str) -> None:
        """Deletes the product keyed by product_id."""
        pass

    @abstractmethod
    def batch_save_products(self, products: list[Product]) -> None:
        """Creates or overwrites several products in one atomic write."""
        pass
