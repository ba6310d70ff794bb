# stockroom/inventory_domain/infrastructure/persistence/mysql_product_repository.py
"""MySQL implementation of the Product repository."""

import logging

from stockroom.inventory_domain.domain.entities.product import Product
from stockroom.inventory_domain.domain.repositories.product_repository import IProductRepository
from stockroom.inventory_domain.infrastructure.persistence.mysql_base_repository import MySQLBaseRepository

logger = logging.getLogger(__name__)

UPSERT_PRODUCT_QUERY = """
INSERT INTO inv_products (id, name, subwarehouse)
VALUES (%s, %s, %s)
ON DUPLICATE KEY UPDATE
name = VALUES(name),
subwarehouse = VALUES(subwarehouse)
"""


class MySQLProductRepository(MySQLBaseRepository, IProductRepository):
    """Products keyed by their ITEM code."""

    def create_tables(self) -> None:
        """Creates the products table if missing."""
        create_products_table_query = """
        CREATE TABLE IF NOT EXISTS inv_products (
            id VARCHAR(64) PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            subwarehouse VARCHAR(255) NOT NULL
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        self._execute_write(create_products_table_query, error_message="Error creating products table")
        logger.info("Products table checked/created.")

    def get_all_products(self) -> list[Product]:
        rows = self._fetch_all(
            "SELECT id, name, subwarehouse FROM inv_products ORDER BY id",
            error_message="Error fetching products",
        )
        return [Product(id=row["id"], name=row["name"], subwarehouse=row["subwarehouse"]) for row in rows]

    def is_empty(self) -> bool:
        rows = self._fetch_all("SELECT 1 AS present FROM inv_products LIMIT 1", error_message="Error checking products")
        return not rows

    def save_product(self, product: Product) -> None:
        self._execute_write(
            UPSERT_PRODUCT_QUERY,
            (product.id, product.name, product.subwarehouse),
            error_message=f"Error saving product {product.id}",
        )

    def update_product(self, product: Product) -> None:
        # Merge semantics: creates the document if it disappeared in the meantime
        self.save_product(product)

    def delete_product(self, product_id: str) -> None:
        self._execute_write(
            "DELETE FROM inv_products WHERE id = %s",
            (product_id,),
            error_message=f"Error deleting product {product_id}",
        )

    def batch_save_products(self, products: list[Product]) -> None:
        if not products:
            return
        self._execute_batch(
            UPSERT_PRODUCT_QUERY,
            [(p.id, p.name, p.subwarehouse) for p in products],
            error_message="Error batch saving products",
        )
        logger.info(f"Batch saved {len(products)} products")
