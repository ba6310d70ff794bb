# stockroom/inventory_domain/domain/services/stock_ledger_service.py
"""Derives product stock from the transaction ledger."""

from typing import Iterable

from stockroom.common.dtos.inventory_dtos import ProductWithStockDTO
from stockroom.inventory_domain.domain.entities.product import Product
from stockroom.inventory_domain.domain.entities.transaction import Transaction


class StockLedgerService:
    """
    Folds the full transaction history into a stock figure per product.

    Stock is never stored; it is recomputed from scratch whenever products or
    transactions change. The fold is a plain sum, so transaction order does not
    matter.
    """

    def compute_stock(self, products: Iterable[Product], transactions: Iterable[Transaction]) -> dict[str, int]:
        """
        Returns product id -> signed stock.

        Every known product starts at 0. Transactions pointing at ids missing
        from the catalog still accumulate under their own id.
        """
        stock_map: dict[str, int] = {product.id: 0 for product in products}
        for tx in transactions:
            stock_map[tx.product_id] = stock_map.get(tx.product_id, 0) + tx.signed_quantity
        return stock_map

    def get_stock(self, stock_map: dict[str, int], product_id: str) -> int:
        return stock_map.get(product_id, 0)

    def products_with_stock(
        self, products: Iterable[Product], stock_map: dict[str, int]
    ) -> list[ProductWithStockDTO]:
        """Attaches stock to catalog products. Ids outside the catalog are not shown."""
        return [
            ProductWithStockDTO(
                id=product.id,
                name=product.name,
                subwarehouse=product.subwarehouse,
                stock=self.get_stock(stock_map, product.id),
            )
            for product in products
        ]
