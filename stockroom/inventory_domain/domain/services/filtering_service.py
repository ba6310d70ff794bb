# stockroom/inventory_domain/domain/services/filtering_service.py
"""In-memory filtering and sorting for the dashboard views."""

import logging
from datetime import datetime
from typing import Iterable

from stockroom.common.dtos.inventory_dtos import (
    ALL_SUBWAREHOUSES,
    InventoryFilterDTO,
    ProductWithStockDTO,
    TransactionFilterDTO,
)
from stockroom.common.utils.date_utils import end_of_local_day, ensure_utc, start_of_local_day
from stockroom.inventory_domain.domain.entities.product import Product
from stockroom.inventory_domain.domain.entities.transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)

# Stock level bucket meaning "this many or more"
OPEN_ENDED_STOCK_LEVEL = 5


def _matches_search(search: str, *fields: str | None) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(value and needle in value.lower() for value in fields)


def _name_key(item) -> str:
    return item.name.casefold()


class FilteringService:
    """Applies search, subwarehouse, stock level and date range filters."""

    def __init__(self, tz_name: str | None = None) -> None:
        self.tz_name = tz_name

    def unique_subwarehouses(self, products: Iterable[Product]) -> list[str]:
        """Subwarehouse choices for filter menus, "all" first."""
        return [ALL_SUBWAREHOUSES, *sorted({product.subwarehouse for product in products})]

    def filter_catalog(self, products: Iterable[Product], search: str = "") -> list[Product]:
        matches = [p for p in products if _matches_search(search, p.name, p.id, p.subwarehouse)]
        return sorted(matches, key=_name_key)

    def matches_stock_level(self, stock: int, stock_levels: set[int]) -> bool:
        if not stock_levels:
            return True
        return stock in stock_levels or (OPEN_ENDED_STOCK_LEVEL in stock_levels and stock >= OPEN_ENDED_STOCK_LEVEL)

    def filter_inventory(
        self, products: Iterable[ProductWithStockDTO], criteria: InventoryFilterDTO
    ) -> list[ProductWithStockDTO]:
        matches = [
            p
            for p in products
            if _matches_search(criteria.search, p.name, p.id, p.subwarehouse)
            and (criteria.subwarehouse == ALL_SUBWAREHOUSES or p.subwarehouse == criteria.subwarehouse)
            and self.matches_stock_level(p.stock, criteria.stock_levels)
        ]
        return sorted(matches, key=_name_key)

    def _date_bounds(self, criteria: TransactionFilterDTO) -> tuple[datetime | None, datetime | None]:
        return (
            start_of_local_day(criteria.start_date, self.tz_name),
            end_of_local_day(criteria.end_date, self.tz_name),
        )

    @staticmethod
    def _in_date_range(tx: Transaction, start: datetime | None, end: datetime | None) -> bool:
        tx_date = ensure_utc(tx.date)
        if start and tx_date < start:
            return False
        if end and tx_date > end:
            return False
        return True

    def filter_entries(
        self,
        transactions: Iterable[Transaction],
        product_map: dict[str, Product],
        criteria: TransactionFilterDTO,
    ) -> list[Transaction]:
        """ENTRY transactions of known products. Keeps the incoming order. A malformed date matches nothing."""
        try:
            start, end = self._date_bounds(criteria)
        except ValueError:
            logger.warning(f"Ignoring entries filter with invalid dates: {criteria.start_date!r}, {criteria.end_date!r}")
            return []

        result = []
        for tx in transactions:
            if tx.type != TransactionType.ENTRY:
                continue
            product = product_map.get(tx.product_id)
            if product is None:
                continue
            if _matches_search(criteria.search, product.name, product.id) and self._in_date_range(tx, start, end):
                result.append(tx)
        return result

    def filter_exits(
        self,
        transactions: Iterable[Transaction],
        product_map: dict[str, Product],
        criteria: TransactionFilterDTO,
    ) -> list[Transaction]:
        """EXIT transactions of known products. Keeps the incoming order. A malformed date matches nothing."""
        try:
            start, end = self._date_bounds(criteria)
        except ValueError:
            logger.warning(f"Ignoring exits filter with invalid dates: {criteria.start_date!r}, {criteria.end_date!r}")
            return []

        result = []
        for tx in transactions:
            if tx.type != TransactionType.EXIT:
                continue
            product = product_map.get(tx.product_id)
            if product is None:
                continue
            if not _matches_search(criteria.search, product.name, product.id, tx.batch, tx.subwarehouse):
                continue
            if criteria.subwarehouse != ALL_SUBWAREHOUSES and tx.subwarehouse != criteria.subwarehouse:
                continue
            if self._in_date_range(tx, start, end):
                result.append(tx)
        return result
