# stockroom/inventory_domain/application/inventory_service.py
"""Application service holding the dashboard state and guarding every write."""

import json
import logging
from typing import Callable

from stockroom.common.dtos.inventory_dtos import (
    InventoryFilterDTO,
    NewTransactionDTO,
    OperationResultDTO,
    ProductWithStockDTO,
    TransactionFilterDTO,
)
from stockroom.common.exceptions.custom_exceptions import (
    ApplicationError,
    BusinessRuleError,
    DatabaseError,
    ValidationError,
)
from stockroom.inventory_domain.domain.entities.product import Product
from stockroom.inventory_domain.domain.entities.transaction import Transaction, TransactionType
from stockroom.inventory_domain.domain.repositories.marked_row_repository import IMarkedRowRepository
from stockroom.inventory_domain.domain.repositories.product_repository import IProductRepository
from stockroom.inventory_domain.domain.repositories.transaction_repository import ITransactionRepository
from stockroom.inventory_domain.domain.services.filtering_service import FilteringService
from stockroom.inventory_domain.domain.services.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)

# Asked before destructive actions: (title, message) -> proceed?
ConfirmCallback = Callable[[str, str], bool]

REQUIRED_FIELDS_MESSAGE = "Todos los campos son obligatorios."


def load_catalog(catalog_path: str) -> list[Product]:
    """Loads the static seed catalog from a JSON list of {id, name, subwarehouse}."""
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            catalog_data = json.load(f)
    except FileNotFoundError:
        raise ApplicationError(f"Catalog file not found at {catalog_path}")
    except json.JSONDecodeError:
        raise ApplicationError(f"Error decoding catalog from {catalog_path}")

    if isinstance(catalog_data, dict) and "products" in catalog_data:
        catalog_data = catalog_data["products"]
    if not isinstance(catalog_data, list):
        raise ApplicationError("Invalid catalog format")

    return [Product(id=str(item["id"]), name=item["name"], subwarehouse=item["subwarehouse"]) for item in catalog_data]


class InventoryApplicationService:
    """
    Keeps products, transactions and marked ids as last pushed by the store.

    State is only ever replaced wholesale through the ``on_*_snapshot``
    handlers. Mutating operations write to the store and return a result for
    the operator; they never touch local state, which catches up once the
    store pushes the next snapshot.
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        transaction_repo: ITransactionRepository,
        marked_row_repo: IMarkedRowRepository,
        ledger_service: StockLedgerService | None = None,
        filtering_service: FilteringService | None = None,
    ) -> None:
        self.product_repo = product_repo
        self.transaction_repo = transaction_repo
        self.marked_row_repo = marked_row_repo
        self.ledger_service = ledger_service or StockLedgerService()
        self.filtering_service = filtering_service or FilteringService()

        self.products: list[Product] = []
        self.transactions: list[Transaction] = []
        self.marked_transaction_ids: set[str] = set()
        self.stock_map: dict[str, int] = {}

    # ----- snapshots -----

    def on_products_snapshot(self, products: list[Product]) -> None:
        self.products = list(products)
        self._recompute_stock()

    def on_transactions_snapshot(self, transactions: list[Transaction]) -> None:
        self.transactions = list(transactions)
        self._recompute_stock()

    def on_marked_snapshot(self, marked_ids: set[str]) -> None:
        self.marked_transaction_ids = set(marked_ids)

    def _recompute_stock(self) -> None:
        self.stock_map = self.ledger_service.compute_stock(self.products, self.transactions)

    # ----- derived views -----

    @property
    def product_map(self) -> dict[str, Product]:
        return {product.id: product for product in self.products}

    def get_stock(self, product_id: str) -> int:
        return self.ledger_service.get_stock(self.stock_map, product_id)

    def products_with_stock(self) -> list[ProductWithStockDTO]:
        return self.ledger_service.products_with_stock(self.products, self.stock_map)

    def unique_subwarehouses(self) -> list[str]:
        return self.filtering_service.unique_subwarehouses(self.products)

    def catalog_view(self, search: str = "") -> list[Product]:
        return self.filtering_service.filter_catalog(self.products, search)

    def stock_view(self, criteria: InventoryFilterDTO | None = None) -> list[ProductWithStockDTO]:
        return self.filtering_service.filter_inventory(self.products_with_stock(), criteria or InventoryFilterDTO())

    def entries_view(self, criteria: TransactionFilterDTO | None = None) -> list[Transaction]:
        return self.filtering_service.filter_entries(
            self.transactions, self.product_map, criteria or TransactionFilterDTO()
        )

    def exits_view(self, criteria: TransactionFilterDTO | None = None) -> list[Transaction]:
        return self.filtering_service.filter_exits(
            self.transactions, self.product_map, criteria or TransactionFilterDTO()
        )

    def is_marked(self, transaction_id: str) -> bool:
        return transaction_id in self.marked_transaction_ids

    # ----- seeding -----

    def seed_catalog_if_empty(self, catalog: list[Product]) -> bool:
        """Populates an empty product collection from the static catalog in one batch."""
        if not self.product_repo.is_empty():
            return False
        logger.info("Products collection is empty. Seeding data...")
        self.product_repo.batch_save_products(catalog)
        logger.info(f"Data seeded successfully ({len(catalog)} products).")
        return True

    # ----- transactions -----

    def check_exit_admission(self, product_id: str, quantity: int) -> None:
        """Rejects an exit that asks for more than the current derived stock."""
        stock = self.get_stock(product_id)
        if stock < quantity:
            raise BusinessRuleError(
                f"No hay suficiente stock para el producto seleccionado. Stock actual: {stock}.",
                title="Stock Insuficiente",
            )

    def _validate_new_transaction(self, new_tx: NewTransactionDTO) -> None:
        if not new_tx.product_id or new_tx.product_id not in self.product_map:
            raise ValidationError("Seleccione un producto válido.")
        if isinstance(new_tx.quantity, bool) or not isinstance(new_tx.quantity, int) or new_tx.quantity <= 0:
            raise ValidationError("La cantidad debe ser un número entero positivo.")

    def register_transaction(self, new_tx: NewTransactionDTO) -> OperationResultDTO:
        """
        Records an entry or exit.

        Exits go through the admission check against derived stock first. The
        check and the write are not atomic: two operators exiting the same
        product at once can still drive stock negative.
        """
        try:
            self._validate_new_transaction(new_tx)
            if new_tx.type == TransactionType.EXIT:
                self.check_exit_admission(new_tx.product_id, new_tx.quantity)
        except ValidationError as e:
            return OperationResultDTO(success=False, title="Datos Incompletos", message=e.message)
        except BusinessRuleError as e:
            logger.warning(f"Exit rejected for {new_tx.product_id}: {e.message}")
            return OperationResultDTO(success=False, title=e.title, message=e.message)

        try:
            transaction_id = self.transaction_repo.add_transaction(new_tx)
        except DatabaseError as e:
            logger.error(f"Error adding transaction: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo registrar la transacción.")

        logger.info(f"Recorded {TransactionType(new_tx.type).value} of {new_tx.quantity} for {new_tx.product_id} ({transaction_id})")
        return OperationResultDTO(success=True, title="Éxito", message="Transacción registrada correctamente.")

    def delete_transaction(self, transaction_id: str, confirm: ConfirmCallback) -> OperationResultDTO | None:
        """
        Deletes a transaction and then its mark, if any.

        These are two separate store calls; a failure between them leaves an
        orphaned mark. Returns None when the operator cancels.
        """
        if not confirm(
            "Confirmar Eliminación",
            "¿Está seguro de que desea eliminar esta transacción? Esta acción no se puede deshacer.",
        ):
            return None

        try:
            self.transaction_repo.delete_transaction(transaction_id)
            if self.is_marked(transaction_id):
                self.marked_row_repo.unmark(transaction_id)
        except DatabaseError as e:
            logger.error(f"Error deleting transaction {transaction_id}: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo eliminar la transacción.")

        return OperationResultDTO(success=True, title="Éxito", message="Transacción eliminada correctamente.")

    def toggle_mark(self, transaction_id: str) -> OperationResultDTO:
        try:
            if self.is_marked(transaction_id):
                self.marked_row_repo.unmark(transaction_id)
            else:
                self.marked_row_repo.mark(transaction_id)
        except DatabaseError as e:
            logger.error(f"Error toggling mark on transaction {transaction_id}: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo marcar/desmarcar la fila.")
        return OperationResultDTO(success=True, title="Éxito", message="Fila actualizada.")

    # ----- products -----

    def add_product(self, product_id: str, name: str, subwarehouse: str) -> OperationResultDTO:
        product_id, name, subwarehouse = product_id.strip(), name.strip(), subwarehouse.strip()
        if not product_id or not name or not subwarehouse:
            return OperationResultDTO(success=False, title="Datos Incompletos", message=REQUIRED_FIELDS_MESSAGE)
        if product_id in self.product_map:
            return OperationResultDTO(
                success=False,
                title="Datos Incompletos",
                message="El ITEM (código) ya existe. Por favor, ingrese uno diferente.",
            )

        try:
            self.product_repo.save_product(Product(id=product_id, name=name, subwarehouse=subwarehouse))
        except DatabaseError as e:
            logger.error(f"Error adding product {product_id}: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo agregar el producto.")
        return OperationResultDTO(success=True, title="Éxito", message="Producto agregado correctamente.")

    def update_product(self, product_id: str, name: str, subwarehouse: str) -> OperationResultDTO:
        """Changes name and subwarehouse. The id stays as it was created."""
        name, subwarehouse = name.strip(), subwarehouse.strip()
        if not name or not subwarehouse:
            return OperationResultDTO(success=False, title="Datos Incompletos", message=REQUIRED_FIELDS_MESSAGE)

        try:
            self.product_repo.update_product(Product(id=product_id, name=name, subwarehouse=subwarehouse))
        except DatabaseError as e:
            logger.error(f"Error updating product {product_id}: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo actualizar el producto.")
        return OperationResultDTO(success=True, title="Éxito", message="Producto actualizado correctamente.")

    def delete_product(self, product_id: str, confirm: ConfirmCallback) -> OperationResultDTO | None:
        """Deletes a product that no transaction references. Returns None when the operator cancels."""
        try:
            reference_count = self.transaction_repo.count_transactions_for_product(product_id)
        except DatabaseError as e:
            logger.error(f"Error counting transactions for product {product_id}: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo eliminar el producto.")

        if reference_count > 0:
            return OperationResultDTO(
                success=False,
                title="Eliminación Bloqueada",
                message=(
                    "Este producto no se puede eliminar porque tiene transacciones asociadas. "
                    "Elimine primero las transacciones."
                ),
            )

        if not confirm(
            "Confirmar Eliminación",
            "¿Está seguro de que desea eliminar este producto? Esta acción no se puede deshacer.",
        ):
            return None

        try:
            self.product_repo.delete_product(product_id)
        except DatabaseError as e:
            logger.error(f"Error deleting product {product_id}: {e}")
            return OperationResultDTO(success=False, title="Error", message="No se pudo eliminar el producto.")
        return OperationResultDTO(success=True, title="Éxito", message="Producto eliminado correctamente.")
