# main.py
"""Main application entry point for the warehouse inventory tracker."""

import logging
import sys
import time

from rich.console import Console
from rich.table import Table

from stockroom.common.config.settings import settings
from stockroom.common.dtos.inventory_dtos import ImportResultDTO
from stockroom.common.exceptions.custom_exceptions import ApplicationError, DatabaseError
from stockroom.common.logger_config import setup_logging
from stockroom.common.utils.date_utils import format_local_datetime
from stockroom.inventory_domain.application.inventory_service import InventoryApplicationService, load_catalog
from stockroom.inventory_domain.application.spreadsheet_import_service import SpreadsheetImportService
from stockroom.inventory_domain.domain.services.filtering_service import FilteringService
from stockroom.inventory_domain.infrastructure.file_readers.spreadsheet_reader import read_rows
from stockroom.inventory_domain.infrastructure.live_queries.snapshot_listener import (
    LiveQueryScheduler,
    SnapshotListener,
)
from stockroom.inventory_domain.infrastructure.persistence.mysql_marked_row_repository import (
    MySQLMarkedRowRepository,
)
from stockroom.inventory_domain.infrastructure.persistence.mysql_product_repository import MySQLProductRepository
from stockroom.inventory_domain.infrastructure.persistence.mysql_transaction_repository import (
    MySQLTransactionRepository,
)

logger = logging.getLogger(__name__)
console = Console()


def setup_inventory_dependencies() -> tuple[InventoryApplicationService, SpreadsheetImportService, LiveQueryScheduler]:
    """Initializes and wires up inventory domain dependencies, creating tables as needed."""
    product_repo = MySQLProductRepository()
    transaction_repo = MySQLTransactionRepository()
    marked_row_repo = MySQLMarkedRowRepository()

    for repo in (product_repo, transaction_repo, marked_row_repo):
        repo.create_tables()

    inventory_service = InventoryApplicationService(
        product_repo=product_repo,
        transaction_repo=transaction_repo,
        marked_row_repo=marked_row_repo,
        filtering_service=FilteringService(tz_name=settings.LOCAL_TIMEZONE),
    )
    import_service = SpreadsheetImportService(transaction_repo=transaction_repo)

    live_queries = LiveQueryScheduler(interval_seconds=settings.SNAPSHOT_POLL_SECONDS)
    live_queries.register(SnapshotListener("products", product_repo.get_all_products)).subscribe(
        inventory_service.on_products_snapshot
    )
    live_queries.register(SnapshotListener("transactions", transaction_repo.get_all_transactions)).subscribe(
        inventory_service.on_transactions_snapshot
    )
    live_queries.register(SnapshotListener("marked rows", marked_row_repo.get_marked_ids)).subscribe(
        inventory_service.on_marked_snapshot
    )
    return inventory_service, import_service, live_queries


def print_import_result(result: ImportResultDTO) -> None:
    console.rule(result.title)
    if result.success_message:
        console.print(f"[bold green]{result.success_message}[/bold green]")
    if result.errors:
        console.print("Se encontraron los siguientes errores y no se procesaron las filas correspondientes:")
        for error in result.errors:
            console.print(f"  Fila {error.row}: {error.reason}")


def print_stock(inventory_service: InventoryApplicationService) -> None:
    table = Table(title=f"Stock - {settings.WAREHOUSE_NAME}")
    table.add_column("ITEM")
    table.add_column("Producto")
    table.add_column("Subalmacén")
    table.add_column("Stock", justify="right")
    for product in inventory_service.stock_view():
        style = "red" if product.stock <= 0 else None
        table.add_row(product.id, product.name, product.subwarehouse, str(product.stock), style=style)
    console.print(table)


def print_recent_transactions(inventory_service: InventoryApplicationService, limit: int = 10) -> None:
    table = Table(title="Últimos movimientos")
    table.add_column("Fecha")
    table.add_column("Tipo")
    table.add_column("ITEM")
    table.add_column("Cantidad", justify="right")
    table.add_column("Lote")
    for tx in inventory_service.transactions[:limit]:
        marker = "*" if inventory_service.is_marked(tx.id) else ""
        table.add_row(
            format_local_datetime(tx.date, settings.LOCAL_TIMEZONE) + marker,
            tx.type.value,
            tx.product_id,
            str(tx.quantity),
            tx.batch or "",
        )
    console.print(table)


def run_dashboard(upload_path: str | None = None) -> None:
    inventory_service, import_service, live_queries = setup_inventory_dependencies()

    try:
        if inventory_service.seed_catalog_if_empty(load_catalog(settings.CATALOG_PATH)):
            live_queries.poll_all()
    except ApplicationError as e:
        logger.error(f"Error seeding catalog: {e}")

    if upload_path:
        try:
            rows = read_rows(upload_path)
        except ApplicationError as e:
            logger.error(f"{e}")
        else:
            print_import_result(import_service.import_rows(rows, inventory_service.product_map))
            live_queries.poll_all()

    print_stock(inventory_service)
    print_recent_transactions(inventory_service)

    while True:
        live_queries.run_pending()
        time.sleep(1)


if __name__ == "__main__":
    setup_logging()
    logger.info(f"Inventory tracker for {settings.WAREHOUSE_NAME} started.")
    try:
        run_dashboard(sys.argv[1] if len(sys.argv) > 1 else None)
    except KeyboardInterrupt:
        logger.info("Inventory tracker stopped.")
    except DatabaseError as e:
        logger.error(f"❌ Could not start inventory tracker: {e}")
        sys.exit(1)
