# tests/conftest.py
from datetime import datetime
from unittest.mock import Mock

import pytest
import pytz

from stockroom.common.config.settings import settings
from stockroom.inventory_domain.application.inventory_service import InventoryApplicationService
from stockroom.inventory_domain.application.spreadsheet_import_service import SpreadsheetImportService
from stockroom.inventory_domain.domain.entities.product import Product
from stockroom.inventory_domain.domain.entities.transaction import Transaction, TransactionType
from stockroom.inventory_domain.domain.services.filtering_service import FilteringService
from stockroom.inventory_domain.infrastructure.persistence.mysql_marked_row_repository import (
    MySQLMarkedRowRepository,
)
from stockroom.inventory_domain.infrastructure.persistence.mysql_product_repository import MySQLProductRepository
from stockroom.inventory_domain.infrastructure.persistence.mysql_transaction_repository import (
    MySQLTransactionRepository,
)


@pytest.fixture(autouse=True)
def mock_settings_local_timezone(mocker) -> None:
    """Pins the local timezone so date range tests do not depend on the environment."""
    mocker.patch.object(settings, "LOCAL_TIMEZONE", "America/Lima")


@pytest.fixture
def mock_product_repository() -> Mock:
    """Mock for MySQLProductRepository."""
    return Mock(spec=MySQLProductRepository)


@pytest.fixture
def mock_transaction_repository() -> Mock:
    """Mock for MySQLTransactionRepository."""
    return Mock(spec=MySQLTransactionRepository)


@pytest.fixture
def mock_marked_row_repository() -> Mock:
    """Mock for MySQLMarkedRowRepository."""
    return Mock(spec=MySQLMarkedRowRepository)


@pytest.fixture
def sample_products() -> list[Product]:
    return [
        Product(id="A123", name="Reactivo Lisante", subwarehouse="REACTIVOS"),
        Product(id="B200", name="Control Normal", subwarehouse="CONTROLES"),
        Product(id="C300", name="Tubos EDTA", subwarehouse="INSUMOS"),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Newest first, as the transactions live query delivers them."""
    return [
        Transaction(
            id="tx-4",
            product_id="A123",
            quantity=3,
            type=TransactionType.EXIT,
            date=datetime(2024, 3, 10, 15, 0, 0, tzinfo=pytz.utc),
            batch="LOTE-77",
            subwarehouse="REACTIVOS",
        ),
        Transaction(
            id="tx-3",
            product_id="B200",
            quantity=6,
            type=TransactionType.ENTRY,
            date=datetime(2024, 3, 5, 12, 0, 0, tzinfo=pytz.utc),
            subwarehouse="CONTROLES",
        ),
        Transaction(
            id="tx-2",
            product_id="A123",
            quantity=10,
            type=TransactionType.ENTRY,
            date=datetime(2024, 3, 1, 9, 30, 0, tzinfo=pytz.utc),
            subwarehouse="REACTIVOS",
        ),
        Transaction(
            id="tx-1",
            product_id="GHOST",
            quantity=4,
            type=TransactionType.ENTRY,
            date=datetime(2024, 2, 28, 9, 0, 0, tzinfo=pytz.utc),
        ),
    ]


@pytest.fixture
def inventory_service(
    mock_product_repository, mock_transaction_repository, mock_marked_row_repository
) -> InventoryApplicationService:
    """InventoryApplicationService with mocked repositories and no state yet."""
    return InventoryApplicationService(
        product_repo=mock_product_repository,
        transaction_repo=mock_transaction_repository,
        marked_row_repo=mock_marked_row_repository,
        filtering_service=FilteringService(tz_name="America/Lima"),
    )


@pytest.fixture
def loaded_inventory_service(inventory_service, sample_products, sample_transactions) -> InventoryApplicationService:
    """InventoryApplicationService after the first snapshots arrived."""
    inventory_service.on_products_snapshot(sample_products)
    inventory_service.on_transactions_snapshot(sample_transactions)
    inventory_service.on_marked_snapshot({"tx-4"})
    return inventory_service


@pytest.fixture
def import_service(mock_transaction_repository) -> SpreadsheetImportService:
    return SpreadsheetImportService(transaction_repo=mock_transaction_repository)


@pytest.fixture
def product_map(sample_products) -> dict[str, Product]:
    return {product.id: product for product in sample_products}


@pytest.fixture
def always_confirm() -> Mock:
    return Mock(return_value=True)


@pytest.fixture
def never_confirm() -> Mock:
    return Mock(return_value=False)
