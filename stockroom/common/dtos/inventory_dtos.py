"""Data Transfer Objects for inventory views, submissions and results."""

from dataclasses import dataclass, field

from stockroom.inventory_domain.domain.entities.transaction import TransactionType

ALL_SUBWAREHOUSES = "all"


@dataclass
class ProductWithStockDTO:
    """A catalog product together with its derived stock."""

    id: str
    name: str
    subwarehouse: str
    stock: int = 0


@dataclass
class NewTransactionDTO:
    """A transaction as submitted, before the store assigns id and timestamp."""

    product_id: str
    quantity: int
    type: TransactionType
    batch: str | None = None
    subwarehouse: str | None = None


@dataclass
class InventoryFilterDTO:
    """Filters for the catalog and stock views."""

    search: str = ""
    subwarehouse: str = ALL_SUBWAREHOUSES
    stock_levels: set[int] = field(default_factory=set)  # 5 stands for "5 or more"


@dataclass
class TransactionFilterDTO:
    """Filters for the entries and exits views. Dates are YYYY-MM-DD strings, empty means unbounded."""

    search: str = ""
    subwarehouse: str = ALL_SUBWAREHOUSES
    start_date: str = ""
    end_date: str = ""


@dataclass
class UploadRowErrorDTO:
    """A spreadsheet row that was rejected. Row 0 is used for errors not tied to a row."""

    row: int
    data: str
    reason: str


@dataclass
class ImportResultDTO:
    """Outcome of a spreadsheet upload."""

    created_count: int = 0
    success_message: str | None = None
    errors: list[UploadRowErrorDTO] = field(default_factory=list)

    @property
    def title(self) -> str:
        return "Carga Exitosa" if not self.errors else "Resultado de la Carga de Archivo"


@dataclass
class OperationResultDTO:
    """What the operator is told after an action."""

    success: bool
    title: str
    message: str
