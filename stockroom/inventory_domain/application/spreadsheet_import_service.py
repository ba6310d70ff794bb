# stockroom/inventory_domain/application/spreadsheet_import_service.py
"""Application service turning uploaded ITEM/CANTIDAD rows into entry transactions."""

import logging
import re
from typing import Any, Sequence

from stockroom.common.dtos.inventory_dtos import ImportResultDTO, NewTransactionDTO, UploadRowErrorDTO
from stockroom.common.exceptions.custom_exceptions import DatabaseError, ValidationError
from stockroom.inventory_domain.domain.entities.product import Product
from stockroom.inventory_domain.domain.entities.transaction import TransactionType
from stockroom.inventory_domain.domain.repositories.transaction_repository import ITransactionRepository

logger = logging.getLogger(__name__)

LEADING_INTEGER = re.compile(r"^[+-]?[0-9]+")


def _cell_text(cell: Any) -> str:
    return "" if cell is None else str(cell).strip()


def is_header_row(row: Any) -> bool:
    """An ITEM / CANTIDAD header, matched loosely on the first two cells."""
    if not isinstance(row, (list, tuple)) or len(row) < 2:
        return False
    first, second = row[0], row[1]
    return (
        isinstance(first, str)
        and "item" in first.lower().strip()
        and isinstance(second, str)
        and "cantidad" in second.lower().strip()
    )


def parse_quantity(raw: str) -> int | None:
    """Reads the leading integer of a cell ("10", "10.0", "12 uds"), None when there is none."""
    match = LEADING_INTEGER.match(raw)
    return int(match.group()) if match else None


class SpreadsheetImportService:
    """
    Validates uploaded rows one by one and records the good ones in a single batch.

    A bad row never aborts the upload; it is reported with its 1-based position
    in the file and the reason it was skipped.
    """

    def __init__(self, transaction_repo: ITransactionRepository) -> None:
        self.transaction_repo = transaction_repo

    def _validate_row(self, row: Sequence[Any], product_map: dict[str, Product]) -> NewTransactionDTO:
        if len(row) < 2:
            raise ValidationError("Formato incorrecto. Se esperan 2 columnas: ITEM, CANTIDAD.")

        product_id, quantity_str = (_cell_text(cell) for cell in row[:2])
        if not product_id or not quantity_str:
            raise ValidationError("Faltan valores. Se requiere ITEM y CANTIDAD en las dos primeras columnas.")

        quantity = parse_quantity(quantity_str)
        if quantity is None or quantity <= 0:
            raise ValidationError(f'Cantidad no válida: "{quantity_str}".')

        product = product_map.get(product_id)
        if product is None:
            raise ValidationError(f'Producto con código "{product_id}" no encontrado.')

        return NewTransactionDTO(
            product_id=product.id,
            quantity=quantity,
            type=TransactionType.ENTRY,
            subwarehouse=product.subwarehouse,
        )

    def parse_rows(
        self, rows: Sequence[Any], product_map: dict[str, Product]
    ) -> tuple[list[NewTransactionDTO], list[UploadRowErrorDTO]]:
        """Splits rows into entry transactions and per-row errors. Blank rows are ignored."""
        new_transactions: list[NewTransactionDTO] = []
        errors: list[UploadRowErrorDTO] = []

        start_index = 1 if rows and is_header_row(rows[0]) else 0

        for row_number, row in enumerate(rows[start_index:], start=start_index + 1):
            if not row or not isinstance(row, (list, tuple)) or all(not _cell_text(cell) for cell in row):
                continue

            try:
                new_transactions.append(self._validate_row(row, product_map))
            except ValidationError as e:
                raw = ";".join("" if cell is None else str(cell) for cell in row)
                errors.append(UploadRowErrorDTO(row=row_number, data=raw, reason=e.message))

        return new_transactions, errors

    def import_rows(self, rows: Sequence[Any], product_map: dict[str, Product]) -> ImportResultDTO:
        """Validates rows and commits every valid one as one atomic batch."""
        new_transactions, errors = self.parse_rows(rows, product_map)
        result = ImportResultDTO(errors=errors)

        if not new_transactions:
            logger.warning(f"Upload produced no valid rows ({len(errors)} rejected).")
            return result

        try:
            self.transaction_repo.batch_add_transactions(new_transactions)
        except DatabaseError as e:
            logger.error(f"Error committing batch: {e}")
            result.errors.append(
                UploadRowErrorDTO(row=0, data="", reason="Error al guardar los datos en la base de datos.")
            )
            return result

        result.created_count = len(new_transactions)
        result.success_message = f"{result.created_count} entradas han sido registradas correctamente."
        logger.info(f"{result.success_message} {len(errors)} rows rejected.")
        return result
