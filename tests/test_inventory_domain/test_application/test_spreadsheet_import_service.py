# tests/test_inventory_domain/test_application/test_spreadsheet_import_service.py
"""Tests for the spreadsheet upload rules."""

import pytest

from stockroom.common.dtos.inventory_dtos import NewTransactionDTO
from stockroom.common.exceptions.custom_exceptions import DatabaseError
from stockroom.inventory_domain.application.spreadsheet_import_service import is_header_row, parse_quantity
from stockroom.inventory_domain.domain.entities.transaction import TransactionType


def test_header_row_is_skipped(import_service, product_map, mock_transaction_repository) -> None:
    result = import_service.import_rows([["ITEM", "CANTIDAD"], ["A123", "10"]], product_map)

    assert result.errors == []
    assert result.created_count == 1
    mock_transaction_repository.batch_add_transactions.assert_called_once_with(
        [NewTransactionDTO(product_id="A123", quantity=10, type=TransactionType.ENTRY, subwarehouse="REACTIVOS")]
    )


def test_single_valid_row_yields_one_entry(import_service, product_map, mock_transaction_repository) -> None:
    result = import_service.import_rows([["A123", "10"]], product_map)

    assert result.created_count == 1
    assert result.success_message == "1 entradas han sido registradas correctamente."
    assert result.title == "Carga Exitosa"
    (batch,), _ = mock_transaction_repository.batch_add_transactions.call_args
    assert batch[0].quantity == 10
    assert batch[0].type == TransactionType.ENTRY
    assert batch[0].subwarehouse == "REACTIVOS"


@pytest.mark.parametrize(
    "row, reason_fragment",
    [
        (["A123", "-5"], "Cantidad no válida"),
        (["A123", "0"], "Cantidad no válida"),
        (["A123", "abc"], "Cantidad no válida"),
        (["UNKNOWN", "5"], "no encontrado"),
        (["A123"], "Formato incorrecto"),
        (["A123", "  "], "Faltan valores"),
        (["", "5"], "Faltan valores"),
    ],
)
def test_invalid_rows_are_reported(import_service, product_map, mock_transaction_repository, row, reason_fragment) -> None:
    result = import_service.import_rows([row], product_map)

    assert len(result.errors) == 1
    assert reason_fragment in result.errors[0].reason
    assert result.errors[0].row == 1
    mock_transaction_repository.batch_add_transactions.assert_not_called()


def test_negative_quantity_message(import_service, product_map) -> None:
    result = import_service.import_rows([["A123", "-5"]], product_map)

    assert result.errors[0].reason == 'Cantidad no válida: "-5".'
    assert result.errors[0].data == "A123;-5"


def test_unknown_product_message(import_service, product_map) -> None:
    result = import_service.import_rows([["UNKNOWN", "5"]], product_map)

    assert result.errors[0].reason == 'Producto con código "UNKNOWN" no encontrado.'


def test_valid_rows_commit_in_one_batch_despite_bad_rows(
    import_service, product_map, mock_transaction_repository
) -> None:
    rows = [
        ["ITEM", "CANTIDAD"],
        ["A123", "10"],
        ["UNKNOWN", "5"],
        ["B200", "3"],
        ["C300", "-1"],
        ["", ""],
        ["C300", "2", "extra"],
    ]

    result = import_service.import_rows(rows, product_map)

    mock_transaction_repository.batch_add_transactions.assert_called_once()
    (batch,), _ = mock_transaction_repository.batch_add_transactions.call_args
    assert [(tx.product_id, tx.quantity) for tx in batch] == [("A123", 10), ("B200", 3), ("C300", 2)]
    assert result.created_count == 3
    assert result.success_message == "3 entradas han sido registradas correctamente."
    # Row numbers count the header, blank rows are skipped silently
    assert [(error.row, error.data) for error in result.errors] == [(3, "UNKNOWN;5"), (5, "C300;-1")]
    assert result.title == "Resultado de la Carga de Archivo"


def test_batch_failure_reports_single_synthetic_error(
    import_service, product_map, mock_transaction_repository
) -> None:
    mock_transaction_repository.batch_add_transactions.side_effect = DatabaseError("deadlock")

    result = import_service.import_rows([["A123", "10"], ["B200", "1"]], product_map)

    assert result.success_message is None
    assert result.created_count == 0
    assert len(result.errors) == 1
    assert result.errors[0].row == 0
    assert result.errors[0].reason == "Error al guardar los datos en la base de datos."


def test_no_valid_rows_skips_write(import_service, product_map, mock_transaction_repository) -> None:
    result = import_service.import_rows([["ITEM", "CANTIDAD"]], product_map)

    assert result.created_count == 0
    assert result.errors == []
    mock_transaction_repository.batch_add_transactions.assert_not_called()


def test_quantity_cells_from_spreadsheets(import_service, product_map, mock_transaction_repository) -> None:
    """Numeric cells may arrive as "7.0" or with units; the leading integer is used."""
    import_service.import_rows([["A123", "7.0"], [" B200 ", 4]], product_map)

    (batch,), _ = mock_transaction_repository.batch_add_transactions.call_args
    assert [(tx.product_id, tx.quantity) for tx in batch] == [("A123", 7), ("B200", 4)]


@pytest.mark.parametrize(
    "row, expected",
    [
        (["ITEM", "CANTIDAD"], True),
        ([" Item code ", "Cantidad total"], True),
        (["item"], False),
        (["A123", "10"], False),
        ([1, "cantidad"], False),
    ],
)
def test_is_header_row(row, expected) -> None:
    assert is_header_row(row) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [("10", 10), ("+3", 3), ("-5", -5), ("12 uds", 12), ("4.9", 4), ("abc", None), ("", None), ("٣", None)],
)
def test_parse_quantity(raw, expected) -> None:
    assert parse_quantity(raw) == expected
