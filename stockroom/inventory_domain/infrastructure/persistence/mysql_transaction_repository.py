# stockroom/inventory_domain/infrastructure/persistence/mysql_transaction_repository.py
"""MySQL implementation of the Transaction repository."""

import logging
import uuid

from stockroom.common.dtos.inventory_dtos import NewTransactionDTO
from stockroom.common.exceptions.custom_exceptions import DatabaseError
from stockroom.common.utils.date_utils import ensure_utc
from stockroom.inventory_domain.domain.entities.transaction import Transaction, TransactionType
from stockroom.inventory_domain.domain.repositories.transaction_repository import ITransactionRepository
from stockroom.inventory_domain.infrastructure.persistence.mysql_base_repository import MySQLBaseRepository

logger = logging.getLogger(__name__)

# The database clock stamps every transaction, never the client
INSERT_TRANSACTION_QUERY = """
INSERT INTO inv_transactions (id, product_id, quantity, type, batch, subwarehouse, date)
VALUES (%s, %s, %s, %s, %s, %s, UTC_TIMESTAMP(6))
"""


class MySQLTransactionRepository(MySQLBaseRepository, ITransactionRepository):
    """Append-only ledger of entries and exits."""

    def create_tables(self) -> None:
        """Creates the transactions table if missing."""
        create_transactions_table_query = """
        CREATE TABLE IF NOT EXISTS inv_transactions (
            id CHAR(36) PRIMARY KEY,
            product_id VARCHAR(64) NOT NULL,
            quantity INT UNSIGNED NOT NULL,
            type ENUM('ENTRY', 'EXIT') NOT NULL,
            batch VARCHAR(255),
            subwarehouse VARCHAR(255),
            date DATETIME(6) NOT NULL,
            INDEX idx_product_id (product_id),
            INDEX idx_date (date)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        self._execute_write(create_transactions_table_query, error_message="Error creating transactions table")
        logger.info("Transactions table checked/created.")

    def _params(self, transaction_id: str, new_transaction: NewTransactionDTO) -> tuple:
        return (
            transaction_id,
            new_transaction.product_id,
            new_transaction.quantity,
            TransactionType(new_transaction.type).value,
            new_transaction.batch,
            new_transaction.subwarehouse,
        )

    def get_all_transactions(self) -> list[Transaction]:
        rows = self._fetch_all(
            """
            SELECT id, product_id, quantity, type, batch, subwarehouse, date
            FROM inv_transactions
            ORDER BY date DESC
            """,
            error_message="Error fetching transactions",
        )
        try:
            return [
                Transaction(
                    id=row["id"],
                    product_id=row["product_id"],
                    quantity=row["quantity"],
                    type=TransactionType(row["type"]),
                    date=ensure_utc(row["date"]),
                    batch=row["batch"],
                    subwarehouse=row["subwarehouse"],
                )
                for row in rows
            ]
        except (KeyError, ValueError) as e:
            logger.error(f"Stored transaction row could not be read: {e}")
            raise DatabaseError("Invalid transaction row in inv_transactions", original_exception=e)

    def add_transaction(self, new_transaction: NewTransactionDTO) -> str:
        transaction_id = str(uuid.uuid4())
        self._execute_write(
            INSERT_TRANSACTION_QUERY,
            self._params(transaction_id, new_transaction),
            error_message=f"Error adding transaction for {new_transaction.product_id}",
        )
        return transaction_id

    def batch_add_transactions(self, new_transactions: list[NewTransactionDTO]) -> list[str]:
        if not new_transactions:
            return []
        transaction_ids = [str(uuid.uuid4()) for _ in new_transactions]
        self._execute_batch(
            INSERT_TRANSACTION_QUERY,
            [self._params(tx_id, tx) for tx_id, tx in zip(transaction_ids, new_transactions)],
            error_message="Error batch adding transactions",
        )
        logger.info(f"Batch added {len(new_transactions)} transactions")
        return transaction_ids

    def delete_transaction(self, transaction_id: str) -> None:
        self._execute_write(
            "DELETE FROM inv_transactions WHERE id = %s",
            (transaction_id,),
            error_message=f"Error deleting transaction {transaction_id}",
        )

    def count_transactions_for_product(self, product_id: str) -> int:
        rows = self._fetch_all(
            "SELECT COUNT(*) AS total FROM inv_transactions WHERE product_id = %s",
            (product_id,),
            error_message=f"Error counting transactions for {product_id}",
        )
        return rows[0]["total"] if rows else 0
