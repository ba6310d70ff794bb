# stockroom/inventory_domain/infrastructure/persistence/mysql_marked_row_repository.py
"""MySQL implementation of the marked row repository."""

import logging

from stockroom.inventory_domain.domain.repositories.marked_row_repository import IMarkedRowRepository
from stockroom.inventory_domain.infrastructure.persistence.mysql_base_repository import MySQLBaseRepository

logger = logging.getLogger(__name__)


class MySQLMarkedRowRepository(MySQLBaseRepository, IMarkedRowRepository):
    """One row per marked transaction; no foreign key, so a mark can outlive its transaction."""

    def create_tables(self) -> None:
        create_marked_rows_table_query = """
        CREATE TABLE IF NOT EXISTS inv_marked_rows (
            transaction_id CHAR(36) PRIMARY KEY,
            marked_at DATETIME(6) NOT NULL
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        self._execute_write(create_marked_rows_table_query, error_message="Error creating marked rows table")
        logger.info("Marked rows table checked/created.")

    def get_marked_ids(self) -> set[str]:
        rows = self._fetch_all("SELECT transaction_id FROM inv_marked_rows", error_message="Error fetching marked rows")
        return {row["transaction_id"] for row in rows}

    def mark(self, transaction_id: str) -> None:
        self._execute_write(
            """
            INSERT INTO inv_marked_rows (transaction_id, marked_at)
            VALUES (%s, UTC_TIMESTAMP(6))
            ON DUPLICATE KEY UPDATE marked_at = VALUES(marked_at)
            """,
            (transaction_id,),
            error_message=f"Error marking transaction {transaction_id}",
        )

    def unmark(self, transaction_id: str) -> None:
        self._execute_write(
            "DELETE FROM inv_marked_rows WHERE transaction_id = %s",
            (transaction_id,),
            error_message=f"Error unmarking transaction {transaction_id}",
        )
