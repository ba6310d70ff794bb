# stockroom/inventory_domain/infrastructure/persistence/mysql_base_repository.py
"""Shared MySQL connection handling for the inventory repositories."""

import logging

import mysql.connector
from mysql.connector import Error

from stockroom.common.config.settings import settings
from stockroom.common.exceptions.custom_exceptions import DatabaseError

logger = logging.getLogger(__name__)


class MySQLBaseRepository:
    """Owns one lazily opened connection and runs DDL/DML with commit or rollback."""

    def __init__(self) -> None:
        """Initializes the repository."""
        self._connection = None

    def _get_connection(self):
        """Establishes or returns an active MySQL database connection."""
        if not self._connection or not self._connection.is_connected():
            try:
                self._connection = mysql.connector.connect(
                    host=settings.DB_HOST,
                    database=settings.DB_DATABASE,
                    user=settings.DB_USER,
                    password=settings.DB_PASSWORD,
                    autocommit=False,  # Batches must commit or roll back as a whole
                    charset="utf8mb4",
                    use_unicode=True,
                )
            except Error as e:
                raise DatabaseError(f"Failed to connect to MySQL: {e}", original_exception=e)
        return self._connection

    def _execute_write(self, query: str, params: tuple | None = None, error_message: str = "Write failed") -> int:
        """Executes a single statement in its own transaction. Returns the affected row count."""
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            conn.commit()
            return cursor.rowcount
        except Error as e:
            conn.rollback()
            raise DatabaseError(f"{error_message}: {e}", original_exception=e)
        finally:
            cursor.close()

    def _execute_batch(self, query: str, params_list: list[tuple], error_message: str = "Batch write failed") -> None:
        """Executes the statement for every parameter tuple, all in one transaction."""
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            cursor.executemany(query, params_list)
            conn.commit()
        except Error as e:
            conn.rollback()
            raise DatabaseError(f"{error_message}: {e}", original_exception=e)
        finally:
            cursor.close()

    def _fetch_all(self, query: str, params: tuple | None = None, error_message: str = "Read failed") -> list[dict]:
        conn = self._get_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(query, params)
            rows = cursor.fetchall()
            # End the read transaction so the next poll sees fresh data
            conn.commit()
            return rows
        except Error as e:
            raise DatabaseError(f"{error_message}: {e}", original_exception=e)
        finally:
            cursor.close()

    def __del__(self) -> None:
        """Closes the database connection when the object is destroyed."""
        if self._connection and self._connection.is_connected():
            self._connection.close()
