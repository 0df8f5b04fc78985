"""
db/unit_of_work.py
------------------
Transaction boundary shared by every mapper.

Mappers issue statements through a UnitOfWork but never commit or roll back;
the caller (the service layer) decides when the unit of work ends.
"""

from typing import Callable, Optional, TypeVar

import psycopg2

from db.connection import ConnectionProvider
from mappers.exceptions import DatabaseOperationError
from utils.logger import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


class UnitOfWork:
    """Runs SQL on the provider's connection and owns commit / rollback."""

    def __init__(self, provider: ConnectionProvider):
        self.provider = provider
        self._rollback_listeners: list[Callable[[], None]] = []

    @property
    def connection(self):
        return self.provider.get_connection()

    # ── STATEMENTS ────────────────────────────────────────

    def execute(self, sql: str, params: Optional[tuple] = None) -> int:
        """
        Execute an INSERT / UPDATE / DELETE statement.

        Returns:
            The number of rows affected.
        """
        with self.connection.cursor() as cur:
            cur.execute(sql, params)
            return cur.rowcount

    def fetch_one(self, sql: str, params: Optional[tuple] = None) -> Optional[tuple]:
        """Execute a query and return its first row, or None."""
        with self.connection.cursor() as cur:
            cur.execute(sql, params)
            return cur.fetchone()

    def fetch_all(self, sql: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return every row."""
        with self.connection.cursor() as cur:
            cur.execute(sql, params)
            return cur.fetchall()

    # ── TRANSACTION ───────────────────────────────────────

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        """Roll back, then notify listeners (mapper caches may now be stale)."""
        self.connection.rollback()
        for listener in self._rollback_listeners:
            listener()

    def on_rollback(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every rollback."""
        self._rollback_listeners.append(listener)

    def run(self, work: Callable[[], R], description: str) -> R:
        """
        Run `work` as one transaction.

        Commits when `work` returns a truthy result, rolls back when it
        returns a falsy one or raises. Exceptions are re-raised after the
        rollback; a driver error from the commit itself is raised as
        DatabaseOperationError.

        Args:
            work: Callable performing one or more mapper operations.
            description: Human-readable label used in log messages.

        Returns:
            Whatever `work` returned.
        """
        try:
            result = work()
        except Exception as e:
            self.rollback()
            logger.error(f"{description} failed, transaction rolled back: {e}")
            raise
        if result:
            try:
                self.commit()
            except psycopg2.Error as e:
                self.rollback()
                logger.error(f"{description} failed to commit: {e}")
                raise DatabaseOperationError(f"COMMIT {description}", e) from e
            logger.debug(f"{description} committed.")
        else:
            self.rollback()
            logger.warning(f"{description} did not succeed, transaction rolled back.")
        return result
