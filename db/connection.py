"""
db/connection.py
----------------
Provides the single PostgreSQL connection used for the whole process.
The connection is created lazily, runs with autocommit disabled and is
closed once at shutdown.
"""

from typing import Optional

import psycopg2

from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionProvider:
    """Owns one psycopg2 connection, re-opening it when it has been closed."""

    def __init__(self, dsn: str = DATABASE_URL):
        self.dsn = dsn
        self._connection: Optional["psycopg2.extensions.connection"] = None

    def get_connection(self):
        """
        Get the current connection, creating one if absent or closed.

        Returns:
            A psycopg2 connection with autocommit disabled.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._connection is None or self._connection.closed:
            try:
                connection = psycopg2.connect(self.dsn)
            except psycopg2.OperationalError as e:
                logger.error(f"Failed to connect to the database: {e}")
                raise
            connection.autocommit = False
            self._connection = connection
            logger.info("Database connection opened.")
        return self._connection

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._connection is not None and not self._connection.closed:
            self._connection.close()
            logger.info("Database connection closed.")
        self._connection = None
