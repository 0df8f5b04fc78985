"""
services/base_service.py
------------------------
Unit-of-work handling shared by the services.

Writes run inside UnitOfWork.run (commit on success, rollback on failure).
Reads roll back when they fail, since PostgreSQL keeps a transaction
aborted after any failed statement. Either way a PersistenceError is logged
and turned into the caller's failure value; it never reaches the console.
"""

from typing import Callable, TypeVar

from db.unit_of_work import UnitOfWork
from mappers.exceptions import PersistenceError
from mappers.registry import MapperRegistry
from utils.logger import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


class BaseService:
    """Holds the mappers and their unit of work."""

    def __init__(self, mappers: MapperRegistry):
        self.mappers = mappers
        self.uow: UnitOfWork = mappers.uow

    def _run(self, work: Callable[[], R], description: str):
        """Run a write as one unit of work. None when it raised."""
        try:
            return self.uow.run(work, description)
        except PersistenceError as e:
            logger.error(f"{description} failed: {e}")
            return None

    def _read(self, work: Callable[[], R], description: str, default: R) -> R:
        """
        Run a read, rolling back and returning `default` if it fails.

        Args:
            work: Callable performing the lookups.
            description: Human-readable label used in log messages.
            default: Value returned on failure ([] for lists, None for one entity).
        """
        try:
            return work()
        except PersistenceError as e:
            logger.error(f"{description} failed: {e}")
            self.uow.rollback()
            return default
