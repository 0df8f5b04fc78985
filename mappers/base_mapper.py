"""
mappers/base_mapper.py
----------------------
Generic data mapper with an identity map.

Each concrete mapper owns one table. It declares its SQL as class constants
and implements the row <-> entity conversion; this base class provides the
identity-map cache and the CRUD contract on top of them.

Every mapper instance keeps its own cache keyed by id: as long as an entity
stays cached, every lookup of that id through the same mapper returns the
same object. Caches are plain dicts and are not thread-safe.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Generic, Iterator, Optional, TypeVar

import psycopg2

from db.unit_of_work import UnitOfWork
from mappers.exceptions import DatabaseOperationError, EntityNotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class AbstractMapper(ABC, Generic[T]):
    """
    Base class of every entity mapper.

    Subclasses set:
        ENTITY_NAME: Name used in logs and errors ('Restaurant').
        TABLE: Table name.
        SEQUENCE: Sequence advanced by the table's insert trigger.
        FIND_BY_ID, FIND_ALL, INSERT, UPDATE, DELETE: SQL statements. The
            UPDATE statement takes the INSERT parameters followed by the id.
    """

    ENTITY_NAME: str = ""
    TABLE: str = ""
    SEQUENCE: str = ""

    FIND_BY_ID: str = ""
    FIND_ALL: str = ""
    INSERT: str = ""
    UPDATE: str = ""
    DELETE: str = ""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self._identity_map: dict[int, T] = {}

    # ── HOOKS ─────────────────────────────────────────────

    @abstractmethod
    def _row_to_entity(self, row: tuple) -> T:
        """Build a new entity from a row whose first column is the id."""

    @abstractmethod
    def _to_params(self, entity: T) -> tuple:
        """Column values for INSERT (and UPDATE, before the id)."""

    def _can_persist(self, entity: T) -> bool:
        """Whether the entity's references allow writing it."""
        return True

    # ── ERROR HANDLING ────────────────────────────────────

    @contextmanager
    def _operation(self, operation: str) -> Iterator[None]:
        """
        Translate driver errors raised inside the block.

        Every statement a mapper issues runs inside this context, so a
        psycopg2 failure always surfaces as a DatabaseOperationError naming
        the operation. Rollback is left to the unit-of-work owner.
        """
        try:
            yield
        except psycopg2.Error as e:
            logger.error(f"{operation} failed: {e}")
            raise DatabaseOperationError(operation, e) from e

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, entity_id: Optional[int]) -> Optional[T]:
        """
        Fetch an entity by id, from the cache when possible.

        Returns:
            The cached or freshly loaded entity, or None if no row exists.
        """
        if entity_id is None:
            return None
        if entity_id in self._identity_map:
            logger.debug(f"{self.ENTITY_NAME} #{entity_id} found in cache")
            return self._identity_map[entity_id]

        entity = self._find_by_id_from_db(entity_id)
        if entity is not None:
            self._add_to_cache(entity)
        return entity

    def get_by_id(self, entity_id: Optional[int]) -> T:
        """
        Like find_by_id, but raise instead of returning None.

        Raises:
            EntityNotFoundError: If no row exists for `entity_id`.
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            logger.warning(f"{self.ENTITY_NAME} #{entity_id} not found")
            raise EntityNotFoundError(self.ENTITY_NAME, entity_id)
        return entity

    def _find_by_id_from_db(self, entity_id: int) -> Optional[T]:
        with self._operation(f"FIND {self.ENTITY_NAME} by ID"):
            row = self.uow.fetch_one(self.FIND_BY_ID, (entity_id,))
        if row is None:
            logger.debug(f"{self.ENTITY_NAME} #{entity_id} does not exist")
            return None
        return self._row_to_entity(row)

    def find_all(self) -> list[T]:
        """Load every row of the table, refreshing the cache."""
        entities = self._find_many(f"FIND ALL {self.ENTITY_NAME}", self.FIND_ALL)
        logger.info(f"Loaded {len(entities)} {self.ENTITY_NAME} record(s)")
        return entities

    def _find_many(self, operation: str, sql: str, params: Optional[tuple] = None) -> list[T]:
        """Run a multi-row query and pass every row through the identity map."""
        with self._operation(operation):
            rows = self.uow.fetch_all(sql, params)
        return [self._load(row) for row in rows]

    def _load(self, row: tuple) -> T:
        """Return the cached instance for the row's id, or build and cache one."""
        entity_id = row[0]
        cached = self._identity_map.get(entity_id)
        if cached is not None:
            return cached
        entity = self._row_to_entity(row)
        self._add_to_cache(entity)
        return entity

    # ── CREATE ────────────────────────────────────────────

    def create(self, entity: Optional[T]) -> Optional[T]:
        """
        Insert a new row and assign the generated id to the entity.

        Returns:
            The same entity with its `id` populated, or None on failure.
        """
        if entity is None:
            logger.warning(f"Attempted to create a null {self.ENTITY_NAME}")
            return None
        if not self._can_persist(entity):
            logger.warning(f"Refused to create {self.ENTITY_NAME} with unpersisted references")
            return None

        with self._operation(f"CREATE {self.ENTITY_NAME}"):
            inserted = self.uow.execute(self.INSERT, self._to_params(entity))
            if inserted == 0:
                logger.warning(f"Insert of {self.ENTITY_NAME} affected no rows")
                return None
            entity.id = self._get_sequence_value()

        self._add_to_cache(entity)
        logger.info(f"Created {self.ENTITY_NAME} #{entity.id}")
        return entity

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: Optional[T]) -> bool:
        """
        Update the row matching the entity's id.

        Returns:
            True if a row was updated, False otherwise.
        """
        if entity is None or entity.id is None:
            logger.warning(f"Attempted to update a null or unsaved {self.ENTITY_NAME}")
            return False
        if not self._can_persist(entity):
            logger.warning(f"Refused to update {self.ENTITY_NAME} #{entity.id} with unpersisted references")
            return False

        with self._operation(f"UPDATE {self.ENTITY_NAME}"):
            updated = self.uow.execute(self.UPDATE, (*self._to_params(entity), entity.id))
        if updated == 0:
            logger.warning(f"{self.ENTITY_NAME} #{entity.id} not updated: no such row")
            return False

        self._add_to_cache(entity)
        logger.info(f"Updated {self.ENTITY_NAME} #{entity.id}")
        return True

    # ── DELETE ────────────────────────────────────────────

    def delete(self, entity: Optional[T]) -> bool:
        """Delete the entity's row. False for a null or unsaved entity."""
        if entity is None or entity.id is None:
            logger.warning(f"Attempted to delete a null or unsaved {self.ENTITY_NAME}")
            return False
        return self.delete_by_id(entity.id)

    def delete_by_id(self, entity_id: int) -> bool:
        """
        Delete a row by id and evict it from the cache.

        Returns:
            True if a row was deleted, False otherwise.
        """
        with self._operation(f"DELETE {self.ENTITY_NAME}"):
            deleted = self.uow.execute(self.DELETE, (entity_id,))
        if deleted == 0:
            logger.warning(f"{self.ENTITY_NAME} #{entity_id} not deleted: no such row")
            return False

        self._remove_from_cache(entity_id)
        logger.info(f"Deleted {self.ENTITY_NAME} #{entity_id}")
        return True

    # ── HELPERS ───────────────────────────────────────────

    def exists(self, entity_id: int) -> bool:
        """Whether a row exists for `entity_id`. Always hits the database."""
        with self._operation(f"EXISTS {self.ENTITY_NAME}"):
            row = self.uow.fetch_one(f"SELECT 1 FROM {self.TABLE} WHERE id = %s", (entity_id,))
        return row is not None

    def count(self) -> int:
        """Number of rows in the table. Always hits the database."""
        with self._operation(f"COUNT {self.ENTITY_NAME}"):
            row = self.uow.fetch_one(f"SELECT COUNT(*) FROM {self.TABLE}")
        return row[0] if row else 0

    def _get_sequence_value(self) -> int:
        """
        Current value of the table's sequence.

        Only meaningful right after an insert on the same connection: the
        insert trigger advanced the sequence in this session.
        """
        row = self.uow.fetch_one(f"SELECT currval('{self.SEQUENCE}')")
        return row[0]

    # ── CACHE ─────────────────────────────────────────────

    def is_cached(self, entity_id: int) -> bool:
        return entity_id in self._identity_map

    def is_cache_empty(self) -> bool:
        return not self._identity_map

    def reset_cache(self) -> None:
        self._identity_map.clear()
        logger.debug(f"{self.ENTITY_NAME} cache cleared")

    def _add_to_cache(self, entity: T) -> None:
        if entity is not None and entity.id is not None:
            self._identity_map[entity.id] = entity

    def _remove_from_cache(self, entity_id: Optional[int]) -> None:
        if entity_id is not None:
            self._identity_map.pop(entity_id, None)
