"""
mappers/exceptions.py
---------------------
Errors raised by the persistence layer.

Plain operation failures (no row affected, id unknown) are reported by
returning None / False. Exceptions are reserved for driver-level failures
and for callers that ask for an explicit not-found error.
"""

from typing import Optional


class PersistenceError(Exception):
    """Base class for every persistence-layer error."""


class DatabaseOperationError(PersistenceError):
    """
    A driver-level failure during one mapper operation.

    Attributes:
        operation: Operation and entity, e.g. 'CREATE Restaurant'.
        cause: The underlying psycopg2 error.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        super().__init__(f"Database error during {operation}: {cause}")
        self.operation = operation
        self.cause = cause


class EntityNotFoundError(PersistenceError):
    """
    No row exists for the requested identifier.

    Attributes:
        entity_type: Entity name, e.g. 'Restaurant'.
        entity_id: The identifier that was looked up.
    """

    def __init__(self, entity_type: str, entity_id: Optional[int]):
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id
