import asyncpg


class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Document not found for this owner."""


class IntegrityError(DatabaseError):
    """Check constraint violation."""


# Failures of the storage layer itself; callers that can degrade catch these.
STORAGE_ERRORS = (DatabaseError, asyncpg.PostgresError, asyncpg.InterfaceError, OSError)
