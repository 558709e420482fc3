from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import (
    CourseRepositoryDB,
    DraftRepositoryDB,
    RoundRepositoryDB,
    ScheduleRepositoryDB,
    UserRepositoryDB,
)
from database.exceptions import DatabaseError, NotFoundError, IntegrityError, STORAGE_ERRORS

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "DraftRepositoryDB",
    "RoundRepositoryDB",
    "ScheduleRepositoryDB",
    "UserRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "STORAGE_ERRORS",
    "IntegrityError",
]
