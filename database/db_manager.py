from __future__ import annotations

import asyncpg

from database.repositories import (
    CourseRepositoryDB,
    DraftRepositoryDB,
    RoundRepositoryDB,
    ScheduleRepositoryDB,
    UserRepositoryDB,
)


class DatabaseManager:
    """
    One entry point to every repository sharing a pool.

    Notes:
    - Repositories use raw SQL over JSONB document columns (no ORM).
    - Every method is scoped by the owner id supplied by the caller.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool
        self.courses = CourseRepositoryDB(pool)
        self.drafts = DraftRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)
        self.schedules = ScheduleRepositoryDB(pool)
        self.users = UserRepositoryDB(pool)
