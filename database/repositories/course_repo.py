"""User-entered courses and the lookup chain that prefers built-in data."""

import asyncpg
from typing import List, Optional

from models import Course
from database.converters import course_from_row, dump_document
from scoring import course_data


class CourseRepositoryDB:
    """Async access to golf.courses, scoped by owner."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_course(self, owner_id: str, name: str) -> Optional[Course]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf.courses WHERE owner_id = $1 AND name = $2",
                owner_id, name,
            )
            return course_from_row(row) if row else None

    async def list_courses(self, owner_id: str) -> List[Course]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM golf.courses WHERE owner_id = $1 ORDER BY name",
                owner_id,
            )
            return [course_from_row(r) for r in rows]

    async def save_course(self, owner_id: str, course: Course) -> Course:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """INSERT INTO golf.courses (owner_id, name, data)
                   VALUES ($1, $2, $3::jsonb)
                   ON CONFLICT (owner_id, name) DO UPDATE SET data = EXCLUDED.data
                   RETURNING *""",
                owner_id, course.name, dump_document(course.to_document()),
            )
            return course_from_row(row)

    async def find_course(self, owner_id: str, name: str) -> Optional[Course]:
        """Built-in reference data first, then the owner's stored course."""
        return course_data.lookup(name) or await self.get_course(owner_id, name)
