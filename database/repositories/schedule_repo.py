"""CRUD operations for calendar schedules."""

import asyncpg
from datetime import date
from typing import List, Optional
from uuid import UUID

from models import Schedule
from database.converters import dump_document, schedule_from_row, schedule_to_document
from database.exceptions import NotFoundError


class ScheduleRepositoryDB:
    """Async CRUD for golf.schedules."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_schedules(
        self,
        owner_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Schedule]:
        """List the owner's schedules by date ascending, optionally within [start, end)."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM golf.schedules
                   WHERE owner_id = $1
                     AND ($2::date IS NULL OR schedule_date >= $2)
                     AND ($3::date IS NULL OR schedule_date < $3)
                   ORDER BY schedule_date ASC, created_at ASC
                   LIMIT $4""",
                owner_id, start, end, limit,
            )
            return [schedule_from_row(r) for r in rows]

    async def get_upcoming(self, owner_id: str, today: date, *, limit: int = 5) -> List[Schedule]:
        """Schedules on or after today."""
        return await self.get_schedules(owner_id, start=today, limit=limit)

    async def get_schedule(self, owner_id: str, schedule_id: str) -> Optional[Schedule]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf.schedules WHERE id = $1 AND owner_id = $2",
                UUID(schedule_id), owner_id,
            )
            return schedule_from_row(row) if row else None

    # ================================================================
    # Create / Update
    # ================================================================

    async def create_schedule(self, owner_id: str, schedule: Schedule) -> Schedule:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """INSERT INTO golf.schedules (owner_id, schedule_date, data)
                   VALUES ($1, $2, $3::jsonb)
                   RETURNING *""",
                owner_id, schedule.date, dump_document(schedule_to_document(schedule)),
            )
            return schedule_from_row(row)

    async def update_schedule(self, owner_id: str, schedule_id: str, schedule: Schedule) -> Schedule:
        """Replace a schedule's fields. Raises NotFoundError if missing."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """UPDATE golf.schedules
                   SET schedule_date = $3, data = $4::jsonb, updated_at = NOW()
                   WHERE id = $1 AND owner_id = $2
                   RETURNING *""",
                UUID(schedule_id), owner_id, schedule.date,
                dump_document(schedule_to_document(schedule)),
            )
            if not row:
                raise NotFoundError(f"Schedule {schedule_id} not found")
            return schedule_from_row(row)

    # ================================================================
    # Delete
    # ================================================================

    async def delete_schedule(self, owner_id: str, schedule_id: str) -> bool:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM golf.schedules WHERE id = $1 AND owner_id = $2",
                UUID(schedule_id), owner_id,
            )
            return result == "DELETE 1"
