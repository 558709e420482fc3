"""Append-only history of finalized rounds."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import FinalizedRound
from database.converters import dump_document, round_from_row, round_to_document
from database.exceptions import IntegrityError


class RoundRepositoryDB:
    """Async access to golf.rounds."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, owner_id: str, round_id: str) -> Optional[FinalizedRound]:
        """Get one of the owner's rounds."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf.rounds WHERE id = $1 AND owner_id = $2",
                UUID(round_id), owner_id,
            )
            return round_from_row(row) if row else None

    async def get_rounds_for_user(
        self, owner_id: str, *, limit: int = 10, offset: int = 0
    ) -> List[FinalizedRound]:
        """Get an owner's rounds, newest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM golf.rounds
                   WHERE owner_id = $1
                   ORDER BY created_at DESC
                   LIMIT $2 OFFSET $3""",
                owner_id, limit, offset,
            )
            return [round_from_row(r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def create_round(self, round_: FinalizedRound) -> FinalizedRound:
        """Append a finalized round. Returns it with id and created_at set."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO golf.rounds (owner_id, data, created_at)
                       VALUES ($1, $2::jsonb, COALESCE($3::timestamptz, NOW()))
                       RETURNING *""",
                    round_.owner_id, dump_document(round_to_document(round_)), round_.created_at,
                )
                return round_from_row(row)
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e

