"""Persistence for the single in-progress draft of each owner."""

import asyncpg
from typing import Optional

from models import RoundDraft
from database.converters import draft_from_row, draft_to_document, dump_document


class DraftRepositoryDB:
    """Async load/save/clear of golf.draft_rounds, keyed by owner id."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def load_draft(self, owner_id: str) -> Optional[RoundDraft]:
        """Get the owner's draft, with legacy hole shapes migrated."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf.draft_rounds WHERE owner_id = $1", owner_id
            )
            return draft_from_row(row) if row else None

    async def save_draft(self, owner_id: str, draft: RoundDraft) -> None:
        """Create or wholesale replace the owner's draft (last write wins)."""
        if draft.owner_id != owner_id:
            raise ValueError(f"Draft belongs to {draft.owner_id}, not {owner_id}")
        async with self._pool.acquire() as conn:
            await conn.execute(
                """INSERT INTO golf.draft_rounds (owner_id, data, updated_at)
                   VALUES ($1, $2::jsonb, NOW())
                   ON CONFLICT (owner_id)
                   DO UPDATE SET data = EXCLUDED.data, updated_at = NOW()""",
                owner_id, dump_document(draft_to_document(draft)),
            )

    async def clear_draft(self, owner_id: str) -> bool:
        """Delete the owner's draft. Returns True if one existed."""
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM golf.draft_rounds WHERE owner_id = $1", owner_id
            )
            return result == "DELETE 1"
