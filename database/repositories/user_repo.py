"""Profile documents holding each owner's club setting."""

import asyncpg
from typing import Optional

from models import UserProfile
from database.converters import dump_document, profile_from_row, profile_to_document


class UserRepositoryDB:
    """Async access to golf.user_profiles."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_profile(self, owner_id: str) -> Optional[UserProfile]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf.user_profiles WHERE owner_id = $1", owner_id
            )
            return profile_from_row(row) if row else None

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        """Create or replace the owner's profile."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """INSERT INTO golf.user_profiles (owner_id, data, updated_at)
                   VALUES ($1, $2::jsonb, NOW())
                   ON CONFLICT (owner_id)
                   DO UPDATE SET data = EXCLUDED.data, updated_at = NOW()
                   RETURNING *""",
                profile.owner_id, dump_document(profile_to_document(profile)),
            )
            return profile_from_row(row)
