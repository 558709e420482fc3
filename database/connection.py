import asyncpg
import logging
from pathlib import Path
from typing import Optional

from config import Settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class DatabasePool:
    """Owns the asyncpg pool shared by every repository."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(self, settings: Settings) -> None:
        """Open the pool once at startup.

        Without DATABASE_URL, asyncpg falls back to the PG* environment
        variables and its own defaults.
        """
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_min_pool_size,
            max_size=settings.db_max_pool_size,
        )
        logger.info(
            "Database pool ready (%d-%d connections)",
            settings.db_min_pool_size, settings.db_max_pool_size,
        )
        if settings.init_schema:
            await self.initialize_schema()

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database pool not initialized; the app lifespan opens it.")
        return self._pool

    async def initialize_schema(self) -> None:
        """Create the golf schema and its tables if they do not exist."""
        async with self.pool.acquire() as conn:
            await conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
        logger.info("Schema %s applied", SCHEMA_PATH.name)

    async def health_check(self) -> bool:
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchval("SELECT 1") == 1
        except (asyncpg.PostgresError, OSError, RuntimeError):
            logger.warning("Database health check failed", exc_info=True)
            return False


db = DatabasePool()
