"""Application settings read from the environment and an optional .env file."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: Optional[str] = Field(default=None, description="asyncpg DSN")
    db_min_pool_size: int = Field(default=2, ge=1)
    db_max_pool_size: int = Field(default=10, ge=1)
    init_schema: bool = Field(
        default=False, description="Create the golf schema at startup"
    )

    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    history_limit: int = Field(
        default=10, ge=1, description="Recent rounds used for advice and club suggestions"
    )
    upcoming_schedule_limit: int = Field(default=5, ge=1)
    default_course_name: str = "日ノ隈カントリークラブ"

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""
    get_settings.cache_clear()


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
