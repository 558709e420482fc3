from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from config import Settings, get_settings
from database.db_manager import DatabaseManager
from scoring.session import RoundSession


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Owner id asserted by the identity proxy in front of the API."""
    if not x_user_id:
        raise HTTPException(401, "Not signed in")
    return x_user_id


async def get_round_session(
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RoundSession:
    """A RoundSession with history and any draft in progress loaded."""
    session = RoundSession(user_id, db, history_limit=settings.history_limit)
    await session.open()
    return session
