"""Stats/dashboard API endpoints.

Reads here degrade to empty data instead of failing the page.
"""

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from analytics.stats import club_report, dashboard_summary, score_trend
from api.dependencies import get_current_user_id, get_db
from api.routers.rounds import summarize_round
from api.schemas import ClubStatResponse, DashboardResponse
from config import Settings, get_settings
from database.db_manager import DatabaseManager
from database.exceptions import STORAGE_ERRORS
from models import UserProfile

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load_rounds(db: DatabaseManager, user_id: str, limit: int):
    try:
        return await db.rounds.get_rounds_for_user(user_id, limit=limit)
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning("Round history unavailable for %s", user_id, exc_info=True)
        return []


async def _load_profile(db: DatabaseManager, user_id: str) -> UserProfile:
    try:
        profile = await db.users.get_profile(user_id)
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning("Club setting unavailable for %s", user_id, exc_info=True)
        return UserProfile(owner_id=user_id, clubs=[])
    return profile or UserProfile(owner_id=user_id)


async def _load_upcoming(db: DatabaseManager, user_id: str, limit: int):
    try:
        return await db.schedules.get_upcoming(user_id, date.today(), limit=limit)
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning("Schedules unavailable for %s", user_id, exc_info=True)
        return []


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    rounds = await _load_rounds(db, user_id, settings.history_limit)
    profile = await _load_profile(db, user_id)
    upcoming = await _load_upcoming(db, user_id, settings.upcoming_schedule_limit)

    return DashboardResponse(
        **dashboard_summary(rounds),
        recent_rounds=[summarize_round(r) for r in rounds],
        club_stats=[ClubStatResponse(**row) for row in club_report(rounds, profile.clubs)],
        upcoming_schedules=upcoming,
    )


@router.get("/clubs", response_model=List[ClubStatResponse])
async def get_club_stats(
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    """Club usage across all of the owner's rounds."""
    rounds = await _load_rounds(db, user_id, 500)
    profile = await _load_profile(db, user_id)
    return [ClubStatResponse(**row) for row in club_report(rounds, profile.clubs)]


@router.get("/trend")
async def get_score_trend(
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    rounds = await _load_rounds(db, user_id, 500)
    return score_trend(rounds)
