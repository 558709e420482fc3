"""Finalized round history."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from typing import List

from api.dependencies import get_current_user_id, get_db
from api.schemas import RoundSummaryResponse
from database.db_manager import DatabaseManager
from database.exceptions import STORAGE_ERRORS
from models import FinalizedRound

logger = logging.getLogger(__name__)

router = APIRouter()


def summarize_round(r: FinalizedRound) -> RoundSummaryResponse:
    """Project a full round into a lightweight summary."""
    return RoundSummaryResponse(
        id=r.id,
        course_name=r.course_name,
        date=r.date,
        total_score=r.total_score,
        total_par=r.total_par,
        to_par=r.total_to_par(),
        total_putts=r.total_putts,
        gir_count=r.gir_count,
        fairway_hit_count=r.fairway_hit_count,
    )


@router.get("", response_model=List[RoundSummaryResponse])
async def get_rounds(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    try:
        rounds = await db.rounds.get_rounds_for_user(user_id, limit=limit, offset=offset)
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning("Round history unavailable for %s", user_id, exc_info=True)
        return []
    return [summarize_round(r) for r in rounds]


@router.get("/{round_id}", response_model=FinalizedRound)
async def get_round(
    round_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    try:
        round_ = await db.rounds.get_round(user_id, round_id)
    except ValueError:
        raise HTTPException(404, "Round not found")
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_
