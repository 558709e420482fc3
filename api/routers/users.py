"""Club setting endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from typing import List

from api.dependencies import get_current_user_id, get_db
from api.schemas import ClubDistanceRequest, ClubRequest
from database.db_manager import DatabaseManager
from database.exceptions import STORAGE_ERRORS
from models import Club, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_profile(db: DatabaseManager, user_id: str) -> UserProfile:
    profile = await db.users.get_profile(user_id)
    return profile or UserProfile(owner_id=user_id)


async def _save(db: DatabaseManager, profile: UserProfile) -> UserProfile:
    try:
        return await db.users.save_profile(profile)
    except STORAGE_ERRORS:
        logger.error("Saving clubs failed for %s", profile.owner_id, exc_info=True)
        raise HTTPException(500, "Failed to save the club setting")


@router.get("/me/clubs", response_model=List[Club])
async def get_clubs(
    selectable: bool = False,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    """The bag; selectable=true leaves out putters (for shot entry)."""
    try:
        profile = await _get_profile(db, user_id)
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning("Club setting unavailable for %s", user_id, exc_info=True)
        return []
    return profile.selectable_clubs if selectable else profile.clubs


@router.put("/me/clubs", response_model=List[Club])
async def replace_clubs(
    clubs: List[Club],
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    """Save the whole bag. Driver and putter are always kept."""
    profile = UserProfile(owner_id=user_id, clubs=clubs)
    return (await _save(db, profile)).clubs


@router.post("/me/clubs", response_model=Club, status_code=201)
async def add_club(
    req: ClubRequest,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    profile = await _get_profile(db, user_id)
    try:
        club = profile.add_club(req.name, req.distance)
    except ValueError as e:
        raise HTTPException(422, str(e))
    await _save(db, profile)
    return club


@router.put("/me/clubs/{club_id}", response_model=Club)
async def update_club_distance(
    club_id: str,
    req: ClubDistanceRequest,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    profile = await _get_profile(db, user_id)
    if profile.get_club(club_id) is None:
        raise HTTPException(404, "Club not found")
    error = profile.set_distance(club_id, req.distance)
    if error:
        raise HTTPException(422, error)
    saved = await _save(db, profile)
    return saved.get_club(club_id)


@router.delete("/me/clubs/{club_id}", status_code=204)
async def remove_club(
    club_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    profile = await _get_profile(db, user_id)
    try:
        profile.remove_club(club_id)
    except KeyError:
        raise HTTPException(404, "Club not found")
    except ValueError as e:
        raise HTTPException(400, str(e))
    await _save(db, profile)
