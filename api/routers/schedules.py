"""Calendar of upcoming rounds."""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from api.dependencies import get_current_user_id, get_db
from api.schemas import ScheduleRequest
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError, STORAGE_ERRORS
from models import Schedule

logger = logging.getLogger(__name__)

router = APIRouter()


def _month_bounds(month: str):
    """'YYYY-MM' -> [first day, first day of next month)."""
    try:
        year, mon = (int(part) for part in month.split("-"))
        start = date(year, mon, 1)
    except ValueError:
        raise HTTPException(422, f"Invalid month {month!r}, expected YYYY-MM")
    end = date(year + 1, 1, 1) if mon == 12 else date(year, mon + 1, 1)
    return start, end


def _to_schedule(req: ScheduleRequest) -> Schedule:
    try:
        return Schedule(course_name=req.course_name, date=req.date, time=req.time, memo=req.memo)
    except ValidationError:
        raise HTTPException(422, "Course name and date are required")


@router.get("", response_model=List[Schedule])
async def list_schedules(
    month: Optional[str] = Query(None, description="YYYY-MM"),
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    start, end = _month_bounds(month) if month else (None, None)
    try:
        return await db.schedules.get_schedules(user_id, start=start, end=end)
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning("Schedules unavailable for %s", user_id, exc_info=True)
        return []


@router.get("/{schedule_id}", response_model=Schedule)
async def get_schedule(
    schedule_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    try:
        schedule = await db.schedules.get_schedule(user_id, schedule_id)
    except ValueError:
        schedule = None
    if not schedule:
        raise HTTPException(404, "Schedule not found")
    return schedule


@router.post("", response_model=Schedule, status_code=201)
async def create_schedule(
    req: ScheduleRequest,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    schedule = _to_schedule(req)
    try:
        return await db.schedules.create_schedule(user_id, schedule)
    except STORAGE_ERRORS:
        logger.error("Saving schedule failed for %s", user_id, exc_info=True)
        raise HTTPException(500, "Failed to save the schedule")


@router.put("/{schedule_id}", response_model=Schedule)
async def update_schedule(
    schedule_id: str,
    req: ScheduleRequest,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    schedule = _to_schedule(req)
    try:
        return await db.schedules.update_schedule(user_id, schedule_id, schedule)
    except (NotFoundError, ValueError):
        raise HTTPException(404, "Schedule not found")
    except STORAGE_ERRORS:
        logger.error("Updating schedule failed for %s", user_id, exc_info=True)
        raise HTTPException(500, "Failed to save the schedule")


@router.delete("/{schedule_id}", status_code=204)
async def delete_schedule(
    schedule_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    try:
        deleted = await db.schedules.delete_schedule(user_id, schedule_id)
    except ValueError:
        deleted = False
    except STORAGE_ERRORS:
        logger.error("Deleting schedule failed for %s", user_id, exc_info=True)
        raise HTTPException(500, "Failed to delete the schedule")
    if not deleted:
        raise HTTPException(404, "Schedule not found")
