"""Course reference endpoints: built-in courses plus the owner's own."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from api.dependencies import get_current_user_id, get_db
from database.db_manager import DatabaseManager
from models import Course
from scoring import course_data

router = APIRouter()


@router.get("", response_model=List[Course])
async def list_courses(
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    own = [c for c in await db.courses.list_courses(user_id) if c.name not in course_data.COURSES]
    return [*course_data.COURSES.values(), *own]


@router.get("/{name}", response_model=Course)
async def get_course(
    name: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    course = await db.courses.find_course(user_id, name)
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.put("/{name}", response_model=Course)
async def save_course(
    name: str,
    course: Course,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseManager = Depends(get_db),
):
    if course.name != name:
        raise HTTPException(422, "Course name does not match the URL")
    if name in course_data.COURSES:
        raise HTTPException(409, "Built-in courses cannot be replaced")
    return await db.courses.save_course(user_id, course)
