from datetime import date as date_type, datetime
from pydantic import Field, field_validator
from typing import Optional

from .base import BaseGolfModel


class Schedule(BaseGolfModel):
    """An upcoming tee time on the owner's calendar."""
    id: Optional[str] = None
    owner_id: Optional[str] = Field(None, validation_alias="userId", serialization_alias="userId")
    course_name: str
    date: date_type
    time: str = ""  # free-form "HH:MM"
    memo: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("course_name")
    @classmethod
    def validate_course_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Course name is required")
        return v

    @field_validator("memo")
    @classmethod
    def strip_memo(cls, v: str) -> str:
        return v.strip()
