from datetime import date as date_type
from pydantic import Field, field_validator
from typing import Literal

from .base import BaseGolfModel
from .course import TeeColor

StartSide = Literal["out", "in"]


class RoundSetup(BaseGolfModel):
    """Everything chosen before the first hole is entered."""
    date: date_type = Field(default_factory=date_type.today)
    course_name: str = Field(..., min_length=1)
    target_score: int = Field(0, ge=0)
    focus_point: str = ""
    weather: str = ""
    tee_ground: TeeColor = "white"
    start_from: StartSide = "out"

    @field_validator("course_name")
    @classmethod
    def strip_course_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Course name is required")
        return v

    @property
    def hole_numbers(self) -> range:
        """Hole numbers of the nine being entered: OUT is 1-9, IN is 10-18."""
        start = 1 if self.start_from == "out" else 10
        return range(start, start + 9)
