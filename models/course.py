from pydantic import Field
from typing import List, Literal, Optional

from .base import BaseGolfModel

TeeColor = Literal["blue", "white", "red"]


class CourseHole(BaseGolfModel):
    """A hole on a reference course with its tee yardages."""
    number: int = Field(..., ge=1, le=18, alias="hole")
    par: int = Field(..., ge=3, le=5)
    back_tee: int = Field(..., ge=0, alias="backTee")
    regular_tee: int = Field(..., ge=0, alias="regularTee")

    def yardage_for(self, tee: TeeColor) -> int:
        """Blue and red tees play the back-tee yardage, white the regular tee."""
        if tee == "white":
            return self.regular_tee
        return self.back_tee


class Course(BaseGolfModel):
    """Golf course reference data: a name and its ordered holes."""
    name: str = Field(..., min_length=1)
    holes: List[CourseHole] = Field(default_factory=list)

    def get_hole(self, number: int) -> Optional[CourseHole]:
        """Get a hole by its number (1-18)."""
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    @property
    def par(self) -> int:
        return sum(h.par for h in self.holes)
