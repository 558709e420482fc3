from datetime import date as date_type, datetime
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .course import TeeColor
from .hole_entry import HoleEntry
from .round_setup import StartSide


class FinalizedRound(BaseGolfModel):
    """A completed round in an owner's history. Never modified after creation."""
    id: Optional[str] = None
    owner_id: str = Field(..., validation_alias="userId", serialization_alias="userId")
    date: Optional[date_type] = None
    course_name: str = ""
    target_score: int = 0
    focus_point: str = ""
    weather: str = ""
    tee_ground: Optional[TeeColor] = None
    start_from: Optional[StartSide] = None
    holes: List[HoleEntry] = Field(default_factory=list)
    total_score: int = 0
    total_par: int = 0
    gir_count: int = 0
    fairway_hit_count: int = 0
    created_at: Optional[datetime] = None

    def get_hole(self, hole_number: int) -> Optional[HoleEntry]:
        for hole in self.holes:
            if hole.hole_number == hole_number:
                return hole
        return None

    @property
    def total_putts(self) -> int:
        return sum(h.total_putts for h in self.holes)

    def total_to_par(self) -> int:
        """Get total score relative to the par of the holes played."""
        return self.total_score - self.total_par
