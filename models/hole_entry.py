from pydantic import AliasChoices, Field
from typing import List, Literal, Optional

from .base import BaseGolfModel

MAX_STROKES = 20
MIN_STROKES = 2
MIN_PUTTS = 2

PuttType = Literal["long", "middle", "short"]
FairwayResult = Literal["hit", "miss"]


class Stroke(BaseGolfModel):
    """A single full shot. stroke_number is its 1-based position on the hole."""
    stroke_number: int = Field(..., ge=1, le=MAX_STROKES)
    club: str = ""  # empty means not selected yet
    memo: str = ""


class Putt(BaseGolfModel):
    """A single putt: long (10m+), middle (around 8m) or short (within 3m)."""
    type: PuttType = "middle"
    distance_steps: float = Field(
        0, ge=0, validation_alias=AliasChoices("distanceSteps", "distance", "distance_steps")
    )
    memo: str = ""


def empty_strokes(count: int = MIN_STROKES) -> List[Stroke]:
    return [Stroke(stroke_number=i) for i in range(1, count + 1)]


def default_putts(count: int = MIN_PUTTS) -> List[Putt]:
    return [Putt() for _ in range(count)]


class HoleEntry(BaseGolfModel):
    """A player's entry for one hole.

    total_strokes and total_putts are derived from strokes/putts and are
    recomputed by every mutator in scoring.draft; callers never set them.
    """
    hole_number: int = Field(
        ..., ge=1, le=18, validation_alias=AliasChoices("holeNumber", "hole", "hole_number")
    )
    par: int = Field(4, ge=3, le=6)
    yardage: Optional[int] = Field(None, ge=0)
    strokes: List[Stroke] = Field(default_factory=empty_strokes, max_length=MAX_STROKES)
    putts: Optional[List[Putt]] = None
    total_strokes: int = Field(0, ge=0)
    total_putts: int = Field(0, ge=0)
    gir: bool = False
    fairway: Optional[FairwayResult] = None

    @property
    def tee_club(self) -> str:
        return self.strokes[0].club if self.strokes else ""

    @property
    def approach_club(self) -> str:
        return self.strokes[1].club if len(self.strokes) > 1 else ""

    def stroke_at(self, stroke_number: int) -> Optional[Stroke]:
        for stroke in self.strokes:
            if stroke.stroke_number == stroke_number:
                return stroke
        return None


class LegacyHoleEntry(BaseGolfModel):
    """Older persisted hole shape: plain stroke/putt counts plus two club names."""
    hole: int = Field(..., ge=1, le=18)
    par: int = Field(4, ge=3, le=6)
    yardage: Optional[int] = Field(None, ge=0)
    strokes: int = Field(0, ge=0)
    putts: int = Field(0, ge=0)
    tee_club: Optional[str] = None
    approach_club: Optional[str] = None
    gir: bool = False
    fairway: Optional[FairwayResult] = None
