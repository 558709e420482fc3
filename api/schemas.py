"""API-specific request and response models."""

from datetime import date as date_type
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from models import FinalizedRound, RoundDraft, Schedule


class RoundSummaryResponse(BaseModel):
    """Lightweight round for list views."""
    id: str
    course_name: Optional[str] = None
    date: Optional[date_type] = None
    total_score: int
    total_par: int
    to_par: int
    total_putts: int
    gir_count: int
    fairway_hit_count: int


class DraftResponse(BaseModel):
    """The draft plus the hints shown next to the current hole."""
    draft: RoundDraft
    total_score: int
    total_par: int
    total_putts: int
    advice: str
    recommended_clubs: List[Optional[str]] = Field(
        default_factory=list,
        description="Suggested club per stroke of the current hole",
    )


class HoleUpdateRequest(BaseModel):
    par: Optional[int] = None
    yardage: Optional[int] = None
    gir: Optional[bool] = None
    fairway: Optional[Literal["hit", "miss"]] = None
    clear_fairway: bool = False


class StrokeUpdateRequest(BaseModel):
    club: Optional[str] = None
    memo: Optional[str] = None


class PuttUpdateRequest(BaseModel):
    type: Optional[Literal["long", "middle", "short"]] = None
    distance_steps: Optional[float] = Field(None, ge=0)
    memo: Optional[str] = None


class FinalizeResponse(BaseModel):
    round: FinalizedRound


class ScheduleRequest(BaseModel):
    course_name: str
    date: date_type
    time: str = ""
    memo: str = ""


class ClubRequest(BaseModel):
    name: str
    distance: Optional[int] = Field(0, ge=0)


class ClubDistanceRequest(BaseModel):
    distance: Optional[int] = None


class ClubStatResponse(BaseModel):
    club: str
    tee_usage: int
    tee_success: int
    approach_usage: int
    approach_success: int
    tee_success_rate: int
    approach_success_rate: int


class DashboardResponse(BaseModel):
    """Aggregated stats for the dashboard page."""
    round_count: int
    average_score: Optional[int] = None
    best_score: Optional[int] = None
    gir_rate: Optional[int] = None
    recent_rounds: List[RoundSummaryResponse]
    club_stats: List[ClubStatResponse]
    upcoming_schedules: List[Schedule]
