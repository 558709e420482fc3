from .base import BaseGolfModel
from .course import Course, CourseHole, TeeColor
from .draft import RoundDraft
from .hole_entry import (
    MAX_STROKES,
    MIN_PUTTS,
    MIN_STROKES,
    HoleEntry,
    LegacyHoleEntry,
    Putt,
    Stroke,
)
from .round import FinalizedRound
from .round_setup import RoundSetup, StartSide
from .schedule import Schedule
from .user import Club, UserProfile

__all__ = [
    "BaseGolfModel",
    "Club",
    "Course",
    "CourseHole",
    "FinalizedRound",
    "HoleEntry",
    "LegacyHoleEntry",
    "MAX_STROKES",
    "MIN_PUTTS",
    "MIN_STROKES",
    "Putt",
    "RoundDraft",
    "RoundSetup",
    "Schedule",
    "StartSide",
    "Stroke",
    "TeeColor",
    "UserProfile",
]
