from .course_repo import CourseRepositoryDB
from .draft_repo import DraftRepositoryDB
from .round_repo import RoundRepositoryDB
from .schedule_repo import ScheduleRepositoryDB
from .user_repo import UserRepositoryDB

__all__ = [
    "CourseRepositoryDB",
    "DraftRepositoryDB",
    "RoundRepositoryDB",
    "ScheduleRepositoryDB",
    "UserRepositoryDB",
]
