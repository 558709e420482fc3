from .advice import generate_advice, compute_history_stats
from .recommendation import recommend_club
from .stats import (
    club_report,
    club_usage_stats,
    dashboard_summary,
    score_trend,
)

__all__ = [
    "generate_advice",
    "compute_history_stats",
    "recommend_club",
    "club_report",
    "club_usage_stats",
    "dashboard_summary",
    "score_trend",
]
