"""Club suggestion from a player's own history."""

from collections import Counter
from typing import Iterable, Optional

from models import FinalizedRound


def club_usage(
    history: Iterable[FinalizedRound], hole_number: int, stroke_number: int
) -> Counter:
    """Count clubs used for the given stroke on the given hole across rounds.

    Counter keeps first-seen order, so rounds earlier in history win ties.
    """
    counts: Counter = Counter()
    for round_obj in history:
        hole = round_obj.get_hole(hole_number)
        if hole is None:
            continue
        stroke = hole.stroke_at(stroke_number)
        if stroke is not None and stroke.club:
            counts[stroke.club] += 1
    return counts


def recommend_club(
    history: Iterable[FinalizedRound], hole_number: int, stroke_number: int
) -> Optional[str]:
    """Most frequently used club for this hole and stroke, or None without history.

    Ties go to the club encountered first while iterating history
    (newest round first when history comes from the round repository).
    """
    most_common = club_usage(history, hole_number, stroke_number).most_common(1)
    return most_common[0][0] if most_common else None
