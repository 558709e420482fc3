from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from models import Club, FinalizedRound
from scoring.aggregator import ROUND_HOLES


def _played_holes(round_obj: FinalizedRound):
    """Holes that were actually entered (placeholders carry zero strokes)."""
    return [h for h in round_obj.holes if h.total_strokes > 0]


def _rate(successes: int, attempts: int) -> int:
    return round(successes / attempts * 100) if attempts else 0


def club_usage_stats(rounds: Iterable[FinalizedRound]) -> Dict[str, Dict[str, int]]:
    """
    Tally tee-shot and approach usage per club.

    The tee shot is stroke 1 and counts as a success on a fairway hit;
    the approach is stroke 2 and counts as a success on a green in regulation.
    """
    usage: Dict[str, Dict[str, int]] = {}

    def _entry(club: str) -> Dict[str, int]:
        return usage.setdefault(
            club,
            {"tee_usage": 0, "tee_success": 0, "approach_usage": 0, "approach_success": 0},
        )

    for round_obj in rounds:
        for hole in _played_holes(round_obj):
            if hole.tee_club:
                entry = _entry(hole.tee_club)
                entry["tee_usage"] += 1
                if hole.fairway == "hit":
                    entry["tee_success"] += 1
            if hole.approach_club:
                entry = _entry(hole.approach_club)
                entry["approach_usage"] += 1
                if hole.gir:
                    entry["approach_success"] += 1
    return usage


def club_report(
    rounds: Iterable[FinalizedRound], clubs: Sequence[Club]
) -> List[Dict[str, Any]]:
    """
    Per-club rows for the bag, in bag order.

    Putters and clubs with no recorded usage are left out.
    """
    usage = club_usage_stats(rounds)
    results: List[Dict[str, Any]] = []
    for club in clubs:
        if club.is_putter:
            continue
        stats = usage.get(club.name)
        if not stats or (stats["tee_usage"] == 0 and stats["approach_usage"] == 0):
            continue
        results.append(
            {
                "club": club.name,
                **stats,
                "tee_success_rate": _rate(stats["tee_success"], stats["tee_usage"]),
                "approach_success_rate": _rate(
                    stats["approach_success"], stats["approach_usage"]
                ),
            }
        )
    return results


def dashboard_summary(rounds: Sequence[FinalizedRound]) -> Dict[str, Optional[int]]:
    """Rounded scoring average, best score, round count and GIR rate."""
    if not rounds:
        return {"average_score": None, "best_score": None, "round_count": 0, "gir_rate": None}
    scores = [r.total_score for r in rounds]
    total_holes = len(rounds) * ROUND_HOLES
    return {
        "average_score": round(sum(scores) / len(scores)),
        "best_score": min(scores),
        "round_count": len(rounds),
        "gir_rate": _rate(sum(r.gir_count for r in rounds), total_holes),
    }


def score_trend(rounds: Iterable[FinalizedRound]) -> List[Dict[str, Any]]:
    """Return total score trend data by round."""
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(rounds, start=1):
        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "date": round_obj.date,
                "total_score": round_obj.total_score,
                "to_par": round_obj.total_to_par(),
                "total_putts": round_obj.total_putts,
                "gir_count": round_obj.gir_count,
                "fairway_hit_count": round_obj.fairway_hit_count,
            }
        )
    return results
