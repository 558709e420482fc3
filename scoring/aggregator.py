"""Pure scoring functions over hole entries.

Nothing here mutates its input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from models import FinalizedRound, HoleEntry, RoundDraft
from models.hole_entry import empty_strokes

ROUND_HOLES = 18
PLACEHOLDER_PAR = 4


def hole_total_putts(hole: HoleEntry) -> int:
    return len(hole.putts or [])


def hole_total_strokes(hole: HoleEntry) -> int:
    """Full shots plus putts."""
    return len(hole.strokes) + hole_total_putts(hole)


def with_totals(hole: HoleEntry) -> HoleEntry:
    """Return a copy of hole with total_strokes/total_putts recomputed."""
    return hole.model_copy(
        update={
            "total_strokes": hole_total_strokes(hole),
            "total_putts": hole_total_putts(hole),
        }
    )


def round_total_score(holes: Iterable[HoleEntry]) -> int:
    return sum(h.total_strokes for h in holes)


def round_total_par(holes: Iterable[HoleEntry]) -> int:
    return sum(h.par for h in holes)


def gir_count(holes: Iterable[HoleEntry]) -> int:
    return sum(1 for h in holes if h.gir)


def fairway_hit_count(holes: Iterable[HoleEntry]) -> int:
    return sum(1 for h in holes if h.fairway == "hit")


def round_total_putts(holes: Iterable[HoleEntry]) -> int:
    return sum(h.total_putts for h in holes)


def incomplete_holes(holes: Iterable[HoleEntry]) -> List[HoleEntry]:
    """Holes with nothing recorded yet (total_strokes still zero)."""
    return [h for h in holes if h.total_strokes == 0]


def placeholder_hole(hole_number: int) -> HoleEntry:
    """Zero-value hole filling a slot that was not played."""
    return HoleEntry(
        hole_number=hole_number,
        par=PLACEHOLDER_PAR,
        yardage=None,
        strokes=empty_strokes(),
        putts=None,
        total_strokes=0,
        total_putts=0,
        gir=False,
        fairway=None,
    )


def fill_round_holes(holes: Sequence[HoleEntry]) -> List[HoleEntry]:
    """Expand entered holes to exactly 18, ordered 1..18, placeholders in the gaps."""
    by_number = {h.hole_number: h for h in holes}
    return [
        by_number.get(number) or placeholder_hole(number)
        for number in range(1, ROUND_HOLES + 1)
    ]


def finalize_round(
    draft: RoundDraft, *, created_at: Optional[datetime] = None
) -> FinalizedRound:
    """Convert a draft into its finalized record.

    Totals are taken over the entered holes; placeholders only pad the
    hole list to 18.
    """
    setup = draft.setup
    entered = draft.holes
    return FinalizedRound(
        owner_id=draft.owner_id,
        date=setup.date,
        course_name=setup.course_name,
        target_score=setup.target_score,
        focus_point=setup.focus_point,
        weather=setup.weather,
        tee_ground=setup.tee_ground,
        start_from=setup.start_from,
        holes=fill_round_holes(entered),
        total_score=round_total_score(entered),
        total_par=round_total_par(entered),
        gir_count=gir_count(entered),
        fairway_hit_count=fairway_hit_count(entered),
        created_at=created_at,
    )
