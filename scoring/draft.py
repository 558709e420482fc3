"""Round draft construction, legacy migration and hole mutators.

Every mutator takes a HoleEntry and returns a new one with derived totals
recomputed; limits that would be violated turn the call into a no-op.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from models import (
    MAX_STROKES,
    MIN_PUTTS,
    MIN_STROKES,
    Course,
    HoleEntry,
    LegacyHoleEntry,
    Putt,
    RoundSetup,
    Stroke,
)
from models.hole_entry import PuttType, default_putts, empty_strokes
from scoring.aggregator import with_totals

logger = logging.getLogger(__name__)

DEFAULT_PAR = 4

# Fields a caller may set directly through update_hole.
EDITABLE_HOLE_FIELDS = {"par", "yardage", "gir", "fairway"}


# ================================================================
# Round initialization
# ================================================================

def initialize_round(setup: RoundSetup, course: Optional[Course]) -> List[HoleEntry]:
    """Build the nine holes of the chosen start side.

    Par and yardage come from the course when it knows the hole; otherwise
    par defaults to 4 and yardage to None. Totals start at zero so holes
    not yet touched are recognisable as incomplete.
    """
    holes = []
    for number in setup.hole_numbers:
        course_hole = course.get_hole(number) if course else None
        holes.append(
            HoleEntry(
                hole_number=number,
                par=course_hole.par if course_hole else DEFAULT_PAR,
                yardage=course_hole.yardage_for(setup.tee_ground) if course_hole else None,
                strokes=empty_strokes(),
                putts=default_putts(),
                total_strokes=0,
                total_putts=0,
                gir=False,
                fairway=None,
            )
        )
    return holes


# ================================================================
# Legacy shape decoding
# ================================================================

def is_legacy_hole(raw: Mapping[str, Any]) -> bool:
    """The legacy shape stores strokes as a plain count rather than a list."""
    strokes = raw.get("strokes")
    return isinstance(strokes, Real) and not isinstance(strokes, bool)


def _validate_leniently(model_cls, data: Dict[str, Any]):
    """Validate data, dropping fields that fail so their defaults apply."""
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        if not bad or not bad.intersection(data):
            raise
        logger.warning("Discarding invalid hole fields %s", sorted(map(str, bad)))
        cleaned = {k: v for k, v in data.items() if k not in bad}
        return model_cls.model_validate(cleaned)


def _lift_putt_info(data: Dict[str, Any]) -> Dict[str, Any]:
    """Older current-shape drafts nest putts as puttInfo: {putts: [...]}."""
    if "putts" in data and isinstance(data["putts"], list):
        return data
    putt_info = data.pop("puttInfo", None)
    if isinstance(putt_info, Mapping) and isinstance(putt_info.get("putts"), list):
        data["putts"] = putt_info["putts"]
    elif not isinstance(data.get("putts"), list):
        data["putts"] = None
    return data


def decode_hole(
    raw: Mapping[str, Any], *, hole_number: Optional[int] = None
) -> Union[LegacyHoleEntry, HoleEntry]:
    """Decode a persisted hole document into its legacy or current model.

    hole_number is used when the document does not carry a usable one.
    """
    data = dict(raw)
    if hole_number is not None:
        data.setdefault("hole", hole_number)
    if is_legacy_hole(data):
        return _validate_leniently(LegacyHoleEntry, data)

    data = _lift_putt_info(data)
    if not isinstance(data.get("strokes"), list):
        data.pop("strokes", None)
    return _validate_leniently(HoleEntry, data)


def _from_legacy(legacy: LegacyHoleEntry) -> HoleEntry:
    putts = [Putt(type="middle", distance_steps=0) for _ in range(legacy.putts)]
    return HoleEntry(
        hole_number=legacy.hole,
        par=legacy.par,
        yardage=legacy.yardage,
        strokes=[
            Stroke(stroke_number=1, club=legacy.tee_club or ""),
            Stroke(stroke_number=2, club=legacy.approach_club or ""),
        ],
        putts=putts or None,
        # The recorded counts are the real score; the synthetic entries are not.
        total_strokes=legacy.strokes,
        total_putts=legacy.putts,
        gir=legacy.gir,
        fairway=legacy.fairway,
    )


def migrate_legacy_hole(
    raw: Union[Mapping[str, Any], HoleEntry, LegacyHoleEntry],
    *,
    hole_number: Optional[int] = None,
) -> HoleEntry:
    """Upgrade a persisted hole to the current HoleEntry shape.

    Current-shape input passes through with absent fields defaulted, so
    applying this to its own output changes nothing.
    """
    if isinstance(raw, HoleEntry):
        return raw
    decoded = raw if isinstance(raw, LegacyHoleEntry) else decode_hole(raw, hole_number=hole_number)
    if isinstance(decoded, LegacyHoleEntry):
        return _from_legacy(decoded)
    return decoded


# ================================================================
# Stroke mutators
# ================================================================

def renumber_strokes(strokes: List[Stroke]) -> List[Stroke]:
    """Reassign stroke_number to match 1-based position."""
    return [
        s if s.stroke_number == i else s.model_copy(update={"stroke_number": i})
        for i, s in enumerate(strokes, start=1)
    ]


def add_stroke(hole: HoleEntry) -> HoleEntry:
    if len(hole.strokes) >= MAX_STROKES:
        return hole
    strokes = [*hole.strokes, Stroke(stroke_number=len(hole.strokes) + 1)]
    return with_totals(hole.model_copy(update={"strokes": strokes}))


def remove_stroke(hole: HoleEntry, index: int) -> HoleEntry:
    """Remove the stroke at 0-based index; the tee shot and second shot stay."""
    if len(hole.strokes) <= MIN_STROKES or not 0 <= index < len(hole.strokes):
        return hole
    strokes = renumber_strokes([s for i, s in enumerate(hole.strokes) if i != index])
    return with_totals(hole.model_copy(update={"strokes": strokes}))


def _replace_stroke(hole: HoleEntry, index: int, **fields) -> HoleEntry:
    if not 0 <= index < len(hole.strokes):
        return hole
    strokes = list(hole.strokes)
    strokes[index] = Stroke.model_validate({**strokes[index].model_dump(), **fields})
    return with_totals(hole.model_copy(update={"strokes": strokes}))


def set_stroke_club(hole: HoleEntry, index: int, club: str) -> HoleEntry:
    return _replace_stroke(hole, index, club=club)


def set_stroke_memo(hole: HoleEntry, index: int, memo: str) -> HoleEntry:
    return _replace_stroke(hole, index, memo=memo)


# ================================================================
# Putt mutators
# ================================================================

def add_putt(hole: HoleEntry) -> HoleEntry:
    """Append a middle putt, first padding to the two mandatory putts."""
    current = hole.putts or []
    existing = list(current) if len(current) >= MIN_PUTTS else default_putts()
    putts = [*existing, Putt()]
    return with_totals(hole.model_copy(update={"putts": putts}))


def remove_putt(hole: HoleEntry, index: int) -> HoleEntry:
    putts = hole.putts or []
    if len(putts) <= MIN_PUTTS or not 0 <= index < len(putts):
        return hole
    remaining = [p for i, p in enumerate(putts) if i != index]
    return with_totals(hole.model_copy(update={"putts": remaining}))


def _replace_putt(hole: HoleEntry, index: int, **fields) -> HoleEntry:
    putts = list(hole.putts or [])
    if not 0 <= index < len(putts):
        return hole
    putts[index] = Putt.model_validate({**putts[index].model_dump(), **fields})
    return with_totals(hole.model_copy(update={"putts": putts}))


def set_putt_type(hole: HoleEntry, index: int, putt_type: PuttType) -> HoleEntry:
    return _replace_putt(hole, index, type=putt_type)


def set_putt_distance(hole: HoleEntry, index: int, distance_steps: float) -> HoleEntry:
    return _replace_putt(hole, index, distance_steps=distance_steps)


def set_putt_memo(hole: HoleEntry, index: int, memo: str) -> HoleEntry:
    return _replace_putt(hole, index, memo=memo)


def clear_putts(hole: HoleEntry) -> HoleEntry:
    return with_totals(hole.model_copy(update={"putts": None}))


# ================================================================
# Hole-level edits
# ================================================================

def update_hole(hole: HoleEntry, **fields) -> HoleEntry:
    """Set par, yardage, gir or fairway; values are validated."""
    unknown = set(fields) - EDITABLE_HOLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update hole fields: {sorted(unknown)}")
    data = hole.model_dump()
    data.update(fields)
    return with_totals(HoleEntry.model_validate(data))
