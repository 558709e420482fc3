"""Conversion between asyncpg rows and Pydantic domain models.

Rows carry a JSONB ``data`` document next to their key columns. Hole
documents may be in the legacy shape; they are migrated here, once, so
nothing past this module ever sees a legacy hole.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from models import Course, FinalizedRound, HoleEntry, RoundDraft, RoundSetup, Schedule, UserProfile
from scoring.aggregator import placeholder_hole
from scoring.draft import migrate_legacy_hole

logger = logging.getLogger(__name__)


def load_document(value: Any) -> Dict[str, Any]:
    """JSONB arrives as text unless a type codec is registered."""
    if value is None:
        return {}
    if isinstance(value, (bytes, str)):
        return json.loads(value)
    return dict(value)


def dump_document(document: Mapping[str, Any]) -> str:
    return json.dumps(document, ensure_ascii=False)


# ================================================================
# Row -> Model (reads)
# ================================================================

def holes_from_documents(
    raw_holes: Any, hole_numbers: Optional[List[int]] = None
) -> List[HoleEntry]:
    """Migrate a stored hole list, substituting a placeholder for unreadable holes."""
    if not isinstance(raw_holes, list):
        return []
    holes = []
    for i, raw in enumerate(raw_holes):
        fallback = hole_numbers[i] if hole_numbers and i < len(hole_numbers) else None
        try:
            if not isinstance(raw, Mapping):
                raise ValueError(f"hole document is {type(raw).__name__}, not an object")
            holes.append(migrate_legacy_hole(raw, hole_number=fallback))
        except (ValidationError, ValueError):
            logger.warning("Unreadable hole document at position %d", i, exc_info=True)
            if fallback is not None:
                holes.append(placeholder_hole(fallback))
    return holes


def draft_from_row(row) -> RoundDraft:
    """golf.draft_rounds row -> RoundDraft, upgrading legacy hole shapes."""
    data = load_document(row["data"])
    setup = RoundSetup.model_validate(data.get("setup") or {})
    holes = holes_from_documents(data.get("holes"), list(setup.hole_numbers))
    index = data.get("currentHoleIndex", 0)
    if not isinstance(index, int) or not 0 <= index < max(len(holes), 1):
        index = 0
    return RoundDraft(
        owner_id=row["owner_id"],
        setup=setup,
        holes=holes,
        current_hole_index=index,
        updated_at=row["updated_at"],
    )


def round_from_row(row) -> FinalizedRound:
    """golf.rounds row -> FinalizedRound."""
    data = load_document(row["data"])
    data["holes"] = holes_from_documents(data.get("holes"), list(range(1, 19)))
    data.pop("id", None)
    data.pop("createdAt", None)
    data["userId"] = row["owner_id"]
    return FinalizedRound.model_validate(
        {**data, "id": str(row["id"]), "createdAt": row["created_at"]}
    )


def schedule_from_row(row) -> Schedule:
    """golf.schedules row -> Schedule."""
    data = load_document(row["data"])
    return Schedule.model_validate(
        {
            **data,
            "id": str(row["id"]),
            "userId": row["owner_id"],
            "date": row["schedule_date"],
            "createdAt": row["created_at"],
            "updatedAt": row["updated_at"],
        }
    )


def profile_from_row(row) -> UserProfile:
    """golf.user_profiles row -> UserProfile."""
    data = load_document(row["data"])
    return UserProfile.model_validate(
        {**data, "ownerId": row["owner_id"], "updatedAt": row["updated_at"]}
    )


def course_from_row(row) -> Course:
    """golf.courses row -> Course."""
    data = load_document(row["data"])
    return Course.model_validate({**data, "name": row["name"]})


# ================================================================
# Model -> document (writes)
# ================================================================

def draft_to_document(draft: RoundDraft) -> Dict[str, Any]:
    return draft.model_dump(mode="json", by_alias=True, exclude={"updated_at"})


def round_to_document(round_: FinalizedRound) -> Dict[str, Any]:
    return round_.model_dump(mode="json", by_alias=True, exclude={"id", "created_at"})


def schedule_to_document(schedule: Schedule) -> Dict[str, Any]:
    return schedule.model_dump(
        mode="json", by_alias=True, exclude={"id", "created_at", "updated_at"}
    )


def profile_to_document(profile: UserProfile) -> Dict[str, Any]:
    return profile.model_dump(mode="json", by_alias=True, exclude={"owner_id", "updated_at"})
