"""Score entry: the owner's round in progress."""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from api.dependencies import get_round_session
from api.schemas import (
    DraftResponse,
    FinalizeResponse,
    HoleUpdateRequest,
    PuttUpdateRequest,
    StrokeUpdateRequest,
)
from database.exceptions import STORAGE_ERRORS
from models import HoleEntry, RoundSetup
from scoring import draft as draft_ops
from config import Settings, get_settings
from scoring.aggregator import round_total_par, round_total_putts, round_total_score
from scoring.session import IncompleteRoundError, NoActiveDraftError, RoundSession

logger = logging.getLogger(__name__)

router = APIRouter()


def _draft_response(session: RoundSession) -> DraftResponse:
    draft = session.draft
    if draft is None:
        raise HTTPException(404, "No round in progress")
    hole = draft.current_hole
    recommended = [
        session.recommend_club(hole.hole_number, s.stroke_number) for s in hole.strokes
    ] if hole else []
    return DraftResponse(
        draft=draft,
        total_score=round_total_score(draft.holes),
        total_par=round_total_par(draft.holes),
        total_putts=round_total_putts(draft.holes),
        advice=session.advice(),
        recommended_clubs=recommended,
    )


async def _mutate(
    session: RoundSession, hole_index: int, mutator: Callable[..., HoleEntry], *args, **kwargs
) -> DraftResponse:
    """Apply one hole edit and wait for its draft write before responding."""
    try:
        session.mutate_hole(hole_index, mutator, *args, **kwargs)
    except NoActiveDraftError:
        raise HTTPException(404, "No round in progress")
    except IndexError:
        raise HTTPException(404, f"Hole index {hole_index} not found")
    except (ValidationError, ValueError) as e:
        raise HTTPException(422, str(e))
    await session.flush()
    return _draft_response(session)


# ================================================================
# Hints (available with or without a draft)
# ================================================================

@router.get("/advice")
async def get_advice(session: RoundSession = Depends(get_round_session)):
    return {"advice": session.advice()}


@router.get("/recommendation")
async def get_recommendation(
    hole: int = Query(..., ge=1, le=18),
    stroke: int = Query(..., ge=1, le=20),
    session: RoundSession = Depends(get_round_session),
):
    return {"hole": hole, "stroke": stroke, "club": session.recommend_club(hole, stroke)}


# ================================================================
# Draft lifecycle
# ================================================================

@router.get("/defaults", response_model=RoundSetup)
async def get_setup_defaults(settings: Settings = Depends(get_settings)):
    """Prefilled values for the round setup form."""
    return RoundSetup(course_name=settings.default_course_name)


@router.get("", response_model=DraftResponse)
async def get_draft(session: RoundSession = Depends(get_round_session)):
    return _draft_response(session)


@router.post("", response_model=DraftResponse, status_code=201)
async def start_round(setup: RoundSetup, session: RoundSession = Depends(get_round_session)):
    await session.start(setup)
    await session.flush()
    return _draft_response(session)


@router.delete("", status_code=204)
async def abandon_round(session: RoundSession = Depends(get_round_session)):
    try:
        await session.abandon()
    except STORAGE_ERRORS:
        logger.error("Abandon failed for %s", session.owner_id, exc_info=True)
        raise HTTPException(500, "Failed to delete the round in progress")


@router.post("/finalize", response_model=FinalizeResponse, status_code=201)
async def finalize_round(
    confirm_incomplete: bool = Query(False),
    session: RoundSession = Depends(get_round_session),
):
    try:
        saved = await session.finalize(allow_incomplete=confirm_incomplete)
    except NoActiveDraftError:
        raise HTTPException(404, "No round in progress")
    except IncompleteRoundError as e:
        raise HTTPException(
            409,
            {"message": "Some holes have not been entered", "holes": e.hole_numbers},
        )
    except STORAGE_ERRORS:
        logger.error("Saving round failed for %s", session.owner_id, exc_info=True)
        raise HTTPException(500, "Failed to save the round")
    return FinalizeResponse(round=saved)


# ================================================================
# Navigation
# ================================================================

@router.post("/next", response_model=DraftResponse)
async def next_hole(session: RoundSession = Depends(get_round_session)):
    try:
        session.next_hole()
    except NoActiveDraftError:
        raise HTTPException(404, "No round in progress")
    await session.flush()
    return _draft_response(session)


@router.post("/previous", response_model=DraftResponse)
async def previous_hole(session: RoundSession = Depends(get_round_session)):
    try:
        session.previous_hole()
    except NoActiveDraftError:
        raise HTTPException(404, "No round in progress")
    await session.flush()
    return _draft_response(session)


# ================================================================
# Hole edits
# ================================================================

@router.patch("/holes/{hole_index}", response_model=DraftResponse)
async def update_hole(
    hole_index: int,
    req: HoleUpdateRequest,
    session: RoundSession = Depends(get_round_session),
):
    updates = req.model_dump(exclude_none=True, exclude={"clear_fairway"})
    if req.clear_fairway:
        updates["fairway"] = None
    return await _mutate(session, hole_index, draft_ops.update_hole, **updates)


@router.post("/holes/{hole_index}/strokes", response_model=DraftResponse)
async def add_stroke(hole_index: int, session: RoundSession = Depends(get_round_session)):
    return await _mutate(session, hole_index, draft_ops.add_stroke)


@router.delete("/holes/{hole_index}/strokes/{stroke_index}", response_model=DraftResponse)
async def remove_stroke(
    hole_index: int, stroke_index: int, session: RoundSession = Depends(get_round_session)
):
    return await _mutate(session, hole_index, draft_ops.remove_stroke, stroke_index)


@router.patch("/holes/{hole_index}/strokes/{stroke_index}", response_model=DraftResponse)
async def update_stroke(
    hole_index: int,
    stroke_index: int,
    req: StrokeUpdateRequest,
    session: RoundSession = Depends(get_round_session),
):
    if req.club is not None:
        await _mutate(session, hole_index, draft_ops.set_stroke_club, stroke_index, req.club)
    if req.memo is not None:
        await _mutate(session, hole_index, draft_ops.set_stroke_memo, stroke_index, req.memo)
    return _draft_response(session)


@router.post("/holes/{hole_index}/putts", response_model=DraftResponse)
async def add_putt(hole_index: int, session: RoundSession = Depends(get_round_session)):
    return await _mutate(session, hole_index, draft_ops.add_putt)


@router.delete("/holes/{hole_index}/putts", response_model=DraftResponse)
async def clear_putts(hole_index: int, session: RoundSession = Depends(get_round_session)):
    return await _mutate(session, hole_index, draft_ops.clear_putts)


@router.delete("/holes/{hole_index}/putts/{putt_index}", response_model=DraftResponse)
async def remove_putt(
    hole_index: int, putt_index: int, session: RoundSession = Depends(get_round_session)
):
    return await _mutate(session, hole_index, draft_ops.remove_putt, putt_index)


@router.patch("/holes/{hole_index}/putts/{putt_index}", response_model=DraftResponse)
async def update_putt(
    hole_index: int,
    putt_index: int,
    req: PuttUpdateRequest,
    session: RoundSession = Depends(get_round_session),
):
    if req.type is not None:
        await _mutate(session, hole_index, draft_ops.set_putt_type, putt_index, req.type)
    if req.distance_steps is not None:
        await _mutate(session, hole_index, draft_ops.set_putt_distance, putt_index, req.distance_steps)
    if req.memo is not None:
        await _mutate(session, hole_index, draft_ops.set_putt_memo, putt_index, req.memo)
    return _draft_response(session)
