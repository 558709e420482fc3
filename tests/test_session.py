import asyncio
import logging
import pytest
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

from pydantic import ValidationError

from models import FinalizedRound, RoundDraft, RoundSetup
from scoring import course_data
from scoring.draft import add_stroke, initialize_round, set_stroke_club, update_hole
from scoring.session import IncompleteRoundError, NoActiveDraftError, RoundSession

COURSE = course_data.HINOKUMA_COUNTRY_CLUB_NAME
NOW = datetime(2025, 4, 1, 15, 0, tzinfo=timezone.utc)


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def fake_db():
    """DatabaseManager stand-in with async repositories."""
    saved_rounds = []

    async def create_round(round_):
        saved = round_.model_copy(update={"id": f"r{len(saved_rounds) + 1}", "created_at": NOW})
        saved_rounds.append(saved)
        return saved

    async def find_course(owner_id, name):
        return course_data.lookup(name)

    db = SimpleNamespace(
        rounds=AsyncMock(),
        drafts=AsyncMock(),
        courses=AsyncMock(),
    )
    db.rounds.get_rounds_for_user.return_value = []
    db.rounds.create_round.side_effect = create_round
    db.drafts.load_draft.return_value = None
    db.drafts.clear_draft.return_value = True
    db.courses.find_course.side_effect = find_course
    db.saved_rounds = saved_rounds
    return db


def _setup(**overrides):
    values = dict(date=date(2025, 4, 1), course_name=COURSE, target_score=90)
    values.update(overrides)
    return RoundSetup(**values)


def _finished(score=90, created_at=NOW, course_name=COURSE, day=date(2025, 4, 1)):
    return FinalizedRound(
        id="old", owner_id="u1", date=day, course_name=course_name,
        total_score=score, total_par=72, created_at=created_at,
    )


async def _started(db) -> RoundSession:
    session = RoundSession("u1", db)
    await session.open()
    await session.start(_setup())
    await session.flush()
    return session


# ================================================================
# Loading
# ================================================================

@pytest.mark.asyncio
async def test_open_without_data(fake_db):
    session = RoundSession("u1", fake_db, history_limit=5)
    assert await session.open() is None
    assert session.history == []
    fake_db.rounds.get_rounds_for_user.assert_awaited_once_with("u1", limit=5)


@pytest.mark.asyncio
async def test_open_degrades_when_storage_fails(fake_db, caplog):
    fake_db.rounds.get_rounds_for_user.side_effect = OSError("connection refused")
    fake_db.drafts.load_draft.side_effect = OSError("connection refused")
    session = RoundSession("u1", fake_db)

    with caplog.at_level(logging.WARNING, logger="scoring.session"):
        assert await session.open() is None

    assert session.history == []
    assert session.draft is None
    assert "Could not load round history" in caplog.text
    # Advice still has something to say with no history.
    assert session.advice()


@pytest.mark.asyncio
async def test_resume_restores_draft(fake_db):
    setup = _setup()
    draft = RoundDraft(owner_id="u1", setup=setup, holes=initialize_round(setup, None),
                       current_hole_index=4, updated_at=NOW)
    fake_db.drafts.load_draft.return_value = draft

    session = RoundSession("u1", fake_db)
    restored = await session.open()
    assert restored is draft
    assert session.draft.current_hole.hole_number == 5


@pytest.mark.asyncio
async def test_resume_discards_draft_already_saved_as_round(fake_db):
    setup = _setup()
    draft = RoundDraft(owner_id="u1", setup=setup, holes=initialize_round(setup, None),
                       updated_at=NOW - timedelta(minutes=1))
    fake_db.drafts.load_draft.return_value = draft
    fake_db.rounds.get_rounds_for_user.return_value = [_finished(created_at=NOW)]

    session = RoundSession("u1", fake_db)
    assert await session.open() is None
    fake_db.drafts.clear_draft.assert_awaited_once_with("u1")


@pytest.mark.asyncio
async def test_resume_keeps_draft_for_a_different_round(fake_db):
    setup = _setup()
    draft = RoundDraft(owner_id="u1", setup=setup, holes=initialize_round(setup, None),
                       updated_at=NOW - timedelta(minutes=1))
    fake_db.drafts.load_draft.return_value = draft
    fake_db.rounds.get_rounds_for_user.return_value = [_finished(course_name="Other")]

    session = RoundSession("u1", fake_db)
    assert await session.open() is draft
    fake_db.drafts.clear_draft.assert_not_awaited()


# ================================================================
# Draft changes
# ================================================================

@pytest.mark.asyncio
async def test_start_builds_holes_from_course(fake_db):
    session = await _started(fake_db)

    assert [h.hole_number for h in session.draft.holes] == list(range(1, 10))
    assert session.draft.holes[0].yardage == 286
    assert session.draft.current_hole_index == 0
    fake_db.drafts.save_draft.assert_awaited_once()
    owner_id, saved = fake_db.drafts.save_draft.call_args[0]
    assert owner_id == "u1"
    assert saved.setup.course_name == COURSE


@pytest.mark.asyncio
async def test_mutate_hole_persists_snapshot(fake_db):
    session = await _started(fake_db)

    hole = session.mutate_hole(0, set_stroke_club, 0, "Driver")
    await session.flush()

    assert hole.strokes[0].club == "Driver"
    assert session.draft.holes[0].strokes[0].club == "Driver"
    _, saved = fake_db.drafts.save_draft.call_args[0]
    assert saved.holes[0].strokes[0].club == "Driver"


@pytest.mark.asyncio
async def test_mutate_hole_rejects_bad_index_and_missing_draft(fake_db):
    session = RoundSession("u1", fake_db)
    with pytest.raises(NoActiveDraftError):
        session.mutate_hole(0, add_stroke)

    session = await _started(fake_db)
    with pytest.raises(IndexError):
        session.mutate_hole(9, add_stroke)


@pytest.mark.asyncio
async def test_invalid_edit_leaves_draft_unchanged(fake_db):
    session = await _started(fake_db)
    before = session.draft
    with pytest.raises(ValidationError):
        session.mutate_hole(0, update_hole, par=9)
    assert session.draft is before


@pytest.mark.asyncio
async def test_failed_save_is_logged_and_draft_kept(fake_db, caplog):
    session = await _started(fake_db)
    fake_db.drafts.save_draft.side_effect = OSError("disk full")

    with caplog.at_level(logging.ERROR, logger="scoring.session"):
        session.mutate_hole(0, add_stroke)
        await session.flush()

    assert len(session.draft.holes[0].strokes) == 3
    assert "Could not save draft" in caplog.text


@pytest.mark.asyncio
async def test_navigation_is_clamped(fake_db):
    session = await _started(fake_db)

    session.previous_hole()
    assert session.draft.current_hole_index == 0
    session.go_to_hole(20)
    assert session.draft.current_hole_index == 8
    session.next_hole()
    assert session.draft.current_hole_index == 8
    session.previous_hole()
    assert session.draft.current_hole_index == 7


# ================================================================
# Finish
# ================================================================

@pytest.mark.asyncio
async def test_finalize_refuses_incomplete_round(fake_db):
    session = await _started(fake_db)
    session.mutate_hole(0, add_stroke)

    with pytest.raises(IncompleteRoundError) as exc:
        await session.finalize()

    assert exc.value.hole_numbers == list(range(2, 10))
    fake_db.rounds.create_round.assert_not_awaited()
    assert session.draft is not None


@pytest.mark.asyncio
async def test_finalize_saves_round_and_clears_draft(fake_db):
    fake_db.rounds.get_rounds_for_user.return_value = [_finished(score=95)]
    session = await _started(fake_db)
    for i in range(9):
        session.mutate_hole(i, add_stroke)

    saved = await session.finalize()

    assert saved.id == "r1"
    assert len(saved.holes) == 18
    assert saved.total_score == 27
    assert saved.total_par == 36
    fake_db.drafts.clear_draft.assert_awaited_with("u1")
    assert session.draft is None
    assert [r.id for r in session.history] == ["r1", "old"]


@pytest.mark.asyncio
async def test_finalize_allows_incomplete_when_confirmed(fake_db):
    session = await _started(fake_db)
    session.mutate_hole(0, add_stroke)

    saved = await session.finalize(allow_incomplete=True)
    assert saved.total_score == 3
    assert saved.total_par == 36


@pytest.mark.asyncio
async def test_finalize_keeps_draft_when_round_save_fails(fake_db):
    session = await _started(fake_db)
    fake_db.rounds.create_round.side_effect = OSError("down")

    with pytest.raises(OSError):
        await session.finalize(allow_incomplete=True)

    assert session.draft is not None
    fake_db.drafts.clear_draft.assert_not_awaited()


@pytest.mark.asyncio
async def test_finalize_survives_failed_draft_delete(fake_db, caplog):
    session = await _started(fake_db)
    fake_db.drafts.clear_draft.side_effect = OSError("down")

    with caplog.at_level(logging.ERROR, logger="scoring.session"):
        saved = await session.finalize(allow_incomplete=True)

    assert saved.id == "r1"
    assert session.draft is None
    assert "Could not delete draft" in caplog.text


@pytest.mark.asyncio
async def test_abandon_clears_draft(fake_db):
    session = await _started(fake_db)
    await session.abandon()
    assert session.draft is None
    fake_db.drafts.clear_draft.assert_awaited_once_with("u1")


@pytest.mark.asyncio
async def test_recommendation_uses_history(fake_db):
    session = await _started(fake_db)
    session.mutate_hole(0, set_stroke_club, 0, "Driver")
    for i in range(1, 9):
        session.mutate_hole(i, add_stroke)
    await session.finalize()

    assert session.recommend_club(1, 1) == "Driver"
    assert session.recommend_club(1, 2) is None


@pytest.mark.asyncio
async def test_next_session_sees_flushed_edits(fake_db):
    stored = {}

    async def save_draft(owner_id, draft):
        await asyncio.sleep(0.01)
        stored[owner_id] = draft

    async def load_draft(owner_id):
        return stored.get(owner_id)

    fake_db.drafts.save_draft.side_effect = save_draft
    fake_db.drafts.load_draft.side_effect = load_draft

    first = await _started(fake_db)
    first.mutate_hole(0, add_stroke)
    await first.flush()

    second = RoundSession("u1", fake_db)
    await second.open()
    second.mutate_hole(0, add_stroke)
    await second.flush()

    assert len(stored["u1"].holes[0].strokes) == 4


@pytest.mark.asyncio
async def test_finalize_passes_its_timestamp_to_storage(fake_db):
    session = await _started(fake_db)
    await session.finalize(allow_incomplete=True)
    sent = fake_db.rounds.create_round.call_args[0][0]
    assert sent.created_at is not None
    assert sent.created_at.tzinfo is not None
