import json
import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from config import Settings
from database.connection import DatabasePool
from database.converters import (
    draft_from_row,
    draft_to_document,
    holes_from_documents,
    load_document,
    profile_from_row,
    round_from_row,
    round_to_document,
    schedule_from_row,
)
from database.exceptions import NotFoundError
from database.repositories.course_repo import CourseRepositoryDB
from database.repositories.draft_repo import DraftRepositoryDB
from database.repositories.round_repo import RoundRepositoryDB
from database.repositories.schedule_repo import ScheduleRepositoryDB
from database.repositories.user_repo import UserRepositoryDB
from models import Course, CourseHole, FinalizedRound, RoundDraft, RoundSetup, Schedule, UserProfile
from scoring import course_data
from scoring.draft import initialize_round

NOW = datetime(2025, 4, 1, 12, 0, tzinfo=timezone.utc)


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def mock_pool():
    pool = MagicMock()
    conn = AsyncMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return pool, conn


def _setup_doc(**overrides):
    doc = {
        "date": "2025-04-01",
        "courseName": course_data.HINOKUMA_COUNTRY_CLUB_NAME,
        "targetScore": 90,
        "focusPoint": "tempo",
        "weather": "晴れ",
        "teeGround": "white",
        "startFrom": "out",
    }
    doc.update(overrides)
    return doc


def _legacy_hole(n):
    return {"hole": n, "par": 4, "strokes": 5, "putts": 2,
            "teeClub": "Driver", "approachClub": "8I", "gir": False, "fairway": "miss"}


def _draft_row(data, owner_id="u1"):
    return {"owner_id": owner_id, "data": json.dumps(data), "updated_at": NOW}


def _round_row(data, owner_id="u1", round_id=None):
    return {"id": round_id or uuid4(), "owner_id": owner_id, "data": json.dumps(data), "created_at": NOW}


# ================================================================
# converters.py: pure functions, no mocks needed
# ================================================================

def test_load_document_accepts_text_and_mappings():
    assert load_document('{"a": 1}') == {"a": 1}
    assert load_document({"a": 1}) == {"a": 1}
    assert load_document(None) == {}


def test_draft_from_row_migrates_legacy_holes():
    row = _draft_row({
        "userId": "u1",
        "setup": _setup_doc(),
        "holes": [_legacy_hole(n) for n in range(1, 10)],
        "currentHoleIndex": 3,
    })
    draft = draft_from_row(row)

    assert draft.owner_id == "u1"
    assert draft.current_hole_index == 3
    assert draft.updated_at == NOW
    assert len(draft.holes) == 9
    first = draft.holes[0]
    assert [s.club for s in first.strokes] == ["Driver", "8I"]
    assert first.total_strokes == 5
    assert first.total_putts == 2


def test_draft_from_row_replaces_unreadable_holes():
    holes = [_legacy_hole(n) for n in range(10, 19)]
    holes[2] = "garbage"
    holes[4] = {"par": 3}  # no hole number; position supplies 14
    row = _draft_row({"setup": _setup_doc(startFrom="in"), "holes": holes, "currentHoleIndex": 42})
    draft = draft_from_row(row)

    assert [h.hole_number for h in draft.holes] == list(range(10, 19))
    assert draft.holes[2].total_strokes == 0
    assert draft.holes[4].par == 3
    assert draft.current_hole_index == 0


def test_holes_from_documents_without_fallback_drops_bad_entries():
    holes = holes_from_documents([_legacy_hole(1), {"par": 3}])
    assert [h.hole_number for h in holes] == [1]
    assert holes_from_documents(None) == []


def test_draft_document_round_trip_keeps_current_shape():
    setup = RoundSetup.model_validate(_setup_doc())
    draft = RoundDraft(owner_id="u1", setup=setup,
                       holes=initialize_round(setup, course_data.hinokuma_country_club))
    doc = draft_to_document(draft)

    assert doc["userId"] == "u1"
    assert doc["currentHoleIndex"] == 0
    assert "updatedAt" not in doc
    assert doc["holes"][0]["yardage"] == 286

    restored = draft_from_row(_draft_row(doc))
    assert restored.holes == draft.holes
    assert restored.setup == draft.setup


def test_round_from_row_fills_id_owner_and_created_at():
    rid = uuid4()
    data = {
        "userId": "someone-else",
        "courseName": "A",
        "date": "2025-04-01",
        "holes": [_legacy_hole(1)],
        "totalScore": 5,
        "totalPar": 4,
        "girCount": 0,
        "fairwayHitCount": 0,
    }
    r = round_from_row(_round_row(data, round_id=rid))
    assert r.id == str(rid)
    assert r.owner_id == "u1"
    assert r.created_at == NOW
    assert r.date == date(2025, 4, 1)
    assert r.holes[0].strokes[0].club == "Driver"


def test_round_to_document_excludes_row_columns():
    r = FinalizedRound(id="x", owner_id="u1", created_at=NOW, total_score=40)
    doc = round_to_document(r)
    assert "id" not in doc
    assert "createdAt" not in doc
    assert doc["totalScore"] == 40


def test_schedule_and_profile_converters():
    sid = uuid4()
    schedule = schedule_from_row({
        "id": sid, "owner_id": "u1", "schedule_date": date(2025, 5, 3),
        "data": json.dumps({"courseName": "A", "date": "2025-05-03", "time": "08:10", "memo": ""}),
        "created_at": NOW, "updated_at": None,
    })
    assert schedule.id == str(sid)
    assert schedule.time == "08:10"

    profile = profile_from_row({
        "owner_id": "u1", "updated_at": NOW,
        "data": json.dumps({"clubs": [{"id": "pw", "name": "PW", "distance": 100,
                                       "isDriver": False, "isPutter": False}]}),
    })
    assert [c.id for c in profile.clubs] == ["driver", "putter", "pw"]


# ================================================================
# DraftRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_draft_repo_load(mock_pool):
    pool, conn = mock_pool
    repo = DraftRepositoryDB(pool)
    conn.fetchrow.return_value = _draft_row({"setup": _setup_doc(), "holes": [], "currentHoleIndex": 0})

    draft = await repo.load_draft("u1")
    assert draft is not None
    assert draft.holes == []
    assert conn.fetchrow.call_args[0][1] == "u1"


@pytest.mark.asyncio
async def test_draft_repo_load_missing(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None
    assert await DraftRepositoryDB(pool).load_draft("u1") is None


@pytest.mark.asyncio
async def test_draft_repo_save_upserts_by_owner(mock_pool):
    pool, conn = mock_pool
    repo = DraftRepositoryDB(pool)
    setup = RoundSetup.model_validate(_setup_doc())
    draft = RoundDraft(owner_id="u1", setup=setup, holes=initialize_round(setup, None))

    await repo.save_draft("u1", draft)

    sql, owner_id, payload = conn.execute.call_args[0]
    assert "ON CONFLICT (owner_id)" in sql
    assert owner_id == "u1"
    assert json.loads(payload)["setup"]["courseName"] == course_data.HINOKUMA_COUNTRY_CLUB_NAME


@pytest.mark.asyncio
async def test_draft_repo_save_rejects_other_owner(mock_pool):
    pool, _ = mock_pool
    setup = RoundSetup.model_validate(_setup_doc())
    draft = RoundDraft(owner_id="u2", setup=setup)
    with pytest.raises(ValueError):
        await DraftRepositoryDB(pool).save_draft("u1", draft)


@pytest.mark.asyncio
async def test_draft_repo_clear(mock_pool):
    pool, conn = mock_pool
    conn.execute.return_value = "DELETE 1"
    assert await DraftRepositoryDB(pool).clear_draft("u1") is True
    conn.execute.return_value = "DELETE 0"
    assert await DraftRepositoryDB(pool).clear_draft("u1") is False


# ================================================================
# RoundRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_round_repo_get_rounds_newest_first(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetch.return_value = [_round_row({"totalScore": 90}), _round_row({"totalScore": 85})]

    rounds = await repo.get_rounds_for_user("u1", limit=10)
    assert [r.total_score for r in rounds] == [90, 85]
    sql, owner_id, limit, offset = conn.fetch.call_args[0]
    assert "ORDER BY created_at DESC" in sql
    assert (owner_id, limit, offset) == ("u1", 10, 0)


@pytest.mark.asyncio
async def test_round_repo_get_round_not_found(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None
    assert await RoundRepositoryDB(pool).get_round("u1", str(uuid4())) is None


@pytest.mark.asyncio
async def test_round_repo_create_round(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    r = FinalizedRound(owner_id="u1", course_name="A", total_score=44, created_at=NOW)
    conn.fetchrow.return_value = _round_row(round_to_document(r))

    saved = await repo.create_round(r)
    assert saved.id is not None
    assert saved.created_at == NOW
    assert saved.total_score == 44
    sql, owner_id, payload, created_at = conn.fetchrow.call_args[0]
    assert "INSERT INTO golf.rounds" in sql
    assert created_at == NOW
    assert json.loads(payload)["courseName"] == "A"


# ================================================================
# ScheduleRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_schedule_repo_update_missing_raises(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None
    with pytest.raises(NotFoundError):
        await ScheduleRepositoryDB(pool).update_schedule(
            "u1", str(uuid4()), Schedule(course_name="A", date=date(2025, 5, 3))
        )


@pytest.mark.asyncio
async def test_schedule_repo_upcoming_passes_bounds(mock_pool):
    pool, conn = mock_pool
    conn.fetch.return_value = []
    await ScheduleRepositoryDB(pool).get_upcoming("u1", date(2025, 5, 1), limit=5)
    _, owner_id, start, end, limit = conn.fetch.call_args[0]
    assert (owner_id, start, end, limit) == ("u1", date(2025, 5, 1), None, 5)


# ================================================================
# UserRepositoryDB / CourseRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_user_repo_save_profile(mock_pool):
    pool, conn = mock_pool
    profile = UserProfile(owner_id="u1")
    conn.fetchrow.return_value = {"owner_id": "u1", "updated_at": NOW,
                                  "data": json.dumps({"clubs": []})}
    saved = await UserRepositoryDB(pool).save_profile(profile)
    assert saved.updated_at == NOW
    assert [c.id for c in saved.clubs] == ["driver", "putter"]


@pytest.mark.asyncio
async def test_course_repo_prefers_builtin(mock_pool):
    pool, conn = mock_pool
    repo = CourseRepositoryDB(pool)
    course = await repo.find_course("u1", course_data.HINOKUMA_COUNTRY_CLUB_NAME)
    assert course is course_data.hinokuma_country_club
    conn.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_course_repo_falls_back_to_stored(mock_pool):
    pool, conn = mock_pool
    stored = Course(name="Home", holes=[CourseHole(number=1, par=3, back_tee=150, regular_tee=140)])
    conn.fetchrow.return_value = {"owner_id": "u1", "name": "Home", "data": json.dumps(stored.to_document())}

    course = await CourseRepositoryDB(pool).find_course("u1", "Home")
    assert course == stored

    conn.fetchrow.return_value = None
    assert await CourseRepositoryDB(pool).find_course("u1", "Nowhere") is None


# ================================================================
# DatabasePool
# ================================================================

@pytest.mark.asyncio
async def test_pool_health_check_without_pool():
    assert await DatabasePool().health_check() is False


@pytest.mark.asyncio
async def test_pool_initialize_applies_schema_when_asked(monkeypatch, mock_pool):
    pool, conn = mock_pool
    create_pool = AsyncMock(return_value=pool)
    monkeypatch.setattr("database.connection.asyncpg.create_pool", create_pool)

    database = DatabasePool()
    await database.initialize(Settings(_env_file=None, database_url="postgresql://x/golf", init_schema=True))

    create_pool.assert_awaited_once_with(dsn="postgresql://x/golf", min_size=2, max_size=10)
    assert "CREATE SCHEMA IF NOT EXISTS golf" in conn.execute.call_args[0][0]

    conn.fetchval.return_value = 1
    assert await database.health_check() is True
