"""The score-entry flow for one owner.

The draft is updated in memory first and then written to storage by a
background task. A failed write is logged; the in-memory draft is kept.
A new session reloads the draft from storage, so callers that hand off
to another session (one per HTTP request) must flush() first.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Set

from pydantic import ValidationError

from analytics.advice import generate_advice
from analytics.recommendation import recommend_club
from database.db_manager import DatabaseManager
from database.exceptions import STORAGE_ERRORS
from models import Course, FinalizedRound, HoleEntry, RoundDraft, RoundSetup
from scoring.aggregator import finalize_round, incomplete_holes
from scoring.draft import initialize_round

logger = logging.getLogger(__name__)


class NoActiveDraftError(LookupError):
    """The owner has no round in progress."""


class IncompleteRoundError(ValueError):
    """Finalize was requested while holes are still empty."""

    def __init__(self, hole_numbers: List[int]):
        self.hole_numbers = hole_numbers
        super().__init__(f"Holes not entered yet: {hole_numbers}")


class RoundSession:
    """Round entry for a single owner.

    Usage:
        session = RoundSession(owner_id, db_manager)
        await session.open()
        session.mutate_hole(0, add_stroke)
        saved = await session.finalize()
    """

    def __init__(self, owner_id: str, db: DatabaseManager, *, history_limit: int = 10):
        self.owner_id = owner_id
        self._db = db
        self._history_limit = history_limit
        self.draft: Optional[RoundDraft] = None
        self.history: List[FinalizedRound] = []
        self._pending: Set[asyncio.Task] = set()

    # ================================================================
    # Loading (failures degrade to empty values)
    # ================================================================

    async def open(self) -> Optional[RoundDraft]:
        """Load recent history and restore any draft in progress."""
        self.history = await self.load_history()
        return await self.resume()

    async def load_history(self) -> List[FinalizedRound]:
        try:
            return await self._db.rounds.get_rounds_for_user(
                self.owner_id, limit=self._history_limit
            )
        except (*STORAGE_ERRORS, ValidationError):
            logger.warning("Could not load round history for %s", self.owner_id, exc_info=True)
            return []

    async def resume(self) -> Optional[RoundDraft]:
        try:
            draft = await self._db.drafts.load_draft(self.owner_id)
        except (*STORAGE_ERRORS, ValidationError):
            logger.warning("Could not restore draft for %s", self.owner_id, exc_info=True)
            return None
        if draft is not None and self._is_orphaned(draft):
            logger.info("Discarding draft for %s already saved as a round", self.owner_id)
            await self._clear_quietly()
            draft = None
        if draft is not None:
            logger.info("Restored draft for %s at hole index %d", self.owner_id, draft.current_hole_index)
        self.draft = draft
        return draft

    def _is_orphaned(self, draft: RoundDraft) -> bool:
        """A draft left behind when finalize stopped between its two writes."""
        if not self.history or draft.updated_at is None:
            return False
        latest = self.history[0]
        return (
            latest.created_at is not None
            and latest.created_at >= draft.updated_at
            and latest.date == draft.setup.date
            and latest.course_name == draft.setup.course_name
        )

    async def find_course(self, course_name: str) -> Optional[Course]:
        try:
            return await self._db.courses.find_course(self.owner_id, course_name)
        except (*STORAGE_ERRORS, ValidationError):
            logger.warning("Could not load course %r", course_name, exc_info=True)
            return None

    # ================================================================
    # Hints
    # ================================================================

    def advice(self) -> str:
        return generate_advice(self.history)

    def recommend_club(self, hole_number: int, stroke_number: int) -> Optional[str]:
        return recommend_club(self.history, hole_number, stroke_number)

    # ================================================================
    # Draft changes
    # ================================================================

    async def start(self, setup: RoundSetup) -> RoundDraft:
        """Begin a new round, replacing any draft in progress."""
        course = await self.find_course(setup.course_name)
        self.draft = RoundDraft(
            owner_id=self.owner_id,
            setup=setup,
            holes=initialize_round(setup, course),
            current_hole_index=0,
        )
        self._persist()
        return self.draft

    def _require_draft(self) -> RoundDraft:
        if self.draft is None:
            raise NoActiveDraftError(f"No round in progress for {self.owner_id}")
        return self.draft

    def mutate_hole(
        self, hole_index: int, mutator: Callable[..., HoleEntry], *args, **kwargs
    ) -> HoleEntry:
        """Apply a scoring.draft mutator to one hole and persist the draft."""
        draft = self._require_draft()
        if not 0 <= hole_index < len(draft.holes):
            raise IndexError(f"Hole index {hole_index} out of range")
        holes = list(draft.holes)
        holes[hole_index] = mutator(holes[hole_index], *args, **kwargs)
        self.draft = draft.model_copy(update={"holes": holes})
        self._persist()
        return holes[hole_index]

    def go_to_hole(self, hole_index: int) -> RoundDraft:
        """Move to a hole, clamped to the first and last hole."""
        draft = self._require_draft()
        clamped = max(0, min(hole_index, len(draft.holes) - 1))
        if clamped != draft.current_hole_index:
            self.draft = draft.model_copy(update={"current_hole_index": clamped})
            self._persist()
        return self.draft

    def next_hole(self) -> RoundDraft:
        return self.go_to_hole(self._require_draft().current_hole_index + 1)

    def previous_hole(self) -> RoundDraft:
        return self.go_to_hole(self._require_draft().current_hole_index - 1)

    # ================================================================
    # Finish
    # ================================================================

    async def finalize(self, *, allow_incomplete: bool = False) -> FinalizedRound:
        """Store the round, then delete the draft.

        The two writes are not atomic: if the delete fails the draft stays
        behind and is discarded on the next open().
        """
        draft = self._require_draft()
        missing = [h.hole_number for h in incomplete_holes(draft.holes)]
        if missing and not allow_incomplete:
            raise IncompleteRoundError(missing)

        await self.flush()
        saved = await self._db.rounds.create_round(
            finalize_round(draft, created_at=datetime.now(timezone.utc))
        )
        await self._clear_quietly()
        self.draft = None
        self.history = [saved, *self.history][: self._history_limit]
        return saved

    async def abandon(self) -> None:
        """Throw away the draft in progress."""
        await self.flush()
        await self._db.drafts.clear_draft(self.owner_id)
        self.draft = None

    async def _clear_quietly(self) -> None:
        try:
            await self._db.drafts.clear_draft(self.owner_id)
        except STORAGE_ERRORS:
            logger.error("Could not delete draft for %s", self.owner_id, exc_info=True)

    # ================================================================
    # Background persistence
    # ================================================================

    def _persist(self) -> None:
        snapshot = self.draft
        task = asyncio.create_task(self._save(snapshot))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _save(self, snapshot: RoundDraft) -> None:
        try:
            await self._db.drafts.save_draft(self.owner_id, snapshot)
        except STORAGE_ERRORS:
            logger.error("Could not save draft for %s", self.owner_id, exc_info=True)

    async def flush(self) -> None:
        """Wait for background draft writes started so far."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
