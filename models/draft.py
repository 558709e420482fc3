from datetime import datetime
from pydantic import Field, model_validator
from typing import List, Optional

from .base import BaseGolfModel
from .hole_entry import HoleEntry
from .round_setup import RoundSetup


class RoundDraft(BaseGolfModel):
    """The single in-progress round of one owner (nine holes being entered)."""
    owner_id: str = Field(..., validation_alias="userId", serialization_alias="userId")
    setup: RoundSetup
    holes: List[HoleEntry] = Field(default_factory=list)
    current_hole_index: int = Field(0, ge=0)
    updated_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_current_hole(self):
        if self.holes and self.current_hole_index >= len(self.holes):
            raise ValueError(
                f"current_hole_index {self.current_hole_index} out of range for {len(self.holes)} holes"
            )
        return self

    @property
    def current_hole(self) -> Optional[HoleEntry]:
        if not self.holes:
            return None
        return self.holes[self.current_hole_index]
