from datetime import datetime
from pydantic import Field, field_validator, model_validator
from typing import List, Optional
from uuid import uuid4

from .base import BaseGolfModel

DRIVER_ID = "driver"
PUTTER_ID = "putter"


class Club(BaseGolfModel):
    """A club in the player's bag with an optional carry distance."""
    id: str
    name: str = Field(..., min_length=1)
    distance: Optional[int] = Field(None, ge=0)
    is_driver: bool = False
    is_putter: bool = False

    @model_validator(mode='after')
    def validate_role(self):
        if self.is_driver and self.is_putter:
            raise ValueError("A club cannot be both driver and putter")
        return self


def default_driver(distance: Optional[int] = 0) -> Club:
    return Club(id=DRIVER_ID, name="ドライバー", distance=distance, is_driver=True)


def default_putter() -> Club:
    return Club(id=PUTTER_ID, name="パター", distance=None, is_putter=True)


def normalize_clubs(clubs: List[Club]) -> List[Club]:
    """Driver first, putter second, then the rest in saved order.

    Only the driver's distance is taken from the saved driver/putter.
    """
    saved_driver = next((c for c in clubs if c.is_driver), None)
    driver = default_driver(saved_driver.distance or 0 if saved_driver else 0)
    others = [c for c in clubs if not c.is_driver and not c.is_putter]
    return [driver, default_putter(), *others]


class UserProfile(BaseGolfModel):
    """Per-owner profile document holding the club setting."""
    owner_id: str
    clubs: List[Club] = Field(default_factory=list, validate_default=True)
    updated_at: Optional[datetime] = None

    @field_validator('clubs')
    @classmethod
    def ensure_driver_and_putter(cls, v):
        return normalize_clubs(v)

    @property
    def selectable_clubs(self) -> List[Club]:
        """Clubs offered when recording a full shot (putters excluded)."""
        return [c for c in self.clubs if not c.is_putter]

    def get_club(self, club_id: str) -> Optional[Club]:
        return next((c for c in self.clubs if c.id == club_id), None)

    def add_club(self, name: str, distance: Optional[int] = 0) -> Club:
        """Add a club to the bag. The name is required."""
        name = name.strip()
        if not name:
            raise ValueError("Club name is required")
        club = Club(id=uuid4().hex, name=name, distance=distance or 0)
        self.clubs = [*self.clubs, club]
        return club

    def remove_club(self, club_id: str) -> None:
        club = self.get_club(club_id)
        if club is None:
            raise KeyError(club_id)
        if club.is_driver or club.is_putter:
            raise ValueError("The driver and putter cannot be removed")
        self.clubs = [c for c in self.clubs if c.id != club_id]

    def set_distance(self, club_id: str, distance: Optional[int]) -> Optional[str]:
        """Update a club's distance. Returns error message if validation fails."""
        club = self.get_club(club_id)
        if club is None:
            return f"Club {club_id} not found"
        error = club.update_field('distance', distance)
        if error is None:
            self.clubs = list(self.clubs)
        return error
