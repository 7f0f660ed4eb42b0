"""Canonical player models shared across ingestion, scoring and filtering."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 20

TECHNICAL_ATTRIBUTES = (
    "finishing",
    "first_touch",
    "passing",
    "technique",
    "dribbling",
    "tackling",
)
MENTAL_ATTRIBUTES = (
    "decisions",
    "anticipation",
    "composure",
    "vision",
    "work_rate",
)
PHYSICAL_ATTRIBUTES = (
    "acceleration",
    "pace",
    "stamina",
    "strength",
    "jumping",
)
ATTRIBUTE_NAMES = TECHNICAL_ATTRIBUTES + MENTAL_ATTRIBUTES + PHYSICAL_ATTRIBUTES


class PositionCategory(str, Enum):
    """Scoring profile a raw position label belongs to."""

    GK = "GK"
    CB = "CB"
    FB = "FB"
    DM = "DM"
    CM = "CM"
    WM = "WM"
    AM = "AM"
    ST = "ST"
    UNSCORED = "UNSCORED"

    @property
    def scoreable(self) -> bool:
        return self is not PositionCategory.UNSCORED


SCOREABLE_CATEGORIES = tuple(c for c in PositionCategory if c.scoreable)


def _attribute() -> Any:
    return Field(..., ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)


class Player(BaseModel):
    """Normalized player row from a roster export."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    club: str
    nationality: str
    position: str
    category: PositionCategory
    value: float = Field(..., ge=0.0)
    wage: float = Field(..., ge=0.0)
    current_ability: int = Field(..., ge=0)
    potential_ability: int = Field(..., ge=0)

    finishing: int = _attribute()
    first_touch: int = _attribute()
    passing: int = _attribute()
    technique: int = _attribute()
    dribbling: int = _attribute()
    tackling: int = _attribute()

    decisions: int = _attribute()
    anticipation: int = _attribute()
    composure: int = _attribute()
    vision: int = _attribute()
    work_rate: int = _attribute()

    acceleration: int = _attribute()
    pace: int = _attribute()
    stamina: int = _attribute()
    strength: int = _attribute()
    jumping: int = _attribute()

    model_config = ConfigDict(frozen=True)

    def attributes(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}

    @property
    def potential_gap(self) -> int:
        return self.potential_ability - self.current_ability


class ScoredPlayer(BaseModel):
    """Player paired with its composite score."""

    player: Player
    score: float
    potential_gap: int
    scoreable: bool = True

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def category(self) -> PositionCategory:
        return self.player.category
