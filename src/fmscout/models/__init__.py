"""Shared data models."""

from .player import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    ATTRIBUTE_NAMES,
    SCOREABLE_CATEGORIES,
    Player,
    PositionCategory,
    ScoredPlayer,
)

__all__ = [
    "ATTRIBUTE_MAX",
    "ATTRIBUTE_MIN",
    "ATTRIBUTE_NAMES",
    "SCOREABLE_CATEGORIES",
    "Player",
    "PositionCategory",
    "ScoredPlayer",
]
