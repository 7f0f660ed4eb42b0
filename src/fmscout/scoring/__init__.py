"""Composite scoring and parallel dispatch."""

from .dispatch import (
    ScoringCancelled,
    ScoringDispatchError,
    chunk_contiguous,
    score_players_parallel,
)
from .engine import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    DEFAULT_CONSTANTS,
    ScoringConstants,
    score,
    score_player,
    score_players,
    weighted_attribute_average,
)

__all__ = [
    "DEFAULT_ALPHA",
    "DEFAULT_BETA",
    "DEFAULT_CONSTANTS",
    "ScoringCancelled",
    "ScoringConstants",
    "ScoringDispatchError",
    "chunk_contiguous",
    "score",
    "score_player",
    "score_players",
    "score_players_parallel",
    "weighted_attribute_average",
]
