"""Position-weighted composite scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping

from fmscout.config.weights import ConfigurationError, WeightTable
from fmscout.models.player import ATTRIBUTE_NAMES, Player, ScoredPlayer


# An all-20 player contributes 50 from attributes and a 200 potential adds
# another 50, keeping scores on a 0-100 scale.
DEFAULT_ALPHA = 2.5
DEFAULT_BETA = 0.25


@dataclass(frozen=True)
class ScoringConstants:
    """Blend between the weighted attribute average and potential ability."""

    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA

    def __post_init__(self) -> None:
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be finite and non-negative, got {value!r}")


DEFAULT_CONSTANTS = ScoringConstants()


def weighted_attribute_average(player: Player, vector: Mapping[str, float]) -> float:
    total_weight = sum(vector.get(name, 0.0) for name in ATTRIBUTE_NAMES)
    if total_weight <= 0:
        return 0.0
    weighted = sum(getattr(player, name) * vector.get(name, 0.0) for name in ATTRIBUTE_NAMES)
    return weighted / total_weight


def score(
    player: Player,
    weights: WeightTable,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
) -> float:
    """Composite score for a player using the vector of its own category."""

    if not player.category.scoreable:
        return 0.0
    average = weighted_attribute_average(player, weights.vector(player.category))
    return constants.alpha * average + constants.beta * player.potential_ability


def score_player(
    player: Player,
    weights: WeightTable,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
) -> ScoredPlayer:
    return ScoredPlayer(
        player=player,
        score=score(player, weights, constants),
        potential_gap=player.potential_gap,
        scoreable=player.category.scoreable,
    )


def score_players(
    players: Iterable[Player],
    weights: WeightTable,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
) -> List[ScoredPlayer]:
    return [score_player(player, weights, constants) for player in players]
