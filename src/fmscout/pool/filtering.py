"""Predicates for narrowing a scored player pool."""

from __future__ import annotations

import math
from dataclasses import dataclass
from statistics import fmean, median, pstdev
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence

from fmscout.config.weights import ConfigurationError, resolve_position_filter
from fmscout.models.player import PositionCategory, ScoredPlayer


VALUE_UNIT = 1_000_000.0


@dataclass(frozen=True)
class FilterCriteria:
    """Filtering configuration for a scored pool. ``None`` disables a predicate."""

    positions: Optional[FrozenSet[PositionCategory]] = None
    max_age: Optional[int] = None
    max_value: Optional[float] = None
    min_potential: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_age is not None and self.max_age < 0:
            raise ConfigurationError(f"max_age must be non-negative, got {self.max_age}")
        if self.max_value is not None and not (math.isfinite(self.max_value) and self.max_value >= 0):
            raise ConfigurationError(f"max_value must be finite and non-negative, got {self.max_value}")
        if self.min_potential is not None and self.min_potential < 0:
            raise ConfigurationError(f"min_potential must be non-negative, got {self.min_potential}")
        if self.positions is not None and PositionCategory.UNSCORED in self.positions:
            raise ConfigurationError("UNSCORED cannot be requested as a position")

    @classmethod
    def from_options(
        cls,
        *,
        position: Optional[str],
        max_age: Optional[int] = 23,
        max_value_millions: Optional[float] = 5.0,
        min_potential: Optional[int] = 130,
        groups: Optional[Mapping[str, FrozenSet[PositionCategory]]] = None,
    ) -> "FilterCriteria":
        """Build criteria from CLI-style options; value is given in millions.

        Passing ``None`` for a threshold disables that predicate.
        """

        positions = resolve_position_filter(position, groups) if position is not None else None
        if max_value_millions is not None and not (
            math.isfinite(max_value_millions) and max_value_millions >= 0
        ):
            raise ConfigurationError(f"max_value must be finite and non-negative, got {max_value_millions}")
        max_value = max_value_millions * VALUE_UNIT if max_value_millions is not None else None
        return cls(
            positions=positions,
            max_age=max_age,
            max_value=max_value,
            min_potential=min_potential,
        )


@dataclass(frozen=True)
class FilterSummary:
    """Aggregate stats for a filtered selection."""

    available_players: int
    selected_players: int
    score_mean: float | None
    score_median: float | None
    score_std: float | None


def passes_criteria(scored: ScoredPlayer, criteria: FilterCriteria) -> bool:
    if not scored.scoreable:
        return False
    player = scored.player
    if criteria.positions is not None and player.category not in criteria.positions:
        return False
    if criteria.max_age is not None and player.age > criteria.max_age:
        return False
    if criteria.max_value is not None and player.value > criteria.max_value:
        return False
    if criteria.min_potential is not None and player.potential_ability < criteria.min_potential:
        return False
    return True


def filter_players(
    scored: Iterable[ScoredPlayer],
    criteria: FilterCriteria,
) -> list[ScoredPlayer]:
    """Keep players passing every enabled predicate, preserving input order."""

    return [candidate for candidate in scored if passes_criteria(candidate, criteria)]


def summarize(
    *,
    available: Sequence[ScoredPlayer],
    selected: Sequence[ScoredPlayer],
) -> FilterSummary:
    scores = [candidate.score for candidate in selected]
    if scores:
        mean = fmean(scores)
        med = median(scores)
        std = pstdev(scores) if len(scores) > 1 else 0.0
    else:
        mean = med = std = None
    return FilterSummary(
        available_players=len(available),
        selected_players=len(selected),
        score_mean=mean,
        score_median=med,
        score_std=std,
    )


__all__ = [
    "FilterCriteria",
    "FilterSummary",
    "VALUE_UNIT",
    "filter_players",
    "passes_criteria",
    "summarize",
]
