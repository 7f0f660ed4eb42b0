"""Deterministic ordering and top-N selection of scored players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from fmscout.models.player import ScoredPlayer


@dataclass(frozen=True)
class RankedPlayer:
    """Player returned from a ranking operation."""

    scored: ScoredPlayer
    rank: int


def rank_key(scored: ScoredPlayer) -> tuple[float, int, str]:
    # score desc, potential gap desc, name asc
    return (-scored.score, -scored.potential_gap, scored.name)


def rank_players(
    scored: Iterable[ScoredPlayer],
    limit: Optional[int] = None,
) -> list[RankedPlayer]:
    """Order players best-first and keep the top ``limit`` (all when unset or <= 0)."""

    ordered = sorted(scored, key=rank_key)
    if limit is not None and limit > 0:
        ordered = ordered[:limit]
    return [RankedPlayer(scored=candidate, rank=index) for index, candidate in enumerate(ordered, start=1)]


__all__ = ["RankedPlayer", "rank_key", "rank_players"]
