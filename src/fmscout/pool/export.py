"""CSV export helpers for ranked shortlists."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from fmscout.pool.ranking import RankedPlayer


SHORTLIST_HEADERS: tuple[str, ...] = (
    "rank",
    "name",
    "club",
    "nationality",
    "position",
    "category",
    "age",
    "value",
    "wage",
    "current_ability",
    "potential_ability",
    "potential_gap",
    "score",
)


def export_shortlist_to_csv(ranked: Sequence[RankedPlayer]) -> str:
    """Render a ranked shortlist as CSV text, preserving the given order."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(SHORTLIST_HEADERS)
    for entry in ranked:
        player = entry.scored.player
        writer.writerow([
            entry.rank,
            player.name,
            player.club,
            player.nationality,
            player.position,
            player.category.value,
            player.age,
            f"{player.value:.0f}",
            f"{player.wage:.0f}",
            player.current_ability,
            player.potential_ability,
            entry.scored.potential_gap,
            f"{entry.scored.score:.4f}",
        ])
    return buffer.getvalue()


__all__ = ["SHORTLIST_HEADERS", "export_shortlist_to_csv"]
