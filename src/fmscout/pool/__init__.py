"""Player pool utilities (filtering, ranking, export)."""

from .export import export_shortlist_to_csv
from .filtering import (
    FilterCriteria,
    FilterSummary,
    filter_players,
    passes_criteria,
    summarize,
)
from .ranking import RankedPlayer, rank_key, rank_players

__all__ = [
    "FilterCriteria",
    "FilterSummary",
    "RankedPlayer",
    "export_shortlist_to_csv",
    "filter_players",
    "passes_criteria",
    "rank_key",
    "rank_players",
    "summarize",
]
