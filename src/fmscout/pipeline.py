"""End-to-end scouting run: load, score, filter, rank."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from fmscout.config.weights import DEFAULT_WEIGHTS, WeightTable
from fmscout.ingest.records import ParseResult, RowFailure, load_roster_csv, parse_rows
from fmscout.models.player import Player
from fmscout.pool.filtering import FilterCriteria, FilterSummary, filter_players, summarize
from fmscout.pool.ranking import RankedPlayer, rank_players
from fmscout.scoring.dispatch import score_players_parallel
from fmscout.scoring.engine import DEFAULT_CONSTANTS, ScoringConstants


logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    OK = "ok"
    NO_MATCHES = "no_matches"


@dataclass(frozen=True)
class RunSummary:
    rows_read: int
    rows_rejected: int
    rejection_reasons: dict[str, int]
    unscored_players: int
    players_scored: int
    matches: int
    shortlisted: int
    empty_input: bool = False

    @property
    def status(self) -> RunStatus:
        return RunStatus.OK if self.matches else RunStatus.NO_MATCHES

    def as_dict(self) -> dict[str, object]:
        return {
            "rows_read": self.rows_read,
            "rows_rejected": self.rows_rejected,
            "rejection_reasons": dict(self.rejection_reasons),
            "unscored_players": self.unscored_players,
            "players_scored": self.players_scored,
            "matches": self.matches,
            "shortlisted": self.shortlisted,
            "empty_input": self.empty_input,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ScoutReport:
    shortlist: List[RankedPlayer]
    summary: RunSummary
    failures: List[RowFailure] = field(default_factory=list)
    filter_summary: Optional[FilterSummary] = None


def find_gems(
    players: Sequence[Player],
    criteria: FilterCriteria,
    *,
    weights: WeightTable = DEFAULT_WEIGHTS,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
    limit: Optional[int] = None,
    workers: Optional[int] = None,
    parallel_min_rows: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    progress_cb: Optional[Callable[[int, int], None]] = None,
) -> tuple[List[RankedPlayer], FilterSummary]:
    """Score, filter and rank already-parsed players."""

    scored = score_players_parallel(
        players,
        weights,
        constants,
        workers=workers,
        parallel_min_rows=parallel_min_rows,
        should_stop=should_stop,
        progress_cb=progress_cb,
    )
    matches = filter_players(scored, criteria)
    ranked = rank_players(matches, limit=limit)
    logger.info("%s/%s scored players matched the filters", len(matches), len(scored))
    return ranked, summarize(available=scored, selected=matches)


def run_scout(
    path: Path,
    criteria: FilterCriteria,
    *,
    weights: WeightTable = DEFAULT_WEIGHTS,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
    limit: Optional[int] = None,
    workers: Optional[int] = None,
    parallel_min_rows: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    progress_cb: Optional[Callable[[int, int], None]] = None,
) -> ScoutReport:
    """Run the whole pipeline for one roster export.

    Raises :class:`fmscout.ingest.FileError` when the file cannot be read;
    per-row problems end up in the report instead.
    """

    loaded = load_roster_csv(path)
    parsed: ParseResult = parse_rows(loaded.rows)
    ranked, filter_summary = find_gems(
        parsed.players,
        criteria,
        weights=weights,
        constants=constants,
        limit=limit,
        workers=workers,
        parallel_min_rows=parallel_min_rows,
        should_stop=should_stop,
        progress_cb=progress_cb,
    )
    reasons = Counter(failure.kind for failure in parsed.failures)
    summary = RunSummary(
        rows_read=parsed.rows_read,
        rows_rejected=parsed.rows_rejected,
        rejection_reasons=dict(reasons),
        unscored_players=sum(1 for player in parsed.players if not player.category.scoreable),
        players_scored=len(parsed.players),
        matches=filter_summary.selected_players,
        shortlisted=len(ranked),
        empty_input=loaded.empty,
    )
    return ScoutReport(
        shortlist=ranked,
        summary=summary,
        failures=list(parsed.failures),
        filter_summary=filter_summary,
    )
