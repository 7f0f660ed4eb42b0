"""Score player chunks across worker processes."""

from __future__ import annotations

import logging
import multiprocessing as mp
import os
import queue as queue_module
import time
from typing import Callable, List, Optional, Sequence, TypeVar

from fmscout.config.weights import WeightTable
from fmscout.models.player import Player, ScoredPlayer
from fmscout.scoring.engine import DEFAULT_CONSTANTS, ScoringConstants, score_players


logger = logging.getLogger(__name__)

_WORKERS_ENV = "FMSCOUT_WORKERS"
_PARALLEL_MIN_ROWS_ENV = "FMSCOUT_PARALLEL_MIN_ROWS"

_PARALLEL_MIN_ROWS_DEFAULT = 2000
_POLL_INTERVAL_SECONDS = 0.1

T = TypeVar("T")


class ScoringDispatchError(RuntimeError):
    """Raised when a scoring worker fails."""


class ScoringCancelled(RuntimeError):
    """Raised when scoring is stopped before every chunk finished."""


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_workers() -> int:
    return _env_int(_WORKERS_ENV, os.cpu_count() or 1, min_value=1)


def default_parallel_min_rows() -> int:
    return _env_int(_PARALLEL_MIN_ROWS_ENV, _PARALLEL_MIN_ROWS_DEFAULT, min_value=0)


def chunk_contiguous(items: Sequence[T], parts: int) -> List[List[T]]:
    """Split items into at most ``parts`` contiguous, near-equal, non-empty chunks."""

    items = list(items)
    if not items:
        return []
    parts = max(1, min(parts, len(items)))
    size, extra = divmod(len(items), parts)
    chunks: List[List[T]] = []
    start = 0
    for index in range(parts):
        end = start + size + (1 if index < extra else 0)
        chunks.append(items[start:end])
        start = end
    return chunks


class ScoringJobConfig:
    def __init__(self, job_id: int, players: list[Player], weights: WeightTable, constants: ScoringConstants):
        self.job_id = job_id
        self.players = players
        self.weights = weights
        self.constants = constants


class ScoringJobResult:
    def __init__(self, job_id: int, scored: list[ScoredPlayer], error: str | None = None):
        self.job_id = job_id
        self.scored = scored
        self.error = error


def _run_scoring_job(config: ScoringJobConfig) -> ScoringJobResult:
    return ScoringJobResult(config.job_id, score_players(config.players, config.weights, config.constants))


def _scoring_worker(config: ScoringJobConfig, queue: mp.Queue) -> None:
    try:
        queue.put(_run_scoring_job(config))
    except Exception as exc:  # reported to the parent process
        queue.put(ScoringJobResult(config.job_id, [], error=f"{type(exc).__name__}: {exc}"))


def score_players_parallel(
    players: Sequence[Player],
    weights: WeightTable,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
    *,
    workers: Optional[int] = None,
    parallel_min_rows: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    progress_cb: Optional[Callable[[int, int], None]] = None,
) -> List[ScoredPlayer]:
    """Score players in contiguous chunks and merge them back in input order.

    Chunk results arrive in completion order and are slotted by job id, so the
    merged list never depends on scheduling. If ``should_stop`` returns True
    while chunks are outstanding, workers are terminated and
    :class:`ScoringCancelled` is raised; partial results are discarded.
    ``progress_cb(scored, total)`` is called after each chunk completes.
    """

    players = list(players)
    workers = default_workers() if workers is None else max(1, workers)
    min_rows = default_parallel_min_rows() if parallel_min_rows is None else max(0, parallel_min_rows)

    if workers == 1 or len(players) < max(min_rows, 2):
        logger.info("Scoring %s players sequentially", len(players))
        scored = score_players(players, weights, constants)
        if progress_cb is not None:
            progress_cb(len(scored), len(players))
        return scored

    chunks = chunk_contiguous(players, workers)
    run_start = time.perf_counter()
    ctx = mp.get_context("spawn")
    queue: mp.Queue = ctx.Queue()
    processes: dict[int, mp.Process] = {}
    results: dict[int, list[ScoredPlayer]] = {}
    done = 0

    try:
        for job_id, chunk in enumerate(chunks):
            if should_stop is not None and should_stop():
                raise ScoringCancelled(f"Scoring cancelled after dispatching {job_id}/{len(chunks)} chunks")
            config = ScoringJobConfig(job_id, chunk, weights, constants)
            logger.info("Dispatching chunk %s – %s players", job_id, len(chunk))
            proc = ctx.Process(target=_scoring_worker, args=(config, queue))
            proc.start()
            processes[job_id] = proc

        while len(results) < len(chunks):
            if should_stop is not None and should_stop():
                raise ScoringCancelled(
                    f"Scoring cancelled with {len(chunks) - len(results)} chunk(s) outstanding"
                )
            try:
                outcome: ScoringJobResult = queue.get(timeout=_POLL_INTERVAL_SECONDS)
            except queue_module.Empty:
                dead = [
                    job_id
                    for job_id, proc in processes.items()
                    if job_id not in results and not proc.is_alive() and proc.exitcode not in (0, None)
                ]
                if dead:
                    raise ScoringDispatchError(
                        f"Scoring worker for chunk {dead[0]} exited with code {processes[dead[0]].exitcode}"
                    )
                continue
            if outcome.error:
                raise ScoringDispatchError(f"Chunk {outcome.job_id} failed: {outcome.error}")
            results[outcome.job_id] = outcome.scored
            done += len(outcome.scored)
            if progress_cb is not None:
                progress_cb(done, len(players))
            proc = processes.get(outcome.job_id)
            if proc is not None:
                proc.join()
            logger.info(
                "Chunk %s completed – %s players (%s/%s chunks, total %.2fs)",
                outcome.job_id,
                len(outcome.scored),
                len(results),
                len(chunks),
                time.perf_counter() - run_start,
            )
    finally:
        for proc in processes.values():
            if proc.is_alive():
                proc.terminate()
            proc.join()

    merged: list[ScoredPlayer] = []
    for job_id in range(len(chunks)):
        merged.extend(results[job_id])
    return merged
