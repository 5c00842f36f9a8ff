"""Performance benchmarking utilities for engine throughput."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from eat_playlist.config import SessionConfig
from eat_playlist.session import GameSession
from eat_playlist.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_ticks: int
    final_length: int
    wall_time_seconds: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s | "
            f"{self.ticks_per_second:.1f} ticks/s, "
            f"final length {self.final_length}"
        )


def benchmark_ticks(
    *,
    num_ticks: int = 10_000,
    rows: int = 20,
    columns: int = 12,
    playlist_size: int = 50,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw tick throughput with random headings."""
    config = SessionConfig(
        rows=rows,
        columns=columns,
        seed=seed,
        playlist=tuple(f"track-{i}" for i in range(playlist_size)),
    )
    session = GameSession(config)
    rng = np.random.default_rng(seed)
    headings = rng.integers(len(_DIRECTIONS), size=num_ticks)

    start = time.perf_counter()
    for h in headings:
        session.set_heading(_DIRECTIONS[int(h)])
        session.step()
    elapsed = time.perf_counter() - start

    result = BenchmarkResult(
        total_ticks=num_ticks,
        final_length=len(session.engine.segments),
        wall_time_seconds=elapsed,
        ticks_per_second=num_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
