"""Target placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import numpy as np

from eat_playlist.snake import Direction, RotationDirection, Segment

if TYPE_CHECKING:
    from eat_playlist.grid import GridConfig

logger = logging.getLogger(__name__)


class TargetSpawner:
    """Places targets on cells the snake does not occupy.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        grid: GridConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, content: Any, occupied: Iterable[int]) -> Segment | None:
        """Build a target carrying *content* on a random free cell.

        Returns ``None`` when every cell is occupied.
        """
        free = self.grid.free_indices(occupied)
        if free.size == 0:
            logger.warning("No free cells available for target placement.")
            return None

        index = int(self.rng.choice(free))
        position = self.grid.cell_origin(index)
        logger.debug("Target placed at index %d.", index)
        return Segment(
            index=index,
            direction=Direction.RIGHT,
            previous_direction=Direction.RIGHT,
            rotation_direction=RotationDirection.NO_ROTATION,
            rotation_angle=0.0,
            position=position,
            previous_position=position,
            pivot_offset=position,
            content=content,
        )
