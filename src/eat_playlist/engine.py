"""Tick-based engine moving a snake around a wrapped grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from eat_playlist import geometry
from eat_playlist.grid import GridConfig
from eat_playlist.snake import (
    OPPOSITES,
    Direction,
    Segment,
    detect_turn,
    rotation_angle,
)
from eat_playlist.target import TargetSpawner

logger = logging.getLogger(__name__)

_START_INDEX = 0
_START_DIRECTION = Direction.RIGHT


@dataclass(frozen=True)
class SnakeSnapshot:
    """Read-only view of the engine after a tick."""

    tick: int
    grid: GridConfig
    segments: tuple[Segment, ...]
    target: Segment | None

    @property
    def head(self) -> Segment:
        return self.segments[0]

    def to_dict(self) -> dict:
        """Serialize the snapshot to a dictionary."""
        return {
            "tick": self.tick,
            "grid": self.grid.to_dict(),
            "snake": [seg.to_dict() for seg in self.segments],
            "target": self.target.to_dict() if self.target else None,
        }


@dataclass(frozen=True)
class TickResult:
    """Outcome of a single :meth:`GridSnakeEngine.tick`."""

    snapshot: SnakeSnapshot
    consumed: bool

    def to_dict(self) -> dict:
        return {**self.snapshot.to_dict(), "consumed": self.consumed}


class GridSnakeEngine:
    """Single-snake engine on a torus grid.

    The snake never collides: walls wrap and the body may cross itself.
    :meth:`initialize` must be called before any other operation and may be
    called again to start over, for instance after a layout change.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.grid: GridConfig | None = None
        self.segments: list[Segment] = []
        self.target: Segment | None = None
        self.heading = _START_DIRECTION
        self.tick_count = 0
        self._spawner: TargetSpawner | None = None

    @property
    def initialized(self) -> bool:
        return self.grid is not None

    @property
    def head(self) -> Segment:
        self._require_grid()
        return self.segments[0]

    def initialize(self, rows: int, columns: int, cell_size: float) -> None:
        """Reset to a single head at index 0 facing right, with no target."""
        grid = GridConfig(rows=rows, columns=columns, cell_size=cell_size)
        self.grid = grid
        self._spawner = TargetSpawner(grid, rng=self.rng)
        self.segments = [
            self._build_segment(
                _START_INDEX, _START_DIRECTION, _START_DIRECTION, None,
            ),
        ]
        self.target = None
        self.heading = _START_DIRECTION
        self.tick_count = 0
        logger.info("Grid initialized (%d×%d, cell=%s).", rows, columns, cell_size)

    def set_target_content(self, content: Any) -> Segment | None:
        """Place a new target for *content* unless it is already the target.

        Returns the new target, or ``None`` when the content is unchanged
        or no free cell is left.
        """
        self._require_grid()
        if self.target is not None and self.target.content == content:
            return None

        assert self._spawner is not None  # noqa: S101
        target = self._spawner.spawn(
            content, (seg.index for seg in self.segments),
        )
        if target is not None:
            self.target = target
        return target

    def set_heading(self, direction: Direction) -> bool:
        """Buffer a heading for the next tick, ignoring 180° reversals.

        A single-segment snake may reverse. The guard compares against the
        pending heading, so two quick perpendicular turns before one tick
        can still fold the head back onto the body. Returns whether the
        heading was accepted.
        """
        self._require_grid()
        if len(self.segments) > 1 and OPPOSITES[direction] == self.heading:
            return False
        self.heading = direction
        return True

    def tick(self) -> TickResult:
        """Advance the snake by one cell and grow it if it reached the target."""
        grid = self._require_grid()
        old = self.segments
        old_head = old[0]

        new_index = grid.move(old_head.index, self.heading)
        moved = [
            self._build_segment(
                new_index, self.heading, old_head.direction,
                old_head.content, lead=True,
            ),
        ]
        # Each body segment takes the place its predecessor had before the tick.
        for leader, seg in zip(old, old[1:]):
            moved.append(
                self._build_segment(
                    leader.index, leader.direction, seg.direction, seg.content,
                ),
            )

        consumed = self.target is not None and new_index == self.target.index
        if consumed:
            tail_direction = old[-1].direction
            moved.append(
                self._build_segment(
                    self.target.index, tail_direction, tail_direction,
                    self.target.content,
                ),
            )
            logger.info(
                "Target consumed at index %d; snake length %d.",
                new_index, len(moved),
            )

        self.segments = moved
        self.tick_count += 1
        return TickResult(snapshot=self.snapshot(), consumed=consumed)

    def snapshot(self) -> SnakeSnapshot:
        """Return the current state without advancing."""
        grid = self._require_grid()
        return SnakeSnapshot(
            tick=self.tick_count,
            grid=grid,
            segments=tuple(self.segments),
            target=self.target,
        )

    def get_state(self) -> dict:
        """Return the full, serializable engine state."""
        return self.snapshot().to_dict()

    def _require_grid(self) -> GridConfig:
        if self.grid is None:
            raise RuntimeError("Engine is not initialized; call initialize() first.")
        return self.grid

    def _build_segment(
        self,
        index: int,
        direction: Direction,
        previous_direction: Direction,
        content: Any,
        lead: bool = False,
    ) -> Segment:
        """Create a segment with its turn and canvas geometry derived."""
        grid = self._require_grid()
        size = grid.cell_size
        rotation = detect_turn(previous_direction, direction)
        position = grid.cell_origin(index)
        if lead:
            position = geometry.padding_adjusted(position, direction, size)
        return Segment(
            index=index,
            direction=direction,
            previous_direction=previous_direction,
            rotation_direction=rotation,
            rotation_angle=rotation_angle(rotation),
            position=position,
            previous_position=geometry.previous_position(
                direction, position, size,
            ),
            pivot_offset=geometry.pivot_offset(
                rotation, direction, position, size,
            ),
            content=content,
        )
