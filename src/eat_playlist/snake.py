"""Snake segments, headings, and turn classification."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, NamedTuple


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)


class RotationDirection(enum.Enum):
    """Classification of a 90° heading change."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"
    NO_ROTATION = "no_rotation"


# Pairs that would cause an instant 180° reversal.
OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Heading that follows each direction when turning clockwise.
_CLOCKWISE_NEXT: dict[Direction, Direction] = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}

_ROTATION_ANGLES: dict[RotationDirection, float] = {
    RotationDirection.CLOCKWISE: 90.0,
    RotationDirection.COUNTER_CLOCKWISE: -90.0,
    RotationDirection.NO_ROTATION: 0.0,
}


def detect_turn(previous: Direction, current: Direction) -> RotationDirection:
    """Classify the transition from *previous* to *current* heading."""
    if _CLOCKWISE_NEXT[previous] == current:
        return RotationDirection.CLOCKWISE
    if _CLOCKWISE_NEXT[current] == previous:
        return RotationDirection.COUNTER_CLOCKWISE
    return RotationDirection.NO_ROTATION


def rotation_angle(rotation: RotationDirection) -> float:
    """Return the sprite rotation in degrees for a turn classification."""
    return _ROTATION_ANGLES[rotation]


class Point(NamedTuple):
    """Canvas coordinate; ``y`` grows downward."""

    x: float
    y: float


@dataclass(frozen=True)
class Segment:
    """One cell-occupying unit of the snake, including the head.

    Geometry fields are derived from ``index``, ``direction`` and the grid's
    cell size when the segment is built; they are never mutated afterwards.
    """

    index: int
    direction: Direction
    previous_direction: Direction
    rotation_direction: RotationDirection
    rotation_angle: float
    position: Point
    previous_position: Point
    pivot_offset: Point
    content: Any = None

    def to_dict(self) -> dict:
        """Serialize segment state to a dictionary."""
        return {
            "index": self.index,
            "direction": self.direction.name.lower(),
            "previous_direction": self.previous_direction.name.lower(),
            "rotation_direction": self.rotation_direction.value,
            "rotation_angle": self.rotation_angle,
            "position": list(self.position),
            "previous_position": list(self.previous_position),
            "pivot_offset": list(self.pivot_offset),
            "content": self.content,
        }
