"""Pure canvas geometry used to animate segments between cells.

All coordinates are in the renderer's units with the origin at the top-left
corner of the grid and ``y`` growing downward.
"""

from __future__ import annotations

from eat_playlist.snake import Direction, Point, RotationDirection

# Fraction of a cell the head leads into the cell it is entering.
PADDING_FRACTION = 0.1

# Pivot corner per turn, as (x, y) multiples of the cell size added to the
# segment position.
_PIVOT_CORNERS: dict[tuple[RotationDirection, Direction], tuple[int, int]] = {
    (RotationDirection.CLOCKWISE, Direction.RIGHT): (0, 1),
    (RotationDirection.CLOCKWISE, Direction.DOWN): (0, 0),
    (RotationDirection.CLOCKWISE, Direction.LEFT): (1, 0),
    (RotationDirection.CLOCKWISE, Direction.UP): (1, 1),
    (RotationDirection.COUNTER_CLOCKWISE, Direction.LEFT): (1, 1),
    (RotationDirection.COUNTER_CLOCKWISE, Direction.DOWN): (1, 0),
    (RotationDirection.COUNTER_CLOCKWISE, Direction.RIGHT): (0, 0),
    (RotationDirection.COUNTER_CLOCKWISE, Direction.UP): (0, 1),
}


def _shift(position: Point, direction: Direction, distance: float) -> Point:
    dr, dc = direction.value
    return Point(position.x + dc * distance, position.y + dr * distance)


def cell_origin(index: int, columns: int, cell_size: float) -> Point:
    """Top-left coordinate of the cell at a row-major *index*."""
    row, col = divmod(index, columns)
    return Point(col * cell_size, row * cell_size)


def padding_adjusted(
    position: Point, direction: Direction, cell_size: float,
) -> Point:
    """Nudge *position* a tenth of a cell along *direction*."""
    return _shift(position, direction, cell_size * PADDING_FRACTION)


def previous_position(
    direction: Direction, position: Point, cell_size: float,
) -> Point:
    """Where a segment moving along *direction* was one cell ago."""
    return _shift(position, direction, -cell_size)


def pivot_offset(
    rotation: RotationDirection,
    direction: Direction,
    position: Point,
    cell_size: float,
) -> Point:
    """Corner of the cell that stays fixed while a turn sprite rotates.

    ``NO_ROTATION`` pivots on *position* itself.
    """
    corner = _PIVOT_CORNERS.get((rotation, direction))
    if corner is None:
        return position
    cx, cy = corner
    return Point(position.x + cx * cell_size, position.y + cy * cell_size)
