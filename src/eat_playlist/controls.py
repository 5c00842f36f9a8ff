"""Input mapping from pointer drags to headings."""

from __future__ import annotations

from eat_playlist.snake import Direction

DEFAULT_DRAG_THRESHOLD = 5.0


def direction_from_drag(
    dx: float, dy: float, threshold: float = DEFAULT_DRAG_THRESHOLD,
) -> Direction | None:
    """Map a drag delta to the heading along its dominant axis.

    Returns ``None`` for drags shorter than *threshold* on the dominant axis
    and for perfectly diagonal drags.
    """
    ax, ay = abs(dx), abs(dy)
    if ax > ay and ax > threshold:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    if ay > ax and ay > threshold:
        return Direction.DOWN if dy > 0 else Direction.UP
    return None


_DIRECTION_NAMES: dict[str, Direction] = {
    d.name.lower(): d for d in Direction
}


def parse_direction(name: str) -> Direction | None:
    """Look up a direction by case-insensitive name."""
    return _DIRECTION_NAMES.get(name.strip().lower())
