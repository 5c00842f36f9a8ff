"""EatPlaylist: snake-on-a-torus engine fed by playlist album art."""

from eat_playlist.config import SessionConfig
from eat_playlist.controls import direction_from_drag
from eat_playlist.engine import GridSnakeEngine, SnakeSnapshot, TickResult
from eat_playlist.feed import PlaylistFeed
from eat_playlist.grid import GridConfig
from eat_playlist.session import GameSession
from eat_playlist.snake import Direction, Point, RotationDirection, Segment

__all__ = [
    "Direction",
    "GameSession",
    "GridConfig",
    "GridSnakeEngine",
    "PlaylistFeed",
    "Point",
    "RotationDirection",
    "Segment",
    "SessionConfig",
    "SnakeSnapshot",
    "TickResult",
    "direction_from_drag",
]
