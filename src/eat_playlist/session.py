"""Headless game session composing the engine with a playlist feed."""

from __future__ import annotations

import logging

from eat_playlist.config import SessionConfig
from eat_playlist.engine import GridSnakeEngine
from eat_playlist.feed import PlaylistFeed
from eat_playlist.snake import Direction

logger = logging.getLogger(__name__)


class GameSession:
    """One engine plus the content source that refills its target.

    When the snake eats a target the feed skips to the next track and its
    token becomes the new target content. Each call to :meth:`step`
    advances the game by one tick and returns the updated state dictionary.
    """

    def __init__(self, config: SessionConfig) -> None:
        self.config = config
        self.engine = GridSnakeEngine(seed=config.seed)
        self.engine.initialize(config.rows, config.columns, config.cell_size)
        self.feed = PlaylistFeed(config.playlist)
        self.eaten = 0
        if self.feed.current is not None:
            self.engine.set_target_content(self.feed.current)

    def set_heading(self, direction: Direction) -> bool:
        return self.engine.set_heading(direction)

    def push_content(self, content: str) -> bool:
        """Offer externally supplied content; returns whether a new target was placed."""
        return self.engine.set_target_content(content) is not None

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict, with
        ``consumed`` set when the head reached the target on this tick.
        """
        result = self.engine.tick()
        if result.consumed:
            self.eaten += 1
            token = self.feed.advance()
            if token is not None and self.engine.set_target_content(token) is None:
                logger.info("Target kept after eating; no new cell or content.")
        state = self.get_state()
        state["consumed"] = result.consumed
        return state

    def get_state(self) -> dict:
        """Return the full, serializable session state."""
        state = self.engine.get_state()
        state["eaten"] = self.eaten
        state["playlist"] = self.feed.to_dict()
        state["consumed"] = False
        return state
