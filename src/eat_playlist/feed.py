"""Playlist feed supplying target content as the snake eats."""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class PlaylistFeed:
    """Cycles through content tokens, one per eaten target.

    Tokens are opaque to the engine; typically album-art URIs of the
    tracks in a playlist.
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self.tokens: list[str] = list(tokens)
        self.position = 0

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def current(self) -> str | None:
        """Token of the track currently playing, if any."""
        if not self.tokens:
            return None
        return self.tokens[self.position]

    def advance(self) -> str | None:
        """Skip to the next token, wrapping to the start of the playlist."""
        if not self.tokens:
            return None
        self.position = (self.position + 1) % len(self.tokens)
        logger.debug("Playlist advanced to position %d.", self.position)
        return self.tokens[self.position]

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "length": len(self.tokens),
            "current": self.current,
        }
