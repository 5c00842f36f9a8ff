"""In-memory session registry and fixed-interval async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from eat_playlist.config import SessionConfig
from eat_playlist.server.models import SessionStatus, SessionSummary
from eat_playlist.session import GameSession
from eat_playlist.snake import Direction

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class SessionInstance:
    """All state for a single hosted session."""

    session_id: str
    config: SessionConfig
    game: GameSession
    status: SessionStatus = SessionStatus.ACTIVE
    viewers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            rows=self.config.rows,
            columns=self.config.columns,
            tick_rate_ms=self.config.tick_rate_ms,
            length=len(self.game.engine.segments),
        )


class SessionManager:
    """Central registry owning one engine per session."""

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._sessions: dict[str, SessionInstance] = {}
        self._max_sessions = max_sessions

    def create_session(self, config: SessionConfig) -> SessionInstance:
        """Create a session and start its tick loop.

        Must be called from within a running event loop.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Stop a session first.")

        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(
            session_id=session_id,
            config=config,
            game=GameSession(config),
        )
        self._sessions[session_id] = instance
        instance._task = asyncio.create_task(self._tick_loop(instance))
        logger.info(
            "Session %s started (%d×%d, tick=%dms).",
            session_id, config.rows, config.columns, config.tick_rate_ms,
        )
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def _require(self, session_id: str) -> SessionInstance:
        instance = self._sessions.get(session_id)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        return instance

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def set_heading(self, session_id: str, direction: Direction) -> bool:
        """Buffer a heading for the next tick of a session."""
        instance = self._require(session_id)
        async with instance.lock:
            return instance.game.set_heading(direction)

    async def push_content(self, session_id: str, content: str) -> int | None:
        """Offer new target content; returns the target index if one was placed."""
        instance = self._require(session_id)
        async with instance.lock:
            if not instance.game.push_content(content):
                return None
            target = instance.game.engine.target
            return target.index if target is not None else None

    async def stop_session(self, session_id: str) -> None:
        """Stop the tick loop, close viewers, and drop the session."""
        instance = self._sessions.pop(session_id, None)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        instance.status = SessionStatus.STOPPED
        task = instance._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(instance)
        logger.info("Session %s stopped.", session_id)

    async def _tick_loop(self, instance: SessionInstance) -> None:
        """Tick on a fixed cadence, broadcasting state each tick.

        Deadlines advance by a constant interval, so a slow tick or
        broadcast does not shift later ticks.
        """
        loop = asyncio.get_running_loop()
        interval = instance.config.tick_interval
        deadline = loop.time()
        try:
            while instance.status == SessionStatus.ACTIVE:
                deadline += interval
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                async with instance.lock:
                    state = instance.game.step()
                await self._broadcast(instance, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", instance.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", instance.session_id)
            instance.status = SessionStatus.STOPPED
            await self._close_connections(instance)

    async def _close_connections(self, instance: SessionInstance) -> None:
        for ws in list(instance.viewers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session stopped.")
            except Exception:
                logger.warning(
                    "Failed closing viewer socket in session %s.",
                    instance.session_id,
                )
        instance.viewers.clear()

    async def _broadcast(self, instance: SessionInstance, state: dict) -> None:
        """Send session state to all connected viewers."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(instance.viewers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in instance.viewers:
                instance.viewers.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
