"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging
from numbers import Real

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from eat_playlist.controls import direction_from_drag, parse_direction
from eat_playlist.server.models import SessionStatus
from eat_playlist.server.session_manager import SessionInstance, SessionManager
from eat_playlist.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_message(raw: str) -> Direction | None:
    """Extract a heading from ``{"direction": ...}`` or ``{"drag": [dx, dy]}``."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None

    name = msg.get("direction")
    if isinstance(name, str):
        return parse_direction(name)

    drag = msg.get("drag")
    if (
        isinstance(drag, list)
        and len(drag) == 2
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in drag)
    ):
        return direction_from_drag(float(drag[0]), float(drag[1]))
    return None


async def _attach(websocket: WebSocket, instance: SessionInstance) -> None:
    """Register a viewer and send it the current snapshot."""
    await websocket.accept()
    instance.viewers.append(websocket)
    await websocket.send_text(
        json.dumps(instance.game.get_state(), separators=(",", ":")),
    )


def _detach(websocket: WebSocket, instance: SessionInstance) -> None:
    if websocket in instance.viewers:
        instance.viewers.remove(websocket)


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send headings or drags, receive state each tick."""
    instance = _get_manager(websocket).get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await _attach(websocket, instance)
    logger.info("Player connected to session %s.", session_id)

    try:
        while True:
            direction = _parse_message(await websocket.receive_text())
            if direction is None:
                continue
            async with instance.lock:
                if instance.status == SessionStatus.ACTIVE:
                    instance.game.set_heading(direction)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        _detach(websocket, instance)


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only state stream."""
    instance = _get_manager(websocket).get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await _attach(websocket, instance)
    logger.info("Spectator connected to session %s.", session_id)

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        _detach(websocket, instance)
