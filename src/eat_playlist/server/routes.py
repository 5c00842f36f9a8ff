"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from eat_playlist.config import SessionConfig
from eat_playlist.controls import parse_direction
from eat_playlist.server.models import (
    MAX_GRID_SIDE,
    ContentRequest,
    ContentResponse,
    CreateSessionRequest,
    ErrorResponse,
    HeadingRequest,
    HeadingResponse,
    SessionSummary,
)
from eat_playlist.server.session_manager import SessionManager

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={404: {"model": ErrorResponse}},
)


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _build_config(body: CreateSessionRequest) -> SessionConfig:
    extra = {
        "tick_rate_ms": body.tick_rate_ms,
        "seed": body.seed,
        "playlist": tuple(body.playlist),
    }
    if body.rows is not None and body.columns is not None:
        return SessionConfig(
            rows=body.rows, columns=body.columns,
            cell_size=body.cell_size, **extra,
        )
    if body.viewport_width is not None and body.viewport_height is not None:
        config = SessionConfig.from_viewport(
            body.viewport_width, body.viewport_height,
            cell_size=body.cell_size, **extra,
        )
        if max(config.rows, config.columns) > MAX_GRID_SIDE:
            raise ValueError(
                f"Viewport yields a {config.rows}x{config.columns} grid; "
                f"at most {MAX_GRID_SIDE} cells per side are allowed.",
            )
        return config
    raise ValueError("Provide rows and columns, or a viewport size.")


@router.post("", status_code=201, responses={422: {"model": ErrorResponse}})
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a session and start ticking."""
    manager = _get_manager(request)
    try:
        instance = manager.create_session(_build_config(body))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return instance.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List running sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the latest snapshot."""
    instance = _get_manager(request).get_session(session_id)
    if instance is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return {
        **instance.summary().model_dump(mode="json"),
        "state": instance.game.get_state(),
    }


@router.post("/{session_id}/heading")
async def set_heading(
    session_id: str, body: HeadingRequest, request: Request,
) -> HeadingResponse:
    """Buffer a heading change for the next tick."""
    direction = parse_direction(body.direction)
    try:
        accepted = await _get_manager(request).set_heading(session_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return HeadingResponse(
        session_id=session_id, direction=body.direction, accepted=accepted,
    )


@router.post("/{session_id}/content")
async def push_content(
    session_id: str, body: ContentRequest, request: Request,
) -> ContentResponse:
    """Offer new target content, e.g. when the playing track changes."""
    try:
        index = await _get_manager(request).push_content(
            session_id, body.content,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ContentResponse(
        session_id=session_id, placed=index is not None, target_index=index,
    )


@router.delete("/{session_id}", status_code=200)
async def stop_session(session_id: str, request: Request) -> dict:
    """Stop a session and release its engine."""
    try:
        await _get_manager(request).stop_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "stopped", "session_id": session_id}
