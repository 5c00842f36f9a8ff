"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field

MAX_GRID_SIDE = 500
MAX_VIEWPORT_SIDE = 100_000.0


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a session."""

    ACTIVE = "active"
    STOPPED = "stopped"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions.

    Either ``rows``/``columns`` or ``viewport_width``/``viewport_height``
    size the grid; explicit rows and columns win.
    """

    rows: int | None = Field(default=None, ge=1, le=MAX_GRID_SIDE)
    columns: int | None = Field(default=None, ge=1, le=MAX_GRID_SIDE)
    viewport_width: float | None = Field(
        default=None, gt=0, le=MAX_VIEWPORT_SIDE, allow_inf_nan=False,
    )
    viewport_height: float | None = Field(
        default=None, gt=0, le=MAX_VIEWPORT_SIDE, allow_inf_nan=False,
    )
    cell_size: float = Field(default=32.0, gt=0, allow_inf_nan=False)
    tick_rate_ms: int = Field(default=400, ge=50, le=2000)
    seed: int | None = None
    playlist: list[str] = Field(default_factory=list, max_length=1000)


class HeadingRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/heading."""

    direction: Literal["up", "down", "left", "right"]


class HeadingResponse(BaseModel):
    session_id: str
    direction: str
    accepted: bool


class ContentRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/content."""

    content: str = Field(min_length=1, max_length=2048)


class ContentResponse(BaseModel):
    session_id: str
    placed: bool
    target_index: int | None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    rows: int
    columns: int
    tick_rate_ms: int
    length: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
