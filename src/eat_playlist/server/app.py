"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from eat_playlist.server.routes import router
from eat_playlist.server.session_manager import SessionManager
from eat_playlist.server.websocket import ws_router

logger = logging.getLogger(__name__)


def create_app(max_sessions: int = 100) -> FastAPI:
    """Build the app; each instance hosts at most *max_sessions* sessions."""
    manager = SessionManager(max_sessions=max_sessions)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = manager
        logger.info("Session host up (max %d sessions).", max_sessions)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(title="EatPlaylist API", version="0.1.0", lifespan=lifespan)
    app.state.session_manager = manager
    app.include_router(router)
    app.include_router(ws_router)
    return app
