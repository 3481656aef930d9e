"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from classic_snake.config import GameConfig
from classic_snake.server.routes import router
from classic_snake.server.websocket import ws_router


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(title="Classic Snake API", version="0.1.0")
    app.state.game_config = config or GameConfig()
    app.include_router(router)
    app.include_router(ws_router)
    return app
