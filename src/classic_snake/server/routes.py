"""REST API route handlers."""

from __future__ import annotations

from fastapi import APIRouter, Request

from classic_snake.server.models import ConfigResponse

router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config(request: Request) -> ConfigResponse:
    """Return the board and speed settings new sessions will use."""
    return ConfigResponse.from_config(request.app.state.game_config)
