"""WebSocket handler for real-time single-player games."""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import Field, TypeAdapter, ValidationError

from classic_snake.config import GameConfig
from classic_snake.controller import InvalidNameError
from classic_snake.server.models import (
    ClientMessage,
    DirectionMessage,
    ErrorResponse,
    PauseMessage,
    RestartMessage,
    StartMessage,
)
from classic_snake.server.session import PlaySession

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_CLIENT_MESSAGE = TypeAdapter(
    Annotated[ClientMessage, Field(discriminator="type")],
)


def _get_config(ws: WebSocket) -> GameConfig:
    return ws.app.state.game_config


def _parse(raw: str) -> ClientMessage | None:
    try:
        return _CLIENT_MESSAGE.validate_python(json.loads(raw))
    except (json.JSONDecodeError, ValidationError):
        return None


def _dispatch(session: PlaySession, msg: ClientMessage) -> None:
    controller = session.controller
    if isinstance(msg, StartMessage):
        try:
            controller.start(msg.name)
        except InvalidNameError as exc:
            session.send(
                {"type": "error", **ErrorResponse(detail=str(exc)).model_dump()},
            )
    elif isinstance(msg, DirectionMessage):
        controller.request_direction_change(msg.direction)
    elif isinstance(msg, PauseMessage):
        controller.toggle_pause()
    elif isinstance(msg, RestartMessage):
        controller.restart()


@ws_router.websocket("/play")
async def play(websocket: WebSocket) -> None:
    """Player WebSocket: send commands, receive snapshots and events."""
    await websocket.accept()
    session = PlaySession(websocket, _get_config(websocket))
    session.open()
    logger.info("Player connected.")

    # Initial board so the client can render before starting.
    session.send({"type": "snapshot", **session.controller.snapshot().to_dict()})

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                continue
            msg = _parse(raw)
            if msg is None:
                continue
            _dispatch(session, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected.")
    finally:
        await session.close()
