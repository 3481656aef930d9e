"""Per-connection play sessions bridging the controller to a WebSocket."""

from __future__ import annotations

import asyncio
import json
import logging

from starlette.websockets import WebSocket, WebSocketState

from classic_snake.config import GameConfig
from classic_snake.controller import (
    GameController,
    GameEvent,
    GameObserver,
    Snapshot,
)
from classic_snake.grid import Coordinate

logger = logging.getLogger(__name__)


class QueueObserver(GameObserver):
    """Turns controller callbacks into JSON-ready messages on a queue.

    Controller hooks run synchronously inside the tick, so they only
    enqueue; a separate sender task does the socket I/O.
    """

    def __init__(self, queue: asyncio.Queue[dict]) -> None:
        self.queue = queue

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self.queue.put_nowait({"type": "snapshot", **snapshot.to_dict()})

    def on_event(self, event: GameEvent, snapshot: Snapshot) -> None:
        self.queue.put_nowait(
            {"type": "event", "event": event.value, **snapshot.to_dict()},
        )

    def on_eat(self, position: Coordinate) -> None:
        self.queue.put_nowait({"type": "eat", "position": list(position)})


class PlaySession:
    """One player, one controller, one socket."""

    def __init__(self, websocket: WebSocket, config: GameConfig) -> None:
        self.websocket = websocket
        self.controller = GameController(config)
        self.outbox: asyncio.Queue[dict] = asyncio.Queue()
        self.controller.add_observer(QueueObserver(self.outbox))
        self._sender: asyncio.Task | None = None

    def open(self) -> None:
        """Start draining the outbox to the socket."""
        self._sender = asyncio.create_task(self._send_loop())

    def send(self, message: dict) -> None:
        self.outbox.put_nowait(message)

    async def close(self) -> None:
        """Stop the clock and the sender task."""
        self.controller.clock.reset()
        if self._sender is not None and not self._sender.done():
            self._sender.cancel()
            await asyncio.gather(self._sender, return_exceptions=True)
        logger.info(
            "Session for '%s' closed (high score %d).",
            self.controller.player_name, self.controller.high_score,
        )

    async def _send_loop(self) -> None:
        try:
            while True:
                message = await self.outbox.get()
                if self.websocket.client_state != WebSocketState.CONNECTED:
                    continue
                try:
                    await self.websocket.send_text(
                        json.dumps(message, separators=(",", ":")),
                    )
                except Exception:
                    logger.warning(
                        "Failed sending %s message; stopping clock.",
                        message["type"], exc_info=True,
                    )
                    self.controller.clock.reset()
                    return
        except asyncio.CancelledError:
            logger.debug("Sender task cancelled.")
