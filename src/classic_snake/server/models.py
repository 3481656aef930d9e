"""Pydantic models for API and WebSocket message schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from classic_snake.config import GameConfig


class ConfigResponse(BaseModel):
    """Response for GET /config."""

    grid_size: int
    initial_tick_interval_ms: int
    speed_step_ms: int
    min_tick_interval_ms: int
    points_per_food: int
    start: tuple[int, int]
    initial_direction: str

    @classmethod
    def from_config(cls, config: GameConfig) -> ConfigResponse:
        return cls(
            grid_size=config.grid_size,
            initial_tick_interval_ms=config.initial_tick_interval_ms,
            speed_step_ms=config.speed_step_ms,
            min_tick_interval_ms=config.min_tick_interval_ms,
            points_per_food=config.points_per_food,
            start=config.start,
            initial_direction=config.initial_direction,
        )


class StartMessage(BaseModel):
    """Client request to start (or restart after game over) a game."""

    type: Literal["start"]
    name: str


class DirectionMessage(BaseModel):
    """Client request to steer the snake."""

    type: Literal["direction"]
    direction: str


class PauseMessage(BaseModel):
    """Client request to toggle pause."""

    type: Literal["pause"]


class RestartMessage(BaseModel):
    """Client request to reset the board, keeping the high score."""

    type: Literal["restart"]


ClientMessage = StartMessage | DirectionMessage | PauseMessage | RestartMessage


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
