"""Classic Snake — single-player game engine."""

from classic_snake.clock import ClockState, GameClock
from classic_snake.collision import CollisionResult
from classic_snake.config import GameConfig
from classic_snake.controller import (
    GameController,
    GameEvent,
    GameObserver,
    GameOverReason,
    InvalidNameError,
    Snapshot,
)
from classic_snake.food import FoodPlacer
from classic_snake.grid import Coordinate, Grid
from classic_snake.snake import Direction, Snake

__all__ = [
    "ClockState",
    "CollisionResult",
    "Coordinate",
    "Direction",
    "FoodPlacer",
    "GameClock",
    "GameConfig",
    "GameController",
    "GameEvent",
    "GameObserver",
    "GameOverReason",
    "Grid",
    "InvalidNameError",
    "Snake",
    "Snapshot",
]
