"""Terminal collision checks for the snake's head."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from classic_snake.grid import Grid
    from classic_snake.snake import Snake


class CollisionResult(enum.Enum):
    """Outcome of a collision check. Anything but NONE ends the game."""

    NONE = "none"
    SELF = "self"
    BOUNDARY = "boundary"

    @property
    def is_fatal(self) -> bool:
        return self is not CollisionResult.NONE


def check(snake: Snake, grid: Grid) -> CollisionResult:
    """Classify the snake's current head position.

    The boundary is checked first: a head that left the board cannot be
    overlapping the body anyway.
    """
    if not grid.in_bounds(snake.head):
        return CollisionResult.BOUNDARY
    if snake.self_collision():
        return CollisionResult.SELF
    return CollisionResult.NONE
