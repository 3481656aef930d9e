"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from classic_snake.grid import Coordinate


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, so UP decrements it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, value: str | Direction) -> Direction | None:
        """Return the direction named by *value*, or ``None`` if unknown."""
        if isinstance(value, Direction):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return None


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of board coordinates.

    The head is ``body[0]``; the tail is ``body[-1]``. Growth is not a
    separate operation: a tick that eats simply skips :meth:`shrink`.
    """

    def __init__(self, start: tuple[int, int]) -> None:
        self.body: deque[Coordinate] = deque()
        self.reset(start)

    def reset(self, start: tuple[int, int]) -> None:
        """Shrink back to a single segment at *start*."""
        self.body.clear()
        self.body.append(Coordinate(*start))

    @property
    def head(self) -> Coordinate:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Coordinate:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def advance(self, direction: Direction) -> Coordinate:
        """Prepend a new head one cell away in *direction* and return it.

        The tail is kept; callers :meth:`shrink` on ticks without food.
        """
        dx, dy = direction.value
        x, y = self.head
        new_head = Coordinate(x + dx, y + dy)
        self.body.appendleft(new_head)
        return new_head

    def grow(self) -> None:
        """Growth happens by not calling :meth:`shrink` after :meth:`advance`."""

    def shrink(self) -> Coordinate:
        """Drop and return the tail segment."""
        if len(self.body) <= 1:
            raise ValueError("Cannot shrink a snake below one segment.")
        return self.body.pop()

    def occupies_excluding_head(self) -> set[Coordinate]:
        """Return every segment except the head."""
        return set(list(self.body)[1:])

    def occupied(self) -> set[Coordinate]:
        return set(self.body)

    def segments(self) -> tuple[Coordinate, ...]:
        """Return an immutable copy of the body, head first."""
        return tuple(self.body)

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        return self.head in self.occupies_excluding_head()
