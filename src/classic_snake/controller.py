"""Session controller composing the grid, snake, food, and clock."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

import numpy as np

from classic_snake import collision
from classic_snake.clock import ClockState, GameClock, Scheduler
from classic_snake.config import GameConfig
from classic_snake.food import FoodPlacer
from classic_snake.grid import Coordinate, Grid
from classic_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)

_PLAYER_NAME_RE = re.compile(r"[A-Za-z0-9]+")


class InvalidNameError(ValueError):
    """Raised when a game is started with an unusable player name."""


class GameEvent(str, enum.Enum):
    """Lifecycle notifications for display text changes."""

    STARTED = "started"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"


class GameOverReason(str, enum.Enum):
    BOUNDARY = "boundary"
    SELF_COLLISION = "self_collision"
    BOARD_FULL = "board_full"


_COLLISION_REASONS: dict[collision.CollisionResult, GameOverReason] = {
    collision.CollisionResult.BOUNDARY: GameOverReason.BOUNDARY,
    collision.CollisionResult.SELF: GameOverReason.SELF_COLLISION,
}


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the session handed to renderers."""

    segments: tuple[Coordinate, ...]
    food: Coordinate | None
    score: int
    high_score: int
    state: ClockState
    tick: int
    tick_interval_ms: int
    game_over_reason: GameOverReason | None = None

    def to_dict(self) -> dict:
        """Serialize to a JSON-safe dictionary."""
        return {
            "segments": [list(seg) for seg in self.segments],
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "high_score": self.high_score,
            "state": self.state.value,
            "tick": self.tick,
            "tick_interval_ms": self.tick_interval_ms,
            "game_over_reason": (
                self.game_over_reason.value
                if self.game_over_reason is not None else None
            ),
        }


class GameObserver:
    """Receives render snapshots, lifecycle events, and eat cues.

    Subclasses override what they need; every hook defaults to a no-op.
    Exceptions raised from a hook are logged and never reach the game loop.
    """

    def on_snapshot(self, snapshot: Snapshot) -> None:
        pass

    def on_event(self, event: GameEvent, snapshot: Snapshot) -> None:
        pass

    def on_eat(self, position: Coordinate) -> None:
        pass


class GameController:
    """Single-player snake session.

    The controller owns every piece of mutable state: the snake, the food
    cell, score and high score, and the clock that drives :meth:`tick`.
    Commands from the presentation layer are applied synchronously; the
    latest valid direction request before a tick is the one that moves the
    snake. High score survives restarts for the lifetime of the instance.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.grid = Grid(cfg.grid_size)
        self.snake = Snake(cfg.start)
        self.food_placer = FoodPlacer(
            self.grid, rng=self.rng, max_attempts=cfg.food_max_attempts,
        )
        self.clock = GameClock(
            self.tick, cfg.initial_tick_interval_ms, scheduler=scheduler,
        )
        self.food: Coordinate | None = None

        self._observers: list[GameObserver] = []
        self._high_score = 0
        self._player_name: str | None = None
        self._reset_session()

    # --- observers -------------------------------------------------------

    def add_observer(self, observer: GameObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # --- read-only state -------------------------------------------------

    @property
    def state(self) -> ClockState:
        return self.clock.state

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def tick_interval_ms(self) -> int:
        return self.clock.interval_ms

    @property
    def direction(self) -> Direction:
        """The direction the snake will move on the next tick."""
        return self._pending_direction or self._heading

    @property
    def player_name(self) -> str | None:
        return self._player_name

    @property
    def game_over_reason(self) -> GameOverReason | None:
        return self._game_over_reason

    def snapshot(self) -> Snapshot:
        """Return an immutable view of the current session."""
        return Snapshot(
            segments=self.snake.segments(),
            food=self.food,
            score=self._score,
            high_score=self._high_score,
            state=self.clock.state,
            tick=self._tick,
            tick_interval_ms=self.clock.interval_ms,
            game_over_reason=self._game_over_reason,
        )

    # --- commands --------------------------------------------------------

    def start(self, player_name: str) -> None:
        """Start a game for *player_name*.

        Raises :class:`InvalidNameError` unless the name is non-empty and
        purely alphanumeric. Starting after a game over restarts first;
        starting while a game is in progress is ignored.
        """
        if not isinstance(player_name, str) or not _PLAYER_NAME_RE.fullmatch(
            player_name,
        ):
            raise InvalidNameError(
                f"Invalid player name {player_name!r}: "
                "use letters and digits only."
            )

        if self.clock.state == ClockState.GAME_OVER:
            self._reset_session()
        elif self.clock.state != ClockState.STOPPED:
            logger.debug("Ignoring start while %s.", self.clock.state.value)
            return

        self._player_name = player_name
        self._score = 0
        self.clock.start()
        logger.info("Game started for player '%s'.", player_name)

        snap = self.snapshot()
        self._notify("on_event", GameEvent.STARTED, snap)
        self._notify("on_snapshot", snap)

    def request_direction_change(self, direction: Direction | str) -> bool:
        """Queue a direction for the next tick.

        Ignored (returns False) unless the game is running, the value names
        a direction, and it does not reverse the last move.
        """
        if self.clock.state != ClockState.RUNNING:
            return False
        requested = Direction.parse(direction)
        if requested is None:
            logger.debug("Ignoring unknown direction %r.", direction)
            return False
        if requested is self._heading.opposite:
            return False
        self._pending_direction = requested
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""
        if self.clock.pause():
            self._notify("on_event", GameEvent.PAUSED, self.snapshot())
            return True
        if self.clock.resume():
            self._notify("on_event", GameEvent.RESUMED, self.snapshot())
            return True
        return False

    def restart(self) -> None:
        """Reset snake, food, score, and speed; the high score is kept."""
        self._reset_session()
        logger.info("Session reset (high score %d).", self._high_score)
        self._notify("on_snapshot", self.snapshot())

    def tick(self) -> Snapshot:
        """Advance the game by one step and emit the resulting snapshot.

        Does nothing unless the clock is running.
        """
        if self.clock.state != ClockState.RUNNING:
            return self.snapshot()

        if self._pending_direction is not None:
            self._heading = self._pending_direction
            self._pending_direction = None

        new_head = self.snake.advance(self._heading)
        self._tick += 1

        board_full = False
        if new_head == self.food:
            self.snake.grow()
            self._notify("on_eat", new_head)
            self.food = self.food_placer.place(self.snake.occupied())
            board_full = self.food is None
            self._speed_up()
            self._score += self.config.points_per_food
        else:
            self.snake.shrink()

        result = collision.check(self.snake, self.grid)
        if result.is_fatal:
            self._end_game(_COLLISION_REASONS[result])
        elif board_full:
            self._end_game(GameOverReason.BOARD_FULL)

        snap = self.snapshot()
        self._notify("on_snapshot", snap)
        if self.clock.state == ClockState.GAME_OVER:
            self._notify("on_event", GameEvent.GAME_OVER, snap)
        return snap

    # --- internals -------------------------------------------------------

    def _reset_session(self) -> None:
        cfg = self.config
        self.clock.reset(cfg.initial_tick_interval_ms)
        self.snake.reset(cfg.start)
        self._heading = Direction[cfg.initial_direction.upper()]
        self._pending_direction: Direction | None = None
        self._score = 0
        self._tick = 0
        self._game_over_reason: GameOverReason | None = None
        self.food = self.food_placer.place(self.snake.occupied())

    def _speed_up(self) -> None:
        cfg = self.config
        interval = max(
            cfg.min_tick_interval_ms,
            self.clock.interval_ms - cfg.speed_step_ms,
        )
        self.clock.set_interval(interval)

    def _end_game(self, reason: GameOverReason) -> None:
        self._high_score = max(self._high_score, self._score)
        self._game_over_reason = reason
        self.clock.halt()
        logger.info(
            "Game over for '%s' at tick %d (%s) with score %d.",
            self._player_name, self._tick, reason.value, self._score,
        )

    def _notify(self, hook: str, *args) -> None:
        for observer in list(self._observers):
            try:
                getattr(observer, hook)(*args)
            except Exception:
                logger.warning(
                    "Observer %r failed in %s.", observer, hook, exc_info=True,
                )
