"""Headless autoplay for smoke-testing the engine end to end."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import numpy as np

from classic_snake.clock import ClockState, ManualScheduler
from classic_snake.config import GameConfig
from classic_snake.controller import GameController
from classic_snake.snake import Direction

logger = logging.getLogger(__name__)

POLICIES = ("greedy", "random")


@dataclass
class SimulationResult:
    """Aggregate outcome of a batch of autoplay games."""

    games: int
    scores: list[int] = field(default_factory=list)
    ticks: list[int] = field(default_factory=list)
    game_seconds: list[float] = field(default_factory=list)
    high_score: int = 0
    wall_time_seconds: float = 0.0

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    def summary(self) -> str:
        return (
            f"Simulated {self.games} game(s) in "
            f"{self.wall_time_seconds:.2f}s | "
            f"mean score {self.mean_score:.1f}, high score {self.high_score}, "
            f"mean ticks {np.mean(self.ticks) if self.ticks else 0:.1f}, "
            f"mean game time "
            f"{np.mean(self.game_seconds) if self.game_seconds else 0:.1f}s"
        )


def choose_direction(
    controller: GameController,
    policy: str,
    rng: np.random.Generator,
) -> Direction:
    """Pick the next direction for the autoplay *policy*.

    ``greedy`` steps towards the food among moves that do not die on the
    next tick; ``random`` picks any non-reversing direction.
    """
    heading = controller.direction
    options = [d for d in Direction if d is not heading.opposite]
    if policy == "random":
        return options[int(rng.integers(len(options)))]

    head = controller.snake.head
    body = controller.snake.occupied()
    tail = controller.snake.tail
    safe: list[Direction] = []
    for d in options:
        dx, dy = d.value
        nxt = (head.x + dx, head.y + dy)
        if not controller.grid.in_bounds(nxt):
            continue
        if nxt in body and nxt != tail:
            continue
        safe.append(d)
    if not safe:
        return heading

    food = controller.food
    if food is None:
        return safe[0]

    def distance(d: Direction) -> int:
        dx, dy = d.value
        return abs(head.x + dx - food.x) + abs(head.y + dy - food.y)

    best = min(distance(d) for d in safe)
    ties = [d for d in safe if distance(d) == best]
    return ties[int(rng.integers(len(ties)))]


def run_simulation(
    *,
    games: int = 10,
    policy: str = "greedy",
    max_ticks: int = 5_000,
    config: GameConfig | None = None,
    seed: int | None = 0,
) -> SimulationResult:
    """Play *games* complete games on virtual time and collect their scores."""
    if policy not in POLICIES:
        raise ValueError(f"policy must be one of {POLICIES}.")
    if games < 1:
        raise ValueError("games must be at least 1.")

    rng = np.random.default_rng(seed)
    scheduler = ManualScheduler()
    controller = GameController(config, rng=rng, scheduler=scheduler)
    result = SimulationResult(games=games)

    start = time.perf_counter()
    for game in range(games):
        began = scheduler.now
        controller.start(f"bot{game}")
        ticks = 0
        while controller.state == ClockState.RUNNING and ticks < max_ticks:
            controller.request_direction_change(
                choose_direction(controller, policy, rng),
            )
            if not scheduler.run_next():
                break
            ticks += 1
        if controller.state == ClockState.RUNNING:
            logger.info("Game %d hit the %d tick limit.", game, max_ticks)
        result.scores.append(controller.score)
        result.ticks.append(ticks)
        result.game_seconds.append(scheduler.now - began)
        controller.restart()

    result.high_score = controller.high_score
    result.wall_time_seconds = time.perf_counter() - start
    return result
