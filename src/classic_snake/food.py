"""Food placement on unoccupied cells."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from classic_snake.grid import Coordinate, Grid

logger = logging.getLogger(__name__)


class FoodPlacer:
    """Picks random unoccupied cells for food.

    Candidates are drawn uniformly per axis and rejected while they land on
    an occupied cell. After ``max_attempts`` rejections the placer switches
    to a scan of the free cells, so placement always terminates. Uses a
    seeded NumPy RNG for reproducible games.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 64,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def place(self, occupied: Collection[tuple[int, int]]) -> Coordinate | None:
        """Return a cell not in *occupied*, or ``None`` if the board is full."""
        n = self.grid.size
        for _ in range(self.max_attempts):
            x, y = self.rng.integers(1, n + 1, size=2).tolist()
            candidate = Coordinate(x, y)
            if candidate not in occupied:
                return candidate

        free = self.grid.free_cells(occupied)
        if not free:
            logger.warning("No free cells left for food placement.")
            return None
        logger.debug(
            "Random food placement gave up after %d attempts; "
            "taking first of %d free cells.",
            self.max_attempts, len(free),
        )
        return free[0]
