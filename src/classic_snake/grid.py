"""Board geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import numpy as np


class Coordinate(NamedTuple):
    """A 1-indexed board cell. ``x`` grows rightwards, ``y`` downwards."""

    x: int
    y: int


class Grid:
    """Square board of ``size`` × ``size`` cells, 1-indexed on both axes.

    Geometry queries are pure; the board holds no game state. Occupancy
    scans build a throwaway NumPy mask from the cells passed in.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 2:
            raise ValueError("Grid size must be at least 2.")
        self.size = size

    def in_bounds(self, coord: tuple[int, int]) -> bool:
        """Check whether a coordinate lies within the board."""
        x, y = coord
        return 1 <= x <= self.size and 1 <= y <= self.size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def cells(self) -> list[Coordinate]:
        """Return every cell in row-major order."""
        return [
            Coordinate(x, y)
            for y in range(1, self.size + 1)
            for x in range(1, self.size + 1)
        ]

    def free_cells(self, occupied: Iterable[tuple[int, int]]) -> list[Coordinate]:
        """Return all cells not in *occupied*, in row-major order.

        Out-of-bounds entries in *occupied* are ignored.
        """
        mask = np.zeros((self.size, self.size), dtype=bool)
        for coord in occupied:
            if self.in_bounds(coord):
                x, y = coord
                mask[y - 1, x - 1] = True
        rows, cols = np.where(~mask)
        return [
            Coordinate(c + 1, r + 1)
            for r, c in zip(rows.tolist(), cols.tolist(), strict=True)
        ]
