"""Game configuration with JSON round-tripping."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_DIRECTION_NAMES = ("up", "down", "left", "right")


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for a single-player session.

    All values have sensible defaults matching the classic browser game:
    a 20×20 board, 200 ms ticks sped up by 2 ms per food down to 50 ms,
    and 10 points per food.
    """

    grid_size: int = 20
    initial_tick_interval_ms: int = 200
    speed_step_ms: int = 2
    min_tick_interval_ms: int = 50
    points_per_food: int = 10
    start: tuple[int, int] = (10, 10)
    initial_direction: str = "right"
    food_max_attempts: int = 64
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError("grid_size must be at least 2.")
        if self.min_tick_interval_ms < 1:
            raise ValueError("min_tick_interval_ms must be at least 1.")
        if self.initial_tick_interval_ms < self.min_tick_interval_ms:
            raise ValueError(
                "initial_tick_interval_ms must not be below "
                "min_tick_interval_ms."
            )
        if self.speed_step_ms < 0:
            raise ValueError("speed_step_ms must be >= 0.")
        if self.points_per_food < 0:
            raise ValueError("points_per_food must be >= 0.")
        if self.food_max_attempts < 1:
            raise ValueError("food_max_attempts must be at least 1.")
        if self.initial_direction not in _DIRECTION_NAMES:
            raise ValueError(
                f"initial_direction must be one of {_DIRECTION_NAMES}."
            )
        if len(self.start) != 2:
            raise ValueError("start must be an (x, y) pair.")
        x, y = self.start
        if not (1 <= x <= self.grid_size and 1 <= y <= self.grid_size):
            raise ValueError("start must lie within the grid.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["start"] = list(self.start)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        data = dict(raw)
        if "start" in data:
            data["start"] = tuple(data["start"])
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
