"""Game configuration with JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable game parameters.

    Supports JSON serialization so a server can be launched from a file.
    """

    # Board
    grid_size: int = 20
    start_x: int = 10
    start_y: int = 10

    # Timing (milliseconds between ticks)
    initial_interval_ms: int = 200
    min_interval_ms: int = 25

    # Recent results
    results_key: str = "gameResults"
    results_limit: int = 3

    # Behaviour
    food_avoids_snake: bool = True
    restart_on_collision: bool = True

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if not (1 <= self.start_x <= self.grid_size
                and 1 <= self.start_y <= self.grid_size):
            raise ValueError("Start position must lie inside the grid.")
        if self.min_interval_ms < 1:
            raise ValueError("min_interval_ms must be at least 1.")
        if self.initial_interval_ms < self.min_interval_ms:
            raise ValueError(
                "initial_interval_ms must be >= min_interval_ms.",
            )
        if self.results_limit < 1:
            raise ValueError("results_limit must be at least 1.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
