"""Board geometry and food placement."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import numpy as np

logger = logging.getLogger(__name__)

# (x, y), both 1-indexed.
Position = tuple[int, int]


class Grid:
    """Square board addressed by 1-indexed ``(x, y)`` positions.

    ``x`` is the column and ``y`` the row, matching CSS grid placement.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a position lies within ``[1, size]`` on both axes."""
        x, y = pos
        return 1 <= x <= self.size and 1 <= y <= self.size

    def cells(self) -> Iterator[Position]:
        """Iterate every position, row by row."""
        for y in range(1, self.size + 1):
            for x in range(1, self.size + 1):
                yield x, y

    def occupancy(self, occupied: Iterable[Position]) -> np.ndarray:
        """Return a ``(size, size)`` boolean mask indexed ``[y - 1, x - 1]``."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for pos in occupied:
            if self.in_bounds(pos):
                mask[pos[1] - 1, pos[0] - 1] = True
        return mask

    def free_cells(self, occupied: Iterable[Position] = ()) -> list[Position]:
        """Return all positions not present in *occupied*."""
        rows, cols = np.where(~self.occupancy(occupied))
        return [
            (c + 1, r + 1)
            for r, c in zip(rows.tolist(), cols.tolist(), strict=True)
        ]


class FoodGenerator:
    """Picks food positions with a seeded NumPy RNG.

    With ``avoid_occupied`` the pick is uniform over free cells; without it
    the pick is uniform over the whole board and may land under the snake.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        avoid_occupied: bool = True,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.avoid_occupied = avoid_occupied

    def generate(self, occupied: Iterable[Position] = ()) -> Position:
        """Return a random in-bounds position for the next food."""
        if self.avoid_occupied:
            free = self.grid.free_cells(occupied)
            if free:
                return free[int(self.rng.integers(len(free)))]
            logger.warning("No free cells for food; picking any cell.")
        x, y = self.rng.integers(1, self.grid.size + 1, size=2)
        return int(x), int(y)
