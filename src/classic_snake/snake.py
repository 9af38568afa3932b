"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from classic_snake.grid import Position


class Direction(enum.Enum):
    """Cardinal movement directions with (x_delta, y_delta) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str) -> Direction | None:
        """Look up a direction by name, case-insensitively."""
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


def is_opposite(a: Direction, b: Direction) -> bool:
    """Return True if *a* and *b* point in exactly opposite directions."""
    return _OPPOSITES[a] == b


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. A new snake is a single
    segment.
    """

    def __init__(
        self,
        start: Position,
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[Position] = deque([start])
        self.direction = direction

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)

    def set_direction(self, new_direction: Direction) -> bool:
        """Change direction, ignoring 180° reversals.

        Returns True if the direction was applied.
        """
        if is_opposite(new_direction, self.direction):
            return False
        self.direction = new_direction
        return True

    def next_head(self) -> Position:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def push_head(self) -> Position:
        """Prepend the next head cell and return it."""
        new_head = self.next_head()
        self.body.appendleft(new_head)
        return new_head

    def drop_tail(self) -> Position:
        """Remove and return the tail segment."""
        return self.body.pop()

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in list(self.body)[1:])
