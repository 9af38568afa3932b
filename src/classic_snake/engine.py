"""Tick-driven game state machine composing grid, snake, food and timing."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from classic_snake.config import GameConfig
from classic_snake.grid import FoodGenerator, Grid, Position
from classic_snake.results import ResultStore
from classic_snake.snake import Direction, Snake
from classic_snake.speed import next_interval
from classic_snake.timing import ManualTimer, TickTimer

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"[A-Za-z0-9]+")
INVALID_NAME_MESSAGE = (
    "Please enter a valid name. Only English letters and numbers allowed."
)


class InvalidPlayerName(ValueError):
    """Raised by :meth:`GameEngine.start` when the player name is rejected."""

    def __init__(self, name: str) -> None:
        super().__init__(INVALID_NAME_MESSAGE)
        self.name = name


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to renderers and listeners."""

    status: GameStatus
    grid_size: int
    snake: tuple[Position, ...]
    food: Position
    direction: Direction
    interval_ms: int
    high_score: int
    player_name: str
    recent_results: tuple[int, ...]
    tick: int
    last_event: str | None = None

    @property
    def score(self) -> int:
        return len(self.snake) - 1

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict."""
        return {
            "status": self.status.value,
            "grid_size": self.grid_size,
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food),
            "direction": self.direction.label,
            "interval_ms": self.interval_ms,
            "score": self.score,
            "high_score": self.high_score,
            "player_name": self.player_name,
            "recent_results": list(self.recent_results),
            "tick": self.tick,
            "last_event": self.last_event,
        }


Listener = Callable[[str, GameSnapshot], None]


class GameEngine:
    """Single-player snake state machine.

    The engine owns the snake, food, direction and tick interval, and a single
    tick timer. :meth:`tick` is normally driven by the timer; tests drive it
    directly or through :class:`~classic_snake.timing.ManualTimer`.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        timer: TickTimer | None = None,
        store: ResultStore | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.food_generator = FoodGenerator(
            self.grid,
            rng=self.rng,
            avoid_occupied=self.config.food_avoids_snake,
        )
        self.timer: TickTimer = timer if timer is not None else ManualTimer()
        self.store = store if store is not None else ResultStore(
            key=self.config.results_key, limit=self.config.results_limit,
        )

        self.status = GameStatus.NOT_STARTED
        self.player_name = ""
        self.high_score = 0
        self.recent_results: list[int] = self.store.load_recent()
        self.tick_count = 0
        self._listeners: list[Listener] = []
        self._reset_state()

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    @property
    def start_position(self) -> Position:
        return self.config.start_x, self.config.start_y

    @property
    def score(self) -> int:
        return self.snake.length - 1

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    def _reset_state(self) -> None:
        """Put snake, food, direction and speed back to initial values."""
        self.snake = Snake(self.start_position, Direction.RIGHT)
        self.food = self.food_generator.generate(self.snake.body)
        self.interval_ms = self.config.initial_interval_ms

    def _arm_timer(self) -> None:
        self.timer.cancel()
        self.timer.arm(self.interval_ms, self.tick)

    def add_listener(self, listener: Listener) -> None:
        """Register a callback receiving ``(event, snapshot)``."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot(last_event=event)
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception:
                logger.exception("Listener failed handling '%s'.", event)

    # ------------------------------------------------------------------
    # Lifecycle transitions
    # ------------------------------------------------------------------

    def start(self, name: str) -> None:
        """Start a game for *name*.

        Raises :class:`InvalidPlayerName` if the trimmed name holds no ASCII
        letter or digit. Does nothing unless the game is not started.
        """
        if self.status != GameStatus.NOT_STARTED:
            return
        trimmed = name.strip()
        if not _NAME_PATTERN.search(trimmed):
            raise InvalidPlayerName(name)

        self.player_name = trimmed
        self._reset_state()
        self.status = GameStatus.RUNNING
        self._arm_timer()
        logger.info("Game started for player '%s'.", trimmed)
        self._emit("start")

    def pause(self) -> None:
        if self.status != GameStatus.RUNNING:
            return
        self.timer.cancel()
        self.status = GameStatus.PAUSED
        logger.info("Game paused at score %d.", self.score)
        self._emit("pause")

    def resume(self) -> None:
        if self.status != GameStatus.PAUSED:
            return
        self.status = GameStatus.RUNNING
        self._arm_timer()
        logger.info("Game resumed at %d ms per tick.", self.interval_ms)
        self._emit("resume")

    def toggle_pause(self) -> None:
        """Pause a running game or resume a paused one."""
        if self.status == GameStatus.RUNNING:
            self.pause()
        elif self.status == GameStatus.PAUSED:
            self.resume()

    def stop(self) -> None:
        """Stop the current game without recording a result."""
        if self.status == GameStatus.NOT_STARTED:
            return
        self.timer.cancel()
        self._reset_state()
        self.status = GameStatus.NOT_STARTED
        logger.info("Game stopped by player '%s'.", self.player_name)
        self._emit("stop")

    def change_direction(self, direction: Direction | str) -> None:
        """Turn the snake. Ignored unless running, and for 180° reversals."""
        if self.status != GameStatus.RUNNING:
            return
        if isinstance(direction, str):
            parsed = Direction.parse(direction)
            if parsed is None:
                return
            direction = parsed
        if self.snake.set_direction(direction):
            logger.debug("Direction set to %s.", direction.label)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> GameSnapshot:
        """Advance the game by one movement step.

        Returns the snapshot after the step. Does nothing unless running.
        """
        if self.status != GameStatus.RUNNING:
            return self.snapshot()

        self.tick_count += 1
        new_head = self.snake.push_head()

        if new_head == self.food:
            self.food = self.food_generator.generate(self.snake.body)
            self.interval_ms = next_interval(
                self.interval_ms, self.config.min_interval_ms,
            )
            logger.debug("Food eaten; interval now %d ms.", self.interval_ms)
            self._arm_timer()
            self._emit("eat")
        else:
            self.snake.drop_tail()

        if not self.grid.in_bounds(new_head) or self.snake.self_collision():
            self._handle_collision()
            return self.snapshot(last_event="collision")

        self._emit("tick")
        return self.snapshot(last_event="tick")

    def _handle_collision(self) -> None:
        """Record the result and reset for the next round."""
        final_score = self.score
        self.recent_results = self.store.save_recent(final_score)
        if final_score > self.high_score:
            self.high_score = final_score
        logger.info(
            "Collision at tick %d for '%s' with score %d (high score %d).",
            self.tick_count, self.player_name, final_score, self.high_score,
        )

        self._reset_state()
        if self.config.restart_on_collision:
            self._arm_timer()
        else:
            self.timer.cancel()
            self.status = GameStatus.NOT_STARTED
        self._emit("collision")

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self, last_event: str | None = None) -> GameSnapshot:
        """Return an immutable view of the current state."""
        return GameSnapshot(
            status=self.status,
            grid_size=self.grid.size,
            snake=tuple(self.snake.body),
            food=self.food,
            direction=self.snake.direction,
            interval_ms=self.interval_ms,
            high_score=self.high_score,
            player_name=self.player_name,
            recent_results=tuple(self.recent_results),
            tick=self.tick_count,
            last_event=last_event,
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return self.snapshot().to_dict()
