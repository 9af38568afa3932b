"""Keyboard and button input translated into engine calls."""

from __future__ import annotations

import logging

from classic_snake.engine import GameEngine
from classic_snake.snake import Direction

logger = logging.getLogger(__name__)

KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

BUTTON_DIRECTIONS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

START_KEYS = frozenset({"Enter"})
PAUSE_KEYS = frozenset({"p", "P"})


class InputAdapter:
    """Feeds key presses and on-screen button clicks to a :class:`GameEngine`.

    The adapter remembers the player name typed into the form so that Enter
    can start a game.
    """

    def __init__(self, engine: GameEngine, name: str = "") -> None:
        self.engine = engine
        self.name = name

    def set_name(self, name: str) -> None:
        self.name = name

    def handle_key(self, key: str) -> bool:
        """Dispatch a key. Returns False if the key is not bound."""
        if key in START_KEYS:
            self.engine.start(self.name)
            return True
        if key in PAUSE_KEYS:
            self.engine.toggle_pause()
            return True
        direction = KEY_DIRECTIONS.get(key)
        if direction is None:
            logger.debug("Ignoring unbound key %r.", key)
            return False
        self.engine.change_direction(direction)
        return True

    def handle_button(self, button: str) -> bool:
        """Dispatch an on-screen button. Returns False if unknown."""
        button = button.lower()
        if button == "enter":
            self.engine.start(self.name)
            return True
        if button == "pause":
            self.engine.toggle_pause()
            return True
        direction = BUTTON_DIRECTIONS.get(button)
        if direction is None:
            return False
        self.engine.change_direction(direction)
        return True
