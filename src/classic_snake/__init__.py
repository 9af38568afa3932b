"""Classic Snake — single-player game engine and browser server."""

from classic_snake.config import GameConfig
from classic_snake.controls import InputAdapter
from classic_snake.engine import (
    GameEngine,
    GameSnapshot,
    GameStatus,
    InvalidPlayerName,
)
from classic_snake.grid import FoodGenerator, Grid
from classic_snake.render import Frame, render_frame, render_text
from classic_snake.results import JsonFileStorage, MemoryStorage, ResultStore
from classic_snake.snake import Direction, Snake
from classic_snake.timing import AsyncioTimer, ManualTimer

__all__ = [
    "AsyncioTimer",
    "Direction",
    "FoodGenerator",
    "Frame",
    "GameConfig",
    "GameEngine",
    "GameSnapshot",
    "GameStatus",
    "Grid",
    "InputAdapter",
    "InvalidPlayerName",
    "JsonFileStorage",
    "ManualTimer",
    "MemoryStorage",
    "ResultStore",
    "Snake",
    "render_frame",
    "render_text",
]
