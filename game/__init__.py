"""Snake game core: grid, snake, food, tick engine and its collaborators."""

from game.config import ConfigError, GameConfig, load_config
from game.engine import SnakeGame
from game.grid import Cell, Direction, Grid
from game.snake import Snake
from game.state import GameEvent, GameState, RunState, TickOutcome
from game.timer import PeriodicTask

__all__ = [
    "Cell",
    "ConfigError",
    "Direction",
    "GameConfig",
    "GameEvent",
    "GameState",
    "Grid",
    "PeriodicTask",
    "RunState",
    "Snake",
    "SnakeGame",
    "TickOutcome",
    "load_config",
]
