from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .grid import Cell, Direction, RIGHT
from .snake import Snake


class RunState(str, Enum):
    """Lifecycle of a game session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class TickOutcome(str, Enum):
    """What a single tick did."""

    IDLE = "idle"  # not running, nothing happened
    MOVED = "moved"
    ATE = "ate"
    WALL = "wall"
    SELF = "self"

    @property
    def is_collision(self) -> bool:
        return self in (TickOutcome.WALL, TickOutcome.SELF)


@dataclass
class GameState:
    """Everything the engine mutates, owned in one place."""

    snake: Snake
    cols: int
    rows: int
    direction: Direction = RIGHT  # committed, used by the last tick
    pending: Direction = RIGHT  # applied at the start of the next tick
    food: Cell | None = None
    score: int = 0
    high_score: int = 0
    interval_ms: int = 120
    run_state: RunState = RunState.IDLE
    ticks: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "snake": [c.to_dict() for c in self.snake],
            "food": self.food.to_dict() if self.food is not None else None,
            "direction": {"x": self.direction.dx, "y": self.direction.dy},
            "score": self.score,
            "high_score": self.high_score,
            "interval_ms": self.interval_ms,
            "run_state": self.run_state.value,
            "game_over": self.run_state is RunState.GAME_OVER,
            "width": self.cols,
            "height": self.rows,
        }


@dataclass
class GameEvent:
    """Notification emitted by the engine to its listeners."""

    type: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, **self.data}
