"""Mapping raw keyboard, pointer and button input onto game operations."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from .grid import DOWN, LEFT, RIGHT, UP, Cell, Direction

if TYPE_CHECKING:
    from .engine import SnakeGame

logger = logging.getLogger(__name__)


class InputEvent(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    TOGGLE_PAUSE = "toggle_pause"
    START = "start"


EVENT_DIRECTIONS: dict[InputEvent, Direction] = {
    InputEvent.UP: UP,
    InputEvent.DOWN: DOWN,
    InputEvent.LEFT: LEFT,
    InputEvent.RIGHT: RIGHT,
}

# Keys are matched lower-cased, as reported by KeyboardEvent.key
KEY_BINDINGS: dict[str, InputEvent] = {
    "arrowup": InputEvent.UP,
    "w": InputEvent.UP,
    "arrowdown": InputEvent.DOWN,
    "s": InputEvent.DOWN,
    "arrowleft": InputEvent.LEFT,
    "a": InputEvent.LEFT,
    "arrowright": InputEvent.RIGHT,
    "d": InputEvent.RIGHT,
    " ": InputEvent.TOGGLE_PAUSE,
    "space": InputEvent.TOGGLE_PAUSE,
    "spacebar": InputEvent.TOGGLE_PAUSE,
}


def event_from_key(key: str) -> InputEvent | None:
    """Look up the input event bound to a key name, if any."""
    event = KEY_BINDINGS.get((key or "").lower())
    if event is None:
        logger.debug("Unbound key %r", key)
    return event


def event_from_name(name: str) -> InputEvent | None:
    try:
        return InputEvent(name)
    except ValueError:
        logger.debug("Unknown input event %r", name)
        return None


def direction_toward(head: Cell, px: float, py: float, tile: int) -> Direction:
    """Direction from the head's pixel center toward a pointer press.

    Horizontal when the press is further off horizontally than
    vertically, vertical otherwise (ties go vertical).
    """
    dx = px - (head.x * tile + tile / 2)
    dy = py - (head.y * tile + tile / 2)
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


def apply_event(game: SnakeGame, event: InputEvent) -> None:
    """Dispatch one input event to the game.

    START begins a fresh game (reset then start); TOGGLE_PAUSE flips
    between running and paused; directions request a turn.
    """
    if event in EVENT_DIRECTIONS:
        direction = EVENT_DIRECTIONS[event]
        game.set_direction(direction.dx, direction.dy)
    elif event is InputEvent.TOGGLE_PAUSE:
        game.toggle()
    elif event is InputEvent.START:
        game.reset()
        game.start()
