"""Drawing the board onto a cell surface."""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np

from .config import Palette
from .state import GameState


class Surface(Protocol):
    """Anything that can paint grid cells."""

    def clear(self, color: str) -> None: ...

    def draw_cell(self, x: int, y: int, color: str) -> None: ...


def draw_state(surface: Surface, state: GameState, palette: Palette) -> None:
    """Paint one frame: background, food, then the snake with a distinct head."""
    surface.clear(palette.background)
    if state.food is not None:
        surface.draw_cell(state.food.x, state.food.y, palette.food)
    head = state.snake.head()
    for cell in state.snake:
        surface.draw_cell(cell.x, cell.y, palette.head if cell == head else palette.body)


class FrameRecorder:
    """Surface that records draw calls as JSON-ready commands.

    The WebSocket session sends the recorded commands to the browser,
    which replays them onto its canvas.
    """

    def __init__(self):
        self._ops: list[dict[str, Any]] = []

    def clear(self, color: str) -> None:
        # A clear makes everything drawn before it invisible
        self._ops = [{"op": "clear", "color": color}]

    def draw_cell(self, x: int, y: int, color: str) -> None:
        self._ops.append({"op": "cell", "x": x, "y": y, "color": color})

    def take(self) -> list[dict[str, Any]]:
        """Return the recorded commands and start a new frame."""
        ops, self._ops = self._ops, []
        return ops


class RasterSurface:
    """In-memory raster of the board, one color per cell.

    Colors are interned into a small table; `pixels` holds indices into it.
    """

    def __init__(self, cols: int, rows: int):
        self.cols = cols
        self.rows = rows
        self.colors: list[str] = [""]
        self.pixels = np.zeros((rows, cols), dtype=np.uint8)

    def _index(self, color: str) -> int:
        if color not in self.colors:
            self.colors.append(color)
        return self.colors.index(color)

    def clear(self, color: str) -> None:
        self.pixels.fill(self._index(color))

    def draw_cell(self, x: int, y: int, color: str) -> None:
        if 0 <= x < self.cols and 0 <= y < self.rows:
            self.pixels[y, x] = self._index(color)

    def color_at(self, x: int, y: int) -> str:
        return self.colors[int(self.pixels[y, x])]

    def count(self, color: str) -> int:
        if color not in self.colors:
            return 0
        return int(np.count_nonzero(self.pixels == self.colors.index(color)))

    def to_text(self, symbols: dict[str, str] | None = None) -> str:
        """Render as text, one character per cell."""
        symbols = symbols or {}
        lines = []
        for row in self.pixels:
            lines.append("".join(symbols.get(self.colors[int(i)], ".") for i in row))
        return "\n".join(lines)
