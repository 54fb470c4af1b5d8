"""Grid geometry: cells, directions and bounds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class Cell(NamedTuple):
    """A single board position."""

    x: int
    y: int

    def moved(self, direction: Direction) -> Cell:
        return Cell(self.x + direction.dx, self.y + direction.dy)

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


class Direction(NamedTuple):
    """A unit step on the grid."""

    dx: int
    dy: int

    @property
    def opposite(self) -> Direction:
        return Direction(-self.dx, -self.dy)

    def is_opposite(self, other: Direction) -> bool:
        return self.dx == -other.dx and self.dy == -other.dy


UP = Direction(0, -1)
DOWN = Direction(0, 1)
LEFT = Direction(-1, 0)
RIGHT = Direction(1, 0)

DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}


def as_direction(dx: int, dy: int) -> Direction | None:
    """Return the unit direction for (dx, dy), or None if it is not one of the four."""
    candidate = Direction(dx, dy)
    if candidate in DIRECTIONS.values():
        return candidate
    return None


@dataclass(frozen=True)
class Grid:
    """Fixed COLS x ROWS coordinate space."""

    cols: int
    rows: int

    @property
    def size(self) -> int:
        return self.cols * self.rows

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.cols and 0 <= cell.y < self.rows

    def random_cell(self, rng: np.random.Generator) -> Cell:
        """Draw a uniformly random cell.

        Args:
            rng: numpy random generator

        Returns:
            A cell inside the grid
        """
        return Cell(int(rng.integers(self.cols)), int(rng.integers(self.rows)))
