"""Food placement by rejection sampling."""

from __future__ import annotations

import numpy as np

from .grid import Cell, Grid
from .snake import Snake


class NoFreeCellError(RuntimeError):
    """Raised when no unoccupied cell can be found for food."""


def place_food(
    snake: Snake,
    grid: Grid,
    rng: np.random.Generator,
    max_attempts: int | None = None,
) -> Cell:
    """Pick a uniformly random cell not covered by the snake.

    Draws random coordinates until one is free. A snake covering the
    whole board can never be fed, so that case fails immediately instead
    of looping forever.

    Args:
        snake: Current snake body
        grid: Board geometry
        rng: Random generator used for the draws
        max_attempts: Optional bound on the number of draws

    Returns:
        A free cell

    Raises:
        NoFreeCellError: If the board is full or `max_attempts` draws all hit the snake
    """
    if len(snake) >= grid.size:
        raise NoFreeCellError("snake covers the whole board")

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        candidate = grid.random_cell(rng)
        if not snake.occupies(candidate):
            return candidate
        attempts += 1

    raise NoFreeCellError(f"no free cell found after {attempts} attempts")
