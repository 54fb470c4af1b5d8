"""Snake body: an ordered chain of cells, tail first, head last."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from .grid import Cell


class Snake:
    """Ordered sequence of occupied cells.

    The head is the most recently appended cell. The snake performs no
    bounds or collision checking of its own; that is the engine's job.
    """

    def __init__(self, cells: Iterable[Cell]):
        self._body: deque[Cell] = deque(Cell(*c) for c in cells)
        if not self._body:
            raise ValueError("Snake needs at least one cell")

    @classmethod
    def centered(cls, cols: int, rows: int, length: int) -> Snake:
        """Create a horizontal snake centered on the board with its head on the right.

        For a 30x20 board and length 2 this gives tail (14, 10) and head (15, 10).
        """
        if length < 1 or length > cols:
            raise ValueError(f"initial length {length} does not fit a board {cols} wide")
        head_x = min(cols - 1, cols // 2 + (length - 1) // 2)
        y = rows // 2
        return cls(Cell(x, y) for x in range(head_x - length + 1, head_x + 1))

    def head(self) -> Cell:
        return self._body[-1]

    def tail(self) -> Cell:
        return self._body[0]

    def advance(self, new_head: Cell, grow: bool) -> None:
        """Append `new_head`; drop the tail unless growing."""
        self._body.append(new_head)
        if not grow:
            self._body.popleft()

    def occupies(self, cell: Cell) -> bool:
        return cell in self._body

    @property
    def cells(self) -> list[Cell]:
        return list(self._body)

    def __len__(self) -> int:
        return len(self._body)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._body)

    def __repr__(self) -> str:
        return f"Snake({list(self._body)!r})"
