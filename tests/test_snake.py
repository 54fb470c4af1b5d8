import pytest

from game.grid import Cell
from game.snake import Snake


def test_centered_default_board():
    snake = Snake.centered(30, 20, 2)
    assert snake.cells == [Cell(14, 10), Cell(15, 10)]
    assert snake.head() == Cell(15, 10)
    assert snake.tail() == Cell(14, 10)


def test_centered_rejects_snake_wider_than_board():
    with pytest.raises(ValueError):
        Snake.centered(4, 4, 5)


def test_advance_without_growth_keeps_length():
    snake = Snake([(1, 1), (2, 1)])
    snake.advance(Cell(3, 1), grow=False)
    assert snake.cells == [Cell(2, 1), Cell(3, 1)]


def test_advance_with_growth_keeps_tail():
    snake = Snake([(1, 1), (2, 1)])
    snake.advance(Cell(3, 1), grow=True)
    assert len(snake) == 3
    assert snake.tail() == Cell(1, 1)
    assert snake.head() == Cell(3, 1)


def test_occupies():
    snake = Snake([(1, 1), (2, 1)])
    assert snake.occupies(Cell(1, 1))
    assert not snake.occupies(Cell(3, 1))


def test_empty_snake_not_allowed():
    with pytest.raises(ValueError):
        Snake([])
