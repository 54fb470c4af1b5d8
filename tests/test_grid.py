from game.grid import DOWN, LEFT, RIGHT, UP, Cell, Grid, as_direction


def test_in_bounds_edges():
    grid = Grid(30, 20)
    assert grid.in_bounds(Cell(0, 0))
    assert grid.in_bounds(Cell(29, 19))
    assert not grid.in_bounds(Cell(30, 0))
    assert not grid.in_bounds(Cell(0, 20))
    assert not grid.in_bounds(Cell(-1, 5))
    assert not grid.in_bounds(Cell(5, -1))


def test_moved_and_opposites():
    assert Cell(3, 3).moved(UP) == Cell(3, 2)
    assert Cell(3, 3).moved(RIGHT) == Cell(4, 3)
    assert LEFT.is_opposite(RIGHT)
    assert UP.opposite == DOWN
    assert not UP.is_opposite(LEFT)


def test_as_direction_rejects_non_unit_vectors():
    assert as_direction(0, 1) == DOWN
    assert as_direction(2, 0) is None
    assert as_direction(1, 1) is None
    assert as_direction(0, 0) is None


def test_random_cell_stays_inside(rng):
    grid = Grid(3, 2)
    cells = {grid.random_cell(rng) for _ in range(200)}
    assert all(grid.in_bounds(c) for c in cells)
    assert len(cells) == grid.size
