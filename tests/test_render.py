from game.config import Palette
from game.grid import Cell
from game.render import FrameRecorder, RasterSurface, draw_state
from game.snake import Snake
from game.state import GameState


def make_state():
    return GameState(snake=Snake([(1, 1), (2, 1)]), cols=4, rows=3, food=Cell(3, 2))


def test_raster_paints_snake_and_food():
    surface = RasterSurface(4, 3)
    palette = Palette()
    draw_state(surface, make_state(), palette)
    assert surface.color_at(2, 1) == palette.head
    assert surface.color_at(1, 1) == palette.body
    assert surface.color_at(3, 2) == palette.food
    assert surface.count(palette.background) == 9
    symbols = {palette.head: "H", palette.body: "b", palette.food: "*", palette.background: "."}
    assert surface.to_text(symbols) == "....\n.bH.\n...*"


def test_recorder_starts_frame_at_clear():
    recorder = FrameRecorder()
    recorder.draw_cell(0, 0, "#fff")
    draw_state(recorder, make_state(), Palette())
    ops = recorder.take()
    assert ops[0] == {"op": "clear", "color": Palette().background}
    assert [op["op"] for op in ops[1:]] == ["cell"] * 3
    assert recorder.take() == []


def test_missing_food_not_drawn():
    state = make_state()
    state.food = None
    recorder = FrameRecorder()
    draw_state(recorder, state, Palette())
    assert len(recorder.take()) == 3
