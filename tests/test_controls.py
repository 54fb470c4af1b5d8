import pytest

from game.controls import InputEvent, apply_event, direction_toward, event_from_key, event_from_name
from game.grid import DOWN, LEFT, RIGHT, UP, Cell
from game.state import RunState


@pytest.mark.parametrize(
    "key, event",
    [
        ("ArrowUp", InputEvent.UP),
        ("w", InputEvent.UP),
        ("S", InputEvent.DOWN),
        ("arrowleft", InputEvent.LEFT),
        ("d", InputEvent.RIGHT),
        (" ", InputEvent.TOGGLE_PAUSE),
        ("Spacebar", InputEvent.TOGGLE_PAUSE),
    ],
)
def test_key_bindings(key, event):
    assert event_from_key(key) is event


def test_unbound_keys_ignored():
    assert event_from_key("q") is None
    assert event_from_key("") is None
    assert event_from_name("jump") is None
    assert event_from_name("start") is InputEvent.START


def test_pointer_direction():
    head = Cell(5, 5)  # pixel center (110, 110) with 20px tiles
    assert direction_toward(head, 200, 120, 20) == RIGHT
    assert direction_toward(head, 10, 100, 20) == LEFT
    assert direction_toward(head, 115, 300, 20) == DOWN
    assert direction_toward(head, 100, 0, 20) == UP


def test_apply_events(make_game, timer):
    game = make_game()
    apply_event(game, InputEvent.UP)
    assert game.state.pending == UP

    apply_event(game, InputEvent.TOGGLE_PAUSE)
    assert game.run_state is RunState.RUNNING
    apply_event(game, InputEvent.TOGGLE_PAUSE)
    assert game.run_state is RunState.PAUSED


def test_start_event_begins_fresh_game(make_game, timer):
    game = make_game()
    game.start()
    game.state.score = 40
    apply_event(game, InputEvent.START)
    assert game.state.score == 0
    assert game.run_state is RunState.RUNNING
    assert timer.active
