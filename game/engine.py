from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import numpy as np

from .audio import AudioSink, NullAudio
from .config import GameConfig
from .food import NoFreeCellError, place_food
from .grid import RIGHT, Grid, as_direction
from .render import Surface, draw_state
from .snake import Snake
from .state import GameEvent, GameState, RunState, TickOutcome
from .storage import HighScoreStore, MemoryHighScoreStore
from .timer import Timer

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent], None]


class SnakeGame:
    """Tick-driven Snake state machine.

    Owns a single GameState. Collaborators (timer, drawing surface, audio,
    high score store) are injected; failures in surface, audio or store
    calls are logged and never interrupt the game.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        timer: Timer,
        surface: Surface | None = None,
        audio: AudioSink | None = None,
        store: HighScoreStore | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the game in the Idle state.

        Args:
            config: Game constants (defaults if omitted)
            timer: Periodic timer that will call `tick`
            surface: Where frames are drawn
            audio: Where reward tones go
            store: High score persistence
            rng: Random generator for food placement (seeded from config if omitted)
        """
        self.config = config or GameConfig()
        self.grid = Grid(self.config.cols, self.config.rows)
        self.timer = timer
        self.surface = surface
        self.audio = audio or NullAudio()
        self.store = store or MemoryHighScoreStore()
        self.rng = rng or np.random.default_rng(self.config.seed)
        self._listeners: list[Listener] = []

        high_score = self._safe(self.store.load, default=0)
        self.state = GameState(
            snake=Snake.centered(self.config.cols, self.config.rows, self.config.initial_length),
            cols=self.config.cols,
            rows=self.config.rows,
            high_score=max(int(high_score or 0), 0),
        )
        self.reset()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, type_: str, **data: Any) -> None:
        event = GameEvent(type_, data)
        for listener in list(self._listeners):
            self._safe(listener, event)

    def _safe(self, fn: Callable[..., Any], *args: Any, default: Any = None) -> Any:
        try:
            return fn(*args)
        except Exception as e:
            logger.warning("Collaborator call %s failed: %s", getattr(fn, "__qualname__", fn), e)
            return default

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def run_state(self) -> RunState:
        return self.state.run_state

    def _set_run_state(self, run_state: RunState) -> None:
        if self.state.run_state is run_state:
            return
        self.state.run_state = run_state
        logger.info("Run state -> %s", run_state.value)
        self._emit("run_state", run_state=run_state.value)

    def reset(self) -> GameState:
        """Start a fresh game in the Idle state.

        Snake, direction, score, speed and food are reinitialized; the high
        score is kept. Any pending tick is cancelled.

        Returns:
            The new GameState
        """
        self.timer.cancel()
        state = self.state
        state.snake = Snake.centered(self.config.cols, self.config.rows, self.config.initial_length)
        state.direction = RIGHT
        state.pending = RIGHT
        state.score = 0
        state.interval_ms = self.config.start_interval_ms
        state.ticks = 0
        state.food = None
        self._place_food()
        self._set_run_state(RunState.IDLE)
        self.redraw()
        return state

    def start(self) -> None:
        """Begin or resume ticking. A finished game is reset first."""
        if self.state.run_state is RunState.RUNNING:
            return
        if self.state.run_state is RunState.GAME_OVER:
            self.reset()
        self._set_run_state(RunState.RUNNING)
        self.timer.schedule(self.state.interval_ms, self._on_timer)

    def resume(self) -> None:
        if self.state.run_state is RunState.PAUSED:
            self.start()

    def pause(self) -> None:
        if self.state.run_state is not RunState.RUNNING:
            return
        self.timer.cancel()
        self._set_run_state(RunState.PAUSED)

    def toggle(self) -> None:
        """Pause a running game, or start an idle/paused one. Ignored after game over."""
        if self.state.run_state is RunState.RUNNING:
            self.pause()
        elif self.state.run_state in (RunState.IDLE, RunState.PAUSED):
            self.start()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def set_direction(self, dx: int, dy: int) -> bool:
        """Request a new heading for the next tick.

        Only the latest request between two ticks counts. A request that
        reverses the current heading, or is not a unit step, is ignored.

        Returns:
            True if the request was accepted
        """
        direction = as_direction(dx, dy)
        if direction is None:
            logger.debug("Ignoring non-unit direction (%s, %s)", dx, dy)
            return False
        if direction.is_opposite(self.state.direction):
            return False
        self.state.pending = direction
        return True

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def tick(self) -> TickOutcome:
        """Advance the game by one step.

        Returns:
            What happened on this tick
        """
        state = self.state
        if state.run_state is not RunState.RUNNING:
            return TickOutcome.IDLE

        state.direction = state.pending
        new_head = state.snake.head().moved(state.direction)

        if not self.grid.in_bounds(new_head):
            return self._game_over(TickOutcome.WALL)
        if state.snake.occupies(new_head):
            return self._game_over(TickOutcome.SELF)

        grow = state.food is not None and new_head == state.food
        state.snake.advance(new_head, grow)
        state.ticks += 1

        outcome = TickOutcome.MOVED
        if grow:
            self._eat()
            outcome = TickOutcome.ATE
        elif state.food is None:
            # A bounded placement may have given up while the board still had room
            self._place_food()

        self.redraw()
        return outcome

    def _on_timer(self) -> TickOutcome:
        try:
            return self.tick()
        except Exception:
            logger.exception("Tick failed, pausing game")
            self.timer.cancel()
            self._set_run_state(RunState.PAUSED)
            self._emit("error", message="tick failed")
            return TickOutcome.IDLE

    def _eat(self) -> None:
        state = self.state
        config = self.config
        state.score += config.food_reward
        tone = config.reward_tone
        self._safe(self.audio.play_tone, tone.frequency, tone.duration, tone.waveform, tone.volume)
        self._emit("score", score=state.score)

        # Another game sharing the store may have saved a higher score since we loaded
        stored = self._safe(self.store.load, default=0)
        state.high_score = max(state.high_score, int(stored or 0))
        if state.score > state.high_score:
            state.high_score = state.score
            logger.info("New high score %d", state.high_score)
            self._safe(self.store.save, state.high_score)
            self._emit("high_score", high_score=state.high_score)

        state.food = None
        self._place_food()

        interval = max(config.min_interval_ms, state.interval_ms - config.speed_step_ms)
        if interval != state.interval_ms:
            state.interval_ms = interval
            self.timer.schedule(interval, self._on_timer)

    def _place_food(self) -> None:
        try:
            self.state.food = place_food(
                self.state.snake, self.grid, self.rng, self.config.food_max_attempts
            )
        except NoFreeCellError as e:
            logger.info("No room for food: %s", e)
            self.state.food = None
            self._emit("board_full", score=self.state.score)

    def _game_over(self, outcome: TickOutcome) -> TickOutcome:
        self.timer.cancel()
        self._set_run_state(RunState.GAME_OVER)
        logger.info("Game over (%s), final score %d", outcome.value, self.state.score)
        self._emit("game_over", final_score=self.state.score, reason=outcome.value)
        return outcome

    def redraw(self) -> None:
        """Draw the current state and notify listeners."""
        if self.surface is not None:
            self._safe(draw_state, self.surface, self.state, self.config.palette)
        self._emit("state", state=self.state.to_dict())

    def get_state(self) -> dict[str, Any]:
        """JSON-ready snapshot of the current state."""
        return self.state.to_dict()
