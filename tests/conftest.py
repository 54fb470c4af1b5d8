from __future__ import annotations

import numpy as np
import pytest

from game.config import GameConfig
from game.engine import SnakeGame
from game.render import RasterSurface
from game.storage import MemoryHighScoreStore


class ManualTimer:
    """Timer driven by hand from tests."""

    def __init__(self):
        self.callback = None
        self.interval_ms = None
        self.schedules = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def schedule(self, interval_ms, callback):
        self.callback = callback
        self.interval_ms = interval_ms
        self.schedules += 1

    def cancel(self):
        self.callback = None
        self.cancels += 1

    def fire(self, times: int = 1) -> list:
        results = []
        for _ in range(times):
            if self.callback is None:
                break
            results.append(self.callback())
        return results


class RecordingAudio:
    def __init__(self):
        self.tones = []
        self.music = []

    def play_tone(self, frequency, duration, waveform, volume):
        self.tones.append((frequency, duration, waveform, volume))

    def set_music(self, on):
        self.music.append(on)


@pytest.fixture
def config():
    return GameConfig(seed=7)


@pytest.fixture
def timer():
    return ManualTimer()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def surface(config):
    return RasterSurface(config.cols, config.rows)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_game(config, timer, audio, store, surface):
    def factory(**overrides):
        kwargs = dict(timer=timer, audio=audio, store=store, surface=surface)
        kwargs.update(overrides)
        cfg = kwargs.pop("config", config)
        return SnakeGame(cfg, **kwargs)

    return factory
