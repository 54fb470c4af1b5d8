"""Game configuration: defaults, YAML files and environment overrides."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_CONFIG = "SNAKE_CONFIG"
ENV_HIGHSCORE_FILE = "SNAKE_HIGHSCORE_FILE"
ENV_LOG_LEVEL = "SNAKE_LOG_LEVEL"


class ConfigError(ValueError):
    """Invalid configuration value or key."""


@dataclass(frozen=True)
class Tone:
    """A short beep: frequency in Hz, duration in seconds."""

    frequency: float = 880.0
    duration: float = 0.09
    waveform: str = "sine"
    volume: float = 0.66


@dataclass(frozen=True)
class Palette:
    background: str = "#0b6623"
    food: str = "#ffe347"
    head: str = "#3d0a0a"
    body: str = "#a4e936"


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for one game."""

    cols: int = 30
    rows: int = 20
    tile: int = 20
    initial_length: int = 2
    start_interval_ms: int = 120
    speed_step_ms: int = 3
    min_interval_ms: int = 90
    food_reward: int = 10
    food_max_attempts: int | None = None
    seed: int | None = None
    reward_tone: Tone = field(default_factory=Tone)
    palette: Palette = field(default_factory=Palette)
    high_score_path: str = "highscore.json"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.cols < 2 or self.rows < 2:
            raise ConfigError(f"grid must be at least 2x2, got {self.cols}x{self.rows}")
        if self.tile < 1:
            raise ConfigError("tile must be positive")
        if not 1 <= self.initial_length <= self.cols:
            raise ConfigError(
                f"initial_length {self.initial_length} does not fit a grid {self.cols} wide"
            )
        if self.start_interval_ms <= 0 or self.min_interval_ms <= 0:
            raise ConfigError("tick intervals must be positive")
        if self.min_interval_ms > self.start_interval_ms:
            raise ConfigError("min_interval_ms cannot exceed start_interval_ms")
        if self.speed_step_ms < 0:
            raise ConfigError("speed_step_ms cannot be negative")
        if self.food_reward < 0:
            raise ConfigError("food_reward cannot be negative")
        if self.food_max_attempts is not None and self.food_max_attempts < 1:
            raise ConfigError("food_max_attempts must be at least 1")

    def to_client_dict(self) -> dict[str, Any]:
        """Settings the browser needs to size and paint the board."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "tile": self.tile,
            "palette": dataclasses.asdict(self.palette),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameConfig:
        """Build a config from a (possibly partial) mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong shape
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        values = dict(data)
        try:
            if isinstance(values.get("reward_tone"), Mapping):
                values["reward_tone"] = Tone(**values["reward_tone"])
            if isinstance(values.get("palette"), Mapping):
                values["palette"] = Palette(**values["palette"])
            return cls(**values)
        except TypeError as e:
            raise ConfigError(str(e)) from e


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> GameConfig:
    """Load configuration from YAML file merged over defaults.

    The file path comes from `path`, else the SNAKE_CONFIG environment
    variable; without either the defaults are used. SNAKE_HIGHSCORE_FILE
    and SNAKE_LOG_LEVEL override the matching settings.

    Args:
        path: Optional path to a YAML config file
        env: Environment mapping (defaults to os.environ after loading .env)

    Returns:
        Validated GameConfig
    """
    if env is None:
        load_dotenv()
        env = os.environ

    path = path or env.get(ENV_CONFIG)
    data: dict[str, Any] = {}
    if path:
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path}: expected a mapping at top level")
        data.update(loaded)
        logger.debug("Loaded config from %s", path)

    if env.get(ENV_HIGHSCORE_FILE):
        data["high_score_path"] = env[ENV_HIGHSCORE_FILE]
    if env.get(ENV_LOG_LEVEL):
        data["log_level"] = env[ENV_LOG_LEVEL]

    return GameConfig.from_dict(data)
