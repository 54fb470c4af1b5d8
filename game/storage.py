"""High score persistence."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score in memory only."""

    def __init__(self, score: int = 0):
        self.score = score
        self.saves = 0

    def load(self) -> int:
        return self.score

    def save(self, score: int) -> None:
        self.score = score
        self.saves += 1


class FileHighScoreStore:
    """Persists the high score as a small JSON file.

    Read and write failures are logged and swallowed; a missing or
    unreadable file counts as a high score of 0.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path) as f:
                data = json.load(f)
            score = int(data.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0
        return max(score, 0)

    def save(self, score: int) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w") as f:
                json.dump({"high_score": score}, f)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
