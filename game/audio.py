"""Sound output. The browser synthesizes; the server only asks."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    def play_tone(self, frequency: float, duration: float, waveform: str, volume: float) -> None: ...

    def set_music(self, on: bool) -> None: ...


class NullAudio:
    """Silent audio sink."""

    def play_tone(self, frequency: float, duration: float, waveform: str, volume: float) -> None:
        pass

    def set_music(self, on: bool) -> None:
        pass


class QueueAudio:
    """Forwards sound requests as messages onto an outgoing queue.

    Fire-and-forget: a full queue drops the request with a warning.
    """

    def __init__(self, outbox: asyncio.Queue[dict[str, Any]]):
        self.outbox = outbox
        self.music_on = False

    def play_tone(self, frequency: float, duration: float, waveform: str, volume: float) -> None:
        self._send({
            "type": "tone",
            "frequency": frequency,
            "duration": duration,
            "waveform": waveform,
            "volume": volume,
        })

    def set_music(self, on: bool) -> None:
        self.music_on = on
        self._send({"type": "music", "on": on})

    def _send(self, message: dict[str, Any]) -> None:
        try:
            self.outbox.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Audio message dropped, outbox full: %s", message["type"])
