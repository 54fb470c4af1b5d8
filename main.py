from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ValidationError

from game.audio import QueueAudio
from game.config import GameConfig, load_config
from game.controls import apply_event, direction_toward, event_from_key, event_from_name
from game.engine import SnakeGame
from game.render import FrameRecorder
from game.state import GameEvent
from game.storage import FileHighScoreStore, HighScoreStore
from game.timer import PeriodicTask

logger = logging.getLogger(__name__)

# Paths
BASE_DIR = Path(__file__).parent
STATIC_DIR = BASE_DIR / "static"

OUTBOX_SIZE = 256


class ClientMessage(BaseModel):
    """Message sent by the browser over the game WebSocket."""

    type: str
    key: str | None = None
    event: str | None = None
    x: float | None = None
    y: float | None = None
    on: bool | None = None


class GameSession:
    """One game per WebSocket connection.

    The engine runs synchronously inside timer callbacks and input
    handlers; everything it wants to tell the browser is queued on
    `outbox` and sent by `pump`.
    """

    def __init__(self, config: GameConfig, store: HighScoreStore):
        self.config = config
        self.outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=OUTBOX_SIZE)
        self.frames = FrameRecorder()
        self.timer = PeriodicTask()
        self.audio = QueueAudio(self.outbox)
        self.game = SnakeGame(
            config,
            timer=self.timer,
            surface=self.frames,
            audio=self.audio,
            store=store,
        )
        self.game.subscribe(self._on_event)

    def _on_event(self, event: GameEvent) -> None:
        if event.type == "state":
            message = {"type": "frame", "ops": self.frames.take(), "state": event.data["state"]}
        else:
            message = event.to_dict()
        try:
            self.outbox.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Outbox full, dropping %s message", message["type"])

    def handle_text(self, data: str) -> None:
        """Apply one raw client message. Anything malformed is ignored."""
        try:
            message = ClientMessage.model_validate(json.loads(data))
        except (ValueError, ValidationError) as e:
            logger.debug("Ignoring malformed message %r: %s", data, e)
            return
        self.handle(message)

    def handle(self, message: ClientMessage) -> None:
        game = self.game
        if message.type == "key" and message.key is not None:
            event = event_from_key(message.key)
            if event is not None:
                apply_event(game, event)
        elif message.type == "input" and message.event is not None:
            event = event_from_name(message.event)
            if event is not None:
                apply_event(game, event)
        elif message.type == "pointer" and message.x is not None and message.y is not None:
            direction = direction_toward(
                game.state.snake.head(), message.x, message.y, self.config.tile
            )
            game.set_direction(direction.dx, direction.dy)
        elif message.type == "canvas_click":
            game.toggle()
        elif message.type == "music" and message.on is not None:
            self.audio.set_music(message.on)
        else:
            logger.debug("Ignoring message of type %r", message.type)

    async def pump(self, websocket: WebSocket) -> None:
        """Send queued messages to the browser until cancelled."""
        while True:
            message = await self.outbox.get()
            await websocket.send_json(message)

    def close(self) -> None:
        self.timer.cancel()


def create_app(config: GameConfig | None = None, store: HighScoreStore | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Game configuration (loaded from YAML/env if omitted)
        store: High score store shared by all sessions

    Returns:
        The application
    """
    config = config or load_config()
    store = store or FileHighScoreStore(config.high_score_path)

    app = FastAPI(title="Snake")
    app.state.config = config
    app.state.store = store

    @app.get("/")
    async def serve_index():
        """Serve the main index.html file."""
        index_path = STATIC_DIR / "index.html"
        if index_path.exists():
            return FileResponse(index_path)
        return {"error": "index.html not found"}

    @app.get("/config")
    async def get_config():
        """Board size, tile size and colors for the client."""
        return config.to_client_dict()

    @app.get("/highscore")
    async def get_highscore():
        return {"high_score": store.load()}

    @app.websocket("/ws/game")
    async def websocket_game(websocket: WebSocket):
        """WebSocket endpoint for real-time game communication."""
        await websocket.accept()

        session = GameSession(config, store)
        sender = asyncio.create_task(session.pump(websocket))
        session.game.redraw()

        try:
            while True:
                data = await websocket.receive_text()
                session.handle_text(data)
        except WebSocketDisconnect:
            logger.info("Client disconnected")
        finally:
            session.close()
            sender.cancel()
            try:
                await sender
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning("Sender stopped with error: %s", e)

    # Mount static files (after all routes)
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


def find_available_port(start_port: int = 8000, max_attempts: int = 100) -> int:
    """Find an available port starting from start_port.

    Args:
        start_port: Port number to start searching from
        max_attempts: Maximum number of ports to try

    Returns:
        An available port number

    Raises:
        RuntimeError: If no available port is found
    """
    import socket

    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("0.0.0.0", port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available port found in range {start_port}-{start_port + max_attempts - 1}")


def main() -> None:
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    default_port = 8000
    port = int(os.environ.get("PORT", 0))
    if not port:
        port = find_available_port(default_port)
        if port != default_port:
            logger.info("Port %d is in use, using port %d instead", default_port, port)

    logger.info("Starting server at http://localhost:%d", port)
    uvicorn.run(create_app(config), host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
