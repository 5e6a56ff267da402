"""
Tic-Tac-Toe API и WebSocket.
"""
import logging

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .board import Board
from .config import get_config
from .display import BoardDisplay
from .session import SessionCoordinator
from .ws_handlers import ws_channel_loop
from .ws_manager import WSManager

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(coordinator: SessionCoordinator | None = None, manager: WSManager | None = None) -> FastAPI:
    """У каждого приложения своя доска и своя пара мест для игроков."""
    manager = manager or WSManager()
    coordinator = coordinator or SessionCoordinator(Board(), manager, BoardDisplay())

    app = FastAPI(title="Tic-Tac-Toe API")
    app.state.manager = manager
    app.state.coordinator = coordinator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/board")
    async def board_snapshot():
        board = coordinator.board
        return {
            "board": board.layout(),
            "state": coordinator.state.value,
            "turn": coordinator.turn.value if coordinator.turn else None,
            "outcome": board.outcome.value if board.outcome else None,
            "winning_location": int(board.winning_line) if board.winning_line is not None else None,
            "moves": board.move_count(),
            "players": [
                {"name": p.name, "symbol": p.symbol.value if p.symbol else None}
                for p in coordinator.players
                if p is not None
            ],
            "channels": manager.count(),
        }

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        logger.info("WS: connection attempt from %s", ws.client)
        await ws_channel_loop(ws, manager, coordinator)

    return app


app = create_app()


def run() -> None:
    uvicorn.run("tictactoe.main:app", host=config.host, port=config.port, log_level=config.log_level.lower())
