"""
Клиент игрока: отправка команд серверу и разбор событий.
Для каждого события вызывается свой обработчик on_*, их переопределяют
в наследнике.
"""
import json
import logging
from typing import Any, Protocol

from websockets.sync.client import connect as ws_connect

from .constants import (
    BOARD_SIZE,
    CMD_BOARD_LAYOUT_REQUEST,
    CMD_JOIN,
    CMD_LEAVE,
    CMD_MOVE,
    EVENT_BOARD_LAYOUT_RESPONSE,
    EVENT_ENDGAME,
    EVENT_ERROR,
    EVENT_JOINED,
    EVENT_MOVED,
    CellState,
    Outcome,
    Symbol,
    WinningLine,
)

logger = logging.getLogger(__name__)


class JsonConnection(Protocol):
    def send_json(self, payload: dict[str, Any]) -> None: ...

    def receive_json(self) -> Any: ...


class WebSocketConnection:
    """Синхронное соединение websockets с интерфейсом send_json/receive_json."""

    def __init__(self, url: str):
        self._ws = ws_connect(url)

    def send_json(self, payload: dict[str, Any]) -> None:
        self._ws.send(json.dumps(payload))

    def receive_json(self) -> Any:
        return json.loads(self._ws.recv())

    def close(self) -> None:
        self._ws.close()


def winning_line_from_int(value: Any) -> WinningLine | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return WinningLine(value)
    except ValueError:
        return None


class GameClient:
    def __init__(self, conn: JsonConnection):
        self._conn = conn
        self._parsers = {
            EVENT_JOINED: self._on_joined_message,
            EVENT_MOVED: self._on_moved_message,
            EVENT_ENDGAME: self._on_endgame_message,
            EVENT_BOARD_LAYOUT_RESPONSE: self._on_board_layout_message,
            EVENT_ERROR: self._on_error_message,
        }

    @classmethod
    def connect(cls, url: str) -> "GameClient":
        return cls(WebSocketConnection(url))

    def close(self) -> None:
        close = getattr(self._conn, "close", None)
        if close is not None:
            close()

    # Команды

    def join(self, name: str) -> None:
        logger.debug("join: %s", name)
        self._send({"command": CMD_JOIN, "name": name})

    def move(self, row: int, column: int) -> None:
        logger.debug("move: row=%s column=%s", row, column)
        self._send({"command": CMD_MOVE, "row": row, "column": column})

    def leave(self) -> None:
        self._send({"command": CMD_LEAVE})

    def request_board_layout(self) -> None:
        self._send({"command": CMD_BOARD_LAYOUT_REQUEST})

    def _send(self, payload: dict[str, Any]) -> None:
        self._conn.send_json(payload)

    # События

    def receive(self) -> str | None:
        """Читает одно сообщение и вызывает обработчик. Возвращает имя события."""
        return self.dispatch(self._conn.receive_json())

    def dispatch(self, message: Any) -> str | None:
        """
        Неизвестные события и сообщения с неверными полями логируются
        и пропускаются, в этом случае возвращается None.
        """
        if not isinstance(message, dict) or "event" not in message:
            logger.warning("client: message without event: %r", message)
            return None
        event = message["event"]
        parser = self._parsers.get(event) if isinstance(event, str) else None
        if parser is None:
            logger.warning("client: unknown event %r", event)
            return None
        try:
            parser(message)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("client: bad %s message %r: %s", event, message, e)
            return None
        return event

    def _on_joined_message(self, message: dict[str, Any]) -> None:
        self.on_joined(Symbol(message["player"]), message["opponent"])

    def _on_moved_message(self, message: dict[str, Any]) -> None:
        self.on_moved(
            Symbol(message["player"]),
            int(message["row"]),
            int(message["column"]),
            bool(message["game_over"]),
        )

    def _on_endgame_message(self, message: dict[str, Any]) -> None:
        outcome = Outcome(message["end_state"])
        self.on_endgame(outcome, winning_line_from_int(message.get("winning_location")))

    def _on_board_layout_message(self, message: dict[str, Any]) -> None:
        flat = [CellState(v) for v in message["board"]]
        if len(flat) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"expected {BOARD_SIZE * BOARD_SIZE} cells, got {len(flat)}")
        layout = [flat[r * BOARD_SIZE:(r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE)]
        self.on_board_layout(layout)

    def _on_error_message(self, message: dict[str, Any]) -> None:
        self.on_error(str(message["message"]))

    def on_joined(self, symbol: Symbol, opponent: str) -> None:
        logger.info("client: joined as %s against %s", symbol.value, opponent)

    def on_moved(self, symbol: Symbol, row: int, column: int, game_over: bool) -> None:
        logger.info("client: %s moved to %s,%s game_over=%s", symbol.value, row, column, game_over)

    def on_endgame(self, outcome: Outcome, line: WinningLine | None) -> None:
        logger.info("client: game ended %s line=%s", outcome.value, line.name if line is not None else None)

    def on_board_layout(self, layout: list[list[CellState]]) -> None:
        logger.info("client: board layout %s", [[int(s) for s in row] for row in layout])

    def on_error(self, message: str) -> None:
        logger.info("client: error %s", message)
