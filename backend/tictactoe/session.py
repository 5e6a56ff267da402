"""
Координатор сессии: два места для игроков, очередность ходов и жизненный цикл
партии (начало, ход, конец, брошенная партия).
Все обработчики синхронные, каждое сообщение обрабатывается до конца.
"""
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .board import Board
from .constants import (
    CMD_BOARD_LAYOUT_REQUEST,
    CMD_JOIN,
    CMD_LEAVE,
    CMD_MOVE,
    EVENT_BOARD_LAYOUT_RESPONSE,
    EVENT_ENDGAME,
    EVENT_ERROR,
    EVENT_JOINED,
    EVENT_MOVED,
    BoardLayoutEvent,
    EndgameEvent,
    ErrorEvent,
    JoinedEvent,
    MovedEvent,
    Outcome,
    Symbol,
    WinningLine,
)
from .display import BoardDisplay
from .errors import AlreadyJoined, GameError, GameFull, InvalidMove, NotPlaying, NotYourTurn, UnknownCommand

logger = logging.getLogger(__name__)


class Mailbox(Protocol):
    def send(self, channel: str, payload: dict[str, Any]) -> None: ...

    def channels(self) -> list[str]: ...


class SessionState(str, Enum):
    WAITING_FOR_PLAYERS = "waiting_for_players"
    IN_PROGRESS = "in_progress"


@dataclass
class Participant:
    channel: str
    name: str
    symbol: Symbol | None = None


def joined_payload(player: Participant, opponent: Participant) -> JoinedEvent:
    return {"event": EVENT_JOINED, "player": player.symbol.value, "opponent": opponent.name}


def moved_payload(symbol: Symbol, row: int, column: int, game_over: bool) -> MovedEvent:
    return {"event": EVENT_MOVED, "player": symbol.value, "row": row, "column": column, "game_over": game_over}


def endgame_payload(outcome: Outcome, winning_line: WinningLine | None = None) -> EndgameEvent:
    """Для ничьей и брошенной партии winning_location не передаётся."""
    payload: EndgameEvent = {"event": EVENT_ENDGAME, "end_state": outcome.value}
    if winning_line is not None:
        payload["winning_location"] = int(winning_line)
    return payload


def board_layout_payload(board: Board) -> BoardLayoutEvent:
    return {"event": EVENT_BOARD_LAYOUT_RESPONSE, "board": board.layout()}


def error_payload(message: str) -> ErrorEvent:
    return {"event": EVENT_ERROR, "message": message}


def _coordinate(value: Any) -> int:
    # bool является подклассом int, но координатой не считается
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 2:
        raise InvalidMove()
    return value


class SessionCoordinator:
    def __init__(
        self,
        board: Board,
        mailbox: Mailbox,
        display: BoardDisplay | None = None,
        rng: random.Random | None = None,
    ):
        self._board = board
        self._mailbox = mailbox
        self._display = display or BoardDisplay()
        self._rng = rng or random.Random()
        self._first: Participant | None = None
        self._second: Participant | None = None
        self._turn: Symbol | None = None
        self._handlers: dict[str, Callable[[str, dict[str, Any]], None]] = {
            CMD_JOIN: lambda ch, msg: self.join(ch, msg.get("name")),
            CMD_LEAVE: lambda ch, msg: self.leave(ch),
            CMD_MOVE: lambda ch, msg: self.move(ch, msg.get("row"), msg.get("column")),
            CMD_BOARD_LAYOUT_REQUEST: lambda ch, msg: self.board_layout_request(ch),
        }

    @property
    def board(self) -> Board:
        return self._board

    @property
    def turn(self) -> Symbol | None:
        return self._turn

    @property
    def players(self) -> tuple[Participant | None, Participant | None]:
        return self._first, self._second

    @property
    def state(self) -> SessionState:
        if self._first is not None and self._second is not None:
            return SessionState.IN_PROGRESS
        return SessionState.WAITING_FOR_PLAYERS

    def handle_message(self, channel: str, message: dict[str, Any]) -> None:
        """
        Выбирает обработчик по полю command. Ошибки игры уходят
        отправителю сообщением error, состояние при этом не меняется.
        """
        command = message.get("command")
        logger.debug("Session: %s from %s, first=%s second=%s", command, channel, self._first, self._second)
        try:
            handler = self._handlers.get(command) if isinstance(command, str) else None
            if handler is None:
                raise UnknownCommand(f"Invalid message command: {command}")
            handler(channel, message)
        except GameError as e:
            logger.info("Session: %s from %s rejected: %s", command, channel, e.message)
            self._mailbox.send(channel, error_payload(e.message))

    def _slot_of(self, channel: str) -> Participant | None:
        for p in (self._first, self._second):
            if p is not None and p.channel == channel:
                return p
        return None

    def join(self, channel: str, name: Any = None) -> None:
        existing = self._slot_of(channel)
        if existing is not None:
            symbol = f" {existing.symbol.value}" if existing.symbol else ""
            raise AlreadyJoined(f"You are already{symbol} in the game. You aren't allowed to play against yourself.")
        if not isinstance(name, str) or not name.strip():
            name = f"player_{channel[:8]}"
        player = Participant(channel=channel, name=name)
        if self._first is None:
            self._first = player
        elif self._second is None:
            self._second = player
        else:
            logger.info("Session: %s unable to join a full game", channel)
            raise GameFull()
        logger.info("Session: %s joined as %r", channel, name)
        if self._first is not None and self._second is not None:
            self._start_game()

    def _start_game(self) -> None:
        first, second = self._first, self._second
        self._board.reset()
        self._display.clear()
        if self._rng.random() < 0.5:
            first.symbol, second.symbol = Symbol.X, Symbol.O
        else:
            first.symbol, second.symbol = Symbol.O, Symbol.X
        self._turn = Symbol.X
        logger.info(
            "Session: game started, %s=%s %s=%s",
            first.symbol.value, first.name, second.symbol.value, second.name,
        )
        self._mailbox.send(first.channel, joined_payload(first, second))
        self._mailbox.send(second.channel, joined_payload(second, first))

    def leave(self, channel: str) -> None:
        """
        Освобождает место игрока. Если исход партии ещё не определён, партия
        считается брошенной: всем рассылается endgame, и оба места очищаются,
        даже если второе было свободно.
        """
        if self._slot_of(channel) is None:
            logger.info("Session: %s left, but it holds no seat", channel)
            return
        if self._first is not None and self._first.channel == channel:
            self._first = None
        else:
            self._second = None
        logger.info("Session: %s left the game", channel)
        if self._board.outcome is None:
            self._board.set_abandoned()
            self._end_game()

    def move(self, channel: str, row: Any, column: Any) -> None:
        if self._first is None or self._second is None:
            raise NotPlaying("The game has not started.")
        player = self._slot_of(channel)
        if player is None or player.symbol is None:
            raise NotPlaying()
        if player.symbol is not self._turn:
            raise NotYourTurn()
        row, column = _coordinate(row), _coordinate(column)
        if not self._board.place(player.symbol, row, column):
            raise InvalidMove()

        game_over = self._board.evaluate_outcome()
        self._display.draw_move(player.symbol, row, column)
        logger.info("Session: %s played %s,%s game_over=%s", player.symbol.value, row, column, game_over)
        self._broadcast(moved_payload(player.symbol, row, column, game_over))
        if game_over:
            if self._board.winning_line is not None:
                self._display.draw_winning_line(self._board.winning_line)
            self._end_game()
        else:
            self._turn = self._turn.other()

    def board_layout_request(self, channel: str) -> None:
        self._mailbox.send(channel, board_layout_payload(self._board))

    def channel_opened(self, channel: str) -> None:
        logger.info("Session: channel %s opened, total channels: %d", channel, len(self._mailbox.channels()))

    def channel_closed(self, channel: str) -> None:
        remaining = len(self._mailbox.channels())
        logger.info("Session: channel %s closed, total channels: %d", channel, remaining)
        self.leave(channel)
        if remaining == 0:
            self._display.close()

    def _end_game(self) -> None:
        outcome = self._board.outcome
        logger.info("Session: game ended %s", outcome.value)
        self._first = None
        self._second = None
        self._turn = None
        self._broadcast(endgame_payload(outcome, self._board.winning_line))

    def _broadcast(self, payload: dict[str, Any]) -> None:
        for channel in self._mailbox.channels():
            self._mailbox.send(channel, payload)
