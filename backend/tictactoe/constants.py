"""Константы игры: состояния клеток, символы, исходы, линии и протокол."""
from enum import Enum, IntEnum
from typing import NotRequired, TypedDict

BOARD_SIZE = 3


class CellState(IntEnum):
    EMPTY = 0
    CROSS = 1
    NAUGHT = 2


class Symbol(str, Enum):
    X = "X"
    O = "O"

    def other(self) -> "Symbol":
        return Symbol.O if self is Symbol.X else Symbol.X

    @property
    def cell_state(self) -> CellState:
        return CellState.CROSS if self is Symbol.X else CellState.NAUGHT


class Outcome(str, Enum):
    X_WON = "X-won"
    O_WON = "O-won"
    DRAW = "draw"
    ABANDONED = "abandoned"


class WinningLine(IntEnum):
    """Порядок значений совпадает с порядком проверки линий."""

    ROW_0 = 0
    ROW_1 = 1
    ROW_2 = 2
    COLUMN_0 = 3
    COLUMN_1 = 4
    COLUMN_2 = 5
    DIAGONAL_TOPLEFT = 6
    DIAGONAL_TOPRIGHT = 7

    @property
    def cells(self) -> tuple[tuple[int, int], ...]:
        if self <= WinningLine.ROW_2:
            return tuple((self.value, c) for c in range(BOARD_SIZE))
        if self <= WinningLine.COLUMN_2:
            col = self.value - WinningLine.COLUMN_0
            return tuple((r, col) for r in range(BOARD_SIZE))
        if self is WinningLine.DIAGONAL_TOPLEFT:
            return tuple((i, i) for i in range(BOARD_SIZE))
        return tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE))


CELL_CHARS = {CellState.EMPTY: ".", CellState.CROSS: "X", CellState.NAUGHT: "O"}

WINNER_OUTCOME: dict[CellState, Outcome] = {
    CellState.CROSS: Outcome.X_WON,
    CellState.NAUGHT: Outcome.O_WON,
}

# Входящие команды
CMD_JOIN = "join"
CMD_LEAVE = "leave"
CMD_MOVE = "move"
CMD_BOARD_LAYOUT_REQUEST = "board_layout_request"

# Исходящие события
EVENT_JOINED = "joined"
EVENT_MOVED = "moved"
EVENT_ENDGAME = "endgame"
EVENT_BOARD_LAYOUT_RESPONSE = "board_layout_response"
EVENT_ERROR = "error"


class JoinedEvent(TypedDict):
    event: str
    player: str
    opponent: str


class MovedEvent(TypedDict):
    event: str
    player: str
    row: int
    column: int
    game_over: bool


class EndgameEvent(TypedDict):
    event: str
    end_state: str
    winning_location: NotRequired[int]


class BoardLayoutEvent(TypedDict):
    event: str
    board: list[int]


class ErrorEvent(TypedDict):
    event: str
    message: str
