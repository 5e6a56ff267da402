"""
Доска 3x3: клетки, исход партии и выигрышная линия.
Ничего не знает об игроках и сети.
"""
import logging

from .constants import BOARD_SIZE, CELL_CHARS, WINNER_OUTCOME, CellState, Outcome, Symbol, WinningLine

logger = logging.getLogger(__name__)


class Board:
    def __init__(self) -> None:
        self._cells: list[list[CellState]] = []
        self._outcome: Outcome | None = None
        self._winning_line: WinningLine | None = None
        self.reset()

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    @property
    def winning_line(self) -> WinningLine | None:
        return self._winning_line

    def reset(self) -> None:
        self._cells = [[CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._outcome = None
        self._winning_line = None

    def cell(self, row: int, col: int) -> CellState:
        return self._cells[row][col]

    def place_cross(self, row: int, col: int) -> bool:
        return self._place(CellState.CROSS, row, col)

    def place_naught(self, row: int, col: int) -> bool:
        return self._place(CellState.NAUGHT, row, col)

    def place(self, symbol: Symbol, row: int, col: int) -> bool:
        if symbol is Symbol.X:
            return self.place_cross(row, col)
        return self.place_naught(row, col)

    def _place(self, state: CellState, row: int, col: int) -> bool:
        """
        Ставит фигуру в пустую клетку. Исход партии не пересчитывается,
        для этого есть evaluate_outcome().
        """
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            logger.info("Invalid position: %s %s (out of range)", row, col)
            return False
        current = self._cells[row][col]
        if current is not CellState.EMPTY:
            logger.info("Invalid position: %s %s val=%s", row, col, current.name)
            return False
        self._cells[row][col] = state
        return True

    def evaluate_outcome(self) -> bool:
        """
        Проверяет все 8 линий: строки сверху вниз, столбцы слева направо,
        диагональ из левого верхнего угла, затем из правого верхнего.
        Засчитывается первая совпавшая линия. Без победы и без пустых
        клеток объявляется ничья. Возвращает True, если партия завершена.
        """
        logger.debug("Evaluating board:\n%s", self)
        for line in WinningLine:
            states = {self._cells[r][c] for r, c in line.cells}
            if len(states) == 1:
                state = states.pop()
                if state is not CellState.EMPTY:
                    self._outcome = WINNER_OUTCOME[state]
                    self._winning_line = line
                    return True
        if self.is_full():
            self._outcome = Outcome.DRAW
            return True
        return False

    def set_abandoned(self) -> None:
        if self._outcome is not None:
            raise RuntimeError(f"game already finished: {self._outcome.value}")
        self._outcome = Outcome.ABANDONED

    def is_full(self) -> bool:
        return all(state is not CellState.EMPTY for row in self._cells for state in row)

    def move_count(self) -> int:
        return sum(state is not CellState.EMPTY for row in self._cells for state in row)

    def layout(self) -> list[int]:
        """Клетки построчно одним списком из 9 чисел (0 пусто, 1 X, 2 O)."""
        return [int(state) for row in self._cells for state in row]

    def __str__(self) -> str:
        return "\n".join(" ".join(CELL_CHARS[state] for state in row) for row in self._cells)
