"""
Поверхность отображения доски. На сервере вместо canvas используется лог.
"""
import logging

from .constants import BOARD_SIZE, CELL_CHARS, CellState, Symbol, WinningLine

logger = logging.getLogger(__name__)


class BoardDisplay:
    def __init__(self) -> None:
        self._grid: list[list[CellState]] = []
        self.closed = False
        self.winning_line: WinningLine | None = None
        self.clear()

    def clear(self) -> None:
        self._grid = [[CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.winning_line = None
        self.closed = False
        logger.info("Display: board cleared")

    def draw_move(self, symbol: Symbol, row: int, col: int) -> None:
        if self.closed:
            logger.debug("Display: closed, skipping %s at %s,%s", symbol.value, row, col)
            return
        self._grid[row][col] = symbol.cell_state
        logger.info("Display: %s at %s,%s\n%s", symbol.value, row, col, self.render())

    def draw_winning_line(self, line: WinningLine) -> None:
        if self.closed:
            logger.debug("Display: closed, skipping winning line %s", line.name)
            return
        self.winning_line = line
        logger.info("Display: winning line %s through %s", line.name, list(line.cells))

    def close(self) -> None:
        self.closed = True
        logger.info("Display: no channels left, closing")

    def render(self) -> str:
        return "\n".join(" ".join(CELL_CHARS[s] for s in row) for row in self._grid)
