import pytest

from conftest import EMPTY_LAYOUT, board_from
from tictactoe.board import Board
from tictactoe.constants import CellState, Outcome, Symbol, WinningLine


def test_new_board_is_empty_and_in_progress():
    board = Board()
    assert board.layout() == EMPTY_LAYOUT
    assert board.outcome is None
    assert board.winning_line is None
    assert board.move_count() == 0


def test_place_sets_cell_without_evaluating():
    board = board_from("XXX / ... / ...")
    assert board.cell(0, 1) is CellState.CROSS
    assert board.outcome is None


def test_place_into_occupied_cell_fails_and_keeps_board():
    board = Board()
    assert board.place_cross(1, 1)
    before = board.layout()
    assert not board.place_naught(1, 1)
    assert not board.place_cross(1, 1)
    assert board.layout() == before
    assert board.cell(1, 1) is CellState.CROSS


@pytest.mark.parametrize("row,col", [(-1, 0), (0, 3), (3, 3), (0, -1)])
def test_place_out_of_range_fails(row, col):
    board = Board()
    assert not board.place_cross(row, col)
    assert board.layout() == EMPTY_LAYOUT


def test_place_dispatches_by_symbol():
    board = Board()
    assert board.place(Symbol.X, 0, 0)
    assert board.place(Symbol.O, 2, 2)
    assert board.layout() == [1, 0, 0, 0, 0, 0, 0, 0, 2]


@pytest.mark.parametrize(
    "rows,outcome,line",
    [
        ("XXX / OO. / ...", Outcome.X_WON, WinningLine.ROW_0),
        ("XX. / OOO / X..", Outcome.O_WON, WinningLine.ROW_1),
        ("OO. / X.. / XXX", Outcome.X_WON, WinningLine.ROW_2),
        ("OX. / OX. / O.X", Outcome.O_WON, WinningLine.COLUMN_0),
        (".XO / .X. / OX.", Outcome.X_WON, WinningLine.COLUMN_1),
        ("X.O / X.O / ..O", Outcome.O_WON, WinningLine.COLUMN_2),
        ("XO. / OX. / ..X", Outcome.X_WON, WinningLine.DIAGONAL_TOPLEFT),
        ("XXO / XO. / O..", Outcome.O_WON, WinningLine.DIAGONAL_TOPRIGHT),
    ],
)
def test_every_line_wins(rows, outcome, line):
    board = board_from(rows)
    assert board.evaluate_outcome() is True
    assert board.outcome is outcome
    assert board.winning_line is line


def test_first_matching_line_is_reported():
    board = board_from("XXX / X.. / X..")
    assert board.evaluate_outcome()
    assert board.winning_line is WinningLine.ROW_0


def test_full_board_without_line_is_draw():
    board = board_from("XOX / XOO / OXX")
    assert board.evaluate_outcome() is True
    assert board.outcome is Outcome.DRAW
    assert board.winning_line is None


def test_win_on_last_cell_is_not_draw():
    board = board_from("XOX / OXO / OXX")
    assert board.evaluate_outcome()
    assert board.outcome is Outcome.X_WON
    assert board.winning_line is WinningLine.DIAGONAL_TOPLEFT


def test_game_continues_until_line_or_full():
    board = Board()
    moves = [(0, 0), (1, 1), (0, 1), (0, 2), (2, 0), (1, 0), (1, 2), (2, 1)]
    for i, (r, c) in enumerate(moves):
        board.place(Symbol.X if i % 2 == 0 else Symbol.O, r, c)
        assert board.evaluate_outcome() is False
        assert board.outcome is None
    board.place(Symbol.X, 2, 2)
    assert board.evaluate_outcome() is True


def test_set_abandoned():
    board = board_from("X.. / ... / ...")
    board.set_abandoned()
    assert board.outcome is Outcome.ABANDONED
    assert board.winning_line is None


def test_set_abandoned_after_finish_raises():
    board = board_from("XXX / OO. / ...")
    board.evaluate_outcome()
    with pytest.raises(RuntimeError):
        board.set_abandoned()
    assert board.outcome is Outcome.X_WON


def test_reset_clears_cells_and_outcome():
    board = board_from("XXX / OO. / ...")
    board.evaluate_outcome()
    board.reset()
    assert board.layout() == EMPTY_LAYOUT
    assert board.outcome is None
    assert board.winning_line is None


def test_str_renders_grid():
    assert str(board_from("X.. / .O. / ...")) == "X . .\n. O .\n. . ."


def test_winning_line_cells():
    assert WinningLine.ROW_2.cells == ((2, 0), (2, 1), (2, 2))
    assert WinningLine.COLUMN_1.cells == ((0, 1), (1, 1), (2, 1))
    assert WinningLine.DIAGONAL_TOPRIGHT.cells == ((0, 2), (1, 1), (2, 0))
