import pytest

from blockfall.board import BOARD_HEIGHT, BOARD_WIDTH, Board
from blockfall.tetromino import PieceType


def _fill_row(board, y, kind=PieceType.I):
    for x in range(BOARD_WIDTH):
        board.occupy(x, y, kind)


def test_new_board_is_empty():
    board = Board()
    assert all(
        board.cell_type(x, y) is None
        for x in range(BOARD_WIDTH)
        for y in range(BOARD_HEIGHT)
    )


@pytest.mark.parametrize("x", [-1, BOARD_WIDTH])
def test_walls_are_occupied(x):
    assert Board().is_occupied(x, 5) is True


def test_floor_is_occupied():
    assert Board().is_occupied(3, BOARD_HEIGHT) is True


def test_above_board_is_free():
    assert Board().is_occupied(3, -2) is False


def test_occupy_marks_cell():
    board = Board()
    board.occupy(2, 7, PieceType.Z)
    assert board.is_occupied(2, 7) is True
    assert board.cell_type(2, 7) is PieceType.Z
    assert board.is_occupied(3, 7) is False


def test_occupy_out_of_range_is_ignored():
    board = Board()
    board.occupy(-1, 0, PieceType.Z)
    board.occupy(0, BOARD_HEIGHT, PieceType.Z)
    assert board.cell_type(-1, 0) is None
    assert board.cell_type(0, BOARD_HEIGHT) is None
    assert not any(
        board.is_occupied(x, y) for x in range(BOARD_WIDTH) for y in range(BOARD_HEIGHT)
    )


def test_no_full_lines():
    board = Board()
    board.occupy(0, BOARD_HEIGHT - 1, PieceType.T)
    assert board.clear_full_lines() == 0
    assert board.cell_type(0, BOARD_HEIGHT - 1) is PieceType.T


def test_clear_single_line_shifts_down():
    board = Board()
    _fill_row(board, BOARD_HEIGHT - 1)
    board.occupy(0, BOARD_HEIGHT - 2, PieceType.S)
    assert board.clear_full_lines() == 1
    assert board.cell_type(0, BOARD_HEIGHT - 1) is PieceType.S
    assert board.cell_type(0, BOARD_HEIGHT - 2) is None
    assert board.cell_type(1, BOARD_HEIGHT - 1) is None


def test_clear_separated_lines():
    board = Board()
    _fill_row(board, BOARD_HEIGHT - 1)
    _fill_row(board, BOARD_HEIGHT - 3)
    board.occupy(4, BOARD_HEIGHT - 2, PieceType.L)
    board.occupy(5, BOARD_HEIGHT - 4, PieceType.J)
    assert board.clear_full_lines() == 2
    assert board.cell_type(4, BOARD_HEIGHT - 1) is PieceType.L
    assert board.cell_type(5, BOARD_HEIGHT - 2) is PieceType.J
    assert board.cell_type(5, BOARD_HEIGHT - 4) is None


def test_clear_adjacent_lines_keeps_height():
    board = Board()
    for y in range(BOARD_HEIGHT - 4, BOARD_HEIGHT):
        _fill_row(board, y)
    assert board.clear_full_lines() == 4
    assert not any(
        board.is_occupied(x, y) for x in range(BOARD_WIDTH) for y in range(BOARD_HEIGHT)
    )
    assert board.clear_full_lines() == 0