import numpy as np
import pytest

from draughts.board import Board
from draughts.errors import DraughtsError, InvalidCoordinate, InvalidPieceCode
from draughts.types import Player, PieceType


def test_initial_position_counts():
    board = Board.initial()
    assert board.count_pieces(Player.WHITE) == 12
    assert board.count_pieces(Player.BLACK) == 12
    assert board.count_kings(Player.WHITE) == 0
    assert board.count_men(Player.BLACK) == 12


def test_initial_position_uses_dark_cells_only():
    board = Board.initial()
    for r, c, piece in board.pieces():
        assert Board.is_dark_cell(r, c)
        if piece.is_black:
            assert r <= 2
        else:
            assert r >= 5
    assert board.get_piece(0, 1) is PieceType.BLACK_MAN
    assert board.get_piece(7, 0) is PieceType.WHITE_MAN
    assert board.get_piece(3, 0) is PieceType.EMPTY


def test_pieces_filters_by_player():
    board = Board.initial()
    white = list(board.pieces(Player.WHITE))
    assert len(white) == 12
    assert all(p.is_white for _, _, p in white)


def test_out_of_range_access_raises():
    board = Board()
    with pytest.raises(InvalidCoordinate):
        board.get_piece(8, 0)
    with pytest.raises(InvalidCoordinate):
        board.set_piece(0, -1, PieceType.WHITE_MAN)
    # Also catchable as the builtin it refines.
    with pytest.raises(IndexError):
        board.get_code(-1, 3)


@pytest.mark.parametrize("code", [-1, 5, 99, "x", 1.5])
def test_set_code_rejects_unknown_codes(code):
    board = Board()
    with pytest.raises(InvalidPieceCode):
        board.set_code(0, 1, code)
    assert board.get_piece(0, 1) is PieceType.EMPTY


def test_from_raw_round_trips_and_validates():
    raw = Board.initial().to_raw()
    assert Board.from_raw(raw) == Board.initial()

    with pytest.raises(InvalidPieceCode):
        Board.from_raw(raw[:7])
    bad_row = [list(row) for row in raw]
    bad_row[3] = bad_row[3][:5]
    with pytest.raises(InvalidPieceCode):
        Board.from_raw(bad_row)
    bad_code = [list(row) for row in raw]
    bad_code[4][1] = 7
    with pytest.raises(DraughtsError):
        Board.from_raw(bad_code)


def test_copy_is_independent():
    board = Board.initial()
    clone = board.copy()
    clone.set_piece(5, 0, PieceType.EMPTY)
    assert board.get_piece(5, 0) is PieceType.WHITE_MAN
    assert clone != board


def test_overwrite_from_keeps_identity():
    board = Board()
    storage = board.cells
    board.overwrite_from(Board.initial())
    assert board == Board.initial()
    assert np.shares_memory(storage, board.cells)


def test_equal_boards_hash_equal():
    assert hash(Board.initial()) == hash(Board.initial())
    assert len({Board.initial(), Board.initial(), Board()}) == 2


def test_cells_view_is_read_only():
    board = Board.initial()
    with pytest.raises(ValueError):
        board.cells[0, 1] = 0
    assert board.get_piece(0, 1) is PieceType.BLACK_MAN


def test_str_draws_glyphs():
    board = Board()
    board.set_piece(0, 1, PieceType.BLACK_KING)
    board.set_piece(7, 0, PieceType.WHITE_MAN)
    lines = str(board).splitlines()
    assert lines[1].split()[:3] == ["0", ".", "B"]
    assert lines[8].split()[:2] == ["7", "w"]


def test_stored_codes_map_back_to_piece_types():
    board = Board()
    for col, piece in zip((1, 3, 5, 7), list(PieceType)[1:]):
        board.set_piece(0, col, piece)
        assert board.get_piece(0, col) is piece
    assert [p for _, _, p in board.pieces()] == list(PieceType)[1:]
    assert not hasattr(PieceType, "from_code_or_empty")


@pytest.mark.parametrize("code", [2.7, -1, "2"])
def test_from_code_does_not_coerce(code):
    with pytest.raises(InvalidPieceCode):
        PieceType.from_code(code)
