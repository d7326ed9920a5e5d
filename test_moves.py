import pytest

from draughts.board import Board
from draughts.moves import MoveGenerator, legal_moves, max_king_captures
from draughts.types import Move, Player, PieceType

# Helpers

def make_board(*pieces):
    """pieces: (row, col, PieceType) triples on an otherwise empty board."""
    board = Board()
    for r, c, piece in pieces:
        board.set_piece(r, c, piece)
    return board


W, WK, B = PieceType.WHITE_MAN, PieceType.WHITE_KING, PieceType.BLACK_MAN


def test_initial_position_quiet_moves_only():
    board = Board.initial()
    moves = legal_moves(board, Player.WHITE, mandatory_capture=True)
    # Row 5 men sit on cols 0, 2, 4, 6; the col-0 man has a single forward diagonal.
    assert len(moves) == 7
    assert not any(m.is_capture for m in moves)
    assert all(m.from_row == 5 and m.to_row == 4 for m in moves)

    black = legal_moves(board, Player.BLACK)
    assert len(black) == 7
    assert all(m.from_row == 2 and m.to_row == 3 for m in black)


def test_man_quiet_moves_are_forward_only():
    board = make_board((4, 3, W), (3, 6, B))
    white = MoveGenerator().piece_moves(board, 4, 3, Player.WHITE)
    assert white == ([], [Move.quiet(4, 3, 3, 2), Move.quiet(4, 3, 3, 4)])

    black = MoveGenerator().piece_moves(board, 3, 6, Player.BLACK)
    assert black == ([], [Move.quiet(3, 6, 4, 5), Move.quiet(3, 6, 4, 7)])


def test_mandatory_capture_excludes_all_quiet_moves():
    # Capturing man at (5,2); the man at (6,7) only has quiet moves.
    board = make_board((5, 2, W), (4, 3, B), (6, 7, W))

    moves = MoveGenerator(mandatory_capture=True).legal_moves(board, Player.WHITE)
    assert moves == [Move.capture(5, 2, 3, 4, 4, 3)]

    relaxed = MoveGenerator(mandatory_capture=False).legal_moves(board, Player.WHITE)
    assert Move.capture(5, 2, 3, 4, 4, 3) in relaxed
    assert Move.quiet(6, 7, 5, 6) in relaxed
    assert Move.quiet(5, 2, 4, 1) in relaxed


def test_man_captures_backwards():
    board = make_board((3, 2, W), (4, 3, B))
    moves = legal_moves(board, Player.WHITE)
    assert moves == [Move.capture(3, 2, 5, 4, 4, 3)]


def test_capture_needs_empty_landing():
    board = make_board((5, 2, W), (4, 3, B), (3, 4, B))
    moves = legal_moves(board, Player.WHITE)
    assert not any(m.is_capture for m in moves)


def test_king_slides_until_blocked():
    board = make_board((7, 0, WK), (4, 3, W))
    captures, quiets = MoveGenerator().piece_moves(board, 7, 0, Player.WHITE)
    assert captures == []
    assert quiets == [Move.quiet(7, 0, 6, 1), Move.quiet(7, 0, 5, 2)]


def test_king_capture_at_distance_lands_on_every_empty_cell():
    board = make_board((7, 0, WK), (5, 2, B))
    moves = legal_moves(board, Player.WHITE)
    assert sorted(m.to_cell for m in moves) == [(0, 7), (1, 6), (2, 5), (3, 4), (4, 3)]
    assert all(m.captured_cell == (5, 2) for m in moves)


def test_king_landing_stops_before_second_piece():
    board = make_board((7, 0, WK), (5, 2, B), (3, 4, W))
    moves = legal_moves(board, Player.WHITE)
    assert moves == [Move.capture(7, 0, 4, 3, 5, 2)]


def test_king_cannot_jump_two_adjacent_pieces():
    board = make_board((7, 0, WK), (5, 2, B), (4, 3, B))
    moves = legal_moves(board, Player.WHITE)
    assert moves == [Move.quiet(7, 0, 6, 1)]


def test_king_keeps_only_landings_with_longest_continuation():
    # Only the (3,4) landing sees the piece on (2,3) for a second capture.
    board = make_board((7, 0, WK), (5, 2, B), (2, 3, B))
    moves = legal_moves(board, Player.WHITE)
    assert moves == [Move.capture(7, 0, 3, 4, 5, 2)]


def test_king_directions_are_maximised_independently():
    # Up-left: a single capture. Up-right: a capture that continues from (4,5).
    board = make_board((7, 2, WK), (6, 1, B), (5, 4, B), (5, 6, B))
    moves = legal_moves(board, Player.WHITE)
    assert sorted(moves, key=lambda m: m.to_cell) == [
        Move.capture(7, 2, 4, 5, 5, 4),
        Move.capture(7, 2, 5, 0, 6, 1),
    ]


def test_max_king_captures_does_not_mutate_board():
    board = make_board((7, 2, WK), (6, 1, B), (5, 4, B), (5, 6, B))
    before = board.copy()
    assert max_king_captures(board, 7, 2, Player.WHITE) == 2
    assert board == before


def test_piece_moves_ignores_foreign_or_empty_cells():
    board = make_board((5, 2, W))
    gen = MoveGenerator()
    assert gen.piece_moves(board, 5, 2, Player.BLACK) == ([], [])
    assert gen.piece_moves(board, 4, 1, Player.WHITE) == ([], [])
    assert gen.piece_moves(board, 9, 9, Player.WHITE) == ([], [])


@pytest.mark.parametrize("mandatory", [True, False])
def test_no_pieces_no_moves(mandatory):
    assert legal_moves(Board(), Player.WHITE, mandatory_capture=mandatory) == []
