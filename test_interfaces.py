import numpy as np

import draughts
from draughts.board import Board
from draughts.eval import (
    KING_VALUE,
    MAN_VALUE,
    Evaluator,
    PositionalEvaluator,
    evaluate,
    get_evaluator,
)
from draughts.search import SearchStrategy, TieredSearchStrategy, get_search_strategy
from draughts.types import Player, PieceType


def single(r, c, piece):
    board = Board()
    board.set_piece(r, c, piece)
    return board


def test_initial_position_is_balanced():
    assert evaluate(Board.initial(), Player.WHITE) == 0
    assert evaluate(Board.initial(), Player.BLACK) == 0


def test_man_value_counts_advance_and_centre():
    board = single(4, 3, PieceType.WHITE_MAN)
    # 3 rows advanced, centre proximity 6
    assert evaluate(board, Player.WHITE) == MAN_VALUE + 4 * 3 + 3 * 6
    assert evaluate(board, Player.BLACK) == -130


def test_king_value_ignores_advance():
    board = single(0, 1, PieceType.WHITE_KING)
    assert evaluate(board, Player.WHITE) == KING_VALUE + 4 * 1
    black = single(7, 6, PieceType.BLACK_KING)
    assert evaluate(black, Player.BLACK) == 184


def test_evaluation_is_colour_symmetric():
    white = single(5, 2, PieceType.WHITE_MAN)
    black = single(2, 5, PieceType.BLACK_MAN)
    assert evaluate(white, Player.WHITE) == evaluate(black, Player.BLACK)


def test_batch_matches_single_calls():
    evaluator = get_evaluator()
    boards = [Board.initial(), single(4, 3, PieceType.WHITE_MAN), single(0, 1, PieceType.BLACK_KING)]
    for player in Player:
        expected = [evaluator.evaluate_position(b, player) for b in boards]
        assert np.array_equal(evaluator.batch_evaluate(boards, player), expected)
    assert evaluator.batch_evaluate([], Player.WHITE).shape == (0,)


def test_base_batch_falls_back_to_single_calls():
    class Material(Evaluator):
        def evaluate_position(self, board, player):
            return board.count_pieces(player) - board.count_pieces(player.opposite())

    boards = [Board.initial(), single(4, 3, PieceType.WHITE_MAN)]
    assert list(Material().batch_evaluate(boards, Player.WHITE)) == [0, 1]


def test_factories_return_interfaces():
    evaluator = get_evaluator()
    assert isinstance(evaluator, PositionalEvaluator)
    strategy = get_search_strategy(seed=3)
    assert isinstance(strategy, SearchStrategy)
    assert isinstance(strategy, TieredSearchStrategy)


def test_package_exports():
    for name in ("RuleEngine", "Board", "Move", "Player", "PieceType", "Difficulty",
                 "AiEngine", "GameSession", "EngineIntegration", "IllegalMove"):
        assert hasattr(draughts, name)
    assert draughts.__version__ == "1.0.0"
