"""
Evaluation interfaces and the default positional evaluator.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from .board import Board
from .types import BOARD_SIZE, Player, PieceType

MAN_VALUE: int = 100
KING_VALUE: int = 180
ADVANCE_WEIGHT: int = 4
MAN_CENTER_WEIGHT: int = 3
KING_CENTER_WEIGHT: int = 4


def _build_tables() -> np.ndarray:
    """Per-code value tables from WHITE's point of view, shape (5, 8, 8)."""
    rows, cols = np.indices((BOARD_SIZE, BOARD_SIZE))
    edge = BOARD_SIZE - 1
    # 0 on the rim, 6 on the four central cells
    center = np.minimum(rows, edge - rows) + np.minimum(cols, edge - cols)

    tables = np.zeros((len(PieceType), BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
    tables[PieceType.WHITE_MAN] = MAN_VALUE + ADVANCE_WEIGHT * (edge - rows) + MAN_CENTER_WEIGHT * center
    tables[PieceType.BLACK_MAN] = -(MAN_VALUE + ADVANCE_WEIGHT * rows + MAN_CENTER_WEIGHT * center)
    tables[PieceType.WHITE_KING] = KING_VALUE + KING_CENTER_WEIGHT * center
    tables[PieceType.BLACK_KING] = -(KING_VALUE + KING_CENTER_WEIGHT * center)
    return tables


_TABLES: np.ndarray = _build_tables()
_ROWS, _COLS = np.indices((BOARD_SIZE, BOARD_SIZE))


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, player: Player) -> int:  # pragma: no cover
        """Score ``board`` for ``player``; positive is favourable."""
        raise NotImplementedError

    def batch_evaluate(self, boards: Sequence[Board], player: Player) -> np.ndarray:
        """Optional: score several boards. Default loops over single calls."""
        out = np.zeros(len(boards), dtype=np.int64)
        for i, board in enumerate(boards):
            out[i] = self.evaluate_position(board, player)
        return out


class PositionalEvaluator(Evaluator):
    """Material plus advancement for men and centralisation for both kinds.

    man  = 100 + 4 * rows advanced + 3 * center proximity (0..6)
    king = 180 + 4 * center proximity (0..6)
    """

    def evaluate_position(self, board: Board, player: Player) -> int:
        score = int(_TABLES[board.cells, _ROWS, _COLS].sum())
        return score if player is Player.WHITE else -score

    def batch_evaluate(self, boards: Sequence[Board], player: Player) -> np.ndarray:
        if not boards:
            return np.zeros(0, dtype=np.int64)
        stack = np.stack([b.cells for b in boards])
        scores = _TABLES[stack, _ROWS, _COLS].sum(axis=(1, 2)).astype(np.int64)
        return scores if player is Player.WHITE else -scores


def evaluate(board: Board, player: Player) -> int:
    """Evaluate a board with the default positional evaluator."""
    return _DEFAULT.evaluate_position(board, player)


_DEFAULT = PositionalEvaluator()


def get_evaluator() -> Evaluator:
    return PositionalEvaluator()


__all__ = [
    "Evaluator",
    "PositionalEvaluator",
    "evaluate",
    "get_evaluator",
    "MAN_VALUE",
    "KING_VALUE",
]
