"""
Rule engine: the single owner of the live board.

Tracks the side to move, the mandatory-capture rule and any capture chain in
progress. Legal moves are cached and recomputed after every state change.
Search and undo rely on ``snapshot()``/``restore()``: applying moves between
a snapshot and its restore leaves the engine observably unchanged.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .board import Board
from .errors import IllegalMove, InconsistentState, InvalidCoordinate
from .moves import MoveGenerator
from .types import Move, Player, PieceType, Position

if TYPE_CHECKING:  # pragma: no cover
    from config import DraughtsConfig

logger = logging.getLogger(__name__)

_NO_CELL = -1


class GameStatus(Enum):
    NORMAL_TURN = "normal_turn"
    CHAIN_CAPTURE = "chain_capture"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of ``RuleEngine.apply_move``.

    ``winner`` is set only when the move ended the game; at that point the
    engine's current player is the loser.
    """

    chain_continues: bool
    winner: Optional[Player] = None

    @property
    def game_over(self) -> bool:
        return self.winner is not None


@dataclass(frozen=True)
class GameSnapshot:
    """Value copy of the engine state. Owns its board; never aliases the live one."""

    board: Board
    current_player: Player
    must_capture: bool
    chain_in_progress: bool
    chain_row: int
    chain_col: int


class RuleEngine:
    """State machine enforcing forced-capture draughts rules."""

    def __init__(self, board: Board, starting_player: Player,
                 mandatory_capture: bool = True) -> None:
        self._board: Board = board
        self._current_player: Player = starting_player
        self._mandatory_capture: bool = bool(mandatory_capture)
        self._generator = MoveGenerator(mandatory_capture=self._mandatory_capture)
        self._must_capture: bool = False
        self._chain_in_progress: bool = False
        self._chain_row: int = _NO_CELL
        self._chain_col: int = _NO_CELL
        self._moves_cache: Optional[Tuple[Move, ...]] = None

    @classmethod
    def new_game(cls, starting_player: Player = Player.WHITE,
                 mandatory_capture: bool = True) -> RuleEngine:
        return cls(Board.initial(), starting_player, mandatory_capture)

    @classmethod
    def from_config(cls, config: DraughtsConfig) -> RuleEngine:
        return cls.new_game(config.session.starting, config.rules.mandatory_capture)

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def board(self) -> Board:
        """The live board. Callers must not mutate it; use ``board_copy()`` to keep one."""
        return self._board

    def board_copy(self) -> Board:
        return self._board.copy()

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def mandatory_capture(self) -> bool:
        return self._mandatory_capture

    @property
    def must_capture(self) -> bool:
        """True when the current position forces a capture."""
        self._ensure_moves()
        return self._must_capture

    @property
    def chain_in_progress(self) -> bool:
        return self._chain_in_progress

    @property
    def chain_cell(self) -> Optional[Position]:
        if not self._chain_in_progress:
            return None
        return (self._chain_row, self._chain_col)

    @property
    def status(self) -> GameStatus:
        if self._chain_in_progress:
            return GameStatus.CHAIN_CAPTURE
        if not self._ensure_moves():
            return GameStatus.GAME_OVER
        return GameStatus.NORMAL_TURN

    def is_game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def winner(self) -> Optional[Player]:
        """Side that won, or None while the game is still running."""
        if self.is_game_over():
            return self._current_player.opposite()
        return None

    def legal_moves(self) -> List[Move]:
        return list(self._ensure_moves())

    def moves_for_cell(self, row: int, col: int) -> List[Move]:
        if not self._board.is_inside(row, col):
            return []
        if self._chain_in_progress and (row, col) != (self._chain_row, self._chain_col):
            return []
        return [m for m in self._ensure_moves() if m.from_row == row and m.from_col == col]

    def is_legal(self, move: Move) -> bool:
        return move in self._ensure_moves()

    def find_move(self, from_row: int, from_col: int,
                  to_row: int, to_col: int) -> Optional[Move]:
        """First legal move from one cell to another, if any."""
        for m in self.moves_for_cell(from_row, from_col):
            if m.to_row == to_row and m.to_col == to_col:
                return m
        return None

    # -----------------------------
    # Mutation
    # -----------------------------
    def apply_move(self, move: Move) -> MoveResult:
        """Apply a legal move and report whether the chain continues or the game ended.

        Raises:
            InvalidCoordinate: a move cell lies outside the board
            IllegalMove: the move is not legal for the side to move
            InconsistentState: the capture target is empty or friendly
        """
        board = self._board
        if not board.is_inside(move.from_row, move.from_col) or \
                not board.is_inside(move.to_row, move.to_col):
            raise InvalidCoordinate(f"Move is outside board: {move}")

        player = self._current_player
        piece = board.get_piece(move.from_row, move.from_col)
        if piece.is_empty:
            raise IllegalMove(f"No piece at from-cell for move: {move}")
        if not piece.belongs_to(player):
            raise IllegalMove(f"Piece does not belong to {player.name}: {move}")
        if self._chain_in_progress and move.from_cell != (self._chain_row, self._chain_col):
            raise IllegalMove(
                f"Capture chain in progress, move must start from "
                f"({self._chain_row},{self._chain_col}), got {move}"
            )
        if move not in self._ensure_moves():
            raise IllegalMove(f"Illegal move for {player.name}: {move}")

        if move.is_capture:
            captured = board.get_piece(move.captured_row, move.captured_col)
            if not captured.is_opponent_of(player):
                raise InconsistentState(
                    f"Invalid captured piece for move {move}: {captured.name}"
                )

        board.set_piece(move.from_row, move.from_col, PieceType.EMPTY)
        if move.is_capture:
            board.set_piece(move.captured_row, move.captured_col, PieceType.EMPTY)
        if piece.is_man and move.to_row == player.promotion_row:
            piece = piece.promoted()
        board.set_piece(move.to_row, move.to_col, piece)
        self._invalidate()

        if move.is_capture:
            further = self._generator.captures_from(board, move.to_row, move.to_col, player)
            if further:
                self._chain_in_progress = True
                self._chain_row, self._chain_col = move.to_row, move.to_col
                self._must_capture = True
                self._moves_cache = tuple(further)
                logger.debug("Capture chain continues from %s", move.to_cell)
                return MoveResult(chain_continues=True)

        self._chain_in_progress = False
        self._chain_row = self._chain_col = _NO_CELL
        self._current_player = player.opposite()
        if not self._ensure_moves():
            logger.debug("Game over: %s has no moves, %s wins",
                         self._current_player.name, player.name)
            return MoveResult(chain_continues=False, winner=player)
        return MoveResult(chain_continues=False)

    # -----------------------------
    # Snapshot / restore
    # -----------------------------
    def snapshot(self) -> GameSnapshot:
        self._ensure_moves()
        return GameSnapshot(
            board=self._board.copy(),
            current_player=self._current_player,
            must_capture=self._must_capture,
            chain_in_progress=self._chain_in_progress,
            chain_row=self._chain_row,
            chain_col=self._chain_col,
        )

    def restore(self, snapshot: GameSnapshot) -> None:
        """Overwrite the live board cell by cell and restore the scalar state."""
        self._board.overwrite_from(snapshot.board)
        self._current_player = snapshot.current_player
        self._chain_in_progress = snapshot.chain_in_progress
        self._chain_row = snapshot.chain_row
        self._chain_col = snapshot.chain_col
        self._invalidate()
        self._must_capture = snapshot.must_capture

    @contextmanager
    def simulation(self) -> Iterator[RuleEngine]:
        """Snapshot on entry and restore on every exit path, including exceptions."""
        snap = self.snapshot()
        try:
            yield self
        finally:
            self.restore(snap)

    # -----------------------------
    # Internals
    # -----------------------------
    def _invalidate(self) -> None:
        self._moves_cache = None
        self._must_capture = False

    def _ensure_moves(self) -> Tuple[Move, ...]:
        if self._moves_cache is None:
            self._moves_cache = self._compute_moves()
        return self._moves_cache

    def _compute_moves(self) -> Tuple[Move, ...]:
        player = self._current_player
        if self._chain_in_progress:
            captures = self._generator.captures_from(
                self._board, self._chain_row, self._chain_col, player)
            self._must_capture = bool(captures)
            return tuple(captures)

        moves = self._generator.legal_moves(self._board, player)
        # With the rule on, any capture means the list holds captures only.
        self._must_capture = self._mandatory_capture and any(m.is_capture for m in moves)
        return tuple(moves)

    def __repr__(self) -> str:
        return (f"RuleEngine(current={self._current_player.name}, "
                f"status={self.status.value}, mandatory_capture={self._mandatory_capture})")
