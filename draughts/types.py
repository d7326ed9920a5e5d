"""
Type definitions for the draughts engine.

This module provides:
- Closed enumerations for players and piece types
- The immutable ``Move`` value used by the rule engine and the search
- Type aliases and board constants shared across modules
- Protocols for pluggable evaluation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, List, Optional, Protocol, Tuple

from .errors import InvalidCoordinate, InvalidPieceCode

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board

# Basic type aliases
Position = Tuple[int, int]  # (row, col) coordinates
RawBoard = List[List[int]]  # 8x8 grid of piece codes

# Board geometry
BOARD_SIZE: int = 8
INITIAL_PIECES_PER_SIDE: int = 12
NO_CAPTURE: int = -1


class Player(Enum):
    """Side to move. WHITE advances toward row 0, BLACK toward row 7."""

    WHITE = "WHITE"
    BLACK = "BLACK"

    def opposite(self) -> Player:
        return Player.BLACK if self is Player.WHITE else Player.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a man's quiet move."""
        return -1 if self is Player.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Player.WHITE else BOARD_SIZE - 1

    @classmethod
    def from_color_string(cls, value: Optional[str], default: Player) -> Player:
        """Parse 'WHITE'/'W'/'BLACK'/'B' (any case); anything else yields ``default``."""
        if value is None:
            return default
        v = value.strip().upper()
        if v in ("WHITE", "W"):
            return cls.WHITE
        if v in ("BLACK", "B"):
            return cls.BLACK
        return default


class PieceType(IntEnum):
    """Piece kinds with stable integer codes used for compact board storage."""

    EMPTY = 0
    WHITE_MAN = 1
    WHITE_KING = 2
    BLACK_MAN = 3
    BLACK_KING = 4

    @classmethod
    def from_code(cls, code: int) -> PieceType:
        try:
            idx = int(code)
        except (TypeError, ValueError):
            raise InvalidPieceCode(f"Unknown piece code: {code!r}") from None
        if idx != code or not 0 <= idx < len(PIECES_BY_CODE):
            raise InvalidPieceCode(f"Unknown piece code: {code!r}")
        return PIECES_BY_CODE[idx]

    @classmethod
    def man_of(cls, player: Player) -> PieceType:
        return cls.WHITE_MAN if player is Player.WHITE else cls.BLACK_MAN

    @classmethod
    def king_of(cls, player: Player) -> PieceType:
        return cls.WHITE_KING if player is Player.WHITE else cls.BLACK_KING

    @property
    def is_empty(self) -> bool:
        return self is PieceType.EMPTY

    @property
    def is_white(self) -> bool:
        return self is PieceType.WHITE_MAN or self is PieceType.WHITE_KING

    @property
    def is_black(self) -> bool:
        return self is PieceType.BLACK_MAN or self is PieceType.BLACK_KING

    @property
    def is_man(self) -> bool:
        return self is PieceType.WHITE_MAN or self is PieceType.BLACK_MAN

    @property
    def is_king(self) -> bool:
        return self is PieceType.WHITE_KING or self is PieceType.BLACK_KING

    @property
    def owner(self) -> Optional[Player]:
        if self.is_white:
            return Player.WHITE
        if self.is_black:
            return Player.BLACK
        return None

    def belongs_to(self, player: Player) -> bool:
        return self.owner is player

    def is_opponent_of(self, player: Player) -> bool:
        owner = self.owner
        return owner is not None and owner is not player

    def promoted(self) -> PieceType:
        """King of the same colour; kings and EMPTY are returned unchanged."""
        if self is PieceType.WHITE_MAN:
            return PieceType.WHITE_KING
        if self is PieceType.BLACK_MAN:
            return PieceType.BLACK_KING
        return self


# Indexed by code; codes are contiguous from 0.
PIECES_BY_CODE: Tuple[PieceType, ...] = tuple(PieceType)


@dataclass(frozen=True)
class Move:
    """
    A single step or a single jump.

    Capture fields are both set or both ``NO_CAPTURE``. Only non-negative
    indices are checked here; the upper bound belongs to the board so the
    value stays independent of board size.
    """

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    captured_row: int = NO_CAPTURE
    captured_col: int = NO_CAPTURE

    def __post_init__(self) -> None:
        for name in ("from_row", "from_col", "to_row", "to_col"):
            _check_index(name, getattr(self, name))
        no_row = self.captured_row == NO_CAPTURE
        no_col = self.captured_col == NO_CAPTURE
        if no_row != no_col:
            raise ValueError("captured_row and captured_col must both be set or both be absent")
        if not no_row:
            _check_index("captured_row", self.captured_row)
            _check_index("captured_col", self.captured_col)

    @classmethod
    def quiet(cls, from_row: int, from_col: int, to_row: int, to_col: int) -> Move:
        return cls(from_row, from_col, to_row, to_col)

    @classmethod
    def capture(cls, from_row: int, from_col: int, to_row: int, to_col: int,
                captured_row: int, captured_col: int) -> Move:
        return cls(from_row, from_col, to_row, to_col, captured_row, captured_col)

    @property
    def is_capture(self) -> bool:
        return self.captured_row >= 0 and self.captured_col >= 0

    @property
    def from_cell(self) -> Position:
        return (self.from_row, self.from_col)

    @property
    def to_cell(self) -> Position:
        return (self.to_row, self.to_col)

    @property
    def captured_cell(self) -> Optional[Position]:
        if not self.is_capture:
            return None
        return (self.captured_row, self.captured_col)

    def __str__(self) -> str:
        sep = "x" if self.is_capture else "-"
        return f"{self.from_row},{self.from_col}{sep}{self.to_row},{self.to_col}"


def _check_index(name: str, value: int) -> None:
    if value < 0:
        raise InvalidCoordinate(f"Index {name} must be >= 0, got {value}")


class EvaluatorProtocol(Protocol):
    """Protocol for static position evaluators."""

    def evaluate_position(self, board: Board, player: Player) -> int:
        """Score ``board`` from ``player``'s point of view (positive = favourable)."""
        ...


__all__ = [
    "Position",
    "RawBoard",
    "BOARD_SIZE",
    "INITIAL_PIECES_PER_SIDE",
    "NO_CAPTURE",
    "Player",
    "PieceType",
    "Move",
    "EvaluatorProtocol",
    "PIECES_BY_CODE",
]
