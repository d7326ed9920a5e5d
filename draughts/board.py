"""
Board storage for 8x8 draughts.

The board holds piece codes only (see ``PieceType``); it knows nothing about
move legality. Cells are kept in a numpy int8 array so copies, restores and
whole-board aggregates are cheap.
"""
from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidCoordinate, InvalidPieceCode
from .types import BOARD_SIZE, PIECES_BY_CODE, Player, PieceType, RawBoard

_WHITE_CODES = (int(PieceType.WHITE_MAN), int(PieceType.WHITE_KING))
_BLACK_CODES = (int(PieceType.BLACK_MAN), int(PieceType.BLACK_KING))


class Board:
    """Mutable 8x8 grid of piece codes with validated access."""

    SIZE: int = BOARD_SIZE

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: np.ndarray = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)

    # -----------------------------
    # Construction
    # -----------------------------
    @classmethod
    def initial(cls) -> Board:
        """Standard setup: BLACK men on rows 0..2, WHITE men on rows 5..7."""
        board = cls()
        board.setup_initial_position()
        return board

    @classmethod
    def from_raw(cls, raw: Sequence[Sequence[Any]]) -> Board:
        """Build a board from an 8x8 nested sequence of codes, validating shape and codes."""
        if len(raw) != BOARD_SIZE:
            raise InvalidPieceCode(f"raw board must have {BOARD_SIZE} rows, got {len(raw)}")
        board = cls()
        for r, row in enumerate(raw):
            if row is None or len(row) != BOARD_SIZE:
                raise InvalidPieceCode(f"raw board row {r} must have length {BOARD_SIZE}")
            for c, code in enumerate(row):
                board._cells[r, c] = int(PieceType.from_code(code))
        return board

    def clear(self) -> None:
        self._cells.fill(int(PieceType.EMPTY))

    def setup_initial_position(self) -> None:
        self.clear()
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if not self.is_dark_cell(r, c):
                    continue
                if r <= 2:
                    self._cells[r, c] = int(PieceType.BLACK_MAN)
                elif r >= BOARD_SIZE - 3:
                    self._cells[r, c] = int(PieceType.WHITE_MAN)

    # -----------------------------
    # Cell access
    # -----------------------------
    @staticmethod
    def is_inside(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    @staticmethod
    def is_dark_cell(row: int, col: int) -> bool:
        return (row + col) % 2 == 1

    def _check(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise InvalidCoordinate(
                f"Cell ({row},{col}) is outside board {BOARD_SIZE}x{BOARD_SIZE}"
            )

    def get_code(self, row: int, col: int) -> int:
        self._check(row, col)
        return int(self._cells[row, col])

    def get_piece(self, row: int, col: int) -> PieceType:
        self._check(row, col)
        return PIECES_BY_CODE[self._cells[row, col]]

    def set_code(self, row: int, col: int, code: int) -> None:
        self._check(row, col)
        self._cells[row, col] = int(PieceType.from_code(code))

    def set_piece(self, row: int, col: int, piece: PieceType) -> None:
        self._check(row, col)
        self._cells[row, col] = int(piece)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the underlying code array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def pieces(self, player: Optional[Player] = None) -> Iterator[Tuple[int, int, PieceType]]:
        """Yield ``(row, col, piece)`` for every occupied cell, optionally for one side."""
        rows, cols = np.nonzero(self._cells)
        for r, c in zip(rows.tolist(), cols.tolist()):
            piece = PIECES_BY_CODE[self._cells[r, c]]
            if player is None or piece.belongs_to(player):
                yield r, c, piece

    # -----------------------------
    # Aggregates
    # -----------------------------
    def count_pieces(self, player: Player) -> int:
        codes = _WHITE_CODES if player is Player.WHITE else _BLACK_CODES
        return int(np.count_nonzero(np.isin(self._cells, codes)))

    def count_men(self, player: Player) -> int:
        return int(np.count_nonzero(self._cells == int(PieceType.man_of(player))))

    def count_kings(self, player: Player) -> int:
        return int(np.count_nonzero(self._cells == int(PieceType.king_of(player))))

    # -----------------------------
    # Copying
    # -----------------------------
    def copy(self) -> Board:
        """Deep copy; the result never shares storage with this board."""
        other = Board.__new__(Board)
        other._cells = self._cells.copy()
        return other

    deep_copy = copy

    def overwrite_from(self, other: Board) -> None:
        """Overwrite every cell in place with ``other``'s contents."""
        np.copyto(self._cells, other._cells)

    def to_raw(self) -> RawBoard:
        return self._cells.tolist()

    # -----------------------------
    # Equality / display
    # -----------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash(self._cells.tobytes())

    def __repr__(self) -> str:
        return f"Board(white={self.count_pieces(Player.WHITE)}, black={self.count_pieces(Player.BLACK)})"

    def __str__(self) -> str:
        glyphs = {
            PieceType.EMPTY: ".",
            PieceType.WHITE_MAN: "w",
            PieceType.WHITE_KING: "W",
            PieceType.BLACK_MAN: "b",
            PieceType.BLACK_KING: "B",
        }
        lines: List[str] = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
        for r in range(BOARD_SIZE):
            row = [glyphs[PIECES_BY_CODE[self._cells[r, c]]] for c in range(BOARD_SIZE)]
            lines.append(f"{r} " + " ".join(row))
        return "\n".join(lines)
