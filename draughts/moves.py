from __future__ import annotations

from typing import List, Tuple

from .board import Board
from .types import Move, Player, PieceType

_DIRS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class MoveGenerator:
    """Generates legal moves for a given board and player.

    Men step forward and capture in all four directions. Kings slide over
    empty diagonals and capture at distance; for each initial direction only
    the landings that lead to the longest capture sequence are kept, and the
    directions are unioned without a global maximum across them.
    """

    def __init__(self, mandatory_capture: bool = True) -> None:
        self.mandatory_capture = bool(mandatory_capture)

    # -----------------------------
    # Per-piece generation
    # -----------------------------
    def piece_moves(self, board: Board, row: int, col: int,
                    owner: Player) -> Tuple[List[Move], List[Move]]:
        """Return ``(captures, quiets)`` for the piece at (row, col) if ``owner`` owns it."""
        if not board.is_inside(row, col):
            return [], []
        piece = board.get_piece(row, col)
        if not piece.belongs_to(owner):
            return [], []
        if piece.is_king:
            return self._king_moves(board, row, col, owner)
        return self._man_moves(board, row, col, owner)

    def captures_from(self, board: Board, row: int, col: int, owner: Player) -> List[Move]:
        captures, _ = self.piece_moves(board, row, col, owner)
        return captures

    def _man_moves(self, board: Board, row: int, col: int,
                   owner: Player) -> Tuple[List[Move], List[Move]]:
        captures: List[Move] = []
        quiets: List[Move] = []
        for dr, dc in _DIRS:
            mid_r, mid_c = row + dr, col + dc
            land_r, land_c = row + 2 * dr, col + 2 * dc
            if not board.is_inside(land_r, land_c):
                continue
            if not board.get_piece(mid_r, mid_c).is_opponent_of(owner):
                continue
            if board.get_piece(land_r, land_c).is_empty:
                captures.append(Move.capture(row, col, land_r, land_c, mid_r, mid_c))

        fwd = owner.forward
        for dc in (-1, 1):
            nr, nc = row + fwd, col + dc
            if board.is_inside(nr, nc) and board.get_piece(nr, nc).is_empty:
                quiets.append(Move.quiet(row, col, nr, nc))
        return captures, quiets

    def _king_moves(self, board: Board, row: int, col: int,
                    owner: Player) -> Tuple[List[Move], List[Move]]:
        captures: List[Move] = []
        quiets: List[Move] = []
        king = PieceType.king_of(owner)

        for dr, dc in _DIRS:
            best_total = 0
            best_moves: List[Move] = []
            for (cap_r, cap_c), (land_r, land_c) in _king_jumps(board, row, col, dr, dc, owner):
                sim = _after_jump(board, row, col, cap_r, cap_c, land_r, land_c, king)
                total = 1 + max_king_captures(sim, land_r, land_c, owner)
                if total > best_total:
                    best_total = total
                    best_moves = []
                if total == best_total:
                    best_moves.append(Move.capture(row, col, land_r, land_c, cap_r, cap_c))
            captures.extend(best_moves)

        for dr, dc in _DIRS:
            r, c = row + dr, col + dc
            while board.is_inside(r, c) and board.get_piece(r, c).is_empty:
                quiets.append(Move.quiet(row, col, r, c))
                r += dr
                c += dc
        return captures, quiets

    # -----------------------------
    # Whole-board generation
    # -----------------------------
    def legal_moves(self, board: Board, player: Player) -> List[Move]:
        captures: List[Move] = []
        quiets: List[Move] = []
        for r, c, _ in board.pieces(player):
            caps, qs = self.piece_moves(board, r, c, player)
            captures.extend(caps)
            quiets.extend(qs)
        if captures:
            return captures if self.mandatory_capture else captures + quiets
        return quiets


def _king_jumps(board: Board, row: int, col: int, dr: int, dc: int, owner: Player):
    """Yield ``((cap_r, cap_c), (land_r, land_c))`` for one diagonal direction."""
    r, c = row + dr, col + dc
    while board.is_inside(r, c) and board.get_piece(r, c).is_empty:
        r += dr
        c += dc
    if not board.is_inside(r, c) or not board.get_piece(r, c).is_opponent_of(owner):
        return
    cap_r, cap_c = r, c
    r, c = r + dr, c + dc
    while board.is_inside(r, c) and board.get_piece(r, c).is_empty:
        yield (cap_r, cap_c), (r, c)
        r += dr
        c += dc


def _after_jump(board: Board, row: int, col: int, cap_r: int, cap_c: int,
                land_r: int, land_c: int, piece: PieceType) -> Board:
    sim = board.copy()
    sim.set_piece(row, col, PieceType.EMPTY)
    sim.set_piece(cap_r, cap_c, PieceType.EMPTY)
    sim.set_piece(land_r, land_c, piece)
    return sim


def max_king_captures(board: Board, row: int, col: int, owner: Player) -> int:
    """Longest number of captures a king at (row, col) can still make on ``board``.

    Pure: every branch works on its own copy, the input board is never mutated.
    """
    king = PieceType.king_of(owner)
    best = 0
    for dr, dc in _DIRS:
        for (cap_r, cap_c), (land_r, land_c) in _king_jumps(board, row, col, dr, dc, owner):
            sim = _after_jump(board, row, col, cap_r, cap_c, land_r, land_c, king)
            best = max(best, 1 + max_king_captures(sim, land_r, land_c, owner))
    return best


# Convenience functional API

def legal_moves(board: Board, player: Player, mandatory_capture: bool = True) -> List[Move]:
    return MoveGenerator(mandatory_capture=mandatory_capture).legal_moves(board, player)


__all__ = [
    "MoveGenerator",
    "max_king_captures",
    "legal_moves",
]
