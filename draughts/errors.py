"""Exception types raised by the draughts rule engine."""
from __future__ import annotations


class DraughtsError(Exception):
    """Base exception for rule-engine errors."""

    pass


class InvalidCoordinate(DraughtsError, IndexError):
    """Raised when a cell lies outside the 8x8 board or an index is negative."""

    pass


class InvalidPieceCode(DraughtsError, ValueError):
    """Raised when a raw piece code (or raw board shape) is not recognized."""

    pass


class IllegalMove(DraughtsError, ValueError):
    """Raised when a move is not legal for the side to move."""

    pass


class InconsistentState(DraughtsError, RuntimeError):
    """Raised when a capture target is empty or friendly (a generation defect)."""

    pass


__all__ = [
    "DraughtsError",
    "InvalidCoordinate",
    "InvalidPieceCode",
    "IllegalMove",
    "InconsistentState",
]
