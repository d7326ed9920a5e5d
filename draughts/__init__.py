"""Draughts package: rule engine and tiered computer opponent.

Usage examples:
    from draughts import RuleEngine, Player
    from draughts import AiEngine, Difficulty
    from draughts import GameSession
"""
from __future__ import annotations

# Model
from .types import Player, PieceType, Move, BOARD_SIZE, NO_CAPTURE
from .errors import (
    DraughtsError,
    InvalidCoordinate,
    InvalidPieceCode,
    IllegalMove,
    InconsistentState,
)
from .board import Board

# Rules
from .moves import MoveGenerator, legal_moves
from .engine import RuleEngine, MoveResult, GameSnapshot, GameStatus

# AI
from .difficulty import Difficulty
from .eval import Evaluator, PositionalEvaluator, evaluate, get_evaluator
from .search import (
    SearchStrategy,
    TieredSearchStrategy,
    AiEngine,
    get_search_strategy,
    WIN_SCORE,
    LOSS_SCORE,
    DRAW_SCORE,
)

# Session helpers
from .session import GameSession
from .engine_integration import EngineIntegration

__version__ = "1.0.0"
