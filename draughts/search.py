"""
Search interfaces and the tiered move-selection strategy.

Every trial move is played on the live rule engine inside
``engine.simulation()``, so the position is restored on every exit path,
pruning cut-offs included.
"""
from __future__ import annotations

import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

from .difficulty import Difficulty
from .engine import MoveResult, RuleEngine
from .eval import PositionalEvaluator
from .types import EvaluatorProtocol, Move, Player

logger = logging.getLogger(__name__)

WIN_SCORE: int = 100_000
LOSS_SCORE: int = -100_000
DRAW_SCORE: int = 0
INF: int = 10**9


@dataclass
class SearchStats:
    """Statistics from the last ``choose_move`` call."""
    depth: int = 0
    nodes: int = 0
    best_score: Optional[int] = None
    elapsed: float = 0.0


class SearchStrategy(ABC):
    """Abstract interface for move-selection strategies."""

    @abstractmethod
    def choose_move(self, engine: RuleEngine, ai_player: Player,
                    difficulty: Difficulty) -> Optional[Move]:  # pragma: no cover
        """Pick a move for ``ai_player``; the engine must be left as it was found."""
        raise NotImplementedError


class TieredSearchStrategy(SearchStrategy):
    """Random pick, one-ply greedy, or alpha-beta with quiescence, chosen by tier depth."""

    def __init__(self, evaluator: Optional[EvaluatorProtocol] = None,
                 rng: Optional[random.Random] = None,
                 seed: Optional[int] = None) -> None:
        self.evaluator: EvaluatorProtocol = evaluator or PositionalEvaluator()
        self.rng: random.Random = rng if rng is not None else random.Random(seed)
        self.stats: SearchStats = SearchStats()

    def choose_move(self, engine: RuleEngine, ai_player: Player,
                    difficulty: Difficulty) -> Optional[Move]:
        if engine.current_player is not ai_player:
            return None
        moves = engine.legal_moves()
        if not moves:
            return None

        depth = difficulty.search_depth
        self.stats = SearchStats(depth=depth)
        start = time.perf_counter()
        if depth <= 0:
            move = self.rng.choice(moves)
        elif depth == 1:
            move = self._choose_greedy(engine, ai_player, moves, difficulty)
        else:
            move = self._choose_minimax(engine, ai_player, moves, difficulty)
        self.stats.elapsed = time.perf_counter() - start

        logger.debug("%s %s chose %s (score=%s, depth=%d, nodes=%d, %.3fs)",
                     difficulty.name, ai_player.name, move, self.stats.best_score,
                     depth, self.stats.nodes, self.stats.elapsed)
        return move

    # -----------------------------
    # Root selection
    # -----------------------------
    def _choose_greedy(self, engine: RuleEngine, ai_player: Player,
                       moves: List[Move], difficulty: Difficulty) -> Move:
        scored = []
        for move in moves:
            with engine.simulation():
                result = engine.apply_move(move)
                self.stats.nodes += 1
                if result.game_over:
                    score = self._terminal_score(result, ai_player)
                else:
                    score = self._evaluate(engine, ai_player)
            scored.append((score, move))
        return self._pick_best(scored, difficulty)

    def _choose_minimax(self, engine: RuleEngine, ai_player: Player,
                        moves: List[Move], difficulty: Difficulty) -> Move:
        depth = max(1, difficulty.search_depth)
        scored = []
        for move in moves:
            with engine.simulation():
                result = engine.apply_move(move)
                self.stats.nodes += 1
                if result.game_over:
                    score = self._terminal_score(result, ai_player, depth)
                else:
                    # Full window per root move keeps tied scores exact.
                    score = self._minimax(engine, ai_player, depth - 1, -INF, INF)
            scored.append((score, move))
        return self._pick_best(scored, difficulty)

    def _pick_best(self, scored: List[tuple], difficulty: Difficulty) -> Move:
        best_score = max(score for score, _ in scored)
        best_moves = [move for score, move in scored if score == best_score]
        self.stats.best_score = best_score
        if not difficulty.randomness_allowed or len(best_moves) == 1:
            return best_moves[0]
        return self.rng.choice(best_moves)

    # -----------------------------
    # Tree search
    # -----------------------------
    def _minimax(self, engine: RuleEngine, ai_player: Player,
                 depth: int, alpha: int, beta: int) -> int:
        """Alpha-beta over remaining ``depth`` plies; leaves go to quiescence."""
        if depth <= 0:
            return self._quiescence(engine, ai_player, alpha, beta)

        self.stats.nodes += 1
        moves = engine.legal_moves()
        if not moves:
            # Side to move has lost; sooner wins and later losses score better.
            return LOSS_SCORE - depth if engine.current_player is ai_player else WIN_SCORE + depth

        maximizing = engine.current_player is ai_player
        best = -INF if maximizing else INF
        for move in moves:
            with engine.simulation():
                result = engine.apply_move(move)
                if result.game_over:
                    score = self._terminal_score(result, ai_player, depth)
                else:
                    score = self._minimax(engine, ai_player, depth - 1, alpha, beta)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if beta <= alpha:
                break
        return best

    def _quiescence(self, engine: RuleEngine, ai_player: Player,
                    alpha: int, beta: int) -> int:
        """Resolve captures only, standing pat on the static evaluation."""
        self.stats.nodes += 1
        moves = engine.legal_moves()
        if not moves:
            return LOSS_SCORE if engine.current_player is ai_player else WIN_SCORE

        stand_pat = self._evaluate(engine, ai_player)
        maximizing = engine.current_player is ai_player
        if maximizing:
            if stand_pat >= beta:
                return stand_pat
            alpha = max(alpha, stand_pat)
        else:
            if stand_pat <= alpha:
                return stand_pat
            beta = min(beta, stand_pat)

        captures = [m for m in moves if m.is_capture]
        if not captures:
            return stand_pat

        for move in captures:
            with engine.simulation():
                result = engine.apply_move(move)
                if result.game_over:
                    score = self._terminal_score(result, ai_player)
                else:
                    score = self._quiescence(engine, ai_player, alpha, beta)

            if maximizing:
                alpha = max(alpha, score)
            else:
                beta = min(beta, score)
            if alpha >= beta:
                break
        return alpha if maximizing else beta

    # -----------------------------
    # Scoring helpers
    # -----------------------------
    def _evaluate(self, engine: RuleEngine, ai_player: Player) -> int:
        return int(self.evaluator.evaluate_position(engine.board, ai_player))

    @staticmethod
    def _terminal_score(result: MoveResult, ai_player: Player, depth: int = 0) -> int:
        if result.winner is None:
            return DRAW_SCORE
        if result.winner is ai_player:
            return WIN_SCORE + depth
        return LOSS_SCORE - depth


class AiEngine:
    """Facade binding a strategy to the side the computer plays."""

    def __init__(self, ai_player: Player, strategy: Optional[SearchStrategy] = None) -> None:
        self.ai_player = ai_player
        self.strategy: SearchStrategy = strategy or TieredSearchStrategy()

    def choose_move(self, engine: RuleEngine,
                    difficulty: Union[int, Difficulty]) -> Optional[Move]:
        """Choose a move at ``difficulty`` (a tier or a raw level index, clamped)."""
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.from_level_index(int(difficulty))
        if engine.current_player is not self.ai_player:
            return None
        return self.strategy.choose_move(engine, self.ai_player, difficulty)


def get_search_strategy(seed: Optional[int] = None) -> SearchStrategy:
    """Factory for the default tiered strategy."""
    return TieredSearchStrategy(seed=seed)


__all__ = [
    "WIN_SCORE",
    "LOSS_SCORE",
    "DRAW_SCORE",
    "SearchStats",
    "SearchStrategy",
    "TieredSearchStrategy",
    "AiEngine",
    "get_search_strategy",
]
