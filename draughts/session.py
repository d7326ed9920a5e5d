"""
Game session: the caller-side state around a rule engine.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from .difficulty import Difficulty
from .engine import GameSnapshot, MoveResult, RuleEngine
from .errors import IllegalMove
from .search import AiEngine, SearchStrategy, TieredSearchStrategy
from .types import INITIAL_PIECES_PER_SIDE, Move, Player

if TYPE_CHECKING:  # pragma: no cover
    from config import DraughtsConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """State captured just before a user-visible move was applied."""
    snapshot: GameSnapshot
    move: Move


class GameSession:
    """Manages one game: the engine, the players and the undo history."""

    def __init__(self, human_color: Player = Player.WHITE,
                 starting_player: Player = Player.WHITE,
                 mandatory_capture: bool = True,
                 difficulty: Union[int, Difficulty] = Difficulty.MEDIUM,
                 vs_ai: bool = True,
                 strategy: Optional[SearchStrategy] = None) -> None:
        self.human_player = human_color
        self.ai_player = human_color.opposite()
        self.starting_player = starting_player
        self.mandatory_capture = mandatory_capture
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.from_level_index(int(difficulty))
        self.difficulty: Difficulty = difficulty
        self.vs_ai = vs_ai
        self.ai: Optional[AiEngine] = AiEngine(self.ai_player, strategy) if vs_ai else None
        self.history: List[HistoryEntry] = []
        self.engine: RuleEngine = RuleEngine.new_game(starting_player, mandatory_capture)

    @classmethod
    def from_config(cls, config: DraughtsConfig) -> GameSession:
        return cls(
            human_color=config.session.human,
            starting_player=config.session.starting,
            mandatory_capture=config.rules.mandatory_capture,
            difficulty=config.ai.difficulty,
            vs_ai=config.session.vs_ai,
            strategy=TieredSearchStrategy(seed=config.ai.seed),
        )

    def reset(self) -> None:
        """Start a new game with the same settings."""
        self.engine = RuleEngine.new_game(self.starting_player, self.mandatory_capture)
        self.history.clear()
        logger.info("New game: human=%s, difficulty=%s", self.human_player.name, self.difficulty.name)

    # -----------------------------
    # Turn flow
    # -----------------------------
    def is_human_turn(self) -> bool:
        return not self.vs_ai or self.engine.current_player is self.human_player

    def is_ai_turn(self) -> bool:
        return self.vs_ai and self.engine.current_player is self.ai_player

    def is_game_over(self) -> bool:
        return self.engine.is_game_over()

    def winner(self) -> Optional[Player]:
        return self.engine.winner()

    def play(self, move: Move) -> MoveResult:
        """Record the position and apply ``move``; the engine validates it."""
        if not self.engine.is_legal(move):
            raise IllegalMove(f"Illegal move for {self.engine.current_player.name}: {move}")
        snapshot = self.engine.snapshot()
        result = self.engine.apply_move(move)
        self.history.append(HistoryEntry(snapshot, move))
        return result

    def play_ai_turn(self) -> List[Tuple[Move, MoveResult]]:
        """Let the computer play its whole turn, chain continuations included."""
        played: List[Tuple[Move, MoveResult]] = []
        if self.ai is None:
            return played
        while self.is_ai_turn() and not self.is_game_over():
            move = self.ai.choose_move(self.engine, self.difficulty)
            if move is None:
                break
            result = self.play(move)
            played.append((move, result))
            if not result.chain_continues:
                break
        return played

    # -----------------------------
    # Undo
    # -----------------------------
    def can_undo(self) -> bool:
        return bool(self.history)

    def undo(self) -> Optional[Move]:
        """Undo the most recent move; returns it, or None if the history is empty."""
        if not self.history:
            return None
        entry = self.history.pop()
        self.engine.restore(entry.snapshot)
        logger.info("Undid %s", entry.move)
        return entry.move

    def undo_to_human_move(self) -> int:
        """Rewind to just before the human's latest turn, undoing AI replies after it.

        Returns the number of moves undone (0 when the human has not moved yet).
        """
        target = None
        for i in range(len(self.history) - 1, -1, -1):
            if self.history[i].snapshot.current_player is self.human_player:
                target = i
                break
        if target is None:
            return 0
        # Rewind a multi-jump turn to its first jump.
        while target > 0 and self.history[target].snapshot.chain_in_progress:
            target -= 1
        count = len(self.history) - target
        for _ in range(count):
            self.undo()
        return count

    # -----------------------------
    # Display helpers
    # -----------------------------
    def captured_counts(self) -> Tuple[int, int]:
        """Pieces captured so far as ``(by_white, by_black)``."""
        board = self.engine.board
        return (INITIAL_PIECES_PER_SIDE - board.count_pieces(Player.BLACK),
                INITIAL_PIECES_PER_SIDE - board.count_pieces(Player.WHITE))

    @property
    def move_history(self) -> List[Move]:
        return [entry.move for entry in self.history]
