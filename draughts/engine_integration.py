"""
Background AI search for interactive front ends.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Union

from .difficulty import Difficulty
from .engine import RuleEngine
from .search import AiEngine
from .types import Move, Player

logger = logging.getLogger(__name__)

# (move or None, elapsed seconds, error or None)
SearchCallback = Callable[[Optional[Move], float, Optional[BaseException]], None]


class EngineIntegration:
    """Runs AI searches off the caller's thread, one at a time.

    The search plays trial moves on the live engine, so callers must not touch
    the engine until the callback has run. ``is_thinking`` stays True while
    the callback executes.
    """

    def __init__(self, ai: AiEngine) -> None:
        self.ai = ai
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._done.set()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_thinking(self) -> bool:
        return not self._done.is_set()

    def search_async(self, engine: RuleEngine, ai: AiEngine,
                     difficulty: Union[int, Difficulty],
                     callback: SearchCallback) -> bool:
        """Start a search; returns False if another one is still running."""
        with self._lock:
            if self.is_thinking:
                return False
            self._done.clear()

        def worker() -> None:
            start = time.perf_counter()
            move: Optional[Move] = None
            error: Optional[BaseException] = None
            try:
                move = ai.choose_move(engine, difficulty)
            except Exception as e:
                logger.exception("AI search failed")
                error = e
            elapsed = time.perf_counter() - start
            try:
                callback(move, elapsed, error)
            finally:
                self._done.set()

        self._thread = threading.Thread(target=worker, name="draughts-search", daemon=True)
        self._thread.start()
        return True

    def get_engine_move_async(self, engine: RuleEngine, difficulty: Union[int, Difficulty],
                              on_complete: SearchCallback) -> bool:
        """Search a move for the computer's side."""
        return self.search_async(engine, self.ai, difficulty, on_complete)

    def get_hint_async(self, engine: RuleEngine, player: Player,
                       on_complete: SearchCallback,
                       difficulty: Union[int, Difficulty] = Difficulty.HARD) -> bool:
        """Search a suggested move for ``player`` (usually the human)."""
        helper = AiEngine(player, self.ai.strategy)
        return self.search_async(engine, helper, difficulty, on_complete)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the running search finishes; False on timeout."""
        return self._done.wait(timeout)
