from __future__ import annotations

import threading

from draughts import (
    AiEngine,
    Difficulty,
    EngineIntegration,
    GameSession,
    Player,
    RuleEngine,
    SearchStrategy,
    TieredSearchStrategy,
)
from selfplay import play_game


class BlockingStrategy(SearchStrategy):
    """Holds the search until released so the busy state can be observed."""

    def __init__(self):
        self.release = threading.Event()

    def choose_move(self, engine, ai_player, difficulty):
        self.release.wait(5)
        return engine.legal_moves()[0]


class FailingStrategy(SearchStrategy):
    def choose_move(self, engine, ai_player, difficulty):
        raise RuntimeError("boom")


def test_background_search_delivers_move():
    engine = RuleEngine.new_game()
    integration = EngineIntegration(AiEngine(Player.WHITE, TieredSearchStrategy(seed=1)))
    results = []

    started = integration.get_engine_move_async(
        engine, Difficulty.HARD, lambda move, elapsed, err: results.append((move, elapsed, err)))
    assert started
    assert integration.wait(10)

    move, elapsed, err = results[0]
    assert err is None
    assert engine.is_legal(move)
    assert elapsed >= 0.0
    assert not integration.is_thinking


def test_second_search_rejected_while_busy():
    strategy = BlockingStrategy()
    integration = EngineIntegration(AiEngine(Player.WHITE, strategy))
    engine = RuleEngine.new_game()
    results = []

    assert integration.get_engine_move_async(engine, 2, lambda *a: results.append(a))
    assert integration.is_thinking
    assert not integration.get_engine_move_async(engine, 2, lambda *a: results.append(a))

    strategy.release.set()
    assert integration.wait(5)
    assert len(results) == 1


def test_errors_are_passed_to_callback():
    integration = EngineIntegration(AiEngine(Player.WHITE, FailingStrategy()))
    results = []
    integration.get_engine_move_async(RuleEngine.new_game(), 1, lambda *a: results.append(a))
    assert integration.wait(5)

    move, _, err = results[0]
    assert move is None
    assert isinstance(err, RuntimeError)


def test_hint_for_human_side():
    session = GameSession(human_color=Player.WHITE, strategy=TieredSearchStrategy(seed=4))
    integration = EngineIntegration(session.ai)
    results = []
    integration.get_hint_async(session.engine, Player.WHITE, lambda *a: results.append(a))
    assert integration.wait(10)
    hint = results[0][0]
    assert session.engine.is_legal(hint)
    session.play(hint)
    assert session.is_ai_turn()


def test_self_play_game_finishes_or_hits_cap():
    white = AiEngine(Player.WHITE, TieredSearchStrategy(seed=1))
    black = AiEngine(Player.BLACK, TieredSearchStrategy(seed=2))
    levels = {Player.WHITE: Difficulty.MEDIUM, Player.BLACK: Difficulty.EASY}

    assert play_game(white, black, levels, max_plies=0) is None
    assert play_game(white, black, levels, max_plies=300) in (Player.WHITE, Player.BLACK, None)
