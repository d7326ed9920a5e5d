from __future__ import annotations

import argparse
import random
from collections import Counter
from typing import Optional

from config import setup_logging
from draughts import AiEngine, Difficulty, Player, RuleEngine, TieredSearchStrategy


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play computer-vs-computer draughts games")
    ap.add_argument("--games", type=int, default=10, help="Number of games to play")
    ap.add_argument("--white", type=int, default=1, help="WHITE difficulty level (0..4)")
    ap.add_argument("--black", type=int, default=2, help="BLACK difficulty level (0..4)")
    ap.add_argument("--max-plies", type=int, default=200, help="Declare a draw after this many moves")
    ap.add_argument("--no-mandatory", action="store_true", help="Disable mandatory capture")
    ap.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    ap.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    return ap.parse_args()


def play_game(white: AiEngine, black: AiEngine, levels: dict, max_plies: int,
              mandatory_capture: bool = True) -> Optional[Player]:
    """Play one game; returns the winner, or None for a draw at the ply cap."""
    engine = RuleEngine.new_game(Player.WHITE, mandatory_capture)
    players = {Player.WHITE: white, Player.BLACK: black}
    for _ in range(max_plies):
        side = engine.current_player
        move = players[side].choose_move(engine, levels[side])
        if move is None:
            return side.opposite()
        result = engine.apply_move(move)
        if result.game_over:
            return result.winner
    return None


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)

    rng = random.Random(args.seed)
    white = AiEngine(Player.WHITE, TieredSearchStrategy(rng=rng))
    black = AiEngine(Player.BLACK, TieredSearchStrategy(rng=rng))
    levels = {
        Player.WHITE: Difficulty.from_level_index(args.white),
        Player.BLACK: Difficulty.from_level_index(args.black),
    }

    results: Counter = Counter()
    for i in range(args.games):
        winner = play_game(white, black, levels, args.max_plies, not args.no_mandatory)
        label = winner.name if winner else "DRAW"
        results[label] += 1
        print(f"Game {i + 1}: {label}")

    print(f"\nWHITE ({levels[Player.WHITE].name}): {results['WHITE']}")
    print(f"BLACK ({levels[Player.BLACK].name}): {results['BLACK']}")
    print(f"Draws: {results['DRAW']}")


if __name__ == "__main__":
    main()
