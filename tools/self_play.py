#!/usr/bin/env python3
"""
CLI tool for AI-vs-AI self-play matches.

Plays a number of games between two automated players, each with its own
intelligence factor, and reports the outcomes.

Usage:
    python tools/self_play.py --games 20 --no-deepening --depth 3 \\
        --white-intelligence 1.0 --black-intelligence 0.8

    python tools/self_play.py --games 5 --board-size 3 --seed 7 --verbose
"""

import argparse
import logging
import random
import sys
from collections import Counter
from pathlib import Path

from tqdm import tqdm

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from minichess.board.representation import TurnState
from minichess.config import EngineConfig
from minichess.game.session import GameSession


def setup_logging(verbose: bool = False, log_file: str = None):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    handlers = [logging.FileHandler(log_file, mode="w")] if log_file else None
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def play_match(config: EngineConfig, games: int, max_moves: int, seed: int = None) -> Counter:
    """
    Play a series of games and count the outcomes.

    Args:
        config: Engine settings shared by both players
        games: Number of games to play
        max_moves: Moves after which an unfinished game is abandoned
        seed: Seed for the move selectors (None for random)

    Returns:
        Counter of final turn states
    """
    rng = random.Random(seed)
    outcomes = Counter()

    pbar = tqdm(range(games), desc="Self-play", unit="game")
    for _ in pbar:
        session = GameSession(config=config, rng=rng)
        session.restart()
        outcome = session.play_until_over(max_moves=max_moves)
        outcomes[outcome] += 1
        pbar.set_postfix({"last": outcome.value, "moves": len(session.history)})

    return outcomes


def main():
    parser = argparse.ArgumentParser(description="Play AI-vs-AI games")
    parser.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    parser.add_argument("--depth", type=int, default=3, help="Search depth with --no-deepening (default: 3)")
    parser.add_argument(
        "--think-time", type=int, default=1000, help="Think time per move in ms (default: 1000)"
    )
    parser.add_argument(
        "--no-deepening", action="store_true", help="Search straight at --depth"
    )
    parser.add_argument(
        "--white-intelligence", type=float, default=1.0, help="White's intelligence factor"
    )
    parser.add_argument(
        "--black-intelligence", type=float, default=1.0, help="Black's intelligence factor"
    )
    parser.add_argument("--board-size", type=int, default=5, help="Board size: 5 or 3")
    parser.add_argument("--max-moves", type=int, default=200, help="Abandon games after N moves")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-file", type=str, default=None, help="Write logs to this file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(args.verbose, args.log_file)

    try:
        config = EngineConfig(
            max_depth=args.depth,
            iterative_deepening=not args.no_deepening,
            think_time_ms=args.think_time,
            intelligence_factor_white=args.white_intelligence,
            intelligence_factor_black=args.black_intelligence,
            board_size=args.board_size,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(config)

    try:
        outcomes = play_match(config, args.games, args.max_moves, args.seed)
    except KeyboardInterrupt:
        print("\n\nSelf-play interrupted by user")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Self-play failed: {e}", exc_info=True)
        sys.exit(1)

    print("\n" + "=" * 60)
    print("OUTCOMES")
    print("=" * 60)
    for state in TurnState:
        if outcomes[state]:
            label = "unfinished" if state.is_in_progress else state.value
            print(f"  {label:<20} {outcomes[state]:>5}")
    print("=" * 60)


if __name__ == "__main__":
    main()
