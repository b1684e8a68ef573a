#!/usr/bin/env python3
"""
Puzzle Benchmark Runner

Runs the puzzle suite at multiple depths, and perft on the starting
position, to establish baseline performance metrics for the engine.

Usage:
    python tools/run_benchmark.py [--depths 1,2,3] [--perft 4] [--verbose]
"""

import sys
import argparse
import logging
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from minichess.board.representation import TurnState, get_starting_board
from minichess.evaluation.classical import ClassicalEvaluator
from minichess.utils.testing import perft, run_puzzle_suite


def setup_logging(verbose: bool = False):
    """Configure logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_perft(max_depth: int, board_size: int):
    """Print perft counts of the starting position up to max_depth."""
    board = get_starting_board(board_size)

    print(f"\nPERFT ({board_size}x{board_size} starting position, White to move)")
    print("-" * 80)
    for depth in range(1, max_depth + 1):
        start_time = time.time()
        nodes = perft(board, TurnState.WHITE_TURN, depth)
        elapsed = time.time() - start_time
        print(f"  depth {depth}: {nodes:>10,} nodes  ({format_time(elapsed)})")


def run_benchmark(depths: list[int], verbose: bool = False):
    """
    Run the puzzle suite at multiple depths.

    Args:
        depths: List of depths to test
        verbose: If True, print detailed results for each position
    """
    evaluator = ClassicalEvaluator()

    print("=" * 80)
    print("PUZZLE BENCHMARK - Minichess Engine")
    print("=" * 80)
    print(f"Evaluator: Classical (material + pawn advancement)")
    print(f"Search: Minimax with Alpha-Beta Pruning")
    print(f"Depths: {depths}")
    print("=" * 80)

    all_results = []

    for depth in depths:
        print(f"\n{'=' * 80}")
        print(f"DEPTH {depth}")
        print("=" * 80)

        start_time = time.time()
        result = run_puzzle_suite(evaluator=evaluator, depth=depth, verbose=verbose)
        total_time = time.time() - start_time

        total_nodes = sum(r.nodes_searched for r in result['results'])
        nodes_per_sec = total_nodes / total_time if total_time > 0 else 0

        all_results.append({
            'depth': depth,
            'score': result['score'],
            'total': result['total'],
            'percentage': result['percentage'],
            'avg_time': result['avg_time'],
            'nodes_per_sec': nodes_per_sec,
            'results': result['results'],
        })

        print(f"\nResults at depth {depth}:")
        print(f"  Correct: {result['score']}/{result['total']} ({result['percentage']:.1f}%)")
        print(f"  Total time: {format_time(total_time)}")
        print(f"  Avg time per position: {format_time(result['avg_time'])}")
        print(f"  Total nodes: {total_nodes:,}")
        print(f"  Nodes/sec: {nodes_per_sec:,.0f}")

        failed = [r for r in result['results'] if not r.correct]
        if failed and verbose:
            print(f"\n  Failed positions:")
            for r in failed:
                print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Depth':<8} {'Correct':<12} {'%':<8} {'Avg Time':<12} {'Nodes/sec':<15}")
    print("-" * 80)

    for r in all_results:
        print(f"{r['depth']:<8} {r['score']}/{r['total']:<10} {r['percentage']:<7.1f}% {format_time(r['avg_time']):<12} {r['nodes_per_sec']:>12,.0f}")

    print("=" * 80)

    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Run the puzzle benchmark at multiple depths"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="1,2,3",
        help="Comma-separated list of depths to test (default: 1,2,3)"
    )
    parser.add_argument(
        "--perft",
        type=int,
        default=0,
        help="Also run perft on the starting position up to this depth"
    )
    parser.add_argument(
        "--board-size",
        type=int,
        default=5,
        help="Starting board used for perft (default: 5)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results for each position"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging of every search"
    )

    args = parser.parse_args()
    setup_logging(args.debug)

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
    except ValueError:
        print("Error: depths must be comma-separated integers")
        sys.exit(1)

    try:
        run_benchmark(depths, verbose=args.verbose)
        if args.perft > 0:
            run_perft(args.perft, args.board_size)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n\nError running benchmark: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
