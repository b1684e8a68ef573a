"""
Utilities Module

This module provides verification and benchmarking helpers for the engine.

Key Components:
    - perft: Move generation verification by leaf counting
    - Puzzle suite: 5*5 positions with a known best move
    - solve_puzzle / run_puzzle_suite: Search puzzles and score the engine
"""

from minichess.utils.testing import (
    PUZZLES,
    PuzzlePosition,
    PuzzleResult,
    perft,
    run_puzzle_suite,
    solve_puzzle,
)

__all__ = [
    'PUZZLES',
    'PuzzlePosition',
    'PuzzleResult',
    'perft',
    'run_puzzle_suite',
    'solve_puzzle',
]
