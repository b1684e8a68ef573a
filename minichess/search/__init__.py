"""
Search Module

This module implements the adversarial search. The primary algorithm is
minimax with alpha-beta pruning, driven by iterative deepening, followed by
an imperfect-play move selector.

Key Components:
    - evaluate_position: Core recursive search with alpha-beta pruning
    - find_best_move / search: Root-level iterative deepening driver
    - select_move: Intelligence-factor move selection
    - EvaluatedMove / SearchResult: Search output types
"""

from minichess.search.minimax import (
    EvaluatedMove,
    EvaluationResult,
    SearchResult,
    evaluate_position,
    find_best_move,
    search,
)
from minichess.search.selection import select_move

__all__ = [
    'EvaluatedMove',
    'EvaluationResult',
    'SearchResult',
    'evaluate_position',
    'find_best_move',
    'search',
    'select_move',
]
