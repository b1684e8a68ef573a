"""
Evaluation Module

This module provides static evaluation functions for the engine. The key
design principle is that evaluators are SWAPPABLE - the search algorithm
works with any evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Material + pawn-advancement evaluation
    - WIN_WHITE_VALUE / WIN_BLACK_VALUE: Scores for forced wins

Data Flow:
    Board → evaluator.evaluate() → float (pawns)
                                   Positive = White advantage
                                   Negative = Black advantage
"""

from minichess.evaluation.base import (
    DRAW_VALUE,
    WIN_BLACK_VALUE,
    WIN_WHITE_VALUE,
    Evaluator,
    is_forced_win,
)
from minichess.evaluation.classical import PIECE_VALUES, ClassicalEvaluator, static_eval

__all__ = [
    'DRAW_VALUE',
    'WIN_BLACK_VALUE',
    'WIN_WHITE_VALUE',
    'PIECE_VALUES',
    'Evaluator',
    'ClassicalEvaluator',
    'is_forced_win',
    'static_eval',
]
