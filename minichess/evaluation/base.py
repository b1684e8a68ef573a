"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless (apart from precomputed tables)
    2. evaluate() always returns pawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Forced wins are scored by the terminal classifier, never here

Convention:
    - Material values in pawns (pawn = 1, queen = 8)
    - Return 0 for perfectly equal positions
"""

from abc import ABC, abstractmethod

from minichess.board.representation import Board

# Game outcome values. Their magnitude must stay far above any accumulated
# static evaluation so a forced win is never confused with material.
WIN_WHITE_VALUE = 999999
WIN_BLACK_VALUE = -999999
DRAW_VALUE = 0


def is_forced_win(score: float) -> bool:
    """True if `score` carries a checkmate value."""
    return abs(score) >= WIN_WHITE_VALUE


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(board): Returns position evaluation in pawns
    """

    @abstractmethod
    def evaluate(self, board: Board) -> float:
        """
        Evaluate a board from White's perspective.

        Must be pure and fast: it is called at every leaf of the search tree.

        Args:
            board: Board to evaluate

        Returns:
            float: Evaluation in pawns
        """
        pass

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
