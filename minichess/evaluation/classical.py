"""
Classical Material Evaluation

This module implements the baseline evaluation function:
    1. Material counting (piece values)
    2. A pawn-advancement table (bonus for pawns pushed toward promotion)

Evaluation Components:
    - Material: P=1, N=3, B=3, R=5, Q=8, K=0
    - Position: +0.05 per rank a pawn has advanced from its starting rank

Pawns start one rank in front of their back rank, so a white pawn on row r
of an N*N board has advanced (N - 2 - r) ranks and a black pawn on row r
has advanced (r - 1) ranks.
"""

from typing import Dict

import chess
import numpy as np

from minichess.board.representation import Board
from minichess.evaluation.base import Evaluator

# ============================================================================
# Material Values (pawns)
# ============================================================================

PIECE_VALUES = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 8,
    chess.KING: 0,
}

PAWN_ADVANCE_BONUS = 0.05


def pawn_advancement_table(board_size: int) -> np.ndarray:
    """
    Bonus for a white pawn on each cell, as a (size, size) array.

    Row 0 is the promotion rank. Values for black are obtained by flipping
    the table vertically.
    """
    ranks_advanced = (board_size - 2) - np.arange(board_size, dtype=np.float64)
    column = PAWN_ADVANCE_BONUS * ranks_advanced
    return np.repeat(column[:, np.newaxis], board_size, axis=1)


class ClassicalEvaluator(Evaluator):
    """
    Classical evaluation using material and a pawn-advancement table.

    Attributes:
        pawn_tables: Cache of pawn-advancement tables by board size
    """

    def __init__(self):
        """Initialize the evaluator with an empty table cache."""
        self.pawn_tables: Dict[int, np.ndarray] = {}

    def pawn_table(self, board_size: int) -> np.ndarray:
        table = self.pawn_tables.get(board_size)
        if table is None:
            table = pawn_advancement_table(board_size)
            self.pawn_tables[board_size] = table
        return table

    def evaluate(self, board: Board) -> float:
        """
        Evaluate position using material + pawn advancement.

        Args:
            board: Board to evaluate

        Returns:
            float: Evaluation in pawns (White's perspective)
        """
        pawn_table = self.pawn_table(board.size)
        last_row = board.size - 1

        score = 0.0
        for location, piece in board.pieces():
            value = float(PIECE_VALUES[piece.piece_type])

            if piece.piece_type == chess.PAWN:
                # For black pawns, flip the table vertically
                row = location.row if piece.color == chess.WHITE else last_row - location.row
                value += float(pawn_table[row, location.col])

            if piece.color == chess.WHITE:
                score += value
            else:
                score -= value

        return score


_default_evaluator = ClassicalEvaluator()


def static_eval(board: Board) -> float:
    """Evaluate `board` with a shared ClassicalEvaluator."""
    return _default_evaluator.evaluate(board)
