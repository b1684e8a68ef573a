"""
Engine Testing and Benchmarking

This module provides verification and benchmarking tools for the engine.

Tools:
    1. Perft: Counts the leaf nodes of the legal move tree to a fixed depth.
       Any change in the counts for a known position means move generation
       changed.

    2. Puzzle suite: 5*5 positions with a known best move
       - Mates in one for both colors
       - Winning a hanging queen
       - Promotion

Evaluation Metrics:
    - Correct Moves: Number of positions where the engine found a best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total positions visited by the search

Reference:
    - Perft: https://www.chessprogramming.org/Perft
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from minichess.board.moves import apply_move, format_move
from minichess.board.representation import (
    Board,
    TurnState,
    decode_board,
    format_location,
    opposite,
)
from minichess.config import EngineConfig
from minichess.evaluation.base import Evaluator
from minichess.rules.movegen import generate_legal_moves
from minichess.rules.terminal import record_visit
from minichess.search.minimax import find_best_move

logger = logging.getLogger(__name__)


def perft(board: Board, turn_state: TurnState, depth: int) -> int:
    """
    Count the leaf nodes of the legal move tree.

    Args:
        board: Root board
        turn_state: Side to move at the root
        depth: Number of plies to expand

    Returns:
        Number of move sequences of exactly `depth` plies
    """
    if depth == 0:
        return 1

    moves = generate_legal_moves(board, turn_state)
    if depth == 1:
        return len(moves)

    next_turn = opposite(turn_state)
    return sum(perft(apply_move(move, board), next_turn, depth - 1) for move in moves)


@dataclass
class PuzzlePosition:
    """
    A position with known best move(s).

    Attributes:
        board: Encoded board (see encode_board)
        turn_state: Side to move
        best_moves: Acceptable moves as "start-end", e.g. "e1-e5"
        description: Human-readable description of the position
        id: Position identifier
    """
    board: str
    turn_state: TurnState
    best_moves: List[str]
    description: str = ""
    id: str = ""


@dataclass
class PuzzleResult:
    """
    Result of searching a single puzzle.

    Attributes:
        position: The puzzle
        found_move: Move the engine found ("start-end")
        score: Evaluation score for the move
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of positions visited
        depth: Depth of the last completed search iteration
    """
    position: PuzzlePosition
    found_move: str
    score: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0
    line: List[str] = field(default_factory=list)


# ============================================================================
# Puzzle Suite
# ============================================================================

PUZZLES = [
    PuzzlePosition(
        id="MC.01",
        board="k..../...../K..../...../....R",
        turn_state=TurnState.WHITE_TURN,
        best_moves=["e1-e5"],
        description="White mates on the back rank with Re5",
    ),
    PuzzlePosition(
        id="MC.02",
        board="....r/...../k..../...../K....",
        turn_state=TurnState.BLACK_TURN,
        best_moves=["e5-e1"],
        description="Black mates on the first rank with Re1",
    ),
    PuzzlePosition(
        id="MC.03",
        board="....k/...../q..../...../R..K.",
        turn_state=TurnState.WHITE_TURN,
        best_moves=["a1-a3"],
        description="White wins the undefended queen",
    ),
    PuzzlePosition(
        id="MC.04",
        board="k...K/...../...../..p../.....",
        turn_state=TurnState.BLACK_TURN,
        best_moves=["c2-c1"],
        description="Black promotes to a queen",
    ),
]


def solve_puzzle(
    position: PuzzlePosition,
    depth: int,
    evaluator: Optional[Evaluator] = None,
    verbose: bool = False,
) -> PuzzleResult:
    """
    Search a single puzzle at a fixed depth.

    Args:
        position: Puzzle to solve
        depth: Search depth
        evaluator: Position evaluator
        verbose: If True, print detailed output

    Returns:
        PuzzleResult with the engine's move and whether it was correct
    """
    board = decode_board(position.board)
    config = EngineConfig(max_depth=depth, iterative_deepening=False)

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"Board: {position.board}")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()

    try:
        result = find_best_move(
            board,
            position.turn_state,
            record_visit(board, {}),
            evaluator=evaluator,
            config=config,
        )
    except (ValueError, RuntimeError) as e:
        logger.error(f"Error searching puzzle {position.id}: {e}", exc_info=True)
        return PuzzleResult(
            position=position,
            found_move="",
            score=0.0,
            correct=False,
            time_taken=time.time() - start_time,
            depth=depth,
        )

    time_taken = time.time() - start_time
    best = result.best_move.move
    found_move = f"{format_location(best.start, board.size)}-{format_location(best.end, board.size)}"
    correct = found_move in position.best_moves

    if verbose:
        print(f"Engine found: {format_move(best, board.size)} (score: {result.score:.2f})")
        print(f"Nodes searched: {result.nodes_searched:,}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'CORRECT' if correct else 'WRONG'}")

    return PuzzleResult(
        position=position,
        found_move=found_move,
        score=result.score,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=result.nodes_searched,
        depth=result.depth,
        line=[b.encode() for b in result.best_move.anticipated_line],
    )


def run_puzzle_suite(
    evaluator: Optional[Evaluator] = None,
    depth: int = 3,
    positions: Optional[List[PuzzlePosition]] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run the puzzle suite.

    Args:
        evaluator: Position evaluator
        depth: Search depth (default: 3)
        positions: Puzzles to run (default: PUZZLES)
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of PuzzleResult objects
            - avg_time: Average time per position
            - total_time: Total search time
    """
    positions = positions if positions is not None else PUZZLES

    if verbose:
        print("=" * 70)
        print("MINICHESS PUZZLE SUITE")
        print("=" * 70)

    results = [solve_puzzle(position, depth, evaluator, verbose=verbose) for position in positions]
    correct_count = sum(1 for result in results if result.correct)
    total_time = sum(result.time_taken for result in results)

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.2f}s")
        print(f"Total time: {total_time:.2f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
    }
