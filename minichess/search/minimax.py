"""
Minimax Search with Alpha-Beta Pruning

This module implements the core search algorithm for the engine. Minimax
explores the game tree to rank the legal moves, and alpha-beta pruning
skips subtrees that cannot change the result.

Key Concepts:
    - Minimax: White maximizes the score, Black minimizes it
    - Alpha-Beta: Stop searching siblings once beta <= alpha
    - Iterative Deepening: Search depth 1, 2, ... reusing the previous
      ranking as the move order of the next pass
    - Anticipated Line: The boards expected if both sides follow the
      engine's preferred moves

Scoring Adjustments:
    - Mates found closer to the root are worth more:
      multiplier = max(0.1, 1 - 0.1 * plies_from_root)
    - A tiny tie-break term, TIEBREAK_WEIGHT * eval(board) * plies_from_root,
      is added after every move so that among otherwise equal lines the
      engine prefers the one that cashes in its advantage sooner. It is
      always smaller than a pawn.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Iterative Deepening: https://www.chessprogramming.org/Iterative_Deepening
"""

import logging
import random
import sys
import time
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

import chess

from minichess.board.moves import Move, apply_move, format_move
from minichess.board.representation import Board, TurnState, color_for, opposite
from minichess.config import EngineConfig
from minichess.evaluation.base import Evaluator, is_forced_win
from minichess.evaluation.classical import ClassicalEvaluator
from minichess.rules.attacks import board_state_is_illegal
from minichess.rules.movegen import generate_legal_moves
from minichess.rules.terminal import check_game_over, record_visit
from minichess.search.selection import select_move

logger = logging.getLogger(__name__)

# Tie-break factors must never outweigh anything in the static evaluation
TIEBREAK_WEIGHT = 0.0001

ALPHA_INIT = -sys.float_info.max
BETA_INIT = sys.float_info.max

MAX_DEPTH = 100  # Deepest pass iterative deepening will attempt


@dataclass(frozen=True)
class EvaluatedMove:
    """
    A move with its search score.

    Attributes:
        move: The move
        score: Minimax score from White's perspective
        anticipated_line: Boards expected after this move, starting with the
            board the move produces
    """

    move: Move
    score: float
    anticipated_line: Tuple[Board, ...] = ()


@dataclass
class EvaluationResult:
    """Score of a node and its moves ranked best-first for the side to move."""

    score: float
    ranked_moves: List[EvaluatedMove] = field(default_factory=list)


@dataclass
class SearchResult:
    """
    Outcome of a top-level search.

    Attributes:
        ranked_moves: Every legal move, best first for the side to move
        chosen_move: Move picked after applying the intelligence factor
        best_move: Top-ranked move
        score: Score of the best move
        chosen_rank: Index of chosen_move in ranked_moves
        depth: Depth of the last completed iteration
        nodes_searched: Positions visited over all iterations
    """

    ranked_moves: List[EvaluatedMove]
    chosen_move: EvaluatedMove
    best_move: EvaluatedMove
    score: float
    chosen_rank: int = 0
    depth: int = 0
    nodes_searched: int = 0


def early_mate_multiplier(depth: int, root_depth: int) -> float:
    """
    Scale of a mate found `root_depth - depth` plies below the root.

    `root_depth` is the depth of the current pass (the pass's maximum
    depth), so the scale measures distance from the root and does not
    depend on how deep later passes go.

    e.g. a mate on the first ply scores 0.9, a mate three plies down 0.7.
    """
    return max(0.1, 1 - 0.1 * (root_depth - depth))


def intermediate_score_adjustment(
    board: Board, depth: int, root_depth: int, evaluator: Evaluator
) -> float:
    """
    Tiny bonus for the static value of a board partway through a line.

    Weighted by plies from the root of the current pass (`root_depth` is
    that pass's depth).

    e.g. prefer 1) promote pawn 2) king move over 1) king move 2) promote pawn
    """
    return TIEBREAK_WEIGHT * evaluator.evaluate(board) * (root_depth - depth)


def evaluate_position(
    board: Board,
    move_list: Sequence[Move],
    turn_state: TurnState,
    visited: Mapping[str, int],
    depth: int,
    alpha: float,
    beta: float,
    evaluator: Evaluator,
    root_depth: Optional[int] = None,
    nodes_searched: Optional[List[int]] = None,
    prune: bool = True,
) -> EvaluationResult:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board: Current board
        move_list: Legal moves for the side to move, in search order
        turn_state: Side to move (WHITE_TURN or BLACK_TURN)
        visited: Visited-position tally including the current board
        depth: Remaining search depth
        alpha: Highest score the maximizer is already assured of
        beta: Lowest score the minimizer is already assured of
        evaluator: Static evaluation function
        root_depth: Depth the current iteration started at (defaults to depth)
        nodes_searched: Optional mutable list [count] of positions visited
        prune: Stop at beta <= alpha. Disabling gives plain minimax.

    Returns:
        EvaluationResult with the node score and the evaluated moves sorted
        best-first (descending for White, ascending for Black). Leaves and
        terminal nodes have no ranked moves.

    Raises:
        RuntimeError: If a move leads to an illegal board. This means the
            move list was not produced by the move generator.
    """
    if root_depth is None:
        root_depth = depth
    if nodes_searched is not None:
        nodes_searched[0] += 1

    game_is_over, game_over_value, _ = check_game_over(board, turn_state, visited, list(move_list))
    if game_is_over:
        multiplier = early_mate_multiplier(depth, root_depth) if is_forced_win(game_over_value) else 1
        return EvaluationResult(score=game_over_value * multiplier)

    # Base case: leaf node
    if depth == 0:
        return EvaluationResult(score=evaluator.evaluate(board))

    is_white = color_for(turn_state) == chess.WHITE
    next_turn = opposite(turn_state)

    ranked_moves = []
    for move in move_list:
        board_after = apply_move(move, board)
        if board_state_is_illegal(board_after, turn_state):
            raise RuntimeError(f"Illegal state evaluated: {board_after.encode()}")

        # The child is scored without the adjustment, so its window is shifted to match
        adjustment = intermediate_score_adjustment(board_after, depth, root_depth, evaluator)
        result = evaluate_position(
            board_after,
            generate_legal_moves(board_after, next_turn),
            next_turn,
            record_visit(board_after, visited),
            depth - 1,
            alpha - adjustment,
            beta - adjustment,
            evaluator,
            root_depth,
            nodes_searched,
            prune,
        )

        score = result.score + adjustment
        best_reply_line = result.ranked_moves[0].anticipated_line if result.ranked_moves else ()
        ranked_moves.append(EvaluatedMove(move, score, (board_after,) + best_reply_line))

        if is_white:
            alpha = max(alpha, score)
        else:
            beta = min(beta, score)

        # The opponent will never allow this node, remaining siblings are irrelevant
        if prune and beta <= alpha:
            break

    ranked_moves.sort(key=lambda evaluated: evaluated.score, reverse=is_white)

    return EvaluationResult(score=ranked_moves[0].score, ranked_moves=ranked_moves)


def rankings_equal(first: Sequence[EvaluatedMove], second: Sequence[EvaluatedMove]) -> bool:
    """True if both rankings list the same moves, scores and line lengths in order."""
    if len(first) != len(second):
        return False
    return all(
        a.move == b.move
        and a.score == b.score
        and len(a.anticipated_line) == len(b.anticipated_line)
        for a, b in zip(first, second)
    )


def rank_moves(
    board: Board,
    turn_state: TurnState,
    visited: Mapping[str, int],
    evaluator: Evaluator,
    config: EngineConfig,
    nodes_searched: Optional[List[int]] = None,
) -> Tuple[List[EvaluatedMove], int]:
    """
    Rank the legal moves with iterative deepening.

    Each pass searches the moves in the order the previous pass ranked them.
    Deepening stops when the ranking no longer changes or when the time
    budget is spent (checked between passes only). MAX_DEPTH is only a
    safety ceiling. config.max_depth applies when deepening is disabled, in
    which case a single pass is searched at that depth.

    Returns:
        Tuple of (ranked_moves, depth of the last completed pass)
    """
    ranked_moves = [EvaluatedMove(move, 0.0) for move in generate_legal_moves(board, turn_state)]

    start_time = time.time()
    if config.iterative_deepening:
        search_depth, depth_limit = 1, MAX_DEPTH
    else:
        search_depth = depth_limit = config.max_depth
    completed_depth = 0

    while search_depth <= depth_limit:
        logger.info(f"Evaluating the position, with depth {search_depth}")
        result = evaluate_position(
            board,
            [evaluated.move for evaluated in ranked_moves],
            turn_state,
            visited,
            search_depth,
            ALPHA_INIT,
            BETA_INIT,
            evaluator,
            search_depth,
            nodes_searched,
        )
        completed_depth = search_depth

        logger.debug(
            f"After depth {search_depth}: "
            + ", ".join(
                f"{format_move(evaluated.move, board.size)} ({evaluated.score:.4f})"
                for evaluated in result.ranked_moves
            )
        )

        if rankings_equal(ranked_moves, result.ranked_moves):
            logger.info("Reached steady state.")
            break
        ranked_moves = result.ranked_moves

        elapsed_ms = (time.time() - start_time) * 1000
        if elapsed_ms >= config.think_time_ms:
            logger.info(f"Think time exhausted after depth {search_depth} ({elapsed_ms:.0f}ms)")
            break

        search_depth += 1

    return ranked_moves, completed_depth


def find_best_move(
    board: Board,
    turn_state: TurnState,
    visited: Mapping[str, int],
    evaluator: Optional[Evaluator] = None,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Search the position and pick the automated player's move.

    Args:
        board: Current board
        turn_state: Side to move (WHITE_TURN or BLACK_TURN)
        visited: Visited-position tally including the current board
        evaluator: Static evaluation function (default: ClassicalEvaluator)
        config: Search settings (default: EngineConfig())
        rng: Random source for the move selector

    Returns:
        SearchResult with the ranked moves, the chosen move and the true
        best move

    Raises:
        ValueError: If `turn_state` is not a playing state, or the game is
            already over in this position
    """
    evaluator = evaluator if evaluator else ClassicalEvaluator()
    config = config if config else EngineConfig()

    game_is_over, _, outcome = check_game_over(board, turn_state, visited)
    if game_is_over:
        raise ValueError(f"Game is already over ({outcome.value}), nothing to search")

    logger.info(
        f"------------------\n"
        f"{'White' if turn_state == TurnState.WHITE_TURN else 'Black'} to move, "
        f"with board: {board.encode()}"
    )

    nodes = [0]
    ranked_moves, depth = rank_moves(board, turn_state, visited, evaluator, config, nodes)

    chosen_move, chosen_rank = select_move(ranked_moves, config.intelligence_factor(turn_state), rng)
    best_move = ranked_moves[0]

    logger.info(
        f"Selected AI move {format_move(chosen_move.move, board.size)} with rank {chosen_rank} "
        f"and value {chosen_move.score} (depth {depth}, nodes {nodes[0]})"
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("----Ranked move list:----")
        for evaluated in ranked_moves:
            line = " ".join(b.encode() for b in evaluated.anticipated_line)
            logger.debug(f"Move: {format_move(evaluated.move, board.size)}, Score: {evaluated.score}, Line: {line}")

    return SearchResult(
        ranked_moves=ranked_moves,
        chosen_move=chosen_move,
        best_move=best_move,
        score=best_move.score,
        chosen_rank=chosen_rank,
        depth=depth,
        nodes_searched=nodes[0],
    )


# Public name used by front ends
search = find_best_move
