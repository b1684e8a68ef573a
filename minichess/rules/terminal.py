"""
Terminal Position Classification

Decides whether a game is over and, if so, how. Rules are applied in this
order:

    1. No legal moves: checkmate if the side to move is in check
       (the other side wins), stalemate otherwise
    2. Repetition: the board has been seen more than twice
    3. Insufficient material: only kings, plus at most one bishop or knight
       in total
    4. Otherwise the game continues with the other side to move

Visited-Position Tally:
    A plain dict {encoded board: count}. It is never mutated in place;
    record_visit() returns an updated copy so that every search branch only
    sees the repetitions along its own path.
"""

from typing import Dict, List, Mapping, Optional, Tuple

import chess

from minichess.board.moves import Move
from minichess.board.representation import Board, TurnState, color_for, encode_board, opposite
from minichess.evaluation.base import DRAW_VALUE, WIN_BLACK_VALUE, WIN_WHITE_VALUE
from minichess.rules.attacks import king_is_in_check
from minichess.rules.movegen import generate_legal_moves

VisitedStates = Dict[str, int]

REPETITION_LIMIT = 2  # A third occurrence draws

MINOR_PIECES = (chess.BISHOP, chess.KNIGHT)


def record_visit(board: Board, visited: Mapping[str, int]) -> VisitedStates:
    """
    Count one more occurrence of `board`.

    Args:
        board: Board that was just reached
        visited: Current tally (not modified)

    Returns:
        New tally with the board's count incremented (or set to 1)
    """
    key = encode_board(board)
    updated = dict(visited)
    updated[key] = updated.get(key, 0) + 1
    return updated


def is_draw_by_repetition(board: Board, visited: Mapping[str, int]) -> bool:
    return visited.get(encode_board(board), 0) > REPETITION_LIMIT


def is_insufficient_material(board: Board) -> bool:
    """
    True if neither side can force mate.

    Only kings remain, or kings plus a single bishop or knight in total.
    Any pawn, rook or queen is sufficient material.
    """
    minor_pieces = 0
    for _, piece in board.pieces():
        if piece.piece_type == chess.KING:
            continue
        if piece.piece_type in MINOR_PIECES:
            minor_pieces += 1
        else:
            return False
    return minor_pieces <= 1


def check_game_over(
    board: Board,
    turn_state: TurnState,
    visited: Mapping[str, int],
    move_list: Optional[List[Move]] = None,
) -> Tuple[bool, float, TurnState]:
    """
    Check whether the game is over and return its base value.

    Args:
        board: Current board
        turn_state: Side to move (WHITE_TURN or BLACK_TURN)
        visited: Visited-position tally, including the current board
        move_list: Legal moves for the side to move (generated if None)

    Returns:
        Tuple of (is_over, value, next_turn_state)
            - value: WIN_WHITE_VALUE / WIN_BLACK_VALUE for checkmate, 0 for
              draws and ongoing games
            - next_turn_state: The outcome if the game is over, otherwise
              the other side to move

    Raises:
        ValueError: If `turn_state` is not a playing state
    """
    color = color_for(turn_state)

    if move_list is None:
        move_list = generate_legal_moves(board, turn_state)

    if not move_list:
        if king_is_in_check(board, color):
            if color == chess.WHITE:
                return True, WIN_BLACK_VALUE, TurnState.WIN_BLACK
            return True, WIN_WHITE_VALUE, TurnState.WIN_WHITE
        return True, DRAW_VALUE, TurnState.DRAW_STALEMATE

    if is_draw_by_repetition(board, visited):
        return True, DRAW_VALUE, TurnState.DRAW_REPETITION

    if is_insufficient_material(board):
        return True, DRAW_VALUE, TurnState.DRAW_MATERIAL

    return False, DRAW_VALUE, opposite(turn_state)


# Public name used by front ends
is_terminal = check_game_over
