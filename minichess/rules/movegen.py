"""
Move Generation

Legal moves are produced in two steps:

    1. Pseudo-legal moves for every piece of the side to move, following the
       piece's movement shape (no castling, no en passant, no pawn double
       step).
    2. A filter that applies each candidate to a scratch board and drops it
       if the result is illegal (mover's king in check, or kings touching).

The filter is the only legality gate: there is no pin tracking and no
special "block the check" logic. Boards are at most 8*8 and search depth is
bounded, so recomputing check for every candidate is affordable.

Move Order:
    Origin cells are visited in row-major order. Within a cell the order is
    fixed per piece kind, see the *_OFFSETS and *_DIRECTIONS tables. Moves are
    NOT sorted by quality here; the search reorders them between iterative
    deepening passes.
"""

from typing import Dict, List, Optional

import chess

from minichess.board.moves import Move, apply_move
from minichess.board.representation import (
    Board,
    Location,
    TurnState,
    color_for,
    format_location,
)
from minichess.rules.attacks import (
    DIAGONAL_DIRECTIONS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    ORTHOGONAL_DIRECTIONS,
    board_state_is_illegal,
    pawn_direction,
)

MoveMap = Dict[str, Dict[str, Move]]

SLIDING_DIRECTIONS = {
    chess.ROOK: ORTHOGONAL_DIRECTIONS,
    chess.BISHOP: DIAGONAL_DIRECTIONS,
    chess.QUEEN: ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS,
}

STEPPING_OFFSETS = {
    chess.KNIGHT: KNIGHT_OFFSETS,
    chess.KING: KING_OFFSETS,
}


def _pseudo_legal_moves_for_piece(board: Board, start: Location, piece: chess.Piece) -> List[Move]:
    """
    Moves obeying the movement shape of `piece`, ignoring king safety.

    Args:
        board: Current board
        start: Cell the piece stands on
        piece: The piece to move

    Returns:
        List of Move objects in the fixed per-kind order
    """
    moves = []
    color = piece.color

    def add_if_empty(end: Location) -> bool:
        if board.is_empty(end):
            moves.append(Move(start, end, piece, is_capture=False))
            return True
        return False

    def add_if_enemy(end: Location) -> None:
        if board.has_enemy_piece(end, color):
            moves.append(Move(start, end, piece, is_capture=True))

    if piece.piece_type == chess.PAWN:
        step = pawn_direction(color)
        add_if_empty(start.offset(step, 0))
        add_if_enemy(start.offset(step, -1))
        add_if_enemy(start.offset(step, 1))

    elif piece.piece_type in STEPPING_OFFSETS:
        for offset in STEPPING_OFFSETS[piece.piece_type]:
            end = start.offset(*offset)
            add_if_enemy(end)
            add_if_empty(end)

    elif piece.piece_type in SLIDING_DIRECTIONS:
        for direction in SLIDING_DIRECTIONS[piece.piece_type]:
            end = start.offset(*direction)
            while add_if_empty(end):
                end = end.offset(*direction)
            add_if_enemy(end)

    else:
        raise ValueError(f"Unknown piece type: {piece.piece_type}")

    return moves


def generate_pseudo_legal_moves(board: Board, turn_state: TurnState) -> List[Move]:
    """
    All moves of the side to move that follow piece movement rules.

    Raises:
        ValueError: If `turn_state` is not a playing state
    """
    color = color_for(turn_state)
    moves = []
    for location, piece in board.pieces():
        if piece.color == color:
            moves.extend(_pseudo_legal_moves_for_piece(board, location, piece))
    return moves


def generate_legal_moves(board: Board, turn_state: TurnState) -> List[Move]:
    """
    Generate the complete legal move list for the side to move.

    Args:
        board: Current board
        turn_state: WHITE_TURN or BLACK_TURN

    Returns:
        Legal moves, grouped by origin cell in row-major order. Empty if the
        side to move is checkmated or stalemated.

    Raises:
        ValueError: If `turn_state` is not a playing state
    """
    return [
        move
        for move in generate_pseudo_legal_moves(board, turn_state)
        if not board_state_is_illegal(apply_move(move, board), turn_state)
    ]


# Public name used by front ends
legal_moves = generate_legal_moves


def convert_move_list_to_move_map(moves: List[Move], board_size: int) -> MoveMap:
    """
    Index moves by formatted start location, then formatted end location.

    Keys are formatted locations ("a1") so that a front end can look up the
    Move for a clicked origin/destination pair without rebuilding it.

    Args:
        moves: Legal moves
        board_size: Side length of the board the moves belong to

    Returns:
        Mapping {start: {end: Move}}
    """
    move_map: MoveMap = {}
    for move in moves:
        start = format_location(move.start, board_size)
        end = format_location(move.end, board_size)
        move_map.setdefault(start, {})[end] = move
    return move_map


def get_move_map(board: Board, turn_state: TurnState) -> MoveMap:
    """Move map of all legal moves for the side to move."""
    return convert_move_list_to_move_map(generate_legal_moves(board, turn_state), board.size)


def find_legal_move(board: Board, turn_state: TurnState, start: Location, end: Location) -> Optional[Move]:
    """The legal move from `start` to `end`, or None if there is none."""
    destinations = get_move_map(board, turn_state).get(format_location(start, board.size), {})
    return destinations.get(format_location(end, board.size))


def can_move_piece(board: Board, turn_state: TurnState, start: Location, end: Location) -> bool:
    """True if the side to move may legally play `start` to `end`."""
    return find_legal_move(board, turn_state, start, end) is not None
