"""
Attack and Check Detection

Determines whether a king is attacked by scanning outward from the king by
piece-attack pattern, instead of generating the enemy's moves:

    1. Pawns: the two forward-diagonal cells (from the king's point of view)
    2. Knights: the eight L-shaped offsets
    3. Rooks / Queens: first piece hit along the four orthogonal rays
    4. Bishops / Queens: first piece hit along the four diagonal rays

Nothing is cached; every call rescans the board.
"""

from typing import Optional, Tuple

import chess

from minichess.board.representation import Board, Location, TurnState, color_for

KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-2, 1), (-2, -1), (2, 1), (2, -1),
    (-1, 2), (-1, -2), (1, 2), (1, -2),
)

KING_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)

# right, left, up, down
ORTHOGONAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (-1, 0), (1, 0))

# down-right, down-left, up-right, up-left
DIAGONAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def pawn_direction(color: chess.Color) -> int:
    """Row step of a pawn of `color` (white pawns move toward row 0)."""
    return -1 if color == chess.WHITE else 1


def find_king(board: Board, color: chess.Color) -> Optional[Location]:
    """Location of `color`'s king, or None if it is not on the board."""
    for location, piece in board.pieces():
        if piece.piece_type == chess.KING and piece.color == color:
            return location
    return None


def _first_piece_along(board: Board, start: Location, direction: Tuple[int, int]) -> Optional[chess.Piece]:
    """First piece met walking from `start` (exclusive) in `direction`."""
    location = start.offset(*direction)
    while board.is_empty(location):
        location = location.offset(*direction)
    return board.piece_at(location)


def king_is_in_check(board: Board, color: chess.Color, king_location: Optional[Location] = None) -> bool:
    """
    Check whether `color`'s king is attacked.

    Args:
        board: Board to inspect
        color: Color of the king to test
        king_location: Precomputed king location (looked up if None)

    Returns:
        True if any enemy piece attacks the king

    Raises:
        RuntimeError: If `color` has no king on the board. A sound move
            generator never produces such a board.
    """
    if king_location is None:
        king_location = find_king(board, color)
        if king_location is None:
            raise RuntimeError(f"Cannot evaluate board, missing king: {board.encode()}")

    enemy = not color

    # Enemy pawns attack from the cells diagonally in front of the king
    step = pawn_direction(color)
    for d_col in (-1, 1):
        if board.piece_at(king_location.offset(step, d_col)) == chess.Piece(chess.PAWN, enemy):
            return True

    enemy_knight = chess.Piece(chess.KNIGHT, enemy)
    for offset in KNIGHT_OFFSETS:
        if board.piece_at(king_location.offset(*offset)) == enemy_knight:
            return True

    rook_like = (chess.Piece(chess.ROOK, enemy), chess.Piece(chess.QUEEN, enemy))
    for direction in ORTHOGONAL_DIRECTIONS:
        if _first_piece_along(board, king_location, direction) in rook_like:
            return True

    bishop_like = (chess.Piece(chess.BISHOP, enemy), chess.Piece(chess.QUEEN, enemy))
    for direction in DIAGONAL_DIRECTIONS:
        if _first_piece_along(board, king_location, direction) in bishop_like:
            return True

    return False


def kings_are_adjacent(first: Location, second: Location) -> bool:
    """True if the two cells touch, including diagonally."""
    return abs(first.row - second.row) <= 1 and abs(first.col - second.col) <= 1


def board_state_is_illegal(board: Board, turn_state: TurnState) -> bool:
    """
    Check whether a board is illegal for the side that just moved.

    A board is illegal if a king is missing, the kings touch, or the side
    that just moved (`turn_state`) left its own king in check.

    Args:
        board: Board after the move
        turn_state: Side that made the move (WHITE_TURN or BLACK_TURN)

    Returns:
        True if the board must never be produced or evaluated

    Raises:
        ValueError: If `turn_state` is not a playing state
    """
    color = color_for(turn_state)

    king = find_king(board, color)
    enemy_king = find_king(board, not color)
    if king is None or enemy_king is None:
        return True

    if kings_are_adjacent(king, enemy_king):
        return True

    return king_is_in_check(board, color, king)
