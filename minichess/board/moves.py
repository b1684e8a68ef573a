"""
Moves and Move Application

A Move records where a piece starts, where it ends, which piece moves and
whether the destination held an enemy piece. Promotion is not a separate
move type: a pawn that lands on its far rank becomes a queen of the same
color when the move is applied.
"""

from dataclasses import dataclass

import chess

from minichess.board.representation import (
    DEFAULT_BOARD_SIZE,
    Board,
    Location,
    format_location,
)


@dataclass(frozen=True)
class Move:
    """
    A single move on the board.

    Attributes:
        start: Origin cell
        end: Destination cell
        piece: The moving piece (before any promotion)
        is_capture: True if the destination holds an enemy piece
    """

    start: Location
    end: Location
    piece: chess.Piece
    is_capture: bool = False


def promotion_row(color: chess.Color, board_size: int) -> int:
    """Far rank for pawns of `color`."""
    return 0 if color == chess.WHITE else board_size - 1


def apply_move(move: Move, board: Board) -> Board:
    """
    Return the board that results from playing `move`.

    The input board is never modified. Pawns reaching their far rank are
    replaced by a queen of the same color.

    Args:
        move: Move to play
        board: Board before the move

    Returns:
        New Board instance
    """
    piece = move.piece
    if piece.piece_type == chess.PAWN and move.end.row == promotion_row(piece.color, board.size):
        piece = chess.Piece(chess.QUEEN, piece.color)

    return board.with_cells([(move.start, None), (move.end, piece)])


def format_move(move: Move, board_size: int = DEFAULT_BOARD_SIZE) -> str:
    """
    Human readable move, e.g. "P a2->a3" or "Q c3xd4".

    Args:
        move: Move to format
        board_size: Side length of the board, for rank numbering
    """
    separator = "x" if move.is_capture else "->"
    return (
        f"{move.piece.symbol()} "
        f"{format_location(move.start, board_size)}{separator}{format_location(move.end, board_size)}"
    )
