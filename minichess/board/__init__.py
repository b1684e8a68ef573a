"""
Board Module

This module provides the immutable board model shared by the rules, the
evaluator and the search.

Key Components:
    - Board: Frozen grid of cells holding python-chess Pieces (or None)
    - Location: (row, col) coordinate, formatted as "a1".."e5" on 5*5
    - TurnState: Side to move, or the game outcome
    - Move / apply_move: Moves and pure move application (with promotion)
    - encode_board / decode_board: Deterministic board serialization

Data Flow:
    encoded string → decode_board() → Board → apply_move() → new Board
"""

from minichess.board.representation import (
    Board,
    Location,
    TurnState,
    color_for,
    decode_board,
    encode_board,
    format_location,
    get_starting_board,
    mirror_board,
    opposite,
    parse_location,
    turn_state_for,
)
from minichess.board.moves import Move, apply_move, format_move

__all__ = [
    'Board',
    'Location',
    'TurnState',
    'Move',
    'apply_move',
    'color_for',
    'decode_board',
    'encode_board',
    'format_location',
    'format_move',
    'get_starting_board',
    'mirror_board',
    'opposite',
    'parse_location',
    'turn_state_for',
]
