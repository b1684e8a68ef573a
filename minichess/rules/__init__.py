"""
Rules Module

This module implements the rules of the reduced chess variant: attack
detection, legal move generation and terminal position classification.

Key Components:
    - king_is_in_check / board_state_is_illegal: Attack and legality tests
    - generate_legal_moves: Pseudo-legal generation filtered by legality
    - get_move_map: Legal moves indexed by formatted start/end cells
    - check_game_over: Checkmate, stalemate, repetition, insufficient material
    - record_visit: Pure update of the visited-position tally

Rules Not Supported:
    Castling, en passant, pawn double steps, the fifty-move rule.
    Pawns always promote to queens.
"""

from minichess.rules.attacks import board_state_is_illegal, find_king, king_is_in_check
from minichess.rules.movegen import (
    can_move_piece,
    generate_legal_moves,
    get_move_map,
    legal_moves,
)
from minichess.rules.terminal import (
    check_game_over,
    is_insufficient_material,
    is_terminal,
    record_visit,
)

__all__ = [
    'board_state_is_illegal',
    'can_move_piece',
    'check_game_over',
    'find_king',
    'generate_legal_moves',
    'get_move_map',
    'is_insufficient_material',
    'is_terminal',
    'king_is_in_check',
    'legal_moves',
    'record_visit',
]
