"""
Game Module

Headless game state consumed by front ends (board widgets, CLIs).

Key Components:
    - GameSession: Board, turn state, visited-position tally and history
      of one game, with human and automated moves
"""

from minichess.game.session import GameSession

__all__ = ['GameSession']
