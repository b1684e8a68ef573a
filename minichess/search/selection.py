"""
Imperfect-Play Move Selection

The automated player does not always play the top-ranked move. Walking down
the ranked move list from the best move, each step draws a uniform random
number; if it exceeds the intelligence factor the player "lapses" and
considers the next-ranked move instead.

    factor = 1.0 → always the best move
    factor = 0.9 → best move 90% of the time, second best 9%, ...
    factor = 0.0 → the worst move

Selection is pure post-processing of the search output. It never touches
scores or pruning, so the search stays deterministic.
"""

import random
from typing import Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def select_move(
    ranked_moves: Sequence[T],
    intelligence_factor: float,
    rng: Optional[random.Random] = None,
) -> Tuple[T, int]:
    """
    Pick a move from a best-first ranking.

    Args:
        ranked_moves: Moves sorted best first for the side to move
        intelligence_factor: Odds (0-1) of keeping the current move at each step
        rng: Random source (a fresh, unseeded Random if None)

    Returns:
        Tuple of (selected move, its rank)

    Raises:
        ValueError: If the ranking is empty or the factor is outside [0, 1]
    """
    if not ranked_moves:
        raise ValueError("Cannot select a move from an empty ranking")
    if not 0.0 <= intelligence_factor <= 1.0:
        raise ValueError(f"intelligence_factor must be between 0 and 1, got {intelligence_factor}")

    rng = rng if rng else random.Random()

    rank = 0
    # Every unlucky roll moves one spot down the ranking
    while rank < len(ranked_moves) - 1 and rng.random() > intelligence_factor:
        rank += 1

    return ranked_moves[rank], rank
