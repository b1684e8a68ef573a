"""
Engine configuration for search and automated play.
"""

from dataclasses import dataclass

import chess

from minichess.board.representation import (
    DEFAULT_BOARD_SIZE,
    STARTING_LAYOUTS,
    TurnState,
    color_for,
)


@dataclass
class EngineConfig:
    """Configuration for the search engine and the automated players.

    This dataclass gathers every tunable of the engine in one place so that
    front ends and tools can build one, tweak a field and hand it down.
    """

    # Search
    max_depth: int = 4
    """Search depth when iterative_deepening is off (deepening is bounded by time)"""

    iterative_deepening: bool = True
    """Search depth 1, 2, ... until steady state or think time, instead of one max_depth pass"""

    think_time_ms: int = 1000
    """Wall-clock budget, polled between deepening iterations"""

    # Automated players
    intelligence_factor_white: float = 1.0
    """Odds (0-1) that White's AI keeps the next-best move instead of slipping"""

    intelligence_factor_black: float = 1.0
    """Odds (0-1) that Black's AI keeps the next-best move instead of slipping"""

    white_is_human: bool = False
    """Whether White's moves come from a human"""

    black_is_human: bool = False
    """Whether Black's moves come from a human"""

    ai_move_delay_ms: int = 600
    """Pause before an AI move, honored by interactive front ends only"""

    # Board
    board_size: int = DEFAULT_BOARD_SIZE
    """Side length of the starting board (5 or 3)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

        if self.think_time_ms < 0:
            raise ValueError(f"think_time_ms must be non-negative, got {self.think_time_ms}")

        for name in ("intelligence_factor_white", "intelligence_factor_black"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

        if self.ai_move_delay_ms < 0:
            raise ValueError(f"ai_move_delay_ms must be non-negative, got {self.ai_move_delay_ms}")

        if self.board_size not in STARTING_LAYOUTS:
            raise ValueError(
                f"board_size should be one of {sorted(STARTING_LAYOUTS)}, got {self.board_size}"
            )

    def intelligence_factor(self, turn_state: TurnState) -> float:
        """Intelligence factor of the side to move."""
        if color_for(turn_state) == chess.WHITE:
            return self.intelligence_factor_white
        return self.intelligence_factor_black

    def is_human(self, turn_state: TurnState) -> bool:
        """Whether the side to move is played by a human."""
        if color_for(turn_state) == chess.WHITE:
            return self.white_is_human
        return self.black_is_human

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Search: max_depth={self.max_depth}, deepening={self.iterative_deepening}, "
            f"think_time={self.think_time_ms}ms\n"
            f"  Intelligence: white={self.intelligence_factor_white}, black={self.intelligence_factor_black}\n"
            f"  Players: white={'human' if self.white_is_human else 'AI'}, "
            f"black={'human' if self.black_is_human else 'AI'}\n"
            f"  Board: {self.board_size}x{self.board_size}\n"
            f")"
        )
