"""
Game Session

Headless game state for front ends: the current board, whose turn it is,
the visited-position tally and the move history. Rendering, click handling
and move delays belong to the front end; the session only offers the
operations they need:

    - restart: Reset to the board the session was created with
    - move_map: Legal moves indexed by formatted start/end cells
    - play_move: Play a human move given its start and end cells
    - play_ai_move: Search and play the automated player's move
    - play_until_over: Let the automated players finish the game

After every move the terminal classifier updates the turn state, so a
finished game reports its outcome (WIN_WHITE, DRAW_REPETITION, ...)
instead of a side to move.
"""

import logging
import random
from typing import List, Optional, Tuple, Union

from minichess.board.moves import Move, apply_move, format_move
from minichess.board.representation import (
    Board,
    Location,
    TurnState,
    format_location,
    get_starting_board,
    opposite,
    parse_location,
)
from minichess.config import EngineConfig
from minichess.evaluation.base import Evaluator
from minichess.evaluation.classical import ClassicalEvaluator
from minichess.rules.movegen import MoveMap, find_legal_move, get_move_map
from minichess.rules.terminal import VisitedStates, check_game_over, record_visit
from minichess.search.minimax import SearchResult, find_best_move

logger = logging.getLogger(__name__)

CellRef = Union[Location, str]


class GameSession:
    """
    State of one game between humans and/or automated players.

    Attributes:
        config: Engine and player settings
        evaluator: Static evaluator used by the automated players
        board: Current board
        turn_state: Side to move, or the outcome once the game is over
        visited: Visited-position tally of this game
        history: Moves played so far with the board each produced
        last_search: Result of the most recent automated move
        initial_board: Board that restart() returns to
        initial_turn_state: Side to move after restart()
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        evaluator: Optional[Evaluator] = None,
        rng: Optional[random.Random] = None,
        board: Optional[Board] = None,
        turn_state: TurnState = TurnState.NOT_STARTED,
    ):
        """
        Initialize a session.

        Args:
            config: Engine settings (default: EngineConfig())
            evaluator: Position evaluator (default: ClassicalEvaluator)
            rng: Random source for the move selector
            board: Custom position to start from, instead of the starting board
            turn_state: Initial state. A custom board with WHITE_TURN or
                BLACK_TURN starts the game right away.
        """
        self.config = config if config else EngineConfig()
        self.evaluator = evaluator if evaluator else ClassicalEvaluator()
        self.rng = rng if rng else random.Random()

        self.initial_board: Board = board if board else get_starting_board(self.config.board_size)
        # A game that has not started yet begins with White to move
        self.initial_turn_state = turn_state if turn_state.is_in_progress else TurnState.WHITE_TURN

        self.board = self.initial_board
        self.turn_state = turn_state
        self.visited: VisitedStates = record_visit(self.board, {}) if turn_state.is_in_progress else {}
        self.history: List[Tuple[Move, Board]] = []
        self.last_search: Optional[SearchResult] = None

    def restart(self) -> None:
        """
        Reset to the board the session was created with.

        That is the starting board unless a custom board was given, in which
        case the custom board comes back with its side to move (White if the
        session was created NOT_STARTED).
        """
        logger.info("Starting new game")
        self.board = self.initial_board
        self.turn_state = self.initial_turn_state
        self.visited = record_visit(self.board, {})
        self.history = []
        self.last_search = None

    @property
    def is_over(self) -> bool:
        return self.turn_state != TurnState.NOT_STARTED and not self.turn_state.is_in_progress

    def move_map(self) -> MoveMap:
        """Legal moves for the side to move (empty unless a game is in progress)."""
        if not self.turn_state.is_in_progress:
            return {}
        return get_move_map(self.board, self.turn_state)

    def is_ai_turn(self) -> bool:
        return self.turn_state.is_in_progress and not self.config.is_human(self.turn_state)

    def _require_in_progress(self) -> None:
        if not self.turn_state.is_in_progress:
            raise ValueError(f"No game in progress (state: {self.turn_state.value})")

    def _location(self, cell: CellRef) -> Location:
        if isinstance(cell, str):
            return parse_location(cell, self.board.size)
        return Location(*cell)

    def _apply(self, move: Move) -> None:
        mover = self.turn_state
        self.board = apply_move(move, self.board)
        self.visited = record_visit(self.board, self.visited)
        self.history.append((move, self.board))

        next_turn = opposite(mover)
        game_is_over, _, outcome = check_game_over(self.board, next_turn, self.visited)
        self.turn_state = outcome if game_is_over else next_turn

        logger.info(f"Played {format_move(move, self.board.size)}, board: {self.board.encode()}")
        if game_is_over:
            logger.info(f"Game over: {outcome.value}")

    def play_move(self, start: CellRef, end: CellRef) -> Move:
        """
        Play a move for the side to move.

        Args:
            start: Origin cell, as a Location or formatted ("b2")
            end: Destination cell, as a Location or formatted ("b3")

        Returns:
            The Move that was played

        Raises:
            ValueError: If no game is in progress or the move is not legal
        """
        self._require_in_progress()

        start_location = self._location(start)
        end_location = self._location(end)
        move = find_legal_move(self.board, self.turn_state, start_location, end_location)
        if move is None:
            raise ValueError(
                f"Illegal move {format_location(start_location, self.board.size)}"
                f"->{format_location(end_location, self.board.size)} in {self.board.encode()}"
            )

        self._apply(move)
        return move

    def play_ai_move(self) -> SearchResult:
        """
        Search the position and play the automated player's move.

        Returns:
            The SearchResult; its chosen_move is the move that was played

        Raises:
            ValueError: If no game is in progress
        """
        self._require_in_progress()

        result = find_best_move(
            self.board,
            self.turn_state,
            self.visited,
            evaluator=self.evaluator,
            config=self.config,
            rng=self.rng,
        )
        self.last_search = result
        self._apply(result.chosen_move.move)
        return result

    def play_until_over(self, max_moves: int = 200) -> TurnState:
        """
        Let the automated players move until the game ends.

        Args:
            max_moves: Give up after this many moves (the game stays in progress)

        Returns:
            The final turn state

        Raises:
            ValueError: If a human is to move
        """
        if self.turn_state == TurnState.NOT_STARTED:
            self.restart()

        for _ in range(max_moves):
            if not self.turn_state.is_in_progress:
                break
            if not self.is_ai_turn():
                raise ValueError(f"{self.turn_state.value}: a human is to move")
            self.play_ai_move()

        return self.turn_state

