"""
Board Representation

This module defines the immutable board model used by every other part of
the engine. Boards are small square grids (5*5 in the standard layout) whose
cells hold either None (empty) or a python-chess Piece.

Board Orientation:
    - Row 0 = White's far edge (Black's back rank)
    - Row N-1 = White's back rank
    - Column 0 = A-file

    Location (4, 0) on a 5*5 board is "a1", location (0, 4) is "e5".

Encoding:
    Boards encode to a FEN-like string: rows top to bottom joined by "/",
    one symbol per cell, "." for empty cells. The starting 5*5 board is

        rbkqn/ppppp/...../PPPPP/RBKQN

    The encoding is the key of the visited-position tally, so two boards
    encode identically if and only if their cells are identical.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Tuple

import chess

DEFAULT_BOARD_SIZE = 5
MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = len(chess.FILE_NAMES)

EMPTY = "."
ROW_SEPARATOR = "/"

Cell = Optional[chess.Piece]

STARTING_LAYOUTS = {
    5: "rbkqn/ppppp/...../PPPPP/RBKQN",
    3: "kpp/.../PPK",
}


class TurnState(Enum):
    """Side to move, or the outcome once the game is no longer in progress."""

    NOT_STARTED = "not_started"
    WHITE_TURN = "white_turn"
    BLACK_TURN = "black_turn"
    WIN_WHITE = "win_white"
    WIN_BLACK = "win_black"
    DRAW_REPETITION = "draw_repetition"
    DRAW_STALEMATE = "draw_stalemate"
    DRAW_MATERIAL = "draw_material"

    @property
    def is_in_progress(self) -> bool:
        return self in (TurnState.WHITE_TURN, TurnState.BLACK_TURN)


def turn_state_for(color: chess.Color) -> TurnState:
    """Turn state for the side `color` to move."""
    return TurnState.WHITE_TURN if color == chess.WHITE else TurnState.BLACK_TURN


def color_for(turn_state: TurnState) -> chess.Color:
    """
    Color to move for a playing turn state.

    Raises:
        ValueError: If the turn state is not WHITE_TURN or BLACK_TURN
    """
    if turn_state == TurnState.WHITE_TURN:
        return chess.WHITE
    if turn_state == TurnState.BLACK_TURN:
        return chess.BLACK
    raise ValueError(f"Turn state {turn_state} has no side to move")


def opposite(turn_state: TurnState) -> TurnState:
    """The other side's turn. Raises ValueError for non-playing states."""
    return turn_state_for(not color_for(turn_state))


class Location(NamedTuple):
    """A (row, col) cell coordinate, 0-indexed from the top left."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> "Location":
        return Location(self.row + d_row, self.col + d_col)


def format_location(location: Location, board_size: int = DEFAULT_BOARD_SIZE) -> str:
    """
    Format a location as file letter + rank number.

    Args:
        location: Cell to format
        board_size: Side length of the board the location belongs to

    Returns:
        String such as "a1" (bottom left) or "e5" (top right on 5*5)
    """
    row, col = location
    return f"{chess.FILE_NAMES[col]}{board_size - row}"


def parse_location(text: str, board_size: int = DEFAULT_BOARD_SIZE) -> Location:
    """
    Parse a formatted location back into (row, col).

    Raises:
        ValueError: If the text is not a square on a board of this size
    """
    text = text.strip().lower()
    if len(text) < 2 or text[0] not in chess.FILE_NAMES or not text[1:].isdigit():
        raise ValueError(f"Invalid location: {text!r}")

    col = chess.FILE_NAMES.index(text[0])
    row = board_size - int(text[1:])
    if not (0 <= row < board_size and 0 <= col < board_size):
        raise ValueError(f"Location {text!r} is off a {board_size}x{board_size} board")
    return Location(row, col)


@dataclass(frozen=True)
class Board:
    """
    Immutable snapshot of a square board.

    Attributes:
        cells: Tuple of rows, each a tuple of cells (None or chess.Piece)
    """

    cells: Tuple[Tuple[Cell, ...], ...]

    def __post_init__(self):
        size = len(self.cells)
        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise ValueError(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {size}"
            )
        if any(len(row) != size for row in self.cells):
            raise ValueError("Board must be square")

    @property
    def size(self) -> int:
        return len(self.cells)

    def in_bounds(self, location: Location) -> bool:
        row, col = location
        return 0 <= row < self.size and 0 <= col < self.size

    def piece_at(self, location: Location) -> Cell:
        """
        Get the piece in a cell.

        Returns:
            The piece, or None if the cell is empty or off the board
        """
        if not self.in_bounds(location):
            return None
        return self.cells[location.row][location.col]

    def is_empty(self, location: Location) -> bool:
        """True if the cell exists and holds no piece."""
        return self.in_bounds(location) and self.cells[location.row][location.col] is None

    def has_enemy_piece(self, location: Location, color: chess.Color) -> bool:
        """True if the cell holds a piece of the color opposing `color`."""
        piece = self.piece_at(location)
        return piece is not None and piece.color != color

    def pieces(self) -> Iterator[Tuple[Location, chess.Piece]]:
        """Yield (location, piece) for every occupied cell in row-major order."""
        for row, cells in enumerate(self.cells):
            for col, piece in enumerate(cells):
                if piece is not None:
                    yield Location(row, col), piece

    def with_cells(self, changes) -> "Board":
        """
        Return a new board with some cells replaced.

        Args:
            changes: Iterable of (location, cell) pairs
        """
        rows = [list(row) for row in self.cells]
        for location, cell in changes:
            rows[location.row][location.col] = cell
        return Board(tuple(tuple(row) for row in rows))

    def encode(self) -> str:
        return encode_board(self)

    def __str__(self) -> str:
        return encode_board(self, separator="\n")


def encode_board(board: Board, separator: str = ROW_SEPARATOR) -> str:
    """Serialize every cell of the board in row-major order."""
    return separator.join(
        "".join(EMPTY if piece is None else piece.symbol() for piece in row)
        for row in board.cells
    )


def decode_board(text: str, separator: str = ROW_SEPARATOR) -> Board:
    """
    Build a board from its encoded form.

    Args:
        text: Encoded board, e.g. "kpp/.../PPK"
        separator: Row separator used in `text`

    Returns:
        Board instance

    Raises:
        ValueError: If a symbol is unknown or the rows do not form a square
    """
    rows = []
    for row_text in text.strip().split(separator):
        row = []
        for symbol in row_text.strip():
            if symbol == EMPTY:
                row.append(None)
            elif symbol.lower() in chess.PIECE_SYMBOLS[1:]:
                row.append(chess.Piece.from_symbol(symbol))
            else:
                raise ValueError(f"Unknown cell symbol {symbol!r} in board {text!r}")
        rows.append(tuple(row))
    return Board(tuple(rows))


def empty_board(size: int = DEFAULT_BOARD_SIZE) -> Board:
    return Board(tuple(tuple(None for _ in range(size)) for _ in range(size)))


def get_starting_board(size: int = DEFAULT_BOARD_SIZE) -> Board:
    """
    Starting position for a supported board size.

    Raises:
        ValueError: If no starting layout exists for `size`
    """
    if size not in STARTING_LAYOUTS:
        raise ValueError(
            f"No starting layout for size {size}, expected one of {sorted(STARTING_LAYOUTS)}"
        )
    return decode_board(STARTING_LAYOUTS[size])


def mirror_board(board: Board) -> Board:
    """
    Flip the board top to bottom and swap the colors of every piece.

    The mirrored position is the same position seen from the other side,
    so any color-symmetric evaluation of it is the negation of the unmirrored one.
    """
    return Board(
        tuple(
            tuple(
                None if piece is None else chess.Piece(piece.piece_type, not piece.color)
                for piece in row
            )
            for row in reversed(board.cells)
        )
    )
