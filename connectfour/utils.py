"""
utils.py - Constants, enumerations and grid helpers for Connect Four

The board is a fixed 6x7 numpy array indexed [row, col]. Row 0 is the top
of the board and row ROWS-1 the bottom, so gravity pulls pieces towards
larger row numbers.
"""

from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

Coord = Tuple[int, int]  # (row, col)


class Player(Enum):
    """Players, doubling as cell contents (EMPTY for an open cell)."""
    EMPTY = 0
    ONE = 1
    TWO = 2

    def other(self) -> 'Player':
        """Get the opposing player (EMPTY stays EMPTY)."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def label(self) -> str:
        if self == Player.EMPTY:
            return "Empty"
        return f"Player {self.value}"

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class Outcome(Enum):
    """Classification of a game: still running, won by a player, or tied."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    TIE = auto()

    def is_game_over(self) -> bool:
        return self != Outcome.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == Outcome.PLAYER_ONE_WIN:
            return Player.ONE
        if self == Outcome.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def won_by(cls, player: Player) -> 'Outcome':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win a game")


class Direction(Enum):
    """Line templates checked from every start cell."""
    HORIZONTAL = auto()      # left to right
    VERTICAL = auto()        # top to bottom
    DIAGONAL_RIGHT = auto()  # top-left to bottom-right
    DIAGONAL_LEFT = auto()   # top-right to bottom-left


# (drow, dcol) per direction, in scan order
LINE_DIRECTIONS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_RIGHT: (1, 1),
    Direction.DIAGONAL_LEFT: (1, -1),
}


def is_valid_position(row: int, col: int) -> bool:
    """Check if a position lies inside the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def line_cells(row: int, col: int, direction: Direction) -> List[Coord]:
    """
    Get the CONNECT_N cells of a line starting at (row, col).

    Cells may fall outside the board; callers check bounds.
    """
    dr, dc = LINE_DIRECTIONS[direction]
    return [(row + i * dr, col + i * dc) for i in range(CONNECT_N)]


def iter_lines() -> Iterator[Tuple[Direction, List[Coord]]]:
    """Yield every candidate line, row-major by start cell, then by direction."""
    for row in range(ROWS):
        for col in range(COLS):
            for direction in LINE_DIRECTIONS:
                yield direction, line_cells(row, col, direction)


def get_column_height(grid: np.ndarray, column: int) -> int:
    """
    Get the number of pieces stacked in a column.

    Args:
        grid: The game grid
        column: The column to check

    Returns:
        Count of occupied cells in the column
    """
    return int(np.count_nonzero(grid[:, column] != Player.EMPTY.value))


def is_gravity_consistent(grid: np.ndarray) -> bool:
    """
    Check that no column has an empty cell below an occupied one.

    Args:
        grid: The game grid

    Returns:
        True if every column's pieces form a block resting on the bottom row
    """
    for col in range(grid.shape[1]):
        height = get_column_height(grid, col)
        occupied = grid[grid.shape[0] - height:, col]
        if np.any(occupied == Player.EMPTY.value):
            return False
    return True


def render_board_ascii(grid: np.ndarray, highlight: Optional[List[Coord]] = None) -> str:
    """
    Render the grid as ASCII art with a numbered column-top row.

    Args:
        grid: The game grid
        highlight: Cells to mark with '*' (e.g. a winning line)

    Returns:
        Multi-line string, top row first
    """
    marked = set(highlight or [])
    lines = [" " + " ".join(str(col) for col in range(COLS)) + " "]
    lines.append("+" + "-" * (COLS * 2 - 1) + "+")

    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            if (row, col) in marked:
                cells.append("*")
            else:
                cells.append(str(Player(int(grid[row, col]))))
        lines.append("|" + " ".join(cells) + "|")

    lines.append("+" + "-" * (COLS * 2 - 1) + "+")
    return "\n".join(lines)
