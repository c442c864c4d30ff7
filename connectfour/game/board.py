"""
board.py - Board engine for Connect Four

This module owns the game state and the operations that act on it: dropping
a piece, scanning for four-in-a-row, checking for a full board and passing
the turn. Evaluation and turn order are left to the caller (see
connectfour.game.rules) so each step can be exercised on its own.
"""

from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, Coord, Player, Outcome,
                               is_valid_position, iter_lines,
                               get_column_height, is_gravity_consistent,
                               render_board_ascii)


class DropResult(NamedTuple):
    """Result of a drop attempt. ``row`` is None when nothing was placed."""
    placed: bool
    row: Optional[int]
    column: int

    @classmethod
    def rejected(cls, column: int) -> 'DropResult':
        return cls(False, None, column)


class GameState:
    """
    Grid, player to move and outcome of one game.

    Instances are created by create_game() and mutated only through the
    functions in this module; front ends read them through the accessors.
    """

    def __init__(self):
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)
        self.current_player = Player.ONE
        self.outcome = Outcome.IN_PROGRESS

    @classmethod
    def from_grid(cls, grid, current_player: Player = Player.ONE,
                  outcome: Outcome = Outcome.IN_PROGRESS) -> 'GameState':
        """
        Build a state from an explicit grid (rows top to bottom).

        Raises:
            ValueError: If the grid has the wrong shape, holds values other
                than 0/1/2, has a piece floating above an empty cell, or
                does not match the given outcome
        """
        array = np.asarray(grid)
        if array.shape != (ROWS, COLS):
            raise ValueError(f"Grid must have shape {(ROWS, COLS)}, got {array.shape}")
        if not np.isin(array, [p.value for p in Player]).all():
            raise ValueError("Grid cells must be 0 (empty), 1 or 2")
        if not is_gravity_consistent(array):
            raise ValueError("Grid has a piece above an empty cell")
        if current_player == Player.EMPTY:
            raise ValueError("Current player must be Player.ONE or Player.TWO")

        state = cls()
        state.grid = array.astype(np.int8)
        found = find_winning_line(state)
        if outcome == Outcome.IN_PROGRESS and found is not None:
            raise ValueError(f"Grid already has four in a row for {found[0].label}")
        if outcome == Outcome.TIE and not evaluate_tie(state):
            raise ValueError("A tied game needs a full grid")
        if outcome.winner is not None and (found is None or found[0] != outcome.winner):
            raise ValueError(f"Grid has no four in a row for {outcome.winner.label}")

        state.current_player = current_player
        state.outcome = outcome
        return state

    def copy(self) -> 'GameState':
        new_state = GameState()
        new_state.grid = self.grid.copy()
        new_state.current_player = self.current_player
        new_state.outcome = self.outcome
        return new_state

    def render(self, highlight: Optional[List[Coord]] = None) -> str:
        return render_board_ascii(self.grid, highlight)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"GameState(current_player={self.current_player.name}, "
                f"outcome={self.outcome.name})")


def create_game() -> GameState:
    """Create a fresh game: empty grid, Player ONE to move, in progress."""
    debug.debug("Creating new game", "board")
    return GameState()


def cell_at(state: GameState, row: int, col: int) -> Player:
    """
    Get the contents of one cell.

    Raises:
        IndexError: If (row, col) is outside the board
    """
    if not is_valid_position(row, col):
        raise IndexError(f"Cell ({row}, {col}) is outside the board")
    return Player(int(state.grid[row, col]))


def current_player(state: GameState) -> Player:
    return state.current_player


def outcome(state: GameState) -> Outcome:
    return state.outcome


def is_column_full(state: GameState, column: int) -> bool:
    """True if no piece can go into ``column`` (full or outside the board)."""
    if not 0 <= column < COLS:
        return True
    return state.grid[0, column] != Player.EMPTY.value


def get_valid_moves(state: GameState) -> List[int]:
    """Columns that would accept a piece right now (none once the game ends)."""
    if state.outcome.is_game_over():
        return []
    return [col for col in range(COLS) if not is_column_full(state, col)]


def find_empty_row(state: GameState, column: int) -> Optional[int]:
    """
    Find where a piece dropped into ``column`` would land.

    Returns:
        The lowest empty row, or None if the column is full or out of range
    """
    if not 0 <= column < COLS:
        return None
    height = get_column_height(state.grid, column)
    if height >= ROWS:
        return None
    return ROWS - 1 - height


def drop_piece(state: GameState, column: int) -> DropResult:
    """
    Place the current player's piece in the lowest empty cell of a column.

    Only the grid is touched; win/tie evaluation and passing the turn are
    up to the caller. A finished game, an out-of-range column and a full
    column all leave the state untouched and report placed=False.

    Args:
        state: Game to update
        column: Column index (0-indexed)

    Returns:
        DropResult with the landing row when the piece was placed
    """
    if state.outcome.is_game_over():
        debug.debug(f"Rejected drop in column {column}: game is over ({state.outcome.name})",
                    "board")
        return DropResult.rejected(column)

    if not 0 <= column < COLS:
        debug.warning(f"Rejected drop: column {column} out of range 0-{COLS - 1}", "board")
        return DropResult.rejected(column)

    row = find_empty_row(state, column)
    if row is None:
        debug.debug(f"Rejected drop: column {column} is full", "board")
        return DropResult.rejected(column)

    state.grid[row, column] = state.current_player.value
    debug.debug(f"{state.current_player.label} placed at ({row}, {column})", "board")
    return DropResult(True, row, column)


def find_winning_line(state: GameState) -> Optional[Tuple[Player, List[Coord]]]:
    """
    Scan the board for four-in-a-row.

    Every cell is tried as the start of a horizontal, vertical, down-right
    and down-left line; the first complete line found in that order wins.

    Returns:
        (winner, cells of the line), or None if nobody has four in a row
    """
    grid = state.grid
    debug.start_timer("win_scan")
    try:
        for direction, cells in iter_lines():
            if not all(is_valid_position(r, c) for r, c in cells):
                continue
            first = grid[cells[0]]
            if first == Player.EMPTY.value:
                continue
            if all(grid[cell] == first for cell in cells[1:]):
                debug.trace(f"Four in a row ({direction.name}) at {cells}", "board")
                return Player(int(first)), cells
        return None
    finally:
        debug.end_timer("win_scan", "board")


def evaluate_win(state: GameState) -> Optional[Player]:
    """Return the player holding four in a row, or None. Does not modify state."""
    found = find_winning_line(state)
    return found[0] if found else None


def evaluate_tie(state: GameState) -> bool:
    """True iff every cell is occupied. Does not modify state."""
    return bool(np.all(state.grid != Player.EMPTY.value))


def advance_turn(state: GameState) -> None:
    state.current_player = state.current_player.other()
    debug.trace(f"Turn passes to {state.current_player.label}", "board")
