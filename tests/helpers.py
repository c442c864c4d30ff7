from connectfour.game.board import create_game
from connectfour.utils import Player

# Full board without four in a row for either player: columns follow the
# pattern 0,0,1,1,0,0,1 and every other row is inverted.
TIE_GRID = [
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
]


def state_with_pieces(cells, player=Player.ONE):
    """Fresh state with ``player`` written straight into the given cells."""
    state = create_game()
    for row, col in cells:
        state.grid[row, col] = player.value
    return state


def grid_with_top_open(grid, column):
    """Copy of ``grid`` with the top cell of ``column`` emptied."""
    rows = [list(row) for row in grid]
    rows[0][column] = 0
    return rows
