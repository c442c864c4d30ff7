"""
connectfour.game - Board engine and move protocol for Connect Four
"""

from connectfour.game.board import (GameState, DropResult, create_game, drop_piece,
                                    evaluate_win, evaluate_tie, advance_turn,
                                    cell_at, current_player, outcome)
from connectfour.game.rules import (ConnectFourGame, GameEvent, EventType,
                                    handle_column_selected)

__all__ = [
    'GameState', 'DropResult', 'create_game', 'drop_piece', 'evaluate_win',
    'evaluate_tie', 'advance_turn', 'cell_at', 'current_player', 'outcome',
    'ConnectFourGame', 'GameEvent', 'EventType', 'handle_column_selected',
]
