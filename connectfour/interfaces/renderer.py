"""
renderer.py - Text presentation of a Connect Four game

The renderer never touches the grid; it subscribes to a ConnectFourGame and
redraws from the state it is handed whenever a move is accepted or the game
restarts.
"""

import sys
from typing import Optional, TextIO

from connectfour.debug import debug
from connectfour.utils import Outcome
from connectfour.game.board import GameState, find_winning_line
from connectfour.game.rules import ConnectFourGame, GameEvent, EventType


def status_text(state: GameState) -> str:
    """One-line description of whose turn it is or how the game ended."""
    if state.outcome == Outcome.TIE:
        return "Tie!"
    winner = state.outcome.winner
    if winner is not None:
        return f"{winner.label} won!"
    return f"{state.current_player.label}'s turn ({state.current_player})"


class TextRenderer:
    """Draws the board and a status line to a text stream."""

    def __init__(self, game: ConnectFourGame, stream: Optional[TextIO] = None,
                 announce_outcome: bool = True):
        """
        Args:
            game: Game to follow
            stream: Where to draw (defaults to stdout)
            announce_outcome: If False, the status line for a finished game
                is left to the caller (which may want to pause first)
        """
        self.game = game
        self.stream = stream or sys.stdout
        self.announce_outcome = announce_outcome
        self._unsubscribe = game.subscribe(self.on_event)

    def close(self) -> None:
        self._unsubscribe()

    def on_event(self, event: GameEvent) -> None:
        debug.trace(f"Redrawing after {event.type.name}", "renderer")
        if event.type == EventType.RESTART:
            self.stream.write("New game.\n")
        elif event.drop is not None:
            self.stream.write(f"Dropped in column {event.drop.column} (row {event.drop.row}).\n")
        self.draw(event.state)

    def draw(self, state: GameState) -> None:
        found = find_winning_line(state) if state.outcome.winner is not None else None
        self.stream.write(state.render(found[1] if found else None) + "\n")
        if self.announce_outcome or not state.outcome.is_game_over():
            self.stream.write(status_text(state) + "\n")
        self.stream.flush()
