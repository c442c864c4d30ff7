"""
rules.py - Move protocol and game controller for Connect Four

handle_column_selected() runs one complete move against a GameState:
place, check for a win, check for a tie, pass the turn. ConnectFourGame
wraps a state for a front end, handles restarts and notifies listeners
after every accepted move so the presentation can redraw itself.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional

from connectfour.debug import debug
from connectfour.utils import Coord, Outcome, Player
from connectfour.game.board import (GameState, DropResult, create_game, drop_piece,
                                    find_winning_line, evaluate_tie, advance_turn,
                                    get_valid_moves)


def handle_column_selected(state: GameState, column: int) -> DropResult:
    """
    Play one move in the given column.

    The steps run in a fixed order and stop early: a rejected drop changes
    nothing, a win ends the game without a tie check, and the turn only
    passes while the game is still in progress.

    Args:
        state: Game to update in place
        column: Column chosen by the player to move

    Returns:
        The DropResult of the placement
    """
    if state.outcome.is_game_over():
        debug.debug(f"Ignoring column {column}: game already over", "rules")
        return DropResult.rejected(column)

    mover = state.current_player
    result = drop_piece(state, column)
    if not result.placed:
        return result

    found = find_winning_line(state)
    if found is not None:
        state.outcome = Outcome.won_by(found[0])
        debug.info(f"{found[0].label} wins with {found[1]}", "rules")
        return result

    if evaluate_tie(state):
        state.outcome = Outcome.TIE
        debug.info("Board is full: game tied", "rules")
        return result

    advance_turn(state)
    debug.debug(f"{mover.label} played column {column}; "
                f"{state.current_player.label} to move", "rules")
    return result


class EventType(Enum):
    MOVE = auto()
    RESTART = auto()


@dataclass(frozen=True)
class GameEvent:
    """Notification sent to listeners after the state changed."""
    type: EventType
    state: GameState
    drop: Optional[DropResult] = None

    @property
    def outcome(self) -> Outcome:
        return self.state.outcome


Listener = Callable[[GameEvent], None]


class ConnectFourGame:
    """
    Owner of the current game for a front end.

    Front ends call select_column() and restart(); they read the state
    through the accessor methods and get redraw notifications by
    subscribing a listener.
    """

    def __init__(self):
        debug.debug("Initializing ConnectFourGame", "rules")
        self._state = create_game()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> GameState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def select_column(self, column: int) -> DropResult:
        """Play a move; listeners hear about it only if it was accepted."""
        result = handle_column_selected(self._state, column)
        if result.placed:
            self._publish(GameEvent(EventType.MOVE, self._state, result))
        return result

    def restart(self) -> None:
        """Throw the current game away and start a new one."""
        debug.info("Restarting game", "rules")
        self._state = create_game()
        self._publish(GameEvent(EventType.RESTART, self._state))

    def is_game_over(self) -> bool:
        return self._state.outcome.is_game_over()

    def get_outcome(self) -> Outcome:
        return self._state.outcome

    def get_winner(self) -> Optional[Player]:
        return self._state.outcome.winner

    def get_winning_line(self) -> List[Coord]:
        """Cells of the winning line, or an empty list if nobody has won."""
        if self._state.outcome.winner is None:
            return []
        found = find_winning_line(self._state)
        return found[1] if found else []

    def get_current_player(self) -> Player:
        return self._state.current_player

    def get_valid_moves(self) -> List[int]:
        return get_valid_moves(self._state)

    def render(self) -> str:
        return self._state.render(self.get_winning_line())
