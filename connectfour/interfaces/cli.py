"""
cli.py - Command-line front end for Connect Four

Two players share the terminal and take turns typing a column number. The
CLI only turns input into engine calls; drawing is done by TextRenderer,
which redraws whenever the game reports a change.
"""

import argparse
import random
import sys
import time
from typing import Callable, List, Optional

from connectfour.debug import debug, DebugLevel
from connectfour.utils import COLS
from connectfour.game.rules import ConnectFourGame
from connectfour.interfaces.renderer import TextRenderer, status_text

QUIT = -1
RESTART = -2


class SimpleCLI:
    """Hot-seat Connect Four in the terminal."""

    def __init__(self, input_func: Callable[[str], str] = input,
                 output=None,
                 sleep_func: Callable[[float], None] = time.sleep):
        self.game = ConnectFourGame()
        self.args = None
        self.input_func = input_func
        self.output = output or sys.stdout
        self.sleep_func = sleep_func
        self.delay = 0.5
        self.confirm_restart = True

    def say(self, message: str) -> None:
        self.output.write(message + "\n")
        self.output.flush()

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and apply logging settings."""
        parser = argparse.ArgumentParser(description='Connect Four for two players')
        parser.add_argument('--debug', action='store_true',
                            help='Shortcut for --debug_level debug')
        parser.add_argument('--debug_level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity (default: warning)')
        parser.add_argument('--log_file', default=None,
                            help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game (default)')
        play_parser.add_argument('--delay', type=float, default=0.5,
                                 help='Seconds to wait before announcing the result')
        play_parser.add_argument('--no-confirm', dest='confirm', action='store_false',
                                 help='Restart without asking for confirmation')

        benchmark_parser = subparsers.add_parser('benchmark',
                                                 help='Time random games through the engine')
        benchmark_parser.add_argument('--games', type=int, default=200,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Random seed for move selection')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        self.delay = getattr(self.args, 'delay', self.delay)
        self.confirm_restart = getattr(self.args, 'confirm', self.confirm_restart)
        return self.args

    def run(self, argv: Optional[List[str]] = None) -> None:
        if self.args is None:
            self.parse_args(argv)

        if self.args.command in (None, 'play'):
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark()

    def play_game(self) -> None:
        """Run games until the players quit."""
        self.say("Connect Four! Players take turns dropping pieces.")
        self.say(f"Enter a column (0-{COLS - 1}), 'r' to restart or 'q' to quit.")

        renderer = TextRenderer(self.game, self.output, announce_outcome=False)
        try:
            renderer.draw(self.game.state)
            while True:
                if not self.play_until_over():
                    self.say("Goodbye.")
                    return
                self.sleep_func(self.delay)
                self.say(status_text(self.game.state))
                if not self.ask_yes_no("Play again? [y/N]: "):
                    self.say("Goodbye.")
                    return
                self.game.restart()
        finally:
            renderer.close()

    def play_until_over(self) -> bool:
        """
        Feed moves to the game until it ends.

        Returns:
            True when the game finished, False if the players quit
        """
        while not self.game.is_game_over():
            move = self.get_move()
            if move is None:
                continue
            if move == QUIT:
                return False
            if move == RESTART:
                if not self.confirm_restart or self.ask_yes_no("Restart the game? [y/N]: "):
                    self.game.restart()
                continue

            result = self.game.select_column(move)
            if not result.placed:
                self.say(f"Column {move} is full, pick another.")
        return True

    def get_move(self) -> Optional[int]:
        """
        Read one command from the current player.

        Returns:
            A column index, QUIT, RESTART, or None for unusable input
        """
        player = self.game.get_current_player()
        try:
            user_input = self.input_func(f"{player.label} ({player}), column: ")
        except EOFError:
            return QUIT
        user_input = user_input.strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            self.say("Invalid input. Enter a column number, 'r' or 'q'.")
            return None

        if not 0 <= move < COLS:
            self.say(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def ask_yes_no(self, prompt: str) -> bool:
        try:
            answer = self.input_func(prompt)
        except EOFError:
            return False
        return answer.strip().lower() in ('y', 'yes')

    def benchmark(self) -> None:
        """Play random games and report how long the engine took."""
        rng = random.Random(self.args.seed)
        games = max(1, self.args.games)
        tallies = {}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(games):
            game = ConnectFourGame()
            while not game.is_game_over():
                game.select_column(rng.choice(game.get_valid_moves()))
                total_moves += 1
            tallies[game.get_outcome().name] = tallies.get(game.get_outcome().name, 0) + 1
        elapsed = debug.end_timer("benchmark", "cli")

        self.say(f"Played {games} games ({total_moves} moves) in {elapsed:.3f} seconds, "
                 f"{elapsed / total_moves * 1000:.4f} ms per move")
        for name, count in sorted(tallies.items()):
            self.say(f"  {name}: {count}")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run(argv)


if __name__ == "__main__":
    main()
