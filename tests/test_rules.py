import random
import unittest

import numpy as np

from connectfour.game.board import (GameState, create_game, cell_at, evaluate_win,
                                    get_valid_moves)
from connectfour.game.rules import ConnectFourGame, EventType, handle_column_selected
from connectfour.utils import ROWS, COLS, Player, Outcome, is_gravity_consistent
from tests.helpers import TIE_GRID, grid_with_top_open


class TestMoveProtocol(unittest.TestCase):
    def test_turns_alternate(self):
        state = create_game()
        expected = Player.ONE
        for column in (0, 1, 2, 3, 4):
            self.assertEqual(state.current_player, expected)
            result = handle_column_selected(state, column)
            self.assertTrue(result.placed)
            self.assertEqual(cell_at(state, result.row, column), expected)
            expected = expected.other()
        self.assertEqual(state.current_player, Player.TWO)

    def test_rejected_move_keeps_turn(self):
        state = create_game()
        for _ in range(ROWS):
            handle_column_selected(state, 0)
        self.assertEqual(state.current_player, Player.ONE)
        before = state.grid.copy()
        result = handle_column_selected(state, 0)
        self.assertFalse(result.placed)
        self.assertEqual(state.current_player, Player.ONE)
        np.testing.assert_array_equal(state.grid, before)

        result = handle_column_selected(state, COLS)
        self.assertFalse(result.placed)
        self.assertEqual(state.current_player, Player.ONE)

    def test_win_ends_game_and_freezes_turn(self):
        state = create_game()
        for column in (0, 6, 1, 6, 2, 5):
            handle_column_selected(state, column)
        result = handle_column_selected(state, 3)
        self.assertTrue(result.placed)
        self.assertEqual(state.outcome, Outcome.PLAYER_ONE_WIN)
        self.assertEqual(state.current_player, Player.ONE)

        before = state.grid.copy()
        self.assertFalse(handle_column_selected(state, 4).placed)
        np.testing.assert_array_equal(state.grid, before)
        self.assertEqual(state.current_player, Player.ONE)
        self.assertEqual(state.outcome, Outcome.PLAYER_ONE_WIN)

    def test_player_two_vertical_win(self):
        state = create_game()
        for column in (0, 6, 1, 6, 0, 6, 1, 6):
            handle_column_selected(state, column)
        self.assertEqual(state.outcome, Outcome.PLAYER_TWO_WIN)
        self.assertEqual(state.current_player, Player.TWO)

    def test_last_cell_ties(self):
        state = GameState.from_grid(grid_with_top_open(TIE_GRID, 2), Player.TWO)
        result = handle_column_selected(state, 2)
        self.assertEqual(result.row, 0)
        self.assertEqual(state.outcome, Outcome.TIE)
        self.assertEqual(state.current_player, Player.TWO)
        self.assertFalse(handle_column_selected(state, 2).placed)

    def test_win_on_last_cell_is_not_a_tie(self):
        rows = grid_with_top_open(TIE_GRID, 0)
        for row in (1, 2, 3):
            rows[row][0] = 1
        rows[4][0] = 2
        state = GameState.from_grid(rows, Player.ONE)
        self.assertIsNone(evaluate_win(state))
        handle_column_selected(state, 0)
        self.assertTrue(np.all(state.grid != Player.EMPTY.value))
        self.assertEqual(state.outcome, Outcome.PLAYER_ONE_WIN)

    def test_random_games_keep_invariants(self):
        rng = random.Random(2024)
        for _ in range(50):
            state = create_game()
            while not state.outcome.is_game_over():
                mover = state.current_player
                handle_column_selected(state, rng.choice(get_valid_moves(state)))
                self.assertTrue(is_gravity_consistent(state.grid))
                if state.outcome.is_game_over():
                    self.assertEqual(state.current_player, mover)
                else:
                    self.assertEqual(state.current_player, mover.other())
            ones = int(np.count_nonzero(state.grid == Player.ONE.value))
            twos = int(np.count_nonzero(state.grid == Player.TWO.value))
            self.assertIn(ones - twos, (0, 1))


class TestConnectFourGame(unittest.TestCase):
    def setUp(self):
        self.game = ConnectFourGame()
        self.events = []
        self.game.subscribe(self.events.append)

    def test_accepted_moves_publish_events(self):
        self.game.select_column(3)
        self.assertEqual(len(self.events), 1)
        event = self.events[0]
        self.assertEqual(event.type, EventType.MOVE)
        self.assertEqual(event.drop.row, ROWS - 1)
        self.assertIs(event.state, self.game.state)
        self.assertEqual(event.outcome, Outcome.IN_PROGRESS)

    def test_rejected_moves_are_silent(self):
        for _ in range(ROWS):
            self.game.select_column(0)
        self.events.clear()
        self.assertFalse(self.game.select_column(0).placed)
        self.assertFalse(self.game.select_column(-3).placed)
        self.assertEqual(self.events, [])

    def test_restart_replaces_state(self):
        self.game.select_column(0)
        old_state = self.game.state
        self.game.restart()
        self.assertIsNot(self.game.state, old_state)
        self.assertTrue(np.all(self.game.state.grid == Player.EMPTY.value))
        self.assertEqual(self.game.get_current_player(), Player.ONE)
        self.assertEqual(self.events[-1].type, EventType.RESTART)
        self.assertIsNone(self.events[-1].drop)
        # The old state is left as it was
        self.assertEqual(cell_at(old_state, ROWS - 1, 0), Player.ONE)

    def test_winner_and_line(self):
        for column in (0, 0, 1, 1, 2, 2):
            self.game.select_column(column)
        self.assertEqual(self.game.get_winning_line(), [])
        self.game.select_column(3)
        self.assertTrue(self.game.is_game_over())
        self.assertEqual(self.game.get_winner(), Player.ONE)
        self.assertEqual(self.game.get_winning_line(), [(5, 0), (5, 1), (5, 2), (5, 3)])
        self.assertEqual(self.events[-1].outcome, Outcome.PLAYER_ONE_WIN)
        self.assertEqual(self.game.get_valid_moves(), [])

    def test_unsubscribe(self):
        unsubscribe = self.game.subscribe(self.events.append)
        self.game.select_column(1)
        self.assertEqual(len(self.events), 2)
        unsubscribe()
        self.game.select_column(1)
        self.assertEqual(len(self.events), 3)


if __name__ == '__main__':
    unittest.main()
