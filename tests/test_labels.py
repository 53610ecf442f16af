import unittest

from backgammon_engine.config import EvaluatorWeights, SimulationConfig
from backgammon_engine.labels import describe_roll, format_move, player_label, win_type_label
from backgammon_engine.types import BAR, OFF, Move, Player, WinType, opponent


class TestLabels(unittest.TestCase):
    def test_format_move(self):
        self.assertEqual(format_move(Move(Player.WHITE, 12, 7, 5)), "point 13 to point 8 [5]")
        self.assertEqual(format_move(Move(Player.BLACK, BAR, 4, 5, hit=True)), "bar to point 5 [5] (hit)")
        self.assertEqual(format_move(Move(Player.WHITE, 2, OFF, 6)), "point 3 to off [6]")

    def test_describe_roll(self):
        self.assertEqual(describe_roll((3, 3)), "3-3 (double)")
        self.assertEqual(describe_roll((6, 1)), "6 and 1")

    def test_player_and_win_labels(self):
        self.assertEqual(player_label(Player.WHITE), "White")
        self.assertEqual(player_label(Player.BLACK), "Black")
        self.assertEqual(win_type_label(WinType.NORMAL), "Normal win")
        self.assertEqual(win_type_label(WinType.MARS), "Mars")
        self.assertEqual(win_type_label(WinType.TURKISH_MARS), "Turkish mars")


class TestTypesAndConfig(unittest.TestCase):
    def test_opponent_is_an_involution(self):
        for player in Player:
            self.assertIsNot(opponent(player), player)
            self.assertIs(opponent(opponent(player)), player)

    def test_win_type_points(self):
        self.assertEqual([t.points for t in WinType], [1, 2, 3])

    def test_default_weights(self):
        weights = EvaluatorWeights()
        self.assertEqual((weights.pip, weights.bar, weights.borne_off), (0.82, 23.0, 58.0))
        self.assertEqual((weights.hit_bonus, weights.bear_off_bonus, weights.enter_bonus), (52.0, 88.0, 22.0))

    def test_simulation_config_validation(self):
        with self.assertRaises(ValueError):
            SimulationConfig(num_games=0)
        with self.assertRaises(ValueError):
            SimulationConfig(white_epsilon=1.5)


if __name__ == "__main__":
    unittest.main()
