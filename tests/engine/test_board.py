import unittest

from backgammon_engine.backgammon_board import BackgammonBoard
from backgammon_engine.exceptions import SnapshotError
from backgammon_engine.types import BAR, OFF, Move, Player, Point

W, B = Player.WHITE, Player.BLACK


class TestBackgammonBoard(unittest.TestCase):
    def setUp(self):
        self.board = BackgammonBoard()

    def test_standard_setup(self):
        self.assertEqual(self.board.point(23), Point(W, 2))
        self.assertEqual(self.board.point(12), Point(W, 5))
        self.assertEqual(self.board.point(7), Point(W, 3))
        self.assertEqual(self.board.point(5), Point(W, 5))
        self.assertEqual(self.board.point(0), Point(B, 2))
        self.assertEqual(self.board.point(18), Point(B, 5))
        self.assertEqual(self.board.point(1), Point(None, 0))
        for player in Player:
            self.assertEqual(self.board.checkers_on_board(player), 15)
            self.assertEqual(self.board.pieces_in_play(player), 15)
            self.assertEqual(self.board.off_count(player), 0)

    def test_initial_pip_count(self):
        self.assertEqual(self.board.pip_count(W), 167)
        self.assertEqual(self.board.pip_count(B), 167)

    def test_bar_checkers_count_25_pips(self):
        board = BackgammonBoard.from_layout({0: (W, 1)}, bar={W: 1})
        self.assertEqual(board.pip_count(W), 1 + 25)
        self.assertEqual(board.pieces_in_play(W), 2)
        self.assertEqual(board.off_count(W), 13)

    def test_from_layout_fills_borne_off(self):
        board = BackgammonBoard.from_layout({3: (W, 2), 20: (B, 4)})
        self.assertEqual(board.off_count(W), 13)
        self.assertEqual(board.off_count(B), 11)

    def test_can_bear_off(self):
        self.assertFalse(self.board.can_bear_off(W))
        home = BackgammonBoard.from_layout({0: (W, 5), 5: (W, 3), 19: (B, 2)})
        self.assertTrue(home.can_bear_off(W))
        self.assertTrue(home.can_bear_off(B))
        on_bar = BackgammonBoard.from_layout({0: (W, 5)}, bar={W: 1})
        self.assertFalse(on_bar.can_bear_off(W))
        outside = BackgammonBoard.from_layout({0: (W, 5), 6: (W, 1)})
        self.assertFalse(outside.can_bear_off(W))

    def test_has_checker_behind(self):
        white = BackgammonBoard.from_layout({2: (W, 1), 4: (W, 1)})
        self.assertTrue(white.has_checker_behind(W, 2))
        self.assertFalse(white.has_checker_behind(W, 4))
        black = BackgammonBoard.from_layout({20: (B, 1), 22: (B, 1)})
        self.assertTrue(black.has_checker_behind(B, 22))
        self.assertFalse(black.has_checker_behind(B, 20))

    def test_point_counts(self):
        board = BackgammonBoard.from_layout({0: (W, 2), 3: (W, 1), 8: (W, 1), 4: (W, 3), 20: (B, 1), 18: (B, 2)})
        self.assertEqual(board.blot_count(W), 2)
        self.assertEqual(board.made_points(W), 2)
        self.assertEqual(board.home_made_points(W), 2)
        self.assertEqual(board.blot_count(B), 1)
        self.assertEqual(board.home_made_points(B), 1)
        self.assertTrue(board.is_blocked_for(0, B))
        self.assertFalse(board.is_blocked_for(3, B))
        self.assertTrue(board.is_opponent_blot(3, B))

    def test_apply_returns_new_board(self):
        move = Move(W, 12, 7, 5)
        after = self.board.apply(move)
        self.assertEqual(after.point(12), Point(W, 4))
        self.assertEqual(after.point(7), Point(W, 4))
        # Original stays untouched
        self.assertEqual(self.board.point(12), Point(W, 5))
        self.assertEqual(self.board, BackgammonBoard())

    def test_apply_hit_bear_off_and_entry(self):
        board = BackgammonBoard.from_layout({10: (W, 1), 7: (B, 1), 2: (W, 1)}, bar={W: 1})
        after = board.apply(Move(W, 10, 7, 3, hit=True))
        self.assertEqual(after.point(7), Point(W, 1))
        self.assertTrue(after.point(7).is_blot)
        self.assertFalse(self.board.point(12).is_blot)
        self.assertEqual(after.bar_count(B), 1)

        entered = board.apply(Move(W, BAR, 20, 4))
        self.assertEqual(entered.bar_count(W), 0)
        self.assertEqual(entered.point(20), Point(W, 1))

        home = BackgammonBoard.from_layout({2: (W, 1)})
        off = home.apply(Move(W, 2, OFF, 3))
        self.assertEqual(off.off_count(W), 15)
        self.assertEqual(off.point(2), Point(None, 0))

    def test_arrays_are_read_only(self):
        with self.assertRaises(ValueError):
            self.board.points[0] = 3
        with self.assertRaises(ValueError):
            self.board.bar[0] = 1

    def test_conservation_is_checked(self):
        with self.assertRaises(AssertionError):
            BackgammonBoard([0] * 24, (0, 0), (14, 15))

    def test_dict_round_trip(self):
        board = BackgammonBoard.from_layout({3: (W, 2), 20: (B, 4)}, bar={B: 1})
        data = board.to_dict()
        self.assertEqual(data["points"][3], {"owner": "white", "count": 2})
        self.assertEqual(data["points"][0], {"owner": None, "count": 0})
        self.assertEqual(data["bar"], {"white": 0, "black": 1})
        self.assertEqual(BackgammonBoard.from_dict(data), board)

    def test_from_dict_rejects_bad_data(self):
        data = self.board.to_dict()
        short = dict(data, points=data["points"][:23])
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(short)

        inconsistent = self.board.to_dict()
        inconsistent["points"][1] = {"owner": "white", "count": 0}
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(inconsistent)

        unknown = self.board.to_dict()
        unknown["points"][0] = {"owner": "red", "count": 2}
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(unknown)

        extra = self.board.to_dict()
        extra["bar"]["white"] = 1
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(extra)

    def test_from_dict_checks_conservation_without_asserts(self):
        too_many = self.board.to_dict()
        too_many["bar"]["white"] = 5
        with self.assertRaisesRegex(SnapshotError, "white has 20 checkers"):
            BackgammonBoard.from_dict(too_many)

        too_few = self.board.to_dict()
        too_few["points"][23] = {"owner": "white", "count": 1}
        with self.assertRaisesRegex(SnapshotError, "white has 14 checkers"):
            BackgammonBoard.from_dict(too_few)

    def test_from_dict_rejects_out_of_range_counts(self):
        huge_point = self.board.to_dict()
        huge_point["points"][1] = {"owner": "white", "count": 10 ** 30}
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(huge_point)

        huge_bar = self.board.to_dict()
        huge_bar["bar"]["black"] = 10 ** 30
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(huge_bar)

        over_fifteen = self.board.to_dict()
        over_fifteen["borne_off"]["black"] = 16
        with self.assertRaises(SnapshotError):
            BackgammonBoard.from_dict(over_fifteen)

    def test_str_renders_board(self):
        text = str(self.board)
        self.assertIn("White (W) Off:  0", text)
        self.assertIn("Black (B) Off:  0", text)
        self.assertIn("+13-14-15-16-17-18", text)


if __name__ == "__main__":
    unittest.main()
