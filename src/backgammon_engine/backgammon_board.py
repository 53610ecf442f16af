from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from .exceptions import SnapshotError
from .types import BAR, OFF, Move, Player, Point


class BackgammonBoard:
    """
    Represents the Backgammon board (points, bar and borne-off checkers).

    The board is represented as follows:
    - self.points: A read-only NumPy array of 24 integers, index 0..23.
        - Positive value: White has that many checkers on the point.
        - Negative value: Black has abs(value) checkers on the point.
        - Zero: The point is empty.
    - self.bar: A read-only NumPy array of 2 counts, indexed by Player.slot.
    - self.off: A read-only NumPy array of 2 borne-off counts, indexed by Player.slot.

    White moves from point 23 down to point 0 (home 0-5).
    Black moves from point 0 up to point 23 (home 18-23).

    Boards are never edited in place: apply() clones the arrays, edits the
    copy and returns a new board, so older boards stay valid as history.
    """

    NUM_POINTS = 24
    NUM_CHECKERS_PER_PLAYER = 15
    BAR_DISTANCE = 25
    HOME_RANGE = {Player.WHITE: (0, 5), Player.BLACK: (18, 23)}

    def __init__(self, points=None, bar=(0, 0), off=(0, 0)):
        """Builds a board from raw arrays, or the standard starting position when points is None."""
        if points is None:
            points = self._standard_points()
        self.points = np.array(points, dtype=int)
        self.bar = np.array(bar, dtype=int)
        self.off = np.array(off, dtype=int)

        self._verify_checker_counts()
        for arr in (self.points, self.bar, self.off):
            arr.flags.writeable = False

    @classmethod
    def _standard_points(cls) -> np.ndarray:
        points = np.zeros(cls.NUM_POINTS, dtype=int)

        # White (positive) moves 23 -> 0
        points[23] = 2
        points[12] = 5
        points[7] = 3
        points[5] = 5

        # Black (negative) moves 0 -> 23
        points[0] = -2
        points[11] = -5
        points[16] = -3
        points[18] = -5
        return points

    @classmethod
    def from_layout(cls, layout: Dict[int, Tuple[Player, int]],
                    bar: Optional[Dict[Player, int]] = None,
                    off: Optional[Dict[Player, int]] = None) -> "BackgammonBoard":
        """
        Builds a board from {point_index: (player, count)}.

        When off is not given, every checker not placed on a point or the bar
        is counted as borne off so the board keeps 15 checkers per player.
        """
        points = np.zeros(cls.NUM_POINTS, dtype=int)
        for index, (player, count) in layout.items():
            points[index] = player.sign * count

        bar = bar or {}
        bar_arr = [bar.get(Player.WHITE, 0), bar.get(Player.BLACK, 0)]
        if off is None:
            off_arr = []
            for player in Player:
                on_board = int(np.clip(points * player.sign, 0, None).sum())
                off_arr.append(cls.NUM_CHECKERS_PER_PLAYER - on_board - bar_arr[player.slot])
        else:
            off_arr = [off.get(Player.WHITE, 0), off.get(Player.BLACK, 0)]
        return cls(points, bar_arr, off_arr)

    def _verify_checker_counts(self):
        """Internal helper to assert correct number of checkers."""
        assert self.points.shape == (self.NUM_POINTS,), \
            f"Board has {self.points.shape} points, expected {self.NUM_POINTS}"
        for player in Player:
            total = self.checkers_on_board(player) + self.bar_count(player) + self.off_count(player)
            assert total == self.NUM_CHECKERS_PER_PLAYER, \
                f"Player {player.value} has {total} checkers, expected {self.NUM_CHECKERS_PER_PLAYER}"
            assert self.bar_count(player) >= 0 and self.off_count(player) >= 0, \
                f"Player {player.value} has a negative bar or borne-off count"

    # --- Accessors ---
    def point(self, index: int) -> Point:
        value = int(self.points[index])
        if value == 0:
            return Point(owner=None, count=0)
        return Point(owner=Player.WHITE if value > 0 else Player.BLACK, count=abs(value))

    def bar_count(self, player: Player) -> int:
        return int(self.bar[player.slot])

    def off_count(self, player: Player) -> int:
        return int(self.off[player.slot])

    def _own_counts(self, player: Player) -> np.ndarray:
        """Per-point checker counts of one player (zeros elsewhere)."""
        return np.clip(self.points * player.sign, 0, None)

    def count_at(self, index: int, player: Player) -> int:
        return max(0, int(self.points[index]) * player.sign)

    def is_blocked_for(self, index: int, player: Player) -> bool:
        """True if the opponent holds the point with two or more checkers."""
        return int(self.points[index]) * player.sign <= -2

    def is_opponent_blot(self, index: int, player: Player) -> bool:
        return int(self.points[index]) == -player.sign

    def is_home_point(self, player: Player, index: int) -> bool:
        low, high = self.HOME_RANGE[player]
        return low <= index <= high

    # --- Queries ---
    def pip_count(self, player: Player) -> int:
        """Distance to off for all of a player's checkers; bar checkers count 25 each."""
        if player is Player.WHITE:
            distances = np.arange(1, self.NUM_POINTS + 1)
        else:
            distances = np.arange(self.NUM_POINTS, 0, -1)
        return int(self._own_counts(player) @ distances) + self.bar_count(player) * self.BAR_DISTANCE

    def can_bear_off(self, player: Player) -> bool:
        if self.bar_count(player) > 0:
            return False
        low, high = self.HOME_RANGE[player]
        own = self._own_counts(player)
        return int(own.sum()) == int(own[low:high + 1].sum())

    def has_checker_behind(self, player: Player, from_point: int) -> bool:
        """True if the player has a checker strictly farther from home than from_point."""
        own = self._own_counts(player)
        if player is Player.WHITE:
            return bool(own[from_point + 1:].any())
        return bool(own[:from_point].any())

    def checkers_on_board(self, player: Player) -> int:
        return int(self._own_counts(player).sum())

    def pieces_in_play(self, player: Player) -> int:
        return self.checkers_on_board(player) + self.bar_count(player)

    def blot_count(self, player: Player) -> int:
        return int(np.count_nonzero(self._own_counts(player) == 1))

    def made_points(self, player: Player) -> int:
        return int(np.count_nonzero(self._own_counts(player) >= 2))

    def home_made_points(self, player: Player) -> int:
        low, high = self.HOME_RANGE[player]
        return int(np.count_nonzero(self._own_counts(player)[low:high + 1] >= 2))

    def has_checker_in_home_of(self, player: Player, home_owner: Player) -> bool:
        """True if player still has a checker inside home_owner's home quadrant."""
        low, high = self.HOME_RANGE[home_owner]
        return bool(self._own_counts(player)[low:high + 1].any())

    # --- Transition ---
    def apply(self, move: Move) -> "BackgammonBoard":
        """
        Returns a new board with the move applied.
        Assumes the move came from the move generator for this board.
        """
        player = move.player
        sign = player.sign
        points = self.points.copy()
        bar = self.bar.copy()
        off = self.off.copy()

        # 1. Take the checker from its source
        if move.from_loc == BAR:
            bar[player.slot] -= 1
        else:
            points[move.from_loc] -= sign

        # 2. Put it on its destination or bear it off
        if move.to_loc == OFF:
            off[player.slot] += 1
        elif points[move.to_loc] == -sign:  # Opponent's blot
            points[move.to_loc] = sign
            bar[player.opponent.slot] += 1
        else:
            points[move.to_loc] += sign

        return BackgammonBoard(points, bar, off)

    # --- Plain data ---
    def to_dict(self) -> dict:
        """Returns the board as plain structured data (JSON compatible)."""
        points = []
        for index in range(self.NUM_POINTS):
            point = self.point(index)
            points.append({"owner": point.owner.value if point.owner else None, "count": point.count})
        return {
            "points": points,
            "bar": {p.value: self.bar_count(p) for p in Player},
            "borne_off": {p.value: self.off_count(p) for p in Player},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BackgammonBoard":
        try:
            raw_points = data["points"]
            if len(raw_points) != cls.NUM_POINTS:
                raise SnapshotError(f"expected {cls.NUM_POINTS} points, got {len(raw_points)}")

            points = np.zeros(cls.NUM_POINTS, dtype=int)
            for index, raw in enumerate(raw_points):
                owner, count = raw["owner"], raw["count"]
                if not _is_checker_count(count):
                    raise SnapshotError(f"point {index} has invalid count {count!r}")
                if (owner is None) != (count == 0):
                    raise SnapshotError(f"point {index} has inconsistent owner {owner!r} / count {count}")
                if owner is not None:
                    points[index] = Player(owner).sign * count

            bar = [data["bar"][p.value] for p in Player]
            off = [data["borne_off"][p.value] for p in Player]
        except (KeyError, TypeError) as exc:
            raise SnapshotError(f"malformed board data: {exc}") from exc
        except ValueError as exc:
            if isinstance(exc, SnapshotError):
                raise
            raise SnapshotError(f"unknown player in board data: {exc}") from exc

        for value in bar + off:
            if not _is_checker_count(value):
                raise SnapshotError(f"invalid bar/borne-off count {value!r}")

        for player in Player:
            total = int(np.clip(points * player.sign, 0, None).sum()) + bar[player.slot] + off[player.slot]
            if total != cls.NUM_CHECKERS_PER_PLAYER:
                raise SnapshotError(
                    f"Player {player.value} has {total} checkers, expected {cls.NUM_CHECKERS_PER_PLAYER}")
        return cls(points, bar, off)

    def __eq__(self, other):
        if not isinstance(other, BackgammonBoard):
            return NotImplemented
        return (np.array_equal(self.points, other.points)
                and np.array_equal(self.bar, other.bar)
                and np.array_equal(self.off, other.off))

    __hash__ = None

    def __repr__(self):
        return (f"BackgammonBoard(points={self.points.tolist()}, "
                f"bar={self.bar.tolist()}, off={self.off.tolist()})")

    def _get_char_for_display(self, point_value, display_row_from_base, max_rows=5):
        """Helper for __str__ to display checkers on points."""
        if point_value == 0: return ' '
        player_char = 'W' if point_value > 0 else 'B'
        count = abs(point_value)

        if count > max_rows:
            # Top of a tall stack shows the count instead of another checker
            if display_row_from_base == max_rows - 1:
                return str(count) if count < 10 else player_char
            return player_char
        elif count > display_row_from_base:
            return player_char
        return ' '

    def __str__(self):
        """ASCII board; labels are 1-based point numbers (index + 1)."""
        lines = []
        max_display_rows = 5
        white_bar = self.bar_count(Player.WHITE)
        black_bar = self.bar_count(Player.BLACK)

        lines.append(f"Black (B) Off: {self.off_count(Player.BLACK):2d}  Bar: {black_bar:2d}   (moves 1->24)")
        lines.append("  +13-14-15-16-17-18------BAR------19-20-21-22-23-24--+")

        # Top half: indices 12..23
        for r_disp in range(max_display_rows - 1, -1, -1):
            line = "  |"
            for p_idx in range(12, 18):
                line += f"{self._get_char_for_display(self.points[p_idx], r_disp, max_display_rows):^3}|"
            bar_char = self._get_char_for_display(-black_bar, r_disp, max_display_rows) if black_bar > 0 else ' '
            line += f" {bar_char:^5} |"
            for p_idx in range(18, 24):
                line += f"{self._get_char_for_display(self.points[p_idx], r_disp, max_display_rows):^3}|"
            lines.append(line)

        lines.append(f"  |------------------| BAR B:{black_bar:<2} W:{white_bar:<2} |------------------|")

        # Bottom half: indices 11..0
        for r_disp in range(max_display_rows):
            line = "  |"
            for p_idx in range(11, 5, -1):
                line += f"{self._get_char_for_display(self.points[p_idx], r_disp, max_display_rows):^3}|"
            bar_char = self._get_char_for_display(white_bar, r_disp, max_display_rows) if white_bar > 0 else ' '
            line += f" {bar_char:^5} |"
            for p_idx in range(5, -1, -1):
                line += f"{self._get_char_for_display(self.points[p_idx], r_disp, max_display_rows):^3}|"
            lines.append(line)

        lines.append("  +12-11-10--9--8--7-------BAR-------6--5--4--3--2--1--+")
        lines.append(f"White (W) Off: {self.off_count(Player.WHITE):2d}  Bar: {white_bar:2d}   (moves 24->1)")
        return "\n".join(lines)


def _is_checker_count(value) -> bool:
    return (isinstance(value, int) and not isinstance(value, bool)
            and 0 <= value <= BackgammonBoard.NUM_CHECKERS_PER_PLAYER)
