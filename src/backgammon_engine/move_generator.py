from typing import List

from .backgammon_board import BackgammonBoard
from .types import BAR, OFF, Move, Player


def bar_entry_point(player: Player, die: int) -> int:
    """Point a checker re-enters on from the bar with the given die."""
    return BackgammonBoard.NUM_POINTS - die if player is Player.WHITE else die - 1


def target_point(player: Player, from_point: int, die: int) -> int:
    """Destination index of a board move; may fall off the board (< 0 or > 23)."""
    return from_point - die if player is Player.WHITE else from_point + die


def can_bear_off_from_point(board: BackgammonBoard, player: Player, from_point: int, die: int) -> bool:
    """
    Bear off is allowed on an exact roll, or with a larger die when no
    checker sits farther from home than from_point.
    """
    if not board.can_bear_off(player):
        return False
    if not board.is_home_point(player, from_point):
        return False

    if player is Player.WHITE:
        exact_distance = from_point + 1
    else:
        exact_distance = BackgammonBoard.NUM_POINTS - from_point

    if die == exact_distance:
        return True
    if die > exact_distance:
        return not board.has_checker_behind(player, from_point)
    return False


def generate_moves_for_die(board: BackgammonBoard, player: Player, die: int) -> List[Move]:
    """
    Calculates every single checker move for one die, ignoring the rest of the dice pool.
    Moves are produced in ascending point order.
    """
    moves = []

    # 1. Checkers on the bar must re-enter before anything else moves
    if board.bar_count(player) > 0:
        target = bar_entry_point(player, die)
        if not board.is_blocked_for(target, player):
            moves.append(Move(player, BAR, target, die, hit=board.is_opponent_blot(target, player)))
        return moves

    # 2. Regular moves on the board and bearing off
    for from_point in range(BackgammonBoard.NUM_POINTS):
        if board.count_at(from_point, player) == 0:
            continue

        target = target_point(player, from_point, die)
        if 0 <= target < BackgammonBoard.NUM_POINTS:
            if board.is_blocked_for(target, player):
                continue
            moves.append(Move(player, from_point, target, die, hit=board.is_opponent_blot(target, player)))
            continue

        if can_bear_off_from_point(board, player, from_point, die):
            moves.append(Move(player, from_point, OFF, die))

    return moves
