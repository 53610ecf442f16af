from backgammon_engine.backgammon_board import BackgammonBoard
from backgammon_engine.game_state import GameState
from backgammon_engine.types import Player


def make_state(layout, player=Player.WHITE, dice=(), bar=None, off=None):
    """Playing-phase state built from {point_index: (player, count)}; missing checkers count as borne off."""
    board = BackgammonBoard.from_layout(layout, bar=bar, off=off)
    return GameState(
        board=board,
        current_player=player,
        is_opening_phase=False,
        dice=tuple(dice),
        rolled_dice=tuple(dice[:2]),
        turn_number=1,
    )
