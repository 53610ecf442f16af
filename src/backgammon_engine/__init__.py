from .backgammon_board import BackgammonBoard
from .engine import (
    apply_move,
    collect_move_sequences,
    evaluate_winner_info,
    get_legal_moves,
    has_dice,
    is_ai_turn,
    pass_turn,
    roll_dice,
    used_dice_count,
)
from .evaluator import choose_ai_move
from .exceptions import SnapshotError
from .game_state import GameState, create_initial_state
from .types import BAR, OFF, Move, Player, Point, WinnerInfo, WinType, opponent


def pip_count(state: GameState, player: Player) -> int:
    return state.board.pip_count(player)


def count_checkers_on_board(state: GameState, player: Player) -> int:
    return state.board.checkers_on_board(player)


def count_pieces_in_play(state: GameState, player: Player) -> int:
    return state.board.pieces_in_play(player)


__all__ = [
    "BAR",
    "OFF",
    "BackgammonBoard",
    "GameState",
    "Move",
    "Player",
    "Point",
    "SnapshotError",
    "WinType",
    "WinnerInfo",
    "apply_move",
    "choose_ai_move",
    "collect_move_sequences",
    "count_checkers_on_board",
    "count_pieces_in_play",
    "create_initial_state",
    "evaluate_winner_info",
    "get_legal_moves",
    "has_dice",
    "is_ai_turn",
    "opponent",
    "pass_turn",
    "pip_count",
    "roll_dice",
    "used_dice_count",
]
