"""Single-ply heuristic move chooser.

Each maximal sequence is scored by per-move bonuses plus an evaluation of
the board it leads to; the first move of the best sequence is returned.
"""

from typing import List, Optional

from .backgammon_board import BackgammonBoard
from .config import EvaluatorWeights
from .engine import collect_move_sequences
from .game_state import GameState
from .types import Move, Player

DEFAULT_WEIGHTS = EvaluatorWeights()


def move_progress_score(move: Move, weights: EvaluatorWeights = DEFAULT_WEIGHTS) -> float:
    if move.bears_off:
        return weights.bear_off_progress
    if move.from_bar:
        return weights.enter_progress
    if move.player is Player.WHITE:
        return move.from_loc - move.to_loc
    return move.to_loc - move.from_loc


def evaluate_board_for_player(board: BackgammonBoard, player: Player,
                              weights: EvaluatorWeights = DEFAULT_WEIGHTS) -> float:
    opp = player.opponent

    pip_advantage = board.pip_count(opp) - board.pip_count(player)
    bar_advantage = board.bar_count(opp) - board.bar_count(player)
    borne_off_advantage = board.off_count(player) - board.off_count(opp)
    made_point_advantage = board.made_points(player) - board.made_points(opp)
    home_control_advantage = board.home_made_points(player) - board.home_made_points(opp)
    blot_advantage = board.blot_count(opp) - board.blot_count(player)

    return (
        pip_advantage * weights.pip
        + bar_advantage * weights.bar
        + borne_off_advantage * weights.borne_off
        + made_point_advantage * weights.made_point
        + home_control_advantage * weights.home_point
        + blot_advantage * weights.blot
    )


def score_sequence(board: BackgammonBoard, sequence: List[Move],
                   weights: EvaluatorWeights = DEFAULT_WEIGHTS) -> float:
    player = sequence[0].player
    score = 0.0
    for move in sequence:
        score += move_progress_score(move, weights)
        if move.hit:
            score += weights.hit_bonus
        if move.bears_off:
            score += weights.bear_off_bonus
        if move.from_bar:
            score += weights.enter_bonus
        board = board.apply(move)
    return score + evaluate_board_for_player(board, player, weights)


def choose_ai_move(state: GameState, weights: Optional[EvaluatorWeights] = None) -> Optional[Move]:
    """Returns the first move of the best scoring sequence, or None when nothing is playable."""
    weights = weights or DEFAULT_WEIGHTS
    best_move = None
    best_score = float("-inf")

    for sequence in collect_move_sequences(state):
        score = score_sequence(state.board, sequence, weights)
        # Strictly greater: ties keep the first sequence found
        if score > best_score:
            best_move = sequence[0]
            best_score = score

    return best_move
