"""Transition engine and turn/phase controller.

Every function takes a GameState and returns a GameState. Calls made in
the wrong phase, and moves that are not currently legal, return the input
state unchanged instead of raising.
"""

import operator
import random
from dataclasses import replace
from typing import List, Optional, Tuple

from loguru import logger

from .backgammon_board import BackgammonBoard
from .game_state import GameState
from .sequence_search import consume_die, find_sequences, first_moves
from .types import Move, Player, WinnerInfo, WinType


def has_dice(state: GameState) -> bool:
    return len(state.dice) > 0


def collect_move_sequences(state: GameState) -> List[List[Move]]:
    """All maximal move sequences for the player to move (empty when nothing can be played)."""
    if state.winner or state.is_opening_phase or not state.dice:
        return []
    return find_sequences(state.board, state.current_player, state.dice)


def get_legal_moves(state: GameState) -> List[Move]:
    """First moves of all maximal sequences, deduplicated."""
    return first_moves(collect_move_sequences(state))


def evaluate_winner_info(board: BackgammonBoard, winner: Player) -> WinnerInfo:
    loser = winner.opponent

    if board.off_count(loser) > 0:
        win_type = WinType.NORMAL
    elif board.bar_count(loser) > 0 or board.has_checker_in_home_of(loser, winner):
        win_type = WinType.TURKISH_MARS
    else:
        win_type = WinType.MARS
    return WinnerInfo(player=winner, type=win_type, points=win_type.points)


def _apply_move_unchecked(state: GameState, move: Move) -> GameState:
    board = state.board.apply(move)
    move_counter = state.move_counter + 1
    next_state = replace(
        state,
        board=board,
        dice=consume_die(state.dice, move.die),
        move_counter=move_counter,
        last_move=replace(move, id=move_counter),
    )

    if board.off_count(move.player) >= BackgammonBoard.NUM_CHECKERS_PER_PLAYER:
        winner_info = evaluate_winner_info(board, move.player)
        logger.debug(f"{move.player.value} wins: {winner_info.type.value} ({winner_info.points} points)")
        next_state = replace(
            next_state,
            winner=move.player,
            winner_info=winner_info,
            dice=(),
            rolled_dice=(),
        )
    return next_state


def apply_move(state: GameState, move: Move) -> GameState:
    """
    Plays one checker move if it is in the legal-move set (matched on
    player, source, destination and die). Passes the turn automatically
    when the dice are used up or nothing else can be played.
    """
    if state.winner or state.is_opening_phase:
        return state

    legal_move = next((m for m in get_legal_moves(state) if m.key == move.key), None)
    if legal_move is None:
        logger.debug(f"Rejected move {move.key} for {state.current_player.value}: not legal")
        return state

    next_state = _apply_move_unchecked(state, legal_move)
    if next_state.winner:
        return next_state

    if not next_state.dice:
        return pass_turn(next_state)

    if not get_legal_moves(next_state):
        logger.debug(f"{next_state.current_player.value} cannot play remaining dice {list(next_state.dice)}. Passing turn.")
        return pass_turn(next_state)

    return next_state


def roll_die(rng: Optional[random.Random] = None) -> int:
    return (rng or random).randint(1, 6)


def _forced_die(die, forced_values) -> int:
    """Plain int for a caller-supplied die; numpy integers are accepted, bools are not."""
    if isinstance(die, bool):
        raise ValueError(f"Die values must be integers 1-6, got {forced_values!r}")
    try:
        value = operator.index(die)
    except TypeError:
        raise ValueError(f"Die values must be integers 1-6, got {forced_values!r}") from None
    if not 1 <= value <= 6:
        raise ValueError(f"Die values must be integers 1-6, got {forced_values!r}")
    return int(value)


def roll_dice(state: GameState, forced_values: Optional[Tuple[int, int]] = None,
              rng: Optional[random.Random] = None) -> GameState:
    """
    Rolls two dice, or uses forced_values when the caller supplies the pair.

    In the opening phase the first value is White's die and the second
    Black's; a tie keeps the opening phase, otherwise the higher roller
    starts turn 1 playing both values. Doubles give four dice afterwards.
    """
    if state.winner or state.dice:
        return state

    if forced_values is None:
        die_a, die_b = roll_die(rng), roll_die(rng)
    else:
        die_a, die_b = (_forced_die(die, forced_values) for die in forced_values)

    next_state = replace(state, rolled_dice=(die_a, die_b), last_move=None)

    if state.is_opening_phase:
        next_state = replace(next_state, opening_roll=(die_a, die_b))
        if die_a == die_b:
            logger.debug(f"Opening roll tie ({die_a}-{die_b}), roll again")
            return replace(next_state, dice=())

        return replace(
            next_state,
            is_opening_phase=False,
            current_player=Player.WHITE if die_a > die_b else Player.BLACK,
            turn_number=1,
            dice=(die_a, die_b),
        )

    dice = (die_a,) * 4 if die_a == die_b else (die_a, die_b)
    return replace(next_state, dice=dice)


def pass_turn(state: GameState) -> GameState:
    if state.winner or state.is_opening_phase:
        return state

    return replace(
        state,
        current_player=state.current_player.opponent,
        turn_number=state.turn_number + 1,
        dice=(),
        rolled_dice=(),
    )


def is_ai_turn(state: GameState, ai_player: Player = Player.BLACK, ai_enabled: bool = True) -> bool:
    return ai_enabled and not state.is_opening_phase and state.current_player is ai_player and not state.winner


def used_dice_count(state: GameState) -> int:
    """How many dice of the current roll have already been played."""
    if state.is_opening_phase or not state.rolled_dice:
        return 0
    if state.rolled_dice[0] == state.rolled_dice[1]:
        return 4 - len(state.dice)
    return 2 - len(state.dice)
