from typing import Dict, List, Sequence, Tuple

from .backgammon_board import BackgammonBoard
from .move_generator import generate_moves_for_die
from .types import Move, Player


def unique_dice(dice: Sequence[int]) -> List[int]:
    """Distinct die values in the order they appear in the pool."""
    return list(dict.fromkeys(dice))


def consume_die(dice: Sequence[int], die: int) -> Tuple[int, ...]:
    """Removes one instance of die from the pool; unchanged if it is not there."""
    dice = list(dice)
    if die in dice:
        dice.remove(die)
    return tuple(dice)


def find_sequences(board: BackgammonBoard, player: Player, dice: Sequence[int]) -> List[List[Move]]:
    """
    Depth-first enumeration of every ordered sequence of single-die moves the
    player can make with the dice pool. A path ends when the pool is empty,
    when no remaining die can be played, or when the player has borne off
    all checkers.

    Only sequences of maximum length are kept. When just one die can be
    played from a two-dice roll of different values, sequences using the
    higher die win over the lower die.
    """
    dice = tuple(dice)
    if not dice:
        return []

    sequences = []

    def dfs(node: BackgammonBoard, remaining: Tuple[int, ...], path: List[Move]):
        if not remaining or node.off_count(player) >= BackgammonBoard.NUM_CHECKERS_PER_PLAYER:
            sequences.append(path)
            return

        expanded = False
        for die in unique_dice(remaining):
            moves = generate_moves_for_die(node, player, die)
            if not moves:
                continue

            expanded = True
            rest = consume_die(remaining, die)
            for move in moves:
                dfs(node.apply(move), rest, path + [move])

        if not expanded:
            sequences.append(path)

    dfs(board, dice, [])

    max_length = max(len(sequence) for sequence in sequences)
    if max_length == 0:
        return []

    filtered = [sequence for sequence in sequences if len(sequence) == max_length]

    if max_length == 1 and len(dice) == 2 and dice[0] != dice[1]:
        higher_die = max(dice)
        higher_only = [sequence for sequence in filtered if sequence[0].die == higher_die]
        if higher_only:
            filtered = higher_only

    return filtered


def first_moves(sequences: List[List[Move]]) -> List[Move]:
    """First move of each sequence, deduplicated on Move.key, in first-seen order."""
    deduped: Dict[tuple, Move] = {}
    for sequence in sequences:
        if sequence:
            deduped.setdefault(sequence[0].key, sequence[0])
    return list(deduped.values())


def play_sequence(board: BackgammonBoard, sequence: List[Move]) -> BackgammonBoard:
    """Board reached after playing every move of a sequence."""
    for move in sequence:
        board = board.apply(move)
    return board
