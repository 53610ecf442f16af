"""Presentation helpers for UIs and logs. Not part of the rules engine."""

from typing import Sequence

from .types import BAR, OFF, Move, Player, WinType


def player_label(player: Player) -> str:
    return "White" if player is Player.WHITE else "Black"


def win_type_label(win_type: WinType) -> str:
    if win_type is WinType.NORMAL:
        return "Normal win"
    if win_type is WinType.MARS:
        return "Mars"
    return "Turkish mars"


def format_move(move: Move) -> str:
    """e.g. 'point 13 to point 8 [5]' or 'bar to point 20 [5] (hit)'; points are 1-based."""
    source = "bar" if move.from_loc == BAR else f"point {move.from_loc + 1}"
    target = "off" if move.to_loc == OFF else f"point {move.to_loc + 1}"
    suffix = " (hit)" if move.hit else ""
    return f"{source} to {target} [{move.die}]{suffix}"


def describe_roll(values: Sequence[int]) -> str:
    if values[0] == values[1]:
        return f"{values[0]}-{values[1]} (double)"
    return f"{values[0]} and {values[1]}"
