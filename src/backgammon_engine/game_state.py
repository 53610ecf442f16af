from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .backgammon_board import BackgammonBoard
from .exceptions import SnapshotError
from .types import BAR, OFF, Move, Player, WinnerInfo, WinType


@dataclass(frozen=True)
class GameState:
    """
    Full match state: board, turn, opening phase and result.

    Instances are never modified; every engine operation returns a new
    GameState (or the same object when the call is a no-op).
    """

    board: BackgammonBoard = field(default_factory=BackgammonBoard)
    current_player: Player = Player.WHITE
    is_opening_phase: bool = True
    opening_roll: Tuple[Optional[int], Optional[int]] = (None, None)  # (white, black)
    dice: Tuple[int, ...] = ()
    rolled_dice: Tuple[int, ...] = ()
    winner: Optional[Player] = None
    winner_info: Optional[WinnerInfo] = None
    turn_number: int = 0
    move_counter: int = 0
    last_move: Optional[Move] = None

    def to_dict(self) -> dict:
        """Plain structured snapshot of every field (JSON compatible)."""
        data = self.board.to_dict()
        data.update({
            "current_player": self.current_player.value,
            "is_opening_phase": self.is_opening_phase,
            "opening_roll": {Player.WHITE.value: self.opening_roll[0], Player.BLACK.value: self.opening_roll[1]},
            "dice": list(self.dice),
            "rolled_dice": list(self.rolled_dice),
            "winner": self.winner.value if self.winner else None,
            "winner_info": self.winner_info.to_dict() if self.winner_info else None,
            "turn_number": self.turn_number,
            "move_counter": self.move_counter,
            "last_move": self.last_move.to_dict() if self.last_move else None,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Rebuilds a state from to_dict() output; raises SnapshotError on malformed data."""
        if not isinstance(data, dict):
            raise SnapshotError(f"expected a mapping, got {type(data).__name__}")

        board = BackgammonBoard.from_dict(data)
        try:
            opening = data["opening_roll"]
            state = cls(
                board=board,
                current_player=_parse_player(data["current_player"]),
                is_opening_phase=_parse_bool(data["is_opening_phase"], "is_opening_phase"),
                opening_roll=(
                    _parse_optional_die(opening[Player.WHITE.value]),
                    _parse_optional_die(opening[Player.BLACK.value]),
                ),
                dice=tuple(_parse_die(d) for d in data["dice"]),
                rolled_dice=tuple(_parse_die(d) for d in data["rolled_dice"]),
                winner=_parse_player(data["winner"]) if data["winner"] is not None else None,
                winner_info=_parse_winner_info(data["winner_info"]),
                turn_number=_parse_count(data["turn_number"], "turn_number"),
                move_counter=_parse_count(data["move_counter"], "move_counter"),
                last_move=_parse_move(data["last_move"]),
            )
        except (KeyError, TypeError) as exc:
            raise SnapshotError(f"malformed state data: {exc}") from exc

        if len(state.dice) > 4 or len(state.rolled_dice) > 2:
            raise SnapshotError("too many dice in snapshot")
        return state


def create_initial_state() -> GameState:
    """Standard starting position with the opening roll still to be made."""
    return GameState()


def _parse_player(value) -> Player:
    try:
        return Player(value)
    except ValueError as exc:
        raise SnapshotError(f"unknown player {value!r}") from exc


def _parse_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise SnapshotError(f"{name} must be a boolean, got {value!r}")
    return value


def _parse_count(value, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise SnapshotError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _parse_die(value) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 6:
        raise SnapshotError(f"invalid die value {value!r}")
    return value


def _parse_optional_die(value) -> Optional[int]:
    return None if value is None else _parse_die(value)


def _parse_location(value, sentinel: str):
    if value == sentinel:
        return sentinel
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < BackgammonBoard.NUM_POINTS:
        return value
    raise SnapshotError(f"invalid move location {value!r}")


def _parse_move(data: Optional[Dict]) -> Optional[Move]:
    if data is None:
        return None
    if not isinstance(data["hit"], bool):
        raise SnapshotError(f"move hit flag must be a boolean, got {data['hit']!r}")
    move_id = data.get("id")
    return Move(
        player=_parse_player(data["player"]),
        from_loc=_parse_location(data["from"], BAR),
        to_loc=_parse_location(data["to"], OFF),
        die=_parse_die(data["die"]),
        hit=data["hit"],
        id=None if move_id is None else _parse_count(move_id, "move id"),
    )


def _parse_winner_info(data: Optional[Dict]) -> Optional[WinnerInfo]:
    if data is None:
        return None
    try:
        win_type = WinType(data["type"])
    except ValueError as exc:
        raise SnapshotError(f"unknown win type {data['type']!r}") from exc
    if data["points"] != win_type.points:
        raise SnapshotError(f"win type {win_type.value} is worth {win_type.points}, got {data['points']!r}")
    return WinnerInfo(player=_parse_player(data["player"]), type=win_type, points=data["points"])
