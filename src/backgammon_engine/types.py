from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

# Sentinel locations for a move's source / destination
BAR = "bar"
OFF = "off"

MoveSource = Union[int, str]  # point index 0..23 or BAR
MoveTarget = Union[int, str]  # point index 0..23 or OFF


class Player(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Player":
        return Player.BLACK if self is Player.WHITE else Player.WHITE

    @property
    def sign(self) -> int:
        """+1 for White, -1 for Black (the sign used on the signed point vector)."""
        return 1 if self is Player.WHITE else -1

    @property
    def slot(self) -> int:
        """Position of the player in the per-player bar and borne-off arrays."""
        return 0 if self is Player.WHITE else 1


def opponent(player: Player) -> Player:
    return player.opponent


class WinType(str, Enum):
    NORMAL = "normal"
    MARS = "mars"
    TURKISH_MARS = "turkish-mars"

    @property
    def points(self) -> int:
        return {WinType.NORMAL: 1, WinType.MARS: 2, WinType.TURKISH_MARS: 3}[self]


@dataclass(frozen=True)
class Point:
    owner: Optional[Player]
    count: int

    @property
    def is_blot(self) -> bool:
        return self.count == 1


@dataclass(frozen=True)
class Move:
    """
    A single checker move for one die.

    from_loc is a point index or BAR, to_loc is a point index or OFF.
    id is only stamped by the transition engine when the move is applied.
    """

    player: Player
    from_loc: MoveSource
    to_loc: MoveTarget
    die: int
    hit: bool = False
    id: Optional[int] = None

    @property
    def key(self) -> Tuple[Player, MoveSource, MoveTarget, int]:
        """Identity used to match a submitted move against the legal set."""
        return (self.player, self.from_loc, self.to_loc, self.die)

    @property
    def from_bar(self) -> bool:
        return self.from_loc == BAR

    @property
    def bears_off(self) -> bool:
        return self.to_loc == OFF

    def to_dict(self) -> dict:
        data = {
            "player": self.player.value,
            "from": self.from_loc,
            "to": self.to_loc,
            "die": self.die,
            "hit": self.hit,
        }
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass(frozen=True)
class WinnerInfo:
    player: Player
    type: WinType
    points: int

    def to_dict(self) -> dict:
        return {"player": self.player.value, "type": self.type.value, "points": self.points}
