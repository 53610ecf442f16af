import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class EvaluatorWeights:
    # Terminal position evaluation
    pip: float = 0.82
    bar: float = 23.0
    borne_off: float = 58.0
    made_point: float = 9.0
    home_point: float = 11.0
    blot: float = 6.0

    # Per-move bonuses
    hit_bonus: float = 52.0
    bear_off_bonus: float = 88.0
    enter_bonus: float = 22.0
    bear_off_progress: float = 100.0  # progress credited for a bear off
    enter_progress: float = 24.0  # progress credited for entering from the bar


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass(slots=True)
class SimulationConfig:
    num_games: int = int(os.getenv("NUM_GAMES", 100))
    max_turns: int = int(os.getenv("MAX_TURNS", 500))
    seed: Optional[int] = _optional_int("SEED")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    white_epsilon: float = float(os.getenv("WHITE_EPSILON", 0.0))
    black_epsilon: float = float(os.getenv("BLACK_EPSILON", 0.1))
    illegal_action_penalty: float = float(os.getenv("ILLEGAL_ACTION_PENALTY", -100.0))

    def __post_init__(self):
        if self.num_games < 1:
            raise ValueError("num_games must be at least 1")
        if self.max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        for name in ("white_epsilon", "black_epsilon"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1")
