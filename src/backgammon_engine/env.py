import numpy as np
import gymnasium as gym
from gymnasium import spaces
from loguru import logger

from .backgammon_board import BackgammonBoard
from .engine import apply_move, get_legal_moves, has_dice, pass_turn, roll_dice
from .game_state import GameState, create_initial_state
from .labels import format_move
from .types import Player


class BackgammonEnv(gym.Env):
    """
    A Gymnasium environment driving the backgammon engine.

    The observation is a flat vector from the point of view of the player to
    move (own checkers positive, board flipped for Black). The action is an
    index into the list of currently legal first moves; action_masks()
    marks the valid indices. Dice are rolled from the env's seeded
    np_random, and a player who cannot move after rolling passes
    automatically.

    The reward goes to the player who just moved: the win's points
    (1 normal, 2 mars, 3 turkish mars) when that move ends the game, 0
    otherwise.
    """
    metadata = {'render_modes': ['human', 'ansi'], 'render_fps': 4}

    MAX_ACTIONS = 64  # Upper bound on distinct first moves (2 dice x 25 sources)
    MAX_DICE = 4

    def __init__(self, render_mode=None, max_turns=500, illegal_action_penalty=-100.0):
        super().__init__()
        self.max_turns = max_turns
        self.illegal_action_penalty = illegal_action_penalty

        # 24 points + my/opponent bar + my/opponent off + remaining dice (zero padded to 4)
        num_checkers = BackgammonBoard.NUM_CHECKERS_PER_PLAYER
        observation_dim = BackgammonBoard.NUM_POINTS + 2 + 2 + self.MAX_DICE
        low_obs = np.array([-num_checkers] * BackgammonBoard.NUM_POINTS +
                           [0] * 4 + [0] * self.MAX_DICE, dtype=np.float32)
        high_obs = np.array([num_checkers] * BackgammonBoard.NUM_POINTS +
                            [num_checkers] * 4 + [6] * self.MAX_DICE, dtype=np.float32)
        self.observation_space = spaces.Box(low=low_obs, high=high_obs, shape=(observation_dim,), dtype=np.float32)
        self.action_space = spaces.Discrete(self.MAX_ACTIONS)

        self.render_mode = render_mode
        self.state: GameState = create_initial_state()
        self._cached_legal_moves = []

    @property
    def legal_moves(self):
        return list(self._cached_legal_moves)

    def _get_observation(self, player_perspective: Player) -> np.ndarray:
        board = self.state.board
        if player_perspective is Player.WHITE:
            points = board.points.astype(np.float32)
        else:
            # Black's point j is White's point (23 - j), with signs swapped
            points = -board.points[::-1].astype(np.float32)

        opp = player_perspective.opponent
        counts = [board.bar_count(player_perspective), board.bar_count(opp),
                  board.off_count(player_perspective), board.off_count(opp)]
        dice = list(self.state.dice) + [0] * (self.MAX_DICE - len(self.state.dice))
        return np.concatenate([points, np.array(counts + dice, dtype=np.float32)])

    def _get_info(self):
        info = {
            "current_player": self.state.current_player,
            "dice": self.state.dice,
            "legal_moves_count": len(self._cached_legal_moves),
            "turn_number": self.state.turn_number,
        }
        if self.state.winner_info is not None:
            info["winner"] = self.state.winner_info
        return info

    def _roll(self):
        die_a, die_b = self.np_random.integers(1, 7, size=2)
        self.state = roll_dice(self.state, (int(die_a), int(die_b)))

    def _start_turn(self):
        """Rolls for the player to move, passing until someone has a legal move."""
        self._cached_legal_moves = []
        while not self.state.winner and self.state.turn_number <= self.max_turns:
            self._roll()
            if self.state.is_opening_phase:
                continue  # Opening tie, roll again

            self._cached_legal_moves = get_legal_moves(self.state)
            if self._cached_legal_moves:
                return

            logger.debug(f"{self.state.current_player.value} has no legal moves with {list(self.state.rolled_dice)}. Passing turn.")
            self.state = pass_turn(self.state)

    def action_masks(self) -> np.ndarray:
        mask = np.zeros(self.MAX_ACTIONS, dtype=bool)
        mask[:len(self._cached_legal_moves)] = True
        return mask

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.state = create_initial_state()
        self._start_turn()

        if self.render_mode == 'human':
            self.render()
        return self._get_observation(self.state.current_player), self._get_info()

    def step(self, action):
        action = int(action)
        if not (0 <= action < len(self._cached_legal_moves)):
            logger.warning(f"Invalid action {action} chosen by {self.state.current_player.value}. "
                           f"Had {len(self._cached_legal_moves)} legal moves.")
            return (self._get_observation(self.state.current_player), self.illegal_action_penalty,
                    True, False, self._get_info())

        move = self._cached_legal_moves[action]
        logger.debug(f"{move.player.value} plays {format_move(move)}")
        self.state = apply_move(self.state, move)

        reward = 0.0
        terminated = False
        if self.state.winner is not None:
            reward = float(self.state.winner_info.points)
            terminated = True
            self._cached_legal_moves = []
        elif not has_dice(self.state):
            self._start_turn()
        else:
            self._cached_legal_moves = get_legal_moves(self.state)

        truncated = not terminated and self.state.turn_number > self.max_turns

        if self.render_mode == 'human':
            self.render()
        return self._get_observation(self.state.current_player), reward, terminated, truncated, self._get_info()

    def render(self):
        text = f"{self.state.board}\nCurrent Player: {self.state.current_player.value}, Dice: {list(self.state.dice)}"
        if self.state.winner_info is not None:
            text += f"\nGame Over! Winner: {self.state.winner.value} ({self.state.winner_info.type.value})"
        else:
            text += f"\nLegal moves: {len(self._cached_legal_moves)}"

        if self.render_mode == 'ansi':
            return text
        if self.render_mode == 'human':
            print("\n" + text)
