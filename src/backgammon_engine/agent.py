import random
from typing import List, Optional

from .config import EvaluatorWeights
from .evaluator import choose_ai_move
from .game_state import GameState
from .types import Move


class HeuristicAgent:
    """
    Plays the heuristic evaluator's choice, with epsilon-greedy exploration.
    Actions are indices into the legal-move list of the current state.
    """

    def __init__(self, epsilon=0.0, weights: Optional[EvaluatorWeights] = None, seed=None):
        self.epsilon = epsilon  # Exploration rate
        self.weights = weights
        self.rng = random.Random(seed)

    def choose_action(self, state: GameState, legal_moves: List[Move]) -> Optional[int]:
        """
        Chooses an action using an epsilon-greedy strategy.
        Returns None when there is nothing to choose, like choose_move.
        """
        if not legal_moves:
            return None

        if self.rng.random() < self.epsilon:
            # Explore: choose a random legal action
            return self.rng.randrange(len(legal_moves))

        # Exploit: the evaluator's first move always belongs to the legal set
        best = choose_ai_move(state, self.weights)
        keys = [move.key for move in legal_moves]
        return keys.index(best.key) if best is not None and best.key in keys else 0

    def choose_move(self, state: GameState, legal_moves: List[Move]) -> Optional[Move]:
        if not legal_moves:
            return None
        return legal_moves[self.choose_action(state, legal_moves)]
