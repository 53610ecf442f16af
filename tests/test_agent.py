import unittest

from backgammon_engine.agent import HeuristicAgent
from backgammon_engine.engine import get_legal_moves, roll_dice
from backgammon_engine.evaluator import choose_ai_move
from backgammon_engine.game_state import create_initial_state


class TestHeuristicAgent(unittest.TestCase):
    def setUp(self):
        self.state = roll_dice(create_initial_state(), (6, 3))
        self.legal_moves = get_legal_moves(self.state)

    def test_greedy_agent_plays_evaluator_move(self):
        agent = HeuristicAgent(epsilon=0.0)
        action = agent.choose_action(self.state, self.legal_moves)
        self.assertEqual(self.legal_moves[action].key, choose_ai_move(self.state).key)
        self.assertEqual(agent.choose_move(self.state, self.legal_moves).key, choose_ai_move(self.state).key)

    def test_exploring_agent_stays_in_range(self):
        agent = HeuristicAgent(epsilon=1.0, seed=7)
        for _ in range(20):
            action = agent.choose_action(self.state, self.legal_moves)
            self.assertTrue(0 <= action < len(self.legal_moves))

    def test_no_legal_moves(self):
        agent = HeuristicAgent()
        self.assertIsNone(agent.choose_action(self.state, []))
        self.assertIsNone(agent.choose_move(self.state, []))


if __name__ == "__main__":
    unittest.main()
