import argparse
import json
import sys
from collections import Counter

import numpy as np
import tqdm
from loguru import logger

from backgammon_engine.agent import HeuristicAgent
from backgammon_engine.config import SimulationConfig
from backgammon_engine.env import BackgammonEnv
from backgammon_engine.labels import player_label, win_type_label
from backgammon_engine.types import Player


def parse_args(argv=None):
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Play heuristic backgammon agents against each other.")
    parser.add_argument("--games", type=int, default=defaults.num_games, help="Number of games to play")
    parser.add_argument("--max-turns", type=int, default=defaults.max_turns, help="Turn limit per game")
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Seed for dice and agents")
    parser.add_argument("--white-epsilon", type=float, default=defaults.white_epsilon,
                        help="Exploration rate of the White agent")
    parser.add_argument("--black-epsilon", type=float, default=defaults.black_epsilon,
                        help="Exploration rate of the Black agent")
    parser.add_argument("--log-level", default=defaults.log_level)
    parser.add_argument("--save-last-game", default=None, help="Write the final state of the last game as JSON")
    args = parser.parse_args(argv)

    config = SimulationConfig(
        num_games=args.games,
        max_turns=args.max_turns,
        seed=args.seed,
        log_level=args.log_level,
        white_epsilon=args.white_epsilon,
        black_epsilon=args.black_epsilon,
    )
    return config, args.save_last_game


def play_game(env: BackgammonEnv, agents, seed=None):
    """Plays one game; returns the final state and whether it hit the turn limit."""
    _, info = env.reset(seed=seed)
    terminated = truncated = False

    while not (terminated or truncated):
        agent = agents[info["current_player"]]
        action = agent.choose_action(env.state, env.legal_moves)
        _, _, terminated, truncated, info = env.step(action)

    return env.state, truncated


def run(config: SimulationConfig, save_last_game=None):
    env = BackgammonEnv(max_turns=config.max_turns, illegal_action_penalty=config.illegal_action_penalty)
    agents = {
        Player.WHITE: HeuristicAgent(epsilon=config.white_epsilon, seed=config.seed),
        Player.BLACK: HeuristicAgent(epsilon=config.black_epsilon,
                                     seed=None if config.seed is None else config.seed + 1),
    }

    wins = Counter()
    win_types = Counter()
    points = {Player.WHITE: [], Player.BLACK: []}
    game_lengths = []
    truncated_games = 0
    final_state = None

    logger.info(f"Playing {config.num_games} games "
                f"(epsilon white={config.white_epsilon}, black={config.black_epsilon})")

    for game in tqdm.tqdm(range(config.num_games)):
        seed = None if config.seed is None else config.seed + game
        final_state, truncated = play_game(env, agents, seed=seed)
        game_lengths.append(final_state.turn_number)

        if truncated:
            truncated_games += 1
            logger.debug(f"Game {game + 1} stopped at the turn limit")
            continue

        info = final_state.winner_info
        wins[info.player] += 1
        win_types[info.type] += 1
        points[info.player].append(info.points)
        points[info.player.opponent].append(-info.points)

    logger.info(f"Finished {config.num_games} games, {truncated_games} stopped at the turn limit")
    for player in Player:
        avg_points = np.mean(points[player]) if points[player] else 0.0
        logger.info(f"{player_label(player)}: {wins[player]} wins, avg points per game {avg_points:.2f}")
    for win_type, count in win_types.most_common():
        logger.info(f"{win_type_label(win_type)}: {count}")
    logger.info(f"Average game length: {np.mean(game_lengths):.1f} turns")

    if save_last_game and final_state is not None:
        with open(save_last_game, "w") as f:
            json.dump(final_state.to_dict(), f, indent=2)
        logger.info(f"Last game state written to {save_last_game}")

    return wins, win_types


if __name__ == "__main__":
    config, save_path = parse_args()
    logger.remove()
    logger.add(sys.stderr, level=config.log_level)
    run(config, save_path)
