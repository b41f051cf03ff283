"""
MCTS Evaluation Script for Coup.

Plays the MCTS AI against a uniformly random opponent and reports win rate,
game length and search counters.
"""
import argparse
import json
import random
import time
from pathlib import Path
from typing import Dict, Optional

from coup.game.game_manager import GameManager
from coup.ai.policies import RandomResolutionPolicy
from coup.ai.constants import (
    MCTS_NUM_SIMULATIONS,
    MCTS_MAX_DEPTH,
    EVAL_NUM_GAMES,
    EVAL_SEED,
    EVAL_SAVE_INTERVAL,
    EVAL_MAX_TURNS,
)


def _default_paths(base_dir: Path):
    """Create default paths for logs and statistics."""
    logs_dir = base_dir / "logs"
    stats_file = logs_dir / "mcts_stats.json"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir, stats_file


class MCTSStatistics:
    """Track and store MCTS performance statistics."""

    def __init__(self):
        self.games_played = 0
        self.wins = 0
        self.turns = []
        self.transposition_hits = []
        self.prunings = []

    def update(self, result: Dict):
        """Update statistics with a new game result."""
        self.games_played += 1
        if result["ai_won"]:
            self.wins += 1
        self.turns.append(result["turns"])
        self.transposition_hits.append(result["transposition_hits"])
        self.prunings.append(result["prunings"])

    def get_stats(self):
        """Return current statistics as a dictionary."""
        games = max(1, self.games_played)
        return {
            "games_played": self.games_played,
            "win_rate": self.wins / games,
            "avg_turns": sum(self.turns) / games,
            "avg_transposition_hits": sum(self.transposition_hits) / games,
            "avg_prunings": sum(self.prunings) / games,
        }

    def save_to_file(self, filepath: Path):
        """Save statistics to JSON file."""
        data = {
            "stats": self.get_stats(),
            "history": {
                "turns": self.turns,
                "transposition_hits": self.transposition_hits,
                "prunings": self.prunings,
            },
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)


def play_mcts_game(
    seed: int,
    num_simulations: int = MCTS_NUM_SIMULATIONS,
    max_depth: int = MCTS_MAX_DEPTH,
    max_turns: int = EVAL_MAX_TURNS,
    verbose: bool = False,
) -> Dict:
    """
    Play a single game of the MCTS AI against a random opponent.

    Args:
        seed: Seed for the deal, the AI and the opponent
        num_simulations: Number of MCTS simulations per move
        max_depth: MCTS search depth
        max_turns: Turn limit (the game counts as a loss when reached)
        verbose: Whether to print game progress

    Returns:
        Dictionary with ai_won, turns, transposition_hits and prunings
    """
    engine = GameManager(
        seed=seed,
        num_simulations=num_simulations,
        max_depth=max_depth,
        ask=lambda prompt: "1",
    )
    opponent = RandomResolutionPolicy(random.Random(seed + 1))
    state = engine.get_state()
    turns = 0
    transposition_hits = 0
    prunings = 0

    while not state.game_over and turns < max_turns:
        player = state.current_player
        if player.is_ai:
            action = engine.ai.best_move(state)
            transposition_hits += engine.ai.transposition_hits
            prunings += engine.ai.prunings
            if action is None:
                state.switch_turns()
                continue
            responder = opponent
        else:
            action = opponent.select_opponent_action(state.available_actions(player))
            responder = engine.policy

        is_challenged = responder.simulate_challenge(state, action)
        is_blocked = responder.simulate_block(state, action)
        is_block_challenged = is_blocked and engine.policy.simulate_block_challenge(state, action)
        engine.execute_turn(action, is_challenged, is_blocked, is_block_challenged)
        turns += 1

        if verbose and turns % 10 == 0:
            coins = ", ".join(f"{p.name}={p.coins}c/{len(p.cards)}i" for p in state.players)
            print(f"  Turn {turns}: {coins}")

    winners = state.active_players
    ai_won = state.game_over and bool(winners) and winners[0].is_ai
    return {
        "ai_won": ai_won,
        "turns": turns,
        "transposition_hits": transposition_hits,
        "prunings": prunings,
    }


def evaluate_mcts(
    num_simulations: int = MCTS_NUM_SIMULATIONS,
    max_depth: int = MCTS_MAX_DEPTH,
    num_games: int = EVAL_NUM_GAMES,
    seed: int = EVAL_SEED,
    save_interval: int = EVAL_SAVE_INTERVAL,
    verbose: bool = True,
    stats_file: Optional[Path] = None,
) -> MCTSStatistics:
    """
    Evaluate the MCTS AI over several seeded games.

    Args:
        num_simulations: Number of MCTS simulations per move
        max_depth: MCTS search depth
        num_games: Number of games to play
        seed: Base seed; game i uses seed + i
        save_interval: Save statistics every N games
        verbose: Print progress
        stats_file: Where to save statistics (defaults to logs/mcts_stats.json)
    """
    if stats_file is None:
        _, stats_file = _default_paths(Path(__file__).parent)

    print(f"--- Starting MCTS Evaluation ---")
    print(f"Simulations per move: {num_simulations}")
    print(f"Search depth: {max_depth}")
    print(f"Number of games: {num_games}")

    stats = MCTSStatistics()
    start_time = time.time()

    for i in range(1, num_games + 1):
        game_start = time.time()
        if verbose:
            print(f"\n[Game {i}/{num_games}]")

        result = play_mcts_game(seed + i, num_simulations, max_depth, verbose=verbose)
        stats.update(result)

        if verbose:
            print(f"  {'Won' if result['ai_won'] else 'Lost'} in {result['turns']} turns")
            print(f"  Time: {time.time() - game_start:.2f}s")

        if i % save_interval == 0:
            current_stats = stats.get_stats()
            print(f"\n=== Progress Report (Game {i}/{num_games}) ===")
            print(f"Win Rate: {current_stats['win_rate']:.2%}")
            print(f"Average Turns: {current_stats['avg_turns']:.1f}")
            stats.save_to_file(stats_file)
            print(f"Statistics saved to: {stats_file}")

    print(f"\n=== Final Results ===")
    final_stats = stats.get_stats()
    print(f"Total Games: {stats.games_played}")
    print(f"Win Rate: {final_stats['win_rate']:.2%}")
    print(f"Average Turns: {final_stats['avg_turns']:.1f}")
    print(f"Transposition hits per game: {final_stats['avg_transposition_hits']:.1f}")
    print(f"Prunings per game: {final_stats['avg_prunings']:.1f}")
    print(f"Total Time: {time.time() - start_time:.1f}s")

    stats.save_to_file(stats_file)
    print(f"\nFinal statistics saved to: {stats_file}")
    return stats


def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Evaluate the MCTS AI against a random opponent."
    )
    parser.add_argument("--num-simulations", type=int, default=MCTS_NUM_SIMULATIONS,
                        help="Number of MCTS simulations per move")
    parser.add_argument("--max-depth", type=int, default=MCTS_MAX_DEPTH,
                        help="Maximum depth of each selection walk and rollout")
    parser.add_argument("--num-games", type=int, default=EVAL_NUM_GAMES,
                        help="Number of games to play")
    parser.add_argument("--seed", type=int, default=EVAL_SEED,
                        help="Base seed (game i uses seed + i)")
    parser.add_argument("--save-interval", type=int, default=EVAL_SAVE_INTERVAL,
                        help="Save statistics every N games")
    parser.add_argument("--quiet", action="store_true",
                        help="Disable verbose output")
    return parser.parse_args()


def main():
    """Entry point for console script."""
    args = parse_args()
    evaluate_mcts(
        num_simulations=args.num_simulations,
        max_depth=args.max_depth,
        num_games=args.num_games,
        seed=args.seed,
        save_interval=args.save_interval,
        verbose=not args.quiet,
    )


if __name__ == "__main__":
    main()
