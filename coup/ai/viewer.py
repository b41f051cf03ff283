"""
Interactive viewer for watching the MCTS AI play Coup against a random opponent.
"""
import argparse
import random

from coup.game.game_manager import GameManager
from coup.ai.policies import RandomResolutionPolicy
from coup.ai.constants import MCTS_NUM_SIMULATIONS, MCTS_MAX_DEPTH


def _format_stats(stats, chosen) -> str:
    parts = []
    for s in stats:
        label = f"{s['action']}:{s['avg_reward']:+.1f}/{s['visits']}"
        if s['action'] == chosen:
            parts.append(f"[bold green][{label}][/bold green]")
        elif s['avg_reward'] > 0:
            parts.append(f"[green]{label}[/green]")
        else:
            parts.append(f"[dim]{label}[/dim]")
    return " ".join(parts)


def run_mcts_viewer(
    num_simulations: int = MCTS_NUM_SIMULATIONS,
    max_depth: int = MCTS_MAX_DEPTH,
    seed: int = None,
):
    """
    Step through a game of the MCTS AI against a random opponent.

    Args:
        num_simulations: Number of MCTS simulations per move
        max_depth: MCTS search depth
        seed: Optional seed for deterministic deals (same seed = same game sequence)
    """
    engine = GameManager(
        seed=seed,
        num_simulations=num_simulations,
        max_depth=max_depth,
        ask=lambda prompt: "1",
    )
    opponent = RandomResolutionPolicy(random.Random(engine.seed + 1))
    actions_title = f"MCTS ({num_simulations} simulations, depth {max_depth})"
    state = engine.get_state()

    while True:
        if state.game_over:
            engine.ui.display_game_state(state, actions_title=actions_title)
            user = input("r=restart | q=quit: ").strip().lower()
            if user in ("r", "restart"):
                state = engine.restart()
                opponent = RandomResolutionPolicy(random.Random(engine.seed + 1))
                continue
            break

        player = state.current_player
        if player.is_ai:
            action = engine.ai.best_move(state)
            stats = engine.ai.get_action_stats()
            ui_text = f"Next: [bold green]{action}[/bold green]"
            if stats:
                ui_text += " | " + _format_stats(stats, action.code if action else None)
            ui_text += (f"\nTransposition hits: {engine.ai.transposition_hits}"
                        f" | Prunings: {engine.ai.prunings}")
            responder = opponent
        else:
            action = opponent.select_opponent_action(state.available_actions(player))
            ui_text = f"Next: [bold yellow]{player.name} plays {action}[/bold yellow]"
            responder = engine.policy

        engine.ui.display_game_state(
            state,
            actions_override=ui_text,
            actions_title=actions_title,
            reveal_all=True,
        )

        user = input("Space=step | r=restart | q=quit: ").strip().lower()
        if user in ("q", "quit"):
            break
        if user in ("r", "restart"):
            state = engine.restart()
            opponent = RandomResolutionPolicy(random.Random(engine.seed + 1))
            continue
        if action is None:
            state.switch_turns()
            continue

        is_challenged = responder.simulate_challenge(state, action)
        is_blocked = responder.simulate_block(state, action)
        is_block_challenged = is_blocked and engine.policy.simulate_block_challenge(state, action)
        engine.execute_turn(action, is_challenged, is_blocked, is_block_challenged)


def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Watch the MCTS AI play Coup interactively."
    )
    parser.add_argument(
        "--num-simulations",
        type=int,
        default=MCTS_NUM_SIMULATIONS,
        help="Number of MCTS simulations per move"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MCTS_MAX_DEPTH,
        help="Maximum depth of each selection walk and rollout"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for deterministic deals (same seed = same game sequence)"
    )
    return parser.parse_args()


def main():
    """Entry point for console script."""
    args = parse_args()
    run_mcts_viewer(
        num_simulations=args.num_simulations,
        max_depth=args.max_depth,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
