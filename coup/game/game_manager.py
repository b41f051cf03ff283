import random
from typing import Callable, Optional

from coup.models.actions import Action
from coup.models.game_state import Game
from coup.models.player import Player
from coup.game.game_logic import new_game, resolve_challenge, resolve_block, apply_action
from coup.ai.mcts import MCTS, first_active_player
from coup.ai.heuristic import select_card_to_give_up
from coup.ai.policies import RandomResolutionPolicy
from coup.ai.constants import MCTS_NUM_SIMULATIONS, MCTS_MAX_DEPTH
from coup.ui.terminal_ui import TerminalUI


class GameManager:
    def __init__(
        self,
        seed: Optional[int] = None,
        num_simulations: int = MCTS_NUM_SIMULATIONS,
        max_depth: int = MCTS_MAX_DEPTH,
        verbose: bool = False,
        ask: Callable[[str], str] = input,
    ):
        """
        Initialize the game manager for a human-vs-AI game.

        Args:
            seed: Optional seed for deterministic deck shuffling and AI randomness.
                  If None, a random seed is generated and used for reproducibility.
            num_simulations: MCTS simulations per AI decision
            max_depth: MCTS search depth
            verbose: Print the AI's search table after each decision
            ask: Prompt function used for every human decision
        """
        if seed is None:
            seed = random.randint(0, 2**31 - 1)

        self.seed = seed
        self.num_simulations = num_simulations
        self.max_depth = max_depth
        self.verbose = verbose
        self.ask = ask
        self.rng = random.Random(seed)
        self.policy = RandomResolutionPolicy(self.rng)
        self.ui = TerminalUI()
        self.command_text = ""
        self.exit = False
        self.setup_game()

    def setup_game(self):
        self.state = new_game(self.seed)
        self.ai = MCTS(
            self.state,
            num_simulations=self.num_simulations,
            max_depth=self.max_depth,
            policy=self.policy,
            rng=self.rng,
            verbose=self.verbose,
        )
        self.command_text = ""

    def restart(self) -> Game:
        self.seed += 1
        self.setup_game()
        return self.state

    def get_state(self) -> Game:
        return self.state

    def parse_command(self, command: str) -> Optional[Action]:
        """Parse a command (action number or action name) into an action of the human player."""
        player = self.state.human_player
        actions = self.state.available_actions(player)
        parts = command.lower().strip().split()
        match parts:
            case []:
                return None
            case [index] if index.isdigit():
                i = int(index) - 1
                return actions[i] if 0 <= i < len(actions) else None
            case words:
                name = "_".join(words)
                return next((a for a in actions if a.code.name.lower() == name), None)

    def execute_turn(
        self,
        action: Action,
        is_challenged: bool = False,
        is_blocked: bool = False,
        is_block_challenged: bool = False,
    ) -> bool:
        """
        Resolve a real move, advance the AI's tree and pass the turn.

        Args:
            action: Action of the current player
            is_challenged: Whether the other player challenged the claim
            is_blocked: Whether the other player blocked the action
            is_block_challenged: Whether the actor challenged the block

        Returns:
            True if the action's effect applied

        Raises:
            ValueError: If the action does not belong to the current player
                        or cannot be performed
        """
        current = self.state.current_player
        action = action.bind(self.state)
        if current is None or action.player.name != current.name:
            raise ValueError(f"It is not {action.player.name}'s turn")
        if not action.can_player_perform():
            raise ValueError(f"{action.player.name} cannot perform {action}")

        applied = False
        if (resolve_challenge(self.state, action, is_challenged, self._lose_card)
                and resolve_block(self.state, action, is_blocked, is_block_challenged, self._lose_card)
                and not self.state.game_over):
            applied = apply_action(self.state, action, self.rng)

        self.ai.handle_action(action)
        if self.state.game_over:
            self.ai.handle_game_over(first_active_player(self.state))
        else:
            self.state.switch_turns()
        return applied

    def take_turn(self, action: Action) -> bool:
        """Collect the other side's challenge and block decisions, then execute the turn."""
        action = action.bind(self.state)
        if action.player.is_ai:
            is_challenged = action.can_be_challenged and self._ask_yes_no(
                f"AI plays {action} (claims {action.rule.claim}). Challenge?")
            is_blocked = action.can_be_blocked and self._ask_yes_no(f"AI plays {action}. Block?")
            is_block_challenged = is_blocked and self.policy.simulate_block_challenge(self.state, action)
        else:
            is_challenged = self.policy.simulate_challenge(self.state, action)
            is_blocked = self.policy.simulate_block(self.state, action)
            is_block_challenged = is_blocked and self._ask_yes_no("AI blocks. Challenge the block?")
        return self.execute_turn(action, is_challenged, is_blocked, is_block_challenged)

    def play_ai_turn(self) -> Optional[Action]:
        action = self.ai.best_move(self.state)
        if action is None:
            self.state.switch_turns()
            return None
        self.command_text = f"AI played {action}"
        self.take_turn(action)
        return action

    def _lose_card(self, player: Player, game: Game) -> None:
        if not player.cards:
            return
        if player.is_ai:
            card = select_card_to_give_up(game, player)
        elif len(player.cards) == 1:
            card = player.cards[0]
        else:
            card = None
            options = ", ".join(f"{i}={c}" for i, c in enumerate(player.cards, 1))
            while card is None:
                answer = self.ask(f"Choose a card to lose ({options}): ").strip()
                if answer.isdigit() and 1 <= int(answer) <= len(player.cards):
                    card = player.cards[int(answer) - 1]
        player.return_card(card)

    def _ask_yes_no(self, question: str) -> bool:
        return self.ask(f"{question} [y/N]: ").strip().lower() in ("y", "yes")

    def ui_loop(self):
        while not self.exit:
            self.ui.display_game_state(self.state)
            if self.state.game_over:
                command = self.ask("Press 'R' to restart or 'E' to exit: ").strip().lower()
                if command in ("r", "restart"):
                    self.restart()
                else:
                    self.exit = True
                continue

            if self.state.current_player.is_ai:
                self.play_ai_turn()
                continue

            try:
                command = self.ask(self.command_text + "\nEnter command: ").strip()
            except (KeyboardInterrupt, EOFError):
                self.exit = True
                continue
            if command.lower() in ("exit", "e"):
                self.exit = True
                continue
            action = self.parse_command(command)
            if action is None:
                self.command_text = "Invalid command! Use an action number or name (e.g. 'tax')"
                continue
            self.command_text = f"You played {action}"
            self.take_turn(action)
        self.ui.display_game_state(self.state)
