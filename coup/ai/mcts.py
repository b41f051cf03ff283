"""
Monte Carlo Tree Search engine for the Coup AI.

Implements the four phases (selection with expansion, rollout,
backpropagation with pruning) plus the turn-level orchestration: choosing a
move, reusing the tree across real turns and learning from the final
outcome.
"""
import random
from typing import Callable, Dict, List, Optional, Tuple

from coup.game.game_logic import resolve_challenge, resolve_block, apply_action
from coup.models.actions import Action
from coup.models.game_state import Game
from coup.models.player import Player
from coup.ai.heuristic import evaluate_position, select_action_heuristically, select_card_to_give_up
from coup.ai.mcts_node import Node
from coup.ai.policies import RandomResolutionPolicy
from coup.ai.transposition import TranspositionTable, TranspositionEntry
from coup.ui.terminal_ui import print_search_result
from coup.ai.constants import (
    MCTS_NUM_SIMULATIONS,
    MCTS_MAX_DEPTH,
    MCTS_EXPLORATION_CONSTANT,
    MCTS_TRANSPOSITION_TABLE_SIZE,
    PRUNING_THRESHOLD,
    PRUNING_FACTOR,
    MIN_EXPANDED_NODES_FOR_TRANSPOSITION,
    WIN_REWARD,
    HEURISTIC_REWARD,
    MERCY_MARGIN,
)

WinnerResolver = Callable[[Game], Optional[Player]]


def first_active_player(game: Game) -> Optional[Player]:
    """Winner of a finished game: the first player still holding influence, if any."""
    active = game.active_players
    if not active:
        return None
    return active[0]


class MCTS:
    """
    Monte Carlo Tree Search for the AI seat of a two-player game.

    The tree persists between decisions: handle_action moves the root down
    to the child matching each real move, and handle_game_over credits the
    final result to the current root path.
    """

    def __init__(
        self,
        game: Game,
        num_simulations: int = MCTS_NUM_SIMULATIONS,
        max_depth: int = MCTS_MAX_DEPTH,
        exploration_constant: float = MCTS_EXPLORATION_CONSTANT,
        policy: Optional[RandomResolutionPolicy] = None,
        winner_resolver: WinnerResolver = first_active_player,
        rng: Optional[random.Random] = None,
        max_cache_size: int = MCTS_TRANSPOSITION_TABLE_SIZE,
        verbose: bool = False,
    ):
        """
        Initialize the search engine.

        Args:
            game: Initial game state (copied)
            num_simulations: Simulations to run per decision
            max_depth: Maximum plies per selection walk and per rollout
            exploration_constant: UCB1 exploration constant
            policy: Opponent model for challenges, blocks and opponent moves
            winner_resolver: Picks the winner of a finished game
            rng: Random source for card selection during resolution
            max_cache_size: Maximum size of the transposition table
            verbose: Print the search result table after each decision
        """
        self.root_game = game.copy()
        self.root = Node()
        self.num_simulations = num_simulations
        self.max_depth = max_depth
        self.exploration_constant = exploration_constant
        self.rng = rng or random.Random()
        self.policy = policy or RandomResolutionPolicy(self.rng)
        self.winner_resolver = winner_resolver
        self.transposition_table = TranspositionTable(max_size=max_cache_size)
        self.verbose = verbose
        self.transposition_hits = 0
        self.prunings = 0
        self._last_candidates: List[Node] = []

    def best_move(self, game: Game) -> Optional[Action]:
        """
        Choose the AI's action for the given position.

        Root children are filtered to actions that are legal in the live
        game and still performable by the live AI player (the tree may
        have been built from older snapshots), then ranked by UCB1.

        Args:
            game: Live game state; it is copied, never mutated

        Returns:
            Chosen action bound to the live game's players, or None if the
            game is over or the AI has no legal action
        """
        self.transposition_hits = 0
        self.prunings = 0
        self.transposition_table.clear()
        self._last_candidates = []
        self.root_game = game.copy()
        if self.root_game.game_over:
            return None

        self.search(self.num_simulations, self.max_depth)

        ai_player = game.ai_player
        available_actions = game.available_actions(ai_player)
        legal_codes = {action.code for action in available_actions}
        candidates = [
            child for child in self.root.children.values()
            if child.action.code in legal_codes
            and child.action.bind(game).can_player_perform()
        ]
        candidates.sort(key=lambda child: child.ucb1_value(self.exploration_constant), reverse=True)
        self._last_candidates = candidates

        if self.verbose:
            print_search_result(self.get_action_stats(), self.transposition_hits, self.prunings)

        if not candidates:
            return select_action_heuristically(available_actions, self.root_game)
        return candidates[0].action.bind(game)

    def search(self, num_simulations: int, max_depth: int) -> None:
        """
        Run select -> rollout -> backpropagate num_simulations times from root_game.

        Args:
            num_simulations: Number of simulations to run
            max_depth: Maximum depth of each selection walk and rollout
        """
        for _ in range(num_simulations):
            node, game = self._select_node(max_depth)
            winner = self._roll_out(game, max_depth)
            self._back_propagate(node, winner, game)

    def _select_node(self, max_depth: int) -> Tuple[Node, Game]:
        """
        Walk from the root to a frontier node, expanding leaves on the way.

        Once MIN_EXPANDED_NODES_FOR_TRANSPOSITION nodes have been expanded in
        this walk, the transposition table is consulted; an entry recorded
        with at least the remaining depth budget ends the walk early,
        provided its node is still part of the tree.

        Returns:
            The frontier node and the game state reached at it
        """
        node = self.root
        game = self.root_game.copy()
        depth = 0
        expanded_node_count = 0

        while depth < max_depth:
            if not node.expanded:
                self._expand(node, game)
                expanded_node_count += 1

            if not node.children or game.game_over:
                return node, game

            if expanded_node_count >= MIN_EXPANDED_NODES_FOR_TRANSPOSITION:
                entry = self.transposition_table.lookup(game.state_hash())
                if (entry is not None and entry.covers(max_depth - depth)
                        and self._in_tree(entry.node)):
                    self.transposition_hits += 1
                    return entry.node, game

            node = node.select_child(self.exploration_constant)
            game = game.copy()
            action = node.action.bind(game)
            is_challenged = self.policy.simulate_challenge(game, action)
            is_blocked = self.policy.simulate_block(game, action)
            self._execute_action(game, action, is_challenged, is_blocked)
            if not game.game_over:
                game.switch_turns()
            depth += 1

        self.transposition_table.store(
            game.state_hash(),
            TranspositionEntry(node, depth, node.ucb1_value(self.exploration_constant)),
        )
        return node, game

    def _in_tree(self, node: Node) -> bool:
        """True if node hangs below the current root (not pruned or left behind)."""
        while node is not None:
            if node is self.root:
                return True
            node = node.parent
        return False

    def _expand(self, parent: Node, game: Game) -> None:
        """Create one child per legal action of the player to move."""
        if game.game_over:
            return
        current_player = game.current_player
        if current_player is None:
            return
        parent.add_children(game.available_actions(current_player))

    def _roll_out(self, node_game: Game, max_depth: int) -> Optional[Player]:
        """
        Simulate play forward from a frontier state.

        The AI follows the heuristic policy, the opponent plays uniformly at
        random. Stops at a finished game, after max_depth plies, or when the
        mercy rule gives up on a clearly lost line.

        Args:
            node_game: Frontier state (copied, not mutated)
            max_depth: Maximum plies to simulate

        Returns:
            Winner of the simulation, or None when no winner was resolved
        """
        depth = 0
        game = node_game.copy()
        while not game.game_over and depth < max_depth:
            current_player = game.current_player
            if current_player is not None:
                available_actions = game.available_actions(current_player)
                if available_actions:
                    action = self._select_action_for_player(game, current_player, available_actions)
                    is_challenged = self.policy.simulate_challenge(game, action)
                    is_blocked = self.policy.simulate_block(game, action)
                    self._execute_action(game, action, is_challenged, is_blocked)
                    if game.game_over:
                        return self._determine_winner(game)
                game.switch_turns()
            depth += 1
            if self._should_terminate_search(game):
                return None
        return self._determine_winner(game)

    def _select_action_for_player(self, game: Game, player: Player, available_actions: List[Action]) -> Action:
        """Heuristic move for the AI, uniformly random move for the opponent."""
        if self._is_ai(game, player):
            return select_action_heuristically(available_actions, game)
        return self.policy.select_opponent_action(available_actions)

    def _execute_action(self, game: Game, action: Action, is_challenged: bool, is_blocked: bool) -> bool:
        """
        Resolve challenge and block, then apply the action's effect.

        Returns:
            True if the action's effect applied
        """
        is_block_challenged = (
            is_blocked and action.can_be_blocked
            and self.policy.simulate_block_challenge(game, action)
        )
        if not resolve_challenge(game, action, is_challenged, self._handle_lose_card):
            return False
        if not resolve_block(game, action, is_blocked, is_block_challenged, self._handle_lose_card):
            return False
        if game.game_over:
            return False
        return apply_action(game, action, self.rng)

    def _handle_lose_card(self, player: Player, game: Game) -> None:
        """The AI surrenders its weakest card; the opponent loses a random one."""
        if not player.cards:
            return
        if self._is_ai(game, player):
            card = select_card_to_give_up(game, player)
        else:
            card = self.policy.select_card_to_lose(player)
        player.return_card(card)

    def _should_terminate_search(self, game: Game) -> bool:
        """Mercy rule: the AI trails the opponent by more than MERCY_MARGIN."""
        ai_score = evaluate_position(game.ai_player)
        human_score = evaluate_position(game.human_player)
        return ai_score < human_score - MERCY_MARGIN

    def _determine_winner(self, game: Game) -> Optional[Player]:
        """
        Winner of a simulation.

        A finished game defers to the winner resolver. An unfinished one is
        decided by position scores, ties going to the AI.
        """
        if not game.game_over:
            ai_score = evaluate_position(game.ai_player)
            human_score = evaluate_position(game.human_player)
            return game.ai_player if ai_score >= human_score else game.human_player
        return self.winner_resolver(game)

    def _back_propagate(self, node: Node, winner: Optional[Player], game: Game) -> None:
        """
        Update statistics from the frontier node up to the root.

        A node with more than PRUNING_THRESHOLD visits whose UCB1 value drops
        below PRUNING_FACTOR times its parent's is removed from the tree, and
        the pass stops there.

        Args:
            node: Frontier node of the simulation
            winner: Winner of the rollout, or None
            game: Game state at the frontier node
        """
        ai_player = game.ai_player
        if winner is not None:
            reward = WIN_REWARD if winner.name == ai_player.name else -WIN_REWARD
        else:
            ai_score = evaluate_position(ai_player)
            human_score = evaluate_position(game.human_player)
            reward = HEURISTIC_REWARD if ai_score > human_score else -HEURISTIC_REWARD

        while node is not None:
            node.increment_visit_count()
            node.increment_reward(reward)

            parent = node.parent
            if node.visit_count > PRUNING_THRESHOLD and parent is not None:
                ucb1_value = node.ucb1_value(self.exploration_constant)
                parent_ucb1_value = parent.ucb1_value(self.exploration_constant)
                if ucb1_value < parent_ucb1_value * PRUNING_FACTOR:
                    self.prunings += 1
                    parent.remove_child(node.action.code)
                    break
            node = parent

    def handle_action(self, action: Action) -> None:
        """
        Advance the tree past a move that was really played.

        The matching child becomes the new root with its statistics intact;
        without a matching child the tree starts over.
        """
        child = self.root.children.get(action.code)
        if child is not None:
            child.parent = None
            self.root = child
        else:
            self.root = Node()

    def handle_game_over(self, winner: Optional[Player]) -> None:
        """Credit the real result to the root and count a visit up its path."""
        if winner is not None:
            if winner.name == self.root_game.human_player.name:
                self.root.increment_reward(-WIN_REWARD)
            elif winner.name == self.root_game.ai_player.name:
                self.root.increment_reward(WIN_REWARD)

        node = self.root
        while node is not None:
            node.increment_visit_count()
            node = node.parent

    def get_action_stats(self) -> List[Dict]:
        """
        Statistics of the candidates ranked by the last best_move call.

        Returns:
            List of dicts with action, visits, reward, avg_reward and ucb1,
            best first
        """
        return [
            {
                'action': child.action.code,
                'visits': child.visit_count,
                'reward': child.reward,
                'avg_reward': child.average_reward,
                'ucb1': child.ucb1_value(self.exploration_constant),
            }
            for child in self._last_candidates
        ]

    @staticmethod
    def _is_ai(game: Game, player: Player) -> bool:
        ai_player = game.ai_player
        return ai_player is not None and player.name == ai_player.name
