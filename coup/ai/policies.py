"""
Randomized opponent modelling for MCTS simulations.

Every stochastic decision the search makes about the other side of the
table goes through a resolution policy, so tests can swap in a
deterministic one.
"""
import random
from typing import List, Optional

from coup.models.actions import Action
from coup.models.card import CardType
from coup.models.game_state import Game
from coup.models.player import Player
from coup.ai.constants import (
    CHALLENGE_PROBABILITY,
    KNOWN_CARD_CHALLENGE_BONUS,
    BLOCK_PROBABILITY,
    BLOCK_CHALLENGE_PROBABILITY,
)


class RandomResolutionPolicy:
    """
    Coin-flip model of challenges, blocks and opponent moves.

    Args:
        rng: Random source (a seeded random.Random makes searches reproducible)
        challenge_probability: Chance a challengeable action is challenged
        block_probability: Chance a blockable action is blocked
        block_challenge_probability: Chance a block is itself challenged
        known_card_bonus: Extra challenge chance when the challenger holds the claimed card
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        challenge_probability: float = CHALLENGE_PROBABILITY,
        block_probability: float = BLOCK_PROBABILITY,
        block_challenge_probability: float = BLOCK_CHALLENGE_PROBABILITY,
        known_card_bonus: float = KNOWN_CARD_CHALLENGE_BONUS,
    ):
        self.rng = rng or random.Random()
        self.challenge_probability = challenge_probability
        self.block_probability = block_probability
        self.block_challenge_probability = block_challenge_probability
        self.known_card_bonus = known_card_bonus

    def simulate_challenge(self, game: Game, action: Action) -> bool:
        if not action.can_be_challenged:
            return False
        probability = self.challenge_probability
        challenger = game.opponent(action.player)
        if challenger is not None and challenger.has_card(action.rule.claim):
            probability += self.known_card_bonus
        return self.rng.random() < probability

    def simulate_block(self, game: Game, action: Action) -> bool:
        if not action.can_be_blocked:
            return False
        return self.rng.random() < self.block_probability

    def simulate_block_challenge(self, game: Game, action: Action) -> bool:
        return self.rng.random() < self.block_challenge_probability

    def select_opponent_action(self, actions: List[Action]) -> Action:
        return self.rng.choice(actions)

    def select_card_to_lose(self, player: Player) -> CardType:
        return self.rng.choice(player.cards)
