"""
Pytest configuration and shared fixtures for MCTS tests.
"""
import pytest

from coup.models.card import CardType
from coup.models.game_state import Game
from coup.models.player import Player
from coup.ai.constants import MCTS_TEST_SEED


class ScriptedPolicy:
    """Deterministic stand-in for RandomResolutionPolicy."""

    def __init__(self, challenge: bool = False, block: bool = False, block_challenge: bool = False):
        self.challenge = challenge
        self.block = block
        self.block_challenge = block_challenge

    def simulate_challenge(self, game, action):
        return self.challenge and action.can_be_challenged

    def simulate_block(self, game, action):
        return self.block and action.can_be_blocked

    def simulate_block_challenge(self, game, action):
        return self.block_challenge

    def select_opponent_action(self, actions):
        return actions[0]

    def select_card_to_lose(self, player):
        return player.cards[0]


@pytest.fixture
def game_seed():
    """Seed for new_game (deterministic deck shuffling)."""
    return MCTS_TEST_SEED


@pytest.fixture
def scripted_policy():
    """Policy that never challenges or blocks and always picks the first option."""
    return ScriptedPolicy()


@pytest.fixture
def policy_factory():
    return ScriptedPolicy


@pytest.fixture
def make_game():
    """Build a two-player game with explicit hands and coins (AI to move by default)."""
    def _make(human_cards, ai_cards, human_coins=2, ai_coins=2, ai_to_move=True, deck=None):
        human = Player("Human", is_ai=False, cards=list(human_cards), coins=human_coins)
        ai = Player("AI", is_ai=True, cards=list(ai_cards), coins=ai_coins)
        if deck is None:
            deck = [CardType.DUKE, CardType.CAPTAIN, CardType.CONTESSA, CardType.AMBASSADOR]
        return Game(players=[human, ai], deck=list(deck), current_index=1 if ai_to_move else 0)
    return _make
