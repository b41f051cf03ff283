"""
Pytest configuration and shared fixtures for game tests.
"""
import pytest

from coup.models.card import CardType
from coup.models.game_state import Game
from coup.models.player import Player


@pytest.fixture
def make_game():
    """Build a two-player game with explicit hands and coins (human to move by default)."""
    def _make(human_cards, ai_cards, human_coins=2, ai_coins=2, ai_to_move=False, deck=None):
        human = Player("Human", is_ai=False, cards=list(human_cards), coins=human_coins)
        ai = Player("AI", is_ai=True, cards=list(ai_cards), coins=ai_coins)
        if deck is None:
            deck = [CardType.DUKE, CardType.CAPTAIN, CardType.CONTESSA, CardType.AMBASSADOR]
        return Game(players=[human, ai], deck=list(deck), current_index=1 if ai_to_move else 0)
    return _make


@pytest.fixture
def lose_first_card():
    """lose_card callback that surrenders the first card in hand."""
    def _lose(player, game):
        if player.cards:
            player.return_card(player.cards[0])
    return _lose
