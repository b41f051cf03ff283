"""
Hand-written heuristics used by the search engine.

Provides the position evaluation behind the mercy rule and the reward
fallback, the AI's rollout policy, and the AI's choice of which card to
surrender.
"""
from typing import List, Optional

from coup.models.actions import Action, ActionCode
from coup.models.card import CardType
from coup.models.game_state import Game
from coup.models.player import Player

INFLUENCE_VALUE = 25
MAX_COIN_VALUE = 10

CARD_WEIGHTS = {
    CardType.DUKE: 3,
    CardType.ASSASSIN: 4,
    CardType.CAPTAIN: 3,
    CardType.AMBASSADOR: 2,
    CardType.CONTESSA: 4,
}


def evaluate_position(player: Player) -> int:
    """
    Score a player's position.

    Each remaining influence is worth INFLUENCE_VALUE plus its card weight,
    and coins count up to MAX_COIN_VALUE, so losing one influence moves the
    score by roughly the mercy margin.

    Args:
        player: Player to evaluate

    Returns:
        Integer position score (higher is better)
    """
    influence = sum(INFLUENCE_VALUE + CARD_WEIGHTS[card] for card in player.cards)
    return influence + min(player.coins, MAX_COIN_VALUE)


def _action_score(action: Action, game: Game) -> int:
    player = action.player
    opponent = action.opponent
    truthful = action.challenge()

    match action.code:
        case ActionCode.COUP:
            return 100
        case ActionCode.ASSASSINATE:
            return 60 if truthful else 15
        case ActionCode.TAX:
            return 50 if truthful else 22
        case ActionCode.STEAL:
            if opponent is None or opponent.coins == 0:
                return 0
            if truthful:
                return 35 + 5 * min(opponent.coins, 2)
            return 10
        case ActionCode.FOREIGN_AID:
            return 25
        case ActionCode.SWAP:
            weakest = min((CARD_WEIGHTS[c] for c in player.cards), default=0)
            return 30 - 3 * weakest if truthful and game.deck else 5
        case ActionCode.INCOME:
            return 20
        case _:
            return 0


def select_action_heuristically(actions: List[Action], game: Game) -> Optional[Action]:
    """
    Pick the highest scoring action; the first one wins ties.

    Truthful claims are preferred over bluffs and a coup is taken whenever
    it is available.

    Args:
        actions: Legal actions for the acting player
        game: Current game state

    Returns:
        Chosen action, or None if there are no actions
    """
    best_action = None
    best_score = None
    for action in actions:
        score = _action_score(action, game)
        if best_score is None or score > best_score:
            best_score = score
            best_action = action
    return best_action


def select_card_to_give_up(game: Game, player: Player) -> Optional[CardType]:
    """Surrender the lowest weighted card in hand."""
    if not player.cards:
        return None
    return min(player.cards, key=lambda card: CARD_WEIGHTS[card])
