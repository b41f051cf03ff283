"""
Pure game logic functions for Coup.

This module contains the challenge, block and effect resolution rules.
These functions are used by both GameManager (for interactive play)
and MCTS (for simulations) without code duplication. Who surrenders a
card is decided by the caller through the lose_card callback.
"""
import random
from typing import Callable, List, Optional

from coup.game.deck import Deck
from coup.models.actions import Action, ActionCode
from coup.models.card import CardType, HAND_SIZE
from coup.models.game_state import Game
from coup.models.player import Player

LoseCard = Callable[[Player, Game], None]

SWAP_DRAW = 2


def new_game(
    seed: Optional[int] = None,
    human_name: str = "Human",
    ai_name: str = "AI",
    ai_first: bool = False,
) -> Game:
    """
    Deal a fresh two-player game.

    Args:
        seed: Optional seed for deterministic deck shuffling
        human_name: Name of the non-AI seat
        ai_name: Name of the AI seat
        ai_first: Whether the AI takes the first turn

    Returns:
        Game with both hands dealt from the shuffled deck
    """
    deck = Deck.create_deck(seed)
    human = Player(human_name, is_ai=False)
    ai = Player(ai_name, is_ai=True)
    game = Game(players=[human, ai], deck=deck)
    for player in game.players:
        player.cards = game.draw_cards(HAND_SIZE)
    game.current_index = 1 if ai_first else 0
    return game


def resolve_challenge(game: Game, action: Action, is_challenged: bool, lose_card: LoseCard) -> bool:
    """
    Resolve a challenge against the actor's claim.

    A false claim costs the actor a card and the action fails. A true claim
    costs the challenger a card and the action proceeds.

    Args:
        game: Game to mutate
        action: Action being challenged
        is_challenged: Whether the opponent challenged
        lose_card: Callback that makes a player surrender one card

    Returns:
        True if the action can proceed
    """
    if action is None or game.game_over:
        return True
    if action.can_be_challenged and is_challenged:
        if not action.challenge():
            lose_card(action.player, game)
            return False
        lose_card(game.opponent(action.player), game)
    return True


def resolve_block(
    game: Game,
    action: Action,
    is_blocked: bool,
    is_block_challenged: bool,
    lose_card: LoseCard,
) -> bool:
    """
    Resolve a block against the action.

    An unchallenged block stops the action. A challenged block costs the
    blocker a card and the action proceeds.

    Returns:
        True if the action can proceed
    """
    if action is None or game.game_over:
        return True
    if action.can_be_blocked and is_blocked:
        if is_block_challenged:
            lose_card(game.opponent(action.player), game)
            return True
        return False
    return True


def resolution_cards(game: Game, action: Action, rng: Optional[random.Random] = None) -> Optional[List[CardType]]:
    """
    Build the resolution data Game.execute_action needs for card effects.

    SWAP draws two cards and keeps a random hand from the pool; the kept
    hand comes first, the rest are returned. COUP and ASSASSINATE take the
    target's first card. Drawn cards leave the deck here.
    """
    rng = rng or random
    if action.code == ActionCode.SWAP:
        drawn = game.draw_cards(SWAP_DRAW)
        pool = action.player.cards + drawn
        kept = action.player.select_random_cards_to_keep(pool, rng)
        returned = pool.copy()
        for card in kept:
            returned.remove(card)
        return kept + returned
    if action.code in (ActionCode.COUP, ActionCode.ASSASSINATE):
        target = action.opponent
        if target is not None and target.cards:
            return [target.cards[0]]
    return None


def apply_action(game: Game, action: Action, rng: Optional[random.Random] = None) -> bool:
    """Apply the effect of an action that survived challenge and block."""
    action = action.bind(game)
    if not action.can_player_perform():
        return False
    cards = resolution_cards(game, action, rng)
    return game.execute_action(action, cards)
