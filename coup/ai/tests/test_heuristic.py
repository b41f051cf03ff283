from coup.models.actions import ActionCode
from coup.models.card import CardType
from coup.models.player import Player
from coup.ai.heuristic import (
    evaluate_position,
    select_action_heuristically,
    select_card_to_give_up,
    INFLUENCE_VALUE,
)


def test_evaluate_position_counts_influence_and_coins():
    player = Player("AI", is_ai=True, cards=[CardType.DUKE, CardType.CONTESSA], coins=4)
    assert evaluate_position(player) == 2 * INFLUENCE_VALUE + 3 + 4 + 4


def test_evaluate_position_caps_coins():
    rich = Player("AI", cards=[CardType.AMBASSADOR], coins=15)
    capped = Player("AI", cards=[CardType.AMBASSADOR], coins=10)
    assert evaluate_position(rich) == evaluate_position(capped)


def test_eliminated_player_scores_only_coins():
    assert evaluate_position(Player("AI", cards=[], coins=3)) == 3


def test_losing_influence_exceeds_mercy_margin_scale():
    before = Player("AI", cards=[CardType.DUKE, CardType.CAPTAIN], coins=2)
    after = Player("AI", cards=[CardType.DUKE], coins=2)
    assert evaluate_position(before) - evaluate_position(after) >= INFLUENCE_VALUE


def test_coup_is_taken_when_available(make_game):
    game = make_game([CardType.DUKE], [CardType.DUKE, CardType.ASSASSIN], ai_coins=8)
    actions = game.available_actions(game.ai_player)
    assert select_action_heuristically(actions, game).code == ActionCode.COUP


def test_truthful_tax_beats_bluff_alternatives(make_game):
    game = make_game([CardType.DUKE], [CardType.DUKE, CardType.CONTESSA])
    actions = game.available_actions(game.ai_player)
    assert select_action_heuristically(actions, game).code == ActionCode.TAX


def test_without_claims_prefers_foreign_aid(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA, CardType.CONTESSA], human_coins=0)
    actions = game.available_actions(game.ai_player)
    assert select_action_heuristically(actions, game).code == ActionCode.FOREIGN_AID


def test_no_actions_selects_nothing(make_game):
    game = make_game([CardType.DUKE], [CardType.DUKE])
    assert select_action_heuristically([], game) is None


def test_gives_up_lowest_weighted_card(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA, CardType.AMBASSADOR])
    assert select_card_to_give_up(game, game.ai_player) == CardType.AMBASSADOR


def test_give_up_with_empty_hand(make_game):
    game = make_game([CardType.DUKE], [])
    assert select_card_to_give_up(game, game.ai_player) is None
