import random

import pytest

from coup.models.actions import Action, ActionCode
from coup.models.card import CardType
from coup.models.player import Player


def test_copy_is_independent(make_game):
    game = make_game([CardType.DUKE, CardType.CAPTAIN], [CardType.CONTESSA])
    clone = game.copy()

    clone.human_player.coins = 9
    clone.human_player.return_card(CardType.DUKE)
    clone.deck.pop()

    assert game.human_player.coins == 2
    assert game.human_player.cards == [CardType.DUKE, CardType.CAPTAIN]
    assert len(game.deck) == 4


def test_state_hash_stable_across_copies(make_game):
    game = make_game([CardType.DUKE, CardType.CAPTAIN], [CardType.CONTESSA])
    assert game.copy().state_hash() == game.state_hash()
    assert 0 <= game.state_hash() < 2 ** 64


def test_state_hash_ignores_hand_order(make_game):
    a = make_game([CardType.DUKE, CardType.CAPTAIN], [CardType.CONTESSA])
    b = make_game([CardType.CAPTAIN, CardType.DUKE], [CardType.CONTESSA])
    assert a.state_hash() == b.state_hash()


def test_state_hash_tracks_changes(make_game):
    game = make_game([CardType.DUKE, CardType.CAPTAIN], [CardType.CONTESSA])
    before = game.state_hash()

    game.ai_player.coins += 1
    assert game.state_hash() != before

    game.ai_player.coins -= 1
    game.switch_turns()
    assert game.state_hash() != before


def test_game_over_and_current_player(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA])
    assert not game.game_over
    assert game.current_player is game.human_player

    game.human_player.return_card(CardType.DUKE)

    assert game.game_over
    assert game.current_player is None
    assert game.active_players == [game.ai_player]


def test_switch_turns_skips_inactive_players(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA])
    game.players.append(Player("Ghost", cards=[]))

    game.switch_turns()
    assert game.current_player is game.ai_player
    game.switch_turns()
    assert game.current_player is game.human_player


def test_player_named_unknown(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA])
    with pytest.raises(ValueError):
        game.player_named("Nobody")


def test_available_actions_basic(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA])
    codes = [a.code for a in game.available_actions(game.human_player)]
    assert codes == [ActionCode.INCOME, ActionCode.FOREIGN_AID, ActionCode.TAX, ActionCode.STEAL, ActionCode.SWAP]


def test_ten_coins_forces_coup(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA], human_coins=10)
    codes = [a.code for a in game.available_actions(game.human_player)]
    assert codes == [ActionCode.COUP]


def test_costs_and_targets(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA], human_coins=7, ai_coins=0)
    codes = {a.code for a in game.available_actions(game.human_player)}
    assert ActionCode.ASSASSINATE in codes
    assert ActionCode.COUP in codes
    assert ActionCode.STEAL not in codes


def test_available_actions_use_this_games_players(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA])
    outsider = game.copy().human_player
    for action in game.available_actions(outsider):
        assert action.player is game.human_player
        assert action.opponent is game.ai_player


def test_action_bind_retargets_copy(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA])
    action = Action(ActionCode.TAX, game.human_player, game.ai_player)
    clone = game.copy()

    bound = action.bind(clone)

    assert bound.code == ActionCode.TAX
    assert bound.player is clone.human_player
    assert bound.opponent is clone.ai_player


def test_action_execute_respects_block_and_challenge(make_game):
    game = make_game([CardType.CAPTAIN], [CardType.CONTESSA])
    human, ai = game.human_player, game.ai_player

    assert not Action(ActionCode.FOREIGN_AID, human, ai).execute(False, True)
    assert not Action(ActionCode.TAX, human, ai).execute(True, False)
    assert human.coins == 2

    assert Action(ActionCode.STEAL, human, ai).execute(True, False)
    assert (human.coins, ai.coins) == (4, 0)


def test_steal_takes_at_most_what_target_has(make_game):
    game = make_game([CardType.CAPTAIN], [CardType.CONTESSA], ai_coins=1)
    Action(ActionCode.STEAL, game.human_player, game.ai_player).execute(False, False)
    assert (game.human_player.coins, game.ai_player.coins) == (3, 0)


def test_execute_coup_removes_chosen_card(make_game):
    game = make_game([CardType.DUKE], [CardType.CONTESSA, CardType.ASSASSIN], human_coins=7)
    coup = Action(ActionCode.COUP, game.human_player, game.ai_player)

    assert game.execute_action(coup, [CardType.ASSASSIN])

    assert game.human_player.coins == 0
    assert game.ai_player.cards == [CardType.CONTESSA]
    assert game.ai_player.lost_cards == [CardType.ASSASSIN]


def test_execute_swap_returns_cards_to_deck(make_game):
    game = make_game([CardType.DUKE, CardType.CAPTAIN], [CardType.CONTESSA], deck=[CardType.ASSASSIN])
    swap = Action(ActionCode.SWAP, game.human_player, game.ai_player)

    game.execute_action(swap, [CardType.ASSASSIN, CardType.CAPTAIN, CardType.DUKE, CardType.AMBASSADOR])

    assert game.human_player.cards == [CardType.ASSASSIN, CardType.CAPTAIN]
    assert game.deck == [CardType.ASSASSIN, CardType.DUKE, CardType.AMBASSADOR]


def test_update_coins_never_negative():
    player = Player("Human", coins=1)
    player.update_coins(-3)
    assert player.coins == 0


def test_lose_random_influence():
    player = Player("Human", cards=[CardType.DUKE, CardType.CONTESSA])

    lost = player.lose_random_influence(random.Random(2))

    assert lost in (CardType.DUKE, CardType.CONTESSA)
    assert player.lost_cards == [lost]
    assert len(player.cards) == 1
    assert Player("Human").lose_random_influence() is None
