import random

from coup.models.actions import Action, ActionCode
from coup.models.card import CardType
from coup.ai.policies import RandomResolutionPolicy


def _action(game, code):
    return Action(code, game.ai_player, game.human_player)


def test_unchallengeable_actions_are_never_challenged(make_game):
    game = make_game([CardType.DUKE], [CardType.DUKE])
    policy = RandomResolutionPolicy(random.Random(0), challenge_probability=1.0)

    assert not policy.simulate_challenge(game, _action(game, ActionCode.INCOME))
    assert not policy.simulate_challenge(game, _action(game, ActionCode.FOREIGN_AID))
    assert policy.simulate_challenge(game, _action(game, ActionCode.TAX))


def test_unblockable_actions_are_never_blocked(make_game):
    game = make_game([CardType.DUKE], [CardType.DUKE])
    policy = RandomResolutionPolicy(random.Random(0), block_probability=1.0)

    assert not policy.simulate_block(game, _action(game, ActionCode.TAX))
    assert policy.simulate_block(game, _action(game, ActionCode.FOREIGN_AID))


def test_zero_probabilities_never_fire(make_game):
    game = make_game([CardType.DUKE], [CardType.DUKE])
    policy = RandomResolutionPolicy(
        random.Random(0),
        challenge_probability=0.0,
        block_probability=0.0,
        block_challenge_probability=0.0,
        known_card_bonus=0.0,
    )
    steal = _action(game, ActionCode.STEAL)
    for _ in range(50):
        assert not policy.simulate_challenge(game, steal)
        assert not policy.simulate_block(game, steal)
        assert not policy.simulate_block_challenge(game, steal)


def test_known_card_raises_challenge_chance(make_game):
    game = make_game([CardType.DUKE], [CardType.CAPTAIN])
    policy = RandomResolutionPolicy(random.Random(0), challenge_probability=0.0, known_card_bonus=1.0)

    # the human holds a Duke, so a Duke claim is always doubted
    assert policy.simulate_challenge(game, _action(game, ActionCode.TAX))
    assert not policy.simulate_challenge(game, _action(game, ActionCode.SWAP))


def test_same_seed_same_decisions(make_game):
    game = make_game([CardType.DUKE, CardType.CAPTAIN], [CardType.DUKE, CardType.CAPTAIN])
    actions = game.available_actions(game.human_player)
    first = RandomResolutionPolicy(random.Random(11))
    second = RandomResolutionPolicy(random.Random(11))

    picks_first = [first.select_opponent_action(actions).code for _ in range(20)]
    picks_second = [second.select_opponent_action(actions).code for _ in range(20)]

    assert picks_first == picks_second
    assert set(picks_first) <= {a.code for a in actions}


def test_card_to_lose_comes_from_hand(make_game):
    game = make_game([CardType.DUKE, CardType.CONTESSA], [CardType.DUKE])
    policy = RandomResolutionPolicy(random.Random(3))
    assert policy.select_card_to_lose(game.human_player) in (CardType.DUKE, CardType.CONTESSA)
