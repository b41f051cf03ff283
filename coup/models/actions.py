"""
Actions available on a turn.

The action set is closed, so every action is an ActionCode plus a row in
ACTION_RULES describing its claim, its blockers, its cost and its coin
effect. Card effects (the target surrendering influence, the exchange) need
resolution data and are applied by Game.execute_action.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from coup.models.card import CardType
from coup.models.player import Player

if TYPE_CHECKING:
    from coup.models.game_state import Game

MANDATORY_COUP_COINS = 10
STEAL_AMOUNT = 2


class ActionCode(Enum):
    INCOME = 0
    FOREIGN_AID = 1
    TAX = 2
    STEAL = 3
    ASSASSINATE = 4
    COUP = 5
    SWAP = 6

    def __str__(self) -> str:
        return self.name.replace("_", " ").lower()


def _gain(amount: int) -> Callable[[Player, Optional[Player]], None]:
    def effect(player: Player, opponent: Optional[Player]) -> None:
        player.update_coins(amount)
    return effect


def _steal(player: Player, opponent: Optional[Player]) -> None:
    amount = min(STEAL_AMOUNT, opponent.coins)
    opponent.update_coins(-amount)
    player.update_coins(amount)


def _no_effect(player: Player, opponent: Optional[Player]) -> None:
    pass


@dataclass(frozen=True)
class ActionRule:
    """
    Behavior of one action kind.

    Attributes:
        claim: Card the actor claims to hold (None = cannot be challenged)
        blockers: Cards that can block the action (empty = cannot be blocked)
        cost: Coins paid when the action resolves
        targeted: Whether the action needs an active opponent
        effect: Coin effect applied when the action resolves
    """
    claim: Optional[CardType]
    blockers: Tuple[CardType, ...]
    cost: int
    targeted: bool
    effect: Callable[[Player, Optional[Player]], None]


ACTION_RULES: Dict[ActionCode, ActionRule] = {
    ActionCode.INCOME: ActionRule(None, (), 0, False, _gain(1)),
    ActionCode.FOREIGN_AID: ActionRule(None, (CardType.DUKE,), 0, False, _gain(2)),
    ActionCode.TAX: ActionRule(CardType.DUKE, (), 0, False, _gain(3)),
    ActionCode.STEAL: ActionRule(
        CardType.CAPTAIN, (CardType.CAPTAIN, CardType.AMBASSADOR), 0, True, _steal
    ),
    ActionCode.ASSASSINATE: ActionRule(
        CardType.ASSASSIN, (CardType.CONTESSA,), 3, True, _gain(-3)
    ),
    ActionCode.COUP: ActionRule(None, (), 7, True, _gain(-7)),
    ActionCode.SWAP: ActionRule(CardType.AMBASSADOR, (), 0, False, _no_effect),
}


class Action:
    """An action of a given kind, taken by a player against an opponent."""

    def __init__(self, code: ActionCode, player: Player, opponent: Optional[Player] = None):
        self.code = code
        self.player = player
        self.opponent = opponent

    @property
    def rule(self) -> ActionRule:
        return ACTION_RULES[self.code]

    @property
    def can_be_challenged(self) -> bool:
        return self.rule.claim is not None

    @property
    def can_be_blocked(self) -> bool:
        return len(self.rule.blockers) > 0

    def challenge(self) -> bool:
        """True if the actor's claim withstands a challenge."""
        if not self.can_be_challenged:
            return True
        return self.player.has_card(self.rule.claim)

    def can_player_perform(self) -> bool:
        rule = self.rule
        if not self.player.is_active:
            return False
        if self.player.coins >= MANDATORY_COUP_COINS and self.code != ActionCode.COUP:
            return False
        if self.player.coins < rule.cost:
            return False
        if rule.targeted and (self.opponent is None or not self.opponent.is_active):
            return False
        if self.code == ActionCode.STEAL and self.opponent.coins == 0:
            return False
        return True

    def execute(self, is_challenged: bool, is_blocked: bool) -> bool:
        """
        Apply the coin effect of the action.

        Args:
            is_challenged: Whether the claim was challenged
            is_blocked: Whether the action was blocked

        Returns:
            True if the effect applied
        """
        if is_blocked and self.can_be_blocked:
            return False
        if is_challenged and not self.challenge():
            return False
        self.rule.effect(self.player, self.opponent)
        return True

    def bind(self, game: 'Game') -> 'Action':
        """Return the same action played by the matching players of another game copy."""
        player = game.player_named(self.player.name)
        return Action(self.code, player, game.opponent(player))

    def __repr__(self) -> str:
        return f"Action({self.code.name}, player={self.player.name})"

    def __str__(self) -> str:
        return str(self.code)
