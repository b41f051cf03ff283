from dataclasses import dataclass, field
from typing import List, Optional

from coup.models.actions import Action, ActionCode
from coup.models.card import CardType
from coup.models.player import Player

HASH_MASK = 0xFFFFFFFFFFFFFFFF


@dataclass
class Game:
    players: List[Player] = field(default_factory=list)
    deck: List[CardType] = field(default_factory=list)
    current_index: int = 0

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if p.is_active]

    @property
    def game_over(self) -> bool:
        return len(self.active_players) <= 1

    @property
    def current_player(self) -> Optional[Player]:
        if self.game_over or not self.players:
            return None
        return self.players[self.current_index]

    @property
    def ai_player(self) -> Optional[Player]:
        return next((p for p in self.players if p.is_ai), None)

    @property
    def human_player(self) -> Optional[Player]:
        return next((p for p in self.players if not p.is_ai), None)

    def player_named(self, name: str) -> Player:
        for player in self.players:
            if player.name == name:
                return player
        raise ValueError(f"No player named {name!r} in this game")

    def opponent(self, player: Player) -> Optional[Player]:
        return next((p for p in self.players if p.name != player.name), None)

    def available_actions(self, player: Player) -> List[Action]:
        player = self.player_named(player.name)
        opponent = self.opponent(player)
        actions = [Action(code, player, opponent) for code in ActionCode]
        return [a for a in actions if a.can_player_perform()]

    def draw_cards(self, count: int) -> List[CardType]:
        drawn = self.deck[:count]
        del self.deck[:count]
        return drawn

    def execute_action(self, action: Action, cards: Optional[List[CardType]] = None) -> bool:
        """
        Apply an action that survived its challenge and block.

        Args:
            action: Action to apply (re-targeted at this game's players)
            cards: Resolution data. For COUP/ASSASSINATE, the card the target
                   surrenders. For SWAP, the kept hand followed by the cards
                   returned to the deck.

        Returns:
            True if the action's effect applied
        """
        action = action.bind(self)
        if not action.execute(False, False):
            return False

        if action.code in (ActionCode.COUP, ActionCode.ASSASSINATE):
            target = action.opponent
            if cards and target.has_card(cards[0]):
                target.return_card(cards[0])
        elif action.code == ActionCode.SWAP and cards:
            hand_size = len(action.player.cards)
            action.player.cards = list(cards[:hand_size])
            self.deck.extend(cards[hand_size:])
        return True

    def switch_turns(self) -> None:
        """Pass the turn to the next active player."""
        if not self.players:
            return
        for step in range(1, len(self.players) + 1):
            index = (self.current_index + step) % len(self.players)
            if self.players[index].is_active:
                self.current_index = index
                return

    def state_hash(self) -> int:
        """
        64-bit digest of the state.

        Covers the turn, every player's coins, hand and lost cards, and the
        deck size. Hands are sorted so equivalent states hash equally.
        """
        players_key = tuple(
            (
                p.name,
                p.coins,
                tuple(sorted(c.value for c in p.cards)),
                tuple(sorted(c.value for c in p.lost_cards)),
            )
            for p in self.players
        )
        return hash((self.current_index, players_key, len(self.deck))) & HASH_MASK

    def copy(self) -> 'Game':
        """Independent deep copy; CardType members are immutable and shared."""
        return Game(
            players=[p.copy() for p in self.players],
            deck=self.deck.copy(),
            current_index=self.current_index,
        )
