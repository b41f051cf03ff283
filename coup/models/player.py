import random
from dataclasses import dataclass, field
from typing import List, Optional

from coup.models.card import CardType

STARTING_COINS = 2


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        name: Unique player name, used to match players across game copies
        is_ai: Whether this seat is driven by the search engine
        cards: Face-down cards (remaining influence)
        coins: Coins held
        lost_cards: Cards already surrendered, face up
    """
    name: str
    is_ai: bool = False
    cards: List[CardType] = field(default_factory=list)
    coins: int = STARTING_COINS
    lost_cards: List[CardType] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return len(self.cards) > 0

    def update_coins(self, amount: int) -> None:
        self.coins = max(0, self.coins + amount)

    def has_card(self, card: CardType) -> bool:
        return card in self.cards

    def return_card(self, card: CardType) -> None:
        """Surrender a specific influence card, turning it face up."""
        self.cards.remove(card)
        self.lost_cards.append(card)

    def lose_random_influence(self, rng: Optional[random.Random] = None) -> Optional[CardType]:
        if not self.cards:
            return None
        rng = rng or random
        card = rng.choice(self.cards)
        self.return_card(card)
        return card

    def select_random_cards_to_keep(
        self,
        options: List[CardType],
        rng: Optional[random.Random] = None,
    ) -> List[CardType]:
        """
        Pick a random hand from an exchange pool.

        Args:
            options: Current hand plus the cards drawn for the exchange
            rng: Random source

        Returns:
            As many cards as the player currently holds
        """
        rng = rng or random
        return rng.sample(options, len(self.cards))

    def copy(self) -> 'Player':
        return Player(
            name=self.name,
            is_ai=self.is_ai,
            cards=self.cards.copy(),
            coins=self.coins,
            lost_cards=self.lost_cards.copy(),
        )

    def __str__(self) -> str:
        return self.name
