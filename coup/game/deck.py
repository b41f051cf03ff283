from typing import List, Optional
import random
from coup.models.card import CardType, COPIES_PER_CARD


class Deck:
    @staticmethod
    def create_deck(seed: Optional[int] = None) -> List[CardType]:
        """
        Create and shuffle a court deck.

        Args:
            seed: Optional seed for deterministic deck shuffling.
                  If provided, the same seed will produce the same deck order.
                  If None, deck order is random.

        Returns:
            List of shuffled cards, COPIES_PER_CARD of each type
        """
        cards = []
        for card in CardType:
            cards.extend([card] * COPIES_PER_CARD)

        random.Random(seed).shuffle(cards)
        return cards
