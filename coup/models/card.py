from enum import Enum


class CardType(Enum):
    DUKE = 0
    ASSASSIN = 1
    CAPTAIN = 2
    AMBASSADOR = 3
    CONTESSA = 4

    def __str__(self) -> str:
        return self.name.capitalize()


CardColor = {
    CardType.DUKE: "magenta",
    CardType.ASSASSIN: "red",
    CardType.CAPTAIN: "blue",
    CardType.AMBASSADOR: "green",
    CardType.CONTESSA: "yellow",
}

COPIES_PER_CARD = 3
HAND_SIZE = 2
