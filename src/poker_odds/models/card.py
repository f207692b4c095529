"""Card, Rank, and Suit models."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Suit(str, Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        for suit in cls:
            if suit.value == s:
                return suit
        raise ValueError(f"Unknown suit: {s!r}")

    @property
    def symbol(self) -> str:
        return {"h": "♥", "d": "♦", "c": "♣", "s": "♠"}[self.value]

    @property
    def display_name(self) -> str:
        return {"h": "heart", "d": "diamond", "c": "club", "s": "spade"}[self.value]


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        return _RANK_VALUES[self.value]

    @property
    def display_name(self) -> str:
        return RANK_NAMES[self.numeric_value]

    @property
    def plural_name(self) -> str:
        return plural_rank_name(self.numeric_value)

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        for r in cls:
            if r.value == c:
                return r
        raise ValueError(f"Unknown rank: {c!r}")

    @classmethod
    def from_value(cls, value: int) -> "Rank":
        """Map 2..14 (or 1 for a low Ace) back to a Rank."""
        if value == 1:
            value = 14
        for r in cls:
            if r.numeric_value == value:
                return r
        raise ValueError(f"No rank with value {value}")


_RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8,
    "9": 9, "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
}

RANK_NAMES = {
    1: "Ace", 2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six",
    7: "Seven", 8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack",
    12: "Queen", 13: "King", 14: "Ace",
}


def plural_rank_name(value: int) -> str:
    """'Aces', 'Sixes', 'Twos' for a numeric rank."""
    name = RANK_NAMES.get(value, str(value))
    return name + ("es" if name.endswith("x") else "s")


@dataclass(frozen=True)
class Card:
    """A single playing card."""
    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card code like 'Ah', 'Ts', '2c'.

        The format is strict: exactly two characters, rank then suit,
        case-sensitive, no separators.
        """
        if not isinstance(s, str) or len(s) != 2:
            raise ValueError(f"Cannot parse card: {s!r}")
        return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))

    @property
    def value(self) -> int:
        return self.rank.numeric_value

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def to_short(self) -> str:
        """Return short string like 'Ah'."""
        return f"{self.rank.value}{self.suit.value}"


def parse_cards(codes: Iterable[str]) -> List[Card]:
    """Parse a sequence of card codes."""
    return [Card.parse(code) for code in codes]


def cards_to_str(cards: Iterable[Card]) -> str:
    return " ".join(c.to_short() for c in cards)
