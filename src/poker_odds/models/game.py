"""Game variant and street models."""

from enum import Enum
from typing import List, Sequence

from poker_odds.models.card import Card, Rank


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"

    @property
    def is_drawing(self) -> bool:
        """Streets with cards still to come after the flop."""
        return self in (Street.FLOP, Street.TURN)


class GameVariant(str, Enum):
    TEXAS_HOLDEM = "texasHoldem"
    OMAHA = "omaha"
    OMAHA_HI_LO = "omahaHiLo"
    SHORT_DECK = "shortDeck"

    @property
    def label(self) -> str:
        return {
            "texasHoldem": "Texas Hold'em",
            "omaha": "Omaha",
            "omahaHiLo": "Omaha Hi-Lo",
            "shortDeck": "Short Deck",
        }[self.value]

    @property
    def hole_card_count(self) -> int:
        return 4 if self.is_omaha else 2

    @property
    def is_omaha(self) -> bool:
        return self in (GameVariant.OMAHA, GameVariant.OMAHA_HI_LO)

    @property
    def ranks(self) -> List[Rank]:
        if self == GameVariant.SHORT_DECK:
            return [r for r in Rank if r.numeric_value >= 6]
        return list(Rank)

    @classmethod
    def parse(cls, value: str) -> "GameVariant":
        for v in cls:
            if v.value == value or v.name.lower() == value.lower():
                return v
        raise ValueError(f"Unknown game variant: {value!r}")


VALID_BOARD_SIZES = (0, 3, 4, 5)


def get_street(board: Sequence[Card]) -> Street:
    """Classify the street from the number of board cards."""
    return {
        0: Street.PREFLOP,
        3: Street.FLOP,
        4: Street.TURN,
        5: Street.RIVER,
    }.get(len(board), Street.PREFLOP)
