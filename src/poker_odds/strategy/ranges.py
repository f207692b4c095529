"""Default heads-up opening ranges."""

from typing import FrozenSet, List, Sequence, Tuple

from poker_odds.models.card import Card
from poker_odds.models.game import GameVariant

RangeEntry = Tuple[str, str]

# Roughly the top half of Hold'em starting hands, by rank pair
HOLDEM_RANGE: List[RangeEntry] = [
    # Pocket pairs
    ("A", "A"), ("K", "K"), ("Q", "Q"), ("J", "J"), ("T", "T"),
    ("9", "9"), ("8", "8"), ("7", "7"), ("6", "6"), ("5", "5"),
    ("4", "4"), ("3", "3"), ("2", "2"),
    # Aces
    ("A", "K"), ("A", "Q"), ("A", "J"), ("A", "T"), ("A", "9"),
    ("A", "8"), ("A", "7"), ("A", "6"), ("A", "5"), ("A", "4"),
    ("A", "3"), ("A", "2"),
    # Kings
    ("K", "Q"), ("K", "J"), ("K", "T"), ("K", "9"), ("K", "8"),
    ("K", "7"), ("K", "6"), ("K", "5"), ("K", "4"), ("K", "3"), ("K", "2"),
    # Queens and jacks
    ("Q", "J"), ("Q", "T"), ("Q", "9"), ("Q", "8"), ("Q", "7"), ("Q", "6"),
    ("J", "T"), ("J", "9"), ("J", "8"), ("J", "7"),
    # Connectors
    ("T", "9"), ("T", "8"),
    ("9", "8"), ("9", "7"),
    ("8", "7"),
    ("7", "6"),
    ("6", "5"),
    ("5", "4"),
]


def get_default_range(variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> FrozenSet[FrozenSet[str]]:
    """Opening range for the variant as unordered rank pairs."""
    legal = {r.value for r in variant.ranks}
    return frozenset(
        frozenset((a, b)) for a, b in HOLDEM_RANGE if a in legal and b in legal
    )


def is_hand_in_range(hole: Sequence[Card], opening_range) -> bool:
    """True when the first two hole cards form a pair of ranks in the range."""
    if len(hole) < 2:
        return False
    ranks = frozenset((hole[0].rank.value, hole[1].rank.value))
    return ranks in opening_range
