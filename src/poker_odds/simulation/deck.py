"""Deck construction and card arithmetic for simulation."""

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from poker_odds import config
from poker_odds.models.card import Card, Suit
from poker_odds.models.game import GameVariant

# Process-wide random source; every sampling routine also accepts its own.
_default_rng = random.Random(config.RANDOM_SEED)


def get_rng(rng: Optional[random.Random] = None) -> random.Random:
    """Return the given generator or the process-wide default."""
    return rng if rng is not None else _default_rng


def create_deck(variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> List[Card]:
    """Every legal card of the variant exactly once, suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in variant.ranks]


def remove_cards(deck: Sequence[Card], used: Iterable[Card]) -> List[Card]:
    """Set difference that keeps the deck's order."""
    used_set = set(used)
    return [card for card in deck if card not in used_set]


def shuffle(deck: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy (Fisher-Yates)."""
    shuffled = list(deck)
    get_rng(rng).shuffle(shuffled)
    return shuffled


def deal(deck: Sequence[Card], count: int) -> Tuple[List[Card], List[Card]]:
    """Split off the first ``count`` cards.

    Returns:
        Tuple of (dealt, remaining).
    """
    if count < 0 or count > len(deck):
        raise ValueError(f"Not enough cards in deck. Need {count}, have {len(deck)}")
    return list(deck[:count]), list(deck[count:])


class Deck:
    """A deck for one variant, minus any known cards."""

    def __init__(self, variant: GameVariant = GameVariant.TEXAS_HOLDEM,
                 exclude: Iterable[Card] = (),
                 rng: Optional[random.Random] = None):
        """Initialize a new deck.

        Args:
            variant: Game variant deciding the card set.
            exclude: Known cards that must never be dealt.
            rng: Random generator used by shuffle.
        """
        self.variant = variant
        self.excluded = frozenset(exclude)
        self.rng = get_rng(rng)
        self.cards: List[Card] = []
        self._reset()

    def _reset(self):
        """Restore all cards except the excluded ones."""
        self.cards = remove_cards(create_deck(self.variant), self.excluded)

    def shuffle(self):
        """Shuffle the deck in place."""
        self.rng.shuffle(self.cards)

    def deal(self, count: int = 1) -> List[Card]:
        """Deal cards from the top of the deck.

        Args:
            count: Number of cards to deal.

        Returns:
            List of dealt cards.
        """
        dealt, self.cards = deal(self.cards, count)
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card from the top of the deck."""
        return self.deal(1)[0]

    def reset(self):
        """Reset and shuffle the deck."""
        self._reset()
        self.shuffle()

    @property
    def remaining(self) -> int:
        """Get the number of remaining cards."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck(variant={self.variant.value}, remaining={len(self.cards)})"
