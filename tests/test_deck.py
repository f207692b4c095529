"""Tests for deck construction and dealing."""

import random

import pytest

from poker_odds.models.card import Card, Rank, Suit, parse_cards
from poker_odds.models.game import GameVariant
from poker_odds.simulation.deck import Deck, create_deck, deal, remove_cards, shuffle


class TestCreateDeck:
    """Tests for the variant card sets."""

    def test_standard_deck_size(self):
        """Hold'em and Omaha use all 52 cards."""
        assert len(create_deck(GameVariant.TEXAS_HOLDEM)) == 52
        assert len(create_deck(GameVariant.OMAHA)) == 52

    def test_short_deck_size(self):
        """Short deck drops deuces through fives."""
        deck = create_deck(GameVariant.SHORT_DECK)
        assert len(deck) == 36
        assert min(c.value for c in deck) == 6

    def test_no_duplicates(self):
        """Every card appears exactly once."""
        deck = create_deck()
        assert len(set(deck)) == len(deck)

    def test_suit_major_order(self):
        """Cards are grouped by suit, ranks ascending."""
        deck = create_deck()
        assert deck[0] == Card(Rank.TWO, Suit.HEARTS)
        assert deck[12] == Card(Rank.ACE, Suit.HEARTS)
        assert deck[13].suit == Suit.DIAMONDS


class TestCardArithmetic:
    """Tests for remove_cards, shuffle and deal."""

    def test_remove_cards_keeps_order(self):
        """Removing cards leaves the rest in deck order."""
        deck = create_deck()
        used = parse_cards(["2h", "Ah", "Ks"])
        rest = remove_cards(deck, used)
        assert len(rest) == 49
        assert not set(used) & set(rest)
        assert rest == [c for c in deck if c not in used]

    def test_shuffle_is_a_permutation(self):
        """Shuffling keeps the same cards and leaves the input alone."""
        deck = create_deck()
        shuffled = shuffle(deck, random.Random(7))
        assert sorted(shuffled, key=repr) == sorted(deck, key=repr)
        assert deck == create_deck()

    def test_seeded_shuffle_is_reproducible(self):
        """The same seed produces the same order."""
        deck = create_deck()
        assert shuffle(deck, random.Random(42)) == shuffle(deck, random.Random(42))

    def test_deal_splits(self):
        """deal returns the first cards and the remainder."""
        deck = create_deck()
        dealt, rest = deal(deck, 5)
        assert dealt == deck[:5]
        assert rest == deck[5:]

    def test_deal_too_many(self):
        """Dealing more than the deck holds fails."""
        with pytest.raises(ValueError):
            deal(create_deck(), 53)


class TestDeck:
    """Tests for the Deck class."""

    def test_excluded_cards_never_dealt(self):
        """Known cards are removed up front."""
        known = parse_cards(["As", "Kd"])
        deck = Deck(exclude=known, rng=random.Random(1))
        deck.shuffle()
        dealt = deck.deal(50)
        assert len(dealt) == 50
        assert not set(known) & set(dealt)

    def test_deal_one(self):
        """Test dealing a single card."""
        deck = Deck()
        deck.deal_one()
        assert len(deck) == 51

    def test_deal_too_many(self):
        """Test dealing more cards than available."""
        deck = Deck(GameVariant.SHORT_DECK)
        deck.deal(36)
        with pytest.raises(ValueError):
            deck.deal(1)

    def test_reset(self):
        """Reset restores everything except the excluded cards."""
        deck = Deck(exclude=parse_cards(["2c"]))
        deck.deal(10)
        deck.reset()
        assert deck.remaining == 51
