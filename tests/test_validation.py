"""Tests for card input validation."""

import pytest

from poker_odds.analysis.validation import is_valid_card, validate_cards
from poker_odds.errors import InvalidCardsError
from poker_odds.models.game import GameVariant


class TestValidateCards:
    """Tests for validate_cards."""

    def test_valid_flop(self):
        result = validate_cards(["Ah", "Kd"], ["Qc", "Js", "Th"])
        assert result.valid
        assert result.errors == []

    def test_wrong_hole_count(self):
        result = validate_cards(["As", "Ks", "Qs"], [])
        assert not result.valid
        assert result.errors == ["Expected 2 hole cards for texasHoldem, got 3"]

    def test_omaha_hole_count(self):
        result = validate_cards(["As", "Ks"], [], GameVariant.OMAHA)
        assert result.errors == ["Expected 4 hole cards for omaha, got 2"]

    def test_bad_board_size(self):
        result = validate_cards(["As", "Ks"], ["2c", "3d"])
        assert "Board must have 0, 3, 4, or 5 cards, got 2" in result.errors

    def test_malformed_codes(self):
        result = validate_cards(["10h", "Xs"], ["Ah", "Kz", "2c"])
        assert 'Invalid card format: "10h"' in result.errors
        assert 'Invalid rank "X" in card "Xs"' in result.errors
        assert 'Invalid suit "z" in card "Kz"' in result.errors

    def test_case_sensitive(self):
        """Lowercase ranks and uppercase suits are rejected."""
        result = validate_cards(["ah", "KD"], [])
        assert not result.valid
        assert len(result.errors) == 2

    def test_duplicates(self):
        result = validate_cards(["Ah", "Kd"], ["Ah", "2c", "3d"])
        assert result.errors == ["Duplicate card detected: Ah"]

    def test_short_deck_rejects_low_ranks(self):
        result = validate_cards(["Ah", "5d"], [], GameVariant.SHORT_DECK)
        assert result.errors == ['Invalid rank "5" in card "5d"']

    def test_all_errors_collected(self):
        """Every problem is reported, not just the first."""
        result = validate_cards(["Ah", "Ah", "Kd"], ["2c"])
        assert len(result.errors) == 3

    def test_raise_for_errors(self):
        result = validate_cards(["Ah"], [])
        with pytest.raises(InvalidCardsError) as exc:
            result.raise_for_errors()
        assert exc.value.errors == result.errors


class TestIsValidCard:

    def test_codes(self):
        assert is_valid_card("Ts")
        assert not is_valid_card("T")
        assert not is_valid_card("1s")
        assert not is_valid_card(None)
