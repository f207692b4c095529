"""Tests for action recommendations."""

import pytest

from poker_odds.analysis.strength import analyze_hand_strength
from poker_odds.models.analysis import Action, Confidence
from poker_odds.models.card import parse_cards
from poker_odds.models.game import Street
from poker_odds.strategy.decision import (
    adjust_confidence, build_reasoning, get_recommendation, get_top_actions,
)

POT_ODDS = 50 / 150


def cards(text):
    return parse_cards(text.split())


class TestRecommendation:
    """Tests for get_recommendation."""

    @pytest.mark.parametrize("equity, action, confidence", [
        (0.60, Action.RAISE, Confidence.STRONG),
        (0.50, Action.RAISE, Confidence.MODERATE),
        (0.30, Action.CHECK, Confidence.MODERATE),
    ])
    def test_no_bet(self, equity, action, confidence):
        rec = get_recommendation(equity, None, Street.FLOP, 0)
        assert (rec.action, rec.confidence) == (action, confidence)

    def test_zero_pot_odds_means_no_bet(self):
        assert get_recommendation(0.3, 0.0, Street.FLOP, 0).action == Action.CHECK

    @pytest.mark.parametrize("equity, action, confidence", [
        (0.70, Action.RAISE, Confidence.STRONG),
        (0.40, Action.CALL, Confidence.STRONG),
        (0.35, Action.CALL, Confidence.MODERATE),
        (0.20, Action.FOLD, Confidence.STRONG),
    ])
    def test_facing_bet(self, equity, action, confidence):
        rec = get_recommendation(equity, POT_ODDS, Street.TURN, 0)
        assert (rec.action, rec.confidence) == (action, confidence)

    def test_drawing_call_on_flop(self):
        """Slightly short equity with enough clean outs still calls."""
        rec = get_recommendation(0.31, POT_ODDS, Street.FLOP, 9)
        assert rec.action == Action.CALL
        assert rec.confidence == Confidence.MARGINAL

    def test_no_drawing_call_on_river(self):
        rec = get_recommendation(0.31, POT_ODDS, Street.RIVER, 9)
        assert rec.action == Action.FOLD
        assert rec.confidence == Confidence.MARGINAL


class TestConfidence:
    """Confidence moves one tier at a time and saturates."""

    def test_saturation(self):
        assert Confidence.STRONG.raised() == Confidence.STRONG
        assert Confidence.MARGINAL.lowered() == Confidence.MARGINAL
        assert Confidence.MODERATE.raised() == Confidence.STRONG

    def test_premium_raise_stays_strong(self):
        hs = analyze_hand_strength(cards("Ah Ad"))
        assert adjust_confidence(Confidence.STRONG, Action.RAISE, hs) == Confidence.STRONG

    def test_trash_call_lowered(self):
        hs = analyze_hand_strength(cards("7c 2d"))
        assert adjust_confidence(Confidence.MODERATE, Action.CALL, hs) == Confidence.MARGINAL

    def test_no_strength_keeps_base(self):
        assert adjust_confidence(Confidence.MODERATE, Action.FOLD, None) == Confidence.MODERATE


class TestTopActions:
    """Tests for get_top_actions."""

    def test_sorted_and_capped(self):
        hs = analyze_hand_strength(cards("Qh Qd"), cards("9c 7s 2d"))
        options = get_top_actions(0.7, POT_ODDS, Street.FLOP, 2, hs)
        assert 1 <= len(options) <= 3
        confidences = [o.confidence for o in options]
        assert confidences == sorted(confidences, reverse=True)
        assert options[0].action == Action.RAISE

    def test_no_bet_offers_check(self):
        options = get_top_actions(0.3, None, Street.FLOP, 0)
        actions = [o.action for o in options]
        assert Action.CHECK in actions
        assert Action.FOLD not in actions
        assert options[0].action == Action.CHECK

    def test_drawing_label(self):
        options = get_top_actions(0.28, POT_ODDS, Street.FLOP, 9)
        labels = [o.label for o in options]
        assert "CALL (Drawing)" in labels
        assert "FOLD" in labels

    def test_every_option_explained(self):
        hs = analyze_hand_strength(cards("As Ks"))
        for option in get_top_actions(0.45, POT_ODDS, Street.PREFLOP, 0, hs):
            assert option.reasoning


class TestReasoning:
    """Tests for build_reasoning."""

    def test_fold_mentions_pot_odds(self):
        text = build_reasoning(Action.FOLD, 0.2, POT_ODDS, None, 0, no_bet=False)
        assert "20.0%" in text
        assert "33.3%" in text

    def test_nutted_raise(self):
        hs = analyze_hand_strength(cards("As Ks"), cards("Qs Js Ts"))
        text = build_reasoning(Action.RAISE, 0.99, POT_ODDS, hs, 0, no_bet=False)
        assert "nuts" in text
