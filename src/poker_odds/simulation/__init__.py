"""Card-game simulation: deck, hand evaluation and Monte Carlo estimates."""

from poker_odds.simulation.deck import Deck, create_deck, remove_cards, shuffle, deal
from poker_odds.simulation.evaluator import (
    HandEvaluator, HandRank, EvaluatedHand,
    evaluate_hand, hand_key, compare_hands, get_hand_name,
)
from poker_odds.simulation.equity import simulate_equity, calculate_equity
from poker_odds.simulation.hand_odds import calculate_hand_odds

__all__ = [
    "Deck", "create_deck", "remove_cards", "shuffle", "deal",
    "HandEvaluator", "HandRank", "EvaluatedHand",
    "evaluate_hand", "hand_key", "compare_hands", "get_hand_name",
    "simulate_equity", "calculate_equity", "calculate_hand_odds",
]
