"""Analysis engine: validation, outs, hand strength and opponent ranges."""

from poker_odds.analysis.validation import ValidationResult, validate_cards, is_valid_card
from poker_odds.analysis.pot_odds import (
    calculate_pot_odds, format_pot_odds_ratio, calculate_implied_odds,
)
from poker_odds.analysis.board import analyze_board_texture
from poker_odds.analysis.outs import calculate_outs, get_total_outs
from poker_odds.analysis.strength import analyze_hand_strength, analyze_draw_strength
from poker_odds.analysis.what_beats_me import analyze_what_beats_me
from poker_odds.analysis.analyzer import HandAnalyzer, analyze_hand

__all__ = [
    "ValidationResult", "validate_cards", "is_valid_card",
    "calculate_pot_odds", "format_pot_odds_ratio", "calculate_implied_odds",
    "analyze_board_texture", "calculate_outs", "get_total_outs",
    "analyze_hand_strength", "analyze_draw_strength",
    "analyze_what_beats_me", "HandAnalyzer", "analyze_hand",
]
