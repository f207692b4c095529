"""Action recommendations, explanations and opening ranges."""

from poker_odds.strategy.decision import (
    get_recommendation, get_top_actions, adjust_confidence, build_reasoning,
)
from poker_odds.strategy.explanation import generate_explanation
from poker_odds.strategy.ranges import get_default_range, is_hand_in_range

__all__ = [
    "get_recommendation", "get_top_actions", "adjust_confidence", "build_reasoning",
    "generate_explanation", "get_default_range", "is_hand_in_range",
]
