"""Data models for poker odds analysis."""

from poker_odds.models.card import Card, Rank, Suit, parse_cards
from poker_odds.models.game import GameVariant, Street, get_street
from poker_odds.models.analysis import (
    DrawType, OutInfo, OutsTotals, BoardTexture, DrawStrength,
    HandStrengthCategory, Kicker, HandStrengthInfo, HandStrengthSummary,
    BeatingHandGroup, WhatBeatsMeResult, HandOddsEntry, EquityResult,
    Action, Confidence, Recommendation, ActionOption,
    AnalysisRequest, AnalysisResult, RecognitionResult,
)

__all__ = [
    "Card", "Rank", "Suit", "parse_cards",
    "GameVariant", "Street", "get_street",
    "DrawType", "OutInfo", "OutsTotals", "BoardTexture", "DrawStrength",
    "HandStrengthCategory", "Kicker", "HandStrengthInfo", "HandStrengthSummary",
    "BeatingHandGroup", "WhatBeatsMeResult", "HandOddsEntry", "EquityResult",
    "Action", "Confidence", "Recommendation", "ActionOption",
    "AnalysisRequest", "AnalysisResult", "RecognitionResult",
]
