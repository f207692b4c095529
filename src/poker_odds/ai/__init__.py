"""Clients for the external explanation and card recognition services."""

from poker_odds.ai.client import AIClient
from poker_odds.ai.explainer import ExplanationGenerator
from poker_odds.ai.recognizer import CardRecognizer

__all__ = ["AIClient", "ExplanationGenerator", "CardRecognizer"]
