"""Output formatting for the terminal."""

from poker_odds.formatters.table import TableFormatter

__all__ = ["TableFormatter"]
