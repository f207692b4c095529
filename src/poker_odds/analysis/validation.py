"""Input validation for card codes."""

from dataclasses import dataclass, field
from typing import List, Sequence

from poker_odds.errors import InvalidCardsError
from poker_odds.models.card import Rank, Suit
from poker_odds.models.game import GameVariant, VALID_BOARD_SIZES

_ALL_RANKS = {r.value for r in Rank}
_ALL_SUITS = {s.value for s in Suit}


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise InvalidCardsError carrying every problem found."""
        if not self.valid:
            raise InvalidCardsError(self.errors)


def validate_cards(
    hole_codes: Sequence[str],
    board_codes: Sequence[str],
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
) -> ValidationResult:
    """Check hole and board card codes before any analysis runs.

    Problems are collected rather than raised so a caller can fix them all
    at once.

    Args:
        hole_codes: Hole card codes such as "Ah".
        board_codes: Board card codes.
        variant: Game variant deciding hole count and legal ranks.

    Returns:
        ValidationResult listing every error.
    """
    errors: List[str] = []

    expected = variant.hole_card_count
    if len(hole_codes) != expected:
        errors.append(
            f"Expected {expected} hole cards for {variant.value}, got {len(hole_codes)}"
        )

    if len(board_codes) not in VALID_BOARD_SIZES:
        errors.append(f"Board must have 0, 3, 4, or 5 cards, got {len(board_codes)}")

    all_codes = list(hole_codes) + list(board_codes)
    valid_ranks = {r.value for r in variant.ranks}

    for code in all_codes:
        if not isinstance(code, str) or len(code) != 2:
            errors.append(f'Invalid card format: "{code}"')
            continue
        rank, suit = code[0], code[1]
        if rank not in valid_ranks:
            errors.append(f'Invalid rank "{rank}" in card "{code}"')
        if suit not in _ALL_SUITS:
            errors.append(f'Invalid suit "{suit}" in card "{code}"')

    seen = set()
    for code in all_codes:
        if not isinstance(code, str):
            continue
        if code in seen:
            errors.append(f"Duplicate card detected: {code}")
        seen.add(code)

    return ValidationResult(valid=not errors, errors=errors)


def is_valid_card(code: str) -> bool:
    """True for a well-formed code of any standard rank and suit."""
    return (isinstance(code, str) and len(code) == 2
            and code[0] in _ALL_RANKS and code[1] in _ALL_SUITS)
