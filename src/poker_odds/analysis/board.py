"""Board texture classification."""

from collections import Counter
from functools import lru_cache
from typing import Sequence, Tuple

from poker_odds.models.analysis import BoardTexture
from poker_odds.models.card import Card

PREFLOP_TEXTURE = BoardTexture(
    is_wet=False,
    is_dry=True,
    is_paired=False,
    flush_possible=False,
    flush_draw_possible=False,
    straight_possible=False,
    high_card=0,
    description="Preflop",
)

# Wetness score at or above which a board is wet, at or below which dry
WET_SCORE = 4
DRY_SCORE = 2


def analyze_board_texture(board: Sequence[Card]) -> BoardTexture:
    """Classify how many draws a board allows.

    Texture depends only on the set of board cards, so results are cached.
    """
    return _texture(tuple(sorted(board, key=lambda c: (c.value, c.suit.value))))


@lru_cache(maxsize=4096)
def _texture(board: Tuple[Card, ...]) -> BoardTexture:
    if not board:
        return PREFLOP_TEXTURE

    ranks = [c.value for c in board]
    rank_counts = Counter(ranks)
    is_paired = any(n >= 2 for n in rank_counts.values())

    max_suited = max(Counter(c.suit for c in board).values())
    flush_possible = max_suited >= 3
    flush_draw_possible = max_suited >= 2

    unique = sorted(rank_counts)
    with_low_ace = ([1] if 14 in rank_counts else []) + unique
    # Three distinct ranks inside one five-rank span
    straight_possible = any(
        with_low_ace[i + 2] - with_low_ace[i] <= 4
        for i in range(len(with_low_ace) - 2)
    )

    high_card = max(ranks)

    wetness = 0
    if flush_draw_possible:
        wetness += 2
    if flush_possible:
        wetness += 2
    if straight_possible:
        wetness += 2
    if not is_paired:
        wetness += 1
    wetness += sum(1 for lo, hi in zip(unique, unique[1:]) if hi - lo <= 2)

    is_wet = wetness >= WET_SCORE
    is_dry = wetness <= DRY_SCORE

    notes = []
    if is_paired:
        notes.append("paired")
    if flush_possible:
        notes.append("flush-complete")
    elif flush_draw_possible:
        notes.append("flush-draw possible")
    if straight_possible:
        notes.append("connected")
    if high_card >= 12:
        notes.append("high-card heavy")
    if high_card <= 8:
        notes.append("low")

    texture = "Wet" if is_wet else "Dry" if is_dry else "Medium"
    description = f"{texture} board ({', '.join(notes)})" if notes else f"{texture} board"

    return BoardTexture(
        is_wet=is_wet,
        is_dry=is_dry,
        is_paired=is_paired,
        flush_possible=flush_possible,
        flush_draw_possible=flush_draw_possible,
        straight_possible=straight_possible,
        high_card=high_card,
        description=description,
    )
