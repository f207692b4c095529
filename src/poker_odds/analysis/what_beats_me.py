"""Exhaustive enumeration of opponent holdings that beat the hero."""

from typing import Dict, List, Sequence

from poker_odds import config
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import BeatingHandGroup, WhatBeatsMeResult
from poker_odds.models.card import Card
from poker_odds.models.game import GameVariant
from poker_odds.simulation.deck import create_deck, remove_cards
from poker_odds.simulation.evaluator import HandEvaluator, HandRank, iter_holding_keys
from poker_odds.strategy.ranges import get_default_range, is_hand_in_range

logger = get_logger(__name__)


def analyze_what_beats_me(
    hole: Sequence[Card],
    board: Sequence[Card],
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
) -> WhatBeatsMeResult:
    """Count every opponent holding that beats the hero right now.

    Every combination of unseen cards is scored against the hero's current
    hand; strictly better holdings are grouped by hand category. This is
    exact combinatorics, not sampling.

    Args:
        hole: Hero hole cards.
        board: Board cards; the result is empty before the flop.
        variant: Game variant.

    Returns:
        WhatBeatsMeResult with groups sorted by probability, then name.
    """
    if len(board) < 3:
        return WhatBeatsMeResult()

    hole, board = list(hole), list(board)
    hero_key = HandEvaluator.key(hole, board, variant)
    remaining = remove_cards(create_deck(variant), hole + board)

    combos: Dict[HandRank, int] = {}
    examples: Dict[HandRank, List[tuple]] = {}
    total = 0
    beating = 0

    for holding, key in iter_holding_keys(remaining, board, variant):
        total += 1
        if key <= hero_key:
            continue
        beating += 1
        rank = HandRank(key[0])
        combos[rank] = combos.get(rank, 0) + 1
        kept = examples.setdefault(rank, [])
        if len(kept) < config.EXAMPLE_HOLDINGS_PER_GROUP:
            kept.append(holding)

    if total == 0:
        return WhatBeatsMeResult()

    groups = [
        BeatingHandGroup(
            hand_name=rank.display_name,
            combos=count,
            probability=count / total,
            example_holdings=tuple(examples[rank]),
        )
        for rank, count in combos.items()
    ]
    groups.sort(key=lambda g: (-g.probability, g.hand_name))

    logger.debug("%d of %d opponent holdings beat %s", beating, total, hole)
    return WhatBeatsMeResult(
        beating_groups=tuple(groups),
        total_beating_combos=beating,
        total_possible_combos=total,
        beating_probability=beating / total,
    )


def in_range_examples(group: BeatingHandGroup,
                      variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> List[tuple]:
    """Example holdings of a group that a typical opener would play."""
    opening = get_default_range(variant)
    return [h for h in group.example_holdings if is_hand_in_range(h, opening)]
