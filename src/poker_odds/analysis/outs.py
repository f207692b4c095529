"""Drawing-card detection and clean/dirty out tagging.

Draws are only defined on the flop and the turn. Each detector returns an
OutInfo listing the unseen cards that complete the draw; backdoor draws
need two running cards and carry a weighted count instead of cards.

Straight windows follow the first-window rule: five-rank windows are
scanned from the wheel (A-5) up to broadway (T-A); the first open-ended
window wins, and a gutshot is only reported when it is found before any
open-ended draw. At most one of each is reported so overlapping windows
are never double counted.
"""

import random
from collections import Counter
from itertools import combinations
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from poker_odds import config
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import DrawType, OutInfo, OutsTotals
from poker_odds.models.card import Card, Suit
from poker_odds.models.game import GameVariant
from poker_odds.simulation.deck import create_deck, get_rng, remove_cards
from poker_odds.simulation.evaluator import HandEvaluator, HandRank, straight_high

logger = get_logger(__name__)

BACKDOOR_FLUSH_WEIGHT = 1.5
BACKDOOR_STRAIGHT_WEIGHT = 1.0


def calculate_outs(
    hole: Sequence[Card],
    board: Sequence[Card],
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    rng: Optional[random.Random] = None,
) -> List[OutInfo]:
    """Find every draw the hero has and tag each as clean or dirty.

    Args:
        hole: Hero hole cards.
        board: Board cards; outs are empty unless 3 or 4.
        variant: Game variant.
        rng: Random generator for sampling opponent holdings.

    Returns:
        Draws in detection order: flush, backdoor flush, straights,
        backdoor straight, overcards, set, full house.
    """
    if len(board) not in (3, 4):
        return []

    hole, board = list(hole), list(board)
    remaining = remove_cards(create_deck(variant), hole + board)
    current = HandRank(HandEvaluator.key(hole, board, variant)[0])
    is_flop = len(board) == 3

    draws: List[OutInfo] = []

    if current < HandRank.FLUSH:
        flush = _flush_draw(hole, board, remaining, variant)
        if flush:
            draws.append(flush)
        if is_flop:
            backdoor = _backdoor_flush_draw(hole, board, variant)
            if backdoor:
                draws.append(backdoor)

    if current < HandRank.STRAIGHT:
        straights = _straight_draws(hole, board, remaining, variant)
        draws.extend(straights)
        if is_flop and not straights:
            backdoor = _backdoor_straight_draw(hole, board, variant)
            if backdoor:
                draws.append(backdoor)

    for detector in (_overcards, _set_draw, _full_house_draw):
        draw = detector(hole, board, remaining, current, variant)
        if draw:
            draws.append(draw)

    rng = get_rng(rng)
    tagged = [replace(d, is_clean=is_out_clean(d, hole, board, variant, rng)) for d in draws]
    logger.debug("Outs for %s on %s: %s", hole, board,
                 ", ".join(f"{d.draw_type.value}={d.count}" for d in tagged) or "none")
    return tagged


def _suited_count(hole: Sequence[Card], board: Sequence[Card], suit: Suit,
                  variant: GameVariant) -> int:
    """Cards of ``suit`` that can play together in one hand."""
    in_hole = sum(1 for c in hole if c.suit == suit)
    on_board = sum(1 for c in board if c.suit == suit)
    if variant.is_omaha:
        # Omaha flushes need exactly two suited hole cards
        return on_board + 2 if in_hole >= 2 else 0
    return in_hole + on_board


def _flush_draw(hole, board, remaining, variant) -> Optional[OutInfo]:
    for suit in Suit:
        if _suited_count(hole, board, suit, variant) == 4:
            outs = tuple(c for c in remaining if c.suit == suit)
            return OutInfo(DrawType.FLUSH_DRAW, outs, len(outs))
    return None


def _backdoor_flush_draw(hole, board, variant) -> Optional[OutInfo]:
    for suit in Suit:
        if (_suited_count(hole, board, suit, variant) == 3
                and any(c.suit == suit for c in hole)):
            return OutInfo(DrawType.BACKDOOR_FLUSH_DRAW, (), BACKDOOR_FLUSH_WEIGHT)
    return None


def _live_by_value(remaining: Sequence[Card]) -> Dict[int, List[Card]]:
    """Unseen cards grouped by rank value; an Ace also counts as 1."""
    live: Dict[int, List[Card]] = {}
    for c in remaining:
        live.setdefault(c.value, []).append(c)
    live[1] = live.get(14, [])
    return live


def _present_values(cards: Sequence[Card]) -> set:
    present = {c.value for c in cards}
    if 14 in present:
        present.add(1)
    return present


def _makes_omaha_straight(hole, board, card) -> bool:
    """Whether two hole cards and three board cards form a straight once ``card`` lands."""
    new_board = list(board) + [card]
    return any(straight_high(c.value for c in pair + trio)
               for pair in combinations(hole, 2)
               for trio in combinations(new_board, 3))


def _straight_draws(hole, board, remaining, variant) -> List[OutInfo]:
    present = _present_values(list(hole) + list(board))
    live = _live_by_value(remaining)

    def completing_cards(value: int) -> List[Card]:
        cards = live.get(value, [])
        if variant.is_omaha:
            # Rank windows pool all four hole cards; only two may play
            cards = [c for c in cards if _makes_omaha_straight(hole, board, c)]
        return cards

    open_ended: Optional[OutInfo] = None
    gutshot: Optional[OutInfo] = None

    for high in range(5, 15):
        low = high - 4
        missing = [v for v in range(low, high + 1) if v not in present]
        if len(missing) != 1:
            continue
        gap = missing[0]
        completing = completing_cards(gap)
        if not completing:
            continue

        if open_ended is None and gap in (low, high):
            # The rank one step past the opposite end also completes the run
            beyond = high + 1 if gap == low else low - 1
            other_side = completing_cards(beyond) if beyond not in present else []
            if other_side:
                outs = tuple(completing) + tuple(other_side)
                open_ended = OutInfo(DrawType.OPEN_ENDED_STRAIGHT_DRAW, outs, len(outs))
                continue

        if gutshot is None and open_ended is None:
            gutshot = OutInfo(DrawType.GUTSHOT_STRAIGHT_DRAW, tuple(completing), len(completing))

    return [d for d in (open_ended, gutshot) if d is not None]


def _backdoor_straight_draw(hole, board, variant) -> Optional[OutInfo]:
    present = _present_values(list(hole) + list(board))
    hole_values = _present_values(hole)
    board_values = _present_values(board)
    for high in range(5, 15):
        window = set(range(high - 4, high + 1))
        if variant.is_omaha:
            # Two window ranks from the hole and one more from the board
            found = (len(window & hole_values) >= 2
                     and bool((window & board_values) - hole_values))
        else:
            found = len(window & present) == 3 and bool(window & hole_values)
        if found:
            return OutInfo(DrawType.BACKDOOR_STRAIGHT_DRAW, (), BACKDOOR_STRAIGHT_WEIGHT)
    return None


def _overcards(hole, board, remaining, current, variant) -> Optional[OutInfo]:
    if current > HandRank.ONE_PAIR:
        return None
    board_high = max(c.value for c in board)
    over_ranks = {c.rank for c in hole if c.value > board_high}
    outs = tuple(c for c in remaining if c.rank in over_ranks)
    if not outs:
        return None
    return OutInfo(DrawType.OVERCARDS, outs, len(outs))


def _set_draw(hole, board, remaining, current, variant) -> Optional[OutInfo]:
    if current >= HandRank.THREE_OF_A_KIND:
        return None
    pocket_ranks = {rank for rank, n in Counter(c.rank for c in hole).items() if n >= 2}
    outs = tuple(c for c in remaining if c.rank in pocket_ranks)
    if not outs:
        return None
    return OutInfo(DrawType.SET_DRAW, outs, len(outs))


def _full_house_draw(hole, board, remaining, current, variant) -> Optional[OutInfo]:
    if current != HandRank.THREE_OF_A_KIND:
        return None
    outs = tuple(c for c in remaining
                 if HandEvaluator.key(hole, board + [c], variant)[0] > current)
    if not outs:
        return None
    return OutInfo(DrawType.FULL_HOUSE_DRAW, outs, len(outs))


def is_out_clean(
    draw: OutInfo,
    hole: Sequence[Card],
    board: Sequence[Card],
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    rng: Optional[random.Random] = None,
) -> bool:
    """Decide whether a draw's outs are safe to count.

    Up to DIRTY_OUT_SAMPLE_SIZE out cards are checked, each against
    DIRTY_OPPONENT_SAMPLE_SIZE random opponent holdings. An out is dirty
    when more than DIRTY_OPPONENT_THRESHOLD of those opponents improve to
    at least the hero's new hand. The draw is clean when fewer than half
    of the checked outs are dirty. This is a fixed-budget approximation;
    enumerating every opponent holding would be exact but slower.
    """
    if not draw.outs:
        return True

    rng = get_rng(rng)
    hole, board = list(hole), list(board)
    hole_count = variant.hole_card_count
    checked = draw.outs[:config.DIRTY_OUT_SAMPLE_SIZE]
    dirty = 0

    for out in checked:
        new_board = board + [out]
        hero_new = HandEvaluator.key(hole, new_board, variant)[0]
        pool = remove_cards(create_deck(variant), hole + new_board)
        tests = min(config.DIRTY_OPPONENT_SAMPLE_SIZE, len(pool) // hole_count)
        if tests == 0:
            continue
        dealt = rng.sample(pool, tests * hole_count)

        improved = 0
        for i in range(tests):
            opp = dealt[i * hole_count:(i + 1) * hole_count]
            old = HandEvaluator.key(opp, board, variant)[0]
            new = HandEvaluator.key(opp, new_board, variant)[0]
            if new > old and new >= hero_new:
                improved += 1

        if improved / tests > config.DIRTY_OPPONENT_THRESHOLD:
            dirty += 1

    return dirty < len(checked) / 2


def get_total_outs(outs: Sequence[OutInfo]) -> OutsTotals:
    """Count distinct out cards; a card clean in any draw counts as clean."""
    clean = set()
    dirty = set()
    for draw in outs:
        (clean if draw.is_clean else dirty).update(draw.outs)
    dirty -= clean
    return OutsTotals(clean=len(clean), dirty=len(dirty))


def primary_draw(outs: Sequence[OutInfo]) -> Optional[OutInfo]:
    """The draw with the most outs; the earliest one wins ties."""
    if not outs:
        return None
    return max(outs, key=lambda d: d.count)
