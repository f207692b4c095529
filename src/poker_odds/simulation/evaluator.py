"""Hand evaluation for poker simulation."""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import Iterable, Iterator, Sequence, Tuple

from poker_odds.errors import EvaluationError
from poker_odds.models.card import Card, RANK_NAMES, plural_rank_name
from poker_odds.models.game import GameVariant


class HandRank(IntEnum):
    """Hand rankings from worst to best."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def display_name(self) -> str:
        return _RANK_DISPLAY_NAMES[self]


_RANK_DISPLAY_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}

# (hand rank, tie-break values); tuples compare the way hands do
HandKey = Tuple[int, Tuple[int, ...]]


@dataclass(frozen=True)
class EvaluatedHand:
    """Best hand made from a card pool.

    ``values`` lists the hand-defining ranks in descending importance
    followed by kickers, e.g. two pair K-5 with a Q kicker is (13, 5, 12).
    """
    rank: HandRank
    values: Tuple[int, ...]
    cards: Tuple[Card, ...]

    @property
    def key(self) -> HandKey:
        return (int(self.rank), self.values)

    @property
    def name(self) -> str:
        return self.rank.display_name

    @property
    def description(self) -> str:
        return describe(self.rank, self.values)


def describe(rank: HandRank, values: Tuple[int, ...]) -> str:
    """Human description such as 'Pair of Aces'."""
    if not values:
        return rank.display_name
    top = values[0]
    if rank == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if rank == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {RANK_NAMES[top]} High"
    if rank == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {plural_rank_name(top)}"
    if rank == HandRank.FULL_HOUSE:
        return f"Full House, {plural_rank_name(top)} over {plural_rank_name(values[1])}"
    if rank == HandRank.FLUSH:
        return f"Flush, {RANK_NAMES[top]} High"
    if rank == HandRank.STRAIGHT:
        return f"Straight, {RANK_NAMES[top]} High"
    if rank == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {plural_rank_name(top)}"
    if rank == HandRank.TWO_PAIR:
        return f"Two Pair, {plural_rank_name(top)} and {plural_rank_name(values[1])}"
    if rank == HandRank.ONE_PAIR:
        return f"Pair of {plural_rank_name(top)}"
    return f"{RANK_NAMES[top]} High"


def straight_high(values: Iterable[int]) -> int:
    """Highest card of the best straight in ``values``, 0 if none.

    An Ace also plays low, so A-2-3-4-5 returns 5.
    """
    present = set(values)
    if 14 in present:
        present.add(1)
    for high in range(14, 4, -1):
        if (high in present and high - 1 in present and high - 2 in present
                and high - 3 in present and high - 4 in present):
            return high
    return 0


def score_cards(cards: Sequence[Card]) -> HandKey:
    """Score any pool of cards as its best five-card hand.

    Pools under five cards only score pairs, trips and quads.
    """
    values = sorted((c.rank.numeric_value for c in cards), reverse=True)

    flush_values = None
    if len(values) >= 5:
        by_suit = {}
        for c in cards:
            by_suit.setdefault(c.suit, []).append(c.rank.numeric_value)
        for suited in by_suit.values():
            if len(suited) >= 5:
                flush_values = sorted(suited, reverse=True)
                break
        if flush_values:
            high = straight_high(flush_values)
            if high == 14:
                return (HandRank.ROYAL_FLUSH, (14,))
            if high:
                return (HandRank.STRAIGHT_FLUSH, (high,))

    counts = Counter(values)
    groups = sorted(counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    top_rank, top_count = groups[0]

    if top_count == 4:
        kickers = [v for v in values if v != top_rank][:1]
        return (HandRank.FOUR_OF_A_KIND, (top_rank, *kickers))

    if top_count == 3 and len(groups) > 1 and groups[1][1] >= 2:
        return (HandRank.FULL_HOUSE, (top_rank, groups[1][0]))

    if flush_values:
        return (HandRank.FLUSH, tuple(flush_values[:5]))

    if len(counts) >= 5:
        high = straight_high(counts)
        if high:
            return (HandRank.STRAIGHT, (high,))

    if top_count == 3:
        kickers = [v for v in values if v != top_rank][:2]
        return (HandRank.THREE_OF_A_KIND, (top_rank, *kickers))

    if top_count == 2 and len(groups) > 1 and groups[1][1] == 2:
        second = groups[1][0]
        kickers = [v for v in values if v != top_rank and v != second][:1]
        return (HandRank.TWO_PAIR, (top_rank, second, *kickers))

    if top_count == 2:
        kickers = [v for v in values if v != top_rank][:3]
        return (HandRank.ONE_PAIR, (top_rank, *kickers))

    return (HandRank.HIGH_CARD, tuple(values[:5]))


def _check_cards(hole: Sequence[Card], board: Sequence[Card], variant: GameVariant):
    """Fail fast on card sets no legal deal can produce."""
    expected = variant.hole_card_count
    if len(hole) != expected:
        raise EvaluationError(
            f"{variant.label} hands need {expected} hole cards, got {len(hole)}"
        )
    if len(board) > 5:
        raise EvaluationError(f"Board can hold at most 5 cards, got {len(board)}")
    pool = list(hole) + list(board)
    if len(set(pool)) != len(pool):
        dupes = sorted(repr(c) for c, n in Counter(pool).items() if n > 1)
        raise EvaluationError(f"Duplicate cards in hand: {', '.join(dupes)}")


def _candidate_hands(hole: Sequence[Card], board: Sequence[Card],
                     variant: GameVariant) -> Iterable[Tuple[Card, ...]]:
    """Every five-card hand the variant allows the player to show."""
    if variant.is_omaha:
        # Exactly two hole cards and exactly three board cards
        if len(board) < 3:
            return combinations(hole, 2)
        return (pair + trio
                for pair in combinations(hole, 2)
                for trio in combinations(board, 3))
    pool = tuple(hole) + tuple(board)
    if len(pool) <= 5:
        return [pool]
    return combinations(pool, 5)


class HandEvaluator:
    """Evaluates poker hands."""

    @staticmethod
    def evaluate(hole: Sequence[Card], board: Sequence[Card] = (),
                 variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> EvaluatedHand:
        """Evaluate the best hand a player can show.

        Args:
            hole: The player's hole cards (2, or 4 for Omaha).
            board: Community cards (0-5).
            variant: Game variant; Omaha must use exactly two hole cards.

        Returns:
            The best EvaluatedHand.

        Raises:
            EvaluationError: On wrong hole count, oversized board or duplicates.
        """
        _check_cards(hole, board, variant)

        best_key = None
        best_cards: Tuple[Card, ...] = ()
        for combo in _candidate_hands(hole, board, variant):
            key = score_cards(combo)
            if best_key is None or key > best_key:
                best_key = key
                best_cards = tuple(combo)

        return EvaluatedHand(HandRank(best_key[0]), best_key[1], best_cards)

    @staticmethod
    def key(hole: Sequence[Card], board: Sequence[Card] = (),
            variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> HandKey:
        """Comparison key of the best hand, cheaper than evaluate().

        Orders hands exactly like evaluate() does.
        """
        _check_cards(hole, board, variant)
        if variant.is_omaha:
            return max(score_cards(combo)
                       for combo in _candidate_hands(hole, board, variant))
        return score_cards(tuple(hole) + tuple(board))

    @staticmethod
    def compare(hand1: EvaluatedHand, hand2: EvaluatedHand) -> int:
        """Compare two evaluated hands.

        Returns:
            1 if hand1 wins, -1 if hand2 wins, 0 if tie.
        """
        if hand1.key > hand2.key:
            return 1
        if hand1.key < hand2.key:
            return -1
        return 0

    @staticmethod
    def compare_hands(hole1: Sequence[Card], hole2: Sequence[Card],
                      board: Sequence[Card],
                      variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> int:
        """Compare two holdings on the same board (1, 0 or -1)."""
        key1 = HandEvaluator.key(hole1, board, variant)
        key2 = HandEvaluator.key(hole2, board, variant)
        return (key1 > key2) - (key1 < key2)

    @staticmethod
    def get_hand_name(hole: Sequence[Card], board: Sequence[Card] = (),
                      variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> str:
        """Name the current hand; preflop names describe the hole cards."""
        if len(board) == 0:
            _check_cards(hole, board, variant)
            if len(hole) != 2:
                return f"{variant.label} Starting Hand"
            high, low = sorted(hole, key=lambda c: c.rank.numeric_value, reverse=True)
            if high.rank == low.rank:
                return f"Pocket {high.rank.plural_name}"
            suited = "suited" if high.suit == low.suit else "offsuit"
            return f"{high.rank.display_name}-{low.rank.display_name} {suited}"
        return HandEvaluator.evaluate(hole, board, variant).description


def iter_holding_keys(remaining: Sequence[Card], board: Sequence[Card],
                      variant: GameVariant = GameVariant.TEXAS_HOLDEM
                      ) -> Iterator[Tuple[Tuple[Card, ...], HandKey]]:
    """Yield every possible opponent holding with its hand key.

    ``remaining`` must already exclude every known card. Omaha holdings
    are scored through a cache of the best hand per hole-card pair, since a
    four-card holding's best hand is the best of its six pairs.
    """
    hole_count = variant.hole_card_count
    board = tuple(board)

    if not variant.is_omaha:
        for combo in combinations(remaining, hole_count):
            yield combo, score_cards(combo + board)
        return

    cards = list(remaining)
    trios = list(combinations(board, 3)) if len(board) >= 3 else [()]
    pair_keys = {}
    for i, j in combinations(range(len(cards)), 2):
        pair = (cards[i], cards[j])
        pair_keys[i, j] = max(score_cards(pair + trio) for trio in trios)

    for idx in combinations(range(len(cards)), hole_count):
        best = max(pair_keys[p] for p in combinations(idx, 2))
        yield tuple(cards[i] for i in idx), best


evaluate_hand = HandEvaluator.evaluate
hand_key = HandEvaluator.key
compare_hands = HandEvaluator.compare_hands
get_hand_name = HandEvaluator.get_hand_name
