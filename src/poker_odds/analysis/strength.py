"""Qualitative hand strength.

Preflop hands are sorted into starting-hand tiers. After the flop the
evaluated hand rank selects one classifier per rank, and each classifier
looks at how the hand is made: concealed sets versus board trips, nut
versus non-nut flushes and straights, top versus bottom pair.
"""

from collections import Counter
from itertools import combinations
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from poker_odds.analysis.board import analyze_board_texture
from poker_odds.models.analysis import (
    BoardTexture, DrawStrength, DrawType, HandStrengthCategory, HandStrengthInfo,
    Kicker, OutInfo,
)
from poker_odds.models.card import Card, RANK_NAMES, plural_rank_name
from poker_odds.models.game import GameVariant
from poker_odds.simulation.deck import create_deck, remove_cards
from poker_odds.simulation.evaluator import EvaluatedHand, HandEvaluator, HandRank

Category = HandStrengthCategory


def _info(category: Category, label: str, description: str, vulnerability: float,
          kicker: Kicker, texture: BoardTexture, is_nutted: bool = False,
          draw: Optional[DrawStrength] = None) -> HandStrengthInfo:
    return HandStrengthInfo(
        category=category,
        label=label,
        description=description,
        vulnerability=min(1.0, max(0.0, vulnerability)),
        kicker=kicker,
        board_texture=texture,
        is_nutted=is_nutted,
        draw_strength=draw,
    )


def _values(cards: Sequence[Card]) -> List[int]:
    return [c.value for c in cards]


def _pocket_ranks(hole: Sequence[Card]) -> List[int]:
    """Rank values held at least twice in the hole, highest first."""
    counts = Counter(_values(hole))
    return sorted((v for v, n in counts.items() if n >= 2), reverse=True)


def analyze_draw_strength(hole: Sequence[Card], board: Sequence[Card],
                          outs: Sequence[OutInfo]) -> Optional[DrawStrength]:
    """Grade the first flush or straight draw found in ``outs``.

    Returns:
        DrawStrength, or None when there is no such draw.
    """
    for draw in outs:
        if draw.draw_type == DrawType.FLUSH_DRAW and draw.outs:
            suit = draw.outs[0].suit
            top = max((c.value for c in hole if c.suit == suit), default=0)
            on_board = {c.value for c in board if c.suit == suit}
            nut = max(v for v in range(2, 15) if v not in on_board)
            if top == nut:
                return DrawStrength(True, "Nut Flush Draw", 1.3)
            if top >= 12:
                return DrawStrength(False, "Strong Flush Draw", 1.15)
            return DrawStrength(False, "Weak Flush Draw", 0.8)

        if draw.draw_type in (DrawType.OPEN_ENDED_STRAIGHT_DRAW,
                              DrawType.GUTSHOT_STRAIGHT_DRAW):
            open_ended = draw.draw_type == DrawType.OPEN_ENDED_STRAIGHT_DRAW
            name = "OESD" if open_ended else "Gutshot"
            hole_max = max(_values(hole))
            # Holding the top of the run usually means drawing to the nuts
            if hole_max >= max(_values(list(hole) + list(board))) or hole_max >= 13:
                return DrawStrength(True, f"Nut {name}", 1.2 if open_ended else 1.0)
            return DrawStrength(False, f"Weak {name}", 0.95 if open_ended else 0.75)

    return None


# Preflop

def _preflop_strength(hole: Sequence[Card], variant: GameVariant) -> HandStrengthInfo:
    texture = analyze_board_texture(())
    if variant.is_omaha:
        return _omaha_preflop_strength(hole, texture)

    high, low = sorted(_values(hole), reverse=True)
    suited = hole[0].suit == hole[1].suit
    gap = high - low
    pair_name = plural_rank_name(high)

    if high == low:
        if high >= 13:
            return _info(Category.PREMIUM, f"Premium Pair ({pair_name})",
                         f"Pocket {pair_name}, a top-tier starting hand. Play aggressively.",
                         0.1, Kicker.NA, texture, is_nutted=high == 14)
        if high >= 10:
            return _info(Category.STRONG, f"Strong Pair ({pair_name})",
                         f"Pocket {pair_name}, strong but vulnerable to overcards on the flop.",
                         0.25, Kicker.NA, texture)
        if high >= 7:
            return _info(Category.GOOD, f"Medium Pair ({pair_name})",
                         f"Pocket {pair_name}, a set-mining hand. Strong if you hit a set, "
                         "vulnerable otherwise.",
                         0.4, Kicker.NA, texture)
        return _info(Category.MARGINAL, f"Small Pair ({pair_name})",
                     f"Pocket {pair_name}, a weak pair preflop. Best used for set-mining.",
                     0.55, Kicker.NA, texture)

    if high == 14 and low >= 12:
        return _info(Category.STRONG,
                     "Premium Suited Broadway" if suited else "Premium Broadway",
                     f"Big broadway cards{' suited' if suited else ''}. Strong top-pair "
                     "potential with a dominant kicker.",
                     0.3, Kicker.STRONG, texture)

    if high >= 12 and low >= 11 and gap <= 2:
        return _info(Category.GOOD, "Suited Broadway" if suited else "Broadway Cards",
                     f"Connected high cards{' with flush potential' if suited else ''}. "
                     "Good top-pair and straight potential.",
                     0.35, Kicker.STRONG if low >= 12 else Kicker.WEAK, texture)

    if high == 14 and suited:
        return _info(Category.GOOD, "Suited Ace",
                     "Suited Ace with nut flush potential and top pair with the best kicker.",
                     0.35, Kicker.STRONG if low >= 10 else Kicker.WEAK, texture)

    if suited and gap <= 2 and low >= 6:
        return _info(Category.GOOD, "Suited Connector",
                     "Suited connector with flush and straight potential. Plays well in position.",
                     0.45, Kicker.WEAK, texture)

    if high == 14:
        decent = low >= 10
        return _info(Category.MARGINAL, "Offsuit Ace",
                     f"Ace with a {'decent' if decent else 'weak'} kicker. Top-pair potential "
                     "but kicker problems likely.",
                     0.4 if decent else 0.55, Kicker.STRONG if decent else Kicker.WEAK, texture)

    if gap <= 2 and low >= 5:
        return _info(Category.MARGINAL, "Connected Cards",
                     "Connected cards with straight potential, but limited flush potential.",
                     0.5, Kicker.WEAK, texture)

    if high >= 10 or suited:
        return _info(Category.WEAK, "Weak Suited" if suited else "Weak High Card",
                     "A weak starting hand. Difficult to make strong hands post-flop.",
                     0.65, Kicker.WEAK, texture)

    return _info(Category.TRASH, "Trash Hand",
                 "Very weak starting hand. Fold in most situations.",
                 0.8, Kicker.WEAK, texture)


def _omaha_preflop_strength(hole: Sequence[Card], texture: BoardTexture) -> HandStrengthInfo:
    values = sorted(_values(hole), reverse=True)
    rank_counts = Counter(values)
    suit_counts = Counter(c.suit for c in hole)
    double_suited = sorted(suit_counts.values()) == [2, 2]
    ace_suited = any(c.value == 14 and suit_counts[c.suit] >= 2 for c in hole)
    pairs = _pocket_ranks(hole)
    distinct = sorted(set(values), reverse=True)
    rundown = len(distinct) == 4 and distinct[0] - distinct[-1] <= 4

    if max(rank_counts.values()) >= 3:
        return _info(Category.TRASH, "Dead Cards",
                     "Three or more cards of one rank block your own draws. Fold.",
                     0.85, Kicker.WEAK, texture)
    if 14 in pairs and (double_suited or ace_suited):
        return _info(Category.PREMIUM, "Premium Aces",
                     "Suited Aces, the best Omaha starting hands.",
                     0.2, Kicker.NA, texture)
    if pairs and pairs[0] >= 10 and (double_suited or rundown or len(pairs) == 2):
        return _info(Category.STRONG, "Strong Omaha Hand",
                     "A high pair with coordinated side cards. Plays well multiway.",
                     0.3, Kicker.NA, texture)
    if double_suited or (rundown and distinct[-1] >= 6):
        return _info(Category.GOOD, "Double-Suited" if double_suited else "Rundown",
                     "Coordinated cards with several ways to make strong draws.",
                     0.4, Kicker.WEAK, texture)
    if pairs or ace_suited:
        return _info(Category.MARGINAL, "Playable Omaha Hand",
                     "Some set or nut-flush potential, but not much coordination.",
                     0.55, Kicker.WEAK, texture)
    if values[0] >= 11:
        return _info(Category.WEAK, "Weak Omaha Hand",
                     "High cards without suits or connection rarely make the nuts.",
                     0.65, Kicker.WEAK, texture)
    return _info(Category.TRASH, "Trash Hand",
                 "Uncoordinated cards. Fold in most situations.",
                 0.8, Kicker.WEAK, texture)


# Postflop, one classifier per hand rank

def _live_cards(hole: Sequence[Card], board: Sequence[Card],
                variant: GameVariant) -> List[Card]:
    """Cards an opponent could still hold."""
    return remove_cards(create_deck(variant), list(hole) + list(board))


def _best_opponent_flush(suit, hole: Sequence[Card], board: Sequence[Card],
                         variant: GameVariant) -> Tuple[int, ...]:
    """Values of the best flush an opponent can show in ``suit``, () if none."""
    board_suited = sorted((c.value for c in board if c.suit == suit), reverse=True)
    live = sorted((c.value for c in _live_cards(hole, board, variant) if c.suit == suit),
                  reverse=True)
    if variant.is_omaha:
        if len(board_suited) < 3 or len(live) < 2:
            return ()
        return tuple(sorted(board_suited[:3] + live[:2], reverse=True))
    pool = sorted(board_suited + live[:2], reverse=True)
    return tuple(pool[:5]) if len(pool) >= 5 else ()


def _best_opponent_straight(hole: Sequence[Card], board: Sequence[Card],
                            variant: GameVariant) -> int:
    """High card of the best straight an opponent can show, 0 if none."""
    board_values = set(_values(board))
    live = Counter(c.value for c in _live_cards(hole, board, variant))
    for high in range(14, 4, -1):
        window = [14 if v == 1 else v for v in range(high - 4, high + 1)]
        missing = {v for v in window if v not in board_values}
        if variant.is_omaha:
            # Two hole ranks from the window, the other three on the board
            if any(missing <= set(pair) and all(live[v] for v in pair)
                   for pair in combinations(window, 2)):
                return high
        elif len(missing) <= 2 and all(live[v] for v in missing):
            return high
    return 0


def _royal_flush(hole, board, hand, texture, draw, variant):
    return _info(Category.PREMIUM, "Royal Flush", "The absolute nuts. Unbeatable.",
                 0, Kicker.NA, texture, True, draw)


def _straight_flush(hole, board, hand, texture, draw, variant):
    return _info(Category.PREMIUM, "Straight Flush", "Near-nut hand, virtually unbeatable.",
                 0, Kicker.NA, texture, True, draw)


def _quads(hole, board, hand, texture, draw, variant):
    return _info(Category.PREMIUM, "Four of a Kind",
                 "Quads, an extremely rare and powerful hand. Extract maximum value.",
                 0.02, Kicker.NA, texture, True, draw)


def _full_house(hole, board, hand, texture, draw, variant):
    board_max = max(_values(board))
    pockets = _pocket_ranks(hole)

    if pockets and pockets[0] >= board_max:
        return _info(Category.PREMIUM, "Top Full House",
                     "Top full house with a concealed set. Very difficult for opponents to read.",
                     0.05, Kicker.NA, texture, True, draw)
    if max(_values(hole)) >= board_max:
        return _info(Category.STRONG, "Strong Full House",
                     "A strong full house. Be cautious only of higher full houses on paired boards.",
                     0.1, Kicker.NA, texture, False, draw)
    return _info(Category.GOOD, "Bottom Full House",
                 "A full house, but a lower one. Watch out for higher boats on this paired board.",
                 0.2, Kicker.NA, texture, False, draw)


def _flush(hole, board, hand, texture, draw, variant):
    suit = hand.cards[0].suit
    hole_suited = [c.value for c in hole if c.suit == suit]

    if not hole_suited:
        return _info(Category.WEAK, "Board Flush",
                     "The flush is entirely on the board. Any opponent with a higher "
                     f"{suit.display_name} beats you.",
                     0.75, Kicker.WEAK, texture, False, draw)

    if hand.values >= _best_opponent_flush(suit, hole, board, variant):
        return _info(Category.PREMIUM, "Nut Flush",
                     f"{RANK_NAMES[hand.values[0]]}-high flush, the best possible flush on "
                     "this board. Play for maximum value.",
                     0.05, Kicker.NA, texture, True, draw)
    top = max(hole_suited)
    if top >= 12:
        return _info(Category.STRONG, "Strong Flush",
                     f"{RANK_NAMES[top]}-high flush. Very strong, but a higher flush is "
                     "possible.",
                     0.15, Kicker.NA, texture, False, draw)
    if top >= 9:
        return _info(Category.GOOD, "Medium Flush",
                     "A made flush, but not the strongest. Higher flushes are possible. "
                     "Play cautiously against heavy action.",
                     0.3, Kicker.NA, texture, False, draw)
    return _info(Category.MARGINAL, "Weak Flush",
                 "A low flush. Vulnerable to any higher flush. Be very cautious if facing "
                 "large bets.",
                 0.5, Kicker.NA, texture, False, draw)


def _straight(hole, board, hand, texture, draw, variant):
    high = hand.values[0]
    hole_values = sorted(_values(hole), reverse=True)
    board_values = _values(board)
    # An Ace in a wheel plays low
    hole_max = max(1 if v == 14 and high == 5 else v for v in hole_values)
    is_nut = high >= _best_opponent_straight(hole, board, variant)
    both_hole_cards = (hole_values[0] != hole_values[1]
                       and hole_values[0] - hole_values[1] <= 4)

    flush_risk = 0.35 if texture.flush_possible else 0.15 if texture.flush_draw_possible else 0

    if is_nut and not texture.flush_possible:
        disguise = " using both hole cards (well-disguised)" if both_hole_cards else ""
        return _info(Category.PREMIUM, "Nut Straight",
                     f"The highest possible straight{disguise}. No higher straight exists.",
                     0.05 + flush_risk, Kicker.NA, texture, True, draw)
    if is_nut:
        return _info(Category.GOOD, "Nut Straight (Flush Possible)",
                     "You have the best straight, but a flush is possible on this board. "
                     "Proceed with caution.",
                     0.35, Kicker.NA, texture, False, draw)
    if high >= 12:
        return _info(Category.GOOD, "Strong Straight",
                     "A high straight, but a higher straight could exist. Watch for "
                     "opponents with higher connectors.",
                     0.25 + flush_risk, Kicker.NA, texture, False, draw)

    in_run = [v for v in board_values if high - 4 <= v <= high]
    if in_run and hole_max <= min(in_run):
        return _info(Category.MARGINAL, "Bottom-End Straight",
                     'You have the low end of the straight (the "idiot end"). Any opponent '
                     "with a higher card makes a better straight.",
                     0.5 + flush_risk, Kicker.NA, texture, False, draw)
    return _info(Category.GOOD, "Straight",
                 "A made straight. Be aware of higher straights and flush possibilities.",
                 0.2 + flush_risk, Kicker.NA, texture, False, draw)


def _three_of_a_kind(hole, board, hand, texture, draw, variant):
    board_values = _values(board)
    trips = hand.values[0]

    if trips in _pocket_ranks(hole):
        if trips >= max(board_values):
            return _info(Category.PREMIUM, "Top Set",
                         "Top set, the best possible three of a kind. Extremely well-disguised "
                         "and powerful.",
                         0.2 if texture.is_wet else 0.08, Kicker.NA, texture, True, draw)
        if trips > min(board_values):
            return _info(Category.STRONG, "Middle Set",
                         "Middle set, very strong but a higher set is possible if an opponent "
                         "has a higher pocket pair.",
                         0.25 if texture.is_wet else 0.12, Kicker.NA, texture, False, draw)
        return _info(Category.GOOD, "Bottom Set",
                     "Bottom set, still strong but vulnerable to higher sets. Play carefully "
                     "on wet boards.",
                     0.35 if texture.is_wet else 0.18, Kicker.NA, texture, False, draw)

    kicker = max((v for v in _values(hole) if v != trips), default=0)
    if kicker >= 12:
        return _info(Category.STRONG, "Trips (Strong Kicker)",
                     "Trips with a strong kicker. Good hand but less concealed than a set, "
                     "opponents can also have trips with the board pair.",
                     0.25, Kicker.STRONG, texture, False, draw)
    return _info(Category.GOOD, "Trips (Weak Kicker)",
                 "Trips but with a weak kicker. An opponent with the same trips and a higher "
                 "kicker dominates you.",
                 0.4, Kicker.WEAK, texture, False, draw)


def _two_pair(hole, board, hand, texture, draw, variant):
    board_ranks = sorted(set(_values(board)), reverse=True)
    second = board_ranks[1] if len(board_ranks) > 1 else 0
    paired = sorted({v for v in _values(hole) if v in board_ranks}, reverse=True)

    if len(paired) >= 2:
        if paired[0] >= board_ranks[0] and paired[1] >= second:
            return _info(Category.STRONG, "Top Two Pair",
                         "Top two pair, both hole cards paired with the highest board cards. "
                         "Strong hand.",
                         0.3 if texture.is_wet else 0.15, Kicker.NA, texture, False, draw)
        if paired[0] >= board_ranks[0]:
            return _info(Category.GOOD, "Top and Bottom Two Pair",
                         "Two pair with top pair, but the second pair is low. Vulnerable to "
                         "higher two pairs.",
                         0.35 if texture.is_wet else 0.2, Kicker.NA, texture, False, draw)
        return _info(Category.MARGINAL, "Bottom Two Pair",
                     "Bottom two pair. Any opponent pairing a higher board card has a better "
                     "two pair. Vulnerable.",
                     0.5 if texture.is_wet else 0.35, Kicker.NA, texture, False, draw)

    return _info(Category.GOOD, "Two Pair",
                 "Two pair. Watch out for higher two pairs and sets.",
                 0.35 if texture.is_wet else 0.2, Kicker.NA, texture, False, draw)


def _one_pair(hole, board, hand, texture, draw, variant):
    hole_values = _values(hole)
    board_ranks = sorted(set(_values(board)), reverse=True)
    pockets = _pocket_ranks(hole)

    if pockets:
        pair = pockets[0]
        name = plural_rank_name(pair)
        if pair > board_ranks[0]:
            if pair >= 13:
                return _info(Category.PREMIUM, "Premium Overpair",
                             f"Pocket {name}, an overpair above every board card. Extremely "
                             "strong. Bet for value and protection.",
                             0.2 if texture.is_wet else 0.1, Kicker.NA, texture,
                             pair == 14, draw)
            if pair >= 10:
                return _info(Category.STRONG, "Overpair",
                             f"Pocket {name} over the board. Strong but watch for opponents "
                             "with higher pocket pairs or sets.",
                             0.3 if texture.is_wet else 0.18, Kicker.NA, texture, False, draw)
            return _info(Category.GOOD, "Low Overpair",
                         f"Pocket {name} over a low board. Currently ahead, but vulnerable to "
                         "any overcard.",
                         0.4 if texture.is_wet else 0.3, Kicker.NA, texture, False, draw)
        if pair < board_ranks[-1]:
            return _info(Category.WEAK, "Underpair",
                         f"Pocket {name} below all board cards. Any opponent with a higher "
                         "card likely has you beat. Consider folding to heavy action.",
                         0.7, Kicker.NA, texture, False, draw)
        return _info(Category.MARGINAL, "Middle Pocket Pair",
                     f"Pocket {name} sits between board cards. Opponents pairing higher "
                     "board cards beat you.",
                     0.55, Kicker.NA, texture, False, draw)

    for i, value in enumerate(hole_values):
        if value not in board_ranks:
            continue
        position = board_ranks.index(value)
        kicker_value = max((v for j, v in enumerate(hole_values) if j != i), default=0)
        kicker = Kicker.STRONG if kicker_value >= 12 else Kicker.WEAK

        if position == 0:
            if kicker == Kicker.STRONG:
                return _info(Category.GOOD, "Top Pair, Top Kicker",
                             f"Top pair with a {RANK_NAMES[kicker_value]} kicker, a strong made "
                             "hand. Bet for value, but beware of two pair and sets.",
                             0.35 if texture.is_wet else 0.2, Kicker.STRONG, texture, False, draw)
            return _info(Category.MARGINAL, "Top Pair, Weak Kicker",
                         "Top pair but with a weak kicker. Vulnerable to opponents who also "
                         "paired the top card with a better kicker.",
                         0.5 if texture.is_wet else 0.35, Kicker.WEAK, texture, False, draw)
        if position == len(board_ranks) - 1:
            return _info(Category.WEAK, "Bottom Pair",
                         "Bottom pair, the weakest pair on the board. Almost any opponent "
                         "pairing a higher card beats you. Fold to significant action.",
                         0.65, kicker, texture, False, draw)
        return _info(Category.MARGINAL, "Middle Pair",
                     "Middle pair. You beat bottom pair and missed hands, but lose to top pair "
                     "and better.",
                     0.55 if texture.is_wet else 0.45, kicker, texture, False, draw)

    return _info(Category.WEAK, "Board Pair (No Connection)",
                 "The pair is on the board and your hole cards don't connect. Essentially "
                 "playing high cards. Very weak.",
                 0.7, Kicker.WEAK, texture, False, draw)


def _high_card(hole, board, hand, texture, draw, variant):
    hole_max = max(_values(hole))
    kicker = Kicker.STRONG if hole_max >= 12 else Kicker.WEAK

    if draw and draw.is_nut_draw:
        return _info(Category.MARGINAL, f"High Card ({draw.label})",
                     f"No made hand yet, but you have a {draw.label}. Drawing to a very "
                     "strong hand.",
                     0.6, kicker, texture, False, draw)
    if draw:
        return _info(Category.WEAK, f"High Card ({draw.label})",
                     "No made hand. You're drawing, but even if you hit, your hand may not "
                     "be the best.",
                     0.7, kicker, texture, False, draw)
    if hole_max == 14:
        return _info(Category.WEAK, "Ace High",
                     "Just Ace high, no pair and no draw. You might win at showdown against "
                     "missed draws, but fold to any meaningful bet.",
                     0.75, Kicker.STRONG, texture)
    return _info(Category.TRASH, "High Card (Nothing)",
                 "No pair, no draw, no showdown value. Fold to any action.",
                 0.9, Kicker.WEAK, texture)


Classifier = Callable[..., HandStrengthInfo]

CLASSIFIERS: Dict[HandRank, Classifier] = {
    HandRank.ROYAL_FLUSH: _royal_flush,
    HandRank.STRAIGHT_FLUSH: _straight_flush,
    HandRank.FOUR_OF_A_KIND: _quads,
    HandRank.FULL_HOUSE: _full_house,
    HandRank.FLUSH: _flush,
    HandRank.STRAIGHT: _straight,
    HandRank.THREE_OF_A_KIND: _three_of_a_kind,
    HandRank.TWO_PAIR: _two_pair,
    HandRank.ONE_PAIR: _one_pair,
    HandRank.HIGH_CARD: _high_card,
}


def analyze_hand_strength(
    hole: Sequence[Card],
    board: Sequence[Card] = (),
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    outs: Sequence[OutInfo] = (),
) -> HandStrengthInfo:
    """Classify the hero's hand into a strength tier.

    Args:
        hole: Hero hole cards.
        board: Board cards (0, 3, 4 or 5).
        variant: Game variant.
        outs: Draws from calculate_outs, used to grade draw strength.

    Returns:
        HandStrengthInfo with vulnerability clamped to [0, 1].
    """
    hole, board = list(hole), list(board)
    if not board:
        return _preflop_strength(hole, variant)

    hand: EvaluatedHand = HandEvaluator.evaluate(hole, board, variant)
    texture = analyze_board_texture(board)
    draw = analyze_draw_strength(hole, board, outs)
    return CLASSIFIERS[hand.rank](hole, board, hand, texture, draw, variant)
