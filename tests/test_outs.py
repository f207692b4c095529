"""Tests for draw detection and clean/dirty outs."""

import random

from poker_odds.analysis.outs import (
    BACKDOOR_FLUSH_WEIGHT, BACKDOOR_STRAIGHT_WEIGHT, calculate_outs, get_total_outs,
    is_out_clean, primary_draw,
)
from poker_odds.models.analysis import DrawType, OutInfo
from poker_odds.models.card import parse_cards
from poker_odds.models.game import GameVariant


def cards(text):
    return parse_cards(text.split())


def by_type(outs):
    return {o.draw_type: o for o in outs}


class TestCalculateOuts:
    """Tests for calculate_outs."""

    def test_combo_draw(self):
        """7h8h on Th9h2c has a 9-out flush draw and an 8-out straight draw."""
        outs = by_type(calculate_outs(cards("7h 8h"), cards("Th 9h 2c"), rng=random.Random(1)))
        assert outs[DrawType.FLUSH_DRAW].count == 9
        straight = outs[DrawType.OPEN_ENDED_STRAIGHT_DRAW]
        assert straight.count == 8
        assert {c.rank.value for c in straight.outs} == {"6", "J"}
        assert DrawType.GUTSHOT_STRAIGHT_DRAW not in outs

    def test_no_outs_on_river(self):
        assert calculate_outs(cards("Ah Ad"), cards("Ks Qs Js 2c 3c")) == []

    def test_no_outs_preflop(self):
        assert calculate_outs(cards("Ah Ad"), ()) == []

    def test_gutshot(self):
        """9-8 on J-7 needs a Ten in the middle."""
        outs = by_type(calculate_outs(cards("9c 8d"), cards("Jh 7s 2c"), rng=random.Random(1)))
        gutshot = outs[DrawType.GUTSHOT_STRAIGHT_DRAW]
        assert gutshot.count == 4
        assert {c.rank.value for c in gutshot.outs} == {"T"}
        assert DrawType.OPEN_ENDED_STRAIGHT_DRAW not in outs

    def test_set_draw(self):
        """A pocket pair has two outs to a set."""
        outs = by_type(calculate_outs(cards("5c 5d"), cards("Ks 9h 2c"), rng=random.Random(1)))
        assert outs[DrawType.SET_DRAW].count == 2
        assert DrawType.OVERCARDS not in outs

    def test_full_house_draw(self):
        """A set fills up with a board pair or quads."""
        outs = by_type(calculate_outs(cards("7c 7d"), cards("7h Ks 2d"), rng=random.Random(1)))
        assert outs[DrawType.FULL_HOUSE_DRAW].count == 7
        assert DrawType.SET_DRAW not in outs

    def test_overcards(self):
        outs = by_type(calculate_outs(cards("Ac Kd"), cards("9h 6s 2c"), rng=random.Random(1)))
        assert outs[DrawType.OVERCARDS].count == 6

    def test_backdoor_draws_on_flop(self):
        """Three to a flush and three to a straight count as weighted outs."""
        outs = by_type(calculate_outs(cards("Ah Kh"), cards("Qh 7c 2d"), rng=random.Random(1)))
        assert outs[DrawType.BACKDOOR_FLUSH_DRAW].count == BACKDOOR_FLUSH_WEIGHT
        assert outs[DrawType.BACKDOOR_FLUSH_DRAW].outs == ()
        assert outs[DrawType.BACKDOOR_STRAIGHT_DRAW].count == BACKDOOR_STRAIGHT_WEIGHT

    def test_no_backdoor_on_turn(self):
        outs = by_type(calculate_outs(cards("Ah Kh"), cards("Qh 7c 2d 3s"), rng=random.Random(1)))
        assert DrawType.BACKDOOR_FLUSH_DRAW not in outs
        assert DrawType.BACKDOOR_STRAIGHT_DRAW not in outs

    def test_made_flush_has_no_flush_draw(self):
        outs = by_type(calculate_outs(cards("Ah 3h"), cards("Kh 8h 2h"), rng=random.Random(1)))
        assert DrawType.FLUSH_DRAW not in outs

    def test_outs_are_unseen(self):
        """No out is a known card and every total fits in the remaining deck."""
        hole, board = cards("7h 8h"), cards("Th 9h 2c")
        outs = calculate_outs(hole, board, rng=random.Random(2))
        for draw in outs:
            assert not set(draw.outs) & set(hole + board)
        totals = get_total_outs(outs)
        assert totals.clean + totals.dirty <= 52 - 5

    def test_omaha_flush_needs_two_suited_hole_cards(self):
        """One suited hole card never makes an Omaha flush draw."""
        one = by_type(calculate_outs(cards("Ah 2c 3d 4s"), cards("Kh 9h 5c"),
                                     GameVariant.OMAHA, rng=random.Random(1)))
        two = by_type(calculate_outs(cards("Ah Qh 3d 4s"), cards("Kh 9h 5c"),
                                     GameVariant.OMAHA, rng=random.Random(1)))
        assert DrawType.FLUSH_DRAW not in one
        assert two[DrawType.FLUSH_DRAW].count == 9

    def test_omaha_straight_draw_needs_two_hole_cards(self):
        """6-7-8 in the hole on 9-2-3 has no straight: only two hole cards play."""
        outs = by_type(calculate_outs(cards("6c 7d 8h Ks"), cards("9c 2d 3s"),
                                      GameVariant.OMAHA, rng=random.Random(1)))
        assert DrawType.OPEN_ENDED_STRAIGHT_DRAW not in outs
        assert DrawType.GUTSHOT_STRAIGHT_DRAW not in outs

    def test_omaha_open_ended_draw(self):
        """8-7 in the hole on 9-6 is open-ended to a Five or a Ten."""
        outs = by_type(calculate_outs(cards("8c 7d 2h 2s"), cards("9h 6s Kc"),
                                      GameVariant.OMAHA, rng=random.Random(1)))
        straight = outs[DrawType.OPEN_ENDED_STRAIGHT_DRAW]
        assert straight.count == 8
        assert {c.rank.value for c in straight.outs} == {"5", "T"}

    def test_short_deck_outs_use_short_deck(self):
        """Outs never include ranks the short deck removed."""
        outs = calculate_outs(cards("7h 8h"), cards("Th 9h Ac"), GameVariant.SHORT_DECK,
                              rng=random.Random(1))
        for draw in outs:
            assert all(c.value >= 6 for c in draw.outs)


class TestCleanOuts:
    """Tests for clean/dirty tagging and totals."""

    def test_backdoor_draw_is_clean(self):
        draw = OutInfo(DrawType.BACKDOOR_FLUSH_DRAW, (), BACKDOOR_FLUSH_WEIGHT)
        assert is_out_clean(draw, cards("Ah Kh"), cards("Qh 7c 2d"))

    def test_seeded_tagging_repeats(self):
        hole, board = cards("7h 8h"), cards("Th 9h 2c")
        a = calculate_outs(hole, board, rng=random.Random(6))
        b = calculate_outs(hole, board, rng=random.Random(6))
        assert a == b

    def test_totals_deduplicate(self):
        """A card clean in any draw counts once, as clean."""
        shared = cards("Jh")[0]
        outs = [
            OutInfo(DrawType.FLUSH_DRAW, (shared,) + tuple(cards("2h 3h")), 3, True),
            OutInfo(DrawType.OPEN_ENDED_STRAIGHT_DRAW, (shared,) + tuple(cards("Js")), 2, False),
        ]
        totals = get_total_outs(outs)
        assert totals.clean == 3
        assert totals.dirty == 1
        assert totals.total == 4

    def test_primary_draw(self):
        """The biggest draw wins, the earliest one on ties."""
        first = OutInfo(DrawType.FLUSH_DRAW, (), 8)
        second = OutInfo(DrawType.OPEN_ENDED_STRAIGHT_DRAW, (), 8)
        small = OutInfo(DrawType.SET_DRAW, (), 2)
        assert primary_draw([small, first, second]) is first
        assert primary_draw([]) is None

    def test_board_pairing_outs_are_dirty(self):
        """Cards that only pair the board improve most opponents as much as the hero."""
        draw = OutInfo(DrawType.OVERCARDS, tuple(cards("9d 6d 2d")), 3)
        assert not is_out_clean(draw, cards("Ac Kd"), cards("9h 6s 2c"),
                                rng=random.Random(1))

    def test_flush_outs_are_clean(self):
        hole, board = cards("7h 8h"), cards("Th 9h 2c")
        flush = by_type(calculate_outs(hole, board, rng=random.Random(1)))[DrawType.FLUSH_DRAW]
        assert flush.is_clean
