"""Tests for Monte Carlo equity and hand-odds estimation."""

import random
import statistics

import pytest

from poker_odds.errors import EvaluationError, SimulationError
from poker_odds.models.card import parse_cards
from poker_odds.models.game import GameVariant
from poker_odds.simulation.equity import calculate_equity, simulate_equity
from poker_odds.simulation.evaluator import HandRank
from poker_odds.simulation.hand_odds import calculate_hand_odds


def cards(text):
    return parse_cards(text.split())


class TestSimulateEquity:
    """Tests for simulate_equity."""

    def test_counts_add_up(self):
        """Every completed trial is a win, tie or loss."""
        result = simulate_equity(cards("Qh Jh"), cards("Th 9c 2d"),
                                 trials=300, rng=random.Random(1))
        assert result.wins + result.ties + result.losses == result.trials == 300
        assert 0.0 <= result.equity <= 1.0
        assert not result.exact

    def test_aces_beat_kings(self):
        """AA vs KK preflop is roughly 81%."""
        equity = calculate_equity(cards("As Ah"), (), trials=2000, rng=random.Random(3),
                                  opponent_hole=cards("Kd Kc"))
        assert 0.74 < equity < 0.88

    def test_seeded_runs_repeat(self):
        """Same seed, same estimate."""
        a = simulate_equity(cards("7c 7d"), (), trials=200, rng=random.Random(11))
        b = simulate_equity(cards("7c 7d"), (), trials=200, rng=random.Random(11))
        assert a == b

    def test_std_error_shrinks_with_trials(self):
        """Sampling error falls roughly with 1/sqrt(trials)."""
        small = simulate_equity(cards("Ah Kd"), (), trials=100, rng=random.Random(5))
        large = simulate_equity(cards("Ah Kd"), (), trials=1600, rng=random.Random(5))
        assert large.std_error < small.std_error

    def test_estimates_tighten_with_trials(self):
        """Repeated estimates spread about four times less at 16x the trials."""
        def spread(trials):
            estimates = [calculate_equity(cards("Ah Kd"), (), trials=trials,
                                          rng=random.Random(seed))
                         for seed in range(10)]
            return statistics.pstdev(estimates)

        assert spread(1600) < spread(100) / 2

    def test_more_opponents_lower_equity(self):
        """A pair of aces wins less often against a crowd."""
        heads_up = calculate_equity(cards("As Ah"), (), opponents=1, trials=600,
                                    rng=random.Random(2))
        multiway = calculate_equity(cards("As Ah"), (), opponents=4, trials=600,
                                    rng=random.Random(2))
        assert multiway < heads_up

    def test_should_stop_truncates(self):
        """Stopping early keeps the completed trials and flags the result."""
        polls = []

        def stop():
            polls.append(1)
            return len(polls) > 25

        result = simulate_equity(cards("Ah Kd"), (), trials=1000, rng=random.Random(1),
                                 should_stop=stop)
        assert result.truncated
        assert result.trials == 25

    def test_stop_before_any_trial_fails(self):
        with pytest.raises(SimulationError):
            simulate_equity(cards("Ah Kd"), (), trials=10, should_stop=lambda: True)

    def test_opponent_overlap_rejected(self):
        """A known opponent hand cannot share the hero's cards."""
        with pytest.raises(EvaluationError):
            simulate_equity(cards("Ah Kd"), (), trials=10, opponent_hole=cards("Ah Qc"))

    def test_needs_an_opponent(self):
        with pytest.raises(ValueError):
            simulate_equity(cards("Ah Kd"), (), opponents=0, trials=10)

    def test_omaha_runs(self):
        """Omaha deals four hole cards per opponent."""
        result = simulate_equity(cards("Ah As Kh Ks"), cards("Qh 7c 2d"), GameVariant.OMAHA,
                                 trials=100, rng=random.Random(9))
        assert result.trials == 100


class TestRiverEquity:
    """On a complete board nothing is sampled."""

    def test_known_opponent_win(self):
        board = cards("2c 7d 9h Js Qd")
        result = simulate_equity(cards("As Ah"), board, opponent_hole=cards("Kd Kc"))
        assert result.exact
        assert result.equity == 1.0

    def test_known_opponent_split(self):
        """Both players play the board."""
        board = cards("Ac Kc Qd Jh Ts")
        result = simulate_equity(cards("2h 3d"), board, opponent_hole=cards("4s 5c"))
        assert result.equity == 0.5

    def test_deterministic_against_random_opponent(self):
        """Exact enumeration ignores the generator and trial count."""
        board = cards("Ks Qs Js 2c 3c")
        a = simulate_equity(cards("Ah Ad"), board, trials=10, rng=random.Random(1))
        b = simulate_equity(cards("Ah Ad"), board, trials=5000, rng=random.Random(99))
        assert a.exact and b.exact
        assert a.equity == b.equity
        assert a.std_error == 0.0

    def test_multiway_river_is_lower(self):
        board = cards("Ks Qs Js 2c 3c")
        heads_up = calculate_equity(cards("Ah Ad"), board, opponents=1)
        three_way = calculate_equity(cards("Ah Ad"), board, opponents=2)
        assert three_way < heads_up

    def test_nuts_on_river(self):
        """A royal flush never loses."""
        result = simulate_equity(cards("As Ks"), cards("Qs Js Ts 2c 3d"))
        assert result.losses == 0
        assert result.equity == 1.0


class TestHandOdds:
    """Tests for calculate_hand_odds."""

    def test_river_lists_every_category(self):
        """The current hand has probability 1 and is listed first."""
        entries = calculate_hand_odds(cards("Ah Ad"), cards("Ks Qs Js 2c 3c"))
        assert len(entries) == len(HandRank)
        assert entries[0].hand_type == "Pair"
        assert entries[0].probability == 1.0
        assert entries[0].currently_have

    def test_flop_distribution(self):
        """Sampled probabilities are sorted and sum to at most one."""
        entries = calculate_hand_odds(cards("7h 8h"), cards("Th 9h 2c"),
                                      trials=400, rng=random.Random(4))
        probabilities = [e.probability for e in entries]
        assert probabilities == sorted(probabilities, reverse=True)
        assert sum(probabilities) <= 1.0 + 1e-9
        names = {e.hand_type for e in entries}
        assert {"Flush", "Straight"} <= names

    def test_current_hand_flagged(self):
        entries = calculate_hand_odds(cards("Ah Ad"), cards("Ac 7s 2d"),
                                      trials=200, rng=random.Random(8))
        current = [e for e in entries if e.currently_have]
        assert [e.hand_type for e in current] == ["Three of a Kind"]

    def test_preflop_flags_nothing(self):
        entries = calculate_hand_odds(cards("Ah Kd"), (), trials=200, rng=random.Random(8))
        assert not any(e.currently_have for e in entries)

    def test_preflop_pocket_pair_is_a_made_pair(self):
        entries = calculate_hand_odds(cards("9s 9d"), (), trials=200, rng=random.Random(8))
        current = [e.hand_type for e in entries if e.currently_have]
        assert current == ["Pair"]
