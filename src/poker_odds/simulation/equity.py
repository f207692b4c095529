"""Monte Carlo equity estimation."""

import random
from typing import Callable, List, Optional, Sequence

from poker_odds import config
from poker_odds.errors import EvaluationError, SimulationError
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import EquityResult
from poker_odds.models.card import Card
from poker_odds.models.game import GameVariant
from poker_odds.simulation.deck import create_deck, get_rng, remove_cards
from poker_odds.simulation.evaluator import HandEvaluator, iter_holding_keys

logger = get_logger(__name__)


def simulate_equity(
    hole: Sequence[Card],
    board: Sequence[Card] = (),
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    opponents: Optional[int] = None,
    trials: Optional[int] = None,
    rng: Optional[random.Random] = None,
    opponent_hole: Optional[Sequence[Card]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> EquityResult:
    """Estimate the hero's share of the pot against random opponents.

    Each trial deals opponent hole cards and the rest of the board from
    the unknown cards. A win means the hero beats every opponent; a tie
    means the hero ties the best opponent and nobody is ahead. The
    estimate carries sampling error proportional to 1/sqrt(trials).

    On a complete board nothing is sampled: a known opponent hand gives
    1.0/0.5/0.0 and random opponents are enumerated exactly.

    Args:
        hole: Hero hole cards.
        board: Known board cards (0, 3, 4 or 5).
        variant: Game variant.
        opponents: Number of random opponents.
        trials: Number of Monte Carlo trials.
        rng: Random generator; the process-wide one when omitted.
        opponent_hole: A single opponent's known hole cards.
        should_stop: Polled before each trial; returning True ends the run.

    Returns:
        EquityResult with outcome counts.

    Raises:
        EvaluationError: The hero's cards are malformed.
        SimulationError: Too many trials failed or none completed.
    """
    opponents = config.DEFAULT_OPPONENTS if opponents is None else opponents
    trials = config.EQUITY_TRIALS if trials is None else trials
    if opponents < 1:
        raise ValueError(f"Need at least one opponent, got {opponents}")
    if trials < 1:
        raise ValueError(f"Need at least one trial, got {trials}")
    if opponent_hole is not None and opponents != 1:
        raise ValueError("A known opponent hand only works heads-up")

    hole, board = list(hole), list(board)
    known: List[Card] = hole + board
    if opponent_hole is not None:
        opponent_hole = list(opponent_hole)
        HandEvaluator.key(opponent_hole, board, variant)
        known += opponent_hole
    # Systemic input problems abort here instead of skipping every trial
    HandEvaluator.key(known[:len(hole)], board, variant)
    if len(set(known)) != len(known):
        raise EvaluationError("Opponent hand shares cards with the hero or board")

    remaining = remove_cards(create_deck(variant), known)
    to_complete = 5 - len(board)
    hole_count = variant.hole_card_count

    if to_complete == 0:
        return _river_equity(hole, board, variant, opponents, remaining, opponent_hole)

    needed = to_complete + (0 if opponent_hole is not None else opponents * hole_count)
    if needed > len(remaining):
        raise SimulationError(
            f"{opponents} opponents need {needed} unknown cards, only {len(remaining)} left"
        )

    rng = get_rng(rng)
    wins = ties = losses = skipped = 0
    truncated = False

    for _ in range(trials):
        if should_stop is not None and should_stop():
            truncated = True
            break

        # A random sample is the first cards of a uniform shuffle
        drawn = rng.sample(remaining, needed)
        full_board = board + drawn[:to_complete]

        try:
            hero_key = HandEvaluator.key(hole, full_board, variant)
            if opponent_hole is not None:
                best_opp = HandEvaluator.key(opponent_hole, full_board, variant)
            else:
                best_opp = max(
                    HandEvaluator.key(
                        drawn[to_complete + i * hole_count:to_complete + (i + 1) * hole_count],
                        full_board, variant)
                    for i in range(opponents)
                )
        except EvaluationError as e:
            skipped += 1
            logger.warning("Skipping equity trial: %s", e)
            continue

        if hero_key > best_opp:
            wins += 1
        elif hero_key == best_opp:
            ties += 1
        else:
            losses += 1

    completed = wins + ties + losses
    attempted = completed + skipped
    if attempted and skipped / attempted > config.MAX_SKIP_RATE:
        raise SimulationError(
            f"{skipped} of {attempted} equity trials failed; card accounting is broken"
        )
    if completed == 0:
        raise SimulationError("Equity simulation stopped before any trial completed")
    if truncated:
        logger.info("Equity run stopped after %d of %d trials", completed, trials)

    result = EquityResult(wins, ties, losses, completed, skipped, truncated=truncated)
    logger.debug("Equity %.4f over %d trials (+/- %.4f)",
                 result.equity, completed, result.std_error)
    return result


def _river_equity(hole, board, variant, opponents, remaining, opponent_hole) -> EquityResult:
    """Exact equity on a complete board."""
    hero_key = HandEvaluator.key(hole, board, variant)

    if opponent_hole is not None:
        opp_key = HandEvaluator.key(opponent_hole, board, variant)
        return EquityResult(
            wins=int(hero_key > opp_key),
            ties=int(hero_key == opp_key),
            losses=int(hero_key < opp_key),
            trials=1,
            exact=True,
        )

    ahead = tied = behind = 0
    for _, opp_key in iter_holding_keys(remaining, board, variant):
        if hero_key > opp_key:
            ahead += 1
        elif hero_key == opp_key:
            tied += 1
        else:
            behind += 1

    total = ahead + tied + behind
    if total == 0:
        raise SimulationError("No opponent holdings left to compare against")
    if opponents == 1:
        return EquityResult(ahead, tied, behind, total, exact=True)

    # Several opponents: combine the heads-up odds as independent events
    win_one = ahead / total
    not_beaten_one = (ahead + tied) / total
    win_all = win_one ** opponents
    tie_best = not_beaten_one ** opponents - win_all
    return EquityResult(
        wins=win_all,
        ties=tie_best,
        losses=1.0 - win_all - tie_best,
        trials=1,
        exact=True,
    )


def calculate_equity(
    hole: Sequence[Card],
    board: Sequence[Card] = (),
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    opponents: Optional[int] = None,
    trials: Optional[int] = None,
    rng: Optional[random.Random] = None,
    opponent_hole: Optional[Sequence[Card]] = None,
) -> float:
    """Equity as a single number in [0, 1]."""
    return simulate_equity(hole, board, variant, opponents, trials, rng,
                           opponent_hole=opponent_hole).equity
