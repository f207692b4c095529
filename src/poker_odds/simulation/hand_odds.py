"""Probability of finishing with each hand category."""

import random
from typing import List, Optional, Sequence

from poker_odds import config
from poker_odds.errors import EvaluationError
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import HandOddsEntry
from poker_odds.models.card import Card
from poker_odds.models.game import GameVariant
from poker_odds.simulation.deck import create_deck, get_rng, remove_cards
from poker_odds.simulation.evaluator import HandEvaluator, HandRank

logger = get_logger(__name__)

# Categories rarer than this are dropped unless already made
MIN_REPORTED_PROBABILITY = 0.001


def calculate_hand_odds(
    hole: Sequence[Card],
    board: Sequence[Card] = (),
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    trials: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[HandOddsEntry]:
    """Estimate the final hand category distribution over random runouts.

    On a complete board the current hand has probability 1 and nothing is
    sampled; every category is listed.

    Args:
        hole: Hero hole cards.
        board: Known board cards.
        variant: Game variant.
        trials: Number of sampled runouts.
        rng: Random generator.

    Returns:
        Entries sorted by probability, highest first.
    """
    trials = config.HAND_ODDS_TRIALS if trials is None else trials
    hole, board = list(hole), list(board)
    to_complete = 5 - len(board)

    if to_complete == 0:
        current = HandEvaluator.key(hole, board, variant)[0]
        return sorted(
            (HandOddsEntry(rank.display_name, 1.0 if rank == current else 0.0, rank == current)
             for rank in HandRank),
            key=lambda e: e.probability,
            reverse=True,
        )

    current = HandEvaluator.key(hole, board, variant)[0]
    if not board and current == HandRank.HIGH_CARD:
        # Preflop only a pocket pair is a made hand
        current = None
    remaining = remove_cards(create_deck(variant), hole + board)
    rng = get_rng(rng)

    counts = {rank: 0 for rank in HandRank}
    valid = 0
    for _ in range(trials):
        runout = rng.sample(remaining, to_complete)
        try:
            rank = HandEvaluator.key(hole, board + runout, variant)[0]
        except EvaluationError as e:
            logger.warning("Skipping hand-odds runout: %s", e)
            continue
        counts[HandRank(rank)] += 1
        valid += 1

    if valid == 0:
        return []

    entries = [
        HandOddsEntry(rank.display_name, counts[rank] / valid, rank == current)
        for rank in HandRank
    ]
    entries = [e for e in entries
               if e.probability > MIN_REPORTED_PROBABILITY or e.currently_have]
    entries.sort(key=lambda e: e.probability, reverse=True)
    logger.debug("Hand odds over %d runouts: %s", valid,
                 ", ".join(f"{e.hand_type}={e.probability:.3f}" for e in entries))
    return entries
