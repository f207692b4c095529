"""Single-request analysis pipeline."""

import random
from typing import Callable, List, Optional

from poker_odds import config
from poker_odds.analysis.outs import calculate_outs, get_total_outs, primary_draw
from poker_odds.analysis.pot_odds import calculate_pot_odds, format_pot_odds_ratio
from poker_odds.analysis.strength import analyze_hand_strength
from poker_odds.analysis.validation import validate_cards
from poker_odds.analysis.what_beats_me import analyze_what_beats_me
from poker_odds.errors import InvalidCardsError
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import AnalysisRequest, AnalysisResult, HandStrengthSummary
from poker_odds.models.card import parse_cards
from poker_odds.models.game import GameVariant, get_street
from poker_odds.simulation.equity import simulate_equity
from poker_odds.simulation.evaluator import HandEvaluator
from poker_odds.simulation.hand_odds import calculate_hand_odds
from poker_odds.strategy.decision import get_recommendation, get_top_actions
from poker_odds.strategy.explanation import generate_explanation

logger = get_logger(__name__)


class HandAnalyzer:
    """Runs every engine component for one snapshot of cards.

    Validation happens first; a request either fails with every input
    problem listed or produces a complete result.
    """

    def __init__(self, equity_trials: Optional[int] = None,
                 hand_odds_trials: Optional[int] = None,
                 opponents: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        """Initialize the analyzer.

        Args:
            equity_trials: Monte Carlo trials for equity.
            hand_odds_trials: Sampled runouts for the hand-odds table.
            opponents: Number of random opponents.
            rng: Random generator shared by all sampling steps.
        """
        self.equity_trials = equity_trials or config.EQUITY_TRIALS
        self.hand_odds_trials = hand_odds_trials or config.HAND_ODDS_TRIALS
        self.opponents = opponents or config.DEFAULT_OPPONENTS
        self.rng = rng

    @staticmethod
    def check_request(request: AnalysisRequest) -> List[str]:
        """Every problem with the request, empty when it is valid.

        A variant given by name, e.g. "omaha", is replaced by its GameVariant.
        """
        if not isinstance(request.variant, GameVariant):
            try:
                request.variant = GameVariant.parse(str(request.variant))
            except ValueError as e:
                return [str(e)]
        errors = list(validate_cards(request.hole_cards, request.board_cards,
                                     request.variant).errors)
        if request.pot_size is not None and request.pot_size <= 0:
            errors.append(f"Pot size must be a positive number, got {request.pot_size}")
        if request.amount_to_call is not None and request.amount_to_call <= 0:
            errors.append(f"Amount to call must be a positive number, got {request.amount_to_call}")
        return errors

    def analyze(self, request: AnalysisRequest,
                should_stop: Optional[Callable[[], bool]] = None) -> AnalysisResult:
        """Analyze one hand.

        Args:
            request: Cards, variant and optional bet sizes.
            should_stop: Optional cancellation check for the equity run.

        Returns:
            A complete AnalysisResult.

        Raises:
            InvalidCardsError: The request failed validation.
        """
        errors = self.check_request(request)
        if errors:
            raise InvalidCardsError(errors)

        variant = request.variant
        hole = parse_cards(request.hole_cards)
        board = parse_cards(request.board_cards)
        street = get_street(board)
        logger.debug("Analyzing %s on %s (%s, %s)", hole, board, variant.value, street.value)

        equity_result = simulate_equity(hole, board, variant, opponents=self.opponents,
                                        trials=self.equity_trials, rng=self.rng,
                                        should_stop=should_stop)
        equity = equity_result.equity

        outs = calculate_outs(hole, board, variant, rng=self.rng)
        totals = get_total_outs(outs)

        pot_odds = None
        pot_odds_ratio = "N/A"
        if request.pot_size is not None and request.amount_to_call is not None:
            pot_odds = calculate_pot_odds(request.pot_size, request.amount_to_call)
            pot_odds_ratio = format_pot_odds_ratio(request.pot_size, request.amount_to_call)

        strength = analyze_hand_strength(hole, board, variant, outs)
        recommendation = get_recommendation(equity, pot_odds, street, totals.clean, strength)
        top_actions = get_top_actions(equity, pot_odds, street, totals.clean, strength)

        draw = primary_draw(outs)
        result = AnalysisResult(
            hole_cards=hole,
            board_cards=board,
            variant=variant,
            street=street,
            equity=equity,
            outs=outs,
            total_clean_outs=totals.clean,
            total_dirty_outs=totals.dirty,
            pot_odds=pot_odds,
            pot_odds_ratio=pot_odds_ratio,
            recommended_action=recommendation.action,
            top_actions=top_actions,
            hand_odds=calculate_hand_odds(hole, board, variant,
                                          trials=self.hand_odds_trials, rng=self.rng),
            what_beats_me=analyze_what_beats_me(hole, board, variant),
            hand_name=HandEvaluator.get_hand_name(hole, board, variant),
            improved_hand_name=draw.draw_type.improves_to if draw else None,
            hand_strength=HandStrengthSummary.from_info(strength),
        )
        result.explanation = generate_explanation(result, request.gto_mode)

        logger.info("%s %s: equity %.3f, %s (%s)", variant.value, street.value, equity,
                    recommendation.action.value, recommendation.confidence.label)
        return result


def analyze_hand(request: AnalysisRequest, **kwargs) -> AnalysisResult:
    """Analyze a request with a one-off HandAnalyzer."""
    return HandAnalyzer(**kwargs).analyze(request)
