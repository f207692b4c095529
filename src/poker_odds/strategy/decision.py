"""Rule-based action recommendations.

Equity is compared with the pot-odds breakeven; hand strength then moves
each option's confidence up or down one tier at a time.
"""

from typing import List, Optional

from poker_odds import config
from poker_odds.models.analysis import (
    Action, ActionOption, Confidence, HandStrengthCategory, HandStrengthInfo,
    Recommendation,
)
from poker_odds.models.game import Street

Category = HandStrengthCategory

# Clean outs needed before a slightly short call is still worth making
DRAWING_OUTS = 8


def _facing_bet(pot_odds: Optional[float]) -> bool:
    return bool(pot_odds)


def get_recommendation(
    equity: float,
    pot_odds: Optional[float],
    street: Street,
    total_clean_outs: int,
    hand_strength: Optional[HandStrengthInfo] = None,
) -> Recommendation:
    """Single best action for the spot.

    Args:
        equity: Hero equity in [0, 1].
        pot_odds: Breakeven equity for calling, None or 0 with no bet.
        street: Current street.
        total_clean_outs: Deduplicated clean outs.
        hand_strength: Optional strength info; a nut draw firms up draw calls.

    Returns:
        Recommendation with action and confidence.
    """
    if not _facing_bet(pot_odds):
        if equity > 0.55:
            return Recommendation(Action.RAISE, Confidence.STRONG)
        if equity > 0.45:
            return Recommendation(Action.RAISE, Confidence.MODERATE)
        return Recommendation(Action.CHECK, Confidence.MODERATE)

    if equity > pot_odds + 0.15:
        strong = equity > pot_odds + 0.25
        return Recommendation(Action.RAISE, Confidence.STRONG if strong else Confidence.MODERATE)

    if equity > pot_odds:
        strong = equity > pot_odds + 0.05
        return Recommendation(Action.CALL, Confidence.STRONG if strong else Confidence.MODERATE)

    if (equity > pot_odds - 0.05 and total_clean_outs >= DRAWING_OUTS
            and street.is_drawing):
        nut_draw = bool(hand_strength and hand_strength.draw_strength
                        and hand_strength.draw_strength.is_nut_draw)
        return Recommendation(Action.CALL, Confidence.MODERATE if nut_draw else Confidence.MARGINAL)

    if equity > pot_odds - 0.03:
        return Recommendation(Action.FOLD, Confidence.MARGINAL)

    strong = equity < pot_odds - 0.1
    return Recommendation(Action.FOLD, Confidence.STRONG if strong else Confidence.MODERATE)


def adjust_confidence(base: Confidence, action: Action,
                      hs: Optional[HandStrengthInfo]) -> Confidence:
    """Move a confidence tier by hand-strength signals, saturating at both ends."""
    if hs is None:
        return base

    level = base
    draw = hs.draw_strength

    if action == Action.RAISE:
        if hs.category == Category.PREMIUM or hs.is_nutted:
            level = level.raised()
        if hs.category.is_bottom:
            level = level.lowered()
        if hs.vulnerability > 0.4 and hs.board_texture.is_wet:
            level = level.lowered()

    elif action == Action.CALL:
        if hs.category.is_top:
            level = level.raised()
        if hs.category == Category.TRASH:
            level = level.lowered()
        if draw and draw.is_nut_draw:
            level = level.raised()
        if draw and not draw.is_nut_draw and draw.implied_odds_multiplier < 0.9:
            level = level.lowered()

    elif action == Action.FOLD:
        if hs.category.is_top:
            level = level.lowered()
        if hs.category.is_bottom:
            level = level.raised()

    return level


def build_reasoning(action: Action, equity: float, pot_odds: Optional[float],
                    hs: Optional[HandStrengthInfo], total_clean_outs: int,
                    no_bet: bool) -> str:
    """Template reasoning keyed by action, strength category and draw."""
    equity_pct = f"{equity * 100:.1f}"
    pot_pct = f"{pot_odds * 100:.1f}" if pot_odds else None
    label = hs.label if hs else "your hand"
    category = hs.category if hs else None
    vulnerability = hs.vulnerability if hs else 0.0
    draw = hs.draw_strength if hs else None
    draw_desc = draw.label if draw else ""

    if action == Action.RAISE:
        if no_bet:
            if category in (Category.PREMIUM, Category.STRONG):
                protect = " Protect your hand on this wet board." if hs.board_texture.is_wet else ""
                return (f"Your {label} gives you {equity_pct}% equity. Bet for value, charge "
                        f"draws and build the pot.{protect}")
            if category == Category.GOOD:
                return (f"With {label} ({equity_pct}% equity), a bet builds the pot and denies "
                        "free cards to opponents on draws.")
            if draw_desc:
                return (f"Semi-bluff with your {draw_desc}. You can win immediately or improve "
                        "to a strong hand.")
            return f"A bet could win the pot immediately. Your {equity_pct}% equity supports a value bet."

        if hs and hs.is_nutted:
            return (f"Your {label} is the nuts or near-nuts with {equity_pct}% equity. Raise "
                    "for maximum value, you dominate this board.")
        if category in (Category.PREMIUM, Category.STRONG):
            return (f"Your {label} ({equity_pct}% equity) far exceeds the {pot_pct}% pot odds. "
                    "Raise to extract value and deny draws.")
        if draw_desc:
            return (f"With your {draw_desc} and {equity_pct}% equity (vs {pot_pct}% needed), a "
                    "raise can win now or set up a big pot when you hit.")
        return f"Your {equity_pct}% equity exceeds the {pot_pct}% needed. Raise for value."

    if action == Action.CALL:
        if draw and draw.is_nut_draw:
            return (f"Your {draw_desc} has excellent implied odds, when you hit you'll have the "
                    f"best hand. {equity_pct}% equity supports calling the {pot_pct}% pot odds.")
        if draw:
            higher = "flush" if "Flush" in draw_desc else "straight"
            return (f"Your {draw_desc} gives you {equity_pct}% equity vs {pot_pct}% needed, but "
                    f"be aware: even if you hit, a higher {higher} could beat you.")
        if category in (Category.GOOD, Category.STRONG):
            caution = " But beware of draws completing on later streets." if vulnerability > 0.3 else ""
            return (f"Your {label} has {equity_pct}% equity against the {pot_pct}% pot odds. "
                    f"Calling is profitable.{caution}")
        if total_clean_outs >= DRAWING_OUTS:
            named = f" ({draw_desc})" if draw_desc else ""
            return (f"With {total_clean_outs} outs{named}, implied odds justify a call despite "
                    f"slightly lacking the {pot_pct}% needed.")
        return f"Your {equity_pct}% equity beats the {pot_pct}% pot odds. Calling is +EV."

    if action == Action.CHECK:
        if category in (Category.PREMIUM, Category.STRONG):
            return (f"Check-trapping with your {label} can induce bluffs and disguise your "
                    f"{equity_pct}% equity hand.")
        if category in (Category.MARGINAL, Category.WEAK):
            return (f"With {label}, checking keeps the pot small and avoids tough decisions. "
                    "See the next card for free.")
        return "Check to control the pot size and see the next card."

    if category is not None and category.is_bottom:
        return (f"Your {label} has only {equity_pct}% equity, below the {pot_pct}% needed. "
                f"{hs.description}")
    if draw and not draw.is_nut_draw:
        return (f"Your {draw_desc} has only {equity_pct}% equity vs {pot_pct}% needed, and even "
                "hitting could lose to a stronger hand. Fold and save chips.")
    if vulnerability > 0.5:
        return (f"Your {label} is too vulnerable with {equity_pct}% equity below the {pot_pct}% "
                "threshold. Folding saves chips for better spots.")
    return f"Your {equity_pct}% equity is below the {pot_pct}% needed. Folding is the disciplined play."


def get_top_actions(
    equity: float,
    pot_odds: Optional[float],
    street: Street,
    total_clean_outs: int,
    hand_strength: Optional[HandStrengthInfo] = None,
) -> List[ActionOption]:
    """Ranked action options, strongest confidence first.

    Options of equal confidence keep their generation order (raise, call,
    check, fold). At most config.TOP_ACTIONS are returned.
    """
    no_bet = not _facing_bet(pot_odds)
    hs = hand_strength
    options: List[ActionOption] = []

    def add(action: Action, label: str, base: Confidence):
        options.append(ActionOption(
            action=action,
            label=label,
            reasoning=build_reasoning(action, equity, pot_odds, hs, total_clean_outs, no_bet),
            confidence=adjust_confidence(base, action, hs),
        ))

    if no_bet:
        if equity > 0.45:
            add(Action.RAISE, "RAISE", Confidence.STRONG if equity > 0.55 else Confidence.MODERATE)
        else:
            add(Action.RAISE, "RAISE (Bluff)", Confidence.MARGINAL)
        add(Action.CHECK, "CHECK", Confidence.MODERATE if equity > 0.5 else Confidence.STRONG)
    else:
        if equity > pot_odds + 0.1:
            add(Action.RAISE, "RAISE",
                Confidence.STRONG if equity > pot_odds + 0.2 else Confidence.MODERATE)

        if equity >= pot_odds:
            add(Action.CALL, "CALL",
                Confidence.STRONG if equity > pot_odds + 0.05 else Confidence.MODERATE)
        elif (total_clean_outs >= DRAWING_OUTS and equity > pot_odds - 0.08
              and street.is_drawing):
            nut_draw = bool(hs and hs.draw_strength and hs.draw_strength.is_nut_draw)
            add(Action.CALL, "CALL (Nut Draw)" if nut_draw else "CALL (Drawing)",
                Confidence.MARGINAL)

        if equity < pot_odds:
            add(Action.FOLD, "FOLD",
                Confidence.STRONG if equity < pot_odds - 0.1 else Confidence.MARGINAL)

    options.sort(key=lambda o: -o.confidence)
    return options[:config.TOP_ACTIONS]
