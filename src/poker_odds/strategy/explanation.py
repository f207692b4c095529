"""Template explanations for an analysis result.

These are always produced locally; the AI explainer only elaborates on them.
"""

from poker_odds.models.analysis import Action, AnalysisResult
from poker_odds.models.game import Street


def generate_explanation(result: AnalysisResult, gto_mode: bool = False) -> str:
    """Plain-language summary of the recommended action.

    Args:
        result: A complete analysis result.
        gto_mode: Append EV spread, rule-of-4/2 and balance notes.

    Returns:
        Explanation text.
    """
    equity_pct = f"{result.equity * 100:.1f}"
    pot_pct = f"{result.pot_odds * 100:.1f}" if result.pot_odds else None
    action = result.recommended_action
    hand = result.hand_name
    clean, dirty = result.total_clean_outs, result.total_dirty_outs
    draws = " and ".join(o.draw_type.display_name for o in result.outs if o.count > 0)

    text = ""
    if action == Action.RAISE and result.equity > 0.6:
        text = (f"You hold {hand} with {equity_pct}% equity against a balanced range. This is "
                "a strong hand that should be raised for value.")
        if clean > 0:
            text += f" You also have {clean} clean outs to improve further."
    elif action == Action.RAISE:
        text = (f"Your {hand} gives you {equity_pct}% equity. This exceeds the required "
                "threshold significantly, making a raise profitable to build the pot.")
    elif action == Action.CALL and draws and pot_pct:
        dirty_note = f" ({dirty} dirty)" if dirty > 0 else ""
        text = (f"You have {draws} with {clean} clean outs{dirty_note}. Your equity of "
                f"{equity_pct}% exceeds the {pot_pct}% required by pot odds, making this a "
                "profitable call.")
    elif action == Action.CALL and pot_pct:
        text = (f"Your {hand} gives you {equity_pct}% equity. With pot odds requiring "
                f"{pot_pct}%, you have sufficient equity to call.")
    elif action == Action.CALL:
        text = (f"Your {hand} has {equity_pct}% equity against a balanced range. This is "
                "strong enough to continue.")
    elif action == Action.CHECK:
        text = (f"Your {hand} gives you {equity_pct}% equity. With no bet to call, checking "
                "allows you to see the next card and re-evaluate.")
        if draws:
            text += f" You have {draws} to potentially improve."
    elif action == Action.FOLD:
        if pot_pct:
            text = (f"Your {hand} gives you only {equity_pct}% equity. With pot odds requiring "
                    f"{pot_pct}%, you don't have sufficient equity to call. This is a "
                    "disciplined fold.")
        else:
            text = (f"Your {hand} only provides {equity_pct}% equity against a balanced range. "
                    "Folding preserves your stack for better spots.")

    if gto_mode:
        text += gto_context(result)
    return text


def gto_context(result: AnalysisResult) -> str:
    """EV spread, rule-of-4/2 estimate and a balance note."""
    text = ""
    if result.pot_odds:
        spread = (result.equity - result.pot_odds) * 100
        sign = "+" if spread >= 0 else ""
        text += (f" From a GTO perspective, this spot has an expected value of "
                 f"{sign}{spread:.1f}% equity spread.")

    if result.outs and result.street != Street.RIVER:
        on_flop = result.street == Street.FLOP
        rule = "rule of 4" if on_flop else "rule of 2"
        approx = result.total_clean_outs * (4 if on_flop else 2)
        text += (f" Using the {rule}, {result.total_clean_outs} outs gives approximately "
                 f"{approx}% equity to improve.")

    if result.recommended_action == Action.RAISE:
        text += (" In a balanced GTO strategy, raising this hand maintains an optimal "
                 "value-to-bluff ratio.")
    return text
