"""Pot odds arithmetic."""


def calculate_pot_odds(pot_size: float, amount_to_call: float) -> float:
    """Breakeven equity for a call: call / (pot + call).

    Returns 0 when there is nothing to call.
    """
    if amount_to_call <= 0:
        return 0.0
    return amount_to_call / (pot_size + amount_to_call)


def format_pot_odds_ratio(pot_size: float, amount_to_call: float) -> str:
    """Pot-to-call ratio such as '2.0:1', or 'N/A' with no bet."""
    if amount_to_call <= 0:
        return "N/A"
    return f"{pot_size / amount_to_call:.1f}:1"


def calculate_implied_odds(pot_size: float, amount_to_call: float,
                           expected_future_winnings: float) -> float:
    """Breakeven equity once expected future winnings are counted."""
    if amount_to_call <= 0:
        return 0.0
    return amount_to_call / (pot_size + amount_to_call + expected_future_winnings)
