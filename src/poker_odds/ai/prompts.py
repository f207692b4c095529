"""Prompt templates for the explanation and card recognition services."""

from poker_odds.models.analysis import AnalysisResult

EXPLANATION_SYSTEM = """\
You are a professional poker strategy advisor. Given the game state, provide a \
concise (2-4 sentences) strategic explanation for the recommended action. Be \
specific about equity, pot odds, and draw strength. Use poker terminology but \
keep it accessible. Do not use markdown formatting.
"""

CARD_RECOGNITION_SYSTEM = """\
You are a precise playing card identification system. You analyze photographs \
of playing cards and return their exact rank and suit. You MUST correctly \
identify the suit by looking at the symbol shape:
- Hearts: red, rounded bottom curving inward to a point at the top
- Diamonds: red, rotated square / rhombus shape
- Clubs: black, three-leaf clover shape with a stem
- Spades: black, pointed top with rounded bottom lobes and a stem

Red cards are hearts OR diamonds. Black cards are clubs OR spades. Distinguish \
between them by shape, not just color.

You never guess - if a card is unclear, you report it as unidentified.
"""

_ANSWER_RULES = """\
Return your answer as a JSON object with this exact structure:
{{
  "cards": [{example}],
  "confidence": "high",
  "notes": ""
}}

Rules:
- Rank codes: 2, 3, 4, 5, 6, 7, 8, 9, T (for 10), J, Q, K, A
- Suit codes: h (hearts), d (diamonds), c (clubs), s (spades)
- Look at the suit SYMBOL SHAPE carefully to distinguish hearts from diamonds and clubs from spades
- Only include cards you can clearly identify
- If ANY card is partially obscured or unclear, set confidence to "low"
- Return ONLY the JSON object, no other text
"""


def build_explanation_prompt(result: AnalysisResult) -> str:
    """Describe an analysis result for the explanation model."""
    outs = ", ".join(f"{o.draw_type.value}: {o.count}" for o in result.outs) or "None"
    board = ", ".join(c.to_short() for c in result.board_cards) or "none"
    pot_odds = f"{result.pot_odds * 100:.1f}%" if result.pot_odds is not None else "N/A"

    return f"""\
Game: {result.variant.value}
Street: {result.street.value}
Hole cards: {", ".join(c.to_short() for c in result.hole_cards)}
Board: {board}
Current hand: {result.hand_name}
Equity: {result.equity * 100:.1f}%
Pot odds: {pot_odds}
Outs: {outs}
Recommended action: {result.recommended_action.value}

Template explanation: {result.explanation}

Explain why this action is correct and what the player should consider."""


def build_recognition_prompt(image_type: str, hole_count: int = 2) -> str:
    """Instructions for reading either the hole cards or the board."""
    if image_type == "hand":
        example = ", ".join(['"Xs"', '"Xh"', '"Xd"', '"Xc"'][:hole_count])
        intro = (f"This photo shows the player's HOLE CARDS (the {hole_count} private "
                 f"cards dealt to the player). Identify exactly the {hole_count} cards you see.")
    else:
        example = '"Xs", "Xh", "Xc"'
        intro = ("This photo shows the COMMUNITY BOARD CARDS (the shared cards dealt "
                 "face-up on the table). Identify all visible board cards (3 for flop, "
                 "4 for turn, or 5 for river).")
    return f"{intro}\n\n{_ANSWER_RULES.format(example=example)}"
