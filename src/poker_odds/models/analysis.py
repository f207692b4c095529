"""Result models produced by the analysis engine.

Every object here is derived per request and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

from poker_odds.models.card import Card
from poker_odds.models.game import GameVariant, Street


class DrawType(str, Enum):
    """Drawing-card categories."""
    FLUSH_DRAW = "flushDraw"
    OPEN_ENDED_STRAIGHT_DRAW = "openEndedStraightDraw"
    GUTSHOT_STRAIGHT_DRAW = "gutshotStraightDraw"
    OVERCARDS = "overcards"
    SET_DRAW = "setDraw"
    FULL_HOUSE_DRAW = "fullHouseDraw"
    BACKDOOR_FLUSH_DRAW = "backdoorFlushDraw"
    BACKDOOR_STRAIGHT_DRAW = "backdoorStraightDraw"

    @property
    def display_name(self) -> str:
        return {
            "flushDraw": "Flush Draw",
            "openEndedStraightDraw": "Open-Ended Straight Draw",
            "gutshotStraightDraw": "Gutshot Straight Draw",
            "overcards": "Overcards",
            "setDraw": "Set Draw",
            "fullHouseDraw": "Full House Draw",
            "backdoorFlushDraw": "Backdoor Flush Draw",
            "backdoorStraightDraw": "Backdoor Straight Draw",
        }[self.value]

    @property
    def improves_to(self) -> str:
        """Name of the hand this draw is chasing."""
        return {
            "flushDraw": "Flush",
            "openEndedStraightDraw": "Straight",
            "gutshotStraightDraw": "Straight",
            "overcards": "Top Pair",
            "setDraw": "Three of a Kind",
            "fullHouseDraw": "Full House",
            "backdoorFlushDraw": "Flush",
            "backdoorStraightDraw": "Straight",
        }[self.value]


@dataclass(frozen=True)
class OutInfo:
    """One detected draw and the cards that complete it.

    Backdoor draws carry no concrete cards; their count is a weighted
    number of effective outs.
    """
    draw_type: DrawType
    outs: Tuple[Card, ...]
    count: float
    is_clean: bool = True


@dataclass(frozen=True)
class OutsTotals:
    """Deduplicated out cards across all draws."""
    clean: int
    dirty: int

    @property
    def total(self) -> int:
        return self.clean + self.dirty


@dataclass(frozen=True)
class BoardTexture:
    is_wet: bool
    is_dry: bool
    is_paired: bool
    flush_possible: bool
    flush_draw_possible: bool
    straight_possible: bool
    high_card: int
    description: str


@dataclass(frozen=True)
class DrawStrength:
    is_nut_draw: bool
    label: str
    # 1.0 normal, above 1 good implied odds, below 1 reverse implied odds
    implied_odds_multiplier: float


class HandStrengthCategory(str, Enum):
    """Categories of hand strength."""
    PREMIUM = "premium"
    STRONG = "strong"
    GOOD = "good"
    MARGINAL = "marginal"
    WEAK = "weak"
    TRASH = "trash"

    @property
    def is_top(self) -> bool:
        return self in (HandStrengthCategory.PREMIUM, HandStrengthCategory.STRONG)

    @property
    def is_bottom(self) -> bool:
        return self in (HandStrengthCategory.WEAK, HandStrengthCategory.TRASH)


class Kicker(str, Enum):
    STRONG = "strong"
    WEAK = "weak"
    NA = "n/a"


@dataclass(frozen=True)
class HandStrengthInfo:
    category: HandStrengthCategory
    label: str
    description: str
    vulnerability: float
    kicker: Kicker
    board_texture: BoardTexture
    is_nutted: bool
    draw_strength: Optional[DrawStrength] = None


@dataclass(frozen=True)
class BeatingHandGroup:
    hand_name: str
    combos: int
    probability: float
    example_holdings: Tuple[Tuple[Card, ...], ...]


@dataclass(frozen=True)
class WhatBeatsMeResult:
    beating_groups: Tuple[BeatingHandGroup, ...] = ()
    total_beating_combos: int = 0
    total_possible_combos: int = 0
    beating_probability: float = 0.0


@dataclass(frozen=True)
class HandOddsEntry:
    hand_type: str
    probability: float
    currently_have: bool


@dataclass(frozen=True)
class EquityResult:
    """Outcome counts of an equity run."""
    wins: float
    ties: float
    losses: float
    trials: int
    skipped: int = 0
    exact: bool = False
    truncated: bool = False

    @property
    def equity(self) -> float:
        if self.trials <= 0:
            return 0.0
        return (self.wins + self.ties / 2) / self.trials

    @property
    def std_error(self) -> float:
        """Binomial standard error of the estimate, zero when exact."""
        if self.exact or self.trials <= 0:
            return 0.0
        p = self.equity
        return (p * (1 - p) / self.trials) ** 0.5


class Action(str, Enum):
    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"
    CHECK = "check"


class Confidence(IntEnum):
    """Ordered confidence tiers with saturating steps."""
    MARGINAL = 0
    MODERATE = 1
    STRONG = 2

    def raised(self) -> "Confidence":
        return Confidence(min(self + 1, Confidence.STRONG))

    def lowered(self) -> "Confidence":
        return Confidence(max(self - 1, Confidence.MARGINAL))

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Recommendation:
    action: Action
    confidence: Confidence


@dataclass(frozen=True)
class ActionOption:
    action: Action
    label: str
    reasoning: str
    confidence: Confidence


@dataclass
class AnalysisRequest:
    """Input of a single analysis call, cards given as codes."""
    hole_cards: List[str]
    board_cards: List[str] = field(default_factory=list)
    variant: GameVariant = GameVariant.TEXAS_HOLDEM
    pot_size: Optional[float] = None
    amount_to_call: Optional[float] = None
    gto_mode: bool = False


@dataclass(frozen=True)
class HandStrengthSummary:
    """Flattened hand-strength view handed to the UI."""
    category: HandStrengthCategory
    label: str
    description: str
    vulnerability: float
    is_nutted: bool
    board_description: str
    draw_label: Optional[str]
    is_nut_draw: bool

    @classmethod
    def from_info(cls, info: HandStrengthInfo) -> "HandStrengthSummary":
        return cls(
            category=info.category,
            label=info.label,
            description=info.description,
            vulnerability=info.vulnerability,
            is_nutted=info.is_nutted,
            board_description=info.board_texture.description,
            draw_label=info.draw_strength.label if info.draw_strength else None,
            is_nut_draw=bool(info.draw_strength and info.draw_strength.is_nut_draw),
        )


@dataclass
class AnalysisResult:
    hole_cards: List[Card]
    board_cards: List[Card]
    variant: GameVariant
    street: Street
    equity: float
    outs: List[OutInfo]
    total_clean_outs: int
    total_dirty_outs: int
    pot_odds: Optional[float]
    pot_odds_ratio: str
    recommended_action: Action
    top_actions: List[ActionOption]
    hand_odds: List[HandOddsEntry]
    what_beats_me: WhatBeatsMeResult
    hand_name: str
    improved_hand_name: Optional[str]
    hand_strength: HandStrengthSummary
    explanation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON wire shape."""
        def codes(cards):
            return [c.to_short() for c in cards]

        return {
            "holeCards": codes(self.hole_cards),
            "boardCards": codes(self.board_cards),
            "variant": self.variant.value,
            "street": self.street.value,
            "equity": self.equity,
            "outs": [
                {
                    "type": o.draw_type.value,
                    "outs": codes(o.outs),
                    "count": o.count,
                    "isClean": o.is_clean,
                }
                for o in self.outs
            ],
            "totalCleanOuts": self.total_clean_outs,
            "totalDirtyOuts": self.total_dirty_outs,
            "potOdds": self.pot_odds,
            "potOddsRatio": self.pot_odds_ratio,
            "recommendedAction": self.recommended_action.value,
            "topActions": [
                {
                    "action": a.action.value,
                    "label": a.label,
                    "reasoning": a.reasoning,
                    "confidence": a.confidence.label,
                }
                for a in self.top_actions
            ],
            "handOdds": [
                {
                    "handType": h.hand_type,
                    "probability": h.probability,
                    "currentlyHave": h.currently_have,
                }
                for h in self.hand_odds
            ],
            "whatBeatsMe": {
                "beatingGroups": [
                    {
                        "handName": g.hand_name,
                        "combos": g.combos,
                        "probability": g.probability,
                        "exampleHoldings": [codes(h) for h in g.example_holdings],
                    }
                    for g in self.what_beats_me.beating_groups
                ],
                "totalBeatingCombos": self.what_beats_me.total_beating_combos,
                "totalPossibleCombos": self.what_beats_me.total_possible_combos,
                "beatingProbability": self.what_beats_me.beating_probability,
            },
            "handName": self.hand_name,
            "improvedHandName": self.improved_hand_name,
            "handStrength": {
                "category": self.hand_strength.category.value,
                "label": self.hand_strength.label,
                "description": self.hand_strength.description,
                "vulnerability": self.hand_strength.vulnerability,
                "isNutted": self.hand_strength.is_nutted,
                "boardDescription": self.hand_strength.board_description,
                "drawLabel": self.hand_strength.draw_label,
                "isNutDraw": self.hand_strength.is_nut_draw,
            },
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class RecognitionResult:
    """Cards read from photos by the vision service. Untrusted input."""
    hole_cards: Tuple[str, ...] = ()
    board_cards: Tuple[str, ...] = ()
    confidence: str = "low"
    ambiguous: bool = True
    message: Optional[str] = None
