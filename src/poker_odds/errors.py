"""Exception types raised by the analysis engine."""

from typing import Iterable, List


class PokerOddsError(Exception):
    """Base class for all poker-odds errors."""


class InvalidCardsError(PokerOddsError, ValueError):
    """Input cards failed validation.

    Carries every problem found so a caller can fix them all at once.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid cards")


class EvaluationError(PokerOddsError, ValueError):
    """The evaluator was handed a malformed card set."""


class SimulationError(PokerOddsError, RuntimeError):
    """A Monte Carlo run could not produce a trustworthy estimate."""


class RecognitionError(PokerOddsError, RuntimeError):
    """The card recognition service could not read the photos."""
