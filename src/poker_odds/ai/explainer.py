"""Optional AI elaboration of the template explanation."""

from typing import Optional

import requests

from poker_odds import config
from poker_odds.ai.client import AIClient
from poker_odds.ai.prompts import EXPLANATION_SYSTEM, build_explanation_prompt
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import AnalysisResult

logger = get_logger(__name__)


class ExplanationGenerator:
    """Asks the text model to elaborate on an analysis result.

    Failures never propagate: the template explanation already on the
    result stays the explanation of record.
    """

    def __init__(self, client: Optional[AIClient] = None):
        self._client = client

    @property
    def client(self) -> AIClient:
        if self._client is None:
            self._client = AIClient(model=config.TEXT_MODEL)
        return self._client

    def explain(self, result: AnalysisResult) -> Optional[str]:
        """Return elaborated text, or None when the service is unavailable."""
        try:
            text = self.client.ask(
                prompt=build_explanation_prompt(result),
                system=EXPLANATION_SYSTEM,
                temperature=0.7,
            )
        except (requests.exceptions.RequestException, RuntimeError, ValueError) as e:
            logger.warning("Explanation service failed, keeping template text: %s", e)
            return None
        return text.strip() or None
