"""Card recognition from photos through a vision model.

Recognized cards are untrusted: callers must run them through
validate_cards before analysis.
"""

import base64
import json
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

import requests

from poker_odds import config
from poker_odds.ai.client import AIClient
from poker_odds.ai.prompts import CARD_RECOGNITION_SYSTEM, build_recognition_prompt
from poker_odds.analysis.validation import is_valid_card
from poker_odds.errors import RecognitionError
from poker_odds.logging_config import get_logger
from poker_odds.models.analysis import RecognitionResult

logger = get_logger(__name__)

ImageInput = Union[bytes, str, Path]

RETAKE_HAND = ("Could not clearly identify your hole cards. Please retake the photo with "
               "every card fully visible and well-lit, or enter the cards manually.")
RETAKE_BOARD = ("Could not clearly identify the board cards. Please retake the photo with "
                "all board cards fully visible, or enter the cards manually.")
SERVICE_FAILED = ("Card recognition is unavailable right now. Please try again with a clearer "
                  "photo or enter the cards manually.")

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_PNG_MAGIC = b"\x89PNG"


def to_data_url(image: ImageInput) -> str:
    """Encode raw bytes, a file path, base64 text or a data URL as a data URL."""
    if isinstance(image, Path):
        image = image.read_bytes()
    if isinstance(image, bytes):
        media_type = "image/png" if image.startswith(_PNG_MAGIC) else "image/jpeg"
        return f"data:{media_type};base64,{base64.b64encode(image).decode('ascii')}"
    if image.startswith("data:"):
        media_type = "image/png" if image.startswith("data:image/png") else "image/jpeg"
        image = image.split(",", 1)[1]
        return f"data:{media_type};base64,{image}"
    return f"data:image/jpeg;base64,{image}"


def parse_card_response(content: str) -> Tuple[List[str], str, Optional[str]]:
    """Pull (cards, confidence, notes) out of a model reply.

    Malformed card codes are dropped. An unparseable reply yields no cards
    and low confidence.
    """
    match = _JSON_OBJECT.search(content or "")
    if not match:
        return [], "low", "Could not parse response"
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return [], "low", "Could not parse response"
    if not isinstance(parsed, dict):
        return [], "low", "Could not parse response"

    cards = [c for c in parsed.get("cards") or [] if is_valid_card(c)]
    confidence = parsed.get("confidence") or "low"
    if confidence not in ("high", "medium", "low"):
        confidence = "low"
    return cards, confidence, parsed.get("notes") or None


class CardRecognizer:
    """Reads hole and board cards from one or two photos."""

    def __init__(self, client: Optional[AIClient] = None):
        self._client = client

    @property
    def client(self) -> AIClient:
        if self._client is None:
            self._client = AIClient(model=config.VISION_MODEL)
        return self._client

    def _recognize_image(self, image: ImageInput, image_type: str,
                         hole_count: int) -> Tuple[List[str], str, Optional[str]]:
        messages = [
            {"role": "system", "content": CARD_RECOGNITION_SYSTEM},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_recognition_prompt(image_type, hole_count)},
                    {"type": "image_url",
                     "image_url": {"url": to_data_url(image), "detail": "high"}},
                ],
            },
        ]
        content = self.client.chat(messages, model=config.VISION_MODEL,
                                   max_tokens=200, temperature=0)
        return parse_card_response(content)

    def recognize(self, hand_image: Optional[ImageInput],
                  board_image: Optional[ImageInput] = None,
                  hole_count: int = 2) -> RecognitionResult:
        """Identify cards in the photos.

        Args:
            hand_image: Photo of the hole cards.
            board_image: Optional photo of the board.
            hole_count: Hole cards expected for the variant.

        Returns:
            RecognitionResult. Unreadable photos and service failures come
            back as an ambiguous result with an actionable message.

        Raises:
            RecognitionError: No photo was given.
        """
        if not hand_image and not board_image:
            raise RecognitionError("No image provided. Please upload a photo of your cards.")

        try:
            return self._recognize(hand_image, board_image, hole_count)
        except (requests.exceptions.RequestException, RuntimeError, ValueError, OSError) as e:
            logger.warning("Card recognition failed: %s", e)
            return RecognitionResult(message=SERVICE_FAILED)

    def _recognize(self, hand_image, board_image, hole_count) -> RecognitionResult:
        hole: List[str] = []
        hand_confidence = "high"
        if hand_image:
            hole, hand_confidence, notes = self._recognize_image(hand_image, "hand", hole_count)
            if not hole or hand_confidence == "low":
                return RecognitionResult(message=notes or RETAKE_HAND)

        if not board_image:
            return RecognitionResult(hole_cards=tuple(hole), confidence=hand_confidence,
                                     ambiguous=False)

        board, board_confidence, notes = self._recognize_image(board_image, "board", hole_count)
        if not board or board_confidence == "low":
            return RecognitionResult(hole_cards=tuple(hole), message=notes or RETAKE_BOARD)

        seen = set()
        duplicates = []
        for code in hole + board:
            if code in seen and code not in duplicates:
                duplicates.append(code)
            seen.add(code)
        if duplicates:
            return RecognitionResult(
                hole_cards=tuple(hole),
                board_cards=tuple(board),
                message=(f"Duplicate card(s) detected: {', '.join(duplicates)}. Please check "
                         "your photos, the same card cannot appear twice."),
            )

        overall = "high" if hand_confidence == "high" and board_confidence == "high" else "medium"
        return RecognitionResult(hole_cards=tuple(hole), board_cards=tuple(board),
                                 confidence=overall, ambiguous=False)
