"""Tests for the AI client, explainer and card recognizer (HTTP mocked)."""

import json
import random
from unittest.mock import MagicMock, patch

import pytest
import requests

from poker_odds import config
from poker_odds.analysis.analyzer import HandAnalyzer
from poker_odds.models.analysis import AnalysisRequest
from poker_odds.ai.client import AIClient
from poker_odds.ai.explainer import ExplanationGenerator
from poker_odds.ai.prompts import build_explanation_prompt, build_recognition_prompt
from poker_odds.ai.recognizer import (
    RETAKE_BOARD, RETAKE_HAND, SERVICE_FAILED, CardRecognizer, parse_card_response,
    to_data_url,
)
from poker_odds.errors import RecognitionError


def stream_response(*chunks, ok=True):
    """A fake streaming response yielding SSE lines."""
    lines = [f"data: {json.dumps({'choices': [{'delta': {'content': c}}]})}".encode()
             for c in chunks]
    lines.append(b"data: [DONE]")
    response = MagicMock()
    response.ok = ok
    response.iter_lines.return_value = lines
    return response


class TestAIClient:
    """Tests for AIClient."""

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.setattr(config, "AI_API_KEY", "")
        with pytest.raises(ValueError):
            AIClient()

    def test_url(self):
        assert AIClient(api_key="k", endpoint="https://x/v1/").url == "https://x/v1/chat/completions"
        assert (AIClient(api_key="k", endpoint="https://x/v1/chat/completions").url
                == "https://x/v1/chat/completions")

    @patch("poker_odds.ai.client.requests.post")
    def test_chat_joins_stream(self, mock_post):
        mock_post.return_value = stream_response("Call ", "the ", "bet.")
        client = AIClient(api_key="k", endpoint="https://x/v1")
        assert client.ask("why?", system="be brief") == "Call the bet."

        payload = mock_post.call_args.kwargs["json"]
        assert payload["stream"] is True
        assert payload["messages"][0] == {"role": "system", "content": "be brief"}
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer k"

    @patch("poker_odds.ai.client.time.sleep")
    @patch("poker_odds.ai.client.requests.post")
    def test_retries_transport_errors(self, mock_post, mock_sleep):
        mock_post.side_effect = [requests.exceptions.ConnectionError("down"),
                                 stream_response("ok")]
        client = AIClient(api_key="k", max_retries=2)
        assert client.ask("hi") == "ok"
        assert mock_post.call_count == 2
        mock_sleep.assert_called_once_with(1)

    @patch("poker_odds.ai.client.time.sleep")
    @patch("poker_odds.ai.client.requests.post")
    def test_gives_up_after_retries(self, mock_post, mock_sleep):
        mock_post.side_effect = requests.exceptions.Timeout("slow")
        client = AIClient(api_key="k", max_retries=1)
        with pytest.raises(requests.exceptions.Timeout):
            client.ask("hi")
        assert mock_post.call_count == 2

    @patch("poker_odds.ai.client.requests.post")
    def test_empty_stream(self, mock_post):
        mock_post.return_value = stream_response()
        with pytest.raises(RuntimeError):
            AIClient(api_key="k", max_retries=0).ask("hi")

    @patch("poker_odds.ai.client.requests.post")
    def test_malformed_chunks_skipped(self, mock_post):
        response = stream_response("fine")
        response.iter_lines.return_value = [b"", b": keep-alive", b"data: {oops"] + \
            response.iter_lines.return_value
        mock_post.return_value = response
        assert AIClient(api_key="k").ask("hi") == "fine"


class TestExplanationGenerator:
    """The explainer never raises."""

    def _result(self):
        request = AnalysisRequest(hole_cards=["Ah", "Ad"],
                                  board_cards=["Ks", "Qs", "Js", "2c", "3c"])
        return HandAnalyzer(equity_trials=10, hand_odds_trials=10,
                            rng=random.Random(1)).analyze(request)

    def test_returns_text(self):
        client = MagicMock()
        client.ask.return_value = "  Fold to big bets.  "
        assert ExplanationGenerator(client).explain(self._result()) == "Fold to big bets."

    def test_failure_returns_none(self):
        client = MagicMock()
        client.ask.side_effect = requests.exceptions.ConnectionError("down")
        assert ExplanationGenerator(client).explain(self._result()) is None

    def test_prompt_describes_result(self):
        prompt = build_explanation_prompt(self._result())
        assert "Street: river" in prompt
        assert "Ah, Ad" in prompt
        assert "Pot odds: N/A" in prompt


class TestCardParsing:
    """Tests for reply parsing and image encoding."""

    def test_parse_reply_with_noise(self):
        content = 'Sure! {"cards": ["Ah", "Kd", "10s"], "confidence": "high", "notes": ""}'
        cards, confidence, notes = parse_card_response(content)
        assert cards == ["Ah", "Kd"]
        assert confidence == "high"
        assert notes is None

    def test_parse_garbage(self):
        assert parse_card_response("no idea") == ([], "low", "Could not parse response")

    def test_unknown_confidence_is_low(self):
        _, confidence, _ = parse_card_response('{"cards": ["Ah"], "confidence": "sure"}')
        assert confidence == "low"

    def test_png_bytes(self):
        assert to_data_url(b"\x89PNG\r\n").startswith("data:image/png;base64,")

    def test_jpeg_base64_text(self):
        assert to_data_url("abcd") == "data:image/jpeg;base64,abcd"

    def test_data_url_passthrough(self):
        assert to_data_url("data:image/png;base64,abcd") == "data:image/png;base64,abcd"

    def test_recognition_prompt(self):
        prompt = build_recognition_prompt("hand", 4)
        assert "4 private" in prompt
        assert '"Xs", "Xh", "Xd", "Xc"' in prompt


def reply(cards, confidence="high", notes=""):
    return json.dumps({"cards": cards, "confidence": confidence, "notes": notes})


class TestCardRecognizer:
    """Tests for CardRecognizer with a fake client."""

    def test_hand_and_board(self):
        client = MagicMock()
        client.chat.side_effect = [reply(["Ah", "Kd"]), reply(["Qc", "Js", "Th"], "medium")]
        result = CardRecognizer(client).recognize(b"hand", b"board")
        assert not result.ambiguous
        assert result.hole_cards == ("Ah", "Kd")
        assert result.board_cards == ("Qc", "Js", "Th")
        assert result.confidence == "medium"

    def test_hand_only(self):
        client = MagicMock()
        client.chat.return_value = reply(["Ah", "Kd"])
        result = CardRecognizer(client).recognize(b"hand")
        assert result.confidence == "high"
        assert result.board_cards == ()

    def test_low_confidence_asks_for_retake(self):
        client = MagicMock()
        client.chat.return_value = reply(["Ah"], "low")
        result = CardRecognizer(client).recognize(b"hand")
        assert result.ambiguous
        assert result.message == RETAKE_HAND

    def test_unreadable_board(self):
        client = MagicMock()
        client.chat.side_effect = [reply(["Ah", "Kd"]), reply([])]
        result = CardRecognizer(client).recognize(b"hand", b"board")
        assert result.ambiguous
        assert result.hole_cards == ("Ah", "Kd")
        assert result.message == RETAKE_BOARD

    def test_duplicates_flagged(self):
        client = MagicMock()
        client.chat.side_effect = [reply(["Ah", "Kd"]), reply(["Ah", "Js", "Th"])]
        result = CardRecognizer(client).recognize(b"hand", b"board")
        assert result.ambiguous
        assert "Duplicate card(s) detected: Ah" in result.message

    def test_service_failure(self):
        client = MagicMock()
        client.chat.side_effect = requests.exceptions.ConnectionError("down")
        result = CardRecognizer(client).recognize(b"hand")
        assert result.ambiguous
        assert result.message == SERVICE_FAILED

    def test_no_image(self):
        with pytest.raises(RecognitionError):
            CardRecognizer(MagicMock()).recognize(None)
