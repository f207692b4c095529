"""Chat-completion client for the AI provider (OpenAI-compatible interface).

Uses streaming so the connection stays alive while tokens are generated.
"""

from typing import Any, Dict, List, Optional
import json
import time

import requests

from poker_odds import config
from poker_odds.logging_config import get_logger

logger = get_logger(__name__)


class AIClient:
    """Wrapper around an OpenAI-compatible chat/completions endpoint."""

    def __init__(self, api_key: Optional[str] = None,
                 model: Optional[str] = None,
                 endpoint: Optional[str] = None,
                 timeout: Optional[float] = None,
                 max_retries: Optional[int] = None):
        self.api_key = api_key or config.AI_API_KEY
        if not self.api_key:
            raise ValueError(
                "POKER_ODDS_AI_API_KEY not set. "
                "Set it via environment variable or pass api_key=."
            )
        self.model = model or config.TEXT_MODEL
        self.endpoint = endpoint or config.AI_API_ENDPOINT
        self.timeout = timeout or config.AI_TIMEOUT
        self.max_retries = config.AI_MAX_RETRIES if max_retries is None else max_retries

    @property
    def url(self) -> str:
        if self.endpoint.endswith("/chat/completions"):
            return self.endpoint
        return f"{self.endpoint.rstrip('/')}/chat/completions"

    def chat(self, messages: List[Dict[str, Any]],
             model: Optional[str] = None,
             max_tokens: Optional[int] = None,
             temperature: Optional[float] = None) -> str:
        """Send chat messages and return the concatenated reply text.

        Timeouts and transport errors are retried with exponential backoff;
        the last error is re-raised.
        """
        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "max_tokens": max_tokens or config.MAX_TOKENS,
            "stream": True,
        }
        if temperature is not None:
            payload["temperature"] = temperature

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        for attempt in range(self.max_retries + 1):
            try:
                response = requests.post(
                    self.url, json=payload, headers=headers,
                    timeout=self.timeout, stream=True,
                )
                if not response.ok:
                    logger.warning("AI provider returned %s: %s",
                                   response.status_code, response.text[:300])
                    response.raise_for_status()

                content = self._read_stream(response)
                if content:
                    return content
                raise RuntimeError("Streaming response returned empty content")

            except requests.exceptions.RequestException as e:
                if attempt < self.max_retries:
                    wait = 2 ** attempt
                    logger.warning("AI request failed, retry %d/%d in %ds: %s",
                                   attempt + 1, self.max_retries, wait, str(e)[:100])
                    time.sleep(wait)
                    continue
                raise

    def ask(self, prompt: str, system: str = "",
            model: Optional[str] = None,
            max_tokens: Optional[int] = None,
            temperature: Optional[float] = None) -> str:
        """Send a text prompt with an optional system message."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return self.chat(messages, model=model, max_tokens=max_tokens,
                         temperature=temperature)

    @staticmethod
    def _read_stream(response: requests.Response) -> str:
        """Read an SSE stream and return the concatenated content."""
        response.encoding = "utf-8"
        collected = []
        for raw_line in response.iter_lines():
            if not raw_line:
                continue
            line = raw_line.decode("utf-8") if isinstance(raw_line, bytes) else raw_line
            # SSE format: "data: {...}" or "data: [DONE]"
            if not line.startswith("data: "):
                continue
            data = line[6:]
            if data.strip() == "[DONE]":
                break
            try:
                chunk = json.loads(data)
                text = chunk["choices"][0].get("delta", {}).get("content", "")
            except (json.JSONDecodeError, KeyError, IndexError):
                logger.debug("Ignoring malformed stream chunk: %s", data[:80])
                continue
            if text:
                collected.append(text)
        return "".join(collected)
