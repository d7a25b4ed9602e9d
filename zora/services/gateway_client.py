"""
AI GATEWAY CLIENT
=================

Makes the one outbound call of a relay request: POST to the chat-completions
endpoint with a bearer key, and turn the HTTP outcome into either the reply
text or a typed RelayError.

STATUS MAPPING:
  2xx -> choices[0].message.content (or "" when missing; the relay substitutes its fallback)
  429 -> RateLimited
  402 -> QuotaExhausted
  anything else (3xx included), network errors and timeouts -> UpstreamError
"""

import logging
from typing import Any, Callable, Dict, List

import requests

from config import AI_GATEWAY_URL, AI_MAX_TOKENS, AI_MODEL, AI_TEMPERATURE, AI_TIMEOUT_SECONDS
from zora.exceptions import QuotaExhausted, RateLimited, UpstreamError

logger = logging.getLogger("Zora")


class GatewayClient:
    """
    Thin synchronous chat-completions client. Holds no per-request state.

    Each call goes through a fresh `requests.post`, so no cookies or pooled
    connections are shared between concurrent relay requests.
    """

    def __init__(
        self,
        url: str = AI_GATEWAY_URL,
        model: str = AI_MODEL,
        temperature: float = AI_TEMPERATURE,
        max_tokens: int = AI_MAX_TOKENS,
        timeout: float = AI_TIMEOUT_SECONDS,
        post: Callable[..., requests.Response] = requests.post,
    ):
        self.url = url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.post = post

    def build_payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def complete(self, messages: List[Dict[str, str]], api_key: str) -> str:
        """Send one chat-completion request and return the reply text ("" if the gateway sent none)."""
        try:
            response = self.post(
                self.url,
                json=self.build_payload(messages),
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("AI gateway timed out after %.1fs: %s", self.timeout, e)
            raise UpstreamError("AI gateway timed out") from e
        except requests.exceptions.RequestException as e:
            logger.error("AI gateway request failed: %s", e)
            raise UpstreamError(f"AI gateway request failed: {e}") from e

        # requests counts any status below 400 as ok; only 2xx carries a reply.
        if not 200 <= response.status_code < 300:
            logger.error("AI gateway error: %s %s", response.status_code, response.text)
            if response.status_code == 429:
                raise RateLimited()
            if response.status_code == 402:
                raise QuotaExhausted()
            raise UpstreamError(f"AI gateway error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("AI gateway returned invalid JSON") from e

        return extract_content(data)


def extract_content(data: Any) -> str:
    """Return choices[0].message.content as a string, or "" when any part is missing."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""
