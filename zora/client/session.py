"""
CONVERSATION SESSION
====================

Client-side record of one conversation with Zora and the single-flight guard
around relay calls. Lives as long as the client (one browser tab, one
chat_cli.py run); nothing is persisted.

STATES:
  IDLE            - ready to send.
  AWAITING_REPLY  - a relay call is outstanding; new sends are ignored.

FLOW (send):
  1. Ignore blank messages and any send while AWAITING_REPLY.
  2. Append the user turn, switch the current emotion to the one being sent.
  3. Call the relay once.
  4. Success: append the assistant turn, adopt its emotion, speak it.
     Failure: append the fallback assistant turn (calm).
  5. Back to IDLE in every case.

The guard is cooperative: callers check it, nothing preempts a running call.
"""

import logging
from enum import Enum
from typing import List, Optional

import requests

from config import CLIENT_ERROR_FALLBACK, DEFAULT_LANGUAGE, RELAY_URL
from zora.client.speech import (
    SpeechRecognizer,
    SpeechSynthesizer,
    UnavailableRecognizer,
    UnavailableSynthesizer,
    detect_capabilities,
)
from zora.exceptions import QuotaExhausted, RateLimited, UpstreamError, ZoraError
from zora.models import (
    DEFAULT_EMOTION,
    ChatTurn,
    Emotion,
    RelayRequest,
    RelayResponse,
    Role,
)

logger = logging.getLogger("Zora")

RELAY_TIMEOUT_SECONDS = 60


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class RelayClient:
    """HTTP client for POST /zora-chat. Raises the relay's typed errors on failure."""

    def __init__(self, url: str = RELAY_URL, timeout: float = RELAY_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.http = session or requests.Session()

    def send(self, request: RelayRequest) -> RelayResponse:
        response = self.http.post(
            self.url,
            json=request.model_dump(mode="json", exclude_none=True),
            timeout=self.timeout,
        )
        if response.status_code == 200:
            return RelayResponse.model_validate(response.json())

        detail = _error_detail(response)
        if response.status_code == 429:
            raise RateLimited(detail)
        if response.status_code == 402:
            raise QuotaExhausted(detail)
        raise UpstreamError(f"Relay error {response.status_code}: {detail}")


def _error_detail(response: requests.Response) -> str:
    try:
        err = response.json()
        if isinstance(err, dict) and isinstance(err.get("error"), str):
            return err["error"]
    except ValueError:
        pass
    return response.text


class ConversationSession:

    def __init__(
        self,
        relay: Optional[RelayClient] = None,
        language: str = DEFAULT_LANGUAGE,
        synthesizer: Optional[SpeechSynthesizer] = None,
        recognizer: Optional[SpeechRecognizer] = None,
    ):
        self.relay = relay or RelayClient()
        self.language = language
        self.synthesizer = synthesizer or UnavailableSynthesizer(language)
        self.recognizer = recognizer or UnavailableRecognizer(language)
        self.messages: List[ChatTurn] = []
        self.current_emotion: Emotion = DEFAULT_EMOTION
        self.is_loading = False
        # Shown once by the UI; missing speech never stops the text flow.
        self.notices: List[str] = detect_capabilities(self.recognizer, self.synthesizer)
        self.recognizer.subscribe(self._on_transcript)

    @property
    def state(self) -> SessionState:
        return SessionState.AWAITING_REPLY if self.is_loading else SessionState.IDLE

    def set_language(self, language: str) -> None:
        self.language = language
        self.synthesizer.language = language
        self.recognizer.language = language

    def send(self, text: str, emotion: Optional[Emotion] = None) -> Optional[RelayResponse]:
        """
        Send one user message through the relay.

        Returns the relay reply, or None if the send was ignored or failed.
        """
        if self.is_loading or not text or not text.strip():
            return None

        emotion = emotion or self.current_emotion
        self.is_loading = True
        try:
            self.messages.append(ChatTurn(role=Role.USER, content=text, emotion=emotion))
            self.current_emotion = emotion

            try:
                reply = self.relay.send(RelayRequest(message=text, emotion=emotion, language=self.language))
            except (ZoraError, requests.exceptions.RequestException, ValueError) as e:
                logger.error("Error sending message: %s", e)
                self.messages.append(ChatTurn(role=Role.ASSISTANT, content=CLIENT_ERROR_FALLBACK,
                                              emotion=DEFAULT_EMOTION))
                return None

            self.messages.append(ChatTurn(role=Role.ASSISTANT, content=reply.message,
                                          emotion=reply.emotion, music=reply.music))
            self.current_emotion = reply.emotion
        finally:
            self.is_loading = False

        if self.synthesizer.is_supported:
            try:
                self.synthesizer.speak(reply.message, reply.emotion)
            except Exception as e:
                # The exchange already succeeded; the reply stays visible as text.
                logger.warning("Could not speak reply: %s", e)
                self.synthesizer.on_error(e)
        return reply

    # -------------------------------------------------------------------------
    # VOICE INPUT
    # -------------------------------------------------------------------------

    def start_listening(self) -> None:
        """Start speech recognition; raises ClientCapabilityUnavailable when unsupported."""
        self.recognizer.start()

    def stop_listening(self) -> None:
        self.recognizer.stop()

    def stop_speaking(self) -> None:
        self.synthesizer.cancel()

    def _on_transcript(self, transcript: str) -> None:
        self.send(transcript)
