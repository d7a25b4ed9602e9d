"""
RELAY SERVICE MODULE
====================

Turns one RelayRequest into one RelayResponse. Used by POST /zora-chat.
Stateless: nothing survives between calls, so any number of requests can be
handled in parallel with a single shared instance.

FLOW:
  1. Validate: message must be non-blank (InvalidRequest otherwise).
  2. Read the API key for this request (ConfigurationError if missing).
  3. Resolve the language name, default the emotion to calm.
  4. Build the system prompt with the server's current date/time.
  5. Call the gateway once (GatewayClient raises the typed errors).
  6. Substitute the fallback text for an empty reply.
  7. Classify the reply's emotion and extract a music cue from it.
"""

import logging
from typing import Callable, Optional

from config import API_KEY_ENV_VAR, EMPTY_REPLY_FALLBACK, get_api_key
from zora.exceptions import ConfigurationError, InvalidRequest
from zora.models import DEFAULT_EMOTION, RelayRequest, RelayResponse
from zora.services.emotion import classify
from zora.services.gateway_client import GatewayClient
from zora.services.music import extract_music
from zora.services.prompt import PromptContext, build_messages, build_system_prompt, resolve_language_name
from zora.utils.time_info import TimeInformation, get_time_information

logger = logging.getLogger("Zora")


class RelayService:

    def __init__(
        self,
        gateway: Optional[GatewayClient] = None,
        api_key_provider: Callable[[], str] = get_api_key,
        clock: Callable[[], TimeInformation] = get_time_information,
    ):
        self.gateway = gateway or GatewayClient()
        self.api_key_provider = api_key_provider
        self.clock = clock

    def handle(self, request: RelayRequest) -> RelayResponse:
        """
        Answer one user message.

        Raises:
            InvalidRequest: message missing or blank (no outbound call is made).
            ConfigurationError: the gateway API key is not configured.
            RateLimited, QuotaExhausted, UpstreamError: from the gateway call.
        """
        if not request.message or not request.message.strip():
            raise InvalidRequest("Message is required")

        api_key = self.api_key_provider()
        if not api_key:
            logger.error("%s not configured; refusing request", API_KEY_ENV_VAR)
            raise ConfigurationError(f"{API_KEY_ENV_VAR} not configured")

        emotion = request.emotion or DEFAULT_EMOTION
        language_name = resolve_language_name(request.language)
        context = PromptContext.from_time_information(emotion, language_name, self.clock())
        messages = build_messages(build_system_prompt(context), request.message)

        logger.info("Calling AI gateway with emotion: %s language: %s", emotion.value, language_name)
        reply = self.gateway.complete(messages, api_key)
        if not reply.strip():
            reply = EMPTY_REPLY_FALLBACK

        detected_emotion = classify(reply)
        music = extract_music(reply)
        logger.info("AI response: %r detected emotion: %s music: %s", reply, detected_emotion.value, music)

        return RelayResponse(message=reply, emotion=detected_emotion, music=music)
