"""
Tests for the relay pipeline: validation, configuration, prompt, gateway, reply interpretation.
"""
import pytest

from zora.exceptions import ConfigurationError, InvalidRequest, RateLimited, UpstreamError
from zora.models import Emotion, MusicCue, RelayRequest
from zora.services.relay_service import RelayService


def sent_messages(gateway):
    args, _ = gateway.complete.call_args
    return args[0]


class TestValidation:

    @pytest.mark.parametrize("message", [None, "", "   "])
    def test_missing_message_makes_no_call(self, relay_service, gateway, message):
        with pytest.raises(InvalidRequest):
            relay_service.handle(RelayRequest(message=message))
        gateway.complete.assert_not_called()

    def test_missing_api_key_makes_no_call(self, gateway, fixed_clock):
        service = RelayService(gateway=gateway, api_key_provider=lambda: "", clock=fixed_clock)
        with pytest.raises(ConfigurationError) as exc_info:
            service.handle(RelayRequest(message="Hi"))
        assert "LOVABLE_API_KEY" in exc_info.value.message
        gateway.complete.assert_not_called()

    def test_api_key_read_per_request(self, gateway, fixed_clock, monkeypatch):
        gateway.complete.return_value = "Hello"
        service = RelayService(gateway=gateway, clock=fixed_clock)

        monkeypatch.delenv("LOVABLE_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            service.handle(RelayRequest(message="Hi"))

        monkeypatch.setenv("LOVABLE_API_KEY", "now-set")
        service.handle(RelayRequest(message="Hi"))
        assert gateway.complete.call_args[0][1] == "now-set"


class TestPrompt:

    def test_defaults_to_calm_and_english(self, relay_service, gateway):
        gateway.complete.return_value = "Hello"
        relay_service.handle(RelayRequest(message="Hi"))

        system, user = sent_messages(gateway)
        assert system["role"] == "system"
        assert "Current emotion detected: calm" in system["content"]
        assert "ALWAYS respond in English language" in system["content"]
        assert user == {"role": "user", "content": "Hi"}

    def test_caller_emotion_and_language(self, relay_service, gateway):
        gateway.complete.return_value = "Hola"
        relay_service.handle(RelayRequest(message="Hola", emotion=Emotion.SAD, language="es-ES"))

        system = sent_messages(gateway)[0]["content"]
        assert "Current emotion detected: sad" in system
        assert "ALWAYS respond in Spanish language" in system

    def test_unknown_language_falls_back_to_english(self, relay_service, gateway):
        gateway.complete.return_value = "Hello"
        relay_service.handle(RelayRequest(message="Hi", language="xx-XX"))
        assert "- Language: English" in sent_messages(gateway)[0]["content"]

    def test_server_clock_in_prompt(self, relay_service, gateway):
        gateway.complete.return_value = "It's 05:07 PM right now!"
        relay_service.handle(RelayRequest(message="What time is it?"))
        system = sent_messages(gateway)[0]["content"]
        assert "- Date: Monday, October 19, 2026" in system
        assert "- Time: 05:07 PM" in system

    def test_exactly_one_gateway_call(self, relay_service, gateway):
        gateway.complete.return_value = "Hello"
        relay_service.handle(RelayRequest(message="Hi"))
        assert gateway.complete.call_count == 1


class TestReply:

    def test_play_a_happy_song(self, relay_service, gateway):
        gateway.complete.return_value = "🎵 Happy by Pharrell Williams - this will cheer you up!"

        response = relay_service.handle(
            RelayRequest(message="Play a happy song", emotion=Emotion.CALM, language="en-US")
        )

        assert response.message == "🎵 Happy by Pharrell Williams - this will cheer you up!"
        assert response.emotion == Emotion.EXCITED
        assert response.music == MusicCue(
            title="Happy", artist="Pharrell Williams", search_query="Happy%20Pharrell%20Williams"
        )

    def test_plain_reply_has_no_music(self, relay_service, gateway):
        gateway.complete.return_value = "Let me think about that."
        response = relay_service.handle(RelayRequest(message="Hi"))
        assert response.emotion == Emotion.THOUGHTFUL
        assert response.music is None

    @pytest.mark.parametrize("content", ["", "   "])
    def test_empty_reply_uses_fallback(self, relay_service, gateway, content):
        gateway.complete.return_value = content
        response = relay_service.handle(RelayRequest(message="Hi"))
        assert response.message == "I'm here with you!"
        assert response.emotion == Emotion.CALM
        assert response.music is None

    def test_gateway_errors_propagate(self, relay_service, gateway):
        gateway.complete.side_effect = RateLimited()
        with pytest.raises(RateLimited):
            relay_service.handle(RelayRequest(message="Hi"))

        gateway.complete.side_effect = UpstreamError("AI gateway error: 503")
        with pytest.raises(UpstreamError):
            relay_service.handle(RelayRequest(message="Hi"))
