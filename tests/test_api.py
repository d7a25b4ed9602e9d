"""
HTTP-level tests for the relay endpoint: envelopes, status codes and CORS.
"""
import pytest
from fastapi.testclient import TestClient

from zora.exceptions import ConfigurationError, QuotaExhausted, RateLimited, RelayError, UpstreamError
from zora.main import app, get_relay_service
from zora.services.relay_service import RelayService


@pytest.fixture
def client(relay_service):
    app.dependency_overrides[get_relay_service] = lambda: relay_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRelayEndpoint:

    def test_success_envelope(self, client, gateway):
        gateway.complete.return_value = "🎵 Happy by Pharrell Williams - this will cheer you up!"

        response = client.post("/zora-chat", json={
            "message": "Play a happy song", "emotion": "calm", "language": "en-US",
        })

        assert response.status_code == 200
        assert response.json() == {
            "message": "🎵 Happy by Pharrell Williams - this will cheer you up!",
            "emotion": "excited",
            "music": {
                "title": "Happy",
                "artist": "Pharrell Williams",
                "searchQuery": "Happy%20Pharrell%20Williams",
            },
        }

    def test_music_is_null_without_cue(self, client, gateway):
        gateway.complete.return_value = "Paris is the capital of France."
        response = client.post("/zora-chat", json={"message": "Capital of France?"})
        assert response.status_code == 200
        assert response.json() == {
            "message": "Paris is the capital of France.",
            "emotion": "calm",
            "music": None,
        }

    def test_empty_message(self, client, gateway):
        response = client.post("/zora-chat", json={"message": ""})
        assert response.status_code == 500
        assert response.json() == {"error": "Message is required"}
        gateway.complete.assert_not_called()

    def test_missing_message(self, client, gateway):
        response = client.post("/zora-chat", json={"emotion": "happy"})
        assert response.status_code == 500
        assert response.json() == {"error": "Message is required"}
        gateway.complete.assert_not_called()

    def test_unknown_emotion_is_rejected_in_envelope(self, client, gateway):
        response = client.post("/zora-chat", json={"message": "Hi", "emotion": "angry"})
        assert response.status_code == 500
        assert set(response.json()) == {"error"}
        gateway.complete.assert_not_called()

    def test_malformed_json(self, client):
        response = client.post("/zora-chat", content=b"{not json",
                               headers={"Content-Type": "application/json"})
        assert response.status_code == 500
        assert "error" in response.json()

    def test_rate_limited(self, client, gateway):
        gateway.complete.side_effect = RateLimited()
        response = client.post("/zora-chat", json={"message": "Hi"})
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded. Please try again in a moment."}

    def test_quota_exhausted(self, client, gateway):
        gateway.complete.side_effect = QuotaExhausted()
        response = client.post("/zora-chat", json={"message": "Hi"})
        assert response.status_code == 402
        assert response.json() == {"error": "AI credits depleted. Please add more credits."}

    def test_upstream_error(self, client, gateway):
        gateway.complete.side_effect = UpstreamError("AI gateway error: 503")
        response = client.post("/zora-chat", json={"message": "Hi"})
        assert response.status_code == 500
        assert response.json() == {"error": "AI gateway error: 503"}

    def test_unexpected_error_is_enveloped(self, client, gateway):
        gateway.complete.side_effect = RuntimeError("boom")
        response = client.post("/zora-chat", json={"message": "Hi"})
        assert response.status_code == 500
        assert response.json() == {"error": "boom"}

    def test_missing_api_key(self, gateway, fixed_clock, monkeypatch):
        monkeypatch.delenv("LOVABLE_API_KEY", raising=False)
        service = RelayService(gateway=gateway, clock=fixed_clock)
        app.dependency_overrides[get_relay_service] = lambda: service
        try:
            response = TestClient(app).post("/zora-chat", json={"message": "Hi"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "LOVABLE_API_KEY not configured"}
        gateway.complete.assert_not_called()


class TestErrorHandlers:

    def test_relay_error_handler_is_registered(self):
        assert RelayError in app.exception_handlers

    def test_relay_error_from_dependency_is_enveloped(self):
        def broken_service():
            raise ConfigurationError("relay service unavailable")

        app.dependency_overrides[get_relay_service] = broken_service
        try:
            response = TestClient(app).post("/zora-chat", json={"message": "Hi"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "relay service unavailable"}

    def test_unexpected_error_carries_cors_headers(self, client, gateway):
        gateway.complete.side_effect = RuntimeError("boom")
        response = client.post("/zora-chat", json={"message": "Hi"},
                               headers={"Origin": "https://zora.example"})
        assert response.status_code == 500
        assert response.json() == {"error": "boom"}
        assert response.headers["access-control-allow-origin"] == "*"


class TestCors:

    def test_preflight(self, client):
        response = client.options("/zora-chat", headers={
            "Origin": "https://zora.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type, authorization",
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_error_responses_carry_cors_headers(self, client, gateway):
        gateway.complete.side_effect = RateLimited()
        response = client.post("/zora-chat", json={"message": "Hi"},
                               headers={"Origin": "https://zora.example"})
        assert response.status_code == 429
        assert response.headers["access-control-allow-origin"] == "*"


class TestDiscovery:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "/zora-chat" in response.json()["endpoints"]

    def test_health_reports_api_key(self, client, monkeypatch):
        monkeypatch.setenv("LOVABLE_API_KEY", "set")
        assert client.get("/health").json() == {"status": "healthy", "api_key_configured": True}

        monkeypatch.delenv("LOVABLE_API_KEY")
        assert client.get("/health").json()["api_key_configured"] is False
