"""Integration tests for the speech synthesis HTTP endpoint."""

from fastapi.testclient import TestClient

from rehearsal.ai.providers.tts.stub import SILENT_MP3, StubTTSProvider
from rehearsal.api.http.dependencies import get_speech_service
from rehearsal.domains.voice.service import SpeechService
from rehearsal.main import app


class TestSpeechHTTP:
    def test_synthesize(self, client: TestClient, tts_provider: StubTTSProvider) -> None:
        resp = client.post("/api/v1/tts", json={"text": "(happy) Hi there", "voice_id": "v1"})
        assert resp.status_code == 200

        assert resp.content == SILENT_MP3
        assert resp.headers["content-type"] == "audio/mpeg"
        assert tts_provider.calls == [("(happy) Hi there", "v1")]

    def test_default_voice(self, client: TestClient, tts_provider: StubTTSProvider) -> None:
        resp = client.post("/api/v1/tts", json={"text": "Hi"})
        assert resp.status_code == 200

        _, voice = tts_provider.calls[0]
        assert voice

    def test_blank_text_returns_400(self, client: TestClient) -> None:
        resp = client.post("/api/v1/tts", json={"text": "   "})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "MISSING_FIELD"

    def test_invalid_format_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/v1/tts", json={"text": "Hi", "format": "flac"})
        assert resp.status_code == 422

    def test_disabled_returns_503(self, client: TestClient) -> None:
        app.dependency_overrides[get_speech_service] = lambda: SpeechService(
            StubTTSProvider(), enabled=False
        )

        resp = client.post("/api/v1/tts", json={"text": "Hi"})

        assert resp.status_code == 503
        assert resp.json()["error"]["code"] == "CONFIGURATION_ERROR"
