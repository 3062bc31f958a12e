"""Unit tests for the Fish Audio TTS provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from rehearsal.ai.providers.tts.fish_audio import FishAudioTTSProvider
from rehearsal.exceptions import SpeechSynthesisError


class TestFishAudioTTSProvider:
    """Tests for FishAudioTTSProvider."""

    @pytest.fixture
    def provider(self):
        """Create a Fish Audio provider instance."""
        return FishAudioTTSProvider(api_key="test_api_key", default_voice="voice-default")

    @pytest.fixture
    def mock_audio_data(self):
        """Create mock audio data."""
        return b"fake_mp3_audio_data_here"

    def _client(self, post):
        mock_client_instance = AsyncMock()
        mock_client_instance.post = post
        return mock_client_instance

    def test_name_property(self, provider):
        """Test provider name property."""
        assert provider.name == "fish_audio"

    def test_defaults(self):
        """Test default endpoint, model and voice."""
        provider = FishAudioTTSProvider(api_key="k")
        assert provider.endpoint == "https://api.fish.audio/v1/tts"
        assert provider.model == "s1"
        assert provider.default_voice == FishAudioTTSProvider.DEFAULT_VOICE

    @pytest.mark.asyncio
    async def test_synthesize_success(self, provider, mock_audio_data):
        """Test successful synthesis sends the documented request."""
        mock_http_response = MagicMock()
        mock_http_response.content = mock_audio_data
        mock_http_response.raise_for_status = MagicMock()
        post = AsyncMock(return_value=mock_http_response)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(post)

            result = await provider.synthesize(
                text="(curious) Could you elaborate?",
                voice="voice-mike",
                format="mp3",
            )

        assert result.audio_data == mock_audio_data
        assert result.format == "mp3"
        assert result.media_type == "audio/mpeg"

        args, kwargs = post.call_args
        assert args[0] == "https://api.fish.audio/v1/tts"
        assert kwargs["json"] == {
            "text": "(curious) Could you elaborate?",
            "format": "mp3",
            "reference_id": "voice-mike",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer test_api_key"
        assert kwargs["headers"]["model"] == "s1"

    @pytest.mark.asyncio
    async def test_synthesize_uses_default_voice(self, provider, mock_audio_data):
        """Test that a missing voice falls back to the default voice."""
        mock_http_response = MagicMock()
        mock_http_response.content = mock_audio_data
        post = AsyncMock(return_value=mock_http_response)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(post)
            await provider.synthesize(text="Hello", voice="  ")

        assert post.call_args.kwargs["json"]["reference_id"] == "voice-default"

    @pytest.mark.asyncio
    async def test_synthesize_wav_media_type(self, provider):
        """Test that the media type follows the requested format."""
        mock_http_response = MagicMock()
        mock_http_response.content = b"RIFF"

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(AsyncMock(return_value=mock_http_response))
            result = await provider.synthesize(text="Hello", format="wav")

        assert result.media_type == "audio/wav"

    @pytest.mark.asyncio
    async def test_synthesize_timeout(self, provider):
        """Test handling of timeout error."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(
                AsyncMock(side_effect=httpx.TimeoutException("Timeout"))
            )

            with pytest.raises(SpeechSynthesisError) as exc_info:
                await provider.synthesize(text="Hello")

        assert exc_info.value.message == "Speech synthesis timed out"

    @pytest.mark.asyncio
    async def test_synthesize_http_error(self, provider):
        """Test handling of HTTP error."""
        mock_request = MagicMock()
        mock_response = MagicMock()
        mock_response.status_code = 403
        mock_response.text = "API key invalid"

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(
                AsyncMock(
                    side_effect=httpx.HTTPStatusError(
                        "Forbidden",
                        request=mock_request,
                        response=mock_response,
                    )
                )
            )

            with pytest.raises(SpeechSynthesisError) as exc_info:
                await provider.synthesize(text="Hello")

        error = exc_info.value
        assert error.details["status_code"] == 403
        assert error.details["body"] == "API key invalid"
        assert error.retryable is False

    @pytest.mark.asyncio
    async def test_synthesize_server_error_is_retryable(self, provider):
        """Test that 5xx responses are marked retryable."""
        mock_response = MagicMock()
        mock_response.status_code = 503
        mock_response.text = "unavailable"

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(
                AsyncMock(
                    side_effect=httpx.HTTPStatusError(
                        "Unavailable", request=MagicMock(), response=mock_response
                    )
                )
            )

            with pytest.raises(SpeechSynthesisError) as exc_info:
                await provider.synthesize(text="Hello")

        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_synthesize_transport_error(self, provider):
        """Test handling of connection errors."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value = self._client(
                AsyncMock(side_effect=httpx.ConnectError("refused"))
            )

            with pytest.raises(SpeechSynthesisError):
                await provider.synthesize(text="Hello")

    @pytest.mark.asyncio
    async def test_close(self, provider):
        """Test that close releases the client."""
        mock_http_response = MagicMock()
        mock_http_response.content = b""

        with patch("httpx.AsyncClient") as mock_client:
            client = self._client(AsyncMock(return_value=mock_http_response))
            mock_client.return_value = client
            await provider.synthesize(text="Hello")
            await provider.close()

        client.aclose.assert_awaited_once()
        assert provider._client is None
