"""Integration tests for the end-to-end request flow.

These tests drive the client, the FastAPI app, the dispatcher and a vendor
adapter together. Only the vendor itself is stubbed, with an httpx transport.
"""

import asyncio
import base64

import httpx
import pytest

from src.config.settings import Settings
from src.tts_matrix.api import create_app
from src.tts_matrix.client import TTSClient, TTSClientError
from src.tts_matrix.models import ErrorKind, TTSRequest
from src.tts_matrix.tts import create_dispatcher
from src.tts_matrix.tts.audio import decode_data_uri


def build_client(settings: Settings, vendor: httpx.AsyncBaseTransport) -> TTSClient:
    app = create_app(settings, dispatcher=create_dispatcher(settings, transport=vendor))
    return TTSClient("http://proxy.test", transport=httpx.ASGITransport(app=app))


@pytest.mark.integration
class TestEndToEnd:
    """Integration tests for the proxy round trip."""

    @pytest.mark.asyncio
    async def test_slow_vendor_round_trip(self, audio_bytes: bytes) -> None:
        """Test a vendor answering 10,000 bytes after 250 ms."""

        async def vendor(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.25)
            return httpx.Response(200, content=audio_bytes, headers={"content-type": "audio/mpeg"})

        settings = Settings()
        settings.elevenlabs.api_key = "el-key"
        client = build_client(settings, httpx.MockTransport(vendor))

        response = await client.generate(
            "elevenlabs", TTSRequest(text="Hello", language="en", voice_gender="female")
        )

        assert response.success is True
        assert response.audio_size == 10000
        assert response.text_length == 5
        assert 240 <= response.generation_time < 2000
        assert decode_data_uri(response.audio_url) == ("audio/mpeg", audio_bytes)

    @pytest.mark.asyncio
    async def test_compare_mixed_outcomes(self, tts_request: TTSRequest) -> None:
        """Test a comparison where vendors succeed, fail and are unconfigured."""
        encoded = base64.b64encode(b"hume-audio").decode()

        def vendor(request: httpx.Request) -> httpx.Response:
            if request.url.host == "api.hume.ai":
                return httpx.Response(200, json={"audio": encoded})
            return httpx.Response(401, text="invalid api key")

        settings = Settings()
        settings.hume.api_key = "hu-key"
        settings.speechify.api_key = "sp-key"
        client = build_client(settings, httpx.MockTransport(vendor))

        results = {
            result.service: result
            async for result in client.compare(tts_request, ["hume", "speechify", "papla", "demo", "nope"])
        }

        assert results["hume"].success
        assert results["hume"].response.audio_size == len(b"hume-audio")
        assert results["demo"].success
        assert results["speechify"].error == "Speechify: Speechify API error 401: invalid api key"
        assert results["papla"].error == "Papla AI: Papla AI API key not configured"
        assert results["nope"].error == "Unknown TTS service: nope"

    @pytest.mark.asyncio
    async def test_rejected_request_never_reaches_vendor(self, recording_transport) -> None:
        """Test an invalid gender is rejected before any vendor call."""
        vendor = recording_transport(lambda request: httpx.Response(200, content=b"audio"))
        settings = Settings()
        settings.papla.api_key = "pa-key"
        app = create_app(settings, dispatcher=create_dispatcher(settings, transport=vendor))

        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://proxy.test") as http:
            response = await http.post(
                "/api/tts",
                params={"service": "papla"},
                json={"text": "Hello", "language": "en", "voiceGender": "robot"},
            )

        assert response.status_code == 400
        assert vendor.requests == []

    @pytest.mark.asyncio
    async def test_client_error_status(self, tts_request: TTSRequest) -> None:
        """Test the client raises with the server status for an unknown service."""
        client = build_client(Settings(), httpx.MockTransport(lambda request: httpx.Response(500)))

        with pytest.raises(TTSClientError) as exc_info:
            await client.generate("openai", tts_request)

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_compare_survives_malformed_vendor(self, tts_request: TTSRequest) -> None:
        """Test one vendor's malformed JSON does not cost the other results."""
        settings = Settings()
        settings.speechify.api_key = "sp-key"
        dispatcher = create_dispatcher(
            settings, transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))
        )

        results = {result.service: result async for result in dispatcher.compare(tts_request, ["speechify", "demo"])}

        assert results["demo"].ok
        assert results["speechify"].kind == ErrorKind.UPSTREAM_PROTOCOL
        assert results["speechify"].message == "Speechify: Speechify response is not a JSON object"
