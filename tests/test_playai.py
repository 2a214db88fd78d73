"""Unit tests for PlayAI job polling."""

import json
from typing import TYPE_CHECKING, Callable

import httpx
import pytest

from src.config.settings import PlayAISettings
from src.tts_matrix.models import ErrorKind, SynthesisFailure, SynthesisSuccess, TTSRequest
from src.tts_matrix.tts import PlayAIAdapter

if TYPE_CHECKING:
    from pytest_mock.plugin import MockerFixture

CREATE_URL = "https://api.play.ai/api/v1/tts"
JOB_URL = f"{CREATE_URL}/job-123"
AUDIO_URL = "https://cdn.play.ai/audio/job-123.mp3"


def job_handler(statuses: list[dict], audio: bytes = b"playai-mp3") -> Callable:
    """Build a handler answering the create call with a job id, then each status in turn."""
    remaining = list(statuses)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(200, json={"id": "job-123", "status": "processing"})
        if str(request.url) == JOB_URL:
            return httpx.Response(200, json=remaining.pop(0))
        if str(request.url) == AUDIO_URL:
            return httpx.Response(200, content=audio, headers={"content-type": "audio/mpeg"})
        return httpx.Response(404)

    return handler


def polls(transport) -> list[httpx.Request]:
    return [r for r in transport.requests if str(r.url) == JOB_URL]


@pytest.fixture
def settings() -> PlayAISettings:
    return PlayAISettings(api_key="play-key", poll_interval=0)


class TestPlayAIPolling:
    """Test PlayAI job lifecycle."""

    @pytest.mark.asyncio
    async def test_direct_audio_url(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test an inline output URL is downloaded without polling."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(200, json={"output": {"url": AUDIO_URL}})
            return httpx.Response(200, content=b"inline-mp3")

        transport = recording_transport(handler)
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisSuccess)
        assert result.response.audio_size == len(b"inline-mp3")
        assert [str(r.url) for r in transport.requests] == [CREATE_URL, AUDIO_URL]

        create = transport.requests[0]
        assert create.headers["authorization"] == "Bearer play-key"
        assert create.headers["x-user-id"] == "matrix-tts-comparison"
        body = json.loads(create.content)
        assert body["text"] == "Hello"
        assert body["voice"].endswith("female-cs/manifest.json")
        assert body["output_format"] == "mp3"

    @pytest.mark.asyncio
    async def test_completes_on_last_attempt(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test 29 processing polls followed by completion still succeed."""
        statuses = [{"status": "processing"}] * 29 + [{"status": "completed", "output": {"url": AUDIO_URL}}]
        transport = recording_transport(job_handler(statuses))
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisSuccess)
        assert result.response.audio_size == len(b"playai-mp3")
        assert len(polls(transport)) == 30
        assert str(transport.requests[-1].url) == AUDIO_URL

    @pytest.mark.asyncio
    async def test_times_out_after_attempt_budget(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a job that never finishes fails after exactly 30 polls."""
        transport = recording_transport(job_handler([{"status": "processing"}] * 40))
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisFailure)
        assert result.kind == ErrorKind.TIMEOUT
        assert result.message == "PlayAI: PlayAI job timed out after 30 polls"
        assert len(polls(transport)) == 30

    @pytest.mark.asyncio
    async def test_attempt_budget_is_configurable(self, tts_request: TTSRequest, recording_transport: Callable) -> None:
        """Test poll_attempts bounds the number of status requests."""
        transport = recording_transport(job_handler([{"status": "queued"}] * 10))
        adapter = PlayAIAdapter(PlayAISettings(api_key="k", poll_interval=0, poll_attempts=3), transport=transport)

        result = await adapter.synthesize(tts_request)

        assert result.kind == ErrorKind.TIMEOUT
        assert len(polls(transport)) == 3

    @pytest.mark.asyncio
    async def test_sleeps_between_polls_only(
        self, tts_request: TTSRequest, recording_transport: Callable, mocker: "MockerFixture"
    ) -> None:
        """Test the poll interval is awaited between polls, not after the last one."""
        sleep = mocker.patch("src.tts_matrix.tts.playai.asyncio.sleep", new=mocker.AsyncMock())
        transport = recording_transport(job_handler([{"status": "processing"}] * 5))
        adapter = PlayAIAdapter(PlayAISettings(api_key="k", poll_interval=1.0, poll_attempts=5), transport=transport)

        await adapter.synthesize(tts_request)

        assert sleep.await_count == 4
        sleep.assert_awaited_with(1.0)

    @pytest.mark.asyncio
    async def test_job_failed(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a failed job stops polling and reports the vendor error."""
        statuses = [{"status": "processing"}, {"status": "failed", "error": "voice unavailable"}]
        transport = recording_transport(job_handler(statuses))
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisFailure)
        assert result.kind == ErrorKind.UPSTREAM_JOB_FAILED
        assert "voice unavailable" in result.message
        assert len(polls(transport)) == 2

    @pytest.mark.asyncio
    async def test_job_failed_without_reason(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a failed job without an error field."""
        transport = recording_transport(job_handler([{"status": "failed"}]))
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert result.kind == ErrorKind.UPSTREAM_JOB_FAILED
        assert result.message == "PlayAI: PlayAI job failed: Unknown error"

    @pytest.mark.asyncio
    async def test_completed_without_url(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a completed job must name its audio."""
        transport = recording_transport(job_handler([{"status": "completed", "output": {}}]))
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisFailure)
        assert result.kind == ErrorKind.UPSTREAM_PROTOCOL
        assert len(polls(transport)) == 1

    @pytest.mark.asyncio
    async def test_missing_job_id(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a create answer with neither URL nor job id."""
        transport = recording_transport(lambda request: httpx.Response(200, json={"status": "accepted"}))
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisFailure)
        assert result.kind == ErrorKind.UPSTREAM_PROTOCOL
        assert result.message == "PlayAI: No audio URL or job ID received from PlayAI"
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_status_request_rejected(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a rejected status request ends polling with its status."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(200, json={"id": "job-123"})
            return httpx.Response(503, text="unavailable")

        transport = recording_transport(handler)
        adapter = PlayAIAdapter(settings, transport=transport)

        result = await adapter.synthesize(tts_request)

        assert isinstance(result, SynthesisFailure)
        assert result.kind == ErrorKind.UPSTREAM_HTTP
        assert result.status_code == 503
        assert "Failed to check PlayAI job status 503: unavailable" in result.message

    @pytest.mark.asyncio
    async def test_download_rejected(
        self, settings: PlayAISettings, tts_request: TTSRequest, recording_transport: Callable
    ) -> None:
        """Test a failed audio download is reported."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(200, json={"output": {"url": AUDIO_URL}})
            return httpx.Response(404, text="gone")

        adapter = PlayAIAdapter(settings, transport=recording_transport(handler))

        result = await adapter.synthesize(tts_request)

        assert result.kind == ErrorKind.UPSTREAM_HTTP
        assert result.status_code == 404
        assert "Failed to download audio from PlayAI" in result.message
