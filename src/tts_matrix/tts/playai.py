"""PlayAI TTS adapter.

PlayAI may answer a synthesis request with an asynchronous job instead of
inline audio. The job is polled at a fixed interval for a bounded number of
attempts until it completes, fails, or the attempt budget runs out.
"""

import asyncio
import logging
from typing import Optional

import httpx

from src.tts_matrix.models import TTSRequest
from src.tts_matrix.tts.base import (
    AudioPayload,
    TTSAdapter,
    TTSJobFailedError,
    TTSProtocolError,
    TTSTimeoutError,
    json_object,
)

logger = logging.getLogger(__name__)


def _output_url(payload: dict) -> Optional[str]:
    output = payload.get("output")
    if isinstance(output, dict) and isinstance(output.get("url"), str):
        return output["url"] or None
    return None


class PlayAIAdapter(TTSAdapter):
    """PlayAI adapter with job polling."""

    service_id = "playai"
    display_name = "PlayAI"
    description = "Real-time voice synthesis"
    voices = {
        "female": "s3://voice-cloning-zero-shot/d9ff78ba-d016-47f6-b0ef-dd630f59414e/female-cs/manifest.json",
        "male": "s3://voice-cloning-zero-shot/820a3788-2b37-4d21-847a-b65d8a68c99a/male-cs/manifest.json",
    }

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def poll_job(self, client: httpx.AsyncClient, job_id: str) -> str:
        """Poll a synthesis job until it reaches a terminal state.

        Args:
            client: Open HTTP client.
            job_id: Job identifier returned by the create call.

        Returns:
            URL of the finished audio.

        Raises:
            TTSJobFailedError: If the job reports ``failed``.
            TTSTimeoutError: If ``poll_attempts`` polls pass without a terminal state.
            TTSUpstreamHTTPError: If a status request is rejected.
        """
        attempts = self.settings.poll_attempts
        for attempt in range(1, attempts + 1):
            response = await client.get(f"{self.settings.endpoint}/{job_id}", headers=self._auth_headers())
            self._check_response(response, context="Failed to check PlayAI job status")
            job = json_object(response, "PlayAI job status")

            status = job.get("status")
            logger.debug(f"PlayAI job {job_id} poll {attempt}/{attempts}: {status}")

            if status == "completed":
                url = _output_url(job)
                if not url:
                    raise TTSProtocolError("PlayAI job completed without an audio URL")
                return url
            if status == "failed":
                raise TTSJobFailedError(f"PlayAI job failed: {job.get('error') or 'Unknown error'}")

            if attempt < attempts:
                await asyncio.sleep(self.settings.poll_interval)

        raise TTSTimeoutError(f"PlayAI job timed out after {attempts} polls")

    async def _generate(self, request: TTSRequest) -> AudioPayload:
        async with self._client() as client:
            response = await client.post(
                self.settings.endpoint,
                headers={
                    **self._auth_headers(),
                    "Content-Type": "application/json",
                    "X-USER-ID": self.settings.user_id,
                },
                json={
                    "text": request.text,
                    "voice": self.voice_for(request.voice_gender),
                    "output_format": "mp3",
                    "sample_rate": 24000,
                    "speed": 1.0,
                    "emotion": "neutral",
                },
            )
            self._check_response(response, context="PlayAI API error")
            result = json_object(response, "PlayAI response")

            audio_url = _output_url(result)
            if audio_url is None:
                job_id = result.get("id")
                if not job_id or not isinstance(job_id, (str, int)):
                    raise TTSProtocolError("No audio URL or job ID received from PlayAI")
                audio_url = await self.poll_job(client, str(job_id))

            if not audio_url.startswith(("http://", "https://")):
                raise TTSProtocolError(f"Unsupported PlayAI audio URL: {audio_url}")

            audio = await client.get(audio_url)
            self._check_response(audio, context="Failed to download audio from PlayAI")
            return AudioPayload(data=audio.content, mime_type="audio/mpeg")
