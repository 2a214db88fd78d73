"""Offline demo TTS adapter.

Renders a synthetic tone instead of speech so the comparison page has a
working service without any vendor credential.
"""

import asyncio

from src.tts_matrix.models import TTSRequest
from src.tts_matrix.tts.audio import generate_tone_wav
from src.tts_matrix.tts.base import AudioPayload, TTSAdapter


class DemoAdapter(TTSAdapter):
    """Demo adapter producing a WAV tone, no network access."""

    service_id = "demo"
    display_name = "Demo TTS"
    description = "Fallback demo audio (no API key required)"
    # Base tone frequency in Hz per voice gender
    voices = {"female": "440", "male": "220"}
    requires_credential = False

    async def _generate(self, request: TTSRequest) -> AudioPayload:
        wav = await asyncio.to_thread(
            generate_tone_wav,
            len(request.text),
            float(self.voice_for(request.voice_gender)),
            self.settings.sample_rate,
        )
        return AudioPayload(data=wav, mime_type="audio/wav")
