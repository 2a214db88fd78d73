"""Papla TTS adapter."""

from src.tts_matrix.models import TTSRequest
from src.tts_matrix.tts.base import AudioPayload, TTSAdapter


class PaplaAdapter(TTSAdapter):
    """Papla adapter. Papla selects the voice from a gender label."""

    service_id = "papla"
    display_name = "Papla AI"
    description = "Advanced neural text-to-speech"
    voices = {"female": "female", "male": "male"}

    async def _generate(self, request: TTSRequest) -> AudioPayload:
        async with self._client() as client:
            response = await client.post(
                self.settings.endpoint,
                headers={
                    "papla-api-key": self.api_key or "",
                    "Content-Type": "application/json",
                },
                json={
                    "text": request.text,
                    "voice": {
                        "language": request.language,
                        "gender": self.voice_for(request.voice_gender),
                        "style": "neutral",
                    },
                    "audio_format": "mp3",
                    "sample_rate": 22050,
                    "quality": "high",
                },
            )
            self._check_response(response, context="Papla API error")
            return AudioPayload(data=response.content, mime_type="audio/mpeg")
