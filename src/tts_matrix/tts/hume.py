"""Hume TTS adapter."""

from src.tts_matrix.models import TTSRequest
from src.tts_matrix.tts.audio import decode_base64_audio
from src.tts_matrix.tts.base import AudioPayload, TTSAdapter, TTSProtocolError, is_json, json_object


class HumeAdapter(TTSAdapter):
    """Hume adapter.

    Hume describes voices in natural language rather than by id, so the voice
    table holds a description per gender. Responses are either JSON with
    base64 audio (``audio`` or ``generations[0].audio``) or raw audio bytes.
    """

    service_id = "hume"
    display_name = "Hume AI"
    description = "Emotionally intelligent speech synthesis"
    voices = {
        "female": "A warm, clear female voice with natural intonation and professional delivery",
        "male": "A confident, clear male voice with natural intonation and professional delivery",
    }

    async def _generate(self, request: TTSRequest) -> AudioPayload:
        async with self._client() as client:
            response = await client.post(
                self.settings.endpoint,
                headers={
                    "X-Hume-Api-Key": self.api_key or "",
                    "Content-Type": "application/json",
                },
                json={
                    "text": request.text,
                    "format": "mp3",
                    "sample_rate": 22050,
                    "voice": {
                        "description": self.voice_for(request.voice_gender),
                        "language": request.language,
                    },
                    "prosody": {"speed": 1.0, "pitch": 0.0, "energy": 0.5},
                },
            )
            self._check_response(response, context="Hume API error")

        if not is_json(response):
            return AudioPayload(data=response.content, mime_type="audio/mpeg")

        result = json_object(response, "Hume response")

        audio = result.get("audio")
        if not audio:
            generations = result.get("generations")
            if isinstance(generations, list) and generations and isinstance(generations[0], dict):
                audio = generations[0].get("audio")
        if not audio or not isinstance(audio, str):
            raise TTSProtocolError("No audio data received from Hume API")

        try:
            return AudioPayload(data=decode_base64_audio(audio), mime_type="audio/mpeg")
        except ValueError as e:
            raise TTSProtocolError(str(e)) from e
