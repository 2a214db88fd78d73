"""Speechify TTS adapter."""

from src.tts_matrix.models import TTSRequest
from src.tts_matrix.tts.audio import decode_base64_audio
from src.tts_matrix.tts.base import AudioPayload, TTSAdapter, TTSProtocolError, is_json, json_object


class SpeechifyAdapter(TTSAdapter):
    """Speechify adapter.

    The endpoint answers either with raw MP3 bytes or with a JSON envelope
    carrying base64 ``audio_data``.
    """

    service_id = "speechify"
    display_name = "Speechify"
    description = "Natural-sounding voices for accessibility"
    voices = {"female": "mimi", "male": "henry"}

    async def _generate(self, request: TTSRequest) -> AudioPayload:
        async with self._client() as client:
            response = await client.post(
                self.settings.endpoint,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "input": request.text,
                    "voice_id": self.voice_for(request.voice_gender),
                    "audio_format": "mp3",
                    "sample_rate": 22050,
                    "speed": 1.0,
                },
            )
            self._check_response(response, context="Speechify API error")

        if not is_json(response):
            return AudioPayload(data=response.content, mime_type="audio/mpeg")

        audio = json_object(response, "Speechify response").get("audio_data")
        if not audio or not isinstance(audio, str):
            raise TTSProtocolError("No audio data received from Speechify API")
        try:
            return AudioPayload(data=decode_base64_audio(audio), mime_type="audio/mpeg")
        except ValueError as e:
            raise TTSProtocolError(str(e)) from e
