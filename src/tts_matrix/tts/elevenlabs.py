"""ElevenLabs TTS adapter."""

import logging
from typing import Optional

import httpx

from src.tts_matrix.models import TTSRequest, VoiceGender
from src.tts_matrix.tts.base import AudioPayload, TTSAdapter, TTSProtocolError, json_object

logger = logging.getLogger(__name__)

# Preferred voice names when resolving from the live voice list
_VOICE_NAMES = {"female": "bella", "male": "adam"}


class ElevenLabsAdapter(TTSAdapter):
    """ElevenLabs adapter.

    Uses a static voice table by default. With ``voice_lookup`` enabled the
    voice is resolved from the account's voice list before synthesis.
    """

    service_id = "elevenlabs"
    display_name = "ElevenLabs"
    description = "High-quality AI voices with emotional range"
    voices = {
        "female": "EXAVITQu4vr4xnSDxMaL",  # Bella
        "male": "pNInz6obpgDQGcFmaJgB",  # Adam
    }

    def _headers(self) -> dict[str, str]:
        return {"xi-api-key": self.api_key or ""}

    async def list_voices(self, client: Optional[httpx.AsyncClient] = None) -> list[dict]:
        """List voices available to the account.

        Returns:
            List of voice dictionaries with 'id', 'name' and 'gender' keys.
        """
        if client is None:
            async with self._client() as own_client:
                return await self.list_voices(own_client)

        response = await client.get(f"{self.settings.endpoint}/voices", headers=self._headers())
        self._check_response(response, context="Failed to fetch voices")
        entries = json_object(response, "Voice list").get("voices") or []
        if not isinstance(entries, list):
            raise TTSProtocolError("Voice list is not a JSON array")

        voices = []
        for voice in entries:
            # Entries without a usable id are skipped
            if not isinstance(voice, dict) or not isinstance(voice.get("voice_id"), str):
                continue
            name = voice.get("name")
            labels = voice.get("labels")
            gender = labels.get("gender") if isinstance(labels, dict) else None
            voices.append(
                {
                    "id": voice["voice_id"],
                    "name": name if isinstance(name, str) and name else voice["voice_id"],
                    "gender": gender if isinstance(gender, str) else "",
                }
            )
        return voices

    async def _resolve_voice(self, client: httpx.AsyncClient, gender: VoiceGender) -> str:
        voices = await self.list_voices(client)
        if not voices:
            raise TTSProtocolError("No suitable voice found")

        preferred = _VOICE_NAMES[gender]
        for voice in voices:
            if preferred in voice["name"].lower() or voice["gender"] == gender:
                selected = voice
                break
        else:
            selected = voices[0]

        logger.info(f"Using ElevenLabs voice: {selected['name']} ({selected['id']})")
        return selected["id"]

    async def _generate(self, request: TTSRequest) -> AudioPayload:
        async with self._client() as client:
            if self.settings.voice_lookup:
                voice_id = await self._resolve_voice(client, request.voice_gender)
            else:
                voice_id = self.voice_for(request.voice_gender)

            response = await client.post(
                f"{self.settings.endpoint}/text-to-speech/{voice_id}",
                headers={
                    **self._headers(),
                    "Accept": "audio/mpeg",
                    "Content-Type": "application/json",
                },
                json={
                    "text": request.text,
                    "model_id": self.settings.model_id,
                    "voice_settings": {
                        "stability": 0.5,
                        "similarity_boost": 0.75,
                        "style": 0.0,
                        "use_speaker_boost": True,
                    },
                },
            )
            self._check_response(response, context="ElevenLabs API error")
            return AudioPayload(data=response.content, mime_type="audio/mpeg")
