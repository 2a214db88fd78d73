"""Text-to-Speech (TTS) vendor adapters.

This module provides one adapter per TTS vendor (ElevenLabs, Speechify,
Papla, PlayAI, Hume) plus an offline demo tone generator.

Every adapter returns the same result shape:
- Success: a TTSResponse whose audio is embedded as a base64 data URI
- Failure: the error kind and a human-readable message
"""

from src.tts_matrix.tts.base import (
    AudioPayload,
    TTSAdapter,
    TTSConfigurationError,
    TTSError,
    TTSJobFailedError,
    TTSProtocolError,
    TTSTimeoutError,
    TTSUpstreamHTTPError,
)
from src.tts_matrix.tts.demo import DemoAdapter
from src.tts_matrix.tts.elevenlabs import ElevenLabsAdapter
from src.tts_matrix.tts.factory import create_adapters, create_dispatcher
from src.tts_matrix.tts.hume import HumeAdapter
from src.tts_matrix.tts.papla import PaplaAdapter
from src.tts_matrix.tts.playai import PlayAIAdapter
from src.tts_matrix.tts.speechify import SpeechifyAdapter

__all__ = [
    "TTSAdapter",
    "AudioPayload",
    "ElevenLabsAdapter",
    "SpeechifyAdapter",
    "PaplaAdapter",
    "PlayAIAdapter",
    "HumeAdapter",
    "DemoAdapter",
    "create_adapters",
    "create_dispatcher",
    "TTSError",
    "TTSConfigurationError",
    "TTSUpstreamHTTPError",
    "TTSProtocolError",
    "TTSJobFailedError",
    "TTSTimeoutError",
]
