"""Factory for creating TTS adapters and the dispatcher.

This module builds one adapter per vendor from application settings. The
settings object is created once at process start and passed in here; the
adapters never read the environment themselves.
"""

import logging
from typing import Optional

import httpx

from src.config import get_settings
from src.config.settings import Settings
from src.tts_matrix.dispatcher import TTSDispatcher
from src.tts_matrix.tts.base import TTSAdapter
from src.tts_matrix.tts.demo import DemoAdapter
from src.tts_matrix.tts.elevenlabs import ElevenLabsAdapter
from src.tts_matrix.tts.hume import HumeAdapter
from src.tts_matrix.tts.papla import PaplaAdapter
from src.tts_matrix.tts.playai import PlayAIAdapter
from src.tts_matrix.tts.speechify import SpeechifyAdapter

logger = logging.getLogger(__name__)


def create_adapters(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[TTSAdapter]:
    """Create one adapter per vendor.

    Args:
        settings: Optional settings. If None, uses get_settings().
        transport: Optional httpx transport shared by every adapter (tests).

    Returns:
        Adapters in display order. The demo adapter is included only when
        enabled.
    """
    if settings is None:
        settings = get_settings()

    adapters: list[TTSAdapter] = [
        ElevenLabsAdapter(settings.elevenlabs, transport=transport),
        SpeechifyAdapter(settings.speechify, transport=transport),
        PaplaAdapter(settings.papla, transport=transport),
        PlayAIAdapter(settings.playai, transport=transport),
        HumeAdapter(settings.hume, transport=transport),
    ]
    if settings.demo.enabled:
        adapters.append(DemoAdapter(settings.demo))

    for adapter in adapters:
        if not adapter.is_configured:
            logger.info(f"{adapter.display_name} is not configured; requests will fail fast")

    return adapters


def create_dispatcher(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TTSDispatcher:
    """Create a dispatcher routing to every vendor adapter.

    Args:
        settings: Optional settings. If None, uses get_settings().
        transport: Optional httpx transport shared by every adapter (tests).

    Returns:
        Configured dispatcher.
    """
    if settings is None:
        settings = get_settings()
    return TTSDispatcher(
        create_adapters(settings, transport=transport),
        development_mode=settings.development_mode,
    )
