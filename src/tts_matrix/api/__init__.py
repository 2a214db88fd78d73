"""HTTP proxy API for the TTS comparison service."""

from src.tts_matrix.api.app import create_app

__all__ = ["create_app"]
