"""Configuration module for the TTS comparison service."""

from src.config.settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]
