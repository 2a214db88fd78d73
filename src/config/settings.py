"""Configuration settings for the TTS comparison service.

This module provides type-safe configuration management using Pydantic,
with support for environment variables and default values. Vendor
credentials are read here, on the server side only, and handed to the
adapters explicitly.
"""

from typing import Optional, Type, TypeVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Module-level variable to store current env_file for nested settings
_current_env_file: Optional[str] = None

T = TypeVar("T", bound=BaseSettings)


class ElevenLabsSettings(BaseSettings):
    """ElevenLabs vendor settings."""

    model_config = SettingsConfigDict(env_prefix="ELEVENLABS_", case_sensitive=False)

    api_key: Optional[str] = Field(default=None, description="ElevenLabs API key (xi-api-key)")
    endpoint: str = Field(default="https://api.elevenlabs.io/v1", description="ElevenLabs API base URL")
    model_id: str = Field(default="eleven_multilingual_v2", description="Synthesis model id")
    voice_lookup: bool = Field(
        default=False, description="Resolve the voice from the live voice list instead of the static table"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class SpeechifySettings(BaseSettings):
    """Speechify vendor settings."""

    model_config = SettingsConfigDict(env_prefix="SPEECHIFY_", case_sensitive=False)

    api_key: Optional[str] = Field(default=None, description="Speechify API key (Bearer token)")
    endpoint: str = Field(
        default="https://api.sws.speechify.com/v1/audio/speech", description="Speechify synthesis endpoint"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class PaplaSettings(BaseSettings):
    """Papla vendor settings."""

    model_config = SettingsConfigDict(env_prefix="PAPLA_", case_sensitive=False)

    api_key: Optional[str] = Field(default=None, description="Papla API key (papla-api-key)")
    endpoint: str = Field(
        default="https://api.papla.media/v1/text-to-speech", description="Papla synthesis endpoint"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class PlayAISettings(BaseSettings):
    """PlayAI vendor settings, including the job polling budget."""

    model_config = SettingsConfigDict(env_prefix="PLAYAI_", case_sensitive=False)

    api_key: Optional[str] = Field(default=None, description="PlayAI API key (Bearer token)")
    endpoint: str = Field(default="https://api.play.ai/api/v1/tts", description="PlayAI job endpoint")
    user_id: str = Field(default="matrix-tts-comparison", description="Value sent as X-USER-ID")
    poll_interval: float = Field(default=1.0, ge=0, description="Seconds between job status polls")
    poll_attempts: int = Field(default=30, ge=1, description="Maximum number of job status polls")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class HumeSettings(BaseSettings):
    """Hume vendor settings."""

    model_config = SettingsConfigDict(env_prefix="HUME_", case_sensitive=False)

    api_key: Optional[str] = Field(default=None, description="Hume API key (X-Hume-Api-Key)")
    endpoint: str = Field(default="https://api.hume.ai/v0/tts/inference", description="Hume synthesis endpoint")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class DemoSettings(BaseSettings):
    """Offline demo tone generator settings."""

    model_config = SettingsConfigDict(env_prefix="DEMO_", case_sensitive=False)

    enabled: bool = Field(default=True, description="Expose the demo service")
    sample_rate: int = Field(default=22050, ge=8000, description="Tone sample rate (Hz)")


class ServerSettings(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", case_sensitive=False)

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma separated origins allowed to call the API from a browser",
    )

    @field_validator("cors_origins")
    @classmethod
    def validate_origins(cls, v: str) -> str:
        """Validate that at least one origin is given."""
        if not any(origin.strip() for origin in v.split(",")):
            raise ValueError("SERVER_CORS_ORIGINS must contain at least one origin")
        return v

    @property
    def origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class Settings(BaseSettings):
    """Main application settings.

    This class aggregates all configuration settings and provides
    a single entry point for application configuration.

    The env_file can be specified via:
    1. ENV_FILE environment variable
    2. env_file parameter in get_settings() or reload_settings()
    3. Default: ".env"
    """

    model_config = SettingsConfigDict(
        env_file=".env",  # Default, can be overridden via ENV_FILE env var or get_settings(env_file=...)
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def create(cls, env_file: Optional[str] = None) -> "Settings":
        """Create a Settings instance with a specific env file.

        Args:
            env_file: Optional path to environment file. If None, uses:
                1. ENV_FILE environment variable
                2. Default ".env"

        Returns:
            Settings instance configured with the specified env file.
        """
        import os
        global _current_env_file

        if env_file is None:
            env_file = os.getenv("ENV_FILE", ".env")

        _current_env_file = env_file

        class SettingsWithEnvFile(cls):
            model_config = SettingsConfigDict(
                env_file=env_file,
                env_file_encoding="utf-8",
                case_sensitive=False,
                extra="ignore",
            )

            # Nested settings read the same env file
            elevenlabs: ElevenLabsSettings = Field(
                default_factory=lambda: _create_nested_settings(ElevenLabsSettings, env_file)
            )
            speechify: SpeechifySettings = Field(
                default_factory=lambda: _create_nested_settings(SpeechifySettings, env_file)
            )
            papla: PaplaSettings = Field(
                default_factory=lambda: _create_nested_settings(PaplaSettings, env_file)
            )
            playai: PlayAISettings = Field(
                default_factory=lambda: _create_nested_settings(PlayAISettings, env_file)
            )
            hume: HumeSettings = Field(
                default_factory=lambda: _create_nested_settings(HumeSettings, env_file)
            )
            demo: DemoSettings = Field(
                default_factory=lambda: _create_nested_settings(DemoSettings, env_file)
            )
            server: ServerSettings = Field(
                default_factory=lambda: _create_nested_settings(ServerSettings, env_file)
            )

        return SettingsWithEnvFile()

    # Application settings
    app_name: str = Field(default="matrix-tts-comparison", description="Application name")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Enable debug mode")
    development_mode: bool = Field(default=False, description="Reported by the health endpoint")
    max_text_length: int = Field(default=5000, ge=1, description="Longest text accepted for synthesis")

    # Vendor settings
    elevenlabs: ElevenLabsSettings = Field(default_factory=ElevenLabsSettings)
    speechify: SpeechifySettings = Field(default_factory=SpeechifySettings)
    papla: PaplaSettings = Field(default_factory=PaplaSettings)
    playai: PlayAISettings = Field(default_factory=PlayAISettings)
    hume: HumeSettings = Field(default_factory=HumeSettings)
    demo: DemoSettings = Field(default_factory=DemoSettings)

    server: ServerSettings = Field(default_factory=ServerSettings)


# Global settings instance (lazy-loaded singleton)
_settings: Optional[Settings] = None


def _create_nested_settings(cls: Type[T], env_file: Optional[str] = None) -> T:
    """Create a nested settings instance that reads the given env file.

    Args:
        cls: The settings class to create an instance of.
        env_file: Optional env_file to use. If None, uses _current_env_file.

    Returns:
        Instance of the settings class configured with the env_file.
    """
    import os
    if env_file is None:
        env_file = _current_env_file or os.getenv("ENV_FILE", ".env")

    original_config = cls.model_config

    class NestedSettingsWithEnvFile(cls):
        model_config = SettingsConfigDict(
            env_file=env_file,
            env_file_encoding=original_config.get("env_file_encoding", "utf-8"),
            case_sensitive=original_config.get("case_sensitive", False),
            env_prefix=original_config.get("env_prefix", ""),
            extra="ignore",
        )

    return NestedSettingsWithEnvFile()


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get or create the global settings instance.

    Args:
        env_file: Optional path to environment file. If None, uses:
            1. ENV_FILE environment variable
            2. Default ".env"
            If provided, forces reload with the new env_file.

    Returns:
        Settings: The global settings instance.

    Example:
        >>> settings = get_settings()
        >>> settings.playai.poll_attempts
        30
    """
    global _settings

    import os
    current_env_file = env_file or os.getenv("ENV_FILE", ".env")

    if _settings is not None:
        if env_file is not None and _current_env_file != env_file:
            _settings = Settings.create(env_file=env_file)
        elif os.getenv("ENV_FILE") and _current_env_file != current_env_file:
            _settings = Settings.create(env_file=current_env_file)
        return _settings

    _settings = Settings.create(env_file=current_env_file)
    return _settings


def reload_settings(env_file: Optional[str] = None) -> Settings:
    """Reload settings from environment variables.

    Args:
        env_file: Optional path to environment file. If None, uses:
            1. ENV_FILE environment variable
            2. Default ".env"

    Returns:
        Settings: The newly loaded settings instance.
    """
    global _settings
    _settings = Settings.create(env_file=env_file)
    return _settings
