"""Shared pytest fixtures for testing."""

from typing import TYPE_CHECKING, Callable

import httpx
import pytest

from src.tts_matrix.models import TTSRequest

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch

CREDENTIAL_ENV_VARS = [
    "ELEVENLABS_API_KEY",
    "SPEECHIFY_API_KEY",
    "PAPLA_API_KEY",
    "PLAYAI_API_KEY",
    "HUME_API_KEY",
    "ELEVENLABS_VOICE_LOOKUP",
    "DEMO_ENABLED",
    "DEVELOPMENT_MODE",
    "DEBUG",
    "ENV_FILE",
]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Callable) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture(autouse=True, scope="function")
def mock_settings(monkeypatch: "MonkeyPatch", tmp_path) -> None:
    """Isolate tests from real credentials and cached settings.

    This fixture is automatically applied to all tests (autouse=True).

    Args:
        monkeypatch: Pytest monkeypatch fixture.
    """
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ENV_FILE", str(tmp_path / "missing.env"))

    # Clear the global settings cache to force reload
    import src.config.settings as settings_module
    settings_module._settings = None


@pytest.fixture
def tts_request() -> TTSRequest:
    """A short English request with a female voice."""
    return TTSRequest(text="Hello", language="en", voice_gender="female")


@pytest.fixture
def recording_transport() -> Callable[[Callable], RecordingTransport]:
    """Build a RecordingTransport around a request handler."""
    return RecordingTransport


@pytest.fixture
def audio_bytes() -> bytes:
    """Fake MP3 payload, 10,000 bytes."""
    return b"ID3" + bytes(range(256)) * 39 + b"\x00" * 13
