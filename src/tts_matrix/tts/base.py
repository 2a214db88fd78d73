"""Base interface for vendor TTS adapters.

This module defines the abstract base class every vendor adapter implements,
together with the error hierarchy adapters raise internally. The public
``synthesize`` method never raises for an expected failure: it turns every
outcome into a ``SynthesisSuccess`` or ``SynthesisFailure``.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

import httpx

from src.tts_matrix.models import (
    ErrorKind,
    SynthesisFailure,
    SynthesisResult,
    SynthesisSuccess,
    TTSRequest,
    TTSResponse,
    VoiceGender,
)
from src.tts_matrix.tts.audio import encode_data_uri

logger = logging.getLogger(__name__)


class TTSError(Exception):
    """Base exception for TTS-related errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.UPSTREAM_PROTOCOL


class TTSConfigurationError(TTSError):
    """Error raised when a required credential or setting is missing."""

    kind = ErrorKind.CONFIGURATION


class TTSUpstreamHTTPError(TTSError):
    """Error raised when the vendor answers with a non-success status."""

    kind = ErrorKind.UPSTREAM_HTTP

    def __init__(self, status_code: int, body: str = "", context: str = "API error") -> None:
        self.status_code = status_code
        self.body = body
        message = f"{context} {status_code}"
        if body:
            message += f": {body}"
        super().__init__(message)


class TTSProtocolError(TTSError):
    """Error raised when the vendor payload is missing or malformed."""

    kind = ErrorKind.UPSTREAM_PROTOCOL


class TTSJobFailedError(TTSError):
    """Error raised when an asynchronous vendor job reports failure."""

    kind = ErrorKind.UPSTREAM_JOB_FAILED


class TTSTimeoutError(TTSError):
    """Error raised when a vendor job does not finish within the poll budget."""

    kind = ErrorKind.TIMEOUT


def is_json(response: httpx.Response) -> bool:
    """Check whether a vendor response carries a JSON body."""
    return "application/json" in response.headers.get("content-type", "")


def json_object(response: httpx.Response, source: str) -> dict:
    """Parse a vendor response body that must be a JSON object.

    Args:
        response: Vendor response.
        source: Label used in the error message, e.g. 'Hume response'.

    Raises:
        TTSProtocolError: If the body is not JSON or not a JSON object.
    """
    try:
        payload = response.json()
    except ValueError as e:
        raise TTSProtocolError(f"{source} is not valid JSON") from e
    if not isinstance(payload, dict):
        raise TTSProtocolError(f"{source} is not a JSON object")
    return payload


@dataclass
class AudioPayload:
    """Raw audio returned by a vendor."""

    data: bytes
    mime_type: str = "audio/mpeg"


class TTSAdapter(ABC):
    """Abstract base class for vendor TTS adapters.

    Subclasses declare their identity and voice table as class attributes and
    implement ``_generate``, which returns the raw audio or raises a
    ``TTSError``. Each call opens its own HTTP client; nothing is shared
    between concurrent calls.
    """

    service_id: ClassVar[str]
    display_name: ClassVar[str]
    description: ClassVar[str] = ""
    voices: ClassVar[dict[str, str]] = {}
    requires_credential: ClassVar[bool] = True

    def __init__(self, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """Initialize adapter.

        Args:
            settings: Vendor settings object (credential, endpoint, timeout).
            transport: Optional httpx transport, used to stub the vendor in tests.
        """
        self.settings = settings
        self._transport = transport

    @property
    def api_key(self) -> Optional[str]:
        return getattr(self.settings, "api_key", None)

    @property
    def endpoint(self) -> str:
        return getattr(self.settings, "endpoint", "internal")

    @property
    def is_configured(self) -> bool:
        """Check if the adapter has the credential it needs."""
        if not self.requires_credential:
            return True
        return bool(self.api_key and self.api_key.strip())

    def voice_for(self, gender: VoiceGender) -> str:
        """Select the vendor voice id for a voice gender."""
        return self.voices[gender]

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=getattr(self.settings, "timeout", 30.0),
            transport=self._transport,
            follow_redirects=True,
        )

    @staticmethod
    def _check_response(response: httpx.Response, context: str = "API error") -> httpx.Response:
        """Raise TTSUpstreamHTTPError for a non-success response, keeping the body."""
        if response.is_success:
            return response
        raise TTSUpstreamHTTPError(response.status_code, response.text.strip(), context=context)

    @abstractmethod
    async def _generate(self, request: TTSRequest) -> AudioPayload:
        """Produce the raw audio for a request.

        Args:
            request: Validated synthesis request.

        Returns:
            Raw audio payload.

        Raises:
            TTSError: If the vendor call fails in any expected way.
            httpx.RequestError: If the vendor cannot be reached.
        """
        pass

    async def synthesize(self, request: TTSRequest) -> SynthesisResult:
        """Synthesize text to speech and normalize the outcome.

        Args:
            request: Validated synthesis request.

        Returns:
            SynthesisSuccess carrying a TTSResponse with a data URI, or
            SynthesisFailure carrying the error kind and message.
        """
        start = time.perf_counter()

        def elapsed_ms() -> int:
            return int((time.perf_counter() - start) * 1000)

        try:
            if not self.is_configured:
                raise TTSConfigurationError(f"{self.display_name} API key not configured")
            payload = await self._generate(request)
            if not payload.data:
                raise TTSProtocolError(f"Empty audio payload received from {self.display_name}")
        except TTSError as e:
            logger.error(f"{self.display_name} error: {e}")
            return SynthesisFailure(
                service=self.service_id,
                kind=e.kind,
                message=f"{self.display_name}: {e}",
                status_code=getattr(e, "status_code", None),
                text_length=len(request.text),
                generation_time=elapsed_ms(),
            )
        except httpx.RequestError as e:
            logger.error(f"{self.display_name} request error: {e!r}")
            return SynthesisFailure(
                service=self.service_id,
                kind=ErrorKind.UPSTREAM_UNREACHABLE,
                message=f"{self.display_name}: request failed: {e!r}",
                text_length=len(request.text),
                generation_time=elapsed_ms(),
            )

        response = TTSResponse(
            audio_url=encode_data_uri(payload.data, payload.mime_type),
            audio_size=len(payload.data),
            generation_time=elapsed_ms(),
            success=True,
            text_length=len(request.text),
        )
        logger.info(
            f"{self.display_name} generated {response.audio_size} bytes in {response.generation_time} ms"
        )
        return SynthesisSuccess(service=self.service_id, response=response)
