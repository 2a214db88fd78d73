"""HTTP client for the TTS proxy endpoint.

The client carries a service id and request to ``POST /api/tts`` and turns
non-200 answers into ``TTSClientError`` using the server's error message.
"""

import asyncio
import logging
from typing import AsyncIterator, Iterable, Optional

import httpx
from pydantic import BaseModel, ValidationError

from src.tts_matrix.models import TTSRequest, TTSResponse

logger = logging.getLogger(__name__)


class TTSClientError(Exception):
    """Error raised when the proxy rejects or fails a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TTSResult(BaseModel):
    """Outcome of one service in a comparison run."""

    service: str
    response: Optional[TTSResponse] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.response is not None and self.response.success


class TTSClient:
    """Client for a running TTS proxy server."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Server base URL, without the ``/api`` prefix.
            timeout: Request timeout in seconds. Polling vendors can take
                up to 30 seconds, so keep this above that.
            transport: Optional httpx transport (tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def generate(self, service: str, request: TTSRequest) -> TTSResponse:
        """Generate speech for one service.

        Args:
            service: Service identifier.
            request: Synthesis request.

        Returns:
            The server's TTSResponse.

        Raises:
            TTSClientError: If the server answers with a non-200 status or an
                unreadable body.
        """
        logger.info(
            f"Requesting TTS for service: {service} "
            f"(text_length={len(request.text)}, language={request.language}, voice_gender={request.voice_gender})"
        )
        async with self._client() as client:
            response = await client.post(
                "/api/tts",
                params={"service": service},
                json=request.model_dump(by_alias=True),
            )

        if response.status_code != 200:
            message = f"HTTP {response.status_code}: {response.reason_phrase}"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
                message = body["error"]
            raise TTSClientError(message, status_code=response.status_code)

        try:
            result = TTSResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise TTSClientError(f"Invalid response from server: {e}", status_code=response.status_code) from e

        logger.info(
            f"TTS response for {service}: success={result.success}, "
            f"audio_size={result.audio_size}, generation_time={result.generation_time}"
        )
        return result

    async def services(self) -> list[dict]:
        """Fetch the service catalogue from the server."""
        async with self._client() as client:
            response = await client.get("/api/services")
        if response.status_code != 200:
            raise TTSClientError(f"HTTP {response.status_code}: {response.reason_phrase}", response.status_code)
        return response.json()

    async def _result(self, service: str, request: TTSRequest) -> TTSResult:
        try:
            return TTSResult(service=service, response=await self.generate(service, request))
        except (TTSClientError, httpx.HTTPError) as e:
            return TTSResult(service=service, error=str(e))

    async def compare(self, request: TTSRequest, services: Iterable[str]) -> AsyncIterator[TTSResult]:
        """Generate speech with several services concurrently.

        Yields:
            One TTSResult per service, in completion order.
        """
        tasks = [asyncio.create_task(self._result(service, request)) for service in services]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
