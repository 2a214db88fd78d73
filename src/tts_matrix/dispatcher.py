"""Dispatcher routing a service identifier to its vendor adapter."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, AsyncIterator, Iterable, Optional

from src.tts_matrix.models import (
    ErrorKind,
    ServiceDescriptor,
    SynthesisFailure,
    SynthesisResult,
    TTSRequest,
)

if TYPE_CHECKING:
    from src.tts_matrix.tts.base import TTSAdapter

logger = logging.getLogger(__name__)


class TTSDispatcher:
    """Maps service identifiers to adapters.

    The mapping is fixed at construction. ``route`` delegates to exactly one
    adapter and returns its result unchanged; it does not retry or add its
    own timeout.
    """

    def __init__(self, adapters: Iterable["TTSAdapter"], development_mode: bool = False) -> None:
        """Initialize dispatcher.

        Args:
            adapters: Adapters to route to, keyed by their ``service_id``.
            development_mode: Reported by ``health()``.

        Raises:
            ValueError: If two adapters share a service id.
        """
        self._adapters: dict[str, "TTSAdapter"] = {}
        for adapter in adapters:
            if adapter.service_id in self._adapters:
                raise ValueError(f"Duplicate TTS service id: {adapter.service_id}")
            self._adapters[adapter.service_id] = adapter
        self.development_mode = development_mode

    @property
    def service_ids(self) -> list[str]:
        return list(self._adapters)

    def get(self, service_id: str) -> Optional["TTSAdapter"]:
        return self._adapters.get(service_id)

    async def route(self, service_id: str, request: TTSRequest) -> SynthesisResult:
        """Synthesize a request with the adapter registered for ``service_id``.

        Args:
            service_id: Service identifier, e.g. 'elevenlabs'.
            request: Validated synthesis request.

        Returns:
            The adapter's result, or an ``unknown_service`` failure naming the id.
        """
        adapter = self._adapters.get(service_id)
        if adapter is None:
            logger.warning(f"Unknown TTS service requested: {service_id!r}")
            return SynthesisFailure(
                service=service_id,
                kind=ErrorKind.UNKNOWN_SERVICE,
                message=f"Unknown TTS service: {service_id}",
                text_length=len(request.text),
            )

        logger.info(
            f"Generating TTS audio for service: {service_id} "
            f"(text_length={len(request.text)}, language={request.language}, "
            f"voice_gender={request.voice_gender})"
        )
        return await adapter.synthesize(request)

    async def compare(
        self, request: TTSRequest, service_ids: Optional[Iterable[str]] = None
    ) -> AsyncIterator[SynthesisResult]:
        """Synthesize the same request with several services concurrently.

        Args:
            request: Validated synthesis request.
            service_ids: Services to call. Defaults to every registered service.

        Yields:
            Results in completion order, one per requested service.
        """
        ids = list(service_ids) if service_ids is not None else self.service_ids
        tasks = [asyncio.create_task(self.route(service_id, request)) for service_id in ids]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    def services(self) -> list[ServiceDescriptor]:
        """Describe every registered service for labeling."""
        return [
            ServiceDescriptor(
                id=adapter.service_id,
                display_name=adapter.display_name,
                description=adapter.description,
                configured=adapter.is_configured,
            )
            for adapter in self._adapters.values()
        ]

    def health(self) -> dict:
        """Report which services are configured and where they point.

        Returns:
            Dictionary with 'status', 'timestamp', 'services',
            'configuredServices' and 'developmentMode' keys.
        """
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {
                service_id: {
                    "configured": adapter.is_configured,
                    "endpoint": adapter.endpoint,
                }
                for service_id, adapter in self._adapters.items()
            },
            "configuredServices": [
                service_id for service_id, adapter in self._adapters.items() if adapter.is_configured
            ],
            "developmentMode": self.development_mode,
        }
